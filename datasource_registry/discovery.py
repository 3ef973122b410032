"""
Data source discovery.

Discovery enumerates the data sources installed in an external Python
interpreter. The registry only depends on the DataSourceDiscovery protocol;
PythonWorkerDiscovery is the default implementation and runs the lookup
worker in a subprocess.
"""

import os
import logging
import subprocess
from dataclasses import dataclass, field
from typing import Any, List, Protocol

import orjson

from .errors import DiscoveryError

logger = logging.getLogger(__name__)

WORKER_MODULE = "datasource_registry.worker.lookup_data_sources"


@dataclass
class DiscoveryResult:
    """Names of the discovered data sources and their parallel handles."""
    names: List[str] = field(default_factory=list)
    handles: List[Any] = field(default_factory=list)

    def __post_init__(self):
        if len(self.names) != len(self.handles):
            raise DiscoveryError(
                f"Discovery returned {len(self.names)} names "
                f"but {len(self.handles)} handles"
            )
        if not all(isinstance(name, str) for name in self.names):
            raise DiscoveryError(f"Discovery returned non-string names: {self.names!r}")

    def __len__(self) -> int:
        return len(self.names)


class DataSourceDiscovery(Protocol):
    """Capability that enumerates available data sources."""

    def lookup_all_data_sources(self) -> DiscoveryResult:
        ...


class PythonWorkerDiscovery:
    """
    Discover data sources by running the lookup worker in a Python subprocess.

    The worker prints ``{"names": [...], "handles": [...]}`` on stdout.
    """

    def __init__(self, config=None):
        """
        Initialize discovery.

        Args:
            config: RegistryConfig (defaults to the global configuration)
        """
        if config is None:
            from .config import get_config
            config = get_config()
        self.config = config

    def build_command(self) -> List[str]:
        """Command line used to launch the worker."""
        return [
            self.config.python_exec,
            "-m", WORKER_MODULE,
            self.config.entry_point_group,
        ]

    def build_env(self) -> dict:
        """Worker environment with the configured paths prepended to PYTHONPATH."""
        env = dict(os.environ)
        paths = list(self.config.python_paths)
        if env.get('PYTHONPATH'):
            paths.append(env['PYTHONPATH'])
        if paths:
            env['PYTHONPATH'] = os.pathsep.join(paths)
        return env

    def lookup_all_data_sources(self) -> DiscoveryResult:
        """
        Run the worker and parse its output.

        Returns:
            DiscoveryResult with parallel names and handles

        Raises:
            DiscoveryError: If the worker cannot run, fails, times out,
                or prints malformed output
        """
        cmd = self.build_command()
        logger.debug(f"Looking up data sources: {' '.join(cmd)}")

        try:
            proc = subprocess.run(
                cmd,
                env=self.build_env(),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.config.discovery_timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise DiscoveryError(
                f"Data source lookup timed out after {self.config.discovery_timeout}s"
            ) from e
        except OSError as e:
            raise DiscoveryError(f"Failed to start data source lookup: {e}") from e

        stderr = proc.stderr.decode('utf-8', errors='replace').strip()
        if stderr:
            for line in stderr.splitlines():
                logger.debug(f"lookup worker: {line}")

        if proc.returncode != 0:
            raise DiscoveryError(
                f"Data source lookup exited with status {proc.returncode}: {stderr}"
            )

        return parse_worker_output(proc.stdout)


def parse_worker_output(payload: bytes) -> DiscoveryResult:
    """
    Parse the worker's JSON document.

    Raises:
        DiscoveryError: If the payload is not a valid lookup result
    """
    try:
        data = orjson.loads(payload)
    except orjson.JSONDecodeError as e:
        raise DiscoveryError(f"Malformed data source lookup output: {e}") from e

    if not isinstance(data, dict):
        raise DiscoveryError("Malformed data source lookup output: expected an object")

    names = data.get('names', [])
    handles = data.get('handles', [])
    if not isinstance(names, list) or not isinstance(handles, list):
        raise DiscoveryError("Malformed data source lookup output: expected lists")

    return DiscoveryResult(names=names, handles=handles)


def default_discovery(config=None) -> DataSourceDiscovery:
    """Create the default discovery collaborator."""
    return PythonWorkerDiscovery(config)
