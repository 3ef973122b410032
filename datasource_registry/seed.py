"""
Process-wide seed entries for data source registries.

Discovery runs at most once per process, on the first access to a
registry's table, never at import or construction time: the availability
check and the lookup may need a fully initialized session. The outcome is
cached for the life of the process, including the empty outcome of a failed
or skipped lookup.
"""

import logging
import threading
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .datasource import DataSourceDescriptor
from .discovery import DataSourceDiscovery, DiscoveryResult, default_discovery
from .utils import should_load_data_sources

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, DataSourceDescriptor] = MappingProxyType({})


def normalize_name(name: str) -> str:
    """Case-insensitive key for a data source name."""
    return name.lower()


class SeedLoader:
    """
    Lock-guarded, compute-once cell holding the discovered data sources.

    Example:
        loader = SeedLoader(discovery=FakeDiscovery(), config=config)
        entries = loader.get_seed_entries()
    """

    def __init__(
        self,
        discovery: Optional[DataSourceDiscovery] = None,
        config=None,
        availability: Optional[Callable[..., bool]] = None,
    ):
        """
        Initialize the loader. Nothing is looked up until first use.

        Args:
            discovery: Discovery collaborator (defaults to the Python worker)
            config: RegistryConfig (defaults to the global configuration)
            availability: Precondition check taking the config
        """
        self._discovery = discovery
        self._config = config
        self._availability = availability or should_load_data_sources
        self._lock = threading.Lock()
        self._should_load: Optional[bool] = None
        # None until the lookup has been attempted
        self._entries: Optional[Mapping[str, DataSourceDescriptor]] = None

    @property
    def config(self):
        if self._config is None:
            from .config import get_config
            self._config = get_config()
        return self._config

    @property
    def attempted(self) -> bool:
        """Whether discovery has completed, successfully or not."""
        return self._entries is not None

    def should_load(self) -> bool:
        """Availability precondition, evaluated once per loader."""
        if self._should_load is None:
            with self._lock:
                if self._should_load is None:
                    self._should_load = bool(self._availability(self.config))
        return self._should_load

    def get_seed_entries(self) -> Mapping[str, DataSourceDescriptor]:
        """
        Get the discovered data sources, running discovery on first call.

        Returns:
            Read-only mapping of normalized name to descriptor; empty when
            discovery is unavailable or failed
        """
        if not (self.config.testing or self.should_load()):
            return _EMPTY

        entries = self._entries
        if entries is None:
            with self._lock:
                if self._entries is None:
                    self._entries = self._load()
                entries = self._entries
        return entries

    def reset(self):
        """Forget the cached outcome so the next access looks up again."""
        with self._lock:
            self._entries = None
            self._should_load = None

    def _load(self) -> Mapping[str, DataSourceDescriptor]:
        result = self._lookup()
        if result is None:
            return _EMPTY

        builders: Dict[str, DataSourceDescriptor] = {}
        for name, handle in zip(result.names, result.handles):
            builders[normalize_name(name)] = DataSourceDescriptor.from_handle(handle, self.config)

        logger.info(f"Discovered {len(builders)} data source(s)")
        return MappingProxyType(builders)

    def _lookup(self) -> Optional[DiscoveryResult]:
        """Invoke discovery; None means it failed."""
        discovery = self._discovery
        try:
            if discovery is None:
                discovery = default_discovery(self.config)
            result = discovery.lookup_all_data_sources()
            if not isinstance(result, DiscoveryResult):
                result = DiscoveryResult(names=list(result[0]), handles=list(result[1]))
            return result
        except Exception as e:
            # A broken lookup must not stop the host from starting.
            logger.warning(f"Skipping the lookup of data sources due to the failure: {e!r}")
            return None


# Process-wide loader shared by every registry
_loader_lock = threading.Lock()
_loader: Optional[SeedLoader] = None


def get_seed_loader() -> SeedLoader:
    """Get the process-wide seed loader, creating it on first use."""
    global _loader
    loader = _loader
    if loader is None:
        with _loader_lock:
            if _loader is None:
                _loader = SeedLoader()
            loader = _loader
    return loader


def set_seed_loader(loader: Optional[SeedLoader]) -> None:
    """Replace the process-wide seed loader (None restores the default)."""
    global _loader
    with _loader_lock:
        _loader = loader


def reset_seed_loader() -> None:
    """Drop the process-wide seed loader and its cached entries."""
    set_seed_loader(None)


def get_seed_entries() -> Mapping[str, DataSourceDescriptor]:
    """Data sources every new registry is seeded with."""
    return get_seed_loader().get_seed_entries()
