"""
Registry of user-defined data sources.

A DataSourceManager maps case-insensitive provider names to data source
descriptors and is safe to use from many query-planning threads at once.
"""

import logging
import threading
from typing import Dict, List, Mapping, Optional

from .datasource import DataSourceDescriptor
from .errors import DataSourceNotFoundError
from .seed import SeedLoader, get_seed_loader, normalize_name


class DataSourceManager:
    """
    Register and look up data sources by their short or fully qualified names.

    The table is seeded with the process-wide discovered data sources on
    first access, not at construction.

    Example:
        manager = DataSourceManager()
        manager.register_data_source("fake", DataSourceDescriptor(FakeSource))
        manager.lookup_data_source("FAKE")
    """

    def __init__(
        self,
        seed_loader: Optional[SeedLoader] = None,
        logger: Optional[logging.Logger] = None,
        _initial: Optional[Mapping[str, DataSourceDescriptor]] = None,
    ):
        """
        Initialize the manager.

        Args:
            seed_loader: Source of seed entries (defaults to the process-wide loader)
            logger: Logger receiving replacement warnings
        """
        self._seed_loader = seed_loader
        self._logger = logger or logging.getLogger(__name__)
        self._initial = _initial
        self._builders: Optional[Dict[str, DataSourceDescriptor]] = None
        self._init_lock = threading.Lock()
        self._write_lock = threading.Lock()

    @property
    def _data_source_builders(self) -> Dict[str, DataSourceDescriptor]:
        builders = self._builders
        if builders is None:
            with self._init_lock:
                if self._builders is None:
                    if self._initial is not None:
                        self._builders = dict(self._initial)
                        self._initial = None
                    else:
                        loader = self._seed_loader or get_seed_loader()
                        self._builders = dict(loader.get_seed_entries())
                builders = self._builders
        return builders

    def register_data_source(self, name: str, source: DataSourceDescriptor) -> None:
        """
        Register a data source for the given provider. The name is case-insensitive.

        Replacing an existing registration logs a warning.
        """
        normalized_name = normalize_name(name)
        builders = self._data_source_builders
        with self._write_lock:
            replaced = normalized_name in builders
            builders[normalized_name] = source
        if replaced:
            self._logger.warning(
                f"The data source {name} replaced a previously registered data source."
            )

    def lookup_data_source(self, name: str) -> DataSourceDescriptor:
        """
        Return the data source registered for the given provider.

        Raises:
            DataSourceNotFoundError: If no data source has that name
        """
        try:
            return self._data_source_builders[normalize_name(name)]
        except KeyError:
            raise DataSourceNotFoundError(name) from None

    def data_source_exists(self, name: str) -> bool:
        """Check if a data source with the given name exists (case-insensitive)."""
        return normalize_name(name) in self._data_source_builders

    def list_data_sources(self) -> List[str]:
        """Sorted normalized names of the registered data sources."""
        return sorted(list(self._data_source_builders))

    def clone(self) -> 'DataSourceManager':
        """Create an independent manager holding the same registrations."""
        builders = self._data_source_builders
        with self._write_lock:
            snapshot = dict(builders)
        return DataSourceManager(
            seed_loader=self._seed_loader,
            logger=self._logger,
            _initial=snapshot,
        )

    def __contains__(self, name: str) -> bool:
        return self.data_source_exists(name)

    def __len__(self) -> int:
        return len(self._data_source_builders)

    def __repr__(self) -> str:
        if self._builders is None:
            return f"<{type(self).__name__} (not loaded)>"
        return f"<{type(self).__name__} {self.list_data_sources()}>"
