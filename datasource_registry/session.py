#!/usr/bin/env python3
"""
Sessions

A session owns a DataSourceManager. New sessions derived from an existing
one start with a clone of its registrations.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Type

from .datasource import DataSource, DataSourceDescriptor
from .manager import DataSourceManager

logger = logging.getLogger(__name__)


class DataSourceRegistration:
    """
    Register data sources with a session.

    Example:
        session.data_source.register(FakeSource)
    """

    def __init__(self, manager: DataSourceManager):
        self._manager = manager

    def register(self, data_source: Type[DataSource]) -> DataSourceDescriptor:
        """
        Register a DataSource subclass under its ``name()``.

        Returns:
            The registered descriptor
        """
        if not (isinstance(data_source, type) and issubclass(data_source, DataSource)):
            raise TypeError(f"Expected a DataSource subclass, got {data_source!r}")

        descriptor = DataSourceDescriptor(data_source)
        self._manager.register_data_source(data_source.name(), descriptor)
        return descriptor

    def exists(self, name: str) -> bool:
        return self._manager.data_source_exists(name)

    def lookup(self, name: str) -> DataSourceDescriptor:
        return self._manager.lookup_data_source(name)

    def list(self) -> List[str]:
        return self._manager.list_data_sources()


class SessionBuilder:
    """Builder for Session."""

    _lock = threading.Lock()
    _active_session: Optional['Session'] = None

    def __init__(self):
        self._app_name = "datasource-registry"
        self._config_options: Dict[str, Any] = {}

    def app_name(self, name: str):
        """Set application name."""
        self._app_name = name
        return self

    def config(self, key: str, value: Any):
        """Set configuration option."""
        self._config_options[key] = value
        return self

    def get_or_create(self) -> 'Session':
        """Return the active session, creating it on first call."""
        with SessionBuilder._lock:
            session = SessionBuilder._active_session
            if session is None:
                session = Session(self._app_name, self._config_options)
                SessionBuilder._active_session = session
            else:
                session._options.update(self._config_options)
            return session

    @classmethod
    def clear_active_session(cls):
        """Forget the active session."""
        with cls._lock:
            cls._active_session = None


class _BuilderDescriptor:
    def __get__(self, instance, owner):
        return SessionBuilder()


class Session:
    """
    Session owning a data source registry.

    Example:
        session = Session.builder.app_name("etl").get_or_create()
        session.data_source.register(FakeSource)
        relation = session.read.format("fake").load()
    """

    builder = _BuilderDescriptor()

    def __init__(
        self,
        app_name: str = "datasource-registry",
        options: Optional[Dict[str, Any]] = None,
        data_source_manager: Optional[DataSourceManager] = None,
    ):
        """
        Initialize session.

        Args:
            app_name: Application name
            options: Configuration options
            data_source_manager: Registry to use (a fresh one by default)
        """
        self.app_name = app_name
        self._options = dict(options or {})
        # Created eagerly but not seeded until first use.
        self._data_source_manager = data_source_manager or DataSourceManager()
        logger.info(f"Initialized Session: {app_name}")

    @property
    def data_source_manager(self) -> DataSourceManager:
        return self._data_source_manager

    @property
    def data_source(self) -> DataSourceRegistration:
        """Get the data source registration facade."""
        return DataSourceRegistration(self._data_source_manager)

    @property
    def read(self):
        """Get DataSourceReader."""
        from .reader import DataSourceReader
        return DataSourceReader(self)

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._options)

    def new_session(self) -> 'Session':
        """Create a session with the same options and a clone of this registry."""
        return Session(
            self.app_name,
            self._options,
            data_source_manager=self._data_source_manager.clone(),
        )
