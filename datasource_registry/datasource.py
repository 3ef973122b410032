"""
Data source base class and the descriptor stored by registries.

Defines the interface user data sources implement and the immutable value
wrapping a data source handle.
"""

import importlib
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Type


class DataSource:
    """
    Base class for user-defined data sources.

    Subclasses are registered by name with a session, or published through
    the ``datasource_registry.data_sources`` entry point group so discovery
    picks them up.

    Examples:
        >>> class FakeSource(DataSource):
        >>>     @classmethod
        >>>     def name(cls):
        >>>         return "fake"
        >>>
        >>> session.data_source.register(FakeSource)
        >>> session.read.format("FAKE").load()
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = dict(options or {})

    @classmethod
    def name(cls) -> str:
        """Short name used to refer to this data source. Defaults to the class name."""
        return cls.__name__

    def schema(self):
        """
        Return the schema of the data produced by this source.

        Returns:
            Schema object or DDL string understood by the engine
        """
        raise NotImplementedError(f"{type(self).__name__} does not define a schema")

    def reader(self, schema):
        """Return a reader for batch queries."""
        raise NotImplementedError(f"{type(self).__name__} does not support reading")

    def writer(self, schema, overwrite: bool):
        """Return a writer for batch writes."""
        raise NotImplementedError(f"{type(self).__name__} does not support writing")


def load_handle(handle: Any) -> Type[DataSource]:
    """
    Resolve a data source handle to its class.

    Args:
        handle: DataSource subclass or ``"module:attr"`` reference

    Returns:
        The data source class

    Raises:
        TypeError: If the handle does not resolve to a DataSource subclass
    """
    obj = handle
    if isinstance(handle, str):
        module_name, sep, attr_path = handle.partition(':')
        if not sep or not module_name or not attr_path:
            raise TypeError(
                f"Invalid data source reference '{handle}'. "
                "Expected format: 'module.path:attribute'"
            )
        obj = importlib.import_module(module_name)
        for attr in attr_path.split('.'):
            obj = getattr(obj, attr)

    if not (isinstance(obj, type) and issubclass(obj, DataSource)):
        raise TypeError(f"{obj!r} is not a DataSource subclass")
    return obj


@dataclass(frozen=True)
class DataSourceDescriptor:
    """
    Immutable wrapper around a data source handle.

    The handle is opaque to the registry: either a DataSource subclass
    registered in-process, or an import reference reported by discovery.
    """

    handle: Any
    python_exec: Optional[str] = None
    python_paths: Tuple[str, ...] = ()

    @classmethod
    def from_handle(cls, handle: Any, config=None) -> 'DataSourceDescriptor':
        """
        Wrap a discovered handle together with the interpreter it came from.

        Args:
            handle: Opaque data source handle
            config: RegistryConfig supplying the interpreter settings
        """
        if config is None:
            return cls(handle)
        return cls(
            handle,
            python_exec=config.python_exec,
            python_paths=tuple(config.python_paths),
        )

    def load_class(self) -> Type[DataSource]:
        """Resolve the wrapped handle to its DataSource class."""
        return load_handle(self.handle)
