#!/usr/bin/env python3
"""
Data source reader.

Resolves a format name against the session's registry at planning time.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .datasource import DataSource, DataSourceDescriptor

logger = logging.getLogger(__name__)


@dataclass
class DataSourceRelation:
    """A resolved, not yet executed, read of a registered data source."""
    name: str
    descriptor: DataSourceDescriptor
    options: Dict[str, Any] = field(default_factory=dict)
    schema: Optional[Any] = None
    paths: List[str] = field(default_factory=list)

    def create_data_source(self) -> DataSource:
        """Instantiate the resolved data source with the reader options."""
        options = dict(self.options)
        if len(self.paths) == 1:
            options.setdefault('path', self.paths[0])
        elif self.paths:
            options.setdefault('paths', list(self.paths))
        return self.descriptor.load_class()(options)


class DataSourceReader:
    """
    Reader for registered data sources.

    Example:
        relation = session.read.format("fake").option("rows", 10).load()
        source = relation.create_data_source()
    """

    def __init__(self, session):
        """
        Initialize reader.

        Args:
            session: Parent Session
        """
        self._session = session
        self._format: Optional[str] = None
        self._options: Dict[str, Any] = {}
        self._schema = None

    def format(self, source: str):
        """Set input format."""
        self._format = source
        return self

    def option(self, key: str, value):
        """Set option."""
        self._options[key] = value
        return self

    def options(self, **options):
        """Set multiple options."""
        self._options.update(options)
        return self

    def schema(self, schema):
        """Set a user-specified schema."""
        self._schema = schema
        return self

    def load(self, path: Optional[Union[str, List[str]]] = None) -> DataSourceRelation:
        """
        Resolve the format and build the relation.

        Raises:
            ValueError: If no format was set
            DataSourceNotFoundError: If the format is not registered
        """
        if not self._format:
            raise ValueError("Must specify format with .format()")

        descriptor = self._session.data_source_manager.lookup_data_source(self._format)

        if path is None:
            paths = []
        elif isinstance(path, str):
            paths = [path]
        else:
            paths = list(path)

        logger.debug(f"Resolved data source '{self._format}' to {descriptor.handle!r}")
        return DataSourceRelation(
            name=self._format,
            descriptor=descriptor,
            options=dict(self._options),
            schema=self._schema,
            paths=paths,
        )
