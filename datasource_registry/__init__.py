# -*- coding: utf-8 -*-
"""Thread-safe, case-insensitive registry of pluggable data sources."""

__version__ = "0.1.0"

from .errors import DataSourceError, DataSourceNotFoundError, DiscoveryError
from .datasource import DataSource, DataSourceDescriptor
from .discovery import DataSourceDiscovery, DiscoveryResult, PythonWorkerDiscovery
from .seed import SeedLoader, get_seed_entries, set_seed_loader, reset_seed_loader
from .manager import DataSourceManager
from .session import Session, SessionBuilder, DataSourceRegistration
from .reader import DataSourceReader, DataSourceRelation

__all__ = [
    '__version__',

    # Errors
    'DataSourceError',
    'DataSourceNotFoundError',
    'DiscoveryError',

    # Data sources
    'DataSource',
    'DataSourceDescriptor',

    # Discovery
    'DataSourceDiscovery',
    'DiscoveryResult',
    'PythonWorkerDiscovery',
    'SeedLoader',
    'get_seed_entries',
    'set_seed_loader',
    'reset_seed_loader',

    # Registry and sessions
    'DataSourceManager',
    'Session',
    'SessionBuilder',
    'DataSourceRegistration',
    'DataSourceReader',
    'DataSourceRelation',
]
