# -*- coding: utf-8 -*-
"""Exceptions raised by the data source registry."""


class DataSourceError(Exception):
    """Base exception for data source registry operations."""
    pass


class DataSourceNotFoundError(DataSourceError):
    """Raised when a data source name does not resolve in a registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"[DATA_SOURCE_NOT_EXIST] Data source '{name}' not found. "
            "Please make sure the data source is registered."
        )


class DiscoveryError(DataSourceError):
    """Raised when the external data source lookup fails."""
    pass
