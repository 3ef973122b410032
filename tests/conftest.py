# -*- coding: utf-8 -*-
"""Pytest configuration for data source registry tests."""

import os
import threading
import time

import pytest

from datasource_registry.config import RegistryConfig, set_config
from datasource_registry.discovery import DiscoveryResult
from datasource_registry.seed import SeedLoader, set_seed_loader
from datasource_registry.session import SessionBuilder


class CountingDiscovery:
    """Discovery double that records how often it is invoked."""

    def __init__(self, names=(), handles=(), error=None, delay=0.0):
        self.names = list(names)
        self.handles = list(handles)
        self.error = error
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def lookup_all_data_sources(self):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return DiscoveryResult(names=list(self.names), handles=list(self.handles))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep DSREG_* settings from the host out of the tests."""
    for key in list(os.environ):
        if key.startswith('DSREG_'):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config(clean_env):
    """Testing configuration that ignores config files."""
    return RegistryConfig(testing=True, load_files=False)


@pytest.fixture(autouse=True)
def isolated_seed_loader(clean_env):
    """Install an empty process-wide seed loader for every test."""
    testing_config = RegistryConfig(testing=True, load_files=False)
    set_config(testing_config)
    set_seed_loader(SeedLoader(discovery=CountingDiscovery(), config=testing_config))
    SessionBuilder.clear_active_session()
    yield
    SessionBuilder.clear_active_session()
    set_seed_loader(None)
    set_config(None)


@pytest.fixture
def make_loader(config):
    """Factory for seed loaders backed by a CountingDiscovery."""
    def _make(names=(), handles=(), error=None, delay=0.0, availability=None):
        discovery = CountingDiscovery(names, handles, error=error, delay=delay)
        loader = SeedLoader(discovery=discovery, config=config, availability=availability)
        return loader, discovery
    return _make
