# -*- coding: utf-8 -*-
"""Tests for the command line interface."""

from typer.testing import CliRunner

from datasource_registry import __version__
from datasource_registry.cli import app
from datasource_registry.discovery import DiscoveryResult
from datasource_registry.errors import DiscoveryError
from datasource_registry.seed import set_seed_loader

runner = CliRunner()


class TestCLI:

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_loglevel_option(self):
        result = runner.invoke(app, ["-l", "DEBUG", "version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_list_empty(self):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No data sources available" in result.stdout

    def test_list_seeded(self, make_loader):
        loader, _ = make_loader(names=["Foo"], handles=["pkg:Foo"])
        set_seed_loader(loader)

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "foo" in result.stdout
        assert "pkg:Foo" in result.stdout

    def test_discover(self, mocker):
        discovery = mocker.patch("datasource_registry.cli.PythonWorkerDiscovery")
        discovery.return_value.lookup_all_data_sources.return_value = DiscoveryResult(
            names=["bar"], handles=["pkg:Bar"]
        )

        result = runner.invoke(app, ["discover", "--group", "my.group"])

        assert result.exit_code == 0
        assert "bar" in result.stdout
        assert "1 data source(s)" in result.stdout
        config = discovery.call_args[0][0]
        assert config.entry_point_group == "my.group"

    def test_discover_failure(self, mocker):
        discovery = mocker.patch("datasource_registry.cli.PythonWorkerDiscovery")
        discovery.return_value.lookup_all_data_sources.side_effect = DiscoveryError("worker died")

        result = runner.invoke(app, ["discover"])

        assert result.exit_code == 1
        assert "worker died" in result.stdout
