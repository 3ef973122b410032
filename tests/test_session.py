# -*- coding: utf-8 -*-
"""Tests for sessions, registration and the reader."""

import pytest

from datasource_registry import (
    DataSource, DataSourceDescriptor, DataSourceManager, DataSourceNotFoundError,
    DataSourceRelation, Session,
)
from datasource_registry.datasource import load_handle


class FakeSource(DataSource):
    """Data source used by the session tests."""

    @classmethod
    def name(cls):
        return "Fake"


class DefaultNamedSource(DataSource):
    pass


class TestDataSourceRegistration:

    def test_register_uses_name(self):
        session = Session()

        descriptor = session.data_source.register(FakeSource)

        assert descriptor.handle is FakeSource
        assert session.data_source.exists("FAKE")
        assert session.data_source.lookup("fake") is descriptor
        assert session.data_source.list() == ["fake"]

    def test_default_name_is_class_name(self):
        session = Session()
        session.data_source.register(DefaultNamedSource)

        assert session.data_source.exists("defaultnamedsource")

    @pytest.mark.parametrize("bad", [object, "pkg:Source", FakeSource()])
    def test_register_rejects_non_data_sources(self, bad):
        with pytest.raises(TypeError):
            Session().data_source.register(bad)

    def test_session_uses_given_manager(self, make_loader):
        loader, _ = make_loader(names=["seeded"], handles=["m:Seeded"])
        manager = DataSourceManager(seed_loader=loader)

        session = Session(data_source_manager=manager)

        assert session.data_source_manager is manager
        assert session.data_source.exists("SEEDED")


class TestNewSession:

    def test_new_session_clones_registrations(self):
        parent = Session(options={"a": 1})
        parent.data_source.register(FakeSource)

        child = parent.new_session()

        assert child.data_source.exists("fake")
        assert child.data_source.lookup("fake") is parent.data_source.lookup("fake")
        assert child.options == {"a": 1}

    def test_new_session_is_isolated(self):
        parent = Session()
        child = parent.new_session()

        child.data_source.register(FakeSource)
        parent.data_source.register(DefaultNamedSource)

        assert not parent.data_source.exists("fake")
        assert not child.data_source.exists("defaultnamedsource")


class TestSessionBuilder:

    def test_get_or_create_returns_active_session(self):
        first = Session.builder.app_name("etl").config("k", "v").get_or_create()
        second = Session.builder.get_or_create()

        assert first is second
        assert first.app_name == "etl"
        assert first.options == {"k": "v"}

    def test_builder_is_fresh_each_access(self):
        assert Session.builder is not Session.builder


class TestDataSourceReader:

    def test_load_resolves_registered_source(self):
        session = Session()
        session.data_source.register(FakeSource)

        relation = session.read.format("FAKE").option("rows", 10).options(seed=1).load("/data/in")

        assert isinstance(relation, DataSourceRelation)
        assert relation.name == "FAKE"
        assert relation.descriptor.handle is FakeSource
        assert relation.options == {"rows": 10, "seed": 1}
        assert relation.paths == ["/data/in"]

    def test_create_data_source_passes_options(self):
        session = Session()
        session.data_source.register(FakeSource)

        source = session.read.format("fake").option("rows", 3).load("/data/in").create_data_source()

        assert isinstance(source, FakeSource)
        assert source.options == {"rows": 3, "path": "/data/in"}

    def test_multiple_paths(self):
        session = Session()
        session.data_source.register(FakeSource)

        source = session.read.format("fake").load(["/a", "/b"]).create_data_source()

        assert source.options == {"paths": ["/a", "/b"]}

    def test_schema_is_kept(self):
        session = Session()
        session.data_source.register(FakeSource)

        relation = session.read.format("fake").schema("id INT").load()

        assert relation.schema == "id INT"
        assert relation.paths == []

    def test_unknown_format_raises(self):
        with pytest.raises(DataSourceNotFoundError) as exc_info:
            Session().read.format("Missing").load()
        assert exc_info.value.name == "Missing"

    def test_format_required(self):
        with pytest.raises(ValueError):
            Session().read.load()


class TestDescriptor:

    def test_load_class_from_reference(self):
        descriptor = DataSourceDescriptor("datasource_registry.datasource:DataSource")
        assert descriptor.load_class() is DataSource

    def test_load_class_from_class(self):
        assert DataSourceDescriptor(FakeSource).load_class() is FakeSource

    @pytest.mark.parametrize("handle", ["no_colon", "builtins:dict", ":Thing", 42])
    def test_load_handle_rejects_bad_handles(self, handle):
        with pytest.raises(TypeError):
            load_handle(handle)

    def test_base_hooks_are_not_implemented(self):
        source = FakeSource({"a": 1})
        with pytest.raises(NotImplementedError):
            source.schema()
        with pytest.raises(NotImplementedError):
            source.reader(None)
        with pytest.raises(NotImplementedError):
            source.writer(None, overwrite=False)

    def test_descriptor_is_immutable(self):
        descriptor = DataSourceDescriptor(FakeSource)
        with pytest.raises(AttributeError):
            descriptor.handle = DefaultNamedSource
