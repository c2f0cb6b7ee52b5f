"""Configuration store stories: lookup, sections, provenance, plain-data rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping

import pytest

from layered_appsettings.domain.enums import SourceKind
from layered_appsettings.domain.keys import ConfigKey
from layered_appsettings.domain.store import ConfigurationStore, ConfigValue, SourceInfo, StoreEntry

StoreFactory = Callable[[Mapping[str, ConfigValue]], ConfigurationStore]


@pytest.mark.os_agnostic
def test_lookup_ignores_case(store_factory: StoreFactory) -> None:
    """Values are found whatever the lookup spelling."""
    store = store_factory({"Logging:LogLevel:Default": "Debug"})

    assert store["LOGGING:loglevel:default"] == "Debug"
    assert "logging:LogLevel:DEFAULT" in store


@pytest.mark.os_agnostic
def test_missing_key_raises_key_error(store_factory: StoreFactory) -> None:
    """Subscript lookup of an absent key raises KeyError."""
    store = store_factory({"A": "1"})

    with pytest.raises(KeyError):
        store["B"]


@pytest.mark.os_agnostic
def test_get_returns_default_only_for_absent_keys(store_factory: StoreFactory) -> None:
    """A key that exists with a null value is not absent."""
    store = store_factory({"Present": None})

    assert store.get("Present", "fallback") is None
    assert store.get("Absent", "fallback") == "fallback"


@pytest.mark.os_agnostic
def test_empty_store_has_no_keys_and_no_sources() -> None:
    """The empty store is a valid, empty mapping."""
    store = ConfigurationStore.empty()

    assert len(store) == 0
    assert store.sources == ()
    assert store.as_dict() == {}


@pytest.mark.os_agnostic
def test_source_of_reports_the_winning_source() -> None:
    """Each entry remembers the source that supplied it."""
    info = SourceInfo(SourceKind.ENVIRONMENT, "MYAPP_*")
    store = ConfigurationStore({ConfigKey.parse("ApplicationName"): StoreEntry("FromEnv", info)}, [info])

    assert store.source_of("applicationname") == info
    assert store.source_of("missing") is None
    assert store.sources == (info,)


@pytest.mark.os_agnostic
def test_store_cannot_be_mutated(store_factory: StoreFactory) -> None:
    """The store exposes no item assignment."""
    store = store_factory({"A": "1"})

    with pytest.raises(TypeError):
        store["A"] = "2"  # type: ignore[index]


@pytest.mark.os_agnostic
def test_as_dict_turns_contiguous_indexes_into_lists(store_factory: StoreFactory) -> None:
    """Index families 0..n-1 render as lists in index order."""
    store = store_factory({
        "ApiTester:SupportedMethods:1": "POST",
        "ApiTester:SupportedMethods:0": "GET",
        "ApiTester:MaxRetries": "3",
    })

    assert store.as_dict() == {"ApiTester": {"SupportedMethods": ["GET", "POST"], "MaxRetries": "3"}}


@pytest.mark.os_agnostic
def test_as_dict_keeps_sparse_indexes_as_mapping(store_factory: StoreFactory) -> None:
    """A gap in the indexes keeps the family as a mapping."""
    store = store_factory({"Methods:0": "GET", "Methods:4": "PATCH"})

    assert store.as_dict() == {"Methods": {"0": "GET", "4": "PATCH"}}


@pytest.mark.os_agnostic
def test_get_section_matches_case_insensitively_and_keeps_stored_spelling(store_factory: StoreFactory) -> None:
    """Section lookups ignore case but report the stored spelling."""
    store = store_factory({"ApiTester:BaseUrl": "https://example.test"})

    section = store.get_section("apitester")

    assert section.exists()
    assert section.key == "ApiTester"
    assert section.path == "ApiTester"
    assert section.get_section("baseurl").value == "https://example.test"


@pytest.mark.os_agnostic
def test_missing_section_does_not_exist(store_factory: StoreFactory) -> None:
    """A section with nothing beneath it reports exists() False."""
    store = store_factory({"A": "1"})

    section = store.get_section("Nope")

    assert not section.exists()
    assert section.to_data() is None
    assert section.get_children() == []


@pytest.mark.os_agnostic
def test_section_children_are_ordered_indexes_first(store_factory: StoreFactory) -> None:
    """Children list numeric segments numerically, then names."""
    store = store_factory({"S:10": "c", "S:2": "b", "S:name": "n", "S:0": "a"})

    assert [child.key for child in store.get_section("S").get_children()] == ["0", "2", "10", "name"]


@pytest.mark.os_agnostic
def test_top_level_children_are_listed_once_per_name(store_factory: StoreFactory) -> None:
    """Top-level sections collapse keys sharing a first segment."""
    store = store_factory({"Logging:LogLevel:Default": "Debug", "logging:Console": "on", "ApplicationName": "X"})

    assert [child.key for child in store.get_children()] == ["ApplicationName", "Logging"]


@pytest.mark.os_agnostic
def test_section_value_and_data_for_a_leaf(store_factory: StoreFactory) -> None:
    """A leaf section exposes its scalar."""
    store = store_factory({"ApplicationName": "MyConsoleApp"})

    leaf = store.get_section("applicationname")

    assert leaf.value == "MyConsoleApp"
    assert leaf.to_data() == "MyConsoleApp"


@pytest.mark.os_agnostic
def test_nested_get_section_walks_down(store_factory: StoreFactory) -> None:
    """Sections can be narrowed step by step."""
    store = store_factory({"Logging:LogLevel:Default": "Debug"})

    nested = store.get_section("Logging").get_section("loglevel")

    assert nested.path == "Logging:LogLevel"
    assert nested.to_data() == {"Default": "Debug"}
