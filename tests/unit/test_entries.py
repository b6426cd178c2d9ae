"""Foreign-credential filter tests."""

from __future__ import annotations

import dataclasses

import pytest

from shh_env.domain.entries import SecretEntry, filter_valid


def _entries(*pairs: tuple[str, str]) -> list[SecretEntry]:
    return [SecretEntry(namespace, key) for namespace, key in pairs]


def test_keeps_valid_entries_in_order() -> None:
    entries = _entries(("_", "API_KEY"), ("my-app", "DATABASE_URL"), ("my-app::dev", "DEBUG"))
    assert filter_valid(entries) == entries


def test_drops_foreign_services() -> None:
    entries = _entries(("_", "API_KEY"), ("AirPort", "WIFI_NAME"), ("Soduto Host", "SOME_KEY"))
    assert filter_valid(entries) == _entries(("_", "API_KEY"), ("AirPort", "WIFI_NAME"))


@pytest.mark.parametrize("service", ["bad svc", "bad/svc", "bad@svc", "::dev", "app::", "app::dev::extra", "app::dev.1"])
def test_drops_malformed_namespaces(service: str) -> None:
    assert filter_valid(_entries((service, "KEY"))) == []


@pytest.mark.parametrize("key", ["invalid_key", "MixedCase", "1BAD", "API-KEY", "API.KEY"])
def test_drops_malformed_keys(key: str) -> None:
    assert filter_valid(_entries(("_", key))) == []


def test_accepts_dotted_services_and_environments() -> None:
    entries = _entries(
        ("my.app", "KEY"),
        ("app.v2.3", "KEY"),
        ("my-app::staging-1", "KEY"),
        ("app::prod_v2", "KEY"),
    )
    assert filter_valid(entries) == entries


def test_empty_input() -> None:
    assert filter_valid([]) == []


def test_entries_are_immutable_and_hashable() -> None:
    entry = SecretEntry("app", "KEY")
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.key = "OTHER"  # type: ignore[misc]
    assert len({entry, SecretEntry("app", "KEY")}) == 1
