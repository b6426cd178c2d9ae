"""End-to-end coverage of the composition root with in-memory adapters.

Exercises the full flow behind ``shh-env run`` and ``shh-env list``:
enumerate, drop foreign credentials, group, resolve the layers, then merge or
annotate.
"""

from __future__ import annotations

import pytest

from shh_env import core
from shh_env.adapters.enumeration.default import Platform, PlatformEnumerator
from shh_env.domain.entries import SecretEntry
from shh_env.domain.errors import ConfigError, StoreError, ValidationError
from tests.support import LINUX_DUMP, InMemorySecretStore, ScriptedRunner, StoreEnumerator, populated_store


def test_three_layer_merge() -> None:
    store = populated_store()
    merged = core.resolve_secrets("app", "dev", store=store, enumerator=StoreEnumerator(store))
    assert merged == {"EDITOR": "vim", "API_KEY": "k2"}


def test_service_only_merge() -> None:
    store = populated_store()
    assert core.resolve_secrets("app", store=store, enumerator=StoreEnumerator(store)) == {
        "EDITOR": "vim",
        "API_KEY": "k1",
    }


def test_root_only_merge() -> None:
    store = populated_store()
    assert core.resolve_secrets(store=store, enumerator=StoreEnumerator(store)) == {"EDITOR": "vim"}


def test_foreign_entries_are_never_fetched() -> None:
    store = populated_store()
    foreign = [SecretEntry("_", "lowercase"), SecretEntry("app", "wifi password"), SecretEntry("a::b::c", "X")]

    merged = core.resolve_secrets("app", "dev", store=store, enumerator=StoreEnumerator(store, foreign=foreign))

    assert merged == {"EDITOR": "vim", "API_KEY": "k2"}
    fetched = {(namespace, key) for action, namespace, key in store.calls if action == "get"}
    assert fetched == {("_", "EDITOR"), ("app", "API_KEY"), ("app::dev", "API_KEY")}


def test_unavailable_enumeration_resolves_to_nothing() -> None:
    enumerator = PlatformEnumerator(Platform.LINUX, runner=ScriptedRunner(unavailable=True))
    assert core.resolve_secrets("app", store=populated_store(), enumerator=enumerator) == {}
    assert core.list_view(enumerator=enumerator) == [core.NO_SECRETS_MESSAGE]


def test_platform_dump_drives_the_merge() -> None:
    store = InMemorySecretStore(items={("_", "EDITOR"): "vim", ("app::dev", "API_KEY"): "k2"})
    enumerator = PlatformEnumerator(Platform.LINUX, runner=ScriptedRunner(output=LINUX_DUMP))
    assert core.resolve_secrets("app", "dev", store=store, enumerator=enumerator) == {
        "EDITOR": "vim",
        "API_KEY": "k2",
    }


def test_store_failure_aborts_resolution() -> None:
    store = populated_store()
    store.fail_on_get = True
    with pytest.raises(StoreError):
        core.resolve_secrets("app", store=store, enumerator=StoreEnumerator(store))


@pytest.mark.parametrize(
    ("service", "environment", "error"),
    [
        (None, "dev", ConfigError),
        ("my app", None, ValidationError),
        ("app", "dev.1", ValidationError),
    ],
)
def test_invalid_requests_fail_before_enumeration(service, environment, error) -> None:
    runner = ScriptedRunner(output=LINUX_DUMP)
    enumerator = PlatformEnumerator(Platform.LINUX, runner=runner)
    with pytest.raises(error):
        core.resolve_secrets(service, environment, store=populated_store(), enumerator=enumerator)
    assert runner.commands == []


def test_single_item_round_trip() -> None:
    store = InMemorySecretStore()
    assert core.set_secret("TOKEN", "t", "app", "dev", store=store) == "app::dev"
    assert core.get_secret("TOKEN", "app", "dev", store=store) == "t"
    assert core.get_secret("TOKEN", "app", store=store) is None
    assert core.delete_secret("TOKEN", "app", "dev", store=store) is True
    assert core.delete_secret("TOKEN", "app", "dev", store=store) is False


def test_list_view_root_service_renders_single_layer() -> None:
    store = populated_store()
    assert core.list_view("_", enumerator=StoreEnumerator(store)) == ["_", "└── EDITOR"]


def test_list_view_omits_missing_layers_but_keeps_separator() -> None:
    store = InMemorySecretStore(items={("_", "EDITOR"): "vim", ("app::dev", "API_KEY"): "k2"})
    assert core.list_view("app", "dev", enumerator=StoreEnumerator(store)) == [
        "_",
        "└── EDITOR",
        "",
        "",
        "app::dev",
        "└── API_KEY",
    ]
