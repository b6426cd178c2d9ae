"""Adapter contract tests for the application-layer ports.

The default adapters and the in-memory fakes must keep satisfying the
protocols in :mod:`shh_env.application.ports` so the composition root and
the test-suite can swap one for the other.
"""

from __future__ import annotations

from shh_env.adapters.enumeration.default import Platform, PlatformEnumerator
from shh_env.adapters.enumeration.runner import SubprocessRunner
from shh_env.adapters.store.keyring_store import KeyringSecretStore
from shh_env.application import ports
from tests.support import InMemorySecretStore, MemoryKeyring, ScriptedRunner, StoreEnumerator


def test_keyring_store_contract() -> None:
    assert isinstance(KeyringSecretStore(MemoryKeyring()), ports.SecretStore)


def test_platform_enumerator_contract() -> None:
    for platform in Platform:
        assert isinstance(PlatformEnumerator(platform, runner=ScriptedRunner()), ports.Enumerator)


def test_subprocess_runner_contract() -> None:
    assert isinstance(SubprocessRunner(), ports.CommandRunner)


def test_fakes_match_the_ports() -> None:
    store = InMemorySecretStore()
    assert isinstance(store, ports.SecretStore)
    assert isinstance(StoreEnumerator(store), ports.Enumerator)
    assert isinstance(ScriptedRunner(), ports.CommandRunner)
