"""Shared fakes and fixtures data for the test-suite.

The fakes implement the application ports in memory so merge, list and run
flows can be exercised without an OS keychain or platform listing tools.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError

from shh_env.domain.entries import SecretEntry
from shh_env.domain.errors import EnumerationUnavailable, StoreError


@dataclass
class InMemorySecretStore:
    """Dictionary-backed :class:`~shh_env.application.ports.SecretStore`."""

    items: dict[tuple[str, str], str] = field(default_factory=dict)
    calls: list[tuple[str, str, str]] = field(default_factory=list)
    fail_on_get: bool = False

    def set(self, namespace: str, name: str, value: str) -> None:
        self.calls.append(("set", namespace, name))
        self.items[(namespace, name)] = value

    def get(self, namespace: str, name: str) -> str | None:
        self.calls.append(("get", namespace, name))
        if self.fail_on_get:
            raise StoreError(f"backend offline while reading {name}")
        return self.items.get((namespace, name))

    def delete(self, namespace: str, name: str) -> bool:
        self.calls.append(("delete", namespace, name))
        return self.items.pop((namespace, name), None) is not None


@dataclass
class StoreEnumerator:
    """Enumerator reporting the contents of an :class:`InMemorySecretStore`.

    ``foreign`` entries simulate unrelated credentials living in the same OS
    store (Wi-Fi passwords, browser tokens, ...).
    """

    store: InMemorySecretStore
    foreign: list[SecretEntry] = field(default_factory=list)

    def enumerate(self) -> list[SecretEntry]:
        return [SecretEntry(namespace, key) for namespace, key in self.store.items] + list(self.foreign)


@dataclass
class ScriptedRunner:
    """Command runner returning canned output or failing on demand."""

    output: str = ""
    unavailable: bool = False
    commands: list[tuple[str, ...]] = field(default_factory=list)

    def run(self, argv: Sequence[str]) -> str:
        self.commands.append(tuple(argv))
        if self.unavailable:
            raise EnumerationUnavailable(f"{argv[0]} not installed")
        return self.output


class MemoryKeyring(KeyringBackend):
    """In-process keyring backend used to exercise the keyring adapter."""

    priority = 1  # type: ignore[assignment]

    def __init__(self) -> None:
        super().__init__()
        self.passwords: dict[tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> str | None:
        return self.passwords.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.passwords[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        if self.passwords.pop((service, username), None) is None:
            raise PasswordDeleteError("Password not found")


def populated_store() -> InMemorySecretStore:
    """Return a store holding the three-layer example used across the suite."""

    return InMemorySecretStore(
        items={
            ("_", "EDITOR"): "vim",
            ("app", "API_KEY"): "k1",
            ("app::dev", "API_KEY"): "k2",
        }
    )


MACOS_DUMP = """\
keychain: "/Users/demo/Library/Keychains/login.keychain-db"
version: 512
class: "genp"
attributes:
    0x00000007 <blob>="app::dev"
    "acct"<blob>="API_KEY"
    "cdat"<timedate>=0x32303236303231303132303030305A00  "20260210120000Z\\000"
    "svce"<blob>="app::dev"
keychain: "/Users/demo/Library/Keychains/login.keychain-db"
version: 512
class: "inet"
attributes:
    "acct"<blob>="someone@example.com"
    "srvr"<blob>="example.com"
    "svce"<blob>="example.com"
keychain: "/Users/demo/Library/Keychains/login.keychain-db"
version: 512
class: "genp"
attributes:
    "acct"<blob>=0x414243
    "svce"<blob>="AirPort"
keychain: "/Users/demo/Library/Keychains/login.keychain-db"
version: 512
class: "genp"
attributes:
    "acct"<blob>="EDITOR"
    "svce"<blob>="_"
"""

LINUX_DUMP = """\
[/org/freedesktop/secrets/collection/login/12]
label = Password for 'EDITOR' on '_'
secret = vim
created = 2026-02-10 12:00:00
modified = 2026-02-10 12:00:00
schema = org.freedesktop.Secret.Generic
attribute.application = Python keyring library
attribute.service = _
attribute.username = EDITOR
[/org/freedesktop/secrets/collection/login/13]
label = incomplete item
attribute.service = orphan
[/org/freedesktop/secrets/collection/login/14]
label = Password for 'API_KEY' on 'app::dev'
secret = k2
attribute.account = API_KEY
attribute.service = app::dev
"""

WINDOWS_DUMP = """\

Currently stored credentials:

    Target: LegacyGeneric:target=app
    Type: Generic
    User: API_KEY
    Local machine persistence

    Target: LegacyGeneric:target=DB_URL@app::dev
    Type: Generic
    User: DB_URL

    Target: Domain:target=fileserver
    Type: Domain Password

    Target: LegacyGeneric:target=legacy/TOKEN
    Type: Generic
"""
