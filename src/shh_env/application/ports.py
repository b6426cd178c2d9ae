"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts adapters satisfy so the composition root can
orchestrate behaviour without depending on concrete implementations.

Contents
--------
* :class:`SecretStore` – addressed ``(namespace, name)`` key/value store.
* :class:`Enumerator` – lists the ``(namespace, key)`` pairs held by the store.
* :class:`CommandRunner` – executes a platform listing command and returns its
  standard output.

System Role
-----------
These protocols enforce dependency inversion. The keyring adapter implements
:class:`SecretStore`, the platform parsers implement :class:`Enumerator`, and
tests substitute in-memory fakes for both.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..domain.entries import SecretEntry


@runtime_checkable
class SecretStore(Protocol):
    """Read and write single secrets addressed by namespace and name.

    Why
    ----
    Keep the merge engine agnostic of the OS credential API. Every method is a
    single call against the backing store; failures surface as
    :class:`~shh_env.domain.errors.StoreError`.
    """

    def set(self, namespace: str, name: str, value: str) -> None:
        """Store *value* under ``(namespace, name)``, replacing any previous value."""

    def get(self, namespace: str, name: str) -> str | None:
        """Return the stored value or ``None`` when nothing is stored."""

    def delete(self, namespace: str, name: str) -> bool:
        """Remove the item and report whether it existed."""


@runtime_checkable
class Enumerator(Protocol):
    """List the entries currently held by the credential store.

    Why
    ----
    The store API offers no listing call, so enumeration scrapes platform tools.
    Implementations are best-effort and return an empty list instead of raising
    when the platform tool is unavailable.
    """

    def enumerate(self) -> list[SecretEntry]:
        """Return every ``(namespace, key)`` pair the platform tool reports."""


@runtime_checkable
class CommandRunner(Protocol):
    """Run an external command and return what it printed on stdout."""

    def run(self, argv: Sequence[str]) -> str:
        """Execute *argv* or raise :class:`~shh_env.domain.errors.EnumerationUnavailable`."""
