"""Credential store adapter backed by :mod:`keyring`.

Purpose
-------
Implement :class:`shh_env.application.ports.SecretStore` on top of the OS
credential store (macOS Keychain, Secret Service, Windows Credential Locker)
through the ``keyring`` library. The namespace becomes keyring's *service* and
the key its *username*.

System Role
-----------
Single-item operations only. Listing is not part of the keyring API and lives
in :mod:`shh_env.adapters.enumeration`.
"""

from __future__ import annotations

from typing import Final

import keyring
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError

from ...domain.errors import StoreError
from ...observability import log_debug, make_event

KEYRING_APPLICATION: Final[str] = "Python keyring library"
"""Application attribute the Secret Service backends attach to every item."""


class KeyringSecretStore:
    """Read and write secrets through the active keyring backend.

    Parameters
    ----------
    backend:
        Explicit :class:`keyring.backend.KeyringBackend`. Defaults to the
        backend ``keyring`` selects for the host (honouring
        ``PYTHON_KEYRING_BACKEND``).
    """

    def __init__(self, backend: KeyringBackend | None = None) -> None:
        self._backend = backend

    @property
    def backend(self) -> KeyringBackend:
        return self._backend or keyring.get_keyring()

    def set(self, namespace: str, name: str, value: str) -> None:
        try:
            self.backend.set_password(namespace, name, value)
        except Exception as exc:  # noqa: BLE001 - backends raise native errors (pywintypes.error, dbus, ...)
            raise StoreError(f"Failed to store {name} in {namespace}: {exc}") from exc
        log_debug("secret_stored", **make_event(namespace, {"key": name}))

    def get(self, namespace: str, name: str) -> str | None:
        try:
            return self.backend.get_password(namespace, name)
        except Exception as exc:  # noqa: BLE001 - backends raise native errors (pywintypes.error, dbus, ...)
            raise StoreError(f"Failed to read {name} from {namespace}: {exc}") from exc

    def delete(self, namespace: str, name: str) -> bool:
        """Delete the item; a missing item yields ``False`` instead of an error."""

        try:
            self.backend.delete_password(namespace, name)
        except PasswordDeleteError:
            return False
        except Exception as exc:  # noqa: BLE001 - backends raise native errors (pywintypes.error, dbus, ...)
            raise StoreError(f"Failed to delete {name} from {namespace}: {exc}") from exc
        log_debug("secret_deleted", **make_event(namespace, {"key": name}))
        return True
