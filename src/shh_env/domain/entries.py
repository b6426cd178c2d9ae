"""Secret entry value object and the foreign-credential filter.

Purpose
-------
Carry enumerated ``(namespace, key)`` pairs through the system and separate the
entries this tool wrote from unrelated credentials sharing the same OS store.

Contents
--------
* :class:`SecretEntry` – immutable, hashable ``(namespace, key)`` pair.
* :func:`filter_valid` – keep only entries matching the namespace and key
  grammars.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .naming import KEY_PATTERN, NAMESPACE_PATTERN


@dataclass(frozen=True, slots=True)
class SecretEntry:
    """One item in the credential store, identified by namespace and key.

    Values are never part of an entry; they are fetched from the store only
    when a merge needs them.
    """

    namespace: str
    key: str


def filter_valid(entries: Iterable[SecretEntry]) -> list[SecretEntry]:
    """Return the entries whose namespace and key follow this tool's grammar.

    Order is preserved and entries are returned unchanged.

    Examples
    --------
    >>> filter_valid([SecretEntry("bad svc", "KEY"), SecretEntry("my.app", "KEY")])
    [SecretEntry(namespace='my.app', key='KEY')]
    >>> filter_valid([SecretEntry("app::dev::extra", "KEY")])
    []
    """

    return [
        entry
        for entry in entries
        if NAMESPACE_PATTERN.fullmatch(entry.namespace) and KEY_PATTERN.fullmatch(entry.key)
    ]
