"""Parsers turning platform credential-store dumps into secret entries.

Purpose
-------
Each supported platform exposes its credential store through an undocumented,
line-oriented text format. The parsers here share one narrow contract,
``raw text -> list[SecretEntry]``, so formats can change without touching the
filter, merge, or render layers.

Contents
--------
* :func:`parse_security_dump` – macOS ``security dump-keychain``.
* :func:`parse_secret_tool` – Linux ``secret-tool search --all``.
* :func:`parse_cmdkey` – Windows ``cmdkey /list``.
* :class:`_Record` – candidate namespace/key accumulated inside one record.

Parsing Discipline
------------------
Every parser accumulates a candidate namespace and key while inside a record,
emits an entry at the next record boundary when both are present, and flushes
once more after the last line. Lines that match nothing are skipped; a record
missing either field is dropped silently.
"""

from __future__ import annotations

import re
from typing import Final

from ...domain.entries import SecretEntry

_GENERIC_PASSWORD_CLASS: Final[str] = '"genp"'
_MACOS_SERVICE: Final[re.Pattern[str]] = re.compile(r'^"svce"<blob>="([^"]+)"')
_MACOS_ACCOUNT: Final[re.Pattern[str]] = re.compile(r'^"acct"<blob>="([^"]+)"')

_LINUX_SERVICE: Final[re.Pattern[str]] = re.compile(r"^attribute\.service = (.+)$")
_LINUX_ACCOUNT: Final[re.Pattern[str]] = re.compile(r"^attribute\.(?:username|account) = (.+)$")

_WINDOWS_TARGET: Final[re.Pattern[str]] = re.compile(r"^Target:\s*(?:LegacyGeneric:target=)?(.+)$", re.IGNORECASE)
_WINDOWS_USER: Final[re.Pattern[str]] = re.compile(r"^User:\s*(.+)$", re.IGNORECASE)
_WINDOWS_SLASH_TARGET: Final[re.Pattern[str]] = re.compile(r"^([^/]+)/(.+)$")
_WINDOWS_COMPOUND_TARGET: Final[re.Pattern[str]] = re.compile(r"^([^@]+)@(.+)$")


class _Record:
    """Candidate fields collected while scanning a single record."""

    __slots__ = ("namespace", "key", "eligible")

    def __init__(self, *, eligible: bool = True) -> None:
        self.namespace = ""
        self.key = ""
        self.eligible = eligible

    def flush(self, into: list[SecretEntry]) -> None:
        """Append the record to *into* when it is complete and eligible."""

        if self.eligible and self.namespace and self.key:
            into.append(SecretEntry(self.namespace, self.key))


def parse_security_dump(text: str) -> list[SecretEntry]:
    """Parse ``security dump-keychain`` output.

    Records start at ``class:`` lines; only generic passwords (``"genp"``)
    produce entries. ``"svce"`` holds the namespace and ``"acct"`` the key.
    Hex-encoded blobs do not match and are skipped.

    Examples
    --------
    >>> dump = '''keychain: "/Users/me/Library/Keychains/login.keychain-db"
    ... class: "genp"
    ... attributes:
    ...     "acct"<blob>="API_KEY"
    ...     "svce"<blob>="my-app::dev"
    ... class: "inet"
    ...     "acct"<blob>="someone"
    ...     "svce"<blob>="example.com"
    ... '''
    >>> parse_security_dump(dump)
    [SecretEntry(namespace='my-app::dev', key='API_KEY')]
    """

    entries: list[SecretEntry] = []
    record = _Record(eligible=False)
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("class:"):
            record.flush(entries)
            record = _Record(eligible=stripped.partition(":")[2].strip() == _GENERIC_PASSWORD_CLASS)
        elif match := _MACOS_SERVICE.match(stripped):
            record.namespace = match.group(1)
        elif match := _MACOS_ACCOUNT.match(stripped):
            record.key = match.group(1)
    record.flush(entries)
    return entries


def parse_secret_tool(text: str) -> list[SecretEntry]:
    """Parse ``secret-tool search --all`` output.

    Records start at ``[/org/freedesktop/secrets/...]`` headers. The namespace
    is ``attribute.service``; the key is ``attribute.username`` (written by
    ``keyring``) or ``attribute.account``.

    Examples
    --------
    >>> dump = '''[/org/freedesktop/secrets/collection/login/1]
    ... label = Password for 'EDITOR' on '_'
    ... secret = vim
    ... attribute.service = _
    ... attribute.username = EDITOR
    ... '''
    >>> parse_secret_tool(dump)
    [SecretEntry(namespace='_', key='EDITOR')]
    """

    entries: list[SecretEntry] = []
    record = _Record()
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("["):
            record.flush(entries)
            record = _Record()
        elif match := _LINUX_SERVICE.match(stripped):
            record.namespace = match.group(1)
        elif match := _LINUX_ACCOUNT.match(stripped):
            record.key = match.group(1)
    record.flush(entries)
    return entries


def parse_cmdkey(text: str) -> list[SecretEntry]:
    """Parse ``cmdkey /list`` output.

    Records start at ``Target:`` lines. A ``service/account`` target or a
    compound ``account@service`` target carries both fields; a plain target
    names the namespace and the following ``User:`` line supplies the key.

    Examples
    --------
    >>> dump = '''Currently stored credentials:
    ...
    ...     Target: LegacyGeneric:target=my-app
    ...     Type: Generic
    ...     User: API_KEY
    ...
    ...     Target: LegacyGeneric:target=DB_URL@my-app::dev
    ...     Type: Generic
    ...     User: DB_URL
    ... '''
    >>> parse_cmdkey(dump)
    [SecretEntry(namespace='my-app', key='API_KEY'), SecretEntry(namespace='my-app::dev', key='DB_URL')]
    """

    entries: list[SecretEntry] = []
    record = _Record()
    for line in text.splitlines():
        stripped = line.strip()
        if match := _WINDOWS_TARGET.match(stripped):
            record.flush(entries)
            record = _Record()
            record.namespace, record.key = _split_target(match.group(1).strip())
        elif match := _WINDOWS_USER.match(stripped):
            if not record.key:
                record.key = match.group(1).strip()
    record.flush(entries)
    return entries


def _split_target(target: str) -> tuple[str, str]:
    """Return ``(namespace, key)`` from a cmdkey target; the key may be empty.

    Examples
    --------
    >>> _split_target("my-app/API_KEY")
    ('my-app', 'API_KEY')
    >>> _split_target("API_KEY@my-app")
    ('my-app', 'API_KEY')
    >>> _split_target("my-app")
    ('my-app', '')
    """

    if match := _WINDOWS_SLASH_TARGET.match(target):
        return match.group(1), match.group(2)
    if match := _WINDOWS_COMPOUND_TARGET.match(target):
        return match.group(2), match.group(1)
    return target, ""
