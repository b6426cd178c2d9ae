"""Platform selection for credential-store enumeration.

Purpose
-------
Implement the :class:`shh_env.application.ports.Enumerator` protocol once per
supported platform. The platform is a closed :class:`Platform` enum resolved a
single time, and each member knows its listing command and parser.

Contents
--------
* :class:`Platform` – ``darwin``, ``linux``, ``win32`` with alias detection.
* :class:`PlatformEnumerator` – runs the listing command and parses its output.
* :func:`enumerator_for` – builds the enumerator for a platform identifier.

System Role
-----------
Feeds raw entries into :func:`shh_env.core.load_groups`. Enumeration is best
effort: when the listing command cannot run, the enumerator logs the reason
and returns an empty list.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Callable, Final

from ...application.ports import CommandRunner
from ...domain.entries import SecretEntry
from ...domain.errors import ConfigError, EnumerationUnavailable
from ...observability import log_debug
from ..store.keyring_store import KEYRING_APPLICATION
from .parsers import parse_cmdkey, parse_secret_tool, parse_security_dump
from .runner import DEFAULT_TIMEOUT, SubprocessRunner

_ALIASES: Final[dict[str, str]] = {
    "darwin": "darwin",
    "mac": "darwin",
    "macos": "darwin",
    "osx": "darwin",
    "linux": "linux",
    "posix": "linux",
    "win32": "win32",
    "win": "win32",
    "windows": "win32",
    "cygwin": "win32",
}


class Platform(Enum):
    """Host platforms whose credential store can be enumerated."""

    DARWIN = "darwin"
    LINUX = "linux"
    WIN32 = "win32"

    @classmethod
    def detect(cls, identifier: str | None = None) -> Platform:
        """Return the member for *identifier* (defaults to :data:`sys.platform`).

        Examples
        --------
        >>> Platform.detect("linux2")
        <Platform.LINUX: 'linux'>
        >>> Platform.detect("macos")
        <Platform.DARWIN: 'darwin'>
        >>> Platform.detect("sunos5")
        Traceback (most recent call last):
        ...
        shh_env.domain.errors.ConfigError: Unsupported platform: sunos5
        """

        raw = (identifier or sys.platform).strip().lower()
        alias = raw if raw in _ALIASES else raw.rstrip("0123456789")
        try:
            return cls(_ALIASES[alias])
        except KeyError as exc:
            raise ConfigError(f"Unsupported platform: {raw}") from exc

    @property
    def command(self) -> tuple[str, ...]:
        """Listing command executed on this platform."""

        return _COMMANDS[self]

    @property
    def parser(self) -> Callable[[str], list[SecretEntry]]:
        """Parser converting the listing command's stdout into entries."""

        return _PARSERS[self]


_COMMANDS: Final[dict[Platform, tuple[str, ...]]] = {
    Platform.DARWIN: ("security", "dump-keychain"),
    Platform.LINUX: ("secret-tool", "search", "--all", "application", KEYRING_APPLICATION),
    Platform.WIN32: ("cmdkey", "/list"),
}

_PARSERS: Final[dict[Platform, Callable[[str], list[SecretEntry]]]] = {
    Platform.DARWIN: parse_security_dump,
    Platform.LINUX: parse_secret_tool,
    Platform.WIN32: parse_cmdkey,
}


class PlatformEnumerator:
    """Enumerate stored secrets by scraping the platform's listing command."""

    def __init__(self, platform: Platform, *, runner: CommandRunner | None = None) -> None:
        self.platform = platform
        self._runner = runner or SubprocessRunner()

    def enumerate(self) -> list[SecretEntry]:
        """Return every entry the listing command reports, or ``[]`` if it cannot run.

        Examples
        --------
        >>> class _Runner:
        ...     def run(self, argv):
        ...         return "[/item/1]\\nattribute.service = _\\nattribute.username = EDITOR\\n"
        >>> PlatformEnumerator(Platform.LINUX, runner=_Runner()).enumerate()
        [SecretEntry(namespace='_', key='EDITOR')]
        """

        try:
            raw = self._runner.run(self.platform.command)
        except EnumerationUnavailable as exc:
            log_debug("enumeration_unavailable", namespace=None, platform=self.platform.value, reason=str(exc))
            return []
        entries = self.platform.parser(raw)
        log_debug("enumeration_parsed", namespace=None, platform=self.platform.value, entries=len(entries))
        return entries


def enumerator_for(
    platform: str | None = None,
    *,
    runner: CommandRunner | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> PlatformEnumerator:
    """Return the enumerator for *platform* (auto-detected when ``None``)."""

    return PlatformEnumerator(Platform.detect(platform), runner=runner or SubprocessRunner(timeout=timeout))
