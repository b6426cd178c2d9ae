"""Subprocess command runner used by the enumeration adapters.

Purpose
-------
Implement :class:`shh_env.application.ports.CommandRunner` with
:func:`subprocess.run`. Every way the listing command can fail is reported as
:class:`~shh_env.domain.errors.EnumerationUnavailable` so adapters handle one
exception type.
"""

from __future__ import annotations

import subprocess
from typing import Sequence

from ...domain.errors import EnumerationUnavailable
from ...observability import log_debug

DEFAULT_TIMEOUT: float = 10.0


class SubprocessRunner:
    """Run listing commands with captured output and a timeout."""

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def run(self, argv: Sequence[str]) -> str:
        """Return the stdout of *argv*.

        Raises
        ------
        EnumerationUnavailable
            When the executable is missing, cannot be started, exceeds the
            timeout, or exits with a non-zero status.
        """

        command = list(argv)
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise EnumerationUnavailable(f"{command[0]} timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise EnumerationUnavailable(f"{command[0]} unavailable: {exc}") from exc

        if completed.returncode != 0:
            log_debug("enumeration_command_failed", command=command[0], returncode=completed.returncode)
            raise EnumerationUnavailable(f"{command[0]} exited with status {completed.returncode}")
        return completed.stdout
