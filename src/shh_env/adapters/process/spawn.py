"""Child process execution with an injected environment overlay.

Purpose
-------
Run a command with the resolved secrets merged over the inherited environment
and relay termination signals to it while it runs.

Contents
--------
* :data:`RELAYED_SIGNALS` – signals forwarded to the child when available.
* :func:`spawn_with_env` – run the child and return its exit status.
* :func:`relay_signals` – context manager installing the relay handlers for
  the child's lifetime.
"""

from __future__ import annotations

import os
import signal
import subprocess
from contextlib import contextmanager
from typing import Any, Final, Iterator, Mapping, Sequence

from ...domain.errors import SpawnError
from ...observability import log_debug, log_error

RELAYED_SIGNALS: Final[tuple[str, ...]] = ("SIGINT", "SIGTERM", "SIGHUP")


def spawn_with_env(command: str, args: Sequence[str], overlay: Mapping[str, str]) -> int:
    """Run *command* with *overlay* applied over :data:`os.environ`.

    Why
    ----
    Secrets reach the child only through its environment; the parent's own
    environment stays untouched.

    What
    ----
    Inherits stdio, relays :data:`RELAYED_SIGNALS` to the child until it exits,
    then restores the previous handlers. A child killed by signal ``n`` yields
    ``128 + n`` like a POSIX shell.

    Raises
    ------
    SpawnError
        When the executable cannot be found or started.

    Examples
    --------
    >>> import sys
    >>> spawn_with_env(sys.executable, ["-c", "import os, sys; sys.exit(os.environ['DEMO'] != 'x')"], {"DEMO": "x"})
    0
    """

    env = {**os.environ, **overlay}
    try:
        child = subprocess.Popen([command, *args], env=env)
    except OSError as exc:
        log_error("child_start_failed", namespace=None, command=command, reason=str(exc))
        raise SpawnError(f"Failed to start {command}: {exc}") from exc

    log_debug("child_started", namespace=None, command=command, pid=child.pid, injected=len(overlay))
    with relay_signals(child):
        returncode = child.wait()
    log_debug("child_exited", namespace=None, command=command, returncode=returncode)
    return 128 - returncode if returncode < 0 else returncode


@contextmanager
def relay_signals(child: subprocess.Popen[Any]) -> Iterator[None]:
    """Forward :data:`RELAYED_SIGNALS` to *child* until the block exits.

    Handlers are registered on entry and the previous ones restored on exit, so
    nothing outlives the child. Signals the host does not define are skipped.
    """

    def _forward(signum: int, _frame: object) -> None:
        if child.poll() is None:
            child.send_signal(signum)

    previous: dict[int, Any] = {}
    for name in RELAYED_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        try:
            previous[signum] = signal.signal(signum, _forward)
        except ValueError:
            # signal handlers can only be installed from the main thread
            continue
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
