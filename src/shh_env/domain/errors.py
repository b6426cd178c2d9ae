"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by adapters, the composition root, and the
CLI. The hierarchy lives in the domain layer so adapters may depend on it
without the domain depending on them.

Contents
--------
* :class:`ShhEnvError` – umbrella base class for every error the package raises.
* :class:`ValidationError` – malformed service, environment, or key identifier.
* :class:`ConfigError` – invalid combination of otherwise valid inputs.
* :class:`StoreError` – the credential store rejected or failed a call.
* :class:`EnumerationUnavailable` – the native listing command is missing or
  failed.
* :class:`SpawnError` – the child process could not be started.

System Role
-----------
Callers catch :class:`ShhEnvError` to handle all package failures uniformly.
:class:`EnumerationUnavailable` never escapes the enumeration adapters; it is
raised by the command runner and degraded to an empty entry list.
"""

from __future__ import annotations


class ShhEnvError(Exception):
    """Base type for all exceptions emitted by ``shh_env``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class ValidationError(ShhEnvError):
    """Raised when an identifier violates its grammar.

    Why
    ----
    Invalid identifiers must be reported verbatim, never silently corrected,
    so the error keeps the offending value, its kind, and what is allowed.

    Examples
    --------
    >>> err = ValidationError("api_key", "key", "A-Z, 0-9, _")
    >>> str(err)
    'Invalid key name: "api_key". Allowed: A-Z, 0-9, _'
    >>> err.kind, err.value
    ('key', 'api_key')
    """

    def __init__(self, value: str, kind: str, allowed: str) -> None:
        self.value = value
        self.kind = kind
        self.allowed = allowed
        super().__init__(f'Invalid {kind} name: "{value}". Allowed: {allowed}')


class ConfigError(ShhEnvError):
    """Signals an invalid combination of inputs or settings.

    Typical Sources
    ---------------
    An environment supplied without a service, an unsupported host platform,
    or an unparsable ``SHH_ENV_*`` setting.
    """


class StoreError(ShhEnvError):
    """Raised when the underlying credential store call fails.

    Store failures are propagated immediately; nothing in the package retries.
    """


class EnumerationUnavailable(ShhEnvError):
    """The platform listing command is missing, timed out, or failed.

    Not an error for callers: enumeration adapters catch it and return an
    empty entry list.
    """


class SpawnError(ShhEnvError):
    """Raised when the child process cannot be started."""
