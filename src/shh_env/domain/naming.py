"""Identifier grammar and namespace codec.

Purpose
-------
Define what counts as a valid service, environment, and key, and translate
between ``(service, environment)`` pairs and the canonical namespace strings
used to address the credential store.

Contents
--------
* :data:`DEFAULT_NAMESPACE` / :data:`SEPARATOR` – the root sentinel and the
  layer separator.
* :func:`validate_service` / :func:`validate_environment` /
  :func:`validate_key` – pure validators raising :class:`ValidationError`.
* :func:`build_namespace` / :func:`parse_namespace` – the namespace codec.
* :data:`NAMESPACE_PATTERN` / :data:`KEY_PATTERN` – compiled grammars reused by
  the entry filter.

System Role
-----------
Leaf module with no I/O. Everything that names a store location goes through
:func:`build_namespace` so identifiers are validated exactly once per request.
"""

from __future__ import annotations

import re
from typing import Final

from .errors import ConfigError, ValidationError

DEFAULT_NAMESPACE: Final[str] = "_"
SEPARATOR: Final[str] = "::"

SERVICE_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9._-]+")
ENVIRONMENT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_-]+")
KEY_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Z][A-Z0-9_]*")
NAMESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"(_|[A-Za-z0-9._-]+(::[A-Za-z0-9_-]+)?)")

_SERVICE_ALLOWED: Final[str] = "a-z, A-Z, 0-9, -, _, . (no colons)"
_ENVIRONMENT_ALLOWED: Final[str] = "a-z, A-Z, 0-9, -, _"
_KEY_ALLOWED: Final[str] = "must start with uppercase letter, then A-Z, 0-9, _"


def validate_service(service: str) -> None:
    """Raise :class:`ValidationError` unless *service* is ``_`` or matches the grammar.

    Examples
    --------
    >>> validate_service("my.app")
    >>> validate_service("_")
    >>> validate_service("my:app")
    Traceback (most recent call last):
    ...
    shh_env.domain.errors.ValidationError: Invalid service name: "my:app". Allowed: a-z, A-Z, 0-9, -, _, . (no colons)
    """

    if service == DEFAULT_NAMESPACE:
        return
    if not SERVICE_PATTERN.fullmatch(service):
        raise ValidationError(service, "service", _SERVICE_ALLOWED)


def validate_environment(environment: str) -> None:
    """Raise :class:`ValidationError` unless *environment* matches the grammar."""

    if not ENVIRONMENT_PATTERN.fullmatch(environment):
        raise ValidationError(environment, "env", _ENVIRONMENT_ALLOWED)


def validate_key(key: str) -> None:
    """Raise :class:`ValidationError` unless *key* looks like ``API_KEY``.

    Examples
    --------
    >>> validate_key("API_KEY")
    >>> validate_key("_KEY")
    Traceback (most recent call last):
    ...
    shh_env.domain.errors.ValidationError: Invalid key name: "_KEY". Allowed: must start with uppercase letter, then A-Z, 0-9, _
    """

    if not KEY_PATTERN.fullmatch(key):
        raise ValidationError(key, "key", _KEY_ALLOWED)


def build_namespace(service: str | None = None, environment: str | None = None) -> str:
    """Return the canonical namespace for *service* and *environment*.

    Why
    ----
    The store is addressed by a single string; building it in one place keeps
    validation and the ``service::environment`` layout consistent.

    What
    ----
    Empty strings are treated like ``None``. An environment without a service
    raises :class:`ConfigError`; identifiers failing their grammar raise
    :class:`ValidationError`.

    Examples
    --------
    >>> build_namespace()
    '_'
    >>> build_namespace("a")
    'a'
    >>> build_namespace("a", "b")
    'a::b'
    >>> build_namespace(None, "b")
    Traceback (most recent call last):
    ...
    shh_env.domain.errors.ConfigError: environment requires service
    """

    if environment:
        if not service:
            raise ConfigError("environment requires service")
        if service == DEFAULT_NAMESPACE:
            raise ConfigError(f"the default namespace {DEFAULT_NAMESPACE!r} cannot carry an environment")
        validate_service(service)
        validate_environment(environment)
        return f"{service}{SEPARATOR}{environment}"

    resolved = service or DEFAULT_NAMESPACE
    validate_service(resolved)
    return resolved


def parse_namespace(namespace: str) -> tuple[str, str | None]:
    """Split *namespace* into ``(service, environment)``.

    Only an exact two-part split with both parts non-empty is decomposed. Any
    other shape, including more than one separator, is returned whole as the
    service.

    Examples
    --------
    >>> parse_namespace("my-app::dev")
    ('my-app', 'dev')
    >>> parse_namespace("_")
    ('_', None)
    >>> parse_namespace("a::b::c")
    ('a::b::c', None)
    """

    parts = namespace.split(SEPARATOR)
    if len(parts) == 2 and parts[0] and parts[1]:
        return parts[0], parts[1]
    return namespace, None
