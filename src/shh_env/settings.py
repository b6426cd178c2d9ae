"""Runtime settings sourced from ``SHH_ENV_*`` environment variables.

Purpose
-------
Collect the few knobs the tool exposes (platform override, enumeration
timeout, diagnostic log level) into an immutable :class:`Settings` value.

Key behaviours
--------------
* Only variables carrying :data:`ENV_PREFIX` are considered.
* Values are stripped; empty values count as unset.
* Malformed values raise :class:`~shh_env.domain.errors.ConfigError` naming
  the offending variable.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Final, Mapping

from .adapters.enumeration.runner import DEFAULT_TIMEOUT
from .domain.errors import ConfigError
from .observability import log_debug


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('shh-env')
    'SHH_ENV_'
    """

    return slug.replace("-", "_").upper() + "_"


ENV_PREFIX: Final[str] = default_env_prefix("shh-env")


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved settings for one CLI invocation.

    Attributes
    ----------
    platform:
        Platform identifier overriding :data:`sys.platform` detection.
    enumeration_timeout:
        Seconds the listing command may run before enumeration gives up.
    log_level:
        Level name for the stderr diagnostics handler; ``None`` keeps the
        package silent.
    """

    platform: str | None = None
    enumeration_timeout: float = DEFAULT_TIMEOUT
    log_level: str | None = None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read :class:`Settings` from *environ* (defaults to :data:`os.environ`).

    Examples
    --------
    >>> load_settings({"SHH_ENV_PLATFORM": "linux", "SHH_ENV_ENUMERATION_TIMEOUT": "2.5"})
    Settings(platform='linux', enumeration_timeout=2.5, log_level=None)
    >>> load_settings({"SHH_ENV_ENUMERATION_TIMEOUT": "soon"})
    Traceback (most recent call last):
    ...
    shh_env.domain.errors.ConfigError: SHH_ENV_ENUMERATION_TIMEOUT must be a finite positive number, got 'soon'
    """

    source = os.environ if environ is None else environ
    values = {
        key[len(ENV_PREFIX) :].lower(): value.strip()
        for key, value in source.items()
        if key.startswith(ENV_PREFIX) and value.strip()
    }
    settings = Settings(
        platform=values.get("platform"),
        enumeration_timeout=_coerce_timeout(values.get("enumeration_timeout")),
        log_level=_coerce_level(values.get("log_level")),
    )
    log_debug("settings_loaded", namespace=None, keys=sorted(values))
    return settings


def _coerce_timeout(value: str | None) -> float:
    """Parse a finite positive float timeout, falling back to :data:`DEFAULT_TIMEOUT`."""

    if value is None:
        return DEFAULT_TIMEOUT
    message = f"{ENV_PREFIX}ENUMERATION_TIMEOUT must be a finite positive number, got {value!r}"
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigError(message) from exc
    if not (math.isfinite(timeout) and timeout > 0):
        raise ConfigError(message)
    return timeout


def _coerce_level(value: str | None) -> str | None:
    """Return an upper-case logging level name or raise for unknown names.

    Examples
    --------
    >>> _coerce_level("debug")
    'DEBUG'
    """

    if value is None:
        return None
    level = value.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL must be a logging level name, got {value!r}")
    return level
