"""Public package surface for ``shh_env``.

Secrets live in the OS credential store under namespaces ``_``, ``service`` and
``service::environment``. The helpers re-exported here validate identifiers,
resolve the layered view, and expose the structured logging hooks so
``import shh_env`` and ``python -m shh_env`` share one implementation.
"""

from __future__ import annotations

from .application.layers import group_by_namespace, resolve_layers, sorted_namespaces
from .application.merge import KeyState, annotate_layers, merge_secrets
from .core import (
    NO_SECRETS_MESSAGE,
    default_enumerator,
    default_store,
    delete_secret,
    get_secret,
    list_view,
    load_groups,
    resolve_secrets,
    set_secret,
)
from .domain.entries import SecretEntry, filter_valid
from .domain.errors import (
    ConfigError,
    EnumerationUnavailable,
    ShhEnvError,
    SpawnError,
    StoreError,
    ValidationError,
)
from .domain.naming import (
    DEFAULT_NAMESPACE,
    build_namespace,
    parse_namespace,
    validate_environment,
    validate_key,
    validate_service,
)
from .observability import bind_trace_id, get_logger

__all__ = [
    "ConfigError",
    "DEFAULT_NAMESPACE",
    "EnumerationUnavailable",
    "KeyState",
    "NO_SECRETS_MESSAGE",
    "SecretEntry",
    "ShhEnvError",
    "SpawnError",
    "StoreError",
    "ValidationError",
    "annotate_layers",
    "bind_trace_id",
    "build_namespace",
    "default_enumerator",
    "default_store",
    "delete_secret",
    "filter_valid",
    "get_logger",
    "get_secret",
    "group_by_namespace",
    "list_view",
    "load_groups",
    "merge_secrets",
    "parse_namespace",
    "resolve_layers",
    "resolve_secrets",
    "set_secret",
    "sorted_namespaces",
    "validate_environment",
    "validate_key",
    "validate_service",
]
