"""Composition root for ``shh_env``.

Purpose
-------
Provide the entry points that orchestrate validation, enumeration, filtering,
layer resolution, and merging against a secret store. Adapters are passed in
explicitly so every operation can run against in-memory fakes.

Contents
--------
* :func:`set_secret` / :func:`get_secret` / :func:`delete_secret` – single-item
  operations addressed by key, service, and environment.
* :func:`load_groups` – enumerate, filter foreign credentials, group by
  namespace.
* :func:`resolve_secrets` – flat merge producing the environment overlay.
* :func:`list_view` – tree lines for every namespace or for the active layers.
* :func:`default_store` / :func:`default_enumerator` – host adapters.

System Role
-----------
The CLI calls only this module. Nothing is cached between calls; every
request enumerates the store again.
"""

from __future__ import annotations

from .adapters.enumeration.default import PlatformEnumerator, enumerator_for
from .adapters.store.keyring_store import KeyringSecretStore
from .application.layers import group_by_namespace, resolve_layers
from .application.merge import annotate_layers, merge_secrets
from .application.ports import Enumerator, SecretStore
from .domain.entries import filter_valid
from .domain.errors import ConfigError, ShhEnvError, StoreError, ValidationError
from .domain.naming import build_namespace, parse_namespace, validate_key
from .observability import bind_trace_id, log_debug, log_info, make_event
from .settings import Settings, load_settings
from .tree import render_layers, render_namespaces

NO_SECRETS_MESSAGE = "No secrets found"


def default_store() -> KeyringSecretStore:
    """Return the keyring-backed store for the host."""

    return KeyringSecretStore()


def default_enumerator(settings: Settings | None = None) -> PlatformEnumerator:
    """Return the enumerator for the host platform honouring *settings*."""

    resolved = settings or load_settings()
    return enumerator_for(resolved.platform, timeout=resolved.enumeration_timeout)


def set_secret(
    key: str,
    value: str,
    service: str | None = None,
    environment: str | None = None,
    *,
    store: SecretStore,
) -> str:
    """Store *value* under *key* in the namespace for *service*/*environment*.

    Returns the namespace written to.

    Examples
    --------
    >>> class _Store:
    ...     def set(self, namespace, name, value):
    ...         print(namespace, name, value)
    >>> set_secret("API_KEY", "k1", "app", "dev", store=_Store())
    app::dev API_KEY k1
    'app::dev'
    """

    validate_key(key)
    namespace = build_namespace(service, environment)
    store.set(namespace, key, value)
    log_info("secret_set", **make_event(namespace, {"key": key}))
    return namespace


def get_secret(
    key: str,
    service: str | None = None,
    environment: str | None = None,
    *,
    store: SecretStore,
) -> str | None:
    """Return the value stored under *key*, or ``None`` when absent."""

    validate_key(key)
    return store.get(build_namespace(service, environment), key)


def delete_secret(
    key: str,
    service: str | None = None,
    environment: str | None = None,
    *,
    store: SecretStore,
) -> bool:
    """Delete *key* and report whether it existed."""

    validate_key(key)
    namespace = build_namespace(service, environment)
    existed = store.delete(namespace, key)
    log_info("secret_deleted", **make_event(namespace, {"key": key, "existed": existed}))
    return existed


def load_groups(enumerator: Enumerator) -> dict[str, list[str]]:
    """Enumerate the store and group this tool's entries by namespace.

    Why
    ----
    The OS store also holds Wi-Fi passwords, browser tokens and other foreign
    items; only entries matching the identifier grammar take part in merging.
    """

    bind_trace_id(None)
    raw = enumerator.enumerate()
    entries = filter_valid(raw)
    groups = group_by_namespace(entries)
    log_debug("entries_filtered", namespace=None, enumerated=len(raw), kept=len(entries), namespaces=len(groups))
    return groups


def resolve_secrets(
    service: str | None = None,
    environment: str | None = None,
    *,
    store: SecretStore,
    enumerator: Enumerator,
) -> dict[str, str]:
    """Return the merged ``key → value`` overlay for *service*/*environment*.

    Why
    ----
    ``shh-env run`` injects exactly one value per key, taken from the highest
    precedence layer in ``_ → service → service::environment``.

    What
    ----
    Validates the request before touching the store, enumerates the store
    once, then fetches each key of each active layer sequentially. Store
    failures propagate unchanged.

    Examples
    --------
    >>> from shh_env.domain.entries import SecretEntry
    >>> data = {("_", "EDITOR"): "vim", ("app", "API_KEY"): "k1", ("app::dev", "API_KEY"): "k2"}
    >>> class _Store:
    ...     def get(self, namespace, name):
    ...         return data.get((namespace, name))
    >>> class _Enumerator:
    ...     def enumerate(self):
    ...         return [SecretEntry(ns, key) for ns, key in data]
    >>> resolve_secrets("app", "dev", store=_Store(), enumerator=_Enumerator())
    {'EDITOR': 'vim', 'API_KEY': 'k2'}
    """

    layers = resolve_layers(service, environment)
    groups = load_groups(enumerator)
    merged = merge_secrets(groups, layers, store)
    log_info("secrets_resolved", **make_event(layers[-1], {"layers": len(layers), "keys": len(merged)}))
    return merged


def list_view(
    service: str | None = None,
    environment: str | None = None,
    *,
    enumerator: Enumerator,
) -> list[str]:
    """Return the tree lines printed by ``shh-env list``.

    Without *service* every namespace is listed. With *service* only the
    active layers are shown and overridden keys are struck through. An empty
    store yields a single :data:`NO_SECRETS_MESSAGE` line.
    """

    layers = resolve_layers(service, environment)
    groups = load_groups(enumerator)
    if not groups:
        return [NO_SECRETS_MESSAGE]
    if not service:
        return render_namespaces(groups)
    return render_layers(annotate_layers(groups, layers), layers, groups)


__all__ = [
    "ConfigError",
    "NO_SECRETS_MESSAGE",
    "ShhEnvError",
    "StoreError",
    "ValidationError",
    "build_namespace",
    "default_enumerator",
    "default_store",
    "delete_secret",
    "get_secret",
    "list_view",
    "load_groups",
    "parse_namespace",
    "resolve_secrets",
    "set_secret",
]
