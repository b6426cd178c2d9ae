"""Grouping of enumerated entries and resolution of the active layers.

Purpose
-------
Turn a flat entry list into per-namespace key lists and compute which
namespaces participate in a ``(service, environment)`` request.

Contents
--------
* :func:`group_by_namespace` – namespace → sorted keys.
* :func:`sorted_namespaces` – display order with the root sentinel first.
* :func:`resolve_layers` – the ordered layer list ``_ → service → service::env``.

System Role
-----------
Pure functions consumed by :mod:`shh_env.application.merge` and
:mod:`shh_env.core`. Precedence rules live here and nowhere else.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ..domain.entries import SecretEntry
from ..domain.naming import DEFAULT_NAMESPACE, build_namespace


def group_by_namespace(entries: Iterable[SecretEntry]) -> dict[str, list[str]]:
    """Group *entries* by namespace with each key list sorted ascending.

    Namespaces keep the order of their first occurrence. Duplicate entries
    collapse into a single key.

    Examples
    --------
    >>> group_by_namespace([SecretEntry("_", "B"), SecretEntry("_", "A")])
    {'_': ['A', 'B']}
    """

    collected: dict[str, set[str]] = {}
    for entry in entries:
        collected.setdefault(entry.namespace, set()).add(entry.key)
    return {namespace: sorted(keys) for namespace, keys in collected.items()}


def sorted_namespaces(groups: Mapping[str, Sequence[str]]) -> list[str]:
    """Return the namespaces of *groups* with ``_`` first and the rest ascending.

    Examples
    --------
    >>> sorted_namespaces({"zeta": [], "_": [], "alpha::dev": [], "alpha": []})
    ['_', 'alpha', 'alpha::dev', 'zeta']
    """

    return sorted(groups, key=lambda namespace: (namespace != DEFAULT_NAMESPACE, namespace))


def resolve_layers(service: str | None = None, environment: str | None = None) -> list[str]:
    """Return the namespaces consulted for a request, lowest precedence first.

    Why
    ----
    Both injection and display must agree on which namespaces participate and
    in which order.

    What
    ----
    Always starts with ``_``; appends the service when given and the
    ``service::environment`` namespace when both are given. Identifiers are
    validated through :func:`build_namespace`. Naming the root sentinel as the
    service adds no second layer.

    Examples
    --------
    >>> resolve_layers()
    ['_']
    >>> resolve_layers("app", "dev")
    ['_', 'app', 'app::dev']
    """

    if environment:
        build_namespace(service, environment)
    layers = [DEFAULT_NAMESPACE]
    if service and service != DEFAULT_NAMESPACE:
        layers.append(build_namespace(service))
        if environment:
            layers.append(build_namespace(service, environment))
    return layers
