"""Application-layer merge policy.

Purpose
-------
Resolve overrides across the active layers. The same winner computation backs
both consumers: the flat merge that produces the environment overlay for a
child process and the annotated merge that marks shadowed keys for display.

Contents
    - ``winning_layers``: key → last active layer defining it.
    - ``merge_secrets``: flat merge fetching values from a store.
    - ``annotate_layers``: per-layer ``KeyState`` sequences for the tree view.

System Role
-----------
Receives grouped keys from :mod:`shh_env.application.layers` and the layer
order from :func:`~shh_env.application.layers.resolve_layers`. Only the store
calls in :func:`merge_secrets` leave the process.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..observability import log_debug, make_event
from .ports import SecretStore


@dataclass(frozen=True, slots=True)
class KeyState:
    """A key as shown inside one layer of the tree view."""

    key: str
    shadowed: bool = False


def winning_layers(groups: Mapping[str, Sequence[str]], layers: Sequence[str]) -> dict[str, str]:
    """Return, for every key in the active *layers*, the last layer that defines it.

    Namespaces outside *layers* are ignored, so an override living in an
    inactive namespace never counts.

    Examples
    --------
    >>> winning_layers({"_": ["X", "Y"], "app": ["X"], "other": ["Y"]}, ["_", "app"])
    {'X': 'app', 'Y': '_'}
    """

    winners: dict[str, str] = {}
    for layer in layers:
        for key in groups.get(layer, ()):
            winners[key] = layer
    return winners


def merge_secrets(
    groups: Mapping[str, Sequence[str]],
    layers: Sequence[str],
    store: SecretStore,
) -> dict[str, str]:
    """Merge the values of every active layer, later layers overriding earlier ones.

    Why
    ----
    The child process needs exactly one value per key, taken from the highest
    precedence layer that stores it.

    What
    ----
    Walks *layers* in order and fetches each key with one ``store.get`` call.
    Layers absent from *groups* contribute nothing; items that vanished between
    enumeration and lookup (``None``) are skipped. Store failures propagate.

    Examples
    --------
    >>> class _Store:
    ...     data = {("_", "X"): "1", ("app", "X"): "2", ("app::dev", "X"): "3"}
    ...     def get(self, namespace, name):
    ...         return self.data.get((namespace, name))
    >>> groups = {"_": ["X"], "app": ["X"], "app::dev": ["X"]}
    >>> merge_secrets(groups, ["_", "app", "app::dev"], _Store())
    {'X': '3'}
    """

    merged: dict[str, str] = {}
    for layer in layers:
        keys = groups.get(layer, ())
        for key in keys:
            value = store.get(layer, key)
            if value is not None:
                merged[key] = value
        if keys:
            log_debug("layer_merged", **make_event(layer, {"keys": len(keys)}))
    return merged


def annotate_layers(
    groups: Mapping[str, Sequence[str]],
    layers: Sequence[str],
) -> dict[str, list[KeyState]]:
    """Return each active layer's keys flagged as shadowed or visible.

    A key defined by several active layers is visible only in the last of them;
    a key defined once is always visible. Layers absent from *groups* map to an
    empty list.

    Examples
    --------
    >>> groups = {"_": ["X"], "app": ["X"], "app::dev": ["X"]}
    >>> annotated = annotate_layers(groups, ["_", "app", "app::dev"])
    >>> [state.shadowed for layer in annotated.values() for state in layer]
    [True, True, False]
    """

    winners = winning_layers(groups, layers)
    return {
        layer: [KeyState(key, shadowed=winners[key] != layer) for key in groups.get(layer, ())]
        for layer in layers
    }
