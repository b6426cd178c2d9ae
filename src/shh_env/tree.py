"""Box-drawing tree output for namespaces and their keys.

Purpose
    Render namespaces the way ``shh-env list`` prints them. Output is returned
    as lines so callers decide where it goes; the branch glyphs and the
    strikethrough control sequences are part of the output contract and must
    stay byte-exact.

Contents
    - ``BRANCH`` / ``LAST_BRANCH``: tree glyphs.
    - ``STRIKETHROUGH_START`` / ``STRIKETHROUGH_END``: ANSI decoration for
      shadowed keys.
    - ``render_tree``: one namespace.
    - ``render_namespaces``: every namespace, root first.
    - ``render_layers``: the active layers with shadowed keys struck through.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final

from .application.layers import sorted_namespaces
from .application.merge import KeyState
from .domain.naming import DEFAULT_NAMESPACE

BRANCH: Final[str] = "├── "
LAST_BRANCH: Final[str] = "└── "
STRIKETHROUGH_START: Final[str] = "\x1b[9m"
STRIKETHROUGH_END: Final[str] = "\x1b[0m"


def render_tree(namespace: str, keys: Sequence[KeyState]) -> list[str]:
    """Return the header line for *namespace* followed by one branch per key.

    Examples
    --------
    >>> render_tree("app", [KeyState("A"), KeyState("B", shadowed=True)])
    ['app', '├── A', '└── \\x1b[9mB\\x1b[0m']
    >>> render_tree("_", [])
    ['_']
    """

    lines = [namespace]
    for index, state in enumerate(keys):
        prefix = LAST_BRANCH if index == len(keys) - 1 else BRANCH
        label = f"{STRIKETHROUGH_START}{state.key}{STRIKETHROUGH_END}" if state.shadowed else state.key
        lines.append(f"{prefix}{label}")
    return lines


def render_namespaces(groups: Mapping[str, Sequence[str]]) -> list[str]:
    """Render every namespace in *groups*, ``_`` first, separated by blank lines.

    Examples
    --------
    >>> render_namespaces({"app": ["B"], "_": ["A"]})
    ['_', '└── A', '', 'app', '└── B']
    """

    lines: list[str] = []
    for index, namespace in enumerate(sorted_namespaces(groups)):
        if index > 0:
            lines.append("")
        lines.extend(render_tree(namespace, [KeyState(key) for key in groups[namespace]]))
    return lines


def render_layers(
    annotated: Mapping[str, Sequence[KeyState]],
    layers: Sequence[str],
    groups: Mapping[str, Sequence[str]],
) -> list[str]:
    """Render the active *layers* with shadowed keys struck through.

    Every layer after the first is preceded by a blank line. The root layer is
    always printed; any other layer without keys in *groups* is left out
    while its separator line stays.

    Examples
    --------
    >>> annotated = {"_": [KeyState("X", shadowed=True)], "app": [KeyState("X")]}
    >>> render_layers(annotated, ["_", "app"], {"_": ["X"], "app": ["X"]})
    ['_', '└── \\x1b[9mX\\x1b[0m', '', 'app', '└── X']
    >>> render_layers({"_": [], "app": []}, ["_", "app"], {})
    ['_', '']
    """

    lines: list[str] = []
    for index, layer in enumerate(layers):
        if index > 0:
            lines.append("")
        if not groups.get(layer) and layer != DEFAULT_NAMESPACE:
            continue
        lines.extend(render_tree(layer, annotated.get(layer, ())))
    return lines
