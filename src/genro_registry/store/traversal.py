# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path traversal over registry trees.

Lookups never raise: a path that does not resolve returns ``MISSING``.
Writes auto-create intermediate Maps and mutate the live containers of
the tree, so changes are visible from the root.

Intermediate values that are not Maps are handled this way:

- Scalar: replaced by an empty Map (the scalar is discarded)
- List: kept when the next key is an index in ``0..len`` (len appends),
  otherwise converted to a Map keyed by its string indices
"""

from __future__ import annotations

import logging
from typing import Any

from ..node import MISSING, NodeKind, kind_of, list_index, list_to_map

_logger = logging.getLogger(__name__)


def get_child(container: Any, key: str) -> Any:
    """Return the direct child of a container, or MISSING."""
    kind = kind_of(container)
    if kind is NodeKind.MAP:
        return container.get(key, MISSING)
    if kind is NodeKind.LIST:
        index = list_index(key, len(container))
        return MISSING if index is None else container[index]
    return MISSING


def put_child(container: dict | list, key: str, value: Any) -> None:
    """Store value under key in a Map, or at an index (or append slot) of a List."""
    if kind_of(container) is NodeKind.MAP:
        container[key] = value
        return
    index = list_index(key, len(container), allow_append=True)
    if index is None:
        raise KeyError(f"'{key}' is not a valid index for a list of {len(container)}")
    if index == len(container):
        container.append(value)
    else:
        container[index] = value


def coerce_map(value: Any) -> dict[str, Any]:
    """Return value as a Map: Maps as they are, Lists re-keyed, Scalars dropped."""
    kind = kind_of(value)
    if kind is NodeKind.MAP:
        return value
    if kind is NodeKind.LIST:
        return list_to_map(value)
    return {}


def lookup(root: dict, nodes: list[str]) -> Any:
    """Return the value addressed by nodes, or MISSING.

    Args:
        root: Root Map of the tree.
        nodes: Parsed path keys.

    Example:
        >>> lookup({'a': {'b': [10, 20]}}, ['a', 'b', '1'])
        20
        >>> lookup({'a': 1}, ['a', 'b'])
        MISSING
    """
    if not nodes:
        return MISSING

    if len(nodes) == 1:
        return root.get(nodes[0], MISSING)

    current: Any = root
    for key in nodes:
        current = get_child(current, key)
        if current is MISSING:
            return MISSING
    return current


def assign(root: dict, nodes: list[str], value: Any) -> Any:
    """Store value at the path, creating intermediate Maps as needed.

    Args:
        root: Root Map of the tree.
        nodes: Parsed path keys.
        value: Value to store (already in tree shape).

    Returns:
        The assigned value, or None when nodes is empty.
    """
    if not nodes:
        return None

    current: Any = root
    for key, next_key in zip(nodes, nodes[1:]):
        child = get_child(current, key)
        if child is MISSING:
            child = {}
            put_child(current, key, child)
        else:
            kind = kind_of(child)
            if kind is NodeKind.SCALAR:
                _logger.debug("Replacing scalar at '%s' with a map", key)
                child = {}
                put_child(current, key, child)
            elif kind is NodeKind.LIST and list_index(
                next_key, len(child), allow_append=True
            ) is None:
                _logger.debug("Converting list at '%s' to a map for key '%s'", key, next_key)
                child = list_to_map(child)
                put_child(current, key, child)
        current = child

    put_child(current, nodes[-1], value)
    return value


def remove(root: dict, nodes: list[str]) -> Any:
    """Delete the node at the path and return its value, or MISSING."""
    if not nodes:
        return MISSING

    parent = lookup(root, nodes[:-1]) if len(nodes) > 1 else root
    value = get_child(parent, nodes[-1])
    if value is MISSING:
        return MISSING

    if kind_of(parent) is NodeKind.MAP:
        del parent[nodes[-1]]
    else:
        del parent[int(nodes[-1])]
    return value
