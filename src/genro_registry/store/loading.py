# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for Registry trees.

This module binds external data (mappings, sequences, attribute objects)
into a registry tree and exports the tree back to plain structures.

Bound values are always copied into tree shape by :func:`normalize`, so
a registry never aliases a container owned by the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any, Iterator

from ..node import MISSING, NodeKind, is_associative, is_empty, is_map_like, is_object_like, kind_of
from .traversal import coerce_map


def object_items(obj: Any) -> Iterator[tuple[str, Any]]:
    """Yield the public attributes of an object."""
    for key, value in vars(obj).items():
        if not key.startswith('_'):
            yield key, value


def iter_pairs(data: Any) -> Iterator[tuple[str, Any]]:
    """Yield (key, value) pairs of any bindable source with string keys.

    Raises:
        TypeError: If data is neither a mapping, a sequence nor an object.
    """
    if isinstance(data, Mapping):
        for key, value in data.items():
            yield str(key), value
    elif isinstance(data, (list, tuple)):
        for index, value in enumerate(data):
            yield str(index), value
    elif is_object_like(data):
        yield from object_items(data)
    else:
        raise TypeError(
            f"data must be a mapping, a sequence or an object, not {type(data).__name__}"
        )


def normalize(value: Any) -> Any:
    """Deep-copy a value into tree shape.

    Mappings become dicts with string keys (or lists when keyed by
    ``0..n-1``), tuples become lists, attribute objects become dicts.
    Scalars are returned unchanged.

    Example:
        >>> normalize({1: 'a', 'b': ('x', 'y')})
        {'1': 'a', 'b': ['x', 'y']}
        >>> normalize({0: 'a', 1: 'b'})
        ['a', 'b']
    """
    if isinstance(value, Mapping):
        if value and not is_associative(value):
            return [normalize(v) for v in value.values()]
        return {str(k): normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize(v) for v in value]
    if is_object_like(value):
        return {k: normalize(v) for k, v in object_items(value)}
    return value


def bind_data(
    parent: dict[str, Any],
    data: Any,
    recursive: bool = True,
    allow_null: bool = True,
) -> None:
    """Bind the entries of data into a parent Map.

    Args:
        parent: Map of the tree receiving the entries.
        data: Mapping, sequence or attribute object.
        recursive: If True, map-like values are merged into the existing
            child Maps key by key. Otherwise they replace the child.
        allow_null: If False, None and '' values are skipped.

    Example:
        >>> tree = {'db': {'host': 'localhost', 'port': 5432}}
        >>> bind_data(tree, {'db': {'port': 3306}})
        >>> tree
        {'db': {'host': 'localhost', 'port': 3306}}
    """
    for key, value in iter_pairs(data):
        if not allow_null and is_empty(value):
            continue

        if recursive and is_map_like(value):
            child = parent.get(key, MISSING)
            if child is MISSING:
                child = {}
            elif kind_of(child) is not NodeKind.MAP:
                child = coerce_map(child)
            parent[key] = child
            bind_data(child, value, recursive=True, allow_null=allow_null)
            continue

        parent[key] = normalize(value)


def as_plain(value: Any) -> Any:
    """Return a deep copy of a tree value made of plain dicts and lists."""
    kind = kind_of(value)
    if kind is NodeKind.MAP:
        return {k: as_plain(v) for k, v in value.items()}
    if kind is NodeKind.LIST:
        return [as_plain(v) for v in value]
    return value


def as_namespace(value: Any) -> Any:
    """Return a deep copy of a tree value with Maps as SimpleNamespace objects."""
    kind = kind_of(value)
    if kind is NodeKind.MAP:
        return SimpleNamespace(**{k: as_namespace(v) for k, v in value.items()})
    if kind is NodeKind.LIST:
        return [as_namespace(v) for v in value]
    return value
