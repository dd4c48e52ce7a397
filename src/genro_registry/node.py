# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node classification for registry trees.

A registry tree is made of plain Python containers. Every value found in
the tree is one of three kinds:

- MAP: a ``dict`` with string keys, kept in insertion order
- LIST: a ``list`` addressed by decimal indices ('0', '1', ...)
- SCALAR: anything else (str, int, float, bool, None, opaque objects)

Traversal and mutation code branches on :func:`kind_of` instead of
checking container types ad hoc.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


class NodeKind(Enum):
    """Tag of a value stored in a registry tree."""

    SCALAR = 'scalar'
    LIST = 'list'
    MAP = 'map'


class _Missing:
    """Marker returned by lookups that do not resolve to a node."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict) -> _Missing:
        return self


MISSING = _Missing()


def kind_of(value: Any) -> NodeKind:
    """Return the NodeKind of a value stored in the tree.

    Example:
        >>> kind_of({'a': 1})
        <NodeKind.MAP: 'map'>
        >>> kind_of([1, 2])
        <NodeKind.LIST: 'list'>
        >>> kind_of('text')
        <NodeKind.SCALAR: 'scalar'>
    """
    if isinstance(value, dict):
        return NodeKind.MAP
    if isinstance(value, list):
        return NodeKind.LIST
    return NodeKind.SCALAR


def is_empty(value: Any) -> bool:
    """True for the values read operations treat as unset (None and '')."""
    return value is None or (isinstance(value, str) and value == '')


def is_object_like(value: Any) -> bool:
    """True for plain attribute objects whose ``vars()`` describe a Map.

    Classes, enum members, functions and containers are excluded.
    """
    if isinstance(value, (str, bytes, Mapping, list, tuple, type, Enum)):
        return False
    if callable(value):
        return False
    return hasattr(value, '__dict__')


def is_associative(collection: Any) -> bool:
    """Decide whether a collection is map-like or list-like.

    Mappings are associative unless their keys are exactly the integers
    ``0..n-1`` in order. Lists and tuples never are.

    Example:
        >>> is_associative({'a': 1})
        True
        >>> is_associative({0: 'x', 1: 'y'})
        False
        >>> is_associative(['x', 'y'])
        False
    """
    if isinstance(collection, Mapping):
        for expected, key in enumerate(collection):
            if type(key) is not int or key != expected:
                return True
        return False
    return False


def is_map_like(value: Any) -> bool:
    """True if a bound value must become a Map in the tree.

    Attribute objects, empty mappings and associative mappings qualify.
    """
    if is_object_like(value):
        return True
    return isinstance(value, Mapping) and (not value or is_associative(value))


def list_index(key: str, length: int, allow_append: bool = False) -> int | None:
    """Convert a path key to a list index, or None if it does not address one.

    Args:
        key: Path segment, must be made of decimal digits only.
        length: Current list length.
        allow_append: If True, ``length`` itself is accepted (append slot).
    """
    if not (key.isascii() and key.isdigit()):
        return None
    index = int(key)
    limit = length + 1 if allow_append else length
    return index if index < limit else None


def list_to_map(items: list) -> dict[str, Any]:
    """Convert a List to a Map keyed by the string form of its indices."""
    return {str(i): item for i, item in enumerate(items)}
