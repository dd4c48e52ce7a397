# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Conversion between nested trees and single-level path mappings."""

from __future__ import annotations

from typing import Any, Iterator, Mapping

from ..node import NodeKind, kind_of
from ..path import DEFAULT_SEPARATOR, parse_path
from .loading import normalize
from .traversal import assign


def iter_leaves(
    value: Any, separator: str = DEFAULT_SEPARATOR, prefix: str = ''
) -> Iterator[tuple[str, Any]]:
    """Yield (path, scalar) pairs for every Scalar below value.

    Maps and Lists are walked; list indices become string keys.
    """
    kind = kind_of(value)
    if kind is NodeKind.MAP:
        entries = value.items()
    elif kind is NodeKind.LIST:
        entries = ((str(i), v) for i, v in enumerate(value))
    else:
        return

    for key, child in entries:
        path = f"{prefix}{separator}{key}" if prefix else key
        if kind_of(child) is NodeKind.SCALAR:
            yield path, child
        else:
            yield from iter_leaves(child, separator, path)


def flatten(data: dict[str, Any], separator: str = DEFAULT_SEPARATOR) -> dict[str, Any]:
    """Dump a tree to a one-level dict keyed by full paths.

    Example:
        >>> flatten({'a': {'b': 1, 'c': [2, 3]}})
        {'a.b': 1, 'a.c.0': 2, 'a.c.1': 3}
    """
    return dict(iter_leaves(data, separator))


def unflatten(flat: Mapping[str, Any], separator: str = DEFAULT_SEPARATOR) -> dict[str, Any]:
    """Rebuild a nested tree from a one-level dict keyed by paths.

    Example:
        >>> unflatten({'a.b': 1, 'a.c': 2})
        {'a': {'b': 1, 'c': 2}}
    """
    tree: dict[str, Any] = {}
    for path, value in flat.items():
        assign(tree, parse_path(path, separator), normalize(value))
    return tree
