# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Base class for registry formats."""

from __future__ import annotations

from typing import Any, Mapping

from ..exceptions import MalformedInputError
from ..node import NodeKind, kind_of, list_to_map


class Format:
    """Converts between a registry tree and one text syntax.

    Subclasses set ``name`` and ``extensions`` and implement :meth:`decode`
    and :meth:`encode`. Errors raised by the underlying parser propagate
    unchanged. Instances hold no state and are shared between registries.

    Options are open mappings: each format reads the keys it knows and
    ignores the others.
    """

    name: str = ''
    extensions: tuple[str, ...] = ()

    def decode(self, text: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Parse text into a tree (a dict).

        Raises:
            NotImplementedError: Always (must be overridden by subclasses).
        """
        raise NotImplementedError

    def encode(self, tree: dict[str, Any], options: Mapping[str, Any] | None = None) -> str:
        """Render a tree as text.

        Raises:
            NotImplementedError: Always (must be overridden by subclasses).
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def as_tree(self, value: Any) -> dict[str, Any]:
        """Turn a decoded document into a root Map.

        Maps are returned as they are, Lists are keyed by index and an
        empty document (None) becomes an empty Map.

        Raises:
            MalformedInputError: If the document is a scalar.
        """
        if value is None:
            return {}
        kind = kind_of(value)
        if kind is NodeKind.MAP:
            return value
        if kind is NodeKind.LIST:
            return list_to_map(value)
        raise MalformedInputError(
            f"{self.name} document must contain a mapping or a list, "
            f"not {type(value).__name__}"
        )
