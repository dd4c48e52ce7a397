# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JSON format."""

from __future__ import annotations

import json
from typing import Any, Mapping

from .base import Format


class JsonFormat(Format):
    """Converts a registry tree to/from a JSON document.

    Encode options:
        indent: Indentation passed to ``json.dumps`` (default compact).
        sort_keys: Sort object keys (default False).
        ensure_ascii: Escape non-ASCII characters (default False).
    """

    name = 'json'
    extensions = ('.json',)

    def decode(self, text: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Parse a JSON document. A blank document is an empty tree."""
        text = text.strip()
        if not text:
            return {}
        return self.as_tree(json.loads(text))

    def encode(self, tree: dict[str, Any], options: Mapping[str, Any] | None = None) -> str:
        options = options or {}
        return json.dumps(
            tree,
            indent=options.get('indent'),
            sort_keys=options.get('sort_keys', False),
            ensure_ascii=options.get('ensure_ascii', False),
        )
