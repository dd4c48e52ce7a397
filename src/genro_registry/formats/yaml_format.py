# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""YAML format, backed by PyYAML."""

from __future__ import annotations

from typing import Any, Mapping

import yaml

from .base import Format


class YamlFormat(Format):
    """Converts a registry tree to/from a YAML document.

    Only plain YAML types are read and written (``safe_load``/``safe_dump``).

    Encode options:
        default_flow_style: Passed to ``yaml.safe_dump`` (default False).
        indent: Indentation width (default 2).
        sort_keys: Sort mapping keys (default False, keeps tree order).
    """

    name = 'yaml'
    extensions = ('.yaml', '.yml')

    def decode(self, text: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.as_tree(yaml.safe_load(text))

    def encode(self, tree: dict[str, Any], options: Mapping[str, Any] | None = None) -> str:
        options = options or {}
        return yaml.safe_dump(
            tree,
            default_flow_style=options.get('default_flow_style', False),
            indent=options.get('indent', 2),
            sort_keys=options.get('sort_keys', False),
            allow_unicode=True,
        )
