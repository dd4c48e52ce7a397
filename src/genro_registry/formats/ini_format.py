# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""INI format.

Top-level Maps are written as ``[section]`` blocks, the other top-level
values as global ``key=value`` lines before the first section. Inside a
section one more level can be expressed with array keys::

    title="Site"

    [database]
    host="localhost"
    port=5432
    replicas[]="db1"
    replicas[]="db2"
    pool[min]=1
    pool[max]=10

Strings are always quoted on output so that ``"5"`` and ``5`` survive a
round trip. Backslash, double quote, newline and carriage return are
backslash-escaped inside quotes. A ``;`` or ``#`` comment may follow the
closing quote.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from ..exceptions import MalformedInputError
from ..node import NodeKind, kind_of
from .base import Format

_ARRAY_KEY = re.compile(r'^([^\[\]]+)\[([^\[\]]*)\]$')
_INT = re.compile(r'^[-+]?\d+$')
_FLOAT = re.compile(r'^[-+]?(\d+\.\d*|\.\d+|\d+)([eE][-+]?\d+)?$')

_TRUE = ('true', 'on', 'yes')
_FALSE = ('false', 'off', 'no')
_NULL = ('null', 'none')

_QUOTED = re.compile(r"""^(["'])((?:\\.|(?!\1).)*)\1\s*(?:[;#].*)?$""")
_ESCAPE = re.compile(r'\\(.)')
_UNESCAPE = {'n': '\n', 'r': '\r', '\\': '\\', '"': '"', "'": "'"}


class IniFormat(Format):
    """Converts a registry tree to/from an INI document.

    Decode options:
        process_sections: If True, ``[section]`` headers create top-level
            Maps. If False (default) headers are ignored and every key lands
            at the top level.
        support_array_values: Read/write ``key[]`` and ``key[name]`` entries
            (default True).
        parse_booleans: Convert true/false/yes/no/on/off (default True).

    Encode options:
        support_array_values: Same as above. Without it, Lists and nested
            Maps inside a section cannot be written.
    """

    name = 'ini'
    extensions = ('.ini', '.cfg')

    def decode(self, text: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        options = options or {}
        process_sections = options.get('process_sections', False)
        support_arrays = options.get('support_array_values', True)
        parse_booleans = options.get('parse_booleans', True)

        tree: dict[str, Any] = {}
        target = tree
        for lineno, raw in enumerate(text.splitlines(), 1):
            line = raw.strip()
            if not line or line[0] in ';#':
                continue

            if line.startswith('['):
                if not line.endswith(']'):
                    raise MalformedInputError(f"Line {lineno}: unterminated section header")
                if process_sections:
                    section = line[1:-1].strip()
                    if kind_of(tree.get(section)) is not NodeKind.MAP:
                        tree[section] = {}
                    target = tree[section]
                continue

            if '=' not in line:
                raise MalformedInputError(f"Line {lineno}: expected 'key=value', got {line!r}")

            key, raw_value = line.split('=', 1)
            key = key.strip()
            value = self._parse_value(raw_value.strip(), parse_booleans, lineno)

            match = _ARRAY_KEY.match(key) if support_arrays else None
            if match is None:
                target[key] = value
                continue

            name, member = match.group(1).strip(), match.group(2).strip()
            if member:
                if kind_of(target.get(name)) is not NodeKind.MAP:
                    target[name] = {}
                target[name][member] = value
            else:
                if kind_of(target.get(name)) is not NodeKind.LIST:
                    target[name] = []
                target[name].append(value)

        return tree

    def encode(self, tree: dict[str, Any], options: Mapping[str, Any] | None = None) -> str:
        options = options or {}
        support_arrays = options.get('support_array_values', True)

        globals_: list[str] = []
        sections: list[str] = []
        for key, value in tree.items():
            if kind_of(value) is NodeKind.MAP:
                if sections:
                    sections.append('')
                sections.append(f'[{key}]')
                for sub_key, sub_value in value.items():
                    sections.extend(self._entry(sub_key, sub_value, support_arrays))
            else:
                globals_.extend(self._entry(key, value, support_arrays))

        if globals_ and sections:
            globals_.append('')
        return '\n'.join(globals_ + sections) + '\n'

    def _entry(self, key: str, value: Any, support_arrays: bool) -> list[str]:
        """Return the lines for one key inside a section (or at global level)."""
        kind = kind_of(value)
        if kind is NodeKind.SCALAR:
            return [f'{key}={self._format_value(value)}']

        if not support_arrays:
            raise MalformedInputError(f"Cannot write nested value '{key}' without array values")

        if kind is NodeKind.LIST:
            pairs = (('', item) for item in value)
        else:
            pairs = value.items()

        lines = []
        for member, item in pairs:
            if kind_of(item) is not NodeKind.SCALAR:
                raise MalformedInputError(f"INI cannot represent the nesting below '{key}'")
            lines.append(f'{key}[{member}]={self._format_value(item)}')
        return lines

    def _format_value(self, value: Any) -> str:
        if value is None:
            return 'null'
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, (int, float)):
            return repr(value)
        text = (
            str(value)
            .replace('\\', '\\\\')
            .replace('"', '\\"')
            .replace('\n', '\\n')
            .replace('\r', '\\r')
        )
        return f'"{text}"'

    def _parse_value(self, raw: str, parse_booleans: bool, lineno: int) -> Any:
        if raw[:1] in ('"', "'"):
            match = _QUOTED.match(raw)
            if match is None:
                raise MalformedInputError(f"Line {lineno}: malformed quoted value")
            # Unknown escapes keep their backslash.
            return _ESCAPE.sub(
                lambda m: _UNESCAPE.get(m.group(1), m.group(0)), match.group(2)
            )

        raw = raw.split(';', 1)[0].strip()
        lowered = raw.lower()
        if parse_booleans and lowered in _TRUE:
            return True
        if parse_booleans and lowered in _FALSE:
            return False
        if lowered in _NULL:
            return None
        if _INT.match(raw):
            return int(raw)
        if _FLOAT.match(raw):
            return float(raw)
        return raw
