# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registry path parsing."""

from __future__ import annotations

import re
from typing import Any

DEFAULT_SEPARATOR = '.'


def parse_path(path: Any, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    """Split a registry path into its node keys.

    The path is stripped first; any run of two or more separator
    characters collapses into one separator (so ``'a:::b'`` with ``'::'``
    gives ``['a', 'b']``). Leading and trailing separators are kept and
    produce an empty first/last key.

    Args:
        path: Dotted path (non-string values are converted with ``str``).
        separator: Key separator, may be longer than one character.

    Returns:
        List of keys, empty if the path is blank.

    Raises:
        ValueError: If separator is empty.

    Example:
        >>> parse_path('a..b.c')
        ['a', 'b', 'c']
        >>> parse_path('.a')
        ['', 'a']
        >>> parse_path('  ')
        []
    """
    if not separator:
        raise ValueError("Separator must be a non-empty string")

    path = str(path).strip()
    if not path:
        return []

    if separator not in path:
        return [path]

    collapsed = re.sub(f'[{re.escape(separator)}]{{2,}}', separator, path)
    return collapsed.split(separator)
