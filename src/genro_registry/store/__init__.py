# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registry store package - Path-addressable data container.

The package is organized into:
- core: Registry facade with path access, loading and conversion
- traversal: Lookup and auto-vivifying assignment over a tree
- loading: Binding external data into a tree and exporting it
- flattening: Conversion between nested trees and one-level path dicts

Example:
    >>> from genro_registry import Registry
    >>> registry = Registry()
    >>> registry.set('config.name', 'MyApp')
    'MyApp'
    >>> registry['config.name']
    'MyApp'
"""

from .core import Registry
from .flattening import flatten, unflatten

__all__ = ["Registry", "flatten", "unflatten"]
