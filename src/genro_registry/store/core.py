# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registry - A path-addressable container for configuration data.

This module provides the Registry class, the facade of the genro-registry
library. A Registry owns one tree of plain containers (dicts, lists and
scalars) and exposes dotted-path access, merging, flattening and
conversion to/from text formats.

Key Features:
    - **Path access**: Dotted paths ('a.b.c') with a configurable separator
    - **Auto-vivification**: Writes create the missing intermediate maps
    - **Safe reads**: Missing paths, None and '' read as the default
    - **Merging**: Shallow or recursive merge of other registries
    - **Formats**: JSON, YAML, INI and XML through a FormatFactory

Path Syntax:
    - Dotted paths: 'parent.child.grandchild'
    - List indices: 'servers.0.host'
    - Repeated separators collapse: 'a..b' is 'a.b'
    - Leading/trailing separators address an empty key: '.a' is ['', 'a']

Example:
    Basic usage::

        registry = Registry()
        registry.set('database.host', 'localhost')
        registry.set('database.port', 5432)

        print(registry.get('database.host'))  # 'localhost'
        print(registry.get('database.user', 'root'))  # 'root'

    Loading text::

        registry = Registry()
        registry.load_string('{"cache": {"enabled": true}}')
        registry.load_file('local.yaml', format=None)  # format from suffix
"""

from __future__ import annotations

import copy
import logging
import os
from collections.abc import Mapping
from typing import Any, Iterator

from ..formats import FormatFactory, default_factory
from ..node import MISSING, NodeKind, is_empty, is_object_like, kind_of
from ..path import DEFAULT_SEPARATOR, parse_path
from .flattening import flatten as flatten_tree
from .loading import as_namespace, as_plain, bind_data, normalize
from .traversal import assign, lookup, remove

_logger = logging.getLogger(__name__)


class Registry:
    """A hierarchical data container addressed by dotted paths.

    Registry provides:
    - get(path, default) / registry[path]: Read with default semantics
    - set(path, value): Write, creating intermediate maps
    - merge(other, recursive): Combine registries
    - load_*/to_*: Bind external data and export the tree

    Attributes:
        separator: Default path separator for this instance.
        formats: FormatFactory used to resolve format names.

    Example:
        >>> registry = Registry({'site': {'title': 'Home'}})
        >>> registry.get('site.title')
        'Home'
        >>> registry.set('site.lang', 'en')
        'en'
        >>> registry.to_dict()
        {'site': {'title': 'Home', 'lang': 'en'}}
    """

    __slots__ = ('_data', '_initialized', 'separator', 'formats')

    def __init__(
        self,
        data: Any = None,
        *,
        separator: str = DEFAULT_SEPARATOR,
        formats: FormatFactory | None = None,
    ) -> None:
        """Initialize a Registry.

        Args:
            data: Optional initial data. Can be:
                - Registry: its tree is merged into the new one
                - dict, list, tuple or attribute object: bound recursively
                - str: parsed as JSON (an empty string is ignored)
            separator: Default path separator.
            formats: FormatFactory for load_string/load_file/to_string.
                Defaults to the shared ``default_factory``.

        Raises:
            TypeError: If data is of any other type.

        Example:
            >>> Registry({'a': 1, 'b': {'c': 2}})
            >>> Registry('{"a": 1}')
            >>> Registry(other_registry)  # copy
        """
        self._data: dict[str, Any] = {}
        self._initialized = False
        self.separator = separator
        self.formats = formats if formats is not None else default_factory

        if data is not None:
            self._load_source(data)

    def _load_source(self, source: Any) -> None:
        """Load constructor data into this Registry.

        Raises:
            TypeError: If source is not a supported type.
        """
        if isinstance(source, Registry):
            self.merge(source)
        elif isinstance(source, str):
            if source != '':
                self.load_string(source)
        elif isinstance(source, (Mapping, list, tuple)) or is_object_like(source):
            bind_data(self._data, source)
            self._initialized = True
        else:
            raise TypeError(
                f"data must be Registry, mapping, sequence, object or str, "
                f"not {type(source).__name__}"
            )

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing top-level keys."""
        return f"Registry({list(self._data.keys())})"

    def __str__(self) -> str:
        """Return the tree as a JSON document."""
        return self.to_string()

    def __len__(self) -> int:
        """Return the number of top-level entries."""
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        """Iterate over top-level keys in insertion order."""
        return iter(list(self._data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Registry):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __contains__(self, path: Any) -> bool:
        """Check if a path exists (see exists)."""
        return self.exists(path)

    def __getitem__(self, path: Any) -> Any:
        """Get value by path, None if missing (see get)."""
        return self.get(path)

    def __setitem__(self, path: Any, value: Any) -> None:
        """Set value by path (see set)."""
        self.set(path, value)

    def __delitem__(self, path: Any) -> None:
        """Unset a path by storing None there.

        The key stays in the tree, so ``exists`` remains True while ``get``
        returns the default. Use pop to remove the key.
        """
        self.set(path, None)

    def __copy__(self) -> Registry:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Registry:
        clone = self.copy()
        memo[id(self)] = clone
        return clone

    def copy(self) -> Registry:
        """Return an independent Registry with a deep copy of the tree."""
        clone = Registry(separator=self.separator, formats=self.formats)
        clone._data = copy.deepcopy(self._data)
        clone._initialized = self._initialized
        return clone

    @property
    def initialized(self) -> bool:
        """True once data has been bound or loaded into the tree."""
        return self._initialized

    # ==================== Path Utilities ====================

    def _get_separator(self, separator: str | None = None) -> str:
        """Return the per-call separator, or the instance default."""
        if separator is None or separator == '':
            return self.separator
        return separator

    def _path_nodes(self, path: Any, separator: str | None = None) -> list[str]:
        return parse_path(path, self._get_separator(separator))

    # ==================== Core API ====================

    def get(self, path: Any, default: Any = None) -> Any:
        """Get the value at the given path.

        Args:
            path: Dotted path (e.g. 'database.host').
            default: Returned when the path is missing or holds None or ''.

        Returns:
            The stored value (containers are returned live), or default.

        Example:
            >>> registry.get('database.host')
            >>> registry.get('database.user', 'root')
        """
        value = lookup(self._data, self._path_nodes(path))
        if value is MISSING or is_empty(value):
            return default
        return value

    def exists(self, path: Any) -> bool:
        """Check if a path resolves to a node, whatever its value."""
        return lookup(self._data, self._path_nodes(path)) is not MISSING

    def set(self, path: Any, value: Any, separator: str | None = None) -> Any:
        """Set a value at the given path, creating intermediate maps as needed.

        Mappings, sequences and attribute objects are stored as normalized
        copies. A Scalar found on the way is replaced by a map.

        Args:
            path: Dotted path to the item.
            value: Value to store.
            separator: Separator for this call only.

        Returns:
            The value that has been set (not the previous one), or None if
            the path is empty.

        Example:
            >>> registry.set('html.body.div', 'text')
            'text'
            >>> registry.set('a/b', 1, separator='/')
            1
        """
        nodes = self._path_nodes(path, separator)
        if not nodes:
            return None
        return assign(self._data, nodes, normalize(value))

    def setdefault(self, path: Any, default: Any = '') -> Any:
        """Set a value if not already assigned, and return it.

        The current value is read with get semantics, so None and '' are
        replaced by default. The path exists afterwards.
        """
        value = self.get(path, default)
        self.set(path, value)
        return value

    def append(self, path: Any, value: Any) -> Any:
        """Append a value to the list at the given path.

        A missing (or empty) value is simply set. A map is converted to the
        list of its values, a scalar becomes a one-item list.

        Returns:
            The list that has been set, or value if nothing was there.

        Example:
            >>> registry.append('tags', 'a')
            'a'
            >>> registry.append('tags', 'b')
            ['a', 'b']
        """
        current = self.get(path)
        if current is None:
            return self.set(path, value)

        kind = kind_of(current)
        if kind is NodeKind.LIST:
            items = list(current)
        elif kind is NodeKind.MAP:
            items = list(current.values())
        else:
            items = [current]

        items.append(value)
        return self.set(path, items)

    def pop(self, path: Any, default: Any = None) -> Any:
        """Remove and return value at path.

        Args:
            path: Path to the node.
            default: Default value if path not found.

        Returns:
            The value of the removed node, or default.
        """
        value = remove(self._data, self._path_nodes(path))
        return default if value is MISSING else value

    def extract(self, path: Any) -> Registry | None:
        """Return a new Registry holding a copy of the subtree at path.

        Returns:
            Registry rooted at the map (or list) found at path, or None if
            the path is missing, empty or holds a scalar.
        """
        value = self.get(path)
        if value is None or kind_of(value) is NodeKind.SCALAR:
            return None
        return Registry(value, separator=self.separator, formats=self.formats)

    def merge(
        self,
        source: Registry | Mapping[str, Any],
        recursive: bool = False,
        allow_null: bool = True,
    ) -> Registry:
        """Merge another Registry (or mapping) into this one.

        Args:
            source: Source Registry or mapping.
            recursive: If True, nested maps are merged key by key.
                Otherwise top-level keys of source replace ours wholesale.
            allow_null: If False, None and '' values of source are skipped.

        Returns:
            This Registry, for chaining.

        Raises:
            TypeError: If source is neither a Registry nor a mapping.

        Example:
            >>> registry = Registry({'config': {'a': 1, 'b': 2}})
            >>> registry.merge(Registry({'config': {'b': 3}}), recursive=True)
            >>> registry.get('config.a')  # 1 (preserved)
            >>> registry.get('config.b')  # 3 (updated)
        """
        if isinstance(source, Registry):
            data = source.to_dict()
        elif isinstance(source, Mapping):
            data = source
        else:
            raise TypeError(
                f"source must be Registry or mapping, not {type(source).__name__}"
            )

        bind_data(self._data, data, recursive=recursive, allow_null=allow_null)
        self._initialized = True
        return self

    def flatten(self, separator: str | None = None) -> dict[str, Any]:
        """Dump the tree to a one-level dict keyed by full paths.

        Example:
            >>> Registry({'a': {'b': 1}}).flatten()
            {'a.b': 1}
            >>> Registry({'a': {'b': 1}}).flatten('/')
            {'a/b': 1}
        """
        return flatten_tree(self._data, self._get_separator(separator))

    # ==================== Iteration ====================

    def keys(self) -> list[str]:
        """Return top-level keys in insertion order."""
        return list(self._data.keys())

    def values(self) -> list[Any]:
        """Return top-level values in insertion order."""
        return list(self._data.values())

    def items(self) -> list[tuple[str, Any]]:
        """Return top-level (key, value) pairs in insertion order."""
        return list(self._data.items())

    # ==================== Loading ====================

    def load_dict(
        self,
        data: Mapping[str, Any] | list | tuple,
        flattened: bool = False,
        separator: str | None = None,
    ) -> Registry:
        """Load a mapping into the tree.

        Args:
            data: Nested mapping (or sequence) to bind.
            flattened: If True, data is one-level and its keys are paths.
            separator: Path separator used when flattened.

        Returns:
            This Registry, for chaining.

        Example:
            >>> registry.load_dict({'db.host': 'localhost'}, flattened=True)
            >>> registry.get('db.host')
            'localhost'
        """
        if not flattened:
            bind_data(self._data, data)
            self._initialized = True
            return self

        for key, value in data.items():
            self.set(key, value, separator)
        return self

    def load_object(self, obj: Any) -> Registry:
        """Load the public attributes of an object (or a mapping) into the tree."""
        bind_data(self._data, obj)
        self._initialized = True
        return self

    def load_string(
        self,
        text: str,
        format: str = 'json',
        options: Mapping[str, Any] | None = None,
    ) -> Registry:
        """Load a document into the tree.

        The first load of an empty, never initialized registry replaces the
        root with the decoded tree. Later loads are merged recursively.

        Args:
            text: Document to decode.
            format: Format name (case-insensitive).
            options: Options passed to the format.

        Raises:
            InvalidFormatError: If the format is unknown.

        Decoding errors of the format propagate unchanged.
        """
        tree = self.formats.get(format).decode(text, options or {})

        if not self._initialized:
            _logger.debug("Replacing empty registry root with decoded %s tree", format)
            self._data = {str(key): normalize(value) for key, value in tree.items()}
            self._initialized = True
            return self

        _logger.debug("Binding decoded %s tree into registry", format)
        return self.load_object(tree)

    def load_file(
        self,
        path: str | os.PathLike,
        format: str | None = 'json',
        options: Mapping[str, Any] | None = None,
    ) -> Registry:
        """Load the contents of a file into the tree.

        Args:
            path: File to read (UTF-8).
            format: Format name, or None to pick it from the file extension.
            options: Options passed to the format.

        Raises:
            InvalidFormatError: If the format is unknown or cannot be
                determined from the extension.
            OSError: If the file cannot be read.
        """
        if format is None:
            format = self.formats.for_file(path).name

        _logger.debug("Loading %s file %s", format, os.fspath(path))
        with open(path, encoding='utf-8') as f:
            text = f.read()
        return self.load_string(text, format, options)

    # ==================== Conversion ====================

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the tree as plain dicts and lists."""
        return as_plain(self._data)

    def to_object(self) -> Any:
        """Return a deep copy of the tree with maps as SimpleNamespace objects."""
        return as_namespace(self._data)

    def to_string(
        self, format: str = 'json', options: Mapping[str, Any] | None = None
    ) -> str:
        """Render the tree in the given format.

        Raises:
            InvalidFormatError: If the format is unknown.
        """
        return self.formats.get(format).encode(self._data, options or {})
