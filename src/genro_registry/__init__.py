# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-Registry - Path-addressable configuration registry.

A small library keeping nested configuration data in one in-memory tree,
addressed by dotted paths, populated from dicts, objects, other registries
and JSON/YAML/INI/XML documents.
"""

__version__ = "0.1.0"

from .exceptions import (
    InvalidFormatError,
    MalformedInputError,
    RegistryError,
)
from .formats import Format, FormatFactory, default_factory
from .node import MISSING, NodeKind, is_associative, kind_of
from .path import parse_path
from .store import Registry, flatten, unflatten

__all__ = [
    # Core classes
    "Registry",
    "NodeKind",
    "MISSING",
    # Helpers
    "parse_path",
    "kind_of",
    "is_associative",
    "flatten",
    "unflatten",
    # Formats
    "Format",
    "FormatFactory",
    "default_factory",
    # Exceptions
    "RegistryError",
    "InvalidFormatError",
    "MalformedInputError",
]
