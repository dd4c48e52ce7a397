# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Formats for reading and writing Registry trees as text.

Available formats:
- json: JSON documents (stdlib ``json``)
- yaml / yml: YAML documents (PyYAML)
- ini: INI documents with sections and array keys
- xml: typed ``<registry><node .../></registry>`` documents

``default_factory`` is used by every Registry created without its own
``formats`` factory.

Example:
    >>> from genro_registry.formats import default_factory
    >>> default_factory.get('JSON').decode('{"a": {"b": 1}}')
    {'a': {'b': 1}}
"""

from .base import Format
from .factory import FormatFactory
from .ini_format import IniFormat
from .json_format import JsonFormat
from .xml_format import XmlFormat
from .yaml_format import YamlFormat

BUILTIN_FORMATS: dict[str, type[Format]] = {
    'json': JsonFormat,
    'yaml': YamlFormat,
    'yml': YamlFormat,
    'ini': IniFormat,
    'xml': XmlFormat,
}

default_factory = FormatFactory(BUILTIN_FORMATS)

__all__ = [
    'BUILTIN_FORMATS',
    'Format',
    'FormatFactory',
    'IniFormat',
    'JsonFormat',
    'XmlFormat',
    'YamlFormat',
    'default_factory',
]
