# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""XML format.

Documents look like::

    <registry>
      <node name="title" type="string">Site</node>
      <node name="database" type="object">
        <node name="port" type="integer">5432</node>
      </node>
      <node name="tags" type="array">
        <node name="0" type="string">a</node>
      </node>
    </registry>

Every node carries its type so values come back with the Python type
they were written with.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Mapping

from ..exceptions import MalformedInputError
from ..node import NodeKind, kind_of
from .base import Format


class XmlFormat(Format):
    """Converts a registry tree to/from an XML document.

    Options:
        name: Tag of the root element (default 'registry').
        node_name: Tag of the value elements (default 'node').
    """

    name = 'xml'
    extensions = ('.xml',)

    def decode(self, text: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        root = ET.fromstring(text)
        return self._map_of(root)

    def encode(self, tree: dict[str, Any], options: Mapping[str, Any] | None = None) -> str:
        options = options or {}
        root = ET.Element(options.get('name', 'registry'))
        node_name = options.get('node_name', 'node')
        for key, value in tree.items():
            self._add_node(root, node_name, key, value)
        return ET.tostring(root, encoding='unicode')

    def _add_node(self, parent: ET.Element, node_name: str, key: str, value: Any) -> None:
        element = ET.SubElement(parent, node_name, name=key)
        kind = kind_of(value)
        if kind is NodeKind.MAP:
            element.set('type', 'object')
            for sub_key, sub_value in value.items():
                self._add_node(element, node_name, sub_key, sub_value)
        elif kind is NodeKind.LIST:
            element.set('type', 'array')
            for index, item in enumerate(value):
                self._add_node(element, node_name, str(index), item)
        elif value is None:
            element.set('type', 'null')
        elif isinstance(value, bool):
            element.set('type', 'boolean')
            element.text = 'true' if value else 'false'
        elif isinstance(value, int):
            element.set('type', 'integer')
            element.text = str(value)
        elif isinstance(value, float):
            element.set('type', 'double')
            element.text = repr(value)
        else:
            element.set('type', 'string')
            element.text = str(value)

    def _map_of(self, element: ET.Element) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for child in element:
            key = child.get('name')
            if key is None:
                raise MalformedInputError(f"<{child.tag}> element without a 'name' attribute")
            result[key] = self._value_of(child)
        return result

    def _value_of(self, element: ET.Element) -> Any:
        node_type = element.get('type', 'string')
        text = element.text or ''
        if node_type == 'object':
            return self._map_of(element)
        if node_type == 'array':
            return [self._value_of(child) for child in element]
        if node_type == 'string':
            return text
        if node_type == 'integer':
            return int(text)
        if node_type == 'double':
            return float(text)
        if node_type == 'boolean':
            return text.strip().lower() in ('true', '1')
        if node_type == 'null':
            return None
        raise MalformedInputError(f"Unknown node type '{node_type}'")
