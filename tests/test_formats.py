# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the format factory and the built-in formats."""

import json
import xml.etree.ElementTree as ET

import pytest
import yaml

from genro_registry import Format, FormatFactory, InvalidFormatError, MalformedInputError
from genro_registry.formats import (
    IniFormat,
    JsonFormat,
    XmlFormat,
    YamlFormat,
    default_factory,
)

SAMPLE = {
    'title': 'Site',
    'port': 5432,
    'ratio': 0.5,
    'debug': True,
    'empty': None,
    'database': {'host': 'localhost', 'replicas': ['db1', 'db2']},
}


class UpperFormat(Format):
    """Test format storing one key per line as KEY:VALUE."""

    name = 'upper'
    extensions = ('.up',)

    def decode(self, text, options=None):
        return dict(line.split(':', 1) for line in text.splitlines() if line)

    def encode(self, tree, options=None):
        return '\n'.join(f'{k.upper()}:{v}' for k, v in tree.items())


class TestFormatFactory:
    """Tests for FormatFactory."""

    def test_get_is_case_insensitive(self):
        """Test names are matched without case."""
        factory = FormatFactory({'json': JsonFormat})
        assert isinstance(factory.get('JSON'), JsonFormat)

    def test_instances_are_reused(self):
        """Test one instance is created per name."""
        factory = FormatFactory({'json': JsonFormat})
        assert factory.get('json') is factory.get('Json')

    def test_unknown_format_raises(self):
        """Test an unknown name raises InvalidFormatError."""
        factory = FormatFactory()
        with pytest.raises(InvalidFormatError, match="Unable to load format 'toml'"):
            factory.get('toml')

    def test_invalid_format_is_value_error(self):
        """Test InvalidFormatError can be caught as ValueError."""
        with pytest.raises(ValueError):
            FormatFactory().get('nope')

    def test_register(self):
        """Test registering a custom format."""
        factory = FormatFactory()
        factory.register('Upper', UpperFormat)
        assert 'upper' in factory
        assert factory.names() == ['upper']
        assert factory.get('upper').encode({'a': 1}) == 'A:1'

    def test_register_replaces_instance(self):
        """Test re-registering a name drops the cached instance."""
        factory = FormatFactory({'data': JsonFormat})
        first = factory.get('data')
        factory.register('data', YamlFormat)
        assert factory.get('data') is not first
        assert isinstance(factory.get('data'), YamlFormat)

    def test_for_file(self):
        """Test formats are found by file extension."""
        assert isinstance(default_factory.for_file('conf/app.YML'), YamlFormat)
        assert isinstance(default_factory.for_file('app.json'), JsonFormat)
        assert isinstance(default_factory.for_file('app.cfg'), IniFormat)

    def test_for_file_unknown_extension(self):
        """Test an unknown extension raises InvalidFormatError."""
        with pytest.raises(InvalidFormatError, match="Unable to determine"):
            default_factory.for_file('notes.txt')

    def test_default_factory_formats(self):
        """Test the built-in formats are registered."""
        for name in ('json', 'yaml', 'yml', 'ini', 'xml'):
            assert name in default_factory

    def test_base_format_is_abstract(self):
        """Test the base class does not implement decode/encode."""
        with pytest.raises(NotImplementedError):
            Format().decode('')
        with pytest.raises(NotImplementedError):
            Format().encode({})


class TestJsonFormat:
    """Tests for JsonFormat."""

    def test_round_trip(self):
        """Test encode/decode keeps values and types."""
        fmt = JsonFormat()
        assert fmt.decode(fmt.encode(SAMPLE)) == SAMPLE

    def test_encode_options(self):
        """Test indent and sort_keys options."""
        text = JsonFormat().encode({'b': 1, 'a': 2}, {'indent': 2, 'sort_keys': True})
        assert text == '{\n  "a": 2,\n  "b": 1\n}'

    def test_encode_keeps_unicode(self):
        """Test non-ASCII characters are written as they are."""
        assert JsonFormat().encode({'city': 'Torino è'}) == '{"city": "Torino è"}'

    def test_blank_document(self):
        """Test a blank document decodes to an empty tree."""
        assert JsonFormat().decode('  \n') == {}

    def test_top_level_list(self):
        """Test a top-level list is keyed by index."""
        assert JsonFormat().decode('["a", "b"]') == {'0': 'a', '1': 'b'}

    def test_top_level_scalar_raises(self):
        """Test a top-level scalar cannot be a tree."""
        with pytest.raises(MalformedInputError, match="must contain a mapping"):
            JsonFormat().decode('42')

    def test_malformed_propagates(self):
        """Test parser errors are not wrapped."""
        with pytest.raises(json.JSONDecodeError):
            JsonFormat().decode('{"a": ')


class TestYamlFormat:
    """Tests for YamlFormat."""

    def test_decode(self):
        """Test a nested YAML document."""
        text = "database:\n  host: localhost\n  port: 5432\ntags:\n  - a\n  - b\n"
        assert YamlFormat().decode(text) == {
            'database': {'host': 'localhost', 'port': 5432},
            'tags': ['a', 'b'],
        }

    def test_encode_keeps_order(self):
        """Test keys are written in tree order."""
        assert YamlFormat().encode({'b': 1, 'a': {'c': 2}}) == 'b: 1\na:\n  c: 2\n'

    def test_round_trip(self):
        """Test encode/decode keeps values and types."""
        fmt = YamlFormat()
        assert fmt.decode(fmt.encode(SAMPLE)) == SAMPLE

    def test_blank_document(self):
        """Test an empty document decodes to an empty tree."""
        assert YamlFormat().decode('') == {}

    def test_malformed_propagates(self):
        """Test parser errors are not wrapped."""
        with pytest.raises(yaml.YAMLError):
            YamlFormat().decode('a: [1, 2')


class TestIniFormat:
    """Tests for IniFormat."""

    TREE = {
        'title': 'Site',
        'debug': True,
        'database': {
            'host': 'localhost',
            'port': 5432,
            'replicas': ['db1', 'db2'],
            'pool': {'min': 1, 'max': 10},
        },
    }

    TEXT = (
        'title="Site"\n'
        'debug=true\n'
        '\n'
        '[database]\n'
        'host="localhost"\n'
        'port=5432\n'
        'replicas[]="db1"\n'
        'replicas[]="db2"\n'
        'pool[min]=1\n'
        'pool[max]=10\n'
    )

    def test_encode(self):
        """Test globals first, then sections with array keys."""
        assert IniFormat().encode(self.TREE) == self.TEXT

    def test_decode_with_sections(self):
        """Test sections become maps when processed."""
        assert IniFormat().decode(self.TEXT, {'process_sections': True}) == self.TREE

    def test_decode_without_sections(self):
        """Test section headers are ignored by default."""
        tree = IniFormat().decode(self.TEXT)
        assert tree['title'] == 'Site'
        assert tree['host'] == 'localhost'
        assert 'database' not in tree

    def test_value_types(self):
        """Test scalars are converted from their INI spelling."""
        text = (
            '; comment\n'
            '# another\n'
            'a = 1\n'
            'b = -2.5\n'
            'c = yes\n'
            'd = Off\n'
            'e = null\n'
            'f = plain text ; trailing comment\n'
            'g = "quoted \\"value\\""\n'
            "h = 'single'\n"
            'i =\n'
        )
        assert IniFormat().decode(text) == {
            'a': 1,
            'b': -2.5,
            'c': True,
            'd': False,
            'e': None,
            'f': 'plain text',
            'g': 'quoted "value"',
            'h': 'single',
            'i': '',
        }

    def test_parse_booleans_disabled(self):
        """Test booleans stay strings when parsing is disabled."""
        assert IniFormat().decode('a=yes', {'parse_booleans': False}) == {'a': 'yes'}

    def test_array_values_disabled(self):
        """Test array keys are plain keys when disabled."""
        tree = IniFormat().decode('a[]=1', {'support_array_values': False})
        assert tree == {'a[]': 1}

    def test_string_escapes_round_trip(self):
        """Test quotes and backslashes survive encoding."""
        fmt = IniFormat()
        tree = {'path': 'C:\\dir\\"x"', 'number_text': '5'}
        assert fmt.decode(fmt.encode(tree)) == tree

    def test_line_breaks_round_trip(self):
        """Test line breaks inside strings are escaped on one line."""
        fmt = IniFormat()
        tree = {'motd': 'line one\nline two\r\n', 'literal': 'a\\nb'}
        text = fmt.encode(tree)
        assert text == 'motd="line one\\nline two\\r\\n"\nliteral="a\\\\nb"\n'
        assert fmt.decode(text) == tree

    def test_comment_after_quoted_value(self):
        """Test a comment may follow the closing quote."""
        text = 'a = "v" ; note\nb = \'w\'   # other\nc = "x;y#z"\n'
        assert IniFormat().decode(text) == {'a': 'v', 'b': 'w', 'c': 'x;y#z'}

    def test_text_after_quoted_value_raises(self):
        """Test anything but a comment after the closing quote is rejected."""
        with pytest.raises(MalformedInputError, match="Line 1: malformed quoted value"):
            IniFormat().decode('a = "v" extra\n')

    def test_encode_too_deep_raises(self):
        """Test nesting INI cannot express raises MalformedInputError."""
        with pytest.raises(MalformedInputError, match="nesting below 'pool'"):
            IniFormat().encode({'db': {'pool': {'a': {'b': 1}}}})

    def test_encode_nested_without_arrays_raises(self):
        """Test lists cannot be written without array values."""
        with pytest.raises(MalformedInputError, match="without array values"):
            IniFormat().encode({'tags': ['a']}, {'support_array_values': False})

    def test_malformed_line_raises(self):
        """Test a line without '=' raises MalformedInputError."""
        with pytest.raises(MalformedInputError, match="Line 2"):
            IniFormat().decode('a=1\nbroken\n')

    def test_unterminated_section_raises(self):
        """Test an unterminated section header raises MalformedInputError."""
        with pytest.raises(MalformedInputError, match="unterminated section"):
            IniFormat().decode('[db\n')


class TestXmlFormat:
    """Tests for XmlFormat."""

    def test_encode(self):
        """Test nodes carry name and type attributes."""
        text = XmlFormat().encode({'a': 1, 'b': {'c': 'x'}})
        assert text == (
            '<registry>'
            '<node name="a" type="integer">1</node>'
            '<node name="b" type="object"><node name="c" type="string">x</node></node>'
            '</registry>'
        )

    def test_round_trip(self):
        """Test encode/decode keeps values and types."""
        fmt = XmlFormat()
        assert fmt.decode(fmt.encode(SAMPLE)) == SAMPLE

    def test_empty_string_round_trip(self):
        """Test an empty string value is kept."""
        fmt = XmlFormat()
        assert fmt.decode(fmt.encode({'a': ''})) == {'a': ''}

    def test_custom_tags(self):
        """Test root and node tag options."""
        text = XmlFormat().encode({'a': True}, {'name': 'config', 'node_name': 'entry'})
        assert text == '<config><entry name="a" type="boolean">true</entry></config>'

    def test_missing_name_raises(self):
        """Test nodes must be named."""
        with pytest.raises(MalformedInputError, match="without a 'name'"):
            XmlFormat().decode('<registry><node type="string">x</node></registry>')

    def test_unknown_type_raises(self):
        """Test unknown node types are rejected."""
        with pytest.raises(MalformedInputError, match="Unknown node type 'date'"):
            XmlFormat().decode('<registry><node name="a" type="date">x</node></registry>')

    def test_malformed_propagates(self):
        """Test parser errors are not wrapped."""
        with pytest.raises(ET.ParseError):
            XmlFormat().decode('<registry>')
