"""Tests for XML to object tree conversion."""

import pytest

from oggdude_importer.markup import as_list, as_node, get_path, parse_xml_to_json


class TestParseXmlToJson:

    def test_single_child_collapses_to_object(self):
        tree = parse_xml_to_json("<Armors><Armor><Key>A</Key></Armor></Armors>")
        assert tree == {"Armors": {"Armor": {"Key": "A"}}}

    def test_repeated_children_become_list(self):
        tree = parse_xml_to_json(
            "<Armors><Armor><Key>A</Key></Armor><Armor><Key>B</Key></Armor></Armors>"
        )
        assert tree["Armors"]["Armor"] == [{"Key": "A"}, {"Key": "B"}]

    def test_text_is_trimmed(self):
        tree = parse_xml_to_json("<Armor><Name>\n   Padded Armor  \n</Name></Armor>")
        assert tree["Armor"]["Name"] == "Padded Armor"

    def test_attributes_are_merged_with_text_under_underscore(self):
        tree = parse_xml_to_json('<Sources><Source Page="12">Core Rulebook</Source></Sources>')
        assert tree["Sources"]["Source"] == {"_": "Core Rulebook", "Page": "12"}

    def test_empty_element_is_empty_string(self):
        tree = parse_xml_to_json("<Armor><Description /></Armor>")
        assert tree["Armor"]["Description"] == ""

    def test_xml_declaration_and_comments(self):
        tree = parse_xml_to_json(
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<Gears><!-- generated --><Gear><Key>G</Key></Gear></Gears>"
        )
        assert tree == {"Gears": {"Gear": {"Key": "G"}}}

    def test_namespace_declarations_are_ignored(self):
        tree = parse_xml_to_json(
            '<Weapons xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">'
            "<Weapon><Key>BLASTER</Key></Weapon></Weapons>"
        )
        assert tree == {"Weapons": {"Weapon": {"Key": "BLASTER"}}}

    def test_bytes_follow_declared_encoding(self):
        data = '<?xml version="1.0" encoding="ISO-8859-1"?><Gear><Name>Café</Name></Gear>'
        tree = parse_xml_to_json(data.encode("latin-1"))
        assert tree == {"Gear": {"Name": "Café"}}

    def test_bytes_with_utf8_bom(self):
        tree = parse_xml_to_json(b"\xef\xbb\xbf<Gears><Gear><Key>G</Key></Gear></Gears>")
        assert tree == {"Gears": {"Gear": {"Key": "G"}}}

    def test_malformed_xml_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_xml_to_json("<Armors><Armor></Armors>")


class TestGetPath:

    def test_existing_path(self):
        assert get_path({"Armors": {"Armor": [1, 2]}}, "Armors.Armor") == [1, 2]

    def test_missing_segment(self):
        assert get_path({"Armors": {}}, "Armors.Armor") is None

    def test_non_dict_intermediate(self):
        # An empty <Armors/> parses to a string
        assert get_path({"Armors": ""}, "Armors.Armor") is None

    def test_default(self):
        assert get_path(None, ["a", "b"], default=[]) == []


class TestNormalizers:

    def test_as_list(self):
        assert as_list(None) == []
        assert as_list({"a": 1}) == [{"a": 1}]
        assert as_list([1, 2]) == [1, 2]

    def test_as_node(self):
        assert as_node({"a": 1}) == {"a": 1}
        assert as_node("") == {}
        assert as_node(None) == {}
