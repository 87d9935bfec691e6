"""Unit tests for the node, edge and style extractors and their helpers."""

import pytest

from cogmap_import.services.domain.decision_explorer.converter import (
    DecisionExplorerParseError,
    assemble_edges,
    get_edge_info,
    get_node_info,
    get_node_style_info,
    parse_document,
    percent_to_hex,
    recode_bold,
)
from utils.converter_helpers import assert_columns, rows


def test_node_info_joins_positions_by_refno():
    root = parse_document("""<model>
        <position concept="2" x="5" y="6"/>
        <concept id="1" style="standard">First</concept>
        <concept id="2" style="Option">Second</concept>
    </model>""")

    nodes = get_node_info(root)

    assert_columns(nodes, ["refno", "label", "type", "x", "y"])
    assert rows(nodes) == [
        {"refno": 1, "label": "First", "type": None, "x": None, "y": None},
        {"refno": 2, "label": "Second", "type": "Option", "x": 5.0, "y": 6.0},
    ]


def test_node_info_keeps_raw_coordinates():
    root = parse_document('<model><concept id="7">A</concept><position concept="7" x="-12.5" y="30"/></model>')

    node = rows(get_node_info(root))[0]

    assert (node["x"], node["y"]) == (-12.5, 30.0)


def test_node_label_includes_nested_text():
    root = parse_document('<model><concept id="1">Reduce <b>cost</b> of travel</concept></model>')

    assert rows(get_node_info(root))[0]["label"] == "Reduce cost of travel"


def test_position_for_unknown_concept_is_ignored():
    root = parse_document('<model><concept id="1">A</concept><position concept="9" x="1" y="1"/></model>')

    nodes = rows(get_node_info(root))

    assert len(nodes) == 1
    assert nodes[0]["x"] is None


def test_edge_info_reads_raw_endpoints_in_order():
    root = parse_document("""<model>
        <link linkfrom="3" linkto="1" sign="-"/>
        <link linkfrom="1" linkto="2" sign="+"/>
    </model>""")

    assert rows(get_edge_info(root)) == [
        {"from": "3", "to": "1", "polarity": "-"},
        {"from": "1", "to": "2", "polarity": "+"},
    ]


def test_assemble_edges_on_empty_table():
    root = parse_document("<model/>")

    edges = assemble_edges(get_edge_info(root))

    assert edges.empty
    assert "refno" in edges.columns


def test_style_info():
    root = parse_document("""<model>
        <conceptstyle name="standard" redpercent="0" greenpercent="0" bluepercent="0" bold="0"/>
        <conceptstyle name="Risk" redpercent="100" greenpercent="0" bluepercent="50" bold="1"/>
    </model>""")

    assert rows(get_node_style_info(root)) == [
        {"type": None, "font_colour": "#000000", "font_weight": None},
        {"type": "Risk", "font_colour": "#ff0080", "font_weight": "bold"},
    ]


def test_style_with_invalid_bold_flag_raises():
    root = parse_document('<model><conceptstyle name="X" redpercent="0" greenpercent="0" bluepercent="0" bold="2"/></model>')

    with pytest.raises(DecisionExplorerParseError, match="bold"):
        get_node_style_info(root)


class TestPercentToHex:

    @pytest.mark.parametrize("red, green, blue, expected", [
        ("100", "0", "50", "#ff0080"),
        ("0", "100", "0", "#00ff00"),
        ("100", "100", "100", "#ffffff"),
        ("0", "0", "0", "#000000"),
        ("20", "40", "60", "#336699"),
        (12.5, 0, 0, "#200000"),
    ])
    def test_conversion(self, red, green, blue, expected):
        assert percent_to_hex(red, green, blue) == expected

    def test_output_is_lowercase(self):
        colour = percent_to_hex("80", "80", "80")

        assert colour == colour.lower()
        assert colour == "#cccccc"

    def test_missing_channel_yields_none(self):
        assert percent_to_hex("100", None, "0") is None

    @pytest.mark.parametrize("value", ["101", "-1"])
    def test_out_of_range_raises(self, value):
        with pytest.raises(DecisionExplorerParseError, match="out of range"):
            percent_to_hex(value, "0", "0")

    def test_non_numeric_raises(self):
        with pytest.raises(ValueError):
            percent_to_hex("red", "0", "0")


class TestRecodeBold:

    def test_one_is_bold(self):
        assert recode_bold("1") == "bold"

    def test_zero_is_null(self):
        assert recode_bold("0") is None

    def test_missing_is_null(self):
        assert recode_bold(None) is None

    @pytest.mark.parametrize("flag", ["2", "true", "", "-1"])
    def test_other_values_raise(self, flag):
        with pytest.raises(DecisionExplorerParseError):
            recode_bold(flag)
