"""Tests for arbor_sp.xml_documents — query/graph documents and the stock graph helpers."""

import xml.etree.ElementTree as ET

import pytest

from arbor_sp.models import Filter, GraphSpec, QuerySpec
from arbor_sp.xml_documents import (
    asn_traffic_specs,
    build_graph_xml,
    build_query_xml,
    interface_traffic_specs,
    peer_traffic_specs,
)


def _parse(document: str) -> ET.Element:
    return ET.fromstring(document.encode("utf-8"))


# ---------------------------------------------------------------------------
# Query document
# ---------------------------------------------------------------------------

class TestQueryXML:
    @pytest.fixture()
    def peer_query(self):
        spec = QuerySpec(
            filters=[Filter("peer", "42", binby=False)],
            classes=["in", "out", "total"],
        )
        return _parse(build_query_xml(spec))

    def test_declaration(self):
        document = build_query_xml(QuerySpec())
        assert document.startswith('<?xml version="1.0" encoding="UTF-8"?>')

    def test_root(self, peer_query):
        assert peer_query.tag == "peakflow"
        assert peer_query.get("version") == "2.0"
        query = peer_query.find("query")
        assert query.get("type") == "traffic"

    def test_time_unit_search(self, peer_query):
        query = peer_query.find("query")
        assert query.find("time").attrib == {"end_ascii": "now", "start_ascii": "7 days ago"}
        assert query.find("unit").get("type") == "bps"
        assert query.find("search").attrib == {"timeout": "30", "limit": "100"}

    def test_classes_in_order(self, peer_query):
        assert [c.text for c in peer_query.iter("class")] == ["in", "out", "total"]

    def test_filter_without_binby(self, peer_query):
        filters = peer_query.findall("query/filter")
        assert len(filters) == 1
        assert filters[0].get("type") == "peer"
        assert "binby" not in filters[0].attrib
        assert filters[0].find("instance").get("value") == "42"

    def test_binby_and_no_value(self):
        spec = QuerySpec(filters=[Filter("aspath", None, binby=True)])
        node = _parse(build_query_xml(spec)).find("query/filter")
        assert node.get("binby") == "1"
        assert node.find("instance") is None

    def test_filter_without_type_is_skipped(self):
        spec = QuerySpec(filters=[Filter("", "1"), Filter("interface", "9")])
        filters = _parse(build_query_xml(spec)).findall("query/filter")
        assert [f.get("type") for f in filters] == ["interface"]

    def test_values_are_escaped(self):
        spec = QuerySpec(filters=[Filter("peer", 'a<b & "c"')], start_date="<yesterday>")
        root = _parse(build_query_xml(spec))
        assert root.find("query/filter/instance").get("value") == 'a<b & "c"'
        assert root.find("query/time").get("start_ascii") == "<yesterday>"

    def test_pps_unit(self):
        root = _parse(build_query_xml(QuerySpec(unit_type="pps")))
        assert root.find("query/unit").get("type") == "pps"

    def test_invalid_unit(self):
        with pytest.raises(ValueError):
            QuerySpec(unit_type="bytes")

    def test_control_character_in_filter_value(self):
        with pytest.raises(ValueError):
            Filter("peer", "Transit\x01A")

    def test_control_character_in_filter_type(self):
        with pytest.raises(ValueError):
            Filter("peer\x0b")

    def test_control_character_in_dates_and_classes(self):
        with pytest.raises(ValueError):
            QuerySpec(start_date="1 day\x00 ago")
        with pytest.raises(ValueError):
            QuerySpec(classes=["total", "in\x1f"])

    def test_tab_newline_and_non_ascii_allowed(self):
        assert Filter("peer", "Transit\tA\nB").value == "Transit\tA\nB"
        spec = QuerySpec(filters=[Filter("peer", "Z\u00fcrich \U0001f600")])
        node = _parse(build_query_xml(spec)).find("query/filter/instance")
        assert node.get("value") == "Z\u00fcrich \U0001f600"


# ---------------------------------------------------------------------------
# Graph document
# ---------------------------------------------------------------------------

class TestGraphXML:
    def test_detail_graph(self):
        graph = _parse(build_graph_xml(GraphSpec("Transit A", "bps", detail=True))).find("graph")
        assert graph.get("id") == "graph1"
        assert graph.find("title").text == "Transit A"
        assert graph.find("ylabel").text == "bps"
        assert graph.find("width").text == "986"
        assert graph.find("height").text == "180"
        assert graph.find("legend").text == "1"
        assert graph.find("type").text == "detail"

    def test_non_detail_graph_has_no_type(self):
        graph = _parse(build_graph_xml(GraphSpec("t", "bps", detail=False))).find("graph")
        assert graph.find("type") is None

    def test_child_order(self):
        graph = _parse(build_graph_xml(GraphSpec("t", "bps", detail=True))).find("graph")
        assert [child.tag for child in graph] == ["title", "ylabel", "width", "height", "legend", "type"]

    def test_non_positive_size(self):
        with pytest.raises(ValueError):
            GraphSpec("t", "bps", width=0)

    def test_control_character_in_title(self):
        with pytest.raises(ValueError):
            GraphSpec("Transit\x01A", "bps")

    def test_control_character_in_y_label(self):
        with pytest.raises(ValueError):
            GraphSpec("Transit A", "b\x08ps")


# ---------------------------------------------------------------------------
# Stock graphs
# ---------------------------------------------------------------------------

def test_peer_specs():
    query, graph = peer_traffic_specs("12", "Transit A")
    assert query.filters == (Filter("peer", "12", False),)
    assert query.classes == ("in", "out", "total")
    assert (query.start_date, query.end_date) == ("7 days ago", "now")
    assert graph.detail is True
    assert graph.y_label == "bps"


def test_interface_specs():
    query, graph = interface_traffic_specs("3421", "xe-0/0/1", "1 day ago", "now")
    assert query.filters == (Filter("interface", "3421", False),)
    assert query.classes == ("in", "out", "total", "dropped", "backbone")
    assert query.start_date == "1 day ago"
    assert graph.detail is True


def test_asn_specs():
    query, graph = asn_traffic_specs("64512")
    assert query.filters == (Filter("aspath", "_64512_", binby=True),)
    assert query.classes == ()
    assert (graph.width, graph.height) == (986, 270)
    assert graph.detail is False
    assert graph.title == "Traffic to AS64512"
    assert graph.y_label == "bps (-In / +Out)"

    root = _parse(build_query_xml(query))
    assert root.find("query/class") is None
    node = root.find("query/filter")
    assert node.get("binby") == "1"
    assert node.find("instance").get("value") == "_64512_"
