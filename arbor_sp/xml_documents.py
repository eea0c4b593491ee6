"""
Web services XML documents — the query and graph definitions.

The traffic endpoint of the SP web services API takes two XML documents, both
rooted at ``<peakflow version="2.0">``:

  query   What to measure: time range, unit, traffic classes and filters.

      <peakflow version="2.0">
        <query type="traffic">
          <time end_ascii="now" start_ascii="7 days ago"/>
          <unit type="bps"/>
          <search timeout="30" limit="100"/>
          <class>in</class>
          <filter type="peer">
            <instance value="42"/>
          </filter>
        </query>
      </peakflow>

  graph   How to draw it: title, axis label, size and legend.

      <peakflow version="2.0">
        <graph id="graph1">
          <title>Transit A</title>
          <ylabel>bps</ylabel>
          <width>986</width>
          <height>180</height>
          <legend>1</legend>
          <type>detail</type>
        </graph>
      </peakflow>

build_query_xml() and build_graph_xml() are pure: spec in, string out.
The peer/interface/ASN helpers return the (QuerySpec, GraphSpec) pairs for the
three stock graphs.
"""

import xml.etree.ElementTree as ET
from typing import Tuple

from .models import Filter, GraphSpec, QuerySpec
from .settings import SCHEMA_VERSION

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

SEARCH_TIMEOUT = 30
SEARCH_LIMIT = 100

PEER_CLASSES = ("in", "out", "total")
INTERFACE_CLASSES = ("in", "out", "total", "dropped", "backbone")

ASN_GRAPH_WIDTH = 986
ASN_GRAPH_HEIGHT = 270


def _serialize(root: ET.Element) -> str:
    ET.indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def _filter_element(parent: ET.Element, query_filter: Filter) -> ET.Element:
    node = ET.SubElement(parent, "filter", {"type": query_filter.type})
    if query_filter.binby is True:
        node.set("binby", "1")
    if query_filter.value is not None:
        ET.SubElement(node, "instance", {"value": str(query_filter.value)})
    return node


def build_query_xml(spec: QuerySpec) -> str:
    """Render the traffic query document for ``spec``.

    Filters without a type are skipped.
    """
    root = ET.Element("peakflow", {"version": SCHEMA_VERSION})
    query = ET.SubElement(root, "query", {"type": "traffic"})
    ET.SubElement(query, "time", {"end_ascii": spec.end_date, "start_ascii": spec.start_date})
    ET.SubElement(query, "unit", {"type": spec.unit_type})
    ET.SubElement(query, "search", {"timeout": str(SEARCH_TIMEOUT), "limit": str(SEARCH_LIMIT)})

    for traffic_class in spec.classes:
        ET.SubElement(query, "class").text = traffic_class

    for query_filter in spec.filters:
        if query_filter.type:
            _filter_element(query, query_filter)

    return _serialize(root)


def build_graph_xml(spec: GraphSpec) -> str:
    """Render the graph configuration document for ``spec``."""
    root = ET.Element("peakflow", {"version": SCHEMA_VERSION})
    graph = ET.SubElement(root, "graph", {"id": "graph1"})
    ET.SubElement(graph, "title").text = spec.title
    ET.SubElement(graph, "ylabel").text = spec.y_label
    ET.SubElement(graph, "width").text = str(spec.width)
    ET.SubElement(graph, "height").text = str(spec.height)
    ET.SubElement(graph, "legend").text = "1"

    if spec.detail is True:
        ET.SubElement(graph, "type").text = "detail"

    return _serialize(root)


def peer_traffic_specs(
    managed_object_id: str,
    title: str,
    start_date: str = "7 days ago",
    end_date: str = "now",
) -> Tuple[QuerySpec, GraphSpec]:
    """In/out/total detail graph for a peer managed object."""
    query = QuerySpec(
        filters=(Filter("peer", managed_object_id),),
        start_date=start_date,
        end_date=end_date,
        unit_type="bps",
        classes=PEER_CLASSES,
    )
    return query, GraphSpec(title, "bps", detail=True)


def interface_traffic_specs(
    interface_id: str,
    title: str,
    start_date: str = "7 days ago",
    end_date: str = "now",
) -> Tuple[QuerySpec, GraphSpec]:
    """Detail graph for an interface, including dropped and backbone traffic."""
    query = QuerySpec(
        filters=(Filter("interface", interface_id),),
        start_date=start_date,
        end_date=end_date,
        unit_type="bps",
        classes=INTERFACE_CLASSES,
    )
    return query, GraphSpec(title, "bps", detail=True)


def asn_traffic_specs(
    asn: str,
    start_date: str = "7 days ago",
    end_date: str = "now",
) -> Tuple[QuerySpec, GraphSpec]:
    """Traffic whose AS path contains ``asn``, binned by AS path."""
    query = QuerySpec(
        filters=(Filter("aspath", f"_{asn}_", binby=True),),
        start_date=start_date,
        end_date=end_date,
    )
    graph = GraphSpec(
        f"Traffic to AS{asn}",
        "bps (-In / +Out)",
        detail=False,
        width=ASN_GRAPH_WIDTH,
        height=ASN_GRAPH_HEIGHT,
    )
    return query, graph
