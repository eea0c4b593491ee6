"""
Graph Fetcher — requests traffic graphs from the SP web services API.

GET https://{ipaddress}/arborws/traffic/?api_key=...&graph=<xml>&query=<xml>

The service answers with a PNG on success. Anything else is expected to be an
XML document listing one or more ``<error>`` elements. The response bytes are
sniffed rather than trusted by Content-Type, since the appliance does not
label error documents reliably.
"""

import xml.etree.ElementTree as ET
from typing import List
from urllib.parse import quote, urlencode

import filetype

from .errors import EmptyResponseError, MalformedGraphResponseError, ServiceXMLError
from .models import GraphSpec, QuerySpec
from .transport import Transport
from .xml_documents import build_graph_xml, build_query_xml

PNG_MIME_TYPE = "image/png"


def xml_errors(body: bytes) -> List[str]:
    """Return the text of every ``<error>`` element in ``body``.

    Raises:
        MalformedGraphResponseError: The body is not XML.
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        raise MalformedGraphResponseError()
    return ["".join(error.itertext()) for error in root.iter("error")]


class GraphFetcher:
    """Builds the web services URL and classifies what comes back.

    Attributes:
        base_url: Web services root, always ending in "/".
        debug: If True, print the size of each graph received.
    """

    def __init__(self, base_url: str, api_key: str, transport: Transport, debug: bool = False):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.debug = debug
        self._api_key = api_key
        self._transport = transport

    def traffic_url(self, query_xml: str, graph_xml: str) -> str:
        params = {"api_key": self._api_key, "graph": graph_xml, "query": query_xml}
        return f"{self.base_url}traffic/?{urlencode(params, quote_via=quote)}"

    def fetch_xml(self, query_xml: str, graph_xml: str) -> bytes:
        """Request a graph from pre-built XML documents.

        Returns:
            The PNG image bytes.

        Raises:
            TransportError: No response was received.
            EmptyResponseError: The service returned an empty body.
            ServiceXMLError: The service returned ``<error>`` elements.
            MalformedGraphResponseError: The body was neither PNG nor error XML.
        """
        body = self._transport.request("GET", self.traffic_url(query_xml, graph_xml))

        if not body:
            raise EmptyResponseError()

        if filetype.guess_mime(body) == PNG_MIME_TYPE:
            if self.debug:
                print(f"  Received graph ({len(body)} bytes)")
            return body

        errors = xml_errors(body)
        if not errors:
            raise MalformedGraphResponseError()

        raise ServiceXMLError("".join(f"{error}\n" for error in errors), errors)

    def fetch(self, query: QuerySpec, graph: GraphSpec) -> bytes:
        return self.fetch_xml(build_query_xml(query), build_graph_xml(graph))
