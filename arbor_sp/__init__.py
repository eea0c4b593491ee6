"""
arbor-sp-client — Python client for the Arbor/NETSCOUT SP REST and web services APIs.

This package provides:

  client.py         ArborClient, the public entry point for both APIs.
  config.py         ArborConfig, connection settings from a dict or .env file.
  models.py         Filter, QuerySpec, GraphSpec and the Result every call returns.
  errors.py         The error types a Result can carry.
  rest.py           REST request construction and response decoding.
  pagination.py     Page walking and client-side search over REST collections.
  xml_documents.py  Query and graph XML documents for the traffic web service.
  graphs.py         Traffic graph requests and PNG/error classification.
  transport.py      The requests.Session wrapper all HTTP goes through.
  output_manager.py Timestamped result folders for the arbor-sp command.

Install with: pip install -e .
"""

from .client import ArborClient
from .config import ArborConfig
from .errors import (
    ArborError,
    DecodeError,
    EmptyResponseError,
    MalformedGraphResponseError,
    ServicePayloadError,
    ServiceXMLError,
    TransportError,
)
from .models import Filter, GraphSpec, QuerySpec, Result
from .xml_documents import build_graph_xml, build_query_xml

__version__ = "0.1.0"
