"""
Arbor SP Client — one object for both SP APIs.

  REST API (https://{ipaddress}/api/sp/)
      Managed objects and notification groups: read by ID, page through a
      collection with client-side search, create and change.

  Web services API (https://{ipaddress}/arborws/)
      Traffic graphs rendered as PNG, built from a query and a graph XML
      document (see xml_documents.py).

Every public method returns a Result and never raises for a failed call.
The most recent Result's error is also kept on the client, so
has_error()/error_message() describe the last call made:

    client = ArborClient({"ipaddress": "192.0.2.10", "resttoken": "...", "apikey": "..."})
    result = client.get_managed_objects("name", "Transit A")
    if not result.ok:
        print(result.error_message)

One client keeps one requests.Session and one last-error slot. It is not
safe to share between threads; use one client per thread.
"""

from typing import Any, Callable, Dict, Iterable, Optional, Union

from .config import ArborConfig
from .errors import ArborError
from .graphs import GraphFetcher
from .models import GraphSpec, QuerySpec, Result
from .pagination import Paginator
from .rest import RestClient
from .settings import DEFAULT_PER_PAGE
from .transport import Transport
from .xml_documents import (
    asn_traffic_specs,
    build_graph_xml,
    build_query_xml,
    interface_traffic_specs,
    peer_traffic_specs,
)

MANAGED_OBJECTS = "managed_objects"
NOTIFICATION_GROUPS = "notification_groups"

# Leaves shared host detection off unless the caller supplies relationships
DEFAULT_MO_RELATIONSHIPS = {
    "shared_host_detection_settings": {
        "data": {
            "type": "shared_host_detection_setting",
            "id": "0",
        },
    },
}


class ArborClient:
    """Client for the Arbor/NETSCOUT SP REST and web services APIs.

    Attributes:
        config: Connection settings (host, credentials, TLS, timeout).
        debug: If True, print verbose request details.
    """

    def __init__(
        self,
        config: Union[ArborConfig, Dict[str, Any]],
        transport: Optional[Transport] = None,
    ):
        """Initialize the client.

        Args:
            config: An ArborConfig, or a mapping with ipaddress, hostname,
                    apikey and resttoken keys.
            transport: Transport to use; built from ``config`` when omitted.

        Raises:
            ValueError: If no ipaddress is configured.
        """
        if not isinstance(config, ArborConfig):
            config = ArborConfig.from_dict(config)
        if not config.ipaddress:
            raise ValueError("ipaddress is required")

        self.config = config
        self.debug = config.debug
        self._transport = transport or Transport(
            verify_ssl=config.verify_ssl,
            timeout=config.timeout,
            debug=config.debug,
        )
        self._rest = RestClient(config.rest_url, config.resttoken, self._transport, self.debug)
        self._paginator = Paginator(self._rest, self.debug)
        self._graphs = GraphFetcher(config.ws_url, config.apikey, self._transport, self.debug)
        self._last_error: Optional[ArborError] = None

    # ------------------------------------------------------------------
    # Error state
    # ------------------------------------------------------------------

    def has_error(self) -> bool:
        """True if the most recent call failed (fully or partially)."""
        return self._last_error is not None

    def error_message(self) -> str:
        return self._last_error.message if self._last_error else ""

    @property
    def last_error(self) -> Optional[ArborError]:
        return self._last_error

    def _run(self, operation: Callable[[], Any]) -> Result:
        self._last_error = None
        try:
            result = Result(operation())
        except ArborError as e:
            if self.debug:
                print(f"  Call failed: {e.message.strip()}")
            result = Result(error=e)
        self._last_error = result.error
        return result

    def _record(self, result: Result) -> Result:
        self._last_error = result.error
        return result

    # ------------------------------------------------------------------
    # REST: generic
    # ------------------------------------------------------------------

    def get_by_id(self, endpoint: str, object_id: str) -> Result:
        """Fetch a single object, e.g. get_by_id("managed_objects", "12")."""
        return self._run(lambda: self._rest.get_by_id(endpoint, object_id))

    def get_page(self, endpoint: str, per_page: int = DEFAULT_PER_PAGE, page: Optional[int] = None) -> Result:
        """Fetch one raw page (``data`` plus ``links``) of a collection."""
        return self._run(lambda: self._rest.get_page(endpoint, per_page, page))

    def find(
        self,
        endpoint: str,
        field: Optional[str] = None,
        search: Any = None,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Result:
        """Collect all records of a collection, keeping those whose
        ``attributes[field]`` matches ``search``.

        See pagination.matches() for the comparison rule. A Result can carry
        records and an error at the same time when a later page failed.
        """
        self._last_error = None
        return self._record(self._paginator.find(endpoint, field, search, per_page))

    # ------------------------------------------------------------------
    # REST: managed objects
    # ------------------------------------------------------------------

    def get_managed_objects(self, field: Optional[str] = None, search: Any = None, per_page: int = DEFAULT_PER_PAGE) -> Result:
        return self.find(MANAGED_OBJECTS, field, search, per_page)

    def create_managed_object(
        self,
        name: str,
        family: str,
        tags: Any,
        match_type: str,
        match: str,
        relationships: Optional[Dict] = None,
        extra_attributes: Optional[Dict[str, Any]] = None,
    ) -> Result:
        """Create a managed object.

        Args:
            name: Managed object name.
            family: "peer", "profile" or "customer".
            tags: Tags to attach, passed through as given.
            match_type: What ``match`` is, e.g. "cidr_blocks".
            match: The value to match traffic against.
            relationships: JSON:API relationships. Defaults to disabling
                           shared host detection.
            extra_attributes: Further attributes; these win over the
                              required ones on a name clash.
        """
        attributes = {
            "name": name,
            "family": family,
            "tags": tags,
            "match": match,
            "match_type": match_type,
        }
        attributes.update(extra_attributes or {})

        payload = {
            "data": {
                "attributes": attributes,
                "relationships": relationships if relationships is not None else DEFAULT_MO_RELATIONSHIPS,
            },
        }
        return self._run(lambda: self._rest.call(f"{MANAGED_OBJECTS}/", "POST", payload))

    def change_managed_object(self, object_id: str, attributes: Dict[str, Any], relationships: Optional[Dict] = None) -> Result:
        """PATCH a managed object's attributes (and relationships, if given)."""
        payload = {"data": {"attributes": attributes}}
        if relationships is not None:
            payload["data"]["relationships"] = relationships
        return self._run(lambda: self._rest.call(f"{MANAGED_OBJECTS}/{object_id}", "PATCH", payload))

    # ------------------------------------------------------------------
    # REST: notification groups
    # ------------------------------------------------------------------

    def get_notification_groups(self, field: Optional[str] = None, search: Any = None, per_page: int = DEFAULT_PER_PAGE) -> Result:
        return self.find(NOTIFICATION_GROUPS, field, search, per_page)

    def create_notification_group(
        self,
        name: str,
        email_addresses: Optional[Iterable[str]] = None,
        extra_attributes: Optional[Dict[str, Any]] = None,
    ) -> Result:
        """Create a notification group, optionally with e-mail recipients."""
        attributes: Dict[str, Any] = {"name": name}
        if email_addresses is not None:
            attributes["smtp_email_addresses"] = ",".join(email_addresses)
        attributes.update(extra_attributes or {})

        payload = {"data": {"attributes": attributes}}
        return self._run(lambda: self._rest.call(f"{NOTIFICATION_GROUPS}/", "POST", payload))

    def change_notification_group(self, group_id: str, attributes: Dict[str, Any]) -> Result:
        payload = {"data": {"attributes": attributes}}
        return self._run(lambda: self._rest.call(f"{NOTIFICATION_GROUPS}/{group_id}", "PATCH", payload))

    # ------------------------------------------------------------------
    # Web services: traffic graphs
    # ------------------------------------------------------------------

    @staticmethod
    def build_query_xml(spec: QuerySpec) -> str:
        return build_query_xml(spec)

    @staticmethod
    def build_graph_xml(spec: GraphSpec) -> str:
        return build_graph_xml(spec)

    def get_traffic_graph(self, query_xml: str, graph_xml: str) -> Result:
        """Fetch a PNG for hand-built query and graph XML documents."""
        return self._run(lambda: self._graphs.fetch_xml(query_xml, graph_xml))

    def fetch_graph(self, query: QuerySpec, graph: GraphSpec) -> Result:
        return self._run(lambda: self._graphs.fetch(query, graph))

    def get_peer_traffic_graph(self, managed_object_id: str, title: str, start_date: str = "7 days ago", end_date: str = "now") -> Result:
        """In/out/total detail graph for a peer managed object."""
        return self.fetch_graph(*peer_traffic_specs(managed_object_id, title, start_date, end_date))

    def get_interface_traffic_graph(self, interface_id: str, title: str, start_date: str = "7 days ago", end_date: str = "now") -> Result:
        """In/out/total/dropped/backbone detail graph for an interface."""
        return self.fetch_graph(*interface_traffic_specs(interface_id, title, start_date, end_date))

    def get_asn_traffic_graph(self, asn: str, start_date: str = "7 days ago", end_date: str = "now") -> Result:
        """Traffic graph for everything whose AS path contains ``asn``."""
        return self.fetch_graph(*asn_traffic_specs(asn, start_date, end_date))

    def close(self):
        self._transport.close()
