"""
Paginator — walks every page of a REST collection.

The SP REST API has no server-side search, so find() fetches pages one after
another and filters records on the client. The number of pages comes from
the ``page`` parameter of the first response's ``links.last`` URL; without
it the collection is treated as a single page.

A failure on page 1 means nothing was found. A failure on a later page ends
the walk early: the records gathered so far are still returned, alongside
the error, so callers can decide whether a partial list is good enough.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from .errors import ArborError, DecodeError
from .models import Result
from .rest import RestClient
from .settings import DEFAULT_PER_PAGE


def total_pages(page: Dict[str, Any]) -> int:
    """Read the page count from ``links.last``; 1 when it is absent or unusable."""
    links = page.get("links")
    last = links.get("last") if isinstance(links, dict) else None
    if not last or not isinstance(last, str):
        return 1

    values = parse_qs(urlparse(last).query).get("page")
    if not values:
        return 1

    try:
        return max(int(values[0]), 1)
    except ValueError:
        return 1


def _records(page: Dict[str, Any]) -> List[Dict[str, Any]]:
    data = page.get("data")
    if not isinstance(data, list):
        return []
    return [record for record in data if isinstance(record, dict)]


def _normalize(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return value
    text = str(value).strip()
    try:
        number = Decimal(text)
    except InvalidOperation:
        return text
    return number if number.is_finite() else text


def matches(record: Dict[str, Any], field: str, search: Any) -> bool:
    """Check whether ``record.attributes[field]`` equals ``search``.

    The attribute must exist and be non-null. Booleans compare as
    "true"/"false", numeric values (numbers or numeric strings) compare by
    value, and anything else compares as a trimmed string. The appliance
    returns some numeric attributes as strings, so ``"42"`` matches ``42``.
    """
    attributes = record.get("attributes")
    if not isinstance(attributes, dict):
        return False
    value = attributes.get(field)
    if value is None or search is None:
        return False
    return _normalize(value) == _normalize(search)


class Paginator:
    """Drives repeated RestClient.get_page() calls across a collection.

    Attributes:
        debug: If True, print progress for every page.
    """

    def __init__(self, rest: RestClient, debug: bool = False):
        self._rest = rest
        self.debug = debug

    def _get_page(self, endpoint: str, per_page: int, page: int) -> Dict[str, Any]:
        result = self._rest.get_page(endpoint, per_page, page)
        if not isinstance(result, dict):
            raise DecodeError()
        return result

    def find(
        self,
        endpoint: str,
        field: Optional[str] = None,
        search: Any = None,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Result:
        """Collect every record of ``endpoint``, optionally filtered.

        Args:
            endpoint: Collection name, e.g. "managed_objects".
            field: Attribute to match on. When None, every record is kept.
            search: Value ``attributes[field]`` must equal (see matches()).
            per_page: Page size requested from the server.

        Returns:
            Result whose value is the list of records in page order. If a
            later page failed, the list holds what was gathered before it and
            ``error`` is set.
        """
        records: List[Dict[str, Any]] = []

        try:
            page = self._get_page(endpoint, per_page, 1)
        except ArborError as e:
            return Result(records, e)

        pages = total_pages(page)
        current = 1

        while True:
            for record in _records(page):
                if field is None or matches(record, field, search):
                    records.append(record)

            if self.debug:
                print(f"  Page {current}/{pages} of {endpoint}: {len(records)} record(s) so far")

            current += 1
            if current > pages:
                break

            try:
                page = self._get_page(endpoint, per_page, current)
            except ArborError as e:
                # Keep what we have; the caller sees both the records and the error
                if self.debug:
                    print(f"  Stopped at page {current}: {e.message.strip()}")
                return Result(records, e)

            # The collection may have shrunk since the first page was read
            if not _records(page):
                break

        return Result(records)
