"""
Value types shared by the REST and web services halves of the client.

Filter, QuerySpec and GraphSpec describe the two XML documents the traffic
web service needs. Result is what every public ArborClient call returns.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .errors import ArborError

UNIT_TYPES = ("bps", "pps")

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _check_xml_text(name: str, value: Optional[str]):
    if value is not None and _INVALID_XML_CHARS.search(str(value)):
        raise ValueError(f"{name} contains characters not allowed in XML: {value!r}")


@dataclass(frozen=True)
class Filter:
    """One traffic query dimension, e.g. a peer managed object or an AS path."""

    type: str
    value: Optional[str] = None
    binby: bool = False

    def __post_init__(self):
        _check_xml_text("filter type", self.type)
        _check_xml_text("filter value", self.value)


@dataclass(frozen=True)
class QuerySpec:
    """Everything that goes into a ``<query type="traffic">`` document.

    ``start_date`` and ``end_date`` are passed to the appliance verbatim, so
    relative expressions such as "7 days ago" work as well as absolute times.
    ``classes`` keeps the caller's order; it is emitted in that order.
    """

    filters: Tuple[Filter, ...] = ()
    start_date: str = "7 days ago"
    end_date: str = "now"
    unit_type: str = "bps"
    classes: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.unit_type not in UNIT_TYPES:
            raise ValueError(f"unit_type must be one of {UNIT_TYPES}, got {self.unit_type!r}")
        object.__setattr__(self, "filters", tuple(self.filters))
        object.__setattr__(self, "classes", tuple(self.classes))
        _check_xml_text("start_date", self.start_date)
        _check_xml_text("end_date", self.end_date)
        for name in self.classes:
            _check_xml_text("class", name)


@dataclass(frozen=True)
class GraphSpec:
    """Render settings for the returned PNG."""

    title: str
    y_label: str
    detail: bool = False
    width: int = 986
    height: int = 180

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"graph size must be positive, got {self.width}x{self.height}")
        _check_xml_text("title", self.title)
        _check_xml_text("y_label", self.y_label)


@dataclass
class Result:
    """Outcome of one client call.

    ``value`` holds the decoded record, the list of records, or the PNG bytes.
    ``error`` is set when the call failed. A paginated call can carry both:
    the records gathered before a later page failed, and that page's error.
    """

    value: Any = None
    error: Optional[ArborError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> str:
        return self.error.message if self.error else ""

    def unwrap(self) -> Any:
        """Return ``value``, raising the stored error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value
