"""
Error taxonomy for the Arbor SP client.

Every failure a call can run into is one of these. Components raise them
internally; ArborClient catches them at its boundary and hands them back
inside a Result, so callers never see them raised.

The ``message`` of each error is the exact text callers read from
ArborClient.error_message().
"""

from typing import Dict, List, Optional


class ArborError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(ArborError):
    """Network, TLS or DNS failure before a response body was received."""


class EmptyResponseError(ArborError):
    """The server answered with an empty body."""

    def __init__(self, message: str = "Server returned no data."):
        super().__init__(message)


class DecodeError(ArborError):
    """The REST body was not JSON, or decoded to an empty structure."""

    def __init__(self, message: str = "Unable to decode json output."):
        super().__init__(message)


class ServicePayloadError(ArborError):
    """The REST API returned a non-empty ``errors`` array."""

    def __init__(self, message: str, errors: Optional[List[Dict]] = None):
        super().__init__(message)
        self.errors = errors or []


class ServiceXMLError(ArborError):
    """The web services API returned one or more ``<error>`` elements."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class MalformedGraphResponseError(ArborError):
    """The web services API returned neither a PNG nor usable error XML."""

    def __init__(self, message: str = "Unable to decode graph response."):
        super().__init__(message)
