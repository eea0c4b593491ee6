"""
REST API access — request construction and response decoding.

Every call to the SP REST API goes through RestClient.call(), which sends the
JSON:API content type and the X-Arbux-APIToken header, then hands the raw
body to decode_response().

decode_response() checks, in this order, and stops at the first problem:

  1. empty body                 -> EmptyResponseError
  2. not JSON, or empty JSON    -> DecodeError
  3. non-empty "errors" array   -> ServicePayloadError
  4. otherwise                  -> the decoded document

Transport failures never reach the decoder; Transport raises them first.
"""

import json
from typing import Any, Dict, List, Optional

from .errors import DecodeError, EmptyResponseError, ServicePayloadError
from .settings import DEFAULT_PER_PAGE, REST_CONTENT_TYPE, REST_TOKEN_HEADER
from .transport import Transport

# Order in which fields of one error object are reported
ERROR_FIELDS = ("id", "message", "title", "detail")


def format_errors(errors: List[Dict[str, Any]]) -> str:
    """Flatten a JSON:API ``errors`` array into one message.

    Each present field of each error object is written on its own line,
    followed by a newline and a single space.
    """
    message = ""
    for error in errors:
        for key in ERROR_FIELDS:
            if error.get(key) is not None:
                message += f"{error[key]}\n "
    return message


def decode_response(body: bytes) -> Dict[str, Any]:
    """Decode one REST response body.

    Raises:
        EmptyResponseError: The body is empty.
        DecodeError: The body is not JSON or decodes to nothing.
        ServicePayloadError: The document carries an ``errors`` array.
    """
    if not body:
        raise EmptyResponseError()

    try:
        result = json.loads(body)
    except ValueError:
        raise DecodeError()

    if not result:
        raise DecodeError()

    if isinstance(result, dict) and result.get("errors"):
        errors = result["errors"]
        raise ServicePayloadError(format_errors(errors), errors)

    return result


class RestClient:
    """Sends requests to ``https://{ipaddress}/api/sp/``.

    Attributes:
        base_url: REST root, always ending in "/".
        debug: If True, print each call.
    """

    def __init__(self, base_url: str, rest_token: str, transport: Transport, debug: bool = False):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.debug = debug
        self._transport = transport
        self._headers = {
            "Content-Type": REST_CONTENT_TYPE,
            REST_TOKEN_HEADER: rest_token,
        }

    def url(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def call(self, path: str, method: str = "GET", payload: Optional[Dict] = None) -> Dict[str, Any]:
        """Issue one REST request and decode the answer.

        Args:
            path: Path below the REST root, e.g. "managed_objects/12".
            method: GET, POST or PATCH.
            payload: Document to send as the JSON body (POST/PATCH only).

        Returns:
            The decoded JSON document.
        """
        data = json.dumps(payload) if payload is not None else None
        body = self._transport.request(method, self.url(path), headers=self._headers, data=data)
        return decode_response(body)

    def get_by_id(self, endpoint: str, object_id: str) -> Dict[str, Any]:
        return self.call(f"{endpoint}/{object_id}")

    def get_page(self, endpoint: str, per_page: int = DEFAULT_PER_PAGE, page: Optional[int] = None) -> Dict[str, Any]:
        """Fetch one page of an endpoint collection.

        GET {base_url}{endpoint}/?perPage={per_page}&page={page}
        """
        path = f"{endpoint}/?perPage={per_page}"
        if page is not None:
            path += f"&page={page}"

        if self.debug:
            print(f"  Fetching {endpoint} page {page or 1} ({per_page} per page)")

        return self.call(path)
