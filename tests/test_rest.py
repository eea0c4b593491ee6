"""Tests for arbor_sp.rest — response decoding and REST request construction.

The transport is a MagicMock, so no HTTP calls are made.
"""

import json
from unittest.mock import MagicMock

import pytest

from arbor_sp.errors import DecodeError, EmptyResponseError, ServicePayloadError, TransportError
from arbor_sp.rest import RestClient, decode_response, format_errors


def _rest(*bodies):
    transport = MagicMock()
    transport.request.side_effect = list(bodies)
    return RestClient("https://192.0.2.10/api/sp/", "tok-123", transport), transport


# ---------------------------------------------------------------------------
# decode_response
# ---------------------------------------------------------------------------

def test_empty_body():
    with pytest.raises(EmptyResponseError) as exc:
        decode_response(b"")
    assert exc.value.message == "Server returned no data."


def test_invalid_json():
    with pytest.raises(DecodeError) as exc:
        decode_response(b"<html>502 Bad Gateway</html>")
    assert exc.value.message == "Unable to decode json output."


def test_empty_json_document():
    with pytest.raises(DecodeError):
        decode_response(b"{}")


def test_errors_array():
    body = json.dumps({
        "errors": [
            {"id": "e1", "title": "Invalid attribute", "detail": "name is required"},
            {"message": "second"},
        ]
    }).encode()
    with pytest.raises(ServicePayloadError) as exc:
        decode_response(body)
    assert exc.value.message == "e1\n Invalid attribute\n name is required\n second\n "
    assert len(exc.value.errors) == 2


def test_empty_errors_array_is_not_an_error():
    doc = {"errors": [], "data": {"id": "1", "type": "managed_object", "attributes": {}}}
    assert decode_response(json.dumps(doc).encode()) == doc


def test_valid_document():
    doc = {"data": [{"id": "1", "type": "managed_object", "attributes": {"name": "a"}}]}
    assert decode_response(json.dumps(doc).encode()) == doc


def test_format_errors_field_order():
    errors = [{"detail": "d", "title": "t", "message": "m", "id": "i"}]
    assert format_errors(errors) == "i\n m\n t\n d\n "


def test_format_errors_skips_null_fields():
    assert format_errors([{"id": None, "title": "t"}]) == "t\n "


# ---------------------------------------------------------------------------
# RestClient
# ---------------------------------------------------------------------------

def test_call_sends_headers():
    rest, transport = _rest(b'{"data": {"id": "12"}}')
    rest.get_by_id("managed_objects", "12")
    args, kwargs = transport.request.call_args
    assert args == ("GET", "https://192.0.2.10/api/sp/managed_objects/12")
    assert kwargs["headers"]["Content-Type"] == "application/vnd.api+json"
    assert kwargs["headers"]["X-Arbux-APIToken"] == "tok-123"
    assert kwargs["data"] is None


def test_call_serializes_payload():
    rest, transport = _rest(b'{"data": {"id": "7"}}')
    rest.call("notification_groups/", "POST", {"data": {"attributes": {"name": "noc"}}})
    args, kwargs = transport.request.call_args
    assert args[0] == "POST"
    assert json.loads(kwargs["data"]) == {"data": {"attributes": {"name": "noc"}}}


def test_get_page_url():
    rest, transport = _rest(b'{"data": []}', b'{"data": []}')
    rest.get_page("managed_objects", 25, 3)
    rest.get_page("managed_objects", 25)
    urls = [c[0][1] for c in transport.request.call_args_list]
    assert urls == [
        "https://192.0.2.10/api/sp/managed_objects/?perPage=25&page=3",
        "https://192.0.2.10/api/sp/managed_objects/?perPage=25",
    ]


def test_base_url_without_trailing_slash():
    rest = RestClient("https://192.0.2.10/api/sp", "tok", MagicMock())
    assert rest.url("managed_objects/1") == "https://192.0.2.10/api/sp/managed_objects/1"


def test_transport_error_propagates():
    rest, transport = _rest(TransportError("Connection refused"))
    with pytest.raises(TransportError):
        rest.get_by_id("managed_objects", "1")
