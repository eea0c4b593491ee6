"""
Transport — the single place the client touches the network.

Wraps a requests.Session so connection pooling and TLS settings are shared
by every call one ArborClient makes. The HTTP status code is deliberately not
checked: the appliance reports failures inside the body (a JSON ``errors``
array or XML ``<error>`` elements), and the decoders read them from there.
"""

from typing import Dict, Optional

import requests
import urllib3

from .errors import TransportError


class Transport:
    """Issues one blocking HTTP request and returns the raw body bytes.

    Attributes:
        verify_ssl: Verify the server certificate and hostname.
        timeout: Seconds before a request is abandoned.
        debug: If True, print each request line.
    """

    def __init__(
        self,
        verify_ssl: bool = False,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
        debug: bool = False,
    ):
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.debug = debug
        self._session = session or requests.Session()
        self._session.verify = verify_ssl

        if not verify_ssl:
            # Self-signed appliance certificates would warn on every request
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[str] = None,
    ) -> bytes:
        """Send one request.

        Args:
            method: GET, POST or PATCH.
            url: Fully built URL, query string included.
            headers: Extra request headers.
            data: Request body, already serialized.

        Returns:
            The response body (may be empty).

        Raises:
            TransportError: If no response was received.
        """
        if self.debug:
            print(f"  {method} {url}")

        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        if self.debug:
            print(f"  HTTP {response.status_code}, {len(response.content)} bytes")

        return response.content

    def close(self):
        self._session.close()
