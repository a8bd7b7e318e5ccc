# campfire/services/connection.py

from __future__ import annotations

import xml.etree.ElementTree as ElementTree
from typing import Any, Dict, Optional

import httpx

from campfire.core.config import settings
from campfire.core.errors import AuthenticationFailed, HTTPError, RequestFailed
from campfire.core.logging import get_logger

logger = get_logger(__name__)

USER_AGENT = "campfire-rooms/0.1.0"

# ============================================================================
# HTTP CONNECTION
# ============================================================================

class Connection:
    """
    Authenticated HTTP access to one Campfire account.

    Every room and user operation goes through the four request helpers
    below. Paths are relative to the account URI, and their suffix picks
    how the response body is decoded:

        /room/1/speak.json  -> JSON body decoded into a dict
        /room/1/join.xml    -> XML body decoded into {root_tag: {child_tag: text}}

    An empty body always decodes to {}.

    Authentication:
        The API token is sent as the basic-auth username with a dummy
        password ("X"). Without a token, username/password are used as is.

    Errors:
        - RequestFailed: the request never got a response
        - AuthenticationFailed: 401
        - HTTPError: any other non-2xx status, redirects included

    Usage:
        with Connection("mycompany", token="abc123") as connection:
            connection.get("/rooms.json")
    """

    def __init__(
        self,
        subdomain: Optional[str] = None,
        token: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        ssl: Optional[bool] = None,
        host: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.subdomain = subdomain or settings.CAMPFIRE_SUBDOMAIN
        self.host = host or settings.CAMPFIRE_HOST
        self._ssl = settings.CAMPFIRE_SSL if ssl is None else ssl

        # Explicit credentials win over anything read from the environment
        if token is None and username is None and password is None:
            token = settings.CAMPFIRE_TOKEN
            username = settings.CAMPFIRE_USERNAME
            password = settings.CAMPFIRE_PASSWORD

        if token:
            auth = (token, "X")
        else:
            auth = (username or "", password or "")

        self.client = httpx.Client(
            base_url=self.uri,
            auth=auth,
            headers={"User-Agent": USER_AGENT},
            timeout=timeout if timeout is not None else settings.CAMPFIRE_TIMEOUT,
            transport=transport,
        )

    @property
    def uri(self) -> str:
        """Base URI of the account, without a trailing slash."""
        scheme = "https" if self._ssl else "http"
        return f"{scheme}://{self.subdomain}.{self.host}"

    @property
    def ssl(self) -> bool:
        return self._ssl

    # ------------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------------

    def get(self, path: str) -> Dict[str, Any]:
        return self._request("GET", path)

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._request("POST", path, json=body)

    def put(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", path, json=body)

    def raw_post(self, path: str, files: Dict[str, Any]) -> Dict[str, Any]:
        """POST a multipart body (see httpx's ``files=`` argument)."""
        return self._request("POST", path, files=files)

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        logger.debug("%s %s", method, path)
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise RequestFailed(f"{method} {path} failed: {e}") from e

        if response.status_code == 401:
            logger.warning(f"{method} {path} rejected: authentication failed")
            raise AuthenticationFailed(response.status_code, response.text)
        if not response.is_success:
            logger.error(f"{method} {path} returned {response.status_code}")
            raise HTTPError(response.status_code, response.text)

        return self._decode(path, response)

    @staticmethod
    def _decode(path: str, response: httpx.Response) -> Dict[str, Any]:
        if not response.content.strip():
            return {}
        if path.endswith(".json"):
            return response.json()

        root = ElementTree.fromstring(response.content)
        return {root.tag: {child.tag: child.text for child in root}}

    # ------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()
        logger.debug("Connection to %s closed", self.uri)

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
