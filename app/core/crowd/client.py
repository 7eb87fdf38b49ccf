"""Low-level HTTP client for the Crowd REST API.

Holds one authenticated ``requests.Session`` for the lifetime of the client
and maps transport, status and decoding failures to typed exceptions.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional
from urllib.parse import urljoin

import requests

from .exceptions import CrowdDecodeError, CrowdRequestError, CrowdTransportError

if TYPE_CHECKING:
    from app.config.settings import CrowdSettings

REQUEST_TIMEOUT = 10.0

logger = logging.getLogger(__name__)


class CrowdClient:
    """HTTP client for the Crowd REST API.

    The session is built once here: application credentials as HTTP basic
    auth, JSON headers, caller default headers and the cookie jar. Requests
    never reassign any of it.

    Usage:
        client = CrowdClient("https://crowd.example.com/crowd/", "my-app", "secret")
        resp = client.get("rest/usermanagement/1/group", params={"groupname": "devs"})
    """

    def __init__(
        self,
        base_url: str,
        app_name: str,
        app_password: str,
        default_headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """Initialize Crowd client.

        Args:
            base_url: Crowd base URL (e.g. https://crowd.example.com/crowd/)
            app_name: Crowd application name
            app_password: Crowd application password
            default_headers: Extra headers sent with every request
            session: Pre-built session to reuse (its cookie jar is kept)
            timeout: Per-request timeout in seconds
        """
        if not base_url:
            raise ValueError("Crowd base URL is required")
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout

        self.session = session if session is not None else requests.Session()
        self.session.auth = (app_name, app_password)
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })
        if default_headers:
            self.session.headers.update(default_headers)

    @classmethod
    def from_settings(cls, settings: CrowdSettings, session: Optional[requests.Session] = None) -> "CrowdClient":
        """Build a client from a :class:`app.config.CrowdSettings`."""
        return cls(
            settings.crowd_url,
            settings.app_name,
            settings.app_password,
            default_headers=settings.default_headers,
            session=session,
            timeout=settings.request_timeout,
        )

    def __enter__(self) -> "CrowdClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def url_for(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip("/"))

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Execute GET request.

        Status codes are not checked here; callers decide which ones are errors.

        Raises:
            CrowdTransportError: If no response was received
        """
        return self._request("GET", path, params=params)

    def post(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Execute POST request with a JSON body.

        Raises:
            CrowdTransportError: If no response was received
        """
        return self._request("POST", path, params=params, json=json)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self.url_for(path)
        logger.debug(f"{method} {url} params={kwargs.get('params')}")
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning(f"Crowd transport failure | method={method} | url={url} | error={e}")
            raise CrowdTransportError(f"{method} {url} failed: {e}") from e
        logger.debug(f"{method} {url} -> {resp.status_code}")
        return resp

    @staticmethod
    def json(resp: requests.Response) -> Any:
        """Decode a JSON response body.

        Raises:
            CrowdDecodeError: If the body is not valid JSON
        """
        try:
            return resp.json()
        except ValueError as e:
            raise CrowdDecodeError(f"Invalid JSON from {resp.url}: {e}") from e

    @staticmethod
    def error_for(resp: requests.Response, error_cls: type = CrowdRequestError) -> CrowdRequestError:
        """Build a typed error for a failed response.

        Crowd reports failures as ``{"reason": ..., "message": ...}``; those
        fields are attached when the body carries them.
        """
        reason = message = None
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            reason = body.get("reason")
            message = body.get("message")
        logger.warning(f"Crowd request failed | status={resp.status_code} | url={resp.url} | reason={reason}")
        return error_cls(resp.status_code, resp.reason or "", resp.url, reason=reason, message=message)
