"""Crowd-specific exceptions for error handling."""
from __future__ import annotations
from typing import Optional


class CrowdError(Exception):
    """Base exception for all Crowd operations."""
    pass


class CrowdTransportError(CrowdError):
    """No response was received (connection, DNS, TLS or timeout failure)."""
    pass


class CrowdDecodeError(CrowdError):
    """Response body is not the JSON shape the operation expects."""
    pass


class CrowdRequestError(CrowdError):
    """Non-success HTTP status from the Crowd REST API.

    Attributes:
        status_code: HTTP status code
        status_text: HTTP reason phrase (e.g. "Bad Request")
        endpoint: URL that failed
        reason: Crowd error reason from the response body, if any
        message: Crowd error message from the response body, if any
    """

    def __init__(
        self,
        status_code: int,
        status_text: str,
        endpoint: str,
        reason: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.endpoint = endpoint
        self.reason = reason
        self.message = message
        detail = f"[{status_code} {status_text}] {endpoint}"
        if reason or message:
            detail += f": {reason or ''} {message or ''}".rstrip()
        super().__init__(detail)


class CrowdNotFoundError(CrowdRequestError):
    """Requested entity does not exist (HTTP 404)."""
    pass


class UserNotFoundError(CrowdNotFoundError):
    """Membership lookup failed - username does not exist."""
    pass


class GroupNotFoundError(CrowdNotFoundError):
    """Group lookup failed - group name does not exist."""
    pass


class GroupAlreadyExistsError(CrowdRequestError):
    """Group creation failed - a group with that name already exists."""
    pass


class InsufficientPermissionsError(CrowdRequestError):
    """Application credentials were rejected or lack required permissions."""
    pass


class SearchLimitExceededError(CrowdError):
    """Group search kept returning full pages past the configured page cap."""

    def __init__(self, query: str, max_pages: int):
        self.query = query
        self.max_pages = max_pages
        super().__init__(f"Search for {query!r} still returning full pages after {max_pages} page(s)")
