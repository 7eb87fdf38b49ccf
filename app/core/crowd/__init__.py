"""Crowd REST API client library.

This package provides a small, testable interface to the Crowd group
management endpoints.

Architecture:
- client.py: HTTP client holding the authenticated session
- groups.py: Group lookup, creation, membership and paginated search
- search.py: Search restriction payload builders
- models.py: Read-only records parsed from responses
- exceptions.py: Typed exceptions for error handling

Usage:
    from app.core.crowd import CrowdClient, GroupService

    client = CrowdClient("https://crowd.example.com/crowd/", "my-app", "secret")
    groups = GroupService(client)
    devs = groups.find_groups("dev")
    memberships = groups.get_nested_memberships("alice")
"""
from .client import CrowdClient, REQUEST_TIMEOUT
from .exceptions import (
    CrowdError,
    CrowdTransportError,
    CrowdDecodeError,
    CrowdRequestError,
    CrowdNotFoundError,
    UserNotFoundError,
    GroupNotFoundError,
    GroupAlreadyExistsError,
    InsufficientPermissionsError,
    SearchLimitExceededError,
)
from .groups import GroupService, SEARCH_PAGE_SIZE, SEARCH_MAX_PAGES
from .models import Link, Group, GroupDetail, GroupList
from .search import property_restriction, boolean_restriction, active_groups_named_like

__all__ = [
    # Client
    "CrowdClient",
    "REQUEST_TIMEOUT",

    # Exceptions
    "CrowdError",
    "CrowdTransportError",
    "CrowdDecodeError",
    "CrowdRequestError",
    "CrowdNotFoundError",
    "UserNotFoundError",
    "GroupNotFoundError",
    "GroupAlreadyExistsError",
    "InsufficientPermissionsError",
    "SearchLimitExceededError",

    # Services
    "GroupService",
    "SEARCH_PAGE_SIZE",
    "SEARCH_MAX_PAGES",

    # Models
    "Link",
    "Group",
    "GroupDetail",
    "GroupList",

    # Search
    "property_restriction",
    "boolean_restriction",
    "active_groups_named_like",
]
