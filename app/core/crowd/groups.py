"""Crowd group directory operations."""
from __future__ import annotations
import logging
from typing import Iterator, List

from .client import CrowdClient
from .exceptions import (
    GroupAlreadyExistsError,
    GroupNotFoundError,
    InsufficientPermissionsError,
    SearchLimitExceededError,
    UserNotFoundError,
)
from .models import Group, GroupDetail, GroupList
from .search import active_groups_named_like

MEMBERSHIP_PATH = "rest/usermanagement/1/user/group/{scope}"
GROUP_PATH = "rest/usermanagement/1/group"
SEARCH_PATH = "search"

SEARCH_PAGE_SIZE = 16
SEARCH_MAX_PAGES = 1000

logger = logging.getLogger(__name__)


class GroupService:
    """Service for querying and creating Crowd groups."""

    def __init__(
        self,
        client: CrowdClient,
        page_size: int = SEARCH_PAGE_SIZE,
        max_pages: int = SEARCH_MAX_PAGES,
    ):
        """Initialize group service.

        Args:
            client: Crowd client carrying the authenticated session
            page_size: Search results requested per page
            max_pages: Upper bound on pages fetched by a single search
        """
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        if max_pages < 1:
            raise ValueError(f"max_pages must be positive, got {max_pages}")
        self.client = client
        self.page_size = page_size
        self.max_pages = max_pages

    def get_memberships(self, username: str, include_nested: bool = False) -> List[Group]:
        """Return the groups a user belongs to.

        Args:
            username: Crowd username
            include_nested: Also return groups inherited through other groups

        Returns:
            Groups in server order (possibly empty)

        Raises:
            UserNotFoundError: If the user does not exist
            CrowdRequestError: On any other non-200 status
            CrowdDecodeError: If the body is not a group list
        """
        scope = "nested" if include_nested else "direct"
        resp = self.client.get(MEMBERSHIP_PATH.format(scope=scope), params={"username": username})

        if resp.status_code == 404:
            raise self.client.error_for(resp, UserNotFoundError)
        if resp.status_code != 200:
            raise self.client.error_for(resp)

        return GroupList.from_dict(self.client.json(resp)).groups

    def get_direct_memberships(self, username: str) -> List[Group]:
        return self.get_memberships(username, include_nested=False)

    def get_nested_memberships(self, username: str) -> List[Group]:
        return self.get_memberships(username, include_nested=True)

    def get_group(self, name: str) -> GroupDetail:
        """Fetch one group with its attributes expanded.

        Raises:
            GroupNotFoundError: If no group has that name
            CrowdRequestError: On any other non-200 status
            CrowdDecodeError: If the body is not a group record
        """
        resp = self.client.get(GROUP_PATH, params={"groupname": name, "expand": "attributes"})

        if resp.status_code == 404:
            raise self.client.error_for(resp, GroupNotFoundError)
        if resp.status_code != 200:
            raise self.client.error_for(resp)

        return GroupDetail.from_dict(self.client.json(resp))

    def create_group(self, name: str, description: str = "") -> bool:
        """Create an active group of type GROUP.

        Returns:
            True once Crowd answers 201 Created

        Raises:
            GroupAlreadyExistsError: If the name is taken
            InsufficientPermissionsError: If the application may not create groups
            CrowdRequestError: On any other non-201 status
        """
        payload = {
            "name": name,
            "type": "GROUP",
            "description": description,
            "active": True,
        }
        resp = self.client.post(GROUP_PATH, json=payload)

        if resp.status_code == 201:
            logger.info(f"Group created | name={name}")
            return True
        if resp.status_code in (401, 403):
            raise self.client.error_for(resp, InsufficientPermissionsError)
        if resp.status_code == 409:
            raise self.client.error_for(resp, GroupAlreadyExistsError)

        error = self.client.error_for(resp)
        # Crowd reports duplicates as 400 INVALID_GROUP "Group <name> already exists"
        if resp.status_code == 400 and "already exists" in (error.message or "").lower():
            raise GroupAlreadyExistsError(
                error.status_code, error.status_text, error.endpoint,
                reason=error.reason, message=error.message,
            )
        raise error

    def find_groups(self, substring: str) -> List[Group]:
        """Return every active group whose name contains ``substring``.

        Pages are fetched until one comes back short, so a result count that is
        an exact multiple of the page size costs one extra, empty request.

        Raises:
            CrowdRequestError: On a non-200 status for any page
            CrowdDecodeError: If a page is not a group list
            SearchLimitExceededError: If ``max_pages`` full pages were returned
        """
        groups = list(self.iter_groups(substring))
        logger.debug(f"Group search complete | query={substring!r} | results={len(groups)}")
        return groups

    def iter_groups(self, substring: str) -> Iterator[Group]:
        """Lazily yield matching groups, one search page at a time."""
        body = active_groups_named_like(substring)
        for page in range(self.max_pages):
            page_groups = self._search_page(body, page)
            yield from page_groups
            if len(page_groups) < self.page_size:
                return
        raise SearchLimitExceededError(substring, self.max_pages)

    def _search_page(self, body: dict, page: int) -> List[Group]:
        params = {
            "entity-type": "group",
            "max-results": self.page_size,
            "start-index": self.page_size * page,
        }
        resp = self.client.post(SEARCH_PATH, params=params, json=body)
        if resp.status_code != 200:
            raise self.client.error_for(resp)

        groups = GroupList.from_dict(self.client.json(resp)).groups
        logger.debug(f"Search page {page} returned {len(groups)} group(s)")
        return groups
