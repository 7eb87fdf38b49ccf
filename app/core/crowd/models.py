"""Read-only records parsed from Crowd REST responses."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .exceptions import CrowdDecodeError


def _require_dict(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise CrowdDecodeError(f"Expected JSON object for {what}, got {type(payload).__name__}")
    return payload


def _require_str(payload: Dict[str, Any], key: str, what: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise CrowdDecodeError(f"{what} is missing string field '{key}'")
    return value


@dataclass(frozen=True)
class Link:
    href: str = ""
    rel: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "Link":
        if payload is None:
            return cls()
        data = _require_dict(payload, "link")
        return cls(href=str(data.get("href") or ""), rel=str(data.get("rel") or ""))

    def to_dict(self) -> Dict[str, str]:
        return {"href": self.href, "rel": self.rel}


@dataclass(frozen=True)
class Group:
    """Minimal group identity plus a hyperlink to the full resource."""
    name: str
    link: Link = field(default_factory=Link)

    @classmethod
    def from_dict(cls, payload: Any) -> "Group":
        data = _require_dict(payload, "group")
        return cls(name=_require_str(data, "name", "group"), link=Link.from_dict(data.get("link")))

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "link": self.link.to_dict()}


@dataclass(frozen=True)
class GroupDetail:
    """Extended group record returned by a single-group lookup.

    The attributes collection is kept as the raw list of attribute objects;
    this client does not interpret it.
    """
    name: str
    description: str = ""
    type: str = ""
    active: bool = False
    link: Link = field(default_factory=Link)
    expand: str = ""
    attributes: List[Dict[str, Any]] = field(default_factory=list)
    attributes_link: Optional[Link] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "GroupDetail":
        data = _require_dict(payload, "group detail")

        active = data.get("active", False)
        if not isinstance(active, bool):
            raise CrowdDecodeError(f"group detail field 'active' must be boolean, got {active!r}")

        attributes: List[Dict[str, Any]] = []
        attributes_link = None
        attrs_block = data.get("attributes")
        if attrs_block is not None:
            attrs_block = _require_dict(attrs_block, "group attributes")
            attributes = attrs_block.get("attributes") or []
            if not isinstance(attributes, list):
                raise CrowdDecodeError("group attributes field 'attributes' must be a list")
            if attrs_block.get("link") is not None:
                attributes_link = Link.from_dict(attrs_block["link"])

        return cls(
            name=_require_str(data, "name", "group detail"),
            description=str(data.get("description") or ""),
            type=str(data.get("type") or ""),
            active=active,
            link=Link.from_dict(data.get("link")),
            expand=str(data.get("expand") or ""),
            attributes=list(attributes),
            attributes_link=attributes_link,
        )

    def to_dict(self) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {"attributes": list(self.attributes)}
        if self.attributes_link is not None:
            attributes["link"] = self.attributes_link.to_dict()
        return {
            "expand": self.expand,
            "link": self.link.to_dict(),
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "active": self.active,
            "attributes": attributes,
        }


@dataclass(frozen=True)
class GroupList:
    """Ordered groups from a list or search response."""
    groups: List[Group] = field(default_factory=list)
    expand: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "GroupList":
        data = _require_dict(payload, "group list")
        raw_groups = data.get("groups")
        if raw_groups is None:
            raw_groups = []
        if not isinstance(raw_groups, list):
            raise CrowdDecodeError("group list field 'groups' must be a list")
        return cls(
            groups=[Group.from_dict(item) for item in raw_groups],
            expand=str(data.get("expand") or ""),
        )

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[Group]:
        return iter(self.groups)
