"""Builders for Crowd search restriction payloads.

Restrictions are plain dicts serialised by ``requests``; user input only ever
lands in a JSON string value and cannot change the payload structure.
"""
from __future__ import annotations
from typing import Any, Dict, List

MATCH_CONTAINS = "CONTAINS"
MATCH_EXACTLY = "EXACTLY_MATCHES"


def property_restriction(name: str, prop_type: str, value: str, match_mode: str) -> Dict[str, Any]:
    """Single property comparison, e.g. ``name CONTAINS "dev"``."""
    if not isinstance(value, str):
        raise TypeError(f"Restriction value for '{name}' must be str, got {type(value).__name__}")
    return {
        "restriction-type": "property-search-restriction",
        "property": {"name": name, "type": prop_type},
        "match-mode": match_mode,
        "value": value,
    }


def boolean_restriction(restrictions: List[Dict[str, Any]], logic: str = "and") -> Dict[str, Any]:
    """Combine restrictions with ``and``/``or``."""
    if logic not in ("and", "or"):
        raise ValueError(f"Unsupported boolean logic '{logic}'")
    return {
        "restriction-type": "boolean-search-restriction",
        "boolean-logic": logic,
        "restrictions": list(restrictions),
    }


def active_groups_named_like(substring: str) -> Dict[str, Any]:
    """Active groups whose name contains ``substring``.

    Case sensitivity of the match is decided by the Crowd server.
    """
    return boolean_restriction([
        property_restriction("name", "STRING", substring, MATCH_CONTAINS),
        property_restriction("active", "BOOLEAN", "true", MATCH_EXACTLY),
    ])
