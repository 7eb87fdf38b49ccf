"""Pytest shared fixtures for the Crowd client tests."""
import json
import pathlib
import sys
from http import HTTPStatus
from types import SimpleNamespace

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from app.core.crowd import CrowdClient, GroupService

CROWD_URL = "https://crowd.test/crowd"


# ─────────────────────────────────────────────────────────────────────────────
# Fake HTTP layer
# ─────────────────────────────────────────────────────────────────────────────
def make_response(status_code: int = 200, payload=None, *, text: str | None = None, reason: str | None = None):
    """Build a real ``requests.Response`` with a canned body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason if reason is not None else HTTPStatus(status_code).phrase
    if text is None:
        text = json.dumps(payload) if payload is not None else ""
    resp._content = text.encode("utf-8")
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = "application/json"
    return resp


def group_payload(name: str) -> dict:
    return {
        "name": name,
        "link": {"href": f"{CROWD_URL}/rest/usermanagement/1/group?groupname={name}", "rel": "self"},
    }


def group_page(names) -> dict:
    return {"expand": "group", "groups": [group_payload(name) for name in names]}


class FakeSession(requests.Session):
    """Session that records requests and replays queued responses."""

    def __init__(self, responses=None):
        super().__init__()
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    def request(self, method, url, **kwargs):
        self.calls.append(SimpleNamespace(
            method=method,
            url=url,
            params=kwargs.get("params"),
            json=kwargs.get("json"),
            timeout=kwargs.get("timeout"),
        ))
        if not self.responses:
            raise AssertionError(f"Unexpected {method} {url}: no response queued")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        item.url = url
        return item


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_real_http(monkeypatch):
    """Prevent unit tests from reaching a live Crowd server."""

    def _refuse(self, method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")

    monkeypatch.setattr(requests.Session, "request", _refuse)


@pytest.fixture()
def fake_session():
    return FakeSession()


@pytest.fixture()
def crowd_client(fake_session):
    client = CrowdClient(CROWD_URL, "test-app", "test-secret", session=fake_session, timeout=3)
    yield client
    client.close()


@pytest.fixture()
def group_service(crowd_client):
    return GroupService(crowd_client)
