"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from app.core.crowd.client import REQUEST_TIMEOUT
from app.core.crowd.groups import SEARCH_MAX_PAGES, SEARCH_PAGE_SIZE

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = REQUEST_TIMEOUT
DEFAULT_SEARCH_PAGE_SIZE = SEARCH_PAGE_SIZE
DEFAULT_SEARCH_MAX_PAGES = SEARCH_MAX_PAGES


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.debug(f"Loaded {secret_name} from /run/secrets")
                return secret_value
        except OSError as e:
            logger.warning(f"Failed to read /run/secrets/{secret_name}: {e}")

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.debug(f"Loaded {env_var} from environment (fallback)")
            return secret_value

    return None


def _require(var_name: str) -> str:
    value = os.environ.get(var_name, "").strip()
    if not value:
        raise RuntimeError(f"Environment variable {var_name} is required.")
    return value


def _int_env(var_name: str, default: int) -> int:
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{var_name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{var_name} must be positive, got {value}")
    return value


def _float_env(var_name: str, default: float) -> float:
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{var_name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var_name} must be positive, got {value}")
    return value


def _parse_headers(raw: str) -> Dict[str, str]:
    """Parse ``Name=value,Other=value`` into a header dict."""
    headers: Dict[str, str] = {}
    for item in raw.split(","):
        if not item.strip():
            continue
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Malformed header entry {item.strip()!r} (expected Name=value)")
        headers[name.strip()] = value.strip()
    return headers


@dataclass
class CrowdSettings:
    """Crowd connection configuration container."""
    crowd_url: str
    app_name: str
    app_password: str = field(repr=False, default="")
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    search_page_size: int = DEFAULT_SEARCH_PAGE_SIZE
    search_max_pages: int = DEFAULT_SEARCH_MAX_PAGES
    default_headers: Dict[str, str] = field(default_factory=dict)


def load_settings(
    crowd_url: str | None = None,
    app_name: str | None = None,
    app_password: str | None = None,
    request_timeout: float | None = None,
    search_page_size: int | None = None,
    search_max_pages: int | None = None,
) -> CrowdSettings:
    """Load Crowd settings from environment and /run/secrets.

    Explicit arguments take priority over the environment; ``None`` means
    "read it from the environment".

    Raises:
        RuntimeError: If a required value is missing
        ValueError: If a numeric or header value is malformed
    """
    crowd_url = crowd_url or _require("CROWD_URL")
    app_name = app_name or _require("CROWD_APP_NAME")

    app_password = app_password or _load_secret_from_file("crowd_app_password", "CROWD_APP_PASSWORD")
    if not app_password:
        raise RuntimeError("CROWD_APP_PASSWORD not found in /run/secrets or environment")

    if request_timeout is None:
        request_timeout = _float_env("CROWD_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)
    if search_page_size is None:
        search_page_size = _int_env("CROWD_SEARCH_PAGE_SIZE", DEFAULT_SEARCH_PAGE_SIZE)
    if search_max_pages is None:
        search_max_pages = _int_env("CROWD_SEARCH_MAX_PAGES", DEFAULT_SEARCH_MAX_PAGES)
    if request_timeout <= 0 or search_page_size < 1 or search_max_pages < 1:
        raise ValueError("Timeout, page size and max pages must be positive")

    settings = CrowdSettings(
        crowd_url=crowd_url,
        app_name=app_name,
        app_password=app_password,
        request_timeout=request_timeout,
        search_page_size=search_page_size,
        search_max_pages=search_max_pages,
        default_headers=_parse_headers(os.environ.get("CROWD_DEFAULT_HEADERS", "")),
    )
    logger.info(f"Crowd settings loaded | url={crowd_url} | app={app_name}")
    return settings
