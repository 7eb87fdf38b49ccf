import pytest

from app.config import settings
from app.config.settings import _load_secret_from_file, _parse_headers, load_settings


@pytest.fixture(autouse=True)
def crowd_env(monkeypatch, tmp_path):
    """Point /run/secrets at an empty directory and set the required variables."""
    real_path = settings.Path

    def fake_path(target):
        if str(target) == "/run/secrets":
            return tmp_path
        return real_path(target)

    monkeypatch.setattr(settings, "Path", fake_path)
    for var in (
        "CROWD_REQUEST_TIMEOUT",
        "CROWD_SEARCH_PAGE_SIZE",
        "CROWD_SEARCH_MAX_PAGES",
        "CROWD_DEFAULT_HEADERS",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("CROWD_URL", "https://crowd.test/crowd")
    monkeypatch.setenv("CROWD_APP_NAME", "app")
    monkeypatch.setenv("CROWD_APP_PASSWORD", "env-secret")
    return tmp_path


def test_load_settings_defaults():
    cfg = load_settings()
    assert cfg.crowd_url == "https://crowd.test/crowd"
    assert cfg.app_name == "app"
    assert cfg.app_password == "env-secret"
    assert cfg.request_timeout == 10.0
    assert cfg.search_page_size == 16
    assert cfg.search_max_pages == 1000
    assert cfg.default_headers == {}


def test_password_not_in_repr():
    assert "env-secret" not in repr(load_settings())


def test_password_prefers_run_secrets(crowd_env):
    (crowd_env / "crowd_app_password").write_text("file-secret\n")
    assert load_settings().app_password == "file-secret"


def test_empty_secret_file_falls_back_to_env(crowd_env):
    (crowd_env / "crowd_app_password").write_text("   ")
    assert _load_secret_from_file("crowd_app_password", "CROWD_APP_PASSWORD") == "env-secret"


@pytest.mark.parametrize("var", ["CROWD_URL", "CROWD_APP_NAME", "CROWD_APP_PASSWORD"])
def test_missing_required_value(monkeypatch, var):
    monkeypatch.delenv(var, raising=False)
    with pytest.raises(RuntimeError) as exc:
        load_settings()
    assert var in str(exc.value)


def test_numeric_overrides(monkeypatch):
    monkeypatch.setenv("CROWD_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("CROWD_SEARCH_PAGE_SIZE", "50")
    monkeypatch.setenv("CROWD_SEARCH_MAX_PAGES", "3")
    cfg = load_settings()
    assert cfg.request_timeout == 2.5
    assert cfg.search_page_size == 50
    assert cfg.search_max_pages == 3


@pytest.mark.parametrize(
    "var,value",
    [
        ("CROWD_SEARCH_PAGE_SIZE", "sixteen"),
        ("CROWD_SEARCH_PAGE_SIZE", "0"),
        ("CROWD_SEARCH_MAX_PAGES", "-1"),
        ("CROWD_REQUEST_TIMEOUT", "soon"),
    ],
)
def test_malformed_numbers_rejected(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ValueError):
        load_settings()


def test_default_headers(monkeypatch):
    monkeypatch.setenv("CROWD_DEFAULT_HEADERS", "X-Env=prod, X-Team = iam ,")
    assert load_settings().default_headers == {"X-Env": "prod", "X-Team": "iam"}


def test_parse_headers_rejects_malformed_entry():
    with pytest.raises(ValueError):
        _parse_headers("X-Env")


def test_explicit_arguments_override_environment(crowd_env, monkeypatch):
    (crowd_env / "crowd_app_password").write_text("file-secret")
    monkeypatch.setenv("CROWD_SEARCH_PAGE_SIZE", "50")
    cfg = load_settings(
        crowd_url="https://other.test/crowd",
        app_password="cli-secret",
        search_page_size=8,
    )
    assert cfg.crowd_url == "https://other.test/crowd"
    assert cfg.app_name == "app"
    assert cfg.app_password == "cli-secret"
    assert cfg.search_page_size == 8


@pytest.mark.parametrize(
    "override",
    [{"request_timeout": 0}, {"search_page_size": 0}, {"search_max_pages": -2}],
)
def test_explicit_non_positive_numbers_rejected(override):
    with pytest.raises(ValueError):
        load_settings(**override)


def test_defaults_match_library_constants():
    from app.core.crowd import client, groups

    assert settings.DEFAULT_REQUEST_TIMEOUT == client.REQUEST_TIMEOUT
    assert settings.DEFAULT_SEARCH_PAGE_SIZE == groups.SEARCH_PAGE_SIZE
    assert settings.DEFAULT_SEARCH_MAX_PAGES == groups.SEARCH_MAX_PAGES
    assert settings.CrowdSettings("u", "a").search_page_size == groups.SEARCH_PAGE_SIZE
