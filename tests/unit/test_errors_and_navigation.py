from unittest.mock import Mock

import pytest

from uiquery.core.errors import BadMetadata, ErrorKind, ExpectationNotMet, NoBaseUrl, UIQueryError, error_message
from uiquery.core.navigation import resolve_url, visit
from uiquery.utils import config


@pytest.fixture
def no_base_url(monkeypatch):
    monkeypatch.delenv("BASE_URL", raising=False)
    config.reset_configuration()
    yield
    config.reset_configuration()


def test_pass_through_errors_keep_caller_message():
    assert str(ExpectationNotMet("expected 2 rows")) == "expected 2 rows"
    assert str(BadMetadata("bad user agent")) == "bad user agent"
    assert error_message(ErrorKind.bad_metadata, "x") == "x"


def test_error_kinds_and_hierarchy():
    assert ExpectationNotMet.kind == ErrorKind.expectation_not_met
    assert BadMetadata.kind == ErrorKind.bad_metadata
    assert NoBaseUrl.kind == ErrorKind.no_base_url
    assert issubclass(ExpectationNotMet, AssertionError)
    for cls in (ExpectationNotMet, BadMetadata, NoBaseUrl):
        assert issubclass(cls, UIQueryError)


def test_no_base_url_message_names_both_ways_to_configure():
    err = NoBaseUrl("/users")
    msg = str(err)
    assert msg.startswith("You called visit with /users, but did not set a base_url.")
    assert "BASE_URL=http://localhost:4001" in msg
    assert 'uiquery.configure(base_url="http://localhost:4001")' in msg
    assert "live_server.url" in msg
    assert err.relative_path == "/users"


def test_resolve_url_passes_absolute_urls_through(no_base_url):
    assert resolve_url("https://example.com/a") == "https://example.com/a"
    assert resolve_url("about:blank") == "about:blank"


def test_resolve_url_scheme_is_case_insensitive(no_base_url):
    assert resolve_url("HTTPS://example.com/a", base_url="") == "HTTPS://example.com/a"
    assert resolve_url("About:blank") == "About:blank"


def test_resolve_url_scheme_relative_takes_base_scheme():
    assert resolve_url("//cdn.example.com/x", base_url="https://app.example.com") == "https://cdn.example.com/x"


def test_resolve_url_scheme_relative_without_base_url_raises(no_base_url):
    with pytest.raises(NoBaseUrl):
        resolve_url("//cdn.example.com/x")


def test_resolve_url_joins_relative_paths():
    assert resolve_url("/users", base_url="http://localhost:4001/") == "http://localhost:4001/users"
    assert resolve_url("users", base_url="http://localhost:4001") == "http://localhost:4001/users"


def test_resolve_url_without_base_url_raises(no_base_url):
    with pytest.raises(NoBaseUrl) as exc:
        resolve_url("/users")
    assert "You called visit with /users" in str(exc.value)


def test_configure_sets_base_url_process_wide(no_base_url):
    config.configure(base_url="http://localhost:4001/")
    assert config.get_settings().BASE_URL == "http://localhost:4001"
    assert resolve_url("/users") == "http://localhost:4001/users"


def test_base_url_from_environment(no_base_url, monkeypatch):
    monkeypatch.setenv("BASE_URL", "http://127.0.0.1:8000")
    config.get_settings.cache_clear()
    assert resolve_url("/") == "http://127.0.0.1:8000/"


def test_visit_navigates_to_resolved_url(no_base_url):
    page = Mock()
    settings = config.Settings(BASE_URL="http://localhost:4001", PAGE_LOAD_TIMEOUT=5000)
    url = visit(page, "/login", settings=settings)
    assert url == "http://localhost:4001/login"
    page.goto.assert_called_once_with(url, wait_until="domcontentloaded", timeout=5000)


def test_visit_without_base_url_never_touches_the_page(no_base_url):
    page = Mock()
    with pytest.raises(NoBaseUrl):
        visit(page, "/login", settings=config.Settings(BASE_URL=None))
    page.goto.assert_not_called()
