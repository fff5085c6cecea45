import pytest

from activities.config import settings
from activities.core.session import is_gated, redirect_target


@pytest.mark.parametrize("path,authenticated,expected", [
    ("/", False, "/login"),
    ("/todos", False, "/login"),
    ("/login", False, None),
    ("/register", False, None),
    ("/login", True, "/"),
    ("/register", True, "/"),
    ("/notes", True, None),
])
def test_redirect_rules(path, authenticated, expected):
    assert redirect_target(path, authenticated) == expected


def test_api_and_probes_are_not_gated():
    assert not is_gated("/api/v1/todos")
    assert not is_gated("/health")
    assert not is_gated("/openapi.json")
    assert is_gated("/photos")


def test_protected_page_redirects_to_login(client):
    r = client.get("/todos", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/login"


def test_login_page_redirects_home_when_signed_in(client, alice):
    client.cookies.set(settings.access_token_cookie, alice["token"])

    r = client.get("/login", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/"


def test_login_page_renders_when_signed_out(client):
    r = client.get("/login")
    assert r.status_code == 200
    assert "Sign in" in r.text


def test_expired_session_is_refreshed(client, supabase):
    supabase.auth.add_user("frank@example.com", "pw-frank")
    tokens = client.post("/api/v1/auth/login", json={"email": "frank@example.com", "password": "pw-frank"}).json()
    supabase.auth.expire(tokens["access_token"])

    r = client.get("/todos", follow_redirects=False)
    assert r.status_code == 200
    new_token = r.cookies.get(settings.access_token_cookie)
    assert new_token and new_token != tokens["access_token"]


def test_invalid_refresh_token_redirects(client, supabase):
    client.cookies.set(settings.access_token_cookie, "stale")
    client.cookies.set(settings.refresh_token_cookie, "unknown")

    r = client.get("/notes", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/login"


def test_api_reads_are_not_redirected(client):
    r = client.get("/api/v1/notes", follow_redirects=False)
    assert r.status_code == 200
    assert r.json() == []
