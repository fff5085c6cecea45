import pytest
from fastapi.testclient import TestClient

from activities.database import supabase_client
from activities.database.supabase_client import SupabaseClient
from activities.modules.auth.service import clear_auth_cache
from tests.fakes import FakeSupabase


@pytest.fixture
def supabase(monkeypatch):
    fake = FakeSupabase()
    # per-request data clients come from create_client; auth and admin calls use the shared slots
    monkeypatch.setattr(supabase_client, "create_client", fake.connect)
    SupabaseClient._client = fake.connect(None, None)
    SupabaseClient._auth_client = fake
    SupabaseClient._service_client = fake
    clear_auth_cache()
    yield fake
    SupabaseClient.reset_client()
    clear_auth_cache()


@pytest.fixture
def client(supabase, monkeypatch):
    from activities.main import app, limiter
    monkeypatch.setattr(limiter, "enabled", False)
    with TestClient(app) as test_client:
        yield test_client


def _signed_in(supabase, email):
    user = supabase.auth.add_user(email, "secret-password")
    token = supabase.auth.issue_token(user)
    return {"user": user, "token": token, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def alice(supabase):
    return _signed_in(supabase, "alice@example.com")


@pytest.fixture
def bob(supabase):
    return _signed_in(supabase, "bob@example.com")
