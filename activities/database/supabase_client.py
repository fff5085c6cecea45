from typing import Optional

from supabase import create_client, Client, ClientOptions
from activities.config import settings


class SupabaseClient:
    _client: Client = None
    _auth_client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Anonymous client (anon key only)"""
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_user_client(cls, access_token: Optional[str]) -> Client:
        """Per-request client; table and storage calls carry the user's JWT."""
        if not access_token:
            return cls.get_client()
        client = create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(
                headers={"Authorization": f"Bearer {access_token}"},
                auto_refresh_token=False,
                persist_session=False,
            ),
        )
        client.postgrest.auth(access_token)
        return client

    @classmethod
    def get_auth_client(cls) -> Client:
        """Client dedicated to auth calls; sign-in state stored on it never leaks into table queries."""
        if cls._auth_client is None:
            cls._auth_client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._auth_client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Use for admin operations only."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._auth_client = None
        cls._service_client = None


def get_auth_supabase() -> Client:
    return SupabaseClient.get_auth_client()
