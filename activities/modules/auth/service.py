import hashlib
import time
import logging
from supabase import Client
from activities.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from activities.database.supabase_client import SupabaseClient
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (pages and API share tokens)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


def _user_to_dict(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "app_metadata": user.app_metadata or {},
        "created_at": user.created_at,
        "updated_at": user.updated_at
    }


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user using Supabase Auth"""
        try:
            user_metadata = {}
            if register_data.full_name:
                user_metadata["full_name"] = register_data.full_name

            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": user_metadata
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            logger.info(f"Registered user {auth_response.user.id}")
            return RegisterResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or register_data.email,
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Registration failed: {error_message}")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                refresh_token=auth_response.session.refresh_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            logger.error(f"Login failed: {error_message}")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def refresh_session(self, refresh_token: str) -> TokenResponse:
        """Exchange a refresh token for a fresh access token"""
        try:
            auth_response = self.supabase.auth.refresh_session(refresh_token)
            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Session expired")
            return TokenResponse(
                access_token=auth_response.session.access_token,
                refresh_token=auth_response.session.refresh_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or ""
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.info(f"Session refresh rejected: {e}")
            raise HTTPException(status_code=401, detail="Session expired")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = _cache_key(token)
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user_data = _user_to_dict(user_response.user)
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def resolve_user(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """Like get_current_user, but returns None instead of raising for missing or bad tokens."""
        if not token:
            return None
        try:
            return self.get_current_user(token)
        except HTTPException:
            return None

    def logout(self, token: str) -> bool:
        """Revoke the session behind the token"""
        _AUTH_USER_CACHE.pop(_cache_key(token), None)
        try:
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False

    def delete_account(self, user_id: str, token: str) -> bool:
        """Delete the caller's auth user (requires service role key)"""
        admin_client = SupabaseClient.get_service_client()
        if admin_client is None:
            raise HTTPException(
                status_code=500,
                detail="Service role key not configured. Cannot delete account."
            )
        try:
            admin_client.auth.admin.delete_user(user_id)
        except Exception as e:
            logger.error(f"Failed to delete account {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete account: {str(e)}")
        logger.info(f"Deleted account {user_id}")
        self.logout(token)
        return True
