"""
Core dependencies for resolving the caller and checking row ownership
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from activities.config import settings
from activities.database.supabase_client import SupabaseClient, get_auth_supabase
from activities.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_auth_supabase)) -> AuthService:
    return AuthService(supabase)


def get_access_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> Optional[str]:
    """Bearer token from the Authorization header, then the session (possibly just refreshed), then the cookie"""
    if credentials and credentials.credentials:
        return credentials.credentials
    session_token = getattr(request.state, "access_token", None)
    if session_token:
        return session_token
    return request.cookies.get(settings.access_token_cookie)


def get_user_supabase(token: Optional[str] = Depends(get_access_token)) -> Client:
    """Data client acting as the caller"""
    return SupabaseClient.get_user_client(token)


def get_optional_user(
    request: Request,
    token: Optional[str] = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Dict[str, Any]]:
    """Current user, or None when unauthenticated. Reads short-circuit to empty results on None."""
    session_user = getattr(request.state, "user", None)
    if session_user is not None:
        return session_user
    return auth_service.resolve_user(token)


def get_current_user_id(
    token: Optional[str] = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_service.get_current_user(token)


def check_row_owner(row: Dict[str, Any], user_data: dict, what: str) -> None:
    """Raise 403 unless the row belongs to the user"""
    if row.get("user_id") != user_data["id"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You can only modify your own {what}"
        )
