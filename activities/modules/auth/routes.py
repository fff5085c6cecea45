from fastapi import APIRouter, Depends, HTTPException, Response
from activities.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, RefreshRequest
)
from activities.modules.auth.service import AuthService
from activities.core.dependencies import get_auth_service, get_access_token, get_current_user_id
from activities.core.session import set_session_cookies, clear_session_cookies
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Login, get access token and start a cookie session"""
    tokens = service.login(login_data)
    set_session_cookies(response, tokens)
    return tokens


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    refresh_data: RefreshRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange a refresh token for a new access token"""
    tokens = service.refresh_session(refresh_data.refresh_token)
    set_session_cookies(response, tokens)
    return tokens


@router.post("/logout", status_code=200)
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    service.logout(token)
    clear_session_cookies(response)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
):
    """Get current authenticated user"""
    return current_user


@router.delete("/account", status_code=200)
async def delete_account(
    response: Response,
    current_user: Dict = Depends(get_current_user_id),
    token: Optional[str] = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service)
):
    """Permanently delete the caller's account"""
    service.delete_account(current_user["id"], token)
    clear_session_cookies(response)
    return {"message": "Account deleted", "user_id": current_user["id"]}
