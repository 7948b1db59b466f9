"""Auth API router."""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_auth_service, get_current_user
from ..models import (
    ApiResponse,
    AuthData,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokensData,
    UserData,
    UserPublic,
)
from ..services import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[AuthData], status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """Create an account and start a session."""
    data = auth.register(username=payload.username, email=payload.email, password=payload.password)
    return ApiResponse(message="Registration successful", data=data)


@router.post("/login", response_model=ApiResponse[AuthData])
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    data = auth.login(email=payload.email, password=payload.password)
    return ApiResponse(message="Login successful", data=data)


@router.post("/refresh", response_model=ApiResponse[TokensData])
def refresh(
    payload: RefreshRequest | None = None,
    auth: AuthService = Depends(get_auth_service),
):
    """Exchange a refresh token for a new token pair."""
    tokens = auth.refresh(payload.refresh_token if payload else None)
    return ApiResponse(data=TokensData(tokens=tokens))


@router.get("/me", response_model=ApiResponse[UserData])
def me(user: UserPublic = Depends(get_current_user)):
    """Get the caller's profile."""
    return ApiResponse(data=UserData(user=user))


@router.post("/logout", response_model=ApiResponse[None])
def logout(
    user: UserPublic = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    auth.logout(user.id)
    return ApiResponse(message="Logged out successfully")
