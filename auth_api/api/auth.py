"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from auth_api.api.dependencies import get_auth_service, get_current_identity
from auth_api.schemas.auth import LoginResult, TokenClaims, UserLogin, UserRegister, UserResponse
from auth_api.schemas.response import ApiResponse, ErrorResponse
from auth_api.services.auth import AuthService

router = APIRouter(prefix="/api/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    user = await auth_service.register(user_data.email, user_data.password, user_data.name)
    return ApiResponse(data=user)


@router.post(
    "/login",
    response_model=ApiResponse[LoginResult],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)
async def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    result = await auth_service.login(credentials.email, credentials.password)
    return ApiResponse(data=result)


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)
async def get_me(
    identity: Annotated[TokenClaims, Depends(get_current_identity)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Get current user information."""
    user = await auth_service.get_profile(identity)
    return ApiResponse(data=user)
