"""
User account API endpoints.

The authenticated user's own profile, password and account, and the
user collection. Mounted under ``/api/v1/users`` (and ``/api/v1/user``).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.dependencies import get_user_service
from api.middleware.auth import get_current_user
from api.models import ApiResponse, success_response
from shared.models import AuthenticatedUser

from .interfaces import IUserService
from .models import (
    ChangePasswordRequest,
    CreateUserRequest,
    DeleteAccountRequest,
    UpdateProfileRequest,
    UpdateUserRequest,
    UserProfile,
)

router = APIRouter()


@router.get("/me", response_model=ApiResponse[UserProfile])
async def get_my_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    profile = await service.get_profile(user.id)
    return success_response(profile, "Profile retrieved successfully")


@router.patch("/me", response_model=ApiResponse[UserProfile])
async def update_my_profile(
    request: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    """
    Update profile fields.

    Only the fields present in the body are changed.
    """
    profile = await service.update_profile(user.id, request)
    return success_response(profile, "Profile updated successfully")


@router.post("/me/password", response_model=ApiResponse[None])
async def change_my_password(
    request: ChangePasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    await service.change_password(user.id, request.current_password, request.new_password)
    return success_response(None, "Password changed successfully")


@router.delete("/me", response_model=ApiResponse[None])
async def delete_my_account(
    request: DeleteAccountRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    """Delete the account. The password must be confirmed in the body."""
    await service.delete_account(user.id, request.password)
    return success_response(None, "Account deleted successfully")


# -----------------------------------------------------------------------------
# User collection. Declared after /me so "me" is never taken for an id.
# -----------------------------------------------------------------------------


@router.get("", response_model=ApiResponse[list[UserProfile]])
async def list_users(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(default=10, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(default=None, description="Match email or name"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    """List users, newest first."""
    users, pagination = await service.list_users(page, limit, search)
    return success_response(users, "Users retrieved successfully", pagination=pagination)


@router.post("", response_model=ApiResponse[UserProfile], status_code=201)
async def create_user(
    request: CreateUserRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    profile = await service.create_user(request)
    return success_response(profile, "User created successfully", status_code=201)


@router.get("/{user_id}", response_model=ApiResponse[UserProfile])
async def get_user(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    profile = await service.get_user(user_id)
    return success_response(profile, "User retrieved successfully")


@router.patch("/{user_id}", response_model=ApiResponse[UserProfile])
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    profile = await service.update_user(user_id, request)
    return success_response(profile, "User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> JSONResponse:
    await service.delete_user(user_id)
    return success_response(None, "User deleted successfully")
