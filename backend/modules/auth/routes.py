"""
Authentication API endpoints.

Registration, login, token refresh, logout, email verification and
password reset. Mounted under ``/api/v1/auth``.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user
from api.middleware.rate_limit import rate_limit
from api.models import ApiResponse, success_response
from shared.models import AuthenticatedUser
from modules.users.models import UserProfile

from .interfaces import IAuthService
from .models import (
    AuthResult,
    ForgotPasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    ResendVerificationRequest,
    ResetPasswordRequest,
    TokenPair,
)

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[AuthResult],
    status_code=201,
    dependencies=[Depends(rate_limit("auth"))],
)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Create an account.

    Returns the new user's profile and a token pair. A verification
    email is sent in the background.
    """
    result = await service.register(request)
    return success_response(result, "User registered successfully", status_code=201)


@router.post(
    "/login",
    response_model=ApiResponse[AuthResult],
    dependencies=[Depends(rate_limit("auth"))],
)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    result = await service.login(request.email, request.password, request.device_id)
    return success_response(result, "Login successful")


@router.post("/refresh", response_model=ApiResponse[TokenPair])
async def refresh(
    request: RefreshRequest,
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Rotate the refresh token.

    The response carries both camelCase and snake_case keys for
    clients written against either.
    """
    pair = await service.refresh(request.refresh_token)
    data = {**pair.model_dump(by_alias=True), **pair.model_dump()}
    return success_response(data, "Token refreshed successfully")


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    await service.logout(user.id)
    return success_response(None, "Logged out successfully")


@router.get("/me", response_model=ApiResponse[UserProfile])
async def me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    profile = await service.get_current_user(user.id)
    return success_response(profile, "User retrieved successfully")


@router.get("/verify-email", response_model=ApiResponse[dict])
async def verify_email(
    token: str = Query(default="", description="Token from the verification email"),
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Target of the link in the verification email."""
    profile = await service.verify_email(token)
    message = "Email verified successfully"
    return success_response({"user": profile, "message": message}, message)


@router.post("/resend-verification", response_model=ApiResponse[None])
async def resend_verification(
    request: ResendVerificationRequest,
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    message = await service.resend_verification_email(request.email)
    return success_response(None, message)


@router.post("/send-verification", response_model=ApiResponse[None])
async def send_verification(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    message = await service.send_verification_email(user.id)
    return success_response(None, message)


@router.post(
    "/forgot-password",
    response_model=ApiResponse[None],
    dependencies=[Depends(rate_limit("password_reset"))],
)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    message = await service.forgot_password(request.email)
    return success_response(None, message)


@router.post(
    "/reset-password",
    response_model=ApiResponse[None],
    dependencies=[Depends(rate_limit("password_reset"))],
)
async def reset_password(
    request: ResetPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    await service.reset_password(request.token, request.new_password)
    return success_response(None, "Password has been reset. Please log in again.")
