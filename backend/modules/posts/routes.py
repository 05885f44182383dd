"""
Posts API endpoints.

Listing and reading are public; writing requires a bearer token.
Mounted under ``/api/v1/posts``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.dependencies import get_post_service
from api.middleware.auth import get_current_user
from api.models import ApiResponse, success_response
from shared.models import AuthenticatedUser

from .interfaces import IPostService
from .models import CreatePostRequest, Post, UpdatePostRequest

router = APIRouter()


@router.get("", response_model=ApiResponse[list[Post]])
async def list_posts(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(default=10, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(default=None, description="Match title or content"),
    service: IPostService = Depends(get_post_service),
) -> JSONResponse:
    """List posts, newest first."""
    posts, pagination = await service.list_posts(page, limit, search)
    return success_response(posts, "Posts retrieved successfully", pagination=pagination)


@router.post("", response_model=ApiResponse[Post], status_code=201)
async def create_post(
    request: CreatePostRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPostService = Depends(get_post_service),
) -> JSONResponse:
    post = await service.create_post(user.id, request)
    return success_response(post, "Post created successfully", status_code=201)


@router.get("/{post_id}", response_model=ApiResponse[Post])
async def get_post(
    post_id: str,
    service: IPostService = Depends(get_post_service),
) -> JSONResponse:
    post = await service.get_post(post_id)
    return success_response(post, "Post retrieved successfully")


@router.patch("/{post_id}", response_model=ApiResponse[Post])
async def update_post(
    post_id: str,
    request: UpdatePostRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPostService = Depends(get_post_service),
) -> JSONResponse:
    post = await service.update_post(post_id, user.id, request)
    return success_response(post, "Post updated successfully")


@router.delete("/{post_id}", response_model=ApiResponse[None])
async def delete_post(
    post_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IPostService = Depends(get_post_service),
) -> JSONResponse:
    await service.delete_post(post_id, user.id)
    return success_response(None, "Post deleted successfully")
