"""
Posts module.

Public API:
- IPostStore: Persistence interface
- IPostService: Interface for creating, reading, listing, editing and deleting posts
- Post: Stored post, also its client representation
- Posts exceptions: PostNotFoundError, PostAccessDeniedError
"""

from .interfaces import IPostService, IPostStore
from .models import CreatePostRequest, Post, UpdatePostRequest
from .exceptions import PostAccessDeniedError, PostNotFoundError

__all__ = [
    # Interfaces
    "IPostStore",
    "IPostService",
    # Models
    "Post",
    "CreatePostRequest",
    "UpdatePostRequest",
    # Exceptions
    "PostNotFoundError",
    "PostAccessDeniedError",
]
