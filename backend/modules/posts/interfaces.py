"""
Posts module interfaces.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import Pagination

from .models import CreatePostRequest, Post, UpdatePostRequest


@runtime_checkable
class IPostStore(Protocol):
    """Interface for post persistence. Lookups return None when nothing matches."""

    async def find_by_id(self, post_id: str) -> Optional[Post]:
        ...

    async def find_page(
        self,
        search: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[list[Post], int]:
        """
        One page of posts, newest first.

        Args:
            search: Case-insensitive substring matched against title and content
            offset: Rows to skip
            limit: Maximum rows to return

        Returns:
            (posts on this page, total number of matching posts)
        """
        ...

    async def create(self, post: Post) -> Post:
        ...

    async def update(self, post_id: str, changes: dict[str, Any]) -> Optional[Post]:
        """Apply field changes. Returns None if the post does not exist."""
        ...

    async def delete(self, post_id: str) -> bool:
        ...


@runtime_checkable
class IPostService(Protocol):
    """
    Interface for the posts module.

    Anyone may read; writing requires an authenticated user, and only
    a post's author may edit or delete it.
    """

    async def create_post(self, author_id: str, request: CreatePostRequest) -> Post:
        ...

    async def get_post(self, post_id: str) -> Post:
        ...

    async def list_posts(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
    ) -> tuple[list[Post], Pagination]:
        ...

    async def update_post(self, post_id: str, user_id: str, request: UpdatePostRequest) -> Post:
        ...

    async def delete_post(self, post_id: str, user_id: str) -> None:
        ...
