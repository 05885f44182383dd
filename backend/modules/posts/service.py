"""
Posts service.

Reads are open to everyone. Creating a post records the caller as its
author, and only the author may edit or delete it.
"""

import logging
import uuid
from typing import Optional

from shared.clock import Clock, utc_now
from shared.models import Pagination

from .exceptions import PostAccessDeniedError, PostNotFoundError
from .interfaces import IPostService, IPostStore
from .models import CreatePostRequest, Post, UpdatePostRequest

logger = logging.getLogger(__name__)


class PostService(IPostService):
    """Implementation of the posts service."""

    def __init__(self, store: IPostStore, clock: Clock = utc_now):
        self._store = store
        self._clock = clock

    async def create_post(self, author_id: str, request: CreatePostRequest) -> Post:
        now = self._clock()
        post = await self._store.create(
            Post(
                id=str(uuid.uuid4()),
                title=request.title,
                content=request.content,
                author_id=author_id,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Post %s created by user %s", post.id, author_id)
        return post

    async def get_post(self, post_id: str) -> Post:
        post = await self._store.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    async def list_posts(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
    ) -> tuple[list[Post], Pagination]:
        posts, total = await self._store.find_page(search, (page - 1) * limit, limit)
        return posts, Pagination.of(page, limit, total)

    async def update_post(self, post_id: str, user_id: str, request: UpdatePostRequest) -> Post:
        """
        Apply a partial update to one of the caller's posts.

        Raises:
            PostNotFoundError: If the post does not exist
            PostAccessDeniedError: If the caller is not the author
        """
        post = await self._require_own_post(post_id, user_id)
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return post

        updated = await self._store.update(post_id, changes)
        if updated is None:
            raise PostNotFoundError(post_id)
        return updated

    async def delete_post(self, post_id: str, user_id: str) -> None:
        await self._require_own_post(post_id, user_id)
        await self._store.delete(post_id)
        logger.info("Post %s deleted by user %s", post_id, user_id)

    async def _require_own_post(self, post_id: str, user_id: str) -> Post:
        post = await self.get_post(post_id)
        if post.author_id != user_id:
            raise PostAccessDeniedError(post_id)
        return post
