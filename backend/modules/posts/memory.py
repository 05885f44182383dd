"""
In-memory post store.

For development and testing. Use SupabasePostRepository for production.
"""

from typing import Any, Optional

from shared.clock import Clock, utc_now

from .models import Post


class InMemoryPostStore:
    """Dict-backed implementation of IPostStore."""

    def __init__(self, clock: Clock = utc_now):
        self._posts: dict[str, Post] = {}
        self._clock = clock

    def __len__(self) -> int:
        return len(self._posts)

    async def find_by_id(self, post_id: str) -> Optional[Post]:
        post = self._posts.get(post_id)
        return post.model_copy() if post else None

    async def find_page(
        self,
        search: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[list[Post], int]:
        posts = list(self._posts.values())
        if search:
            needle = search.lower()
            posts = [p for p in posts if needle in p.title.lower() or needle in p.content.lower()]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return [p.model_copy() for p in posts[offset:offset + limit]], len(posts)

    async def create(self, post: Post) -> Post:
        self._posts[post.id] = post.model_copy()
        return post.model_copy()

    async def update(self, post_id: str, changes: dict[str, Any]) -> Optional[Post]:
        post = self._posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(update={**changes, "updated_at": self._clock()})
        self._posts[post_id] = updated
        return updated.model_copy()

    async def delete(self, post_id: str) -> bool:
        return self._posts.pop(post_id, None) is not None
