"""
Post repository for database access.

Encapsulates all Supabase queries and data mapping for the ``posts`` table.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository, ilike_any
from .models import Post

POSTS_TABLE = "posts"
SEARCH_COLUMNS = ("title", "content")


class SupabasePostRepository(BaseRepository[Post]):
    """Implements IPostStore on top of the Supabase service-role client."""

    async def find_by_id(self, post_id: str) -> Optional[Post]:
        result = self._db.table(POSTS_TABLE).select("*").eq("id", post_id).limit(1).execute()
        if not result.data:
            return None
        return self._map_to_post(result.data[0])

    async def find_page(
        self,
        search: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[list[Post], int]:
        query = self._db.table(POSTS_TABLE).select("*", count="exact")
        if search:
            query = query.or_(ilike_any(SEARCH_COLUMNS, search))

        result = query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()
        return [self._map_to_post(row) for row in result.data], result.count or 0

    async def create(self, post: Post) -> Post:
        result = self._db.table(POSTS_TABLE).insert(
            self._serialize(post.model_dump())
        ).execute()
        return self._map_to_post(result.data[0])

    async def update(self, post_id: str, changes: dict[str, Any]) -> Optional[Post]:
        data = {**changes, "updated_at": datetime.now(timezone.utc)}
        result = self._db.table(POSTS_TABLE).update(
            self._serialize(data)
        ).eq("id", post_id).execute()

        if not result.data:
            return None
        return self._map_to_post(result.data[0])

    async def delete(self, post_id: str) -> bool:
        result = self._db.table(POSTS_TABLE).delete().eq("id", post_id).execute()
        return bool(result.data)

    def _map_to_post(self, data: dict[str, Any]) -> Post:
        """Map database row to Post model."""
        return Post(**{key: value for key, value in data.items() if key in Post.model_fields})
