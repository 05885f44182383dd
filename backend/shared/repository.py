"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from datetime import datetime
from typing import Any, Generic, Iterable, TypeVar
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            async def find_by_id(self, user_id: str) -> Optional[User]:
                result = self._db.table("users").select("*").eq("id", user_id).execute()
                if not result.data:
                    return None
                return self._map_to_user(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _serialize(data: dict[str, Any]) -> dict[str, Any]:
        """Convert values PostgREST cannot encode (datetimes) to JSON-safe types."""
        return {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in data.items()
        }


# Characters with meaning inside a PostgREST or() filter or an ilike pattern
_FILTER_SYNTAX = str.maketrans("", "", ",()%*\\\"")


def ilike_any(columns: Iterable[str], term: str) -> str:
    """
    Build an ``or()`` filter matching ``term`` as a case-insensitive substring of any column.

    Example:
        >>> ilike_any(("title", "content"), "fast api")
        'title.ilike.*fast api*,content.ilike.*fast api*'
    """
    needle = term.translate(_FILTER_SYNTAX)
    return ",".join(f"{column}.ilike.*{needle}*" for column in columns)
