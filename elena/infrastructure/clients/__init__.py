"""External API client implementations."""

from .profile_store import SupabaseProfileStore

__all__ = [
    "SupabaseProfileStore",
]
