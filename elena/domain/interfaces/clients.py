"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

from elena.domain.entities import Profile


class ProfileStore(ABC):
    """
    Abstract client for the profile store.

    Looks up a user's profile by email.
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Profile]:
        """
        Fetch the profile for an email.

        Args:
            email: Normalized (trimmed, lower-cased) email

        Returns:
            The profile, or None if no row matches

        Raises:
            ProfileStoreException: If the store returns an error
            ProfileStoreTimeoutException: If the request times out
        """
        ...
