"""Supabase REST implementation of ProfileStore."""

import asyncio
from typing import Any, Dict, List, Optional

import httpx
import structlog

from elena.core.config import settings
from elena.core.metrics import (
    track_profile_fetch_latency,
    record_profile_fetch_success,
    record_profile_fetch_failure,
)
from elena.domain.entities import Profile
from elena.domain.exceptions import (
    ProfileStoreException,
    ProfileStoreTimeoutException,
)
from elena.domain.interfaces import ProfileStore

logger = structlog.get_logger(__name__)

# Only columns that exist on the profiles table
SELECT_COLUMNS = (
    "id",
    "email",
    "full_name",
    "first_name",
    "last_name",
    "phone",
    "mode",
    "notes",
)


class SupabaseProfileStore(ProfileStore):
    """
    HTTP client for profiles stored in Supabase.

    Queries the PostgREST endpoint with the service key, with retry logic
    for timeouts and transport errors.
    """

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        table: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.supabase_url).rstrip("/")
        self._service_key = service_key or settings.supabase_service_key
        self._table = table or settings.supabase_profiles_table
        self._timeout = timeout or settings.supabase_timeout
        self._max_retries = max_retries or settings.supabase_max_retries
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self._service_key,
            "Authorization": f"Bearer {self._service_key}",
            "Accept": "application/json",
        }

    async def get_by_email(self, email: str) -> Optional[Profile]:
        """
        Fetch the profile row matching an email.

        Implements retry logic with exponential backoff.
        """
        url = f"{self._base_url}/rest/v1/{self._table}"
        params = {
            "select": ",".join(SELECT_COLUMNS),
            "email": f"eq.{email}",
            "limit": "1",
        }

        last_exception = None

        for attempt in range(self._max_retries):
            try:
                with track_profile_fetch_latency():
                    async with httpx.AsyncClient(
                        timeout=self._timeout,
                        transport=self._transport,
                    ) as client:
                        response = await client.get(url, params=params, headers=self._headers())

                        if response.status_code >= 400:
                            record_profile_fetch_failure("error")
                            raise ProfileStoreException(
                                message=f"Profile store error: {response.text}",
                                status_code=response.status_code,
                            )

                        rows = response.json()
                        record_profile_fetch_success()
                        return self._parse_profile(rows)

            except httpx.TimeoutException:
                record_profile_fetch_failure("timeout")
                last_exception = ProfileStoreTimeoutException()
                logger.warning(
                    "profile_store_timeout",
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except ProfileStoreException:
                raise
            except (httpx.HTTPError, ValueError) as e:
                record_profile_fetch_failure("error")
                last_exception = ProfileStoreException(
                    message=f"Unexpected error: {str(e)}",
                )
                logger.error(
                    "profile_store_error",
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or ProfileStoreException("Failed to fetch profile")

    def _parse_profile(self, rows: Any) -> Optional[Profile]:
        """Parse a PostgREST result set into a Profile (first row only)."""
        if isinstance(rows, dict):
            rows = [rows]
        if not isinstance(rows, list):
            raise ProfileStoreException("Unexpected profile store response shape")

        records: List[Dict[str, Any]] = [row for row in rows if isinstance(row, dict)]
        if not records:
            return None
        return Profile.from_mapping(records[0])
