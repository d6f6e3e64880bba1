"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Fake profile store with test profiles
- Clients for a failing store and an unconfigured store
"""

from typing import AsyncGenerator, Dict, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from elena.main import app
from elena.core.dependencies import get_profile_store
from elena.domain.entities import Profile
from elena.domain.exceptions import ProfileStoreException
from elena.domain.interfaces import ProfileStore


# =============================================================================
# Test Data
# =============================================================================

TEST_PROFILES = {
    "buyer@example.com": Profile(
        email="buyer@example.com",
        id="8d0c3e4a-1111-4c2b-9a77-000000000001",
        full_name="Dana Rivers",
        phone="+1-555-0100",
        mode="buyer",
    ),
    "earner@example.com": Profile(
        email="earner@example.com",
        first_name="Sam",
        last_name="Okafor",
    ),
}


# =============================================================================
# Fake Clients
# =============================================================================

class FakeProfileStore(ProfileStore):
    """In-memory profile store keyed by email."""

    def __init__(self, profiles: Optional[Dict[str, Profile]] = None, fail_mode: bool = False):
        self.profiles = dict(profiles or {})
        self.fail_mode = fail_mode
        self.call_count = 0
        self.emails_requested = []

    async def get_by_email(self, email: str) -> Optional[Profile]:
        """Return the stored profile or raise based on mode."""
        self.call_count += 1
        self.emails_requested.append(email)

        if self.fail_mode:
            raise ProfileStoreException(
                message="Profile store error: relation does not exist",
                status_code=500,
            )

        return self.profiles.get(email)


# =============================================================================
# Fake Client Fixtures
# =============================================================================

@pytest.fixture
def profile_store() -> FakeProfileStore:
    """Create a profile store with the test profiles."""
    return FakeProfileStore(TEST_PROFILES)


@pytest.fixture
def failing_profile_store() -> FakeProfileStore:
    """Create a profile store that always fails."""
    return FakeProfileStore(fail_mode=True)


# =============================================================================
# App Client Fixtures
# =============================================================================

async def _client_with_store(store: Optional[ProfileStore]) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_profile_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(profile_store: FakeProfileStore) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with a fake profile store.

    The store knows buyer@example.com and earner@example.com.
    """
    async for ac in _client_with_store(profile_store):
        yield ac


@pytest_asyncio.fixture
async def client_with_failing_store(
    failing_profile_store: FakeProfileStore,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client where the profile store always fails."""
    async for ac in _client_with_store(failing_profile_store):
        yield ac


@pytest_asyncio.fixture
async def client_without_store() -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with no profile store configured."""
    async for ac in _client_with_store(None):
        yield ac


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def reference_request() -> dict:
    """$400k home, $40k down, 760 score, $6k income, $1.5k expenses."""
    return {
        "scenario": {
            "price": 400000,
            "downpayment": 40000,
            "creditScore": 760,
            "termYears": 30,
        },
        "context": {
            "fad": {"income": 6000, "monthlyExpenses": 1500},
        },
    }
