"""
Pytest fixtures for the ledger store, HTTP client and registered actors.

Every test gets a fresh in-memory Ledger, so no state leaks between tests.
"""

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from training_ledger.main import app
from training_ledger.api.dependencies import get_entropy, get_schedule_cache
from training_ledger.core.config import get_settings
from training_ledger.db.session import Ledger, get_ledger
from training_ledger.models.participant import TrainingInterest
from training_ledger.services.cache_service import ScheduleCache
from training_ledger.services.interfaces.fixed_entropy import FixedEntropy
from training_ledger.services.registry_service import (
    register_admin,
    register_trainer,
    register_participant,
)

FEE = get_settings().booking_fee

ADMIN_IDENTITY = "0xadmin1"
TRAINER_IDENTITY = "0xtrainer10"
PARTICIPANT_IDENTITY = "0xparticipant100"


@pytest_asyncio.fixture(scope="function")
async def ledger() -> AsyncGenerator[Ledger, None]:
    """Fresh in-memory ledger with all tables created."""
    ledger = Ledger("sqlite+aiosqlite://", echo=False)
    await ledger.create_all()
    yield ledger
    await ledger.dispose()


@pytest.fixture
def entropy() -> FixedEntropy:
    return FixedEntropy(seed=42, timestamp=1_700_000_000)


@pytest.fixture
def schedule_cache(ledger: Ledger) -> ScheduleCache:
    """Cache with no Redis behind it; modules that test caching override this."""
    return ScheduleCache(None, namespace=ledger.instance_id)


@pytest_asyncio.fixture(scope="function")
async def client(
    ledger: Ledger, entropy: FixedEntropy, schedule_cache: ScheduleCache
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the test ledger, fixed entropy and schedule cache."""
    app.dependency_overrides[get_ledger] = lambda: ledger
    app.dependency_overrides[get_entropy] = lambda: entropy
    app.dependency_overrides[get_schedule_cache] = lambda: schedule_cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def caller() -> Callable[[str], dict]:
    """Build identity headers for a caller."""
    def _headers(identity: str) -> dict:
        return {"X-Caller-Identity": identity}
    return _headers


async def add_participant(ledger: Ledger, participant_id: int, identity: str, **overrides) -> int:
    fields = {
        "name": f"Participant {participant_id}",
        "age": 30,
        "gender": "female",
        "district": "Riverside",
        "training_interest": int(TrainingInterest.FIRST_AID),
        "has_completed_training": False,
    }
    fields.update(overrides)
    async with ledger.transaction() as db:
        return await register_participant(db, identity, participant_id, **fields)


@pytest_asyncio.fixture
async def actors(ledger: Ledger) -> dict:
    """Admin 1, trainer 10 and participant 100 (10 fee units)."""
    async with ledger.transaction() as db:
        await register_admin(db, ADMIN_IDENTITY, 1, "Ada", 41)
        await register_trainer(db, TRAINER_IDENTITY, 10, "Tom", 35, "male")
    await add_participant(ledger, 100, PARTICIPANT_IDENTITY)
    return {
        "admin": (1, ADMIN_IDENTITY),
        "trainer": (10, TRAINER_IDENTITY),
        "participant": (100, PARTICIPANT_IDENTITY),
    }
