"""
Tests for the Redis schedule cache: fill on read, invalidation on booking,
and isolation between ledgers.
"""

import json

import pytest
import pytest_asyncio
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis
from httpx import AsyncClient

from training_ledger.db.session import Ledger
from training_ledger.services.cache_service import ScheduleCache, connect_redis
from conftest import PARTICIPANT_IDENTITY


@pytest_asyncio.fixture
async def redis_client():
    client = FakeRedis(server=FakeServer(), decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def schedule_cache(ledger: Ledger, redis_client) -> ScheduleCache:
    """Redis-backed cache scoped to the test ledger."""
    return ScheduleCache(redis_client, namespace=ledger.instance_id, ttl=60)


def _key(ledger: Ledger, trainer_id: int) -> str:
    return f"schedule:{ledger.instance_id}:{trainer_id}"


@pytest.mark.asyncio
async def test_schedule_cached_on_first_read(client: AsyncClient, ledger, actors, redis_client):
    assert await redis_client.get(_key(ledger, 10)) is None

    first = await client.get("/api/v1/trainers/10/schedule")
    assert first.status_code == 200

    cached = json.loads(await redis_client.get(_key(ledger, 10)))
    assert cached == first.json()
    assert 0 < await redis_client.ttl(_key(ledger, 10)) <= 60

    second = await client.get("/api/v1/trainers/10/schedule")
    assert second.json() == first.json()


@pytest.mark.asyncio
async def test_booking_invalidates_cached_schedule(
    client: AsyncClient, ledger, actors, caller, redis_client
):
    await client.get("/api/v1/trainers/10/schedule")
    assert await redis_client.exists(_key(ledger, 10))

    response = await client.post(
        "/api/v1/bookings/",
        json={"trainer_id": 10, "participant_id": 100, "slot_index": 5},
        headers=caller(PARTICIPANT_IDENTITY),
    )
    assert response.status_code == 201
    assert not await redis_client.exists(_key(ledger, 10))

    schedule = (await client.get("/api/v1/trainers/10/schedule")).json()
    assert len(schedule["slot_indices"]) == 47
    assert 5 not in schedule["slot_indices"]


@pytest.mark.asyncio
async def test_rejected_booking_keeps_cached_schedule(
    client: AsyncClient, ledger, actors, caller, redis_client
):
    await client.get("/api/v1/trainers/10/schedule")

    response = await client.post(
        "/api/v1/bookings/",
        json={"trainer_id": 10, "participant_id": 100, "slot_index": 48},
        headers=caller(PARTICIPANT_IDENTITY),
    )
    assert response.status_code == 400
    assert await redis_client.exists(_key(ledger, 10))


@pytest.mark.asyncio
async def test_fresh_ledger_ignores_schedules_of_previous_ledger(client: AsyncClient, redis_client):
    # An earlier ledger, now gone, knew trainer 10 and left its schedule behind
    previous = Ledger("sqlite+aiosqlite://", echo=False)
    stale = {"trainer_id": 10, "slot_indices": [0], "time_ranges": ["0:00-0:30"]}
    await ScheduleCache(redis_client, namespace=previous.instance_id).set(10, stale)
    await redis_client.set("schedule:10", json.dumps(stale))
    await previous.dispose()

    response = await client.get("/api/v1/trainers/10/schedule")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_cached_entry_never_stands_in_for_missing_trainer(
    client: AsyncClient, ledger, redis_client
):
    stale = {"trainer_id": 11, "slot_indices": [1], "time_ranges": ["0:30-1:00"]}
    await redis_client.set(_key(ledger, 11), json.dumps(stale))

    assert (await client.get("/api/v1/trainers/11/schedule")).status_code == 404


@pytest.mark.asyncio
async def test_clear_drops_only_own_namespace(redis_client):
    mine = ScheduleCache(redis_client, namespace="mine")
    theirs = ScheduleCache(redis_client, namespace="theirs")
    for trainer_id in (1, 2, 3):
        await mine.set(trainer_id, {"trainer_id": trainer_id})
    await theirs.set(1, {"trainer_id": 1})

    assert await mine.clear() == 3
    assert await mine.get(1) is None
    assert await theirs.get(1) == {"trainer_id": 1}


@pytest.mark.asyncio
async def test_disabled_cache_is_a_no_op():
    cache = ScheduleCache(None, namespace="off")
    await cache.set(10, {"trainer_id": 10})
    assert await cache.get(10) is None
    assert await cache.clear() == 0
    assert await cache.stats() == {"status": "disabled"}
    # REDIS_ENABLED defaults to off
    assert await connect_redis() is None
