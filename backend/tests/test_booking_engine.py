"""
Tests for the booking engine: validation order, atomic settlement and
balance conservation, including concurrent attempts on one slot.
"""

import asyncio

import pytest

from training_ledger.core.exceptions import (
    NotFound,
    InsufficientBalance,
    NoAdminsAvailable,
    InvalidSlot,
    AlreadyBooked,
    Unauthorized,
)
from training_ledger.models.admin import Admin
from training_ledger.models.participant import Participant
from training_ledger.services import calendar_service
from training_ledger.services.booking_service import book_training_slot
from training_ledger.services.interfaces.entropy import EntropySource
from training_ledger.services.interfaces.fixed_entropy import FixedEntropy
from training_ledger.services.query_service import view_admin_balance, view_trainer_schedule
from training_ledger.services.registry_service import register_admin, register_trainer
from conftest import FEE, PARTICIPANT_IDENTITY, add_participant


class FailingEntropy(EntropySource):
    """Fails during the admin draw, after the slot has been reserved."""

    def timestamp(self) -> int:
        return 0

    def environment_entropy(self) -> bytes:
        raise RuntimeError("entropy source unavailable")


async def _book(ledger, entropy, trainer_id=10, participant_id=100, slot_index=5,
                identity=PARTICIPANT_IDENTITY):
    async with ledger.transaction() as db:
        return await book_training_slot(db, identity, trainer_id, participant_id, slot_index, entropy)


async def _balances(ledger, participant_id=100, admin_id=1):
    async with ledger.snapshot() as db:
        participant = await db.get(Participant, participant_id)
        admin = await db.get(Admin, admin_id)
        return participant.balance, admin.balance if admin else None


@pytest.mark.asyncio
async def test_book_slot_settles_fee(ledger, actors, entropy):
    booking = await _book(ledger, entropy)

    assert booking.slot_index == 5
    assert booking.admin_id == 1
    assert booking.fee == FEE
    assert booking.time_range == "2:30-3:00"
    assert await _balances(ledger) == (9 * FEE, 1 * FEE)

    async with ledger.snapshot() as db:
        slot_indices, time_ranges = await view_trainer_schedule(db, 10)
    assert len(slot_indices) == 47
    assert 5 not in slot_indices
    assert "2:30-3:00" not in time_ranges


@pytest.mark.asyncio
async def test_second_booking_same_slot_rejected(ledger, actors, entropy):
    await _book(ledger, entropy)

    with pytest.raises(AlreadyBooked):
        await _book(ledger, entropy)

    assert await _balances(ledger) == (9 * FEE, 1 * FEE)


@pytest.mark.asyncio
async def test_other_participant_cannot_take_booked_slot(ledger, actors, entropy):
    await add_participant(ledger, 200, "p200")
    await _book(ledger, entropy)

    with pytest.raises(AlreadyBooked):
        await _book(ledger, entropy, participant_id=200, identity="p200")

    assert (await _balances(ledger, participant_id=200))[0] == 10 * FEE


@pytest.mark.asyncio
async def test_insufficient_balance_after_ten_bookings(ledger, actors, entropy):
    for slot_index in range(10):
        await _book(ledger, entropy, slot_index=slot_index)
    assert (await _balances(ledger))[0] == 0

    with pytest.raises(InsufficientBalance):
        await _book(ledger, entropy, slot_index=20)

    async with ledger.snapshot() as db:
        assert not await calendar_service.is_booked(db, 10, 20)


@pytest.mark.asyncio
async def test_no_admins_leaves_slot_free(ledger, entropy):
    async with ledger.transaction() as db:
        await register_trainer(db, "t", 10, "Tom", 35, "male")
    await add_participant(ledger, 100, PARTICIPANT_IDENTITY)

    with pytest.raises(NoAdminsAvailable):
        await _book(ledger, entropy)

    async with ledger.snapshot() as db:
        assert not await calendar_service.is_booked(db, 10, 5)
        assert (await db.get(Participant, 100)).balance == 10 * FEE


@pytest.mark.asyncio
async def test_unknown_trainer_checked_first(ledger, actors, entropy):
    # Participant, slot and identity are all invalid too
    with pytest.raises(NotFound, match="Trainer"):
        await _book(ledger, entropy, trainer_id=99, participant_id=999, slot_index=77, identity="x")


@pytest.mark.asyncio
async def test_unknown_participant(ledger, actors, entropy):
    with pytest.raises(NotFound, match="Participant"):
        await _book(ledger, entropy, participant_id=999, slot_index=77)


@pytest.mark.asyncio
async def test_foreign_identity_unauthorized(ledger, actors, entropy):
    with pytest.raises(Unauthorized):
        await _book(ledger, entropy, identity="0xmallory")
    assert await _balances(ledger) == (10 * FEE, 0)


@pytest.mark.asyncio
async def test_balance_checked_before_admins(ledger, entropy):
    async with ledger.transaction() as db:
        await register_trainer(db, "t", 10, "Tom", 35, "male")
    await add_participant(ledger, 100, PARTICIPANT_IDENTITY)
    async with ledger.transaction() as db:
        (await db.get(Participant, 100)).balance = 0

    with pytest.raises(InsufficientBalance):
        await _book(ledger, entropy)


@pytest.mark.asyncio
@pytest.mark.parametrize("slot_index", [-1, 48, 1000])
async def test_slot_out_of_range(ledger, actors, entropy, slot_index):
    with pytest.raises(InvalidSlot):
        await _book(ledger, entropy, slot_index=slot_index)
    assert await _balances(ledger) == (10 * FEE, 0)


@pytest.mark.asyncio
async def test_edge_slots_bookable(ledger, actors, entropy):
    first = await _book(ledger, entropy, slot_index=0)
    last = await _book(ledger, entropy, slot_index=47)
    assert first.time_range == "0:00-0:30"
    assert last.time_range == "23:30-24:00"


@pytest.mark.asyncio
async def test_failure_after_reservation_rolls_back(ledger, actors):
    with pytest.raises(RuntimeError):
        await _book(ledger, FailingEntropy())

    async with ledger.snapshot() as db:
        assert not await calendar_service.is_booked(db, 10, 5)
    assert await _balances(ledger) == (10 * FEE, 0)


@pytest.mark.asyncio
async def test_balance_conservation(ledger, actors):
    async with ledger.transaction() as db:
        await register_admin(db, "a2", 2, "Bea", 39)
        await register_admin(db, "a3", 3, "Cal", 52)
        await register_trainer(db, "t11", 11, "Una", 29, "female")
    await add_participant(ledger, 200, "p200")

    successes = 0
    for round_index in range(8):
        order = [(100, PARTICIPANT_IDENTITY), (200, "p200")]
        if round_index % 2:
            order.reverse()
        for participant_id, identity in order:
            for trainer_id in (10, 11):
                entropy = FixedEntropy(seed=round_index * 7 + trainer_id, timestamp=round_index)
                try:
                    await _book(ledger, entropy, trainer_id, participant_id, round_index, identity)
                    successes += 1
                except AlreadyBooked:
                    pass

    async with ledger.snapshot() as db:
        _, admin_units = await view_admin_balance(db)
        admin_total = sum([(await db.get(Admin, i)).balance for i in (1, 2, 3)])
        participant_total = sum([(await db.get(Participant, i)).balance for i in (100, 200)])

    # Per trainer and round, whoever goes first wins the slot
    assert successes == 16
    assert admin_total == successes * FEE
    assert sum(admin_units) == successes
    assert 2 * 10 * FEE - participant_total == successes * FEE


@pytest.mark.asyncio
async def test_concurrent_bookings_one_winner(ledger, actors, entropy):
    contenders = list(range(200, 220))
    for participant_id in contenders:
        await add_participant(ledger, participant_id, f"p{participant_id}")

    results = await asyncio.gather(
        *(
            _book(ledger, entropy, participant_id=participant_id, slot_index=12,
                  identity=f"p{participant_id}")
            for participant_id in contenders
        ),
        return_exceptions=True,
    )

    winners = [r for r in results if not isinstance(r, Exception)]
    losers = [r for r in results if isinstance(r, AlreadyBooked)]
    assert len(winners) == 1
    assert len(losers) == len(contenders) - 1

    async with ledger.snapshot() as db:
        admin = await db.get(Admin, 1)
        balances = [(await db.get(Participant, p)).balance for p in contenders]
    assert admin.balance == FEE
    assert sorted(balances) == [9 * FEE] + [10 * FEE] * (len(contenders) - 1)


@pytest.mark.asyncio
async def test_ids_outside_store_range_not_found(ledger, actors, entropy):
    with pytest.raises(NotFound, match="Trainer"):
        await _book(ledger, entropy, trainer_id=2**63)
    with pytest.raises(NotFound, match="Participant"):
        await _book(ledger, entropy, participant_id=2**64)
    assert await _balances(ledger) == (10 * FEE, 0)
