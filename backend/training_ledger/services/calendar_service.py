"""
Per-trainer calendar of SLOTS_PER_DAY slots.

A slot is free until a SlotBooking row exists for it. book() is the only
transition (free -> booked) and there is no way back.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from training_ledger.models.slot import SlotBooking, SLOTS_PER_DAY, slot_time_range
from training_ledger.core.exceptions import AlreadyBooked, InvalidSlot
from training_ledger.core.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "SLOTS_PER_DAY",
    "slot_time_range",
    "is_valid_slot",
    "is_booked",
    "booked_indices",
    "book",
]


def is_valid_slot(slot_index: int) -> bool:
    return 0 <= slot_index < SLOTS_PER_DAY


async def is_booked(db: AsyncSession, trainer_id: int, slot_index: int) -> bool:
    result = await db.execute(
        select(SlotBooking.id).where(
            SlotBooking.trainer_id == trainer_id,
            SlotBooking.slot_index == slot_index,
        )
    )
    return result.scalar_one_or_none() is not None


async def booked_indices(db: AsyncSession, trainer_id: int) -> set[int]:
    result = await db.execute(
        select(SlotBooking.slot_index).where(SlotBooking.trainer_id == trainer_id)
    )
    return set(result.scalars().all())


async def book(
    db: AsyncSession,
    trainer_id: int,
    slot_index: int,
    participant_id: int,
) -> SlotBooking:
    """Mark a free slot booked by `participant_id`. Raises AlreadyBooked otherwise."""
    if not is_valid_slot(slot_index):
        raise InvalidSlot(f"Slot index must be in [0, {SLOTS_PER_DAY}), got {slot_index}")

    if await is_booked(db, trainer_id, slot_index):
        raise AlreadyBooked(f"Slot {slot_index} of trainer {trainer_id} is already booked")

    booking = SlotBooking(
        trainer_id=trainer_id,
        slot_index=slot_index,
        participant_id=participant_id,
    )
    db.add(booking)
    try:
        await db.flush()
    except IntegrityError:
        # uq_trainer_slot: another writer got there first (shared database)
        logger.warning("slot_conflict", trainer_id=trainer_id, slot_index=slot_index)
        raise AlreadyBooked(
            f"Slot {slot_index} of trainer {trainer_id} is already booked"
        ) from None

    return booking
