"""
Booking engine: reserve a trainer's slot and settle the fee.

ATOMICITY
=========

A booking has three effects that must appear together or not at all:

  a. the slot is marked booked by the participant
  b. one admin is drawn as the fee recipient
  c. the fee moves from the participant's balance to that admin's

book_training_slot() only ever runs inside Ledger.transaction(): the ledger
lock keeps other operations out for its duration, and any exception raised
after (a) rolls the session back so neither the slot row nor the balance
changes survive. Validation happens first, in a fixed order, so that the
first failing check decides the error and nothing has been written yet.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from training_ledger.models.admin import Admin
from training_ledger.models.trainer import Trainer
from training_ledger.models.participant import Participant
from training_ledger.models.slot import SlotBooking, SLOTS_PER_DAY
from training_ledger.core.config import get_settings
from training_ledger.core.exceptions import (
    NotFound,
    InsufficientBalance,
    NoAdminsAvailable,
    InvalidSlot,
    AlreadyBooked,
    Unauthorized,
)
from training_ledger.core.logging import get_logger
from training_ledger.core.metrics import record_fee_settled
from training_ledger.core.security import Role, authorize
from training_ledger.services import calendar_service
from training_ledger.services.admin_selector import select_admin
from training_ledger.services.interfaces.entropy import EntropySource
from training_ledger.services.registry_service import get_record, list_admin_ids

logger = get_logger(__name__)


async def book_training_slot(
    db: AsyncSession,
    identity: str,
    trainer_id: int,
    participant_id: int,
    slot_index: int,
    entropy_source: EntropySource,
) -> SlotBooking:
    """
    Book `slot_index` of `trainer_id` for `participant_id` and pay the fee.
    Only the participant's own identity may book on its behalf.
    """
    fee = get_settings().booking_fee

    trainer = await get_record(db, Trainer, trainer_id)
    if not trainer:
        raise NotFound(f"Trainer {trainer_id} not found")

    participant = await get_record(db, Participant, participant_id)
    if not participant:
        raise NotFound(f"Participant {participant_id} not found")

    if not authorize(Role.PARTICIPANT, participant.identity, identity):
        raise Unauthorized("Caller may only book for its own participant record")

    if participant.balance < fee:
        logger.warning(
            "booking_failed_balance",
            participant_id=participant_id,
            balance=participant.balance,
            fee=fee,
        )
        raise InsufficientBalance(
            f"Balance {participant.balance} is below the booking fee {fee}"
        )

    admin_ids = await list_admin_ids(db)
    if not admin_ids:
        raise NoAdminsAvailable("No admins registered to receive the booking fee")

    if not calendar_service.is_valid_slot(slot_index):
        raise InvalidSlot(f"Slot index must be in [0, {SLOTS_PER_DAY}), got {slot_index}")

    if await calendar_service.is_booked(db, trainer_id, slot_index):
        raise AlreadyBooked(f"Slot {slot_index} of trainer {trainer_id} is already booked")

    # Step a: reserve the slot
    booking = await calendar_service.book(db, trainer_id, slot_index, participant_id)

    # Step b: draw the fee recipient
    admin_id = select_admin(admin_ids, participant_id, entropy_source)
    admin = await db.get(Admin, admin_id)

    # Step c: move the fee
    participant.balance -= fee
    admin.balance += fee
    booking.admin_id = admin_id
    booking.fee = fee
    await db.flush()
    await db.refresh(booking)

    record_fee_settled()
    logger.info(
        "booking_created",
        trainer_id=trainer_id,
        participant_id=participant_id,
        slot_index=slot_index,
        admin_id=admin_id,
        fee=fee,
        participant_balance=participant.balance,
    )
    return booking
