"""
Read-only projections over the registry and calendars.
Run these inside Ledger.snapshot(); nothing here writes.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from training_ledger.models.admin import Admin
from training_ledger.models.trainer import Trainer
from training_ledger.models.participant import Participant
from training_ledger.core.config import get_settings
from training_ledger.core.exceptions import NotFound
from training_ledger.services.calendar_service import SLOTS_PER_DAY, booked_indices, slot_time_range
from training_ledger.services.registry_service import get_record


async def view_admin_balance(db: AsyncSession) -> tuple[list[int], list[int]]:
    """
    Admin ids in registration order and their balances in whole fee units.
    Fractions of a unit are truncated.
    """
    unit = get_settings().FEE_UNIT
    result = await db.execute(
        select(Admin.id, Admin.balance).order_by(Admin.position.asc())
    )
    rows = result.all()
    return [row.id for row in rows], [row.balance // unit for row in rows]


async def view_participant_data(db: AsyncSession, participant_id: int) -> Participant:
    participant = await get_record(db, Participant, participant_id)
    if not participant:
        raise NotFound(f"Participant {participant_id} not found")
    return participant


async def get_trainer(db: AsyncSession, trainer_id: int) -> Trainer:
    trainer = await get_record(db, Trainer, trainer_id)
    if not trainer:
        raise NotFound(f"Trainer {trainer_id} not found")
    return trainer


async def view_trainer_schedule(db: AsyncSession, trainer_id: int) -> tuple[list[int], list[str]]:
    """Free slot indices of a trainer, ascending, with their "H:MM-H:MM" ranges."""
    await get_trainer(db, trainer_id)

    taken = await booked_indices(db, trainer_id)
    free = [i for i in range(SLOTS_PER_DAY) if i not in taken]
    return free, [slot_time_range(i) for i in free]
