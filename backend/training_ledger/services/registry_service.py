"""
Actor registry: admins, trainers and participants.

Identifiers are chosen by the caller and never reused. Each caller identity
may register once per role; the three roles are independent namespaces.
"""

from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from training_ledger.db.base import MAX_ID
from training_ledger.models.admin import Admin
from training_ledger.models.trainer import Trainer
from training_ledger.models.participant import Participant, TrainingInterest
from training_ledger.core.config import get_settings
from training_ledger.core.exceptions import (
    LedgerError,
    InvalidArgument,
    InvalidEnum,
    DuplicateId,
    DuplicateIdentity,
    NotFound,
    IllegalTransition,
    Unauthorized,
)
from training_ledger.core.logging import get_logger
from training_ledger.core.metrics import record_registration
from training_ledger.core.security import Role, authorize

logger = get_logger(__name__)


def _validate_common(entity_id: int, age: int) -> None:
    if not 0 < entity_id <= MAX_ID:
        raise InvalidArgument(f"Identifier must be a positive integer up to {MAX_ID}")
    if not 0 < age <= MAX_ID:
        raise InvalidArgument(f"Age must be a positive integer up to {MAX_ID}")


async def get_record(db: AsyncSession, model, entity_id: int):
    """Look up a record by id; ids the store cannot hold are simply absent."""
    if not 0 < entity_id <= MAX_ID:
        return None
    return await db.get(model, entity_id)


def _validate_interest(training_interest: int) -> TrainingInterest:
    try:
        return TrainingInterest(training_interest)
    except ValueError:
        raise InvalidEnum(f"Unknown training interest: {training_interest}") from None


async def _ensure_unique(db: AsyncSession, model, entity_id: int, identity: str) -> None:
    if await db.get(model, entity_id) is not None:
        raise DuplicateId(f"{model.__name__} {entity_id} already registered")

    result = await db.execute(select(model.id).where(model.identity == identity))
    if result.scalar_one_or_none() is not None:
        raise DuplicateIdentity(f"Caller already registered as {model.__name__.lower()}")


async def _register(db: AsyncSession, role: Role, model, identity: str, record) -> int:
    try:
        await _ensure_unique(db, model, record.id, identity)
    except LedgerError as e:
        record_registration(role.value, e.code)
        logger.warning("registration_failed", role=role.value, id=record.id, reason=e.code)
        raise

    db.add(record)
    await db.flush()

    record_registration(role.value, "success")
    logger.info(f"{role.value}_registered", id=record.id, identity=identity)
    return record.id


async def register_admin(db: AsyncSession, identity: str, admin_id: int, name: str, age: int) -> int:
    """Register an admin and append it to the admin index list."""
    _validate_common(admin_id, age)

    next_position = (await db.execute(
        select(func.coalesce(func.max(Admin.position) + 1, 0))
    )).scalar_one()

    admin = Admin(
        id=admin_id,
        name=name,
        age=age,
        balance=0,
        identity=identity,
        position=next_position,
    )
    return await _register(db, Role.ADMIN, Admin, identity, admin)


async def register_trainer(
    db: AsyncSession, identity: str, trainer_id: int, name: str, age: int, gender: str
) -> int:
    """Register a trainer. All of the trainer's slots start free."""
    _validate_common(trainer_id, age)

    trainer = Trainer(id=trainer_id, name=name, age=age, gender=gender, identity=identity)
    return await _register(db, Role.TRAINER, Trainer, identity, trainer)


async def register_participant(
    db: AsyncSession,
    identity: str,
    participant_id: int,
    name: str,
    age: int,
    gender: str,
    district: str,
    training_interest: int,
    has_completed_training: bool,
) -> int:
    """Register a participant with the initial fee allowance."""
    _validate_common(participant_id, age)
    interest = _validate_interest(training_interest)

    participant = Participant(
        id=participant_id,
        name=name,
        age=age,
        gender=gender,
        district=district,
        training_interest=int(interest),
        has_completed_training=has_completed_training,
        balance=get_settings().initial_participant_balance,
        identity=identity,
    )
    return await _register(db, Role.PARTICIPANT, Participant, identity, participant)


async def get_admin_by_identity(db: AsyncSession, identity: str) -> Optional[Admin]:
    result = await db.execute(select(Admin).where(Admin.identity == identity))
    return result.scalar_one_or_none()


async def list_admin_ids(db: AsyncSession) -> list[int]:
    """The admin index list: admin ids in registration order."""
    result = await db.execute(select(Admin.id).order_by(Admin.position.asc()))
    return list(result.scalars().all())


async def update_participant_data(
    db: AsyncSession,
    identity: str,
    participant_id: int,
    training_interest: int,
    has_completed_training: bool,
) -> Participant:
    """
    Admin-only overwrite of a participant's interest and completion flag.
    Completion is a latch: true can never be set back to false.
    """
    admin = await get_admin_by_identity(db, identity)
    if not authorize(Role.ADMIN, admin.identity if admin else None, identity):
        raise Unauthorized("Only admins may update participant data")

    participant = await get_record(db, Participant, participant_id)
    if not participant:
        raise NotFound(f"Participant {participant_id} not found")

    interest = _validate_interest(training_interest)

    if participant.has_completed_training and not has_completed_training:
        logger.warning("participant_update_rejected", participant_id=participant_id, reason="latch")
        raise IllegalTransition("Completed training cannot be marked incomplete")

    participant.training_interest = int(interest)
    participant.has_completed_training = has_completed_training
    await db.flush()

    logger.info(
        "participant_updated",
        participant_id=participant_id,
        admin_id=admin.id,
        training_interest=interest.name.lower(),
        has_completed_training=has_completed_training,
    )
    return participant
