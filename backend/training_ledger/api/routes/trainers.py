"""
Trainer endpoints: registration and free-slot schedule.
"""

from fastapi import APIRouter, Depends, status

from training_ledger.api.dependencies import get_ledger, get_caller_identity, get_schedule_cache
from training_ledger.db.session import Ledger
from training_ledger.schemas.trainer import TrainerCreate, TrainerScheduleResponse
from training_ledger.schemas.common import RegistrationResponse
from training_ledger.services.registry_service import register_trainer
from training_ledger.services.query_service import get_trainer, view_trainer_schedule
from training_ledger.services.cache_service import ScheduleCache
from training_ledger.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/trainers", tags=["Trainers"])


@router.post("/", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_trainer_endpoint(
    trainer_data: TrainerCreate,
    identity: str = Depends(get_caller_identity),
    ledger: Ledger = Depends(get_ledger),
):
    """Register the caller as a trainer with an empty 48-slot calendar."""
    async with ledger.transaction() as db:
        trainer_id = await register_trainer(
            db,
            identity,
            trainer_data.id,
            trainer_data.name,
            trainer_data.age,
            trainer_data.gender,
        )
    return RegistrationResponse(id=trainer_id)


@router.get("/{trainer_id}/schedule", response_model=TrainerScheduleResponse)
async def trainer_schedule_endpoint(
    trainer_id: int,
    ledger: Ledger = Depends(get_ledger),
    cache: ScheduleCache = Depends(get_schedule_cache),
):
    """
    Free slots of a trainer in ascending order with "H:MM-H:MM" ranges.
    Served from Redis when enabled; the cache is filled under the ledger lock.
    """
    async with ledger.snapshot() as db:
        # The ledger decides whether the trainer exists, never the cache
        await get_trainer(db, trainer_id)

        cached = await cache.get(trainer_id)
        if cached:
            logger.info("schedule_cache_hit", trainer_id=trainer_id)
            return TrainerScheduleResponse(**cached)

        slot_indices, time_ranges = await view_trainer_schedule(db, trainer_id)
        response = TrainerScheduleResponse(
            trainer_id=trainer_id,
            slot_indices=slot_indices,
            time_ranges=time_ranges,
        )
        await cache.set(trainer_id, response.model_dump())

    return response
