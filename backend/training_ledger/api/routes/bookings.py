"""
Booking endpoint: reserve a trainer's slot and pay the fee.
"""

from fastapi import APIRouter, Depends, status

from training_ledger.api.dependencies import get_ledger, get_caller_identity, get_entropy, get_schedule_cache
from training_ledger.db.session import Ledger
from training_ledger.schemas.booking import BookingCreate, BookingResponse
from training_ledger.services.booking_service import book_training_slot
from training_ledger.services.cache_service import ScheduleCache
from training_ledger.services.interfaces.entropy import EntropySource
from training_ledger.core.exceptions import LedgerError
from training_ledger.core.metrics import record_booking_attempt, booking_latency

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    identity: str = Depends(get_caller_identity),
    ledger: Ledger = Depends(get_ledger),
    entropy: EntropySource = Depends(get_entropy),
    cache: ScheduleCache = Depends(get_schedule_cache),
):
    """
    Book one 30-minute slot of a trainer.

    The slot reservation, admin draw and fee transfer commit together or
    not at all. A taken slot returns 409 and leaves every balance unchanged.
    """
    with booking_latency.time():
        try:
            async with ledger.transaction() as db:
                booking = await book_training_slot(
                    db,
                    identity,
                    booking_data.trainer_id,
                    booking_data.participant_id,
                    booking_data.slot_index,
                    entropy,
                )
                await cache.invalidate(booking_data.trainer_id)
                response = BookingResponse.model_validate(booking)
        except LedgerError as e:
            record_booking_attempt(e.code)
            raise

    record_booking_attempt("success")
    return response
