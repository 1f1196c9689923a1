"""
Pydantic schemas for slot bookings.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class BookingCreate(BaseModel):
    trainer_id: int
    participant_id: int
    slot_index: int


class BookingResponse(BaseModel):
    trainer_id: int
    participant_id: int
    slot_index: int
    time_range: str
    admin_id: int
    fee: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
