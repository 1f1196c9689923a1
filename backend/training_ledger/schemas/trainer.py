"""
Pydantic schemas for trainer registration and schedules.
"""

from pydantic import BaseModel, Field


class TrainerCreate(BaseModel):
    id: int
    name: str = Field(..., min_length=1, max_length=100)
    age: int
    gender: str = Field(..., min_length=1, max_length=32)


class TrainerScheduleResponse(BaseModel):
    trainer_id: int
    slot_indices: list[int]
    time_ranges: list[str]
