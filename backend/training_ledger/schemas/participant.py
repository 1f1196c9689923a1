"""
Pydantic schemas for participant registration, updates and lookups.

training_interest travels as its integer code (0 first_aid,
1 shelter_rebuild, 2 food_safety); out-of-range codes are rejected by the
registry with InvalidEnum rather than by schema validation.
"""

from pydantic import BaseModel, Field


class ParticipantCreate(BaseModel):
    id: int
    name: str = Field(..., min_length=1, max_length=100)
    age: int
    gender: str = Field(..., min_length=1, max_length=32)
    district: str = Field(..., min_length=1, max_length=100)
    training_interest: int
    has_completed_training: bool = False


class ParticipantUpdate(BaseModel):
    training_interest: int
    has_completed_training: bool


class ParticipantResponse(BaseModel):
    id: int
    name: str
    age: int
    gender: str
    district: str
    training_interest: int
    has_completed_training: bool
    balance: int
    identity: str

    model_config = {"from_attributes": True}
