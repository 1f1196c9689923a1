"""
Pydantic schemas for admin registration and balances.
"""

from pydantic import BaseModel, Field


class AdminCreate(BaseModel):
    # id and age are range-checked by the registry (InvalidArgument)
    id: int
    name: str = Field(..., min_length=1, max_length=100)
    age: int


class AdminBalancesResponse(BaseModel):
    admin_ids: list[int]
    balances: list[int]
