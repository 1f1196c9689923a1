"""
Pydantic schemas shared across endpoints.
"""

from pydantic import BaseModel


class RegistrationResponse(BaseModel):
    id: int
