"""
Caller identity and role authorization.

The identity is supplied by the transport (the X-Caller-Identity header)
and trusted verbatim; authorization only checks that it matches the
identity recorded on the actor that owns the operation.
"""

from enum import Enum
from typing import Optional

from fastapi import Header, HTTPException, status

from training_ledger.core.logging import get_logger

logger = get_logger(__name__)

IDENTITY_HEADER = "X-Caller-Identity"


class Role(str, Enum):
    ADMIN = "admin"
    TRAINER = "trainer"
    PARTICIPANT = "participant"


def authorize(
    required_role: Role,
    record_owner_identity: Optional[str],
    caller_identity: str,
) -> bool:
    """
    Decide whether `caller_identity` may act as the owner of a `required_role` record.

    `record_owner_identity` is None when the caller holds no record of that role.
    """
    allowed = record_owner_identity is not None and record_owner_identity == caller_identity
    if not allowed:
        logger.warning(
            "authorization_denied",
            role=required_role.value,
            caller=caller_identity,
        )
    return allowed


async def get_caller_identity(
    x_caller_identity: Optional[str] = Header(default=None, alias=IDENTITY_HEADER),
) -> str:
    """FastAPI dependency extracting the calling identity."""
    if x_caller_identity is None or not x_caller_identity.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {IDENTITY_HEADER} header",
        )
    return x_caller_identity.strip()
