"""
Participant endpoints: registration, admin updates and lookup.
"""

from fastapi import APIRouter, Depends, status

from training_ledger.api.dependencies import get_ledger, get_caller_identity
from training_ledger.db.session import Ledger
from training_ledger.schemas.participant import ParticipantCreate, ParticipantUpdate, ParticipantResponse
from training_ledger.schemas.common import RegistrationResponse
from training_ledger.services.registry_service import register_participant, update_participant_data
from training_ledger.services.query_service import view_participant_data

router = APIRouter(prefix="/participants", tags=["Participants"])


@router.post("/", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_participant_endpoint(
    participant_data: ParticipantCreate,
    identity: str = Depends(get_caller_identity),
    ledger: Ledger = Depends(get_ledger),
):
    """Register the caller as a participant with the initial fee allowance."""
    async with ledger.transaction() as db:
        participant_id = await register_participant(
            db,
            identity,
            participant_data.id,
            participant_data.name,
            participant_data.age,
            participant_data.gender,
            participant_data.district,
            participant_data.training_interest,
            participant_data.has_completed_training,
        )
    return RegistrationResponse(id=participant_id)


@router.patch("/{participant_id}", response_model=ParticipantResponse)
async def update_participant_endpoint(
    participant_id: int,
    update_data: ParticipantUpdate,
    identity: str = Depends(get_caller_identity),
    ledger: Ledger = Depends(get_ledger),
):
    """Admin-only: change training interest and completion (completion cannot be undone)."""
    async with ledger.transaction() as db:
        participant = await update_participant_data(
            db,
            identity,
            participant_id,
            update_data.training_interest,
            update_data.has_completed_training,
        )
        response = ParticipantResponse.model_validate(participant)
    return response


@router.get("/{participant_id}", response_model=ParticipantResponse)
async def get_participant_endpoint(
    participant_id: int,
    ledger: Ledger = Depends(get_ledger),
):
    """Full participant record, training interest as its integer code."""
    async with ledger.snapshot() as db:
        participant = await view_participant_data(db, participant_id)
        response = ParticipantResponse.model_validate(participant)
    return response
