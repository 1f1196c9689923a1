"""
Admin endpoints: registration and fee balances.
"""

from fastapi import APIRouter, Depends, status

from training_ledger.api.dependencies import get_ledger, get_caller_identity
from training_ledger.db.session import Ledger
from training_ledger.schemas.admin import AdminCreate, AdminBalancesResponse
from training_ledger.schemas.common import RegistrationResponse
from training_ledger.services.registry_service import register_admin
from training_ledger.services.query_service import view_admin_balance

router = APIRouter(prefix="/admins", tags=["Admins"])


@router.post("/", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_admin_endpoint(
    admin_data: AdminCreate,
    identity: str = Depends(get_caller_identity),
    ledger: Ledger = Depends(get_ledger),
):
    """Register the caller as an admin. Admins receive booking fees."""
    async with ledger.transaction() as db:
        admin_id = await register_admin(db, identity, admin_data.id, admin_data.name, admin_data.age)
    return RegistrationResponse(id=admin_id)


@router.get("/balances", response_model=AdminBalancesResponse)
async def admin_balances_endpoint(ledger: Ledger = Depends(get_ledger)):
    """Admin ids in registration order with balances in whole fee units."""
    async with ledger.snapshot() as db:
        admin_ids, balances = await view_admin_balance(db)
    return AdminBalancesResponse(admin_ids=admin_ids, balances=balances)
