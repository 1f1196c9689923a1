"""
Shared FastAPI dependencies.
"""

from fastapi import Request

from training_ledger.db.session import get_ledger
from training_ledger.core.security import get_caller_identity
from training_ledger.services.cache_service import get_schedule_cache
from training_ledger.services.interfaces.entropy import EntropySource

__all__ = ["get_ledger", "get_caller_identity", "get_entropy", "get_schedule_cache"]


def get_entropy(request: Request) -> EntropySource:
    """Entropy source configured at startup."""
    return request.app.state.entropy
