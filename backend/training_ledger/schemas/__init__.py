from training_ledger.schemas.common import RegistrationResponse
from training_ledger.schemas.admin import AdminCreate, AdminBalancesResponse
from training_ledger.schemas.trainer import TrainerCreate, TrainerScheduleResponse
from training_ledger.schemas.participant import ParticipantCreate, ParticipantUpdate, ParticipantResponse
from training_ledger.schemas.booking import BookingCreate, BookingResponse

__all__ = [
    "RegistrationResponse",
    "AdminCreate", "AdminBalancesResponse",
    "TrainerCreate", "TrainerScheduleResponse",
    "ParticipantCreate", "ParticipantUpdate", "ParticipantResponse",
    "BookingCreate", "BookingResponse",
]
