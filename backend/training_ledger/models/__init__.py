from training_ledger.models.admin import Admin
from training_ledger.models.trainer import Trainer
from training_ledger.models.participant import Participant, TrainingInterest
from training_ledger.models.slot import SlotBooking, SLOTS_PER_DAY, SLOT_MINUTES

__all__ = [
    "Admin", "Trainer", "Participant", "TrainingInterest",
    "SlotBooking", "SLOTS_PER_DAY", "SLOT_MINUTES",
]
