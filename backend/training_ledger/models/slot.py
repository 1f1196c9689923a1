"""
Booked calendar slots.

Each trainer has SLOTS_PER_DAY fixed 30-minute slots of one recurring day.
A slot is free until a row exists for (trainer_id, slot_index); rows are
never deleted, so booked is terminal.

Key design decisions:
- Unique constraint on (trainer_id, slot_index): at most one booking per slot
- The settled fee and its recipient are stored with the booking
"""

from sqlalchemy import (
    Column, Integer, BigInteger, ForeignKey, UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship

from training_ledger.db.base import Base, TimestampMixin

SLOTS_PER_DAY = 48
SLOT_MINUTES = 30


def slot_time_range(slot_index: int) -> str:
    """Render a slot as "H:MM-H:MM", hours unpadded ("2:30-3:00")."""
    start = slot_index * SLOT_MINUTES
    end = start + SLOT_MINUTES
    return f"{start // 60}:{start % 60:02d}-{end // 60}:{end % 60:02d}"


class SlotBooking(Base, TimestampMixin):
    __tablename__ = "slot_bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trainer_id = Column(Integer, ForeignKey("trainers.id"), nullable=False, index=True)
    slot_index = Column(Integer, nullable=False)
    participant_id = Column(Integer, ForeignKey("participants.id"), nullable=False, index=True)
    admin_id = Column(Integer, ForeignKey("admins.id"), nullable=True)
    fee = Column(BigInteger, nullable=False, default=0)

    trainer = relationship("Trainer", back_populates="bookings")
    participant = relationship("Participant", back_populates="bookings")

    __table_args__ = (
        UniqueConstraint("trainer_id", "slot_index", name="uq_trainer_slot"),
        CheckConstraint(
            f"slot_index >= 0 AND slot_index < {SLOTS_PER_DAY}",
            name="check_slot_index_range",
        ),
        CheckConstraint("fee >= 0", name="check_booking_fee_non_negative"),
    )

    @property
    def time_range(self) -> str:
        return slot_time_range(self.slot_index)

    def __repr__(self) -> str:
        return (
            f"<SlotBooking(trainer={self.trainer_id}, slot={self.slot_index}, "
            f"participant={self.participant_id})>"
        )
