"""
Participant model with a fee balance and a training-completion latch.

Key design decisions:
- `balance` starts at the initial allowance and only ever decreases
- `has_completed_training` may go false -> true, never back (enforced in
  the registry service)
- `training_interest` is stored as its integer code
"""

from enum import IntEnum

from sqlalchemy import Column, Integer, BigInteger, String, Boolean, CheckConstraint
from sqlalchemy.orm import relationship

from training_ledger.db.base import Base, TimestampMixin


class TrainingInterest(IntEnum):
    FIRST_AID = 0
    SHELTER_REBUILD = 1
    FOOD_SAFETY = 2


class Participant(Base, TimestampMixin):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(32), nullable=False)
    district = Column(String(100), nullable=False)
    training_interest = Column(Integer, nullable=False)
    has_completed_training = Column(Boolean, nullable=False, default=False)
    balance = Column(BigInteger, nullable=False)
    identity = Column(String(255), unique=True, index=True, nullable=False)

    bookings = relationship("SlotBooking", back_populates="participant")

    __table_args__ = (
        CheckConstraint("id > 0", name="check_participant_id_positive"),
        CheckConstraint("age > 0", name="check_participant_age_positive"),
        # Prevent overdraft at the DB level
        CheckConstraint("balance >= 0", name="check_participant_balance_non_negative"),
        CheckConstraint("training_interest IN (0, 1, 2)", name="check_training_interest"),
    )

    def __repr__(self) -> str:
        return f"<Participant(id={self.id}, balance={self.balance})>"
