"""
Trainer model. Immutable after registration; the calendar lives in slot_bookings.
"""

from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship

from training_ledger.db.base import Base, TimestampMixin


class Trainer(Base, TimestampMixin):
    __tablename__ = "trainers"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(32), nullable=False)
    identity = Column(String(255), unique=True, index=True, nullable=False)

    bookings = relationship("SlotBooking", back_populates="trainer")

    __table_args__ = (
        CheckConstraint("id > 0", name="check_trainer_id_positive"),
        CheckConstraint("age > 0", name="check_trainer_age_positive"),
    )

    def __repr__(self) -> str:
        return f"<Trainer(id={self.id}, name={self.name})>"
