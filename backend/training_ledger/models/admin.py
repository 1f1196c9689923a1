"""
Admin model: receives booking fees.

Key design decisions:
- `id` is chosen by the caller, never generated
- `identity` is unique: one admin registration per caller identity
- `position` is the admin's place in the admin index list (registration
  order, 0-based, append-only); it is the domain of fee-recipient selection
"""

from sqlalchemy import Column, Integer, BigInteger, String, CheckConstraint

from training_ledger.db.base import Base, TimestampMixin


class Admin(Base, TimestampMixin):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    balance = Column(BigInteger, nullable=False, default=0)
    identity = Column(String(255), unique=True, index=True, nullable=False)
    position = Column(Integer, unique=True, nullable=False)

    __table_args__ = (
        CheckConstraint("id > 0", name="check_admin_id_positive"),
        CheckConstraint("age > 0", name="check_admin_age_positive"),
        CheckConstraint("balance >= 0", name="check_admin_balance_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, position={self.position}, balance={self.balance})>"
