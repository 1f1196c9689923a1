"""
Storage layer: declarative base and the Ledger store object.
"""

from .base import Base, TimestampMixin
from .session import Ledger, get_ledger

__all__ = ['Base', 'TimestampMixin', 'Ledger', 'get_ledger']
