"""
Training Ledger - registry and slot-booking ledger for a disaster-recovery
training program.
"""

__version__ = "1.0.0"
