"""
Service interfaces for dependency inversion.
Allows swapping the admin-selection entropy without changing booking logic.
"""

from .entropy import EntropySource, SystemEntropy
from .fixed_entropy import FixedEntropy

__all__ = ['EntropySource', 'SystemEntropy', 'FixedEntropy']
