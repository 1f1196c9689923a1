"""
Entropy source interface for fee-recipient selection.
Allows swapping real-time entropy for deterministic seeds.
"""

import os
import time
from abc import ABC, abstractmethod

ENTROPY_BYTES = 32


class EntropySource(ABC):
    """
    Interface for admin-selection entropy.

    Implementations:
    - SystemEntropy: wall-clock seconds plus OS randomness
    - FixedEntropy: caller-supplied values, for tests and replays

    Both calls must be synchronous and non-blocking; they run while the
    ledger lock is held.
    """

    @abstractmethod
    def timestamp(self) -> int:
        """
        Coarse current time.

        Returns:
            Non-negative integer seconds
        """
        pass

    @abstractmethod
    def environment_entropy(self) -> bytes:
        """
        Unpredictability value the caller cannot control.

        Returns:
            Opaque bytes, fed into the selection hash
        """
        pass


class SystemEntropy(EntropySource):
    """
    Real entropy: time.time() and os.urandom.

    Not cryptographically fair, but a caller cannot predict the draw
    without controlling the OS random source.
    """

    def timestamp(self) -> int:
        return int(time.time())

    def environment_entropy(self) -> bytes:
        return os.urandom(ENTROPY_BYTES)
