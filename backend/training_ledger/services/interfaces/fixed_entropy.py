"""
Fixed entropy source - deterministic seeds.
Makes the admin draw reproducible for a given participant.
"""

from typing import Union

from training_ledger.services.interfaces.entropy import EntropySource, ENTROPY_BYTES


class FixedEntropy(EntropySource):
    """
    Always returns the configured values.

    Use when:
    - Testing the modulo draw independently of real time
    - Replaying a recorded booking sequence
    """

    def __init__(self, seed: Union[int, bytes] = 0, timestamp: int = 0):
        if isinstance(seed, int):
            seed = seed.to_bytes(ENTROPY_BYTES, "big")
        self._seed = seed
        self._timestamp = timestamp

    def timestamp(self) -> int:
        return self._timestamp

    def environment_entropy(self) -> bytes:
        return self._seed
