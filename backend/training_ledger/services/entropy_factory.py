"""
Entropy source factory.
Configures which entropy source the admin selector draws from.
"""

from training_ledger.services.interfaces.entropy import EntropySource, SystemEntropy
from training_ledger.services.interfaces.fixed_entropy import FixedEntropy
from training_ledger.core.config import get_settings


def get_entropy_source() -> EntropySource:
    """
    Build the configured entropy source.

    - system (default): real time and OS randomness
    - fixed: FIXED_ENTROPY_SEED / FIXED_TIMESTAMP, for reproducible runs

    Selected via the ENTROPY_SOURCE env var.
    """
    settings = get_settings()

    if settings.ENTROPY_SOURCE == "fixed":
        return FixedEntropy(
            seed=settings.FIXED_ENTROPY_SEED,
            timestamp=settings.FIXED_TIMESTAMP,
        )
    elif settings.ENTROPY_SOURCE == "system":
        return SystemEntropy()
    raise ValueError(f"Unknown ENTROPY_SOURCE: {settings.ENTROPY_SOURCE!r}")
