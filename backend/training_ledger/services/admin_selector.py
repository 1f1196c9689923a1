"""
Fee-recipient selection.

Each booking credits exactly one admin, drawn from the admin index list
(registration order) with a single hash:

    seed  = word(timestamp) || word(environment entropy) || word(participant_id)
    index = int(sha256(seed)) mod len(admin_ids)

where word() is a 32-byte big-endian encoding. The draw spreads fee revenue
across admins without a fixed assignment. Repeated selection of the same
admin is left to the modulo scheme; the formula is kept exactly as is.
"""

import hashlib
from typing import Sequence, Union

from training_ledger.core.exceptions import NoAdminsAvailable
from training_ledger.core.logging import get_logger
from training_ledger.services.interfaces.entropy import EntropySource, ENTROPY_BYTES

logger = get_logger(__name__)


def _word(value: Union[int, bytes]) -> bytes:
    if isinstance(value, int):
        return value.to_bytes(ENTROPY_BYTES, "big")
    # Left-pad short values, keep the low-order bytes of long ones
    return value.rjust(ENTROPY_BYTES, b"\x00")[-ENTROPY_BYTES:]


def compute_seed(timestamp: int, entropy: bytes, participant_id: int) -> bytes:
    return _word(timestamp) + _word(entropy) + _word(participant_id)


def draw_index(seed: bytes, admin_count: int) -> int:
    digest = hashlib.sha256(seed).digest()
    return int.from_bytes(digest, "big") % admin_count


def select_admin(
    admin_ids: Sequence[int],
    participant_id: int,
    entropy_source: EntropySource,
) -> int:
    """
    Pick the admin that receives this booking's fee.
    Raises NoAdminsAvailable before touching the entropy source if the list is empty.
    """
    if not admin_ids:
        raise NoAdminsAvailable("No admins registered to receive the booking fee")

    seed = compute_seed(
        entropy_source.timestamp(),
        entropy_source.environment_entropy(),
        participant_id,
    )
    index = draw_index(seed, len(admin_ids))
    admin_id = admin_ids[index]

    logger.debug(
        "admin_selected",
        participant_id=participant_id,
        admin_id=admin_id,
        index=index,
        pool_size=len(admin_ids),
    )
    return admin_id
