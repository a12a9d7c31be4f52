"""Fresh IV and CTR seed generation from the OS CSPRNG."""
from __future__ import annotations

import secrets

from .words import word_ops


def random_iv(word_size: int = 32) -> bytes:
    """Return one random block (2 * word_size bits) for CBC."""
    return secrets.token_bytes(word_ops(word_size).block_bytes)


def random_nonce_and_counter(word_size: int = 32) -> bytes:
    """Return a CTR seed: random nonce word A, counter word B set to zero."""
    ops = word_ops(word_size)
    return secrets.token_bytes(ops.nbytes) + bytes(ops.nbytes)
