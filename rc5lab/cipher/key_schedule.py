"""RC5 key expansion.

Turns a secret key of 0..255 bytes into the subkey table S of 2(r+1) words.
"""
from __future__ import annotations

from typing import List, Tuple

from .words import WordOps


def load_key_words(key: bytes, ops: WordOps) -> List[int]:
    """Pack key bytes into little-endian words, zero-padding the last one.

    An empty key yields a single zero word.
    """
    u = ops.nbytes
    c = max(1, (len(key) + u - 1) // u)
    padded = bytes(key).ljust(c * u, b"\x00")
    return [int.from_bytes(padded[i * u:(i + 1) * u], "little") for i in range(c)]


def expand_key(key: bytes, rounds: int, ops: WordOps) -> Tuple[int, ...]:
    """Derive the subkey table S for ``rounds`` rounds."""
    mask = ops.mask
    rotl = ops.rotl

    L = load_key_words(key, ops)
    c = len(L)
    t = 2 * (rounds + 1)

    S = [0] * t
    S[0] = ops.P
    for i in range(1, t):
        S[i] = (S[i - 1] + ops.Q) & mask

    A = B = 0
    i = j = 0
    for _ in range(3 * max(c, t)):
        A = S[i] = rotl((S[i] + A + B) & mask, 3)
        B = L[j] = rotl((L[j] + A + B) & mask, A + B)
        i = (i + 1) % t
        j = (j + 1) % c

    return tuple(S)
