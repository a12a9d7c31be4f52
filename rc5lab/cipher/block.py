from __future__ import annotations

from typing import Sequence, Tuple

from ..errors import ConfigError, LengthError
from .words import WordOps


class BlockCipher:
    """A keyed block transform over fixed-size byte blocks."""

    block_size: int

    def encrypt_block(self, plaintext_block: bytes) -> bytes:  # pragma: no cover
        raise NotImplementedError

    def decrypt_block(self, ciphertext_block: bytes) -> bytes:  # pragma: no cover
        raise NotImplementedError


class RC5Block(BlockCipher):
    """The RC5 round function bound to one expanded key.

    A block is two words (A, B) serialized as LE(A) || LE(B).
    """

    def __init__(self, ops: WordOps, rounds: int, s_table: Sequence[int]):
        if len(s_table) != 2 * (rounds + 1):
            raise ConfigError(
                f"Subkey table must hold {2 * (rounds + 1)} words, got {len(s_table)}"
            )
        self._ops = ops
        self._rounds = rounds
        self._s = tuple(s_table)

    @property
    def block_size(self) -> int:
        return self._ops.block_bytes

    @property
    def rounds(self) -> int:
        return self._rounds

    @property
    def ops(self) -> WordOps:
        return self._ops

    def encrypt_words(self, a: int, b: int) -> Tuple[int, int]:
        ops = self._ops
        s = self._s
        mask = ops.mask
        rotl = ops.rotl

        a = (a + s[0]) & mask
        b = (b + s[1]) & mask
        for i in range(1, self._rounds + 1):
            a = (rotl(a ^ b, b) + s[2 * i]) & mask
            b = (rotl(b ^ a, a) + s[2 * i + 1]) & mask
        return a, b

    def decrypt_words(self, a: int, b: int) -> Tuple[int, int]:
        ops = self._ops
        s = self._s
        mask = ops.mask
        rotr = ops.rotr

        for i in range(self._rounds, 0, -1):
            b = rotr((b - s[2 * i + 1]) & mask, a) ^ a
            a = rotr((a - s[2 * i]) & mask, b) ^ b
        b = (b - s[1]) & mask
        a = (a - s[0]) & mask
        return a, b

    def encrypt_block(self, plaintext_block: bytes) -> bytes:
        self._check(plaintext_block)
        ops = self._ops
        return ops.join_block(*self.encrypt_words(*ops.split_block(plaintext_block)))

    def decrypt_block(self, ciphertext_block: bytes) -> bytes:
        self._check(ciphertext_block)
        ops = self._ops
        return ops.join_block(*self.decrypt_words(*ops.split_block(ciphertext_block)))

    def _check(self, block: bytes) -> None:
        if len(block) != self.block_size:
            raise LengthError(f"Block must be {self.block_size} bytes, got {len(block)}")
