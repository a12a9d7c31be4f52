"""Fixed-width word arithmetic shared by every RC5 variant.

One ``WordOps`` instance exists per supported width. Everything above this
module (key schedule, block transform, modes) is written once against the
``WordOps`` interface and never branches on the width itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from ..errors import ConfigError


# Odd((e - 2) * 2^w) and Odd((phi - 1) * 2^w)
MAGIC_CONSTANTS: Dict[int, Tuple[int, int]] = {
    16: (0xB7E1, 0x9E37),
    32: (0xB7E15163, 0x9E3779B9),
    64: (0xB7E151628AED2A6B, 0x9E3779B97F4A7C15),
    128: (0xB7E151628AED2A6ABF7158809CF4F3C7, 0x9E3779B97F4A7C15F39CC0605CEDC835),
}

SUPPORTED_WORD_SIZES: Tuple[int, ...] = tuple(sorted(MAGIC_CONSTANTS))


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte strings of equal length."""
    if len(a) != len(b):
        raise ValueError("xor_bytes length mismatch")
    n = len(a)
    return (int.from_bytes(a, "little") ^ int.from_bytes(b, "little")).to_bytes(n, "little")


@dataclass(frozen=True)
class WordOps:
    """Unsigned arithmetic modulo 2^bits plus little-endian (de)serialization."""

    bits: int
    mask: int = field(init=False)
    nbytes: int = field(init=False)
    P: int = field(init=False)
    Q: int = field(init=False)

    def __post_init__(self) -> None:
        if self.bits not in MAGIC_CONSTANTS:
            raise ConfigError(
                f"Unsupported word size {self.bits}, expected one of {SUPPORTED_WORD_SIZES}"
            )
        p, q = MAGIC_CONSTANTS[self.bits]
        object.__setattr__(self, "mask", (1 << self.bits) - 1)
        object.__setattr__(self, "nbytes", self.bits // 8)
        object.__setattr__(self, "P", p)
        object.__setattr__(self, "Q", q)

    @property
    def block_bytes(self) -> int:
        return 2 * self.nbytes

    def add(self, a: int, b: int) -> int:
        return (a + b) & self.mask

    def sub(self, a: int, b: int) -> int:
        return (a - b) & self.mask

    def xor(self, a: int, b: int) -> int:
        return (a ^ b) & self.mask

    def rotl(self, x: int, amount: int) -> int:
        """Rotate-left x by (amount mod bits)."""
        r = amount & (self.bits - 1)
        x &= self.mask
        return ((x << r) & self.mask) | (x >> (self.bits - r))

    def rotr(self, x: int, amount: int) -> int:
        """Rotate-right x by (amount mod bits)."""
        r = amount & (self.bits - 1)
        x &= self.mask
        return (x >> r) | ((x << (self.bits - r)) & self.mask)

    def from_bytes(self, data: bytes) -> int:
        return int.from_bytes(data, "little")

    def to_bytes(self, word: int) -> bytes:
        return (word & self.mask).to_bytes(self.nbytes, "little")

    def split_block(self, block: bytes) -> Tuple[int, int]:
        n = self.nbytes
        return int.from_bytes(block[:n], "little"), int.from_bytes(block[n:2 * n], "little")

    def join_block(self, a: int, b: int) -> bytes:
        return self.to_bytes(a) + self.to_bytes(b)


_WORD_OPS: Dict[int, WordOps] = {w: WordOps(w) for w in SUPPORTED_WORD_SIZES}


def word_ops(bits: int) -> WordOps:
    """Return the shared ``WordOps`` for a supported width."""
    try:
        return _WORD_OPS[bits]
    except (KeyError, TypeError):
        raise ConfigError(
            f"Unsupported word size {bits!r}, expected one of {SUPPORTED_WORD_SIZES}"
        ) from None
