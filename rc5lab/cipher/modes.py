"""Modes of operation over a ``BlockCipher``.

- **ECB**: Electronic Codebook. Each block is enciphered on its own, so equal
  plaintext blocks give equal ciphertext blocks. Avoid for real data.
- **CBC**: Cipher Block Chaining. Needs a one-block IV.
- **CTR**: Counter. Needs a one-block nonce+counter seed and turns the block
  cipher into a stream cipher; encryption and decryption are the same call.

ECB and CBC pad with PKCS#7; CTR accepts input of any length.

CTR counter layout: the seed block is read as two little-endian words
(A, B) and the counter value is ``A * 2^w + B`` so A carries the nonce and
B the running counter. Block i is keyed by ``(seed + i) mod 2^(2w)``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, List, Literal, Union

from ..errors import ConfigError, LengthError
from .block import BlockCipher
from .padding import pkcs7_pad, pkcs7_unpad
from .words import xor_bytes

logger = logging.getLogger(__name__)


ModeKind = Literal["ECB", "CBC", "CTR"]


def _as_bytes(value: object, what: str) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise ConfigError(f"{what} must be bytes, got {type(value).__name__}")


@dataclass(frozen=True)
class ECB:
    """Electronic Codebook, no payload."""

    kind: ClassVar[ModeKind] = "ECB"


@dataclass(frozen=True)
class CBC:
    """Cipher Block Chaining with an initialization vector of one block."""

    iv: bytes
    kind: ClassVar[ModeKind] = "CBC"

    def __post_init__(self) -> None:
        object.__setattr__(self, "iv", _as_bytes(self.iv, "CBC iv"))


@dataclass(frozen=True)
class CTR:
    """Counter mode seeded with a one-block nonce+counter value."""

    nonce_and_counter: bytes
    kind: ClassVar[ModeKind] = "CTR"

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "nonce_and_counter", _as_bytes(self.nonce_and_counter, "CTR nonce_and_counter")
        )


OperationMode = Union[ECB, CBC, CTR]


# ---------------------------------------------------------------------------
# Block plumbing
# ---------------------------------------------------------------------------

def split_blocks(data: bytes, block_size: int) -> List[bytes]:
    """Split aligned data into blocks; a trailing partial block is an error."""
    if len(data) % block_size != 0:
        logger.debug("Rejected input: length %d is not a multiple of %d", len(data), block_size)
        raise LengthError(
            f"Input length {len(data)} is not a multiple of the block size {block_size}"
        )
    return [data[i:i + block_size] for i in range(0, len(data), block_size)]


def _check_block_arg(value: bytes, block_size: int, what: str) -> None:
    if len(value) != block_size:
        raise ConfigError(f"{what} must be exactly {block_size} bytes, got {len(value)}")


def ecb_encrypt(cipher: BlockCipher, data: bytes) -> bytes:
    return b"".join(cipher.encrypt_block(blk) for blk in split_blocks(data, cipher.block_size))


def ecb_decrypt(cipher: BlockCipher, data: bytes) -> bytes:
    return b"".join(cipher.decrypt_block(blk) for blk in split_blocks(data, cipher.block_size))


def cbc_encrypt(cipher: BlockCipher, iv: bytes, data: bytes) -> bytes:
    _check_block_arg(iv, cipher.block_size, "CBC iv")
    prev = iv
    out: List[bytes] = []
    for blk in split_blocks(data, cipher.block_size):
        prev = cipher.encrypt_block(xor_bytes(blk, prev))
        out.append(prev)
    return b"".join(out)


def cbc_decrypt(cipher: BlockCipher, iv: bytes, data: bytes) -> bytes:
    _check_block_arg(iv, cipher.block_size, "CBC iv")
    prev = iv
    out: List[bytes] = []
    for blk in split_blocks(data, cipher.block_size):
        out.append(xor_bytes(cipher.decrypt_block(blk), prev))
        prev = blk
    return b"".join(out)


def counter_block(seed: bytes, index: int) -> bytes:
    """Return the counter block for block ``index`` of a CTR stream."""
    bs = len(seed)
    half = bs // 2
    word_bits = half * 8
    word_mask = (1 << word_bits) - 1

    a = int.from_bytes(seed[:half], "little")
    b = int.from_bytes(seed[half:], "little")
    value = (((a << word_bits) | b) + index) & ((1 << (2 * word_bits)) - 1)
    return (value >> word_bits).to_bytes(half, "little") + (value & word_mask).to_bytes(half, "little")


def ctr_apply(cipher: BlockCipher, nonce_and_counter: bytes, data: bytes) -> bytes:
    """XOR ``data`` with the CTR keystream. Encrypts and decrypts alike."""
    bs = cipher.block_size
    _check_block_arg(nonce_and_counter, bs, "CTR nonce_and_counter")
    out: List[bytes] = []
    for index, offset in enumerate(range(0, len(data), bs)):
        chunk = data[offset:offset + bs]
        keystream = cipher.encrypt_block(counter_block(nonce_and_counter, index))
        out.append(xor_bytes(chunk, keystream[:len(chunk)]))
    return b"".join(out)


# ---------------------------------------------------------------------------
# Mode dispatch
# ---------------------------------------------------------------------------

def _mode_kind(mode: object) -> ModeKind:
    kind = getattr(mode, "kind", None)
    if kind not in ("ECB", "CBC", "CTR"):
        raise ConfigError(f"Unsupported operation mode: {mode!r}")
    return kind


def encrypt_with_mode(cipher: BlockCipher, plaintext: bytes, mode: OperationMode) -> bytes:
    """Encrypt a whole message, padding for ECB/CBC."""
    kind = _mode_kind(mode)
    bs = cipher.block_size

    if kind == "ECB":
        return ecb_encrypt(cipher, pkcs7_pad(plaintext, bs))
    if kind == "CBC":
        return cbc_encrypt(cipher, mode.iv, pkcs7_pad(plaintext, bs))
    return ctr_apply(cipher, mode.nonce_and_counter, plaintext)


def decrypt_with_mode(cipher: BlockCipher, ciphertext: bytes, mode: OperationMode) -> bytes:
    """Decrypt a whole message, unpadding for ECB/CBC."""
    kind = _mode_kind(mode)
    bs = cipher.block_size

    if kind == "ECB":
        return pkcs7_unpad(ecb_decrypt(cipher, ciphertext), bs)
    if kind == "CBC":
        return pkcs7_unpad(cbc_decrypt(cipher, mode.iv, ciphertext), bs)
    return ctr_apply(cipher, mode.nonce_and_counter, ciphertext)
