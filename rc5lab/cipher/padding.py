"""PKCS#7 padding for any RC5 block size, on top of ``cryptography``."""
from __future__ import annotations

from cryptography.hazmat.primitives import padding

from ..errors import ConfigError, PaddingError


def _check_block_size(block_size: int) -> None:
    if not isinstance(block_size, int) or isinstance(block_size, bool) or not 1 <= block_size <= 255:
        raise ConfigError(f"PKCS#7 block size must be within 1..255, got {block_size!r}")


def pkcs7_pad(data: bytes, block_size: int) -> bytes:
    """Append k bytes of value k, 1 <= k <= block_size.

    Input already aligned to ``block_size`` gets a whole extra block.
    """
    _check_block_size(block_size)
    padder = padding.PKCS7(block_size * 8).padder()
    return padder.update(bytes(data)) + padder.finalize()


def pkcs7_unpad(data: bytes, block_size: int) -> bytes:
    """Strip PKCS#7 padding, raising ``PaddingError`` on any inconsistency.

    The pad bytes are checked in constant time by the unpadder, and every
    failure (empty or unaligned input included) raises the same error.
    """
    _check_block_size(block_size)
    unpadder = padding.PKCS7(block_size * 8).unpadder()
    try:
        return unpadder.update(bytes(data)) + unpadder.finalize()
    except ValueError:
        raise PaddingError() from None
