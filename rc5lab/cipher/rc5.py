"""High-level RC5 cipher: validated parameters, one key schedule, mode dispatch.

Research / education only. RC5 offers no integrity protection.
"""
from __future__ import annotations

import logging
from typing import Union

from pydantic import ValidationError

from ..errors import ConfigError
from .block import RC5Block
from .key_schedule import expand_key
from .modes import ECB, OperationMode, decrypt_with_mode, encrypt_with_mode
from .spec import RC5Params
from .words import word_ops

logger = logging.getLogger(__name__)

KeyLike = Union[bytes, bytearray, memoryview, str]


def _key_bytes(key: KeyLike) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise ConfigError(f"RC5 key must be bytes or str, got {type(key).__name__}")


class RC5Cipher:
    """An RC5-w/r/b cipher bound to one secret key.

    The key is consumed at construction; only the word size, the round count
    and the expanded subkey table are kept. Instances never change after
    construction, so one instance can serve any number of concurrent
    ``encrypt``/``decrypt`` calls.
    """

    def __init__(self, key: KeyLike, rounds: int = 12, word_size: int = 32):
        raw = _key_bytes(key)
        try:
            params = RC5Params(word_size=word_size, rounds=rounds, key_bytes=len(raw))
        except ValidationError as exc:
            raise ConfigError(f"Invalid RC5 parameters: {exc}") from exc

        ops = word_ops(params.word_size)
        self._params = params
        self._block = RC5Block(ops, params.rounds, expand_key(raw, params.rounds, ops))
        logger.debug("Built %s cipher", params.version)

    def __repr__(self) -> str:
        return f"RC5Cipher({self.version})"

    @property
    def params(self) -> RC5Params:
        return self._params

    @property
    def word_size(self) -> int:
        return self._params.word_size

    @property
    def rounds(self) -> int:
        return self._params.rounds

    @property
    def block_size(self) -> int:
        return self._params.block_bytes

    @property
    def version(self) -> str:
        return self._params.version

    def encrypt_block(self, block: bytes) -> bytes:
        return self._block.encrypt_block(block)

    def decrypt_block(self, block: bytes) -> bytes:
        return self._block.decrypt_block(block)

    def encrypt(self, plaintext: bytes, mode: OperationMode = ECB()) -> bytes:
        """Encrypt ``plaintext`` under ``mode``.

        Raises:
            ConfigError: the mode's IV / seed is not exactly one block.
        """
        return encrypt_with_mode(self._block, bytes(plaintext), mode)

    def decrypt(self, ciphertext: bytes, mode: OperationMode = ECB()) -> bytes:
        """Decrypt ``ciphertext`` under ``mode``.

        Raises:
            ConfigError: the mode's IV / seed is not exactly one block.
            LengthError: ECB/CBC ciphertext is not block aligned.
            PaddingError: ECB/CBC padding did not validate.
        """
        return decrypt_with_mode(self._block, bytes(ciphertext), mode)


def rc5_cipher(key: KeyLike, rounds: int = 12, word_size: int = 32) -> RC5Cipher:
    """Factory mirroring ``RC5Cipher(key, rounds, word_size)``."""
    return RC5Cipher(key, rounds=rounds, word_size=word_size)


def build_cipher(params: RC5Params, key: KeyLike) -> RC5Cipher:
    """Build a cipher from a parameter model, checking the key length matches."""
    raw = _key_bytes(key)
    if len(raw) != params.key_bytes:
        raise ConfigError(f"Key must be {params.key_bytes} bytes for {params.version}, got {len(raw)}")
    return RC5Cipher(raw, rounds=params.rounds, word_size=params.word_size)
