"""RC5 engine: word arithmetic, key schedule, block transform and modes."""

from .words import MAGIC_CONSTANTS, SUPPORTED_WORD_SIZES, WordOps, word_ops, xor_bytes
from .spec import RC5Params, WordSize
from .key_schedule import expand_key, load_key_words
from .block import BlockCipher, RC5Block
from .padding import pkcs7_pad, pkcs7_unpad
from .modes import CBC, CTR, ECB, OperationMode, counter_block
from .nonces import random_iv, random_nonce_and_counter
from .rc5 import RC5Cipher, build_cipher, rc5_cipher

__all__ = [
    "MAGIC_CONSTANTS",
    "SUPPORTED_WORD_SIZES",
    "WordOps",
    "word_ops",
    "xor_bytes",
    "RC5Params",
    "WordSize",
    "expand_key",
    "load_key_words",
    "BlockCipher",
    "RC5Block",
    "pkcs7_pad",
    "pkcs7_unpad",
    "ECB",
    "CBC",
    "CTR",
    "OperationMode",
    "counter_block",
    "random_iv",
    "random_nonce_and_counter",
    "RC5Cipher",
    "build_cipher",
    "rc5_cipher",
]
