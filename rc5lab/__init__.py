"""rc5lab: a variable word size RC5 block cipher with ECB, CBC and CTR modes.

Research / education only. Do NOT use in production.
"""

from .errors import ConfigError, LengthError, PaddingError, RC5Error
from .cipher import (
    CBC,
    CTR,
    ECB,
    OperationMode,
    RC5Cipher,
    RC5Params,
    build_cipher,
    pkcs7_pad,
    pkcs7_unpad,
    random_iv,
    random_nonce_and_counter,
    rc5_cipher,
)

__version__ = "0.1.0"

__all__ = [
    "RC5Error",
    "ConfigError",
    "LengthError",
    "PaddingError",
    "ECB",
    "CBC",
    "CTR",
    "OperationMode",
    "RC5Cipher",
    "RC5Params",
    "build_cipher",
    "rc5_cipher",
    "pkcs7_pad",
    "pkcs7_unpad",
    "random_iv",
    "random_nonce_and_counter",
]
