"""Error kinds raised by the RC5 engine.

All of them derive from ``ValueError`` so callers that only care about
"bad input" can catch the builtin.
"""
from __future__ import annotations


class RC5Error(ValueError):
    """Base class for every error raised by rc5lab."""


class ConfigError(RC5Error):
    """Invalid cipher parameters or a mode argument of the wrong size."""


class LengthError(RC5Error):
    """Input length is not usable by the requested operation."""


class PaddingError(RC5Error):
    """PKCS#7 validation failed.

    The message is deliberately constant: it never says which byte or
    position was wrong.
    """

    MESSAGE = "Invalid PKCS#7 padding"

    def __init__(self) -> None:
        super().__init__(self.MESSAGE)
