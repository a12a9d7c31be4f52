from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


WordSize = Literal[16, 32, 64, 128]

# RC5 algorithm version carried in the parametric version string
RC5_ALGORITHM_VERSION = 1


class RC5Params(BaseModel):
    """Parametric description of one RC5 variant, RC5-w/r/b.

    - w: word size in bits (block is 2w bits)
    - r: number of rounds
    - b: secret key length in bytes
    """

    model_config = ConfigDict(frozen=True)

    word_size: WordSize = Field(default=32)
    rounds: int = Field(default=12, ge=0, le=255)
    key_bytes: int = Field(default=16, ge=0, le=255)

    @field_validator("rounds", "key_bytes", mode="before")
    @classmethod
    def _no_bool(cls, v: object) -> object:
        if isinstance(v, bool):
            raise ValueError("must be an integer, not a boolean")
        return v

    @property
    def word_bytes(self) -> int:
        return self.word_size // 8

    @property
    def block_bytes(self) -> int:
        return 2 * self.word_bytes

    @property
    def table_size(self) -> int:
        return 2 * (self.rounds + 1)

    @property
    def version(self) -> str:
        """Render as ``RC5-v<version>/<w>/<r>/<b>``."""
        return f"RC5-v{RC5_ALGORITHM_VERSION}/{self.word_size}/{self.rounds}/{self.key_bytes}"
