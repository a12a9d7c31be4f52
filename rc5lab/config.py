from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    # Cipher defaults
    rc5_word_size: Literal[16, 32, 64, 128] = Field(default=32, description="Word width in bits")
    rc5_rounds: int = Field(default=12, ge=0, le=255)
    rc5_key_bytes: int = Field(default=16, ge=0, le=255)

    # Evaluation
    global_seed: int = Field(default=1337)
    roundtrip_vectors: int = Field(default=200, ge=1)
    sac_trials: int = Field(default=100, ge=1)

    # Output
    runs_dir: str = Field(default="runs")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        rc5_word_size=int(os.getenv("RC5_WORD_SIZE", "32")),
        rc5_rounds=int(os.getenv("RC5_ROUNDS", "12")),
        rc5_key_bytes=int(os.getenv("RC5_KEY_BYTES", "16")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        roundtrip_vectors=int(os.getenv("ROUNDTRIP_VECTORS", "200")),
        sac_trials=int(os.getenv("SAC_TRIALS", "100")),
        runs_dir=os.getenv("RUNS_DIR", "runs"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
