"""Strict Avalanche Criterion (SAC) measurement for RC5 variants.

Flips each input bit (plaintext or key) in turn and records how many output
bits change. A cipher with good diffusion flips about half of them.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from rc5lab.cipher.rc5 import RC5Cipher
from rc5lab.cipher.spec import RC5Params


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def _flip_bit(data: bytes, bit_index: int) -> bytes:
    byte_i = bit_index // 8
    bit_i = bit_index % 8
    if byte_i < 0 or byte_i >= len(data):
        raise IndexError("bit_index out of range")
    out = bytearray(data)
    out[byte_i] ^= 1 << bit_i
    return bytes(out)


def hamming_distance(a: bytes, b: bytes) -> int:
    if len(a) != len(b):
        raise ValueError("hamming distance length mismatch")
    diff = np.frombuffer(a, dtype=np.uint8) ^ np.frombuffer(b, dtype=np.uint8)
    return int(np.unpackbits(diff).sum())


@dataclass
class SACResult:
    """Strict Avalanche Criterion measurement for one input type."""
    version: str
    input_type: str             # "plaintext" or "key"
    num_trials: int
    num_input_bits: int
    num_output_bits: int

    # Per-input-bit mean flip fraction (len = num_input_bits)
    per_input_bit_mean: List[float] = field(default_factory=list)

    global_mean: float = 0.0    # ~0.5 ideal
    global_std: float = 0.0     # lower = more uniform
    min_bit_prob: float = 0.0
    max_bit_prob: float = 0.0
    sac_deviation: float = 0.0  # mean |per_bit - 0.5|

    @property
    def passes_sac(self) -> bool:
        """Heuristic: SAC deviation < 0.05 and min_bit_prob > 0.35."""
        return self.sac_deviation < 0.05 and self.min_bit_prob > 0.35

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["passes_sac"] = self.passes_sac
        return d

    def summary(self) -> str:
        status = "PASS" if self.passes_sac else "FAIL"
        return (
            f"[{status}] SAC({self.input_type}) {self.version}: "
            f"mean={self.global_mean:.4f}, std={self.global_std:.4f}, "
            f"deviation={self.sac_deviation:.4f}, "
            f"min={self.min_bit_prob:.4f}, max={self.max_bit_prob:.4f}"
        )


def compute_sac(
    params: RC5Params,
    *,
    input_type: str = "plaintext",
    trials: int = 100,
    seed: int = 1337,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> SACResult:
    """Compute the SAC profile of an RC5 variant.

    For each input bit position i, ``trials`` random (key, plaintext) pairs
    are drawn, bit i is flipped and the fraction of changed ciphertext bits
    is averaged.

    Args:
        params: RC5 variant to measure.
        input_type: "plaintext" or "key", which input to perturb.
        trials: Number of random trials per input bit.
        seed: Random seed for reproducibility.
        progress_callback: Optional callback(current_bit, total_bits).

    Returns:
        SACResult with per-bit and aggregate statistics.
    """
    block_bytes = params.block_bytes
    key_bytes = params.key_bytes

    if input_type == "plaintext":
        num_input_bits = block_bytes * 8
    elif input_type == "key":
        if key_bytes == 0:
            raise ValueError("key SAC needs a non-empty key")
        num_input_bits = key_bytes * 8
    else:
        raise ValueError(f"input_type must be 'plaintext' or 'key', got '{input_type}'")

    num_output_bits = block_bytes * 8
    rng = random.Random(seed)
    fractions = np.zeros((num_input_bits, trials), dtype=np.float64)

    for bit_i in range(num_input_bits):
        if progress_callback:
            progress_callback(bit_i, num_input_bits)

        for t in range(trials):
            pt = _rand_bytes(rng, block_bytes)
            key = _rand_bytes(rng, key_bytes)
            cipher = RC5Cipher(key, rounds=params.rounds, word_size=params.word_size)
            ct1 = cipher.encrypt_block(pt)

            if input_type == "plaintext":
                ct2 = cipher.encrypt_block(_flip_bit(pt, bit_i))
            else:
                other = RC5Cipher(_flip_bit(key, bit_i), rounds=params.rounds, word_size=params.word_size)
                ct2 = other.encrypt_block(pt)

            fractions[bit_i, t] = hamming_distance(ct1, ct2) / num_output_bits

    per_bit = fractions.mean(axis=1)

    return SACResult(
        version=params.version,
        input_type=input_type,
        num_trials=trials,
        num_input_bits=num_input_bits,
        num_output_bits=num_output_bits,
        per_input_bit_mean=[round(float(p), 6) for p in per_bit],
        global_mean=round(float(per_bit.mean()), 6),
        global_std=round(float(per_bit.std(ddof=1)) if num_input_bits > 1 else 0.0, 6),
        min_bit_prob=round(float(per_bit.min()), 6),
        max_bit_prob=round(float(per_bit.max()), 6),
        sac_deviation=round(float(np.abs(per_bit - 0.5).mean()), 6),
    )
