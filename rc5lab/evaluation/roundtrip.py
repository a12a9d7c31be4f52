"""Roundtrip verification P = D(E(P)) across word sizes and modes.

Generates seeded random keys, messages, IVs and CTR seeds so that a failing
vector can be reproduced from (params, seed, index).

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from rc5lab.cipher.modes import CBC, CTR, ECB, ModeKind, OperationMode
from rc5lab.cipher.rc5 import RC5Cipher
from rc5lab.cipher.spec import RC5Params
from rc5lab.cipher.words import SUPPORTED_WORD_SIZES

logger = logging.getLogger(__name__)

ALL_MODES: Sequence[ModeKind] = ("ECB", "CBC", "CTR")


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    mode: str
    plaintext_hex: str
    key_hex: str
    ciphertext_hex: str
    decrypted_hex: str       # What decrypt returned (should equal plaintext)
    error: Optional[str]     # Exception message if decrypt/encrypt threw


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one parameter set."""
    version: str
    word_size: int
    rounds: int
    key_bytes: int
    modes: List[str]
    total_vectors: int
    passed: int
    failed: int
    per_mode_failed: Dict[str, int] = field(default_factory=dict)
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] {self.version} ({'/'.join(self.modes)}): "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def _make_mode(kind: str, rng: random.Random, block_bytes: int) -> OperationMode:
    if kind == "ECB":
        return ECB()
    if kind == "CBC":
        return CBC(iv=_rand_bytes(rng, block_bytes))
    if kind == "CTR":
        return CTR(nonce_and_counter=_rand_bytes(rng, block_bytes))
    raise ValueError(f"Unknown mode: {kind}")


def run_roundtrip_tests(
    params: RC5Params,
    *,
    modes: Sequence[str] = ALL_MODES,
    num_vectors: int = 200,
    max_message_blocks: int = 4,
    seed: int = 1337,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Run roundtrip verification for ``num_vectors`` random messages per mode.

    Args:
        params: RC5 variant to test (word size, rounds, key length).
        modes: Mode names to exercise.
        num_vectors: Random (key, message) pairs per mode.
        max_message_blocks: Messages are 0 .. max_message_blocks blocks long,
            plus a random tail so partial blocks are covered.
        seed: Random seed for deterministic reproducibility.
        max_failures_recorded: Maximum number of failure details to keep.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    rng = random.Random(seed)
    bs = params.block_bytes
    passed = 0
    failed = 0
    per_mode_failed: Dict[str, int] = {m: 0 for m in modes}
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for kind in modes:
        for i in range(num_vectors):
            key = _rand_bytes(rng, params.key_bytes)
            msg_len = rng.randrange(0, max_message_blocks + 1) * bs + rng.randrange(0, bs)
            pt = _rand_bytes(rng, msg_len)
            mode = _make_mode(kind, rng, bs)
            ct = b""

            try:
                cipher = RC5Cipher(key, rounds=params.rounds, word_size=params.word_size)
                ct = cipher.encrypt(pt, mode)
                pt2 = cipher.decrypt(ct, mode)

                if pt == pt2:
                    passed += 1
                    continue
                error = None
            except Exception as exc:
                pt2 = b""
                error = f"{type(exc).__name__}: {exc}"

            failed += 1
            per_mode_failed[kind] += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    mode=kind,
                    plaintext_hex=pt.hex(),
                    key_hex=key.hex(),
                    ciphertext_hex=ct.hex() if ct else "<error>",
                    decrypted_hex=pt2.hex() if error is None else "<error>",
                    error=error,
                ))

    elapsed = time.perf_counter() - start
    total = num_vectors * len(modes)
    if failed:
        logger.warning("%s: %d/%d roundtrip vectors failed", params.version, failed, total)

    return RoundtripResult(
        version=params.version,
        word_size=params.word_size,
        rounds=params.rounds,
        key_bytes=params.key_bytes,
        modes=list(modes),
        total_vectors=total,
        passed=passed,
        failed=failed,
        per_mode_failed=per_mode_failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )


def run_all_word_sizes(
    *,
    rounds: int = 12,
    key_bytes: int = 16,
    num_vectors: int = 200,
    seed: int = 1337,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> List[RoundtripResult]:
    """Run roundtrip tests for every supported word size.

    Args:
        rounds: Round count used for every word size.
        key_bytes: Key length used for every word size.
        num_vectors: Number of test vectors per mode.
        seed: Random seed for reproducibility.
        progress_callback: Optional callback(version, current_index, total).

    Returns:
        List of RoundtripResult ordered by word size.
    """
    results: List[RoundtripResult] = []
    for idx, w in enumerate(SUPPORTED_WORD_SIZES):
        params = RC5Params(word_size=w, rounds=rounds, key_bytes=key_bytes)
        if progress_callback:
            progress_callback(params.version, idx, len(SUPPORTED_WORD_SIZES))
        results.append(run_roundtrip_tests(params, num_vectors=num_vectors, seed=seed))
    return results
