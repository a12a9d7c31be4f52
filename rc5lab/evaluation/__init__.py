"""Evaluation tooling for RC5 variants.

Known-answer vectors, roundtrip verification across modes, strict
avalanche measurement and an aggregate report.

Research / education only. Do NOT use in production.
"""

from .vectors import KATResult, KNOWN_VECTORS, KnownAnswerVector, check_known_vectors, vectors_for_word_size
from .roundtrip import RoundtripFailure, RoundtripResult, run_all_word_sizes, run_roundtrip_tests
from .avalanche import SACResult, compute_sac, hamming_distance
from .report import EvaluationReport

__all__ = [
    "KATResult",
    "KNOWN_VECTORS",
    "KnownAnswerVector",
    "check_known_vectors",
    "vectors_for_word_size",
    "RoundtripFailure",
    "RoundtripResult",
    "run_all_word_sizes",
    "run_roundtrip_tests",
    "SACResult",
    "compute_sac",
    "hamming_distance",
    "EvaluationReport",
]
