"""Offline evaluation of RC5 variants.

Runs the known-answer vectors, multi-mode roundtrip verification and the
strict avalanche measurement, then writes ``report.json`` and
``summary.txt`` into a timestamped run directory.

Usage:
    python scripts/run_evaluation.py                                # settings defaults
    python scripts/run_evaluation.py --word-sizes 16 32 --rounds 8  # subset
    python scripts/run_evaluation.py --skip-sac --vectors 50        # quick check

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rc5lab.cipher.spec import RC5Params
from rc5lab.cipher.words import SUPPORTED_WORD_SIZES
from rc5lab.config import load_settings
from rc5lab.evaluation import (
    EvaluationReport,
    check_known_vectors,
    compute_sac,
    run_roundtrip_tests,
)
from rc5lab.utils.repro import make_run_dir, write_json, write_text

logger = logging.getLogger("run_evaluation")


def _cli_progress(message: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%) {message}", file=sys.stderr)


def main() -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="RC5 evaluation: known-answer vectors, roundtrip and SAC",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--word-sizes", nargs="+", type=int, default=list(SUPPORTED_WORD_SIZES),
        choices=list(SUPPORTED_WORD_SIZES),
        help="Word sizes to evaluate (default: all)",
    )
    parser.add_argument(
        "--rounds", type=int, default=settings.rc5_rounds,
        help=f"Rounds per variant (default: {settings.rc5_rounds})",
    )
    parser.add_argument(
        "--key-bytes", type=int, default=settings.rc5_key_bytes,
        help=f"Key length in bytes (default: {settings.rc5_key_bytes})",
    )
    parser.add_argument(
        "--vectors", type=int, default=settings.roundtrip_vectors,
        help=f"Roundtrip vectors per mode (default: {settings.roundtrip_vectors})",
    )
    parser.add_argument(
        "--sac-trials", type=int, default=settings.sac_trials,
        help=f"SAC trials per input bit (default: {settings.sac_trials})",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.global_seed,
        help=f"Random seed (default: {settings.global_seed})",
    )
    parser.add_argument(
        "--output-dir", type=str, default=settings.runs_dir,
        help=f"Output directory (default: {settings.runs_dir})",
    )
    parser.add_argument(
        "--skip-sac", action="store_true",
        help="Skip the avalanche measurement",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    variants = [
        RC5Params(word_size=w, rounds=args.rounds, key_bytes=args.key_bytes)
        for w in args.word_sizes
    ]

    report = EvaluationReport()
    report.kat_results = check_known_vectors()
    logger.info("Known-answer vectors: %d checked", len(report.kat_results))

    for idx, params in enumerate(variants):
        _cli_progress(f"roundtrip {params.version}", idx, len(variants))
        report.roundtrip_results.append(
            run_roundtrip_tests(params, num_vectors=args.vectors, seed=args.seed)
        )

    if not args.skip_sac:
        for idx, params in enumerate(variants):
            _cli_progress(f"SAC {params.version}", idx, len(variants))
            report.sac_results.append(
                compute_sac(params, input_type="plaintext", trials=args.sac_trials, seed=args.seed)
            )
            if params.key_bytes:
                report.sac_results.append(
                    compute_sac(params, input_type="key", trials=args.sac_trials, seed=args.seed)
                )

    paths = make_run_dir(args.output_dir, "rc5_evaluation")
    write_json(paths.report_json, report.to_dict())
    summary = report.to_summary()
    write_text(paths.summary_txt, summary)

    print(summary)
    print(f"\nAll results saved to: {paths.run_dir}")

    if not report.all_pass:
        logger.error(
            "Failures: vectors=%s variants=%s weak_sac=%s",
            report.failing_vectors(), report.failing_variants(), report.weak_sac_variants(),
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
