import importlib.util
import json
import sys
from pathlib import Path

import pytest

from rc5lab.cipher.spec import RC5Params
from rc5lab.cipher.words import SUPPORTED_WORD_SIZES
from rc5lab.evaluation import (
    KNOWN_VECTORS,
    EvaluationReport,
    check_known_vectors,
    compute_sac,
    hamming_distance,
    run_roundtrip_tests,
    vectors_for_word_size,
)
from rc5lab.utils.repro import make_run_dir, write_json

_SCRIPT = Path(__file__).parent.parent / "scripts" / "run_evaluation.py"


def test_known_vectors_all_pass():
    results = check_known_vectors()
    assert len(results) == len(KNOWN_VECTORS)
    failing = [r.summary() for r in results if not r.passed]
    assert failing == []


def test_every_word_size_has_a_vector():
    for w in SUPPORTED_WORD_SIZES:
        assert vectors_for_word_size(w), w


def test_kat_detects_wrong_expectation():
    vec = KNOWN_VECTORS[0]
    bad = type(vec)(vec.name, vec.word_size, vec.rounds, vec.key_hex, vec.plaintext_hex,
                    "00" * len(vec.ciphertext), vec.source)
    (result,) = check_known_vectors([bad])
    assert not result.passed
    assert result.to_dict()["passed"] is False
    assert result.summary().startswith("[FAIL]")


def test_hamming_distance():
    assert hamming_distance(b"\x00\x00", b"\x00\x00") == 0
    assert hamming_distance(b"\xff", b"\x00") == 8
    assert hamming_distance(b"\x01\x80", b"\x00\x00") == 2
    with pytest.raises(ValueError):
        hamming_distance(b"\x00", b"\x00\x00")


def test_sac_plaintext_rc5_16():
    params = RC5Params(word_size=16, rounds=12, key_bytes=8)
    progress = []
    result = compute_sac(params, trials=20, seed=3, progress_callback=lambda i, n: progress.append(i))
    assert result.num_input_bits == 32
    assert result.num_output_bits == 32
    assert len(result.per_input_bit_mean) == 32
    assert 0.4 < result.global_mean < 0.6
    assert progress == list(range(32))


def test_sac_key_input():
    params = RC5Params(word_size=16, rounds=12, key_bytes=4)
    result = compute_sac(params, input_type="key", trials=10, seed=3)
    assert result.num_input_bits == 32
    assert 0.35 < result.global_mean < 0.65


def test_sac_zero_rounds_has_poor_diffusion():
    params = RC5Params(word_size=16, rounds=0, key_bytes=8)
    result = compute_sac(params, trials=10, seed=3)
    assert not result.passes_sac
    assert result.global_mean < 0.2


def test_sac_rejects_bad_input_type():
    with pytest.raises(ValueError):
        compute_sac(RC5Params(word_size=16), input_type="iv", trials=1)
    with pytest.raises(ValueError):
        compute_sac(RC5Params(word_size=16, key_bytes=0), input_type="key", trials=1)


def test_report_aggregation():
    params = RC5Params(word_size=16, rounds=12, key_bytes=8)
    report = EvaluationReport(
        kat_results=check_known_vectors(vectors_for_word_size(16)),
        roundtrip_results=[run_roundtrip_tests(params, num_vectors=3)],
        sac_results=[compute_sac(params, trials=20)],
    )
    assert report.timestamp
    assert report.all_pass
    d = report.to_dict()
    assert d["summary"]["kat_all_pass"] is True
    assert d["summary"]["roundtrip_all_pass"] is True
    assert d["summary"]["failing_vectors"] == []
    assert d["summary"]["weak_sac_variants"] == []
    json.dumps(d)
    text = report.to_summary()
    assert "Known-answer vectors: 1/1 pass" in text
    assert "Roundtrip Tests: 1/1 variants pass" in text
    assert "SAC Analysis" in text


def test_report_flags_failures():
    params = RC5Params(word_size=16, rounds=0, key_bytes=8)
    report = EvaluationReport(sac_results=[compute_sac(params, trials=5)])
    assert report.weak_sac_variants() == ["RC5-v1/16/0/8:plaintext"]
    assert not report.all_pass
    assert report.to_dict()["summary"]["sac_all_pass"] is False
    assert report.to_dict()["summary"]["weak_sac_variants"] == ["RC5-v1/16/0/8:plaintext"]


def test_run_evaluation_script(tmp_path, monkeypatch):
    spec = importlib.util.spec_from_file_location("run_evaluation", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    monkeypatch.setattr(sys, "argv", [
        "run_evaluation.py", "--word-sizes", "16", "--vectors", "2",
        "--skip-sac", "--output-dir", str(tmp_path),
    ])
    assert module.main() == 0

    (run_dir,) = list(tmp_path.iterdir())
    report = json.loads((run_dir / "report.json").read_text(encoding="utf-8"))
    assert report["summary"]["roundtrip_all_pass"] is True
    assert report["sac"] == []
    assert "Known-answer vectors" in (run_dir / "summary.txt").read_text(encoding="utf-8")


def test_run_evaluation_script_fails_on_weak_diffusion(tmp_path, monkeypatch):
    spec = importlib.util.spec_from_file_location("run_evaluation", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    monkeypatch.setattr(sys, "argv", [
        "run_evaluation.py", "--word-sizes", "16", "--rounds", "0", "--key-bytes", "4",
        "--vectors", "1", "--sac-trials", "2", "--output-dir", str(tmp_path),
    ])
    assert module.main() == 1

    (run_dir,) = list(tmp_path.iterdir())
    report = json.loads((run_dir / "report.json").read_text(encoding="utf-8"))
    assert report["summary"]["roundtrip_all_pass"] is True
    assert "RC5-v1/16/0/4:plaintext" in report["summary"]["weak_sac_variants"]


def test_make_run_dir_and_writers(tmp_path):
    paths = make_run_dir(tmp_path / "runs", "rc5 eval/1")
    assert paths.run_dir.is_dir()
    assert paths.run_dir.name.endswith("_rc5_eval_1")
    write_json(paths.report_json, {"b": 1, "a": [2]})
    assert json.loads(paths.report_json.read_text(encoding="utf-8")) == {"a": [2], "b": 1}
