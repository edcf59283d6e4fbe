from __future__ import annotations

import csv
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]


def _run(*args: str, config_dir: Path) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["Q_CALC_CONFIG_DIR"] = str(config_dir)
    env.pop("Q_CALC_LANG", None)
    cmd = [sys.executable, str(ROOT / "tools" / "q_calc.py"), "--lang", "EN", *args]
    return subprocess.run(cmd, capture_output=True, text=True, cwd=str(ROOT), env=env, check=False)


def _value(stdout: str, label: str) -> float:
    for line in stdout.splitlines():
        if line.startswith(label):
            return float(line[len(label):].strip())
    raise AssertionError(f"{label!r} not in output:\n{stdout}")


def test_cli_computes_and_saves_session(tmp_path: Path) -> None:
    res = _run("--piston", "50", "--rod", "20", "--amplitude", "5", "--frequency", "10", config_dir=tmp_path)
    assert res.returncode == 0, res.stderr
    assert _value(res.stdout, "Flow rate Q[L/min]:") == pytest.approx(31.09, abs=0.01)
    assert _value(res.stdout, "Flow rate Q[m^3/s]:") == pytest.approx(0.000518, rel=1e-3)

    saved = json.loads((tmp_path / "q_calc" / "session.json").read_text(encoding="utf-8"))
    assert saved["piston_diameter"] == "50"
    assert saved["frequency"] == "10"

    # fields not given come from the saved session
    again = _run("--frequency", "20", config_dir=tmp_path)
    assert again.returncode == 0, again.stderr
    assert _value(again.stdout, "Flow rate Q[L/min]:") == pytest.approx(62.18, abs=0.02)


def test_cli_reports_bad_field(tmp_path: Path) -> None:
    res = _run("--piston", "5.5", "--rod", "20", "--amplitude", "5", "--frequency", "10", config_dir=tmp_path)
    assert res.returncode == 2
    assert "Piston diameter: invalid value" in res.stderr
    assert not (tmp_path / "q_calc" / "session.json").exists()


def test_cli_missing_field_is_a_parse_error(tmp_path: Path) -> None:
    res = _run("--piston", "50", "--rod", "20", "--amplitude", "5", "--no-save", config_dir=tmp_path)
    assert res.returncode == 2
    assert "Signal frequency: invalid value" in res.stderr
    assert not (tmp_path / "q_calc").exists()


def test_cli_batch(tmp_path: Path) -> None:
    in_csv = tmp_path / "in.csv"
    out_csv = tmp_path / "out" / "q.csv"
    in_csv.write_text(
        "piston_diameter,rod_diameter,amplitude,frequency\n"
        "50,20,5,10\n"
        "10,50,5,10\n"
        ",20,5,10\n",
        encoding="utf-8",
    )
    res = _run("--batch", str(in_csv), "--out", str(out_csv), config_dir=tmp_path)
    assert res.returncode == 0, res.stderr

    with out_csv.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 3
    assert float(rows[0]["q_lpm"]) == pytest.approx(31.09, abs=0.01)
    assert float(rows[1]["q_lpm"]) < 0
    assert rows[2]["error"] == "piston_diameter"
    assert "failed: 1" in res.stderr


def test_cli_oversized_piston_exits_cleanly(tmp_path: Path) -> None:
    res = _run(
        "--piston", "9" * 400, "--rod", "20", "--amplitude", "5", "--frequency", "10", "--no-save",
        config_dir=tmp_path,
    )
    assert res.returncode == 2
    assert "Piston diameter: invalid value" in res.stderr
    assert "Traceback" not in res.stderr
