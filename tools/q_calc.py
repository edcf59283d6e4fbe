#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Allow running as "python tools/q_calc.py" (so repo root is importable)
sys.path.insert(0, str(ROOT))

import pandas as pd  # noqa: E402

from app.actions import (  # noqa: E402
    OUTCOME_FIELD_REJECTED,
    OUTCOME_REJECTED,
    on_compute,
    on_export,
    on_field_changed,
    parse_error_message,
)
from app.clipboard import ClipboardFailure, TkClipboard  # noqa: E402
from app.config import APP_NAMESPACE, SUPPORTED_LANGS, load_settings  # noqa: E402
from app.i18n import translator  # noqa: E402
from app.logging_config import setup_logging  # noqa: E402
from app.session import (  # noqa: E402
    RESULT_MAIN,
    RESULT_SECONDARY,
    JsonSessionStore,
    MemorySessionStore,
    load_session,
)
from calc_core.batch import compute_frame  # noqa: E402
from calc_core.unit_converter import ParseError  # noqa: E402

logger = logging.getLogger("tools.q_calc")

EXIT_OK = 0
EXIT_CLIPBOARD = 1
EXIT_INPUT = 2

_COPY_TARGETS = {"main": RESULT_MAIN, "secondary": RESULT_SECONDARY}


def _build_parser(default_lang: str) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Actuator flow rate Q from piston/rod diameter, signal amplitude and frequency."
    )
    ap.add_argument("--piston", help="Piston diameter, mm (unsigned integer).")
    ap.add_argument("--rod", help="Rod diameter, mm (unsigned integer).")
    ap.add_argument("--amplitude", help="Signal amplitude, mm (unsigned integer).")
    ap.add_argument("--frequency", help="Signal frequency, Hz (decimal).")
    ap.add_argument(
        "--copy",
        choices=tuple(_COPY_TARGETS),
        help="Copy the L/min (main) or m^3/s (secondary) result to the clipboard.",
    )
    ap.add_argument(
        "--no-save",
        action="store_true",
        help="Do not read or write the saved session.",
    )
    ap.add_argument("--config-dir", help="Session store directory (default: user config dir).")
    ap.add_argument("--batch", help="Input CSV with piston_diameter,rod_diameter,amplitude,frequency.")
    ap.add_argument("--out", help="Output CSV for --batch (default: stdout).")
    ap.add_argument("--lang", choices=SUPPORTED_LANGS, default=default_lang)
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default: from env or INFO).")
    return ap


def _run_batch(args: argparse.Namespace, tr) -> int:
    in_path = Path(args.batch)
    try:
        df = pd.read_csv(in_path, dtype=str, keep_default_na=False)
        out = compute_frame(df)
    except (OSError, ValueError) as exc:
        print(tr("cli.batch_read_failed", path=str(in_path), error=str(exc)), file=sys.stderr)
        return EXIT_INPUT

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out.to_csv(out_path, index=False)
    else:
        out.to_csv(sys.stdout, index=False)

    failed = int((out["error"] != "").sum())
    logger.info("Batch %s: %d rows, %d failed", in_path, len(out), failed)
    print(tr("cli.batch_done", rows=len(out), failed=failed), file=sys.stderr)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    args = _build_parser(settings.lang).parse_args(argv)
    setup_logging(args.log_level or settings.log_level, stream=sys.stderr)
    tr = translator(args.lang)

    if args.batch:
        return _run_batch(args, tr)

    if args.no_save:
        store = MemorySessionStore()
    else:
        config_dir = Path(args.config_dir) if args.config_dir else settings.config_dir
        store = JsonSessionStore(config_dir)

    # Fields not given on the command line keep their last saved values.
    session = load_session(store, APP_NAMESPACE)
    given = {
        "piston_diameter": args.piston,
        "rod_diameter": args.rod,
        "amplitude": args.amplitude,
        "frequency": args.frequency,
    }
    if all(v is None for v in given.values()) and not any(session.raw_fields()):
        print(tr("cli.missing_inputs"), file=sys.stderr)
        return EXIT_INPUT

    for field_id, text in given.items():
        if text is None:
            continue
        if on_field_changed(session, field_id, text).outcome == OUTCOME_FIELD_REJECTED:
            print(parse_error_message(ParseError(field_id), translator=tr), file=sys.stderr)
            return EXIT_INPUT

    result = on_compute(session, store=store, namespace=APP_NAMESPACE, translator=tr)
    if result.outcome == OUTCOME_REJECTED:
        print(result.view.last_error, file=sys.stderr)
        return EXIT_INPUT

    print(tr("result.main_label"), result.view.main_result)
    print(tr("result.secondary_label"), result.view.secondary_result)

    if args.copy:
        result_id = _COPY_TARGETS[args.copy]
        try:
            on_export(session, result_id, TkClipboard())
        except ClipboardFailure as exc:
            print(tr("clipboard.failed", error=str(exc)), file=sys.stderr)
            return EXIT_CLIPBOARD
        print(tr("cli.copied", text=session.result_text(result_id)))

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
