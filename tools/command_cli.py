"""Command-line front end for the particle command builder.

Usage:
  python -m tools.command_cli encode --particle flame --y "~1"
  python -m tools.command_cli decode "/particle dust 1 0 0 1 ~ ~1 ~ 0 0 0 0.1 10 normal"
  python -m tools.command_cli validate "/particle flame ~ ~1 ~ 0 0 0 -1 10 normal"
  python -m tools.command_cli preview "/particle portal ~ ~1 ~ 1 2 1 1 200 normal" --ticks 90 --seed 7

Exit codes: 0 ok, 1 validation errors, 2 command text did not decode.
"""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path

from app import log_buffer
from app.command_validation import validate_state, validation_snapshot
from app.settings import load_settings
from models.codec import CommandDecodeError, decode_or_raise, encode
from models.command import DEFAULT_STATE, FIELD_ORDER
from preview.headless import run_headless, run_preview, write_ppm
from runtime.particles_v1 import PROFILES, get_profile


def _decode_arg(text: str):
    try:
        return decode_or_raise(text)
    except CommandDecodeError as e:
        sys.stderr.write(f"error: {e}\n")
        return None


def cmd_encode(args) -> int:
    changes = {k: getattr(args, k) for k in FIELD_ORDER if getattr(args, k) is not None}
    print(encode(DEFAULT_STATE.replace(**changes)))
    return 0


def cmd_decode(args) -> int:
    st = _decode_arg(args.text)
    if st is None:
        return 2
    print(json.dumps(st.to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_validate(args) -> int:
    st = _decode_arg(args.text)
    if st is None:
        return 2
    snap = validation_snapshot(st, lang=args.lang or load_settings().lang)
    print(json.dumps(snap, indent=2, ensure_ascii=False))
    return 0 if not validate_state(st) else 1


def cmd_preview(args) -> int:
    st = _decode_arg(args.text)
    if st is None:
        return 2
    settings = load_settings()
    profile = get_profile(args.profile or settings.profile)
    seed = args.seed if args.seed is not None else (settings.seed if settings.seed is not None else 1)
    res = run_headless(st, ticks=args.ticks, seed=seed, profile=profile)
    print(json.dumps(res.to_dict(), indent=2))
    if args.ppm:
        _prev, surface = run_preview(st, ticks=args.ticks, seed=seed, profile=profile)
        write_ppm(surface, Path(args.ppm), comment=encode(st))
        log_buffer.push(f"[cli] wrote {args.ppm}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="particle-cmd", description="Build, check and preview /particle commands.")
    ap.add_argument("--verbose", action="store_true", help="mirror the internal log to stderr")
    sub = ap.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="print a command from field values (defaults fill the rest)")
    for name in FIELD_ORDER:
        enc.add_argument(f"--{name}", default=None)
    enc.set_defaults(func=cmd_encode)

    dec = sub.add_parser("decode", help="split command text into fields")
    dec.add_argument("text")
    dec.set_defaults(func=cmd_decode)

    val = sub.add_parser("validate", help="check every field of a command")
    val.add_argument("text")
    val.add_argument("--lang", choices=["en", "zh"], default=None)
    val.set_defaults(func=cmd_validate)

    pv = sub.add_parser("preview", help="run the particle preview headless")
    pv.add_argument("text")
    pv.add_argument("--ticks", type=int, default=60)
    pv.add_argument("--seed", type=int, default=None)
    pv.add_argument("--profile", choices=sorted(PROFILES), default=None)
    pv.add_argument("--ppm", default=None, help="also write the final frame to this .ppm file")
    pv.set_defaults(func=cmd_preview)
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log_buffer.echo = bool(args.verbose)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
