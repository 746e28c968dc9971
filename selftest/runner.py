from __future__ import annotations

"""Minimal selftest runner.

Repository sanity checks that should always pass: everything compiles and
the headless preview is reproducible for a fixed seed.
"""

from pathlib import Path
import compileall
import sys


def _fail(msg: str) -> None:
    raise SystemExit("SELFTEST FAILED: " + msg)


def test_compileall() -> None:
    root = Path(__file__).resolve().parents[1]
    ok = compileall.compile_dir(str(root), quiet=1)
    if not ok:
        _fail("compileall failed")


def test_headless_reproducible() -> None:
    """Same command + same seed must give the same final frame."""
    try:
        from app.particle_catalog import PRESETS
        from models.codec import decode
        from preview.headless import run_headless
        from runtime.particles_v1 import PROFILES
    except Exception as e:
        _fail("imports failed for headless_reproducible: " + repr(e))

    for preset in PRESETS:
        st = decode(preset.command)
        for profile in PROFILES.values():
            a = run_headless(st, ticks=20, seed=7, profile=profile)
            b = run_headless(st, ticks=20, seed=7, profile=profile)
            if a.sha256 != b.sha256:
                _fail(f"headless frame not reproducible for {preset.id}/{profile.name}: {a.sha256} != {b.sha256}")
            if a.alive > profile.pool_cap:
                _fail(f"pool over cap for {preset.id}/{profile.name}: {a.alive}")


def main() -> int:
    test_compileall()
    test_headless_reproducible()
    print("SELFTEST OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
