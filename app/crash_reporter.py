from __future__ import annotations
import sys, time, traceback
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

def _now_stamp() -> str:
    return time.strftime("%Y%m%d_%H%M%S", time.localtime())

def write_report(exc_type, exc, tb, outdir: Path | None = None) -> Path:
    outdir = Path(outdir) if outdir is not None else ROOT / "out" / "crash_reports"
    outdir.mkdir(parents=True, exist_ok=True)
    p = outdir / f"crash_{_now_stamp()}.txt"

    # diagnostics (best effort)
    try:
        from app.diagnostics import as_text as _diag
        diag = _diag()
    except Exception as e:
        diag = f"(diagnostics unavailable: {e})\n"

    from app.log_buffer import tail
    log_tail = "".join(tail(250)) or "(log empty)\n"

    trace = "".join(traceback.format_exception(exc_type, exc, tb))

    p.write_text(
        "PARTICLE STUDIO CRASH REPORT\n"
        f"timestamp={_now_stamp()}\n"
        f"argv={sys.argv}\n"
        "\n--- diagnostics ---\n"
        + diag +
        "\n--- recent log ---\n"
        + log_tail +
        "\n--- traceback ---\n"
        + trace,
        encoding="utf-8",
        errors="ignore",
    )
    return p
