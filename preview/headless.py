from __future__ import annotations
"""Headless preview runner for regression tests and the CLI.

Runs the preview engine against a RasterSurface with a ManualFrameScheduler
and a seeded RNG, producing a stable hash of the final framebuffer plus a few
pool statistics.
"""

from dataclasses import dataclass, asdict
import hashlib
import json
from pathlib import Path
from typing import Optional

from models.command import CommandState
from runtime.particles_v1 import DETAILED, PreviewProfile
from runtime.rng_v1 import DeterministicRNG

from .preview_engine import ParticlePreview
from .sim_clock import ManualFrameScheduler
from .surface import RasterSurface


@dataclass
class HeadlessResult:
    sha256: str
    ticks: int
    alive: int
    blend_mode: str
    profile: str
    seed: int

    def to_dict(self) -> dict:
        return asdict(self)


def run_preview(state: CommandState, *, ticks: int = 60, seed: int = 1,
                profile: PreviewProfile = DETAILED,
                size: tuple = (320, 192)) -> tuple[ParticlePreview, RasterSurface]:
    surface = RasterSurface(*size)
    sched = ManualFrameScheduler()
    prev = ParticlePreview(surface, sched, profile=profile, rng=DeterministicRNG(seed))
    prev.mount(state)
    sched.pump(int(ticks))
    return prev, surface


def run_headless(state: CommandState, *, ticks: int = 60, seed: int = 1,
                 profile: PreviewProfile = DETAILED) -> HeadlessResult:
    prev, surface = run_preview(state, ticks=ticks, seed=seed, profile=profile)
    res = HeadlessResult(
        sha256=hashlib.sha256(surface.to_bytes()).hexdigest(),
        ticks=prev.ticks,
        alive=len(prev.particles),
        blend_mode=prev.blend_mode,
        profile=profile.name,
        seed=int(seed),
    )
    prev.unmount()
    return res


def run_and_write(state: CommandState, out_json: Path, *, ticks: int = 60, seed: int = 1,
                  profile: PreviewProfile = DETAILED) -> HeadlessResult:
    res = run_headless(state, ticks=ticks, seed=seed, profile=profile)
    Path(out_json).write_text(json.dumps(res.to_dict(), indent=2), encoding="utf-8")
    return res


def write_ppm(surface: RasterSurface, path: Path, comment: Optional[str] = None) -> Path:
    """Dump a framebuffer as binary PPM (P6) for eyeballing a headless frame."""
    header = "P6\n"
    if comment:
        header += "# " + comment.replace("\n", " ") + "\n"
    header += f"{surface.width} {surface.height}\n255\n"
    p = Path(path)
    p.write_bytes(header.encode("ascii", errors="replace") + surface.to_bytes())
    return p
