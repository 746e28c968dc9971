"""Soak runner.

Purpose:
- Run the particle preview against the wall clock for an extended duration to
  catch crashes and pool growth past the profile cap.
- Cycles through every built-in preset and restarts the preview on each switch.

Usage:
  python3 -m tools.soak_run --seconds 600 --fps 60

Notes:
- Headless; renders into a RasterSurface.
- Prints periodic status and exits non-zero on exceptions.
"""
from __future__ import annotations
import argparse, time, traceback

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--seconds", type=int, default=600)
    ap.add_argument("--fps", type=int, default=60)
    ap.add_argument("--log_every", type=int, default=5)
    ap.add_argument("--switch_every", type=float, default=10.0, help="seconds per preset")
    ap.add_argument("--profile", default="detailed")
    args = ap.parse_args(argv)

    from app.particle_catalog import PRESETS
    from models.codec import decode
    from preview.preview_engine import ParticlePreview
    from preview.sim_clock import ManualFrameScheduler, SimClock
    from preview.surface import RasterSurface
    from runtime.particles_v1 import get_profile
    from runtime.rng_v1 import DeterministicRNG

    profile = get_profile(args.profile)
    dt = 1.0 / max(1, int(args.fps))
    clock = SimClock(fixed_dt=dt)
    sched = ManualFrameScheduler(fixed_dt=dt)
    prev = ParticlePreview(RasterSurface(160, 96), sched, profile=profile, rng=DeterministicRNG(1))
    states = [decode(p.command) for p in PRESETS]

    t0 = time.time()
    last_log = t0
    last_switch = t0
    idx = 0
    frames = 0
    peak = 0
    try:
        prev.mount(states[idx])
        clock.step_to(t0)
        while True:
            now = time.time()
            if now - t0 >= args.seconds:
                break
            if now - last_switch >= args.switch_every:
                last_switch = now
                idx = (idx + 1) % len(states)
                prev.observe(states[idx])

            frames += sched.pump(clock.step_to(now))
            peak = max(peak, len(prev.particles))
            if len(prev.particles) > profile.pool_cap:
                raise RuntimeError(f"pool grew past cap: {len(prev.particles)} > {profile.pool_cap}")

            if now - last_log >= args.log_every:
                last_log = now
                print(f"[soak] t={now-t0:.1f}s frames={frames} preset={PRESETS[idx].id} alive={len(prev.particles)}")
            time.sleep(dt)
        prev.unmount()
        print(f"[soak] OK duration={time.time()-t0:.1f}s frames={frames} peak={peak}")
        return 0
    except Exception as e:
        print("[soak] FAIL:", type(e).__name__, e)
        traceback.print_exc()
        return 2

if __name__ == "__main__":
    raise SystemExit(main())
