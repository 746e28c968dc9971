"""Preview smoke test: run every built-in preset headless and render frames.

Catches regressions that previously showed up as a blank preview or a crash.
"""

from __future__ import annotations


def main() -> None:
    from app.particle_catalog import PRESETS
    from models.codec import decode
    from preview.headless import run_preview
    from preview.surface import RasterSurface
    from runtime.particle_render_v1 import ParticleRenderConfigV1, render_particles_v1

    empty = RasterSurface(320, 192)
    render_particles_v1(surface=empty, particles=[], glow=False, config=ParticleRenderConfigV1())
    blank = empty.to_bytes()

    for preset in PRESETS:
        st = decode(preset.command)
        if st is None:
            raise AssertionError(f"preset did not decode: {preset.id}")
        prev, surface = run_preview(st, ticks=12, seed=1)
        if not prev.particles:
            raise AssertionError(f"preview smoke: no live particles for {preset.id}")
        if surface.to_bytes() == blank:
            raise AssertionError(f"preview smoke: blank frame for {preset.id}")
        prev.unmount()


def test_preview_smoke() -> None:
    main()


if __name__ == "__main__":
    main()
    print("OK: preview smoke passed")
