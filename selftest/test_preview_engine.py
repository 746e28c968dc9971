"""Selftests for the preview lifecycle and per-frame rendering.

Run:
  python -m selftest.test_preview_engine
"""

from models.command import CommandState, DEFAULT_STATE
from preview.preview_engine import ParticlePreview, PreviewState
from preview.sim_clock import ManualFrameScheduler
from preview.surface import RecordingSurface
from runtime.rng_v1 import DeterministicRNG


def _preview(**kw):
    surface = RecordingSurface(200, 120)
    sched = ManualFrameScheduler()
    prev = ParticlePreview(surface, sched, rng=DeterministicRNG(1), **kw)
    return prev, surface, sched


def test_mount_runs_one_tick_per_frame():
    prev, _, sched = _preview()
    assert prev.state is PreviewState.IDLE
    prev.mount(DEFAULT_STATE)
    assert prev.running
    assert sched.pending == 1
    assert sched.pump(5) == 5
    assert prev.ticks == 5
    assert sched.pending == 1
    assert len(prev.particles) > 0


def test_observe_identity_restarts():
    prev, _, sched = _preview()
    prev.mount(DEFAULT_STATE)
    sched.pump(5)

    prev.observe(DEFAULT_STATE)
    assert prev.ticks == 5

    equal_copy = CommandState()
    assert equal_copy == DEFAULT_STATE and equal_copy is not DEFAULT_STATE
    prev.observe(equal_copy)
    assert prev.ticks == 0
    assert prev.particles == []
    assert sched.pending == 1
    sched.pump(1)
    assert prev.ticks == 1


def test_unmount_is_terminal():
    prev, _, sched = _preview()
    prev.mount(DEFAULT_STATE)
    sched.pump(3)
    prev.unmount()
    assert prev.state is PreviewState.IDLE
    assert prev.particles == []
    assert sched.pending == 0
    assert sched.pump(10) == 0

    prev.observe(DEFAULT_STATE.replace(particle="heart"))
    prev.mount(DEFAULT_STATE)
    assert prev.state is PreviewState.IDLE
    assert sched.pending == 0
    assert prev.tick() == {}


def test_frame_draw_order():
    prev, surface, sched = _preview()
    prev.mount(DEFAULT_STATE)
    sched.pump(3)
    kinds = [op[0] for op in surface.ops]
    assert kinds[0] == "clear"
    assert surface.ops[0][1] == (10, 10, 10)
    assert "line" in kinds
    first_rect = kinds.index("fill_rect")
    assert "line" not in kinds[first_rect:]
    rects = surface.of_kind("fill_rect")
    assert len(rects) == len(prev.particles)
    assert all(0.0 < op[6] <= 1.0 for op in rects)


def test_blend_mode_follows_glow():
    prev, surface, sched = _preview()
    prev.mount(DEFAULT_STATE)  # flame glows
    sched.pump(1)
    assert prev.blend_mode == "add"
    assert surface.of_kind("blend")[0] == ("blend", "add")
    assert surface.blend_mode == "normal"

    prev.observe(DEFAULT_STATE.replace(particle="campfire_cosy_smoke"))
    sched.pump(1)
    assert prev.blend_mode == "normal"
    assert surface.of_kind("blend")[0] == ("blend", "normal")


def test_garbage_fields_still_preview():
    prev, _, sched = _preview()
    prev.mount(CommandState("no_such_kind", "~~", "?", "", "x", "y", "z", "fast", "-3.5", "loud"))
    sched.pump(4)
    assert prev.ticks == 4
    assert len(prev.particles) == 4


def test_on_frame_callback():
    seen = []
    prev, _, sched = _preview(on_frame=seen.append)
    prev.mount(DEFAULT_STATE)
    sched.pump(3)
    assert len(seen) == 3
    assert seen[-1]["alive"] == len(prev.particles)
    assert "drawn" in seen[-1]


def test_unmount_from_callback_stops_rescheduling():
    holder = {}

    def stop(_stats):
        holder["prev"].unmount()

    prev, _, sched = _preview(on_frame=stop)
    holder["prev"] = prev
    prev.mount(DEFAULT_STATE)
    sched.pump(5)
    assert prev.ticks == 1
    assert sched.pending == 0


def main():
    test_mount_runs_one_tick_per_frame()
    test_observe_identity_restarts()
    test_unmount_is_terminal()
    test_frame_draw_order()
    test_blend_mode_follows_glow()
    test_garbage_fields_still_preview()
    test_on_frame_callback()
    test_unmount_from_callback_stops_rescheduling()
    print("OK: preview engine selftests passed")


if __name__ == "__main__":
    main()
