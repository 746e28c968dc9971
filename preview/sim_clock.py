from __future__ import annotations
"""Frame scheduling for the preview.

The preview asks for one frame at a time (like requestAnimationFrame): it
requests the next frame at the end of each tick and cancels the pending
request when it is torn down or restarted. Nothing ever runs re-entrantly.

- ManualFrameScheduler: headless; frames run when the caller pumps.
- qt.preview_widget.QtFrameScheduler: QTimer single-shot per frame.
"""

from typing import Callable, Dict, Optional, Protocol

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    def request_frame(self, callback: FrameCallback) -> int: ...
    def cancel_frame(self, handle: int) -> None: ...


class ManualFrameScheduler:
    def __init__(self, fixed_dt: float = 1.0/60.0):
        self.fixed_dt = float(fixed_dt)
        self.time = 0.0
        self.frames_run = 0
        self._next_handle = 1
        self._pending: Dict[int, FrameCallback] = {}

    def request_frame(self, callback: FrameCallback) -> int:
        h = self._next_handle
        self._next_handle += 1
        self._pending[h] = callback
        return h

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def step(self) -> int:
        """Run the callbacks that were pending when the step began."""
        batch = list(self._pending.items())
        self._pending.clear()
        self.time += self.fixed_dt
        for _h, cb in batch:
            cb(self.time)
        self.frames_run += 1
        return len(batch)

    def pump(self, frames: int = 1) -> int:
        """Advance up to `frames` display refreshes. Returns callbacks run."""
        ran = 0
        for _ in range(max(0, int(frames))):
            if not self._pending:
                break
            ran += self.step()
        return ran

    def reset(self) -> None:
        self._pending.clear()
        self.time = 0.0
        self.frames_run = 0


class SimClock:
    """Fixed-tick clock: converts wall timestamps into a number of ticks to run."""

    def __init__(self, fixed_dt: float = 1.0/60.0):
        self.fixed_dt = float(fixed_dt)
        self.sim_time = 0.0
        self._last_t: Optional[float] = None
        self._accum = 0.0

    def reset(self):
        self.sim_time = 0.0
        self._last_t = None
        self._accum = 0.0

    def step_to(self, t: float) -> int:
        """Advance clock toward timestamp t. Returns number of fixed steps executed."""
        t = float(t)
        if self._last_t is None:
            self._last_t = t
            return 0
        # If time goes backwards, reset
        if t < self._last_t:
            self.reset()
            self._last_t = t
            return 0
        dt_real = t - self._last_t
        self._last_t = t
        if dt_real > 0.5:
            # clamp huge jumps to avoid spiral
            dt_real = 0.5
        self._accum += dt_real
        steps = 0
        while self._accum >= self.fixed_dt:
            self._accum -= self.fixed_dt
            self.sim_time += self.fixed_dt
            steps += 1
        return steps
