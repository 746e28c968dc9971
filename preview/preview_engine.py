from __future__ import annotations
"""Particle preview engine.

Owns one particle pool per mounted preview and drives it one tick per
display refresh:

    IDLE --mount(state)--> RUNNING --unmount()--> IDLE (terminal)
                 ^             |
                 +-observe(new state object): pool discarded, fresh start

The pool is never diffed against a new command state; any new state object
(identity, not equality) restarts the preview from an empty pool.
"""

from enum import Enum
from typing import Callable, Dict, Optional

from app import log_buffer
from models.command import CommandState
from runtime.particle_render_v1 import ParticleRenderConfigV1, render_particles_v1
from runtime.particle_visuals_v1 import ParticleVisuals, resolve_visuals
from runtime.particles_v1 import DETAILED, ParticleSystemV1, PreviewProfile
from runtime.rng_v1 import DeterministicRNG

from .sim_clock import FrameScheduler
from .surface import DrawingSurface


class PreviewState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class ParticlePreview:
    def __init__(
        self,
        surface: DrawingSurface,
        scheduler: FrameScheduler,
        *,
        profile: PreviewProfile = DETAILED,
        rng: Optional[DeterministicRNG] = None,
        on_frame: Optional[Callable[[Dict[str, int]], None]] = None,
    ):
        self.surface = surface
        self.on_frame = on_frame
        self.scheduler = scheduler
        self.profile = profile
        self.system = ParticleSystemV1(profile=profile, rng=rng)
        self.render_config = ParticleRenderConfigV1(grid_size=profile.grid_size)

        self.state = PreviewState.IDLE
        self.command: Optional[CommandState] = None
        self.visuals: Optional[ParticleVisuals] = None
        self.ticks = 0
        self.last_stats: Dict[str, int] = {}
        self._torn_down = False
        self._handle: Optional[int] = None

    # ---- lifecycle
    def mount(self, command: CommandState) -> None:
        if self._torn_down:
            return
        self._start(command)

    def observe(self, command: CommandState) -> None:
        """Feed the live command state. A different object restarts the preview."""
        if self._torn_down:
            return
        if self.state is PreviewState.RUNNING and command is self.command:
            return
        self._start(command)

    def unmount(self) -> None:
        self._cancel()
        self.system.reset()
        self.state = PreviewState.IDLE
        self._torn_down = True
        log_buffer.push(f"[preview] unmounted after {self.ticks} ticks")

    @property
    def running(self) -> bool:
        return self.state is PreviewState.RUNNING

    @property
    def particles(self):
        return self.system.particles

    def _start(self, command: CommandState) -> None:
        self._cancel()
        self.system.reset()
        self.command = command
        self.visuals = resolve_visuals(command)
        self.ticks = 0
        self.state = PreviewState.RUNNING
        self._request()

    def _request(self) -> None:
        self._handle = self.scheduler.request_frame(self._on_frame)

    def _cancel(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None

    def _on_frame(self, _t: float) -> None:
        self._handle = None
        if self.state is not PreviewState.RUNNING:
            return
        stats = self.tick()
        if self.on_frame is not None:
            self.on_frame(stats)
        if self.state is PreviewState.RUNNING and self._handle is None:
            self._request()

    # ---- one tick
    def tick(self) -> Dict[str, int]:
        """Advance and redraw once. Synchronous; no-op unless running."""
        if self.state is not PreviewState.RUNNING or self.command is None or self.visuals is None:
            return {}
        stats = self.system.step(self.command, self.visuals)
        stats["drawn"] = render_particles_v1(
            surface=self.surface,
            particles=self.system.particles,
            glow=self.visuals.glow,
            config=self.render_config,
        )
        self.ticks += 1
        self.last_stats = stats
        return stats

    @property
    def blend_mode(self) -> str:
        return "add" if (self.visuals is not None and self.visuals.glow) else "normal"
