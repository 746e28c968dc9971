from __future__ import annotations

"""
Particle System v1 (engine primitive)

The pool behind the command preview. It is NOT a renderer and does not
know about scheduling: the preview engine calls step() once per display tick
and hands the surviving particles to the renderer.

Design goals:
- Deterministic when given a seeded DeterministicRNG
- Positions are offsets from the visual origin in screen pixels (+y is down)
- Resolved visuals are consumed as-is; raw command strings are parsed only
  for count and speed
"""

from dataclasses import dataclass, asdict
import math
from typing import Any, Dict, List, Optional

from models.command import CommandState

from .integrators_v1 import IntegratorConfigV1, euler_step_entities
from .particle_visuals_v1 import ParticleVisuals, SpreadParameters
from .rng_v1 import DeterministicRNG, clamp

RGB = tuple

# Inward-pull velocity as a fraction of the (negated) spawn offset.
INWARD_PULL_FACTOR = 0.05
# Spawn rectangle half-width is spread * SPREAD_SCALE + SPREAD_PAD pixels.
SPREAD_SCALE = 20.0
SPREAD_PAD = 2.0
LIFE_DECAY_BASE = 0.01
LIFE_DECAY_JITTER = 0.02
DEFAULT_SPEED = 0.1
# Preview-only limits; the command text keeps whatever the user typed.
MAX_PREVIEW_SPEED = 10.0
MAX_PREVIEW_SPREAD = 16.0


@dataclass(frozen=True)
class PreviewProfile:
    name: str
    spawn_cap_rate: int      # max particles spawned per tick
    pool_cap: int            # hard cap on live particles
    velocity_scale: float    # initial velocity is uniform in +-speed*velocity_scale
    floor_y: float = 40.0
    grid_size: int = 20


COMPACT = PreviewProfile("compact", spawn_cap_rate=5, pool_cap=200, velocity_scale=2.0)
DETAILED = PreviewProfile("detailed", spawn_cap_rate=10, pool_cap=300, velocity_scale=3.0)

PROFILES: Dict[str, PreviewProfile] = {p.name: p for p in (COMPACT, DETAILED)}


def get_profile(name: Optional[str]) -> PreviewProfile:
    return PROFILES.get(str(name or "").strip().lower(), DETAILED)


@dataclass
class ParticleRecord:
    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: RGB = (255, 255, 255)
    size: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SpawnSettings:
    count: int
    spread_x: float
    spread_y: float
    speed: float


def spawn_settings(state: CommandState, visuals: ParticleVisuals) -> SpawnSettings:
    """Numbers the spawner needs, with the preview's lenient defaults."""
    try:
        count = int(float(str(state.count).strip()))
    except (TypeError, ValueError, OverflowError):
        count = 0
    if count <= 0:
        count = 1

    try:
        speed = float(str(state.speed).strip())
    except (TypeError, ValueError):
        speed = 0.0
    if not math.isfinite(speed) or speed == 0.0:
        speed = DEFAULT_SPEED
    speed = clamp(speed, -MAX_PREVIEW_SPEED, MAX_PREVIEW_SPEED)

    params = visuals.parameters
    if isinstance(params, SpreadParameters):
        sx = clamp(params.dx, -MAX_PREVIEW_SPREAD, MAX_PREVIEW_SPREAD)
        sy = clamp(params.dy, -MAX_PREVIEW_SPREAD, MAX_PREVIEW_SPREAD)
    else:
        sx, sy = 0.0, 0.0
    return SpawnSettings(count=count, spread_x=sx, spread_y=sy, speed=speed)


def spawn_budget(count: int, profile: PreviewProfile) -> int:
    """Particles to attempt this tick: clamp(count/10, 1, cap) rounded up."""
    return int(math.ceil(clamp(count / 10.0, 1.0, float(profile.spawn_cap_rate))))


class ParticleSystemV1:
    def __init__(self, profile: PreviewProfile = DETAILED, rng: Optional[DeterministicRNG] = None):
        self.profile = profile
        self.rng = rng if rng is not None else DeterministicRNG(None)
        self.particles: List[ParticleRecord] = []

    def reset(self) -> None:
        self.particles = []

    def __len__(self) -> int:
        return len(self.particles)

    # ---- spawning
    def spawn_one(self, settings: SpawnSettings, visuals: ParticleVisuals) -> ParticleRecord:
        rng = self.rng
        x = rng.symmetric(settings.spread_x * SPREAD_SCALE + SPREAD_PAD)
        y = rng.symmetric(settings.spread_y * SPREAD_SCALE + SPREAD_PAD)
        vmax = settings.speed * self.profile.velocity_scale
        vx = rng.symmetric(vmax)
        vy = rng.symmetric(vmax)

        # One kind-specific override: inward pull replaces the random velocity,
        # otherwise the profile's vertical bias is added.
        if visuals.inward_pull:
            vx = -x * INWARD_PULL_FACTOR
            vy = -y * INWARD_PULL_FACTOR
        elif visuals.physics.base_vertical_bias != 0.0:
            vy += visuals.physics.base_vertical_bias

        color = visuals.palette.pick(rng)
        size = rng.rand() * 2.0 + 1.0
        return ParticleRecord(x, y, vx, vy, 1.0, color, size)

    def spawn(self, settings: SpawnSettings, visuals: ParticleVisuals) -> int:
        spawned = 0
        for _ in range(spawn_budget(settings.count, self.profile)):
            if len(self.particles) >= self.profile.pool_cap:
                break
            self.particles.append(self.spawn_one(settings, visuals))
            spawned += 1
        return spawned

    # ---- simulation
    def advance(self, visuals: ParticleVisuals) -> int:
        phys = visuals.physics
        cfg = IntegratorConfigV1(
            gravity=phys.gravity,
            drag=phys.drag,
            floor_collision=phys.floor_collision,
            floor_y=self.profile.floor_y,
        )
        return euler_step_entities(self.particles, cfg)

    def decay(self) -> int:
        keep: List[ParticleRecord] = []
        for p in self.particles:
            p.life -= LIFE_DECAY_BASE + self.rng.rand() * LIFE_DECAY_JITTER
            if p.life > 0:
                keep.append(p)
        removed = len(self.particles) - len(keep)
        self.particles = keep
        return removed

    def step(self, state: CommandState, visuals: ParticleVisuals) -> Dict[str, int]:
        """Spawn, integrate and age the pool for one tick."""
        spawned = self.spawn(spawn_settings(state, visuals), visuals)
        contacts = self.advance(visuals)
        removed = self.decay()
        return {"spawned": spawned, "floor_contacts": contacts, "removed": removed, "alive": len(self.particles)}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile.name,
            "seed": self.rng.seed,
            "particles": [p.to_dict() for p in self.particles],
        }
