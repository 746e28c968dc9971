from __future__ import annotations

"""
Integrators v1 (engine primitive)

Per-tick integration for preview particles (anything with x,y,vx,vy,life).

One explicit Euler step per display tick:
- drag compounds per tick (velocity *= drag)
- gravity is added to vy (screen space, +y is down)
- optional floor plane with damped bounce
"""

from dataclasses import dataclass
import math
from typing import Iterable, Protocol


class HasKinematics(Protocol):
    x: float
    y: float
    vx: float
    vy: float
    life: float


@dataclass
class IntegratorConfigV1:
    """Config shared across integrators."""
    gravity: float = 0.0
    drag: float = 0.95
    floor_collision: bool = False
    floor_y: float = 40.0             # floor plane, offset below the visual origin
    bounce: float = -0.5              # vy multiplier on floor contact
    friction: float = 0.8             # vx multiplier on floor contact
    settle_speed: float = 0.05        # below this speed a grounded particle settles
    settle_decay: float = 0.05        # extra life taken while settling


def apply_drag(vx: float, vy: float, drag: float) -> tuple[float, float]:
    return vx * drag, vy * drag


def collide_floor(e: HasKinematics, cfg: IntegratorConfigV1) -> bool:
    """Clamp e onto the floor plane and bounce it. Returns True on contact."""
    if e.y <= cfg.floor_y:
        return False
    e.y = cfg.floor_y
    e.vy *= cfg.bounce
    e.vx *= cfg.friction
    if math.hypot(e.vx, e.vy) < cfg.settle_speed:
        e.life -= cfg.settle_decay
    return True


def euler_step_entities(entities: Iterable[HasKinematics], cfg: IntegratorConfigV1) -> int:
    """In-place Euler step for one tick. Returns the number of floor contacts."""
    contacts = 0
    for e in entities:
        e.vx, e.vy = apply_drag(e.vx, e.vy, cfg.drag)
        e.vy += cfg.gravity
        e.x += e.vx
        e.y += e.vy
        if cfg.floor_collision and collide_floor(e, cfg):
            contacts += 1
    return contacts
