from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from preview.surface import BLEND_ADD, BLEND_NORMAL, DrawingSurface

RGB = Tuple[int, int, int]


@dataclass
class ParticleRenderConfigV1:
    """Engine primitive: draw preview particles onto a DrawingSurface.

    This is NOT an effect. The blend mode is chosen once per frame: additive
    for glow kinds, normal alpha blending otherwise.
    """
    background: RGB = (0x0a, 0x0a, 0x0a)
    grid_color: RGB = (0x33, 0x1a, 0x00)
    grid_size: int = 20
    draw_grid: bool = True


def draw_grid(surface: DrawingSurface, cx: float, cy: float, config: ParticleRenderConfigV1) -> int:
    """Reference grid aligned so a line passes through the visual origin."""
    g = max(2, int(config.grid_size))
    w, h = surface.width, surface.height
    lines = 0
    x = cx % g
    while x < w:
        surface.line(x, 0, x, h, config.grid_color)
        x += g
        lines += 1
    y = cy % g
    while y < h:
        surface.line(0, y, w, y, config.grid_color)
        y += g
        lines += 1
    return lines


def render_particles_v1(
    *,
    surface: DrawingSurface,
    particles: Iterable,
    glow: bool,
    config: ParticleRenderConfigV1 = ParticleRenderConfigV1(),
) -> int:
    """Clear, redraw the grid, then draw each particle with alpha = life.

    Particles are expected to expose x, y (offset from the origin), life,
    color and size. Returns the number of particles drawn.
    """
    cx = surface.width / 2.0
    cy = surface.height / 2.0

    surface.set_blend_mode(BLEND_NORMAL)
    surface.clear(config.background)
    if config.draw_grid:
        draw_grid(surface, cx, cy, config)

    surface.set_blend_mode(BLEND_ADD if glow else BLEND_NORMAL)
    n = 0
    for p in particles:
        surface.fill_rect(cx + p.x, cy + p.y, p.size, p.size, p.color, max(0.0, min(1.0, p.life)))
        n += 1
    surface.set_blend_mode(BLEND_NORMAL)
    return n
