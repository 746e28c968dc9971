from __future__ import annotations

"""
Particle Visual Resolver v1 (engine primitive)

Maps a particle id and its numeric arguments to a color palette and a
physics profile. Pure and deterministic; randomness (palette sampling) lives
in the simulation.

All dispatch tables are explicit ordered rule lists with first-match-wins
semantics. A rule whose fragment contains an earlier rule's fragment could
never match, so such tables are rejected at import.

The delta/count fields are overloaded for the color-capable kinds: with
count == 0 they carry a color instead of a spread. That is decided here,
once, and handed to the simulation as SpreadParameters or ColorParameters.
"""

from dataclasses import dataclass
import math
from typing import Optional, Sequence, Tuple, Union

from models.command import CommandState, COUNT_ZERO_SENTINELS

from .rng_v1 import DeterministicRNG, clamp

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class ColorPalette:
    colors: Tuple[RGB, ...]

    def __post_init__(self):
        if not self.colors:
            raise ValueError("ColorPalette needs at least one color")

    def pick(self, rng: DeterministicRNG) -> RGB:
        return rng.choice(self.colors)


@dataclass(frozen=True)
class PhysicsProfile:
    gravity: float = 0.0
    drag: float = 0.95               # velocity multiplier per tick, (0, 1]
    base_vertical_bias: float = 0.0  # added to vy at spawn; negative is up
    floor_collision: bool = False

    def __post_init__(self):
        if not (0.0 < self.drag <= 1.0):
            raise ValueError(f"drag must be in (0, 1], got {self.drag}")


@dataclass(frozen=True)
class SpreadParameters:
    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0


@dataclass(frozen=True)
class ColorParameters:
    rgb: RGB = (255, 255, 255)


SpawnParameters = Union[SpreadParameters, ColorParameters]


@dataclass(frozen=True)
class ParticleVisuals:
    palette: ColorPalette
    physics: PhysicsProfile
    parameters: SpawnParameters
    inward_pull: bool = False
    glow: bool = False


def _hex(h: str) -> RGB:
    h = h.lstrip("#")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def _palette(*hexes: str) -> ColorPalette:
    return ColorPalette(tuple(_hex(h) for h in hexes))


NEUTRAL_WHITE = _palette("#ffffff")
NOTE_PITCH_PALETTE = _palette("#ff0000", "#00ff00", "#0000ff", "#ffff00")
NEUTRAL_PHYSICS = PhysicsProfile(gravity=0.0, drag=0.95, base_vertical_bias=0.0, floor_collision=False)

DUST_PREFIX = "dust"
COLOR_MODE_MARKERS = ("entity_effect", "note")

# (fragment, palette). More specific fragments come first.
COLOR_RULES: Tuple[Tuple[str, ColorPalette], ...] = (
    ("soul_fire_flame", _palette("#55ffff", "#00aaaa", "#33cccc")),
    ("flame", _palette("#ff4500", "#ffa500", "#cf3000")),
    ("heart", _palette("#ff0000", "#cc0000")),
    ("crit", _palette("#ffaa00", "#ffff55")),
    ("smoke", _palette("#555555", "#333333", "#777777")),
    ("reverse_portal", _palette("#ff66ff", "#cc33cc")),
    ("portal", _palette("#d02090", "#800080")),
    ("end_rod", _palette("#ffffff", "#eeeeee")),
    ("dragon_breath", _palette("#d02090", "#e030a0")),
    ("enchant", _palette("#ffffff", "#aaaaaa")),
    ("note", _palette("#ff0000", "#00ff00", "#0000ff", "#ffff00")),
    ("cloud", _palette("#ffffff", "#eeeeee")),
    ("witch", _palette("#800080")),
    ("soul", _palette("#55ffff", "#00aaaa")),
    ("electric_spark", _palette("#99ffff", "#ffffff", "#66ccff")),
    ("happy_villager", _palette("#55ff55", "#00aa00")),
    ("angry_villager", _palette("#aa0000", "#555555")),
    ("totem", _palette("#ffff55", "#55ff55", "#ffaa00")),
    ("lava", _palette("#ff6600", "#ffaa00", "#cc3300")),
    ("water", _palette("#3366ff", "#6699ff")),
    ("bubble", _palette("#aaddff", "#ffffff")),
    ("snow", _palette("#ffffff", "#ddeeff")),
    ("cherry", _palette("#ffb7c5", "#ff99aa")),
    ("leaves", _palette("#4caf50", "#2e7d32")),
    ("spore", _palette("#66aa33", "#aa66cc")),
    ("explosion", _palette("#aaaaaa", "#888888", "#dddddd")),
    ("sculk", _palette("#00aaaa", "#003344")),
    ("glow", _palette("#66ffcc", "#33ddaa")),
)

_RISING = PhysicsProfile(gravity=-0.02, drag=0.96, base_vertical_bias=-0.5)
_FALLING = PhysicsProfile(gravity=0.15, drag=0.98, floor_collision=True)
_DRIFTING = PhysicsProfile(gravity=0.02, drag=0.90)
_FLOATING = PhysicsProfile(gravity=0.0, drag=0.90)

# (fragment, profile). Liquid kinds come before the rising ones so that
# e.g. dripping_lava falls instead of burning upward.
PHYSICS_RULES: Tuple[Tuple[str, PhysicsProfile], ...] = (
    ("drip", _FALLING),
    ("falling", _FALLING),
    ("rain", _FALLING),
    ("splash", _FALLING),
    ("water", _FALLING),
    ("lava", _FALLING),
    ("flame", _RISING),
    ("campfire", _RISING),
    ("smoke", _RISING),
    ("soul", _RISING),
    ("bubble", _RISING),
    ("leaf", _DRIFTING),
    ("leaves", _DRIFTING),
    ("snow", _DRIFTING),
    ("spore", _DRIFTING),
    ("ash", _DRIFTING),
    ("cloud", _FLOATING),
    ("poof", _FLOATING),
    ("dragon_breath", _FLOATING),
)

INWARD_PULL_FRAGMENTS: Tuple[str, ...] = ("portal", "enchant", "vault_connection", "nautilus")
GLOW_FRAGMENTS: Tuple[str, ...] = (
    "flame", "end_rod", "enchant", "portal", "electric_spark", "glow",
    "totem", "firework", "lava", "soul", "wax", "crit",
)


def _check_no_shadowing(name: str, fragments: Sequence[str]) -> None:
    for i, later in enumerate(fragments):
        for earlier in fragments[:i]:
            if earlier in later:
                raise ValueError(f"{name}: rule '{later}' is shadowed by earlier rule '{earlier}'")


_check_no_shadowing("COLOR_RULES", [f for f, _ in COLOR_RULES])
_check_no_shadowing("PHYSICS_RULES", [f for f, _ in PHYSICS_RULES])


def first_match(token: str, rules: Sequence[Tuple[str, object]]):
    for frag, value in rules:
        if frag in token:
            return value
    return None


def _float_or(raw: str, default: float) -> float:
    try:
        v = float(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return v if math.isfinite(v) else default


def _channel(v: float) -> int:
    return int(math.floor(clamp(v, 0.0, 1.0) * 255))


def is_color_mode(particle: str, count: str) -> bool:
    return any(m in particle for m in COLOR_MODE_MARKERS) and str(count).strip() in COUNT_ZERO_SENTINELS


def _dust_rgb(particle: str) -> Optional[RGB]:
    parts = particle.split()
    if len(parts) < 4:
        return None
    try:
        r, g, b = (float(p) for p in parts[1:4])
    except ValueError:
        return None
    if not all(math.isfinite(v) for v in (r, g, b)):
        return None
    return (_channel(clamp(r, 0.0, 1.0)), _channel(clamp(g, 0.0, 1.0)), _channel(clamp(b, 0.0, 1.0)))


def resolve_parameters(particle: str, dx: str, dy: str, dz: str, count: str) -> SpawnParameters:
    if is_color_mode(particle, count):
        return ColorParameters((
            _channel(_float_or(dx, 0.0)),
            _channel(_float_or(dy, 0.0)),
            _channel(_float_or(dz, 0.0)),
        ))
    return SpreadParameters(_float_or(dx, 0.0), _float_or(dy, 0.0), _float_or(dz, 0.0))


def resolve_palette(particle: str, dx: str, dy: str, dz: str, count: str) -> ColorPalette:
    if particle.startswith(DUST_PREFIX):
        rgb = _dust_rgb(particle)
        if rgb is not None:
            return ColorPalette((rgb,))

    params = resolve_parameters(particle, dx, dy, dz, count)
    if isinstance(params, ColorParameters):
        if "note" in particle:
            return NOTE_PITCH_PALETTE
        return ColorPalette((params.rgb,))

    pal = first_match(particle, COLOR_RULES)
    return pal if pal is not None else NEUTRAL_WHITE


def resolve_physics(particle: str) -> PhysicsProfile:
    prof = first_match(particle, PHYSICS_RULES)
    return prof if prof is not None else NEUTRAL_PHYSICS


def is_inward_pull(particle: str) -> bool:
    return any(f in particle for f in INWARD_PULL_FRAGMENTS)


def is_glow(particle: str) -> bool:
    return any(f in particle for f in GLOW_FRAGMENTS)


def resolve(particle: str, dx: str, dy: str, dz: str, count: str) -> Tuple[ColorPalette, PhysicsProfile]:
    particle = str(particle or "")
    return resolve_palette(particle, dx, dy, dz, count), resolve_physics(particle)


def resolve_visuals(state: CommandState) -> ParticleVisuals:
    """Everything the preview needs for one command state, resolved once."""
    particle = str(state.particle or "")
    palette, physics = resolve(particle, state.dx, state.dy, state.dz, state.count)
    return ParticleVisuals(
        palette=palette,
        physics=physics,
        parameters=resolve_parameters(particle, state.dx, state.dy, state.dz, state.count),
        inward_pull=is_inward_pull(particle),
        glow=is_glow(particle),
    )
