from __future__ import annotations

"""Built-in particle catalog and effect presets.

Pure data. The builder session reads it to load a particle (with its example
arguments or color overrides) or a preset command into the builder.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ParticleDef:
    id: str
    name: str
    category: str                 # common|combat|magic|environment
    description: str = ""
    example: Optional[str] = None
    note: str = ""
    supports_color: bool = False


@dataclass(frozen=True)
class PresetDef:
    id: str
    name: str
    description: str
    command: str


PARTICLES: List[ParticleDef] = [
    ParticleDef("flame", "Flame", "common",
                "Small fire particle used on torches and furnaces.",
                note="Speed controls the vertical velocity."),
    ParticleDef("heart", "Heart", "common", "Used when breeding animals or taming."),
    ParticleDef("entity_effect", "Potion Swirl", "magic",
                "Swirls from potions. Highly color customizable.",
                note="COLOR: Set Count=0. Then dx/dy/dz become R/G/B (0.0-1.0).",
                supports_color=True),
    ParticleDef("dust", "Redstone Dust", "common",
                "Colored dust. Requires RGB and Scale arguments in ID.",
                example="dust 1.0 0.0 0.0 1.0",
                note="Syntax: dust <r> <g> <b> <size>. R/G/B are 0.0-1.0.",
                supports_color=True),
    ParticleDef("dust_color_transition", "Dust Transition", "common",
                "Dust that fades from one color to another.",
                example="dust_color_transition 1 0 0 1 0 0 1",
                note="Syntax: dust_color_transition <fromR> <fromG> <fromB> <size> <toR> <toG> <toB>."),
    ParticleDef("note", "Note", "common", "Musical note. Color changes with pitch.",
                note="COLOR: Set Count=0. dx controls color (pitch). Range 0.0-1.0.",
                supports_color=True),
    ParticleDef("explosion", "Explosion", "combat", "Large explosion cloud effect."),
    ParticleDef("crit", "Critical Hit", "combat", "Generated when dealing a critical hit."),
    ParticleDef("enchant", "Enchanting Table", "magic",
                "Letters that float from books to the table.",
                note="Motion: Particles generally move towards a central point."),
    ParticleDef("dragon_breath", "Dragon Breath", "magic", "Purple lingering cloud."),
    ParticleDef("end_rod", "End Rod", "environment", "White sparkle, gentle movement.",
                note="Speed controls the random velocity intensity."),
    ParticleDef("portal", "Portal", "environment",
                "Purple particles emitted by portals and Endermen.",
                note="Direction: Moves towards the spawn point (reverse velocity)."),
    ParticleDef("campfire_cosy_smoke", "Campfire Smoke", "environment", "Rising smoke effect.",
                note="Motion: Moves slowly upwards. Speed affects rise rate."),
]

PRESETS: List[PresetDef] = [
    PresetDef("blood_rain", "Blood Rain",
              "Heavy red dust falling down over a large area.",
              "particle dust 1.0 0.0 0.0 2.0 ~ ~5 ~ 5 1 5 1 100 normal"),
    PresetDef("magic_aura", "Magical Aura",
              "Dense cloud of enchanting letters and magic particles.",
              "particle enchant ~ ~1 ~ 1 0.5 1 1 100 normal"),
    PresetDef("toxic_fog", "Toxic Fog",
              "Green lingering clouds that look poisonous.",
              "particle dragon_breath ~ ~1 ~ 3 0.1 3 0.01 50 normal"),
    PresetDef("spark_storm", "Spark Storm",
              "Chaotic electric sparks flying everywhere.",
              "particle electric_spark ~ ~1 ~ 2 2 2 1 50 normal"),
    PresetDef("void_gateway", "Void Gateway",
              "Imploding purple particles indicating a rift.",
              "particle portal ~ ~1 ~ 1 2 1 1 200 normal"),
    PresetDef("holy_light", "Holy Light",
              "Gentle white sparkles falling or floating.",
              "particle end_rod ~ ~2 ~ 1 1 1 0.05 30 normal"),
]

_PARTICLES_BY_ID: Dict[str, ParticleDef] = {p.id: p for p in PARTICLES}
_PRESETS_BY_ID: Dict[str, PresetDef] = {p.id: p for p in PRESETS}


def get_particle(pid: str) -> Optional[ParticleDef]:
    return _PARTICLES_BY_ID.get(str(pid or "").strip())


def get_preset(pid: str) -> Optional[PresetDef]:
    return _PRESETS_BY_ID.get(str(pid or "").strip())
