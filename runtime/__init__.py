from __future__ import annotations

from .rng_v1 import DeterministicRNG
from .particle_visuals_v1 import (
    ColorPalette,
    PhysicsProfile,
    SpreadParameters,
    ColorParameters,
    ParticleVisuals,
    resolve,
    resolve_visuals,
)
from .particles_v1 import ParticleSystemV1, ParticleRecord, PreviewProfile, COMPACT, DETAILED, get_profile
