from __future__ import annotations
import sys, platform, json
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

def _qt_binding() -> str:
    try:
        import PySide6  # noqa: F401
        return "PySide6"
    except ImportError:
        pass
    try:
        import PyQt6  # noqa: F401
        return "PyQt6"
    except ImportError:
        return "none"

def gather() -> dict:
    from app.particle_catalog import PARTICLES, PRESETS
    from app.settings import load_settings
    from runtime.particle_visuals_v1 import COLOR_RULES, PHYSICS_RULES

    settings = load_settings()
    return {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "project_root": str(ROOT),
        "qt_binding": _qt_binding(),
        "settings": {"profile": settings.profile, "seed": settings.seed, "lang": settings.lang},
        "counts": {
            "particles": len(PARTICLES),
            "presets": len(PRESETS),
            "color_rules": len(COLOR_RULES),
            "physics_rules": len(PHYSICS_RULES),
        }
    }

def as_text() -> str:
    d = gather()
    return json.dumps(d, indent=2)
