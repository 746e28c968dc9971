from __future__ import annotations
"""Preview settings.

Sources, later wins:
  1. defaults (detailed profile, OS-seeded randomness, English messages)
  2. out/settings.json under the repo root, if present
  3. PARTICLE_PREVIEW_PROFILE / PARTICLE_PREVIEW_SEED / PARTICLE_STUDIO_LANG

Unknown or malformed values fall back to the defaults.
"""

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from app import log_buffer
from app.command_validation import VALIDATION_MESSAGES
from runtime.particles_v1 import PROFILES

ROOT = Path(__file__).resolve().parents[1]
SETTINGS_PATH = ROOT / "out" / "settings.json"


@dataclass(frozen=True)
class PreviewSettings:
    profile: str = "detailed"
    seed: Optional[int] = None
    lang: str = "en"


def _read_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log_buffer.push(f"[settings] ignoring unreadable {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _coerce(raw: Mapping[str, Any]) -> PreviewSettings:
    base = PreviewSettings()
    profile = str(raw.get("profile", base.profile) or "").strip().lower()
    if profile not in PROFILES:
        profile = base.profile
    seed = raw.get("seed", base.seed)
    if seed is not None:
        try:
            seed = int(seed)
        except (TypeError, ValueError):
            seed = None
    lang = str(raw.get("lang", base.lang) or "").strip().lower()
    if lang not in VALIDATION_MESSAGES:
        lang = base.lang
    return PreviewSettings(profile=profile, seed=seed, lang=lang)


def load_settings(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> PreviewSettings:
    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = dict(_read_json(Path(path) if path is not None else SETTINGS_PATH))
    if env.get("PARTICLE_PREVIEW_PROFILE"):
        raw["profile"] = env["PARTICLE_PREVIEW_PROFILE"]
    if env.get("PARTICLE_PREVIEW_SEED"):
        raw["seed"] = env["PARTICLE_PREVIEW_SEED"]
    if env.get("PARTICLE_STUDIO_LANG"):
        raw["lang"] = env["PARTICLE_STUDIO_LANG"]
    return _coerce(raw)
