"""Selftests for preview settings.

Run:
  python -m selftest.test_settings
"""

import json
import tempfile
from pathlib import Path

from app.settings import PreviewSettings, load_settings


def test_defaults_without_file():
    with tempfile.TemporaryDirectory() as td:
        s = load_settings(Path(td) / "missing.json", environ={})
    assert s == PreviewSettings()


def test_file_then_environment():
    with tempfile.TemporaryDirectory() as td:
        p = Path(td) / "settings.json"
        p.write_text(json.dumps({"profile": "compact", "seed": 5, "lang": "zh"}), encoding="utf-8")
        assert load_settings(p, environ={}) == PreviewSettings("compact", 5, "zh")

        env = {"PARTICLE_PREVIEW_PROFILE": "Detailed", "PARTICLE_PREVIEW_SEED": "9"}
        assert load_settings(p, environ=env) == PreviewSettings("detailed", 9, "zh")


def test_bad_values_fall_back():
    with tempfile.TemporaryDirectory() as td:
        p = Path(td) / "settings.json"
        p.write_text("{not json", encoding="utf-8")
        env = {"PARTICLE_PREVIEW_PROFILE": "huge", "PARTICLE_PREVIEW_SEED": "abc", "PARTICLE_STUDIO_LANG": "xx"}
        assert load_settings(p, environ=env) == PreviewSettings()


def main():
    test_defaults_without_file()
    test_file_then_environment()
    test_bad_values_fall_back()
    print("OK: settings selftests passed")


if __name__ == "__main__":
    main()
