"""Run all selftests.

Usage:
  python -m selftest.run_all            # every module
  python -m selftest.run_all codec sim  # only modules whose name contains a filter
"""

import importlib
import sys
import time


TEST_MODULES = [
    'selftest.test_command_codec',
    'selftest.test_command_validation',
    'selftest.test_command_history',
    'selftest.test_color_picker',
    'selftest.test_builder_session',
    'selftest.test_particle_visuals',
    'selftest.test_particles_sim',
    'selftest.test_preview_engine',
    'selftest.test_headless',
    'selftest.test_settings',
    'selftest.test_cli',
    'selftest.test_preview_smoke',
    'selftest.test_qt_surface',
]


def main(argv=None):
    filters = list(sys.argv[1:] if argv is None else argv)
    selected = [m for m in TEST_MODULES if not filters or any(f in m for f in filters)]
    failures = []
    for modname in selected:
        t0 = time.perf_counter()
        try:
            m = importlib.import_module(modname)
            # Every selftest module exposes main(); it raises on the first failed assert.
            m.main()
        except Exception as e:
            failures.append((modname, e))
            continue
        print(f"  {modname} ({time.perf_counter() - t0:.2f}s)")

    if failures:
        print("\nFAILED:")
        for modname, e in failures:
            print(f"- {modname}: {type(e).__name__}: {e}")
        raise SystemExit(1)

    print(f"\nOK: {len(selected)} selftest module(s) passed")


if __name__ == "__main__":
    main()
