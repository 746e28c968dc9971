import os
import sys


def main() -> None:
    # Qt-only app entrypoint
    from app import log_buffer
    from app.settings import load_settings
    from qt.qt_app import run_qt

    here = os.path.dirname(os.path.abspath(__file__))
    settings = load_settings()
    print(f"=== PARTICLE STUDIO STARTUP ===\nrun_root: {here}\nprofile: {settings.profile}\n=== END STARTUP ===")
    log_buffer.push(f"[startup] run_root={here}")

    run_qt(settings)


if __name__ == "__main__":
    try:
        main()
    except BaseException as e:
        if not isinstance(e, (KeyboardInterrupt, SystemExit)):
            from app.crash_reporter import write_report
            try:
                path = write_report(type(e), e, e.__traceback__)
                print(f"[ParticleStudio] Crash log written to: {path}", file=sys.stderr)
            except OSError:
                pass
        raise
