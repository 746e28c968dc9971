# Qt entry for `python -m app`
from app.settings import load_settings
from qt.qt_app import run_qt

def main() -> None:
    run_qt(load_settings())

if __name__ == "__main__":
    main()
