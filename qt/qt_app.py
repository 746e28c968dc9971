"""Qt application."""

from __future__ import annotations

import sys

APP_TITLE = "Particle Command Studio"

try:
    from PySide6 import QtCore, QtGui, QtWidgets  # type: ignore
    _BINDING = "PySide6"
except ImportError:  # pragma: no cover
    from PyQt6 import QtCore, QtGui, QtWidgets  # type: ignore
    _BINDING = "PyQt6"

from app import log_buffer
from app.builder_session import BuilderSession
from app.particle_catalog import PARTICLES, PRESETS
from app.settings import PreviewSettings, load_settings
from models.codec import encode
from models.command import CommandState, FIELD_ORDER, MODES
from runtime.particles_v1 import get_profile
from qt.preview_widget import PreviewWidget

_LABELS = {
    "particle": "PARTICLE_ID",
    "x": "POS_X", "y": "POS_Y", "z": "POS_Z",
    "dx": "DELTA_X", "dy": "DELTA_Y", "dz": "DELTA_Z",
    "speed": "SPEED", "count": "COUNT", "mode": "MODE",
}


def _install_global_excepthook(app_name: str = "Particle Studio"):
    """Write a crash report and show a fatal error dialog on uncaught exceptions."""
    from app.crash_reporter import write_report

    def _hook(exctype, value, tb):
        import traceback as _tb
        msg = "".join(_tb.format_exception(exctype, value, tb))
        sys.stderr.write(msg + "\n")
        try:
            rp = write_report(exctype, value, tb)
            msg += f"\nCrash report: {rp}"
        except OSError:
            pass
        if QtWidgets.QApplication.instance() is not None:
            QtWidgets.QMessageBox.critical(
                None,
                f"{app_name} - Fatal Error",
                "An unexpected error occurred.\n\n" + msg[-4000:],
            )

    sys.excepthook = _hook


class BuilderWindow(QtWidgets.QMainWindow):
    def __init__(self, session: BuilderSession, settings: PreviewSettings):
        super().__init__()
        self.session = session
        self.settings = settings
        self.setWindowTitle(APP_TITLE)
        self._syncing = False
        self._picked_color = "#ff0000"

        central = QtWidgets.QWidget()
        root = QtWidgets.QVBoxLayout(central)

        root.addLayout(self._build_loaders())

        body = QtWidgets.QHBoxLayout()
        body.addLayout(self._build_form(), 1)
        body.addLayout(self._build_output(), 1)
        root.addLayout(body, 1)
        root.addLayout(self._build_history())

        self.setCentralWidget(central)
        self.session.subscribe(self._on_state_changed)
        self._on_state_changed(self.session.state)

    # ---- layout
    def _build_loaders(self) -> QtWidgets.QHBoxLayout:
        row = QtWidgets.QHBoxLayout()
        self.particle_pick = QtWidgets.QComboBox()
        for p in PARTICLES:
            self.particle_pick.addItem(f"{p.name} ({p.id})", p.id)
        color_btn = QtWidgets.QPushButton("Color...")
        color_btn.clicked.connect(self._pick_color)
        load_btn = QtWidgets.QPushButton("[LOAD_TO_BUILDER]")
        load_btn.clicked.connect(self._load_particle)

        self.preset_pick = QtWidgets.QComboBox()
        for pr in PRESETS:
            self.preset_pick.addItem(pr.name, pr.id)
        preset_load = QtWidgets.QPushButton("Load preset")
        preset_load.clicked.connect(lambda: self.session.load_preset(PRESETS[self.preset_pick.currentIndex()]))
        preset_copy = QtWidgets.QPushButton("[ COPY ]")
        preset_copy.clicked.connect(self._copy_preset)

        for w in (self.particle_pick, color_btn, load_btn, self.preset_pick, preset_load, preset_copy):
            row.addWidget(w)
        return row

    def _build_form(self) -> QtWidgets.QGridLayout:
        grid = QtWidgets.QGridLayout()
        self.inputs = {}
        self.error_labels = {}
        for i, name in enumerate(FIELD_ORDER):
            grid.addWidget(QtWidgets.QLabel(_LABELS[name]), i * 2, 0)
            if name == "mode":
                w = QtWidgets.QComboBox()
                w.addItems(list(MODES))
                w.currentTextChanged.connect(lambda v, n=name: self._on_edit(n, v))
            else:
                w = QtWidgets.QLineEdit()
                w.textEdited.connect(lambda v, n=name: self._on_edit(n, v))
            grid.addWidget(w, i * 2, 1)
            err = QtWidgets.QLabel("")
            err.setStyleSheet("color: #ff3333; font-size: 10px;")
            grid.addWidget(err, i * 2 + 1, 1)
            self.inputs[name] = w
            self.error_labels[name] = err
        return grid

    def _build_output(self) -> QtWidgets.QVBoxLayout:
        col = QtWidgets.QVBoxLayout()
        self.preview = PreviewWidget(profile=get_profile(self.settings.profile), seed=self.settings.seed)
        col.addWidget(self.preview, 1)
        self.command_label = QtWidgets.QLabel("")
        self.command_label.setWordWrap(True)
        self.command_label.setTextInteractionFlags(QtCore.Qt.TextInteractionFlag.TextSelectableByMouse)
        col.addWidget(self.command_label)
        copy_btn = QtWidgets.QPushButton("[ COPY_COMMAND ]")
        copy_btn.clicked.connect(self._copy_command)
        col.addWidget(copy_btn)
        return col

    def _build_history(self) -> QtWidgets.QVBoxLayout:
        col = QtWidgets.QVBoxLayout()
        head = QtWidgets.QHBoxLayout()
        head.addWidget(QtWidgets.QLabel("COMMAND_LOGS"))
        restore_btn = QtWidgets.QPushButton("[RESTORE]")
        restore_btn.clicked.connect(self._restore_selected)
        clear_btn = QtWidgets.QPushButton("[ CLEAR_LOGS ]")
        clear_btn.clicked.connect(self._clear_history)
        head.addStretch(1)
        head.addWidget(restore_btn)
        head.addWidget(clear_btn)
        col.addLayout(head)
        self.history_list = QtWidgets.QListWidget()
        self.history_list.setMaximumHeight(160)
        self.history_list.itemDoubleClicked.connect(lambda _item: self._restore_selected())
        col.addWidget(self.history_list)
        return col

    # ---- session sync
    def _on_edit(self, name: str, value: str) -> None:
        if self._syncing:
            return
        self.session.set_field(name, value)
        self._refresh_errors()

    def _on_state_changed(self, state: CommandState) -> None:
        self._syncing = True
        try:
            for name, w in self.inputs.items():
                v = state.get(name)
                if isinstance(w, QtWidgets.QComboBox):
                    if w.currentText() != v:
                        w.setCurrentText(v)
                elif w.text() != v:
                    w.setText(v)
        finally:
            self._syncing = False
        self.command_label.setText(encode(state))
        self.preview.set_command(state)
        self._refresh_errors()

    def _refresh_errors(self) -> None:
        for name, lbl in self.error_labels.items():
            msg = self.session.error_message(name, self.settings.lang)
            lbl.setText(f"[!] {msg}" if msg else "")

    def _refresh_history(self) -> None:
        self.history_list.clear()
        for text in self.session.history.commands():
            self.history_list.addItem(text)

    # ---- actions
    def _pick_color(self) -> None:
        c = QtWidgets.QColorDialog.getColor(QtGui.QColor(self._picked_color), self)
        if c.isValid():
            self._picked_color = c.name()

    def _load_particle(self) -> None:
        self.session.load_particle(self.particle_pick.currentData(), self._picked_color)

    def _copy_command(self) -> None:
        self.session.copy_command()
        self._refresh_history()
        self.statusBar().showMessage("COMMAND COPIED TO CLIPBOARD", 2500)

    def _copy_preset(self) -> None:
        self.session.copy_preset(PRESETS[self.preset_pick.currentIndex()])
        self.statusBar().showMessage("COMMAND COPIED TO CLIPBOARD", 2500)

    def _restore_selected(self) -> None:
        row = self.history_list.currentRow()
        if 0 <= row < len(self.session.history):
            self.session.restore(row)

    def _clear_history(self) -> None:
        self.session.clear_history()
        self._refresh_history()

    def closeEvent(self, event):  # noqa: N802
        self.preview.teardown()
        super().closeEvent(event)


def run_qt(settings: PreviewSettings | None = None) -> None:
    app = QtWidgets.QApplication(sys.argv)
    _install_global_excepthook()
    settings = settings or load_settings()
    clipboard = app.clipboard()
    session = BuilderSession(clipboard=clipboard.setText)
    log_buffer.push(f"[qt] starting with {_BINDING}, profile={settings.profile}")
    win = BuilderWindow(session, settings)
    win.resize(1100, 680)
    win.show()
    app.exec()
