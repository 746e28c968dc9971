"""Qt particle preview: QPainter surface, QTimer frame scheduler, widget."""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Tuple

try:
    from PySide6 import QtCore, QtGui, QtWidgets  # type: ignore
except ImportError:  # pragma: no cover
    from PyQt6 import QtCore, QtGui, QtWidgets  # type: ignore

from models.command import CommandState
from preview.preview_engine import ParticlePreview
from preview.surface import BLEND_ADD
from runtime.particles_v1 import DETAILED, PreviewProfile
from runtime.rng_v1 import DeterministicRNG

RGB = Tuple[int, int, int]

_MODE_NORMAL = QtGui.QPainter.CompositionMode.CompositionMode_SourceOver
_MODE_ADD = QtGui.QPainter.CompositionMode.CompositionMode_Plus


class QtImageSurface:
    """DrawingSurface backed by a QImage.

    A QPainter is opened lazily on the first draw call and kept for the rest
    of the frame; call end_frame() before showing the image.
    """

    def __init__(self, width: int, height: int):
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.image = QtGui.QImage(self.width, self.height, QtGui.QImage.Format.Format_RGB32)
        self.image.fill(QtGui.QColor(0, 0, 0))
        self._painter: Optional[QtGui.QPainter] = None

    def _p(self) -> QtGui.QPainter:
        if self._painter is None:
            self._painter = QtGui.QPainter(self.image)
        return self._painter

    def end_frame(self) -> None:
        if self._painter is not None:
            self._painter.end()
            self._painter = None

    def clear(self, color: RGB) -> None:
        p = self._p()
        p.setCompositionMode(_MODE_NORMAL)
        p.fillRect(0, 0, self.width, self.height, QtGui.QColor(*color))

    def line(self, x0: float, y0: float, x1: float, y1: float, color: RGB) -> None:
        p = self._p()
        p.setPen(QtGui.QPen(QtGui.QColor(*color), 1))
        p.drawLine(QtCore.QLineF(x0, y0, x1, y1))

    def set_blend_mode(self, mode: str) -> None:
        self._p().setCompositionMode(_MODE_ADD if mode == BLEND_ADD else _MODE_NORMAL)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB, alpha: float = 1.0) -> None:
        c = QtGui.QColor(*color)
        c.setAlphaF(max(0.0, min(1.0, float(alpha))))
        self._p().fillRect(QtCore.QRectF(x, y, w, h), c)


class QtFrameScheduler:
    """One single-shot QTimer per requested frame (~display refresh)."""

    def __init__(self, interval_ms: int = 16):
        self.interval_ms = max(1, int(interval_ms))
        self._next_handle = 1
        self._timers: Dict[int, Tuple[QtCore.QTimer, Callable[[float], None]]] = {}

    def request_frame(self, callback: Callable[[float], None]) -> int:
        h = self._next_handle
        self._next_handle += 1
        timer = QtCore.QTimer()
        timer.setSingleShot(True)
        timer.setInterval(self.interval_ms)
        timer.timeout.connect(lambda h=h: self._fire(h))
        self._timers[h] = (timer, callback)
        timer.start()
        return h

    def _fire(self, handle: int) -> None:
        entry = self._timers.pop(handle, None)
        if entry is None:
            return
        timer, cb = entry
        timer.deleteLater()
        cb(time.monotonic())

    def cancel_frame(self, handle: int) -> None:
        entry = self._timers.pop(handle, None)
        if entry is not None:
            entry[0].stop()
            entry[0].deleteLater()


class PreviewWidget(QtWidgets.QWidget):
    """Live preview of the builder's command state."""

    def __init__(self, parent=None, *, profile: PreviewProfile = DETAILED, seed: Optional[int] = None):
        super().__init__(parent)
        self.setMinimumSize(240, 160)
        self.surface = QtImageSurface(320, 192)
        self.scheduler = QtFrameScheduler()
        self.preview = ParticlePreview(self.surface, self.scheduler, profile=profile,
                                       rng=DeterministicRNG(seed), on_frame=self._on_frame)
        self._origin_text = ""

    def set_command(self, state: CommandState) -> None:
        self._origin_text = f"ORIGIN: {state.x} {state.y} {state.z}"
        self.preview.observe(state)

    def teardown(self) -> None:
        self.preview.unmount()
        self.surface.end_frame()

    def _on_frame(self, _stats: Dict[str, int]) -> None:
        self.surface.end_frame()
        self.update()

    def resizeEvent(self, event):  # noqa: N802
        self.surface.end_frame()
        self.surface = QtImageSurface(self.width(), self.height())
        self.preview.surface = self.surface
        super().resizeEvent(event)

    def closeEvent(self, event):  # noqa: N802
        self.teardown()
        super().closeEvent(event)

    def paintEvent(self, _event):  # noqa: N802
        self.surface.end_frame()
        p = QtGui.QPainter(self)
        p.drawImage(0, 0, self.surface.image)
        p.setPen(QtGui.QColor(0xcc, 0x88, 0x00))
        p.drawText(self.width() - 80, 14, "VISUAL_SIM")
        if self._origin_text:
            p.drawText(6, self.height() - 6, self._origin_text)
        p.end()
