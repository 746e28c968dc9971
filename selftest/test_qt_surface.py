"""Qt drawing surface checks (offscreen platform).

Run:
  python -m selftest.test_qt_surface
"""

import os


def _qt():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from qt.preview_widget import QtFrameScheduler, QtImageSurface, QtGui
    if QtGui.QGuiApplication.instance() is None:
        _qt.app = QtGui.QGuiApplication([])
    return QtImageSurface, QtFrameScheduler, QtGui


def test_qt_surface_blend_modes():
    QtImageSurface, _sched, _QtGui = _qt()
    s = QtImageSurface(8, 8)
    s.clear((10, 10, 10))
    s.set_blend_mode("add")
    s.fill_rect(0, 0, 2, 2, (100, 0, 0), alpha=1.0)
    s.set_blend_mode("normal")
    s.fill_rect(4, 4, 2, 2, (0, 200, 0), alpha=1.0)
    s.end_frame()
    assert s.image.pixelColor(0, 0).red() == 110
    assert s.image.pixelColor(5, 5).green() == 200
    assert s.image.pixelColor(7, 0).red() == 10


def test_qt_scheduler_cancel():
    _surface, QtFrameScheduler, _QtGui = _qt()
    sched = QtFrameScheduler()
    fired = []
    h = sched.request_frame(fired.append)
    sched.cancel_frame(h)
    sched._fire(h)
    assert fired == []


def main():
    test_qt_surface_blend_modes()
    test_qt_scheduler_cancel()
    print("OK: qt surface selftests passed")


if __name__ == "__main__":
    main()
