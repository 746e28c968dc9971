from __future__ import annotations
"""Drawing surfaces for the particle preview.

The preview only needs a handful of primitives, so the canvas is abstract:
- RasterSurface: in-memory RGB framebuffer (headless runs, hashing, tests)
- RecordingSurface: records draw calls (tests)
- qt.preview_widget.QtImageSurface: QPainter on a QImage (GUI)
"""

from typing import List, Protocol, Tuple

RGB = Tuple[int, int, int]

BLEND_NORMAL = "normal"
BLEND_ADD = "add"
BLEND_MODES = (BLEND_NORMAL, BLEND_ADD)


class DrawingSurface(Protocol):
    width: int
    height: int

    def clear(self, color: RGB) -> None: ...
    def line(self, x0: float, y0: float, x1: float, y1: float, color: RGB) -> None: ...
    def set_blend_mode(self, mode: str) -> None: ...
    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB, alpha: float = 1.0) -> None: ...


def _clamp_u8(x: int) -> int:
    if x < 0: return 0
    if x > 255: return 255
    return x


def _add_rgb(a: RGB, b: RGB) -> RGB:
    return (_clamp_u8(a[0] + b[0]), _clamp_u8(a[1] + b[1]), _clamp_u8(a[2] + b[2]))


def _mul_rgb(c: RGB, k: float) -> RGB:
    return (int(c[0]*k), int(c[1]*k), int(c[2]*k))


def _mix_rgb(dst: RGB, src: RGB, a: float) -> RGB:
    return _add_rgb(_mul_rgb(dst, 1.0 - a), _mul_rgb(src, a))


class RasterSurface:
    """Row-major RGB framebuffer. Rects are snapped to whole pixels."""

    def __init__(self, width: int = 320, height: int = 192):
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.pixels: List[RGB] = [(0, 0, 0)] * (self.width * self.height)
        self.blend_mode = BLEND_NORMAL

    def clear(self, color: RGB) -> None:
        self.pixels = [tuple(color)] * (self.width * self.height)

    def set_blend_mode(self, mode: str) -> None:
        self.blend_mode = mode if mode in BLEND_MODES else BLEND_NORMAL

    def _put(self, ix: int, iy: int, color: RGB, alpha: float) -> None:
        if ix < 0 or iy < 0 or ix >= self.width or iy >= self.height:
            return
        i = iy * self.width + ix
        if self.blend_mode == BLEND_ADD:
            self.pixels[i] = _add_rgb(self.pixels[i], _mul_rgb(color, alpha))
        else:
            self.pixels[i] = _mix_rgb(self.pixels[i], color, alpha)

    def line(self, x0: float, y0: float, x1: float, y1: float, color: RGB) -> None:
        # Axis-aligned lines are all the grid needs.
        ix0, iy0, ix1, iy1 = int(x0), int(y0), int(x1), int(y1)
        if ix0 == ix1:
            for y in range(max(0, min(iy0, iy1)), min(self.height, max(iy0, iy1) + 1)):
                self._put(ix0, y, color, 1.0)
        elif iy0 == iy1:
            for x in range(max(0, min(ix0, ix1)), min(self.width, max(ix0, ix1) + 1)):
                self._put(x, iy0, color, 1.0)
        else:
            n = max(abs(ix1 - ix0), abs(iy1 - iy0))
            for k in range(n + 1):
                t = k / n
                self._put(int(x0 + (x1 - x0) * t), int(y0 + (y1 - y0) * t), color, 1.0)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB, alpha: float = 1.0) -> None:
        a = max(0.0, min(1.0, float(alpha)))
        if a <= 0.0:
            return
        x0, y0 = int(x), int(y)
        x1, y1 = int(x + max(1.0, w)), int(y + max(1.0, h))
        for iy in range(max(0, y0), min(self.height, y1)):
            for ix in range(max(0, x0), min(self.width, x1)):
                self._put(ix, iy, color, a)

    def get(self, x: int, y: int) -> RGB:
        return self.pixels[int(y) * self.width + int(x)]

    def to_bytes(self) -> bytes:
        out = bytearray()
        for r, g, b in self.pixels:
            out.append(int(r) & 0xFF)
            out.append(int(g) & 0xFF)
            out.append(int(b) & 0xFF)
        return bytes(out)


class RecordingSurface:
    """Keeps every draw call as a tuple, e.g. ('fill_rect', x, y, w, h, color, alpha)."""

    def __init__(self, width: int = 320, height: int = 192):
        self.width = int(width)
        self.height = int(height)
        self.ops: List[tuple] = []
        self.blend_mode = BLEND_NORMAL

    def clear(self, color: RGB) -> None:
        self.ops = [("clear", tuple(color))]

    def line(self, x0: float, y0: float, x1: float, y1: float, color: RGB) -> None:
        self.ops.append(("line", x0, y0, x1, y1, tuple(color)))

    def set_blend_mode(self, mode: str) -> None:
        self.blend_mode = mode
        self.ops.append(("blend", mode))

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB, alpha: float = 1.0) -> None:
        self.ops.append(("fill_rect", x, y, w, h, tuple(color), alpha))

    def of_kind(self, kind: str) -> List[tuple]:
        return [op for op in self.ops if op[0] == kind]
