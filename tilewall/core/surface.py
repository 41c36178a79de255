"""
Drawing surfaces.

The wall never rasterizes on its own; it calls the primitives below on
whatever surface the host hands in. Shapes are given in the current local
frame (after translate/rotate) and blended with the current alpha.
"""

import math
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Tuple

import numpy as np
from PIL import Image

from tilewall.config.wall_config import Color

logger = logging.getLogger("tilewall")

Transform = Tuple[float, float, float, float, float, float]

IDENTITY: Transform = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0)


def _compose(m: Transform, n: Transform) -> Transform:
    """Return m * n for 2x3 affine matrices stored row-major"""
    a, b, c, d, e, f = m
    g, h, i, j, k, l = n
    return (
        a * g + b * j,
        a * h + b * k,
        a * i + b * l + c,
        d * g + e * j,
        d * h + e * k,
        d * i + e * l + f,
    )


def apply_transform(m: Transform, x: float, y: float) -> Tuple[float, float]:
    a, b, c, d, e, f = m
    return (a * x + b * y + c, d * x + e * y + f)


class Surface:
    """Base class for drawing surfaces with a transform/alpha stack"""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.transform: Transform = IDENTITY
        self.alpha = 1.0
        self._stack: List[Tuple[Transform, float]] = []

    # State stack

    def push(self):
        self._stack.append((self.transform, self.alpha))

    def pop(self):
        if not self._stack:
            raise RuntimeError("pop() without matching push()")
        self.transform, self.alpha = self._stack.pop()

    @contextmanager
    def saved(self):
        """Scoped push/pop"""
        self.push()
        try:
            yield self
        finally:
            self.pop()

    def translate(self, dx: float, dy: float):
        self.transform = _compose(self.transform, (1.0, 0.0, dx, 0.0, 1.0, dy))

    def rotate(self, angle: float):
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        self.transform = _compose(self.transform, (cos_a, -sin_a, 0.0, sin_a, cos_a, 0.0))

    def set_alpha(self, alpha: float):
        self.alpha = max(0.0, min(1.0, alpha))

    def reset(self):
        """Drop any transform state left over from a previous frame"""
        self.transform = IDENTITY
        self.alpha = 1.0
        self._stack.clear()

    # Primitives

    def clear(self, color: Color):
        raise NotImplementedError

    def rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        color: Color,
        radius: float = 0.0,
        center: bool = True,
    ):
        raise NotImplementedError

    def circle(self, x: float, y: float, diameter: float, color: Color):
        raise NotImplementedError

    def line(
        self, x1: float, y1: float, x2: float, y2: float, color: Color, width: float = 1.0
    ):
        raise NotImplementedError

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height

    def capture(self, path: str):
        """Persist the current raster"""
        raise NotImplementedError


@dataclass
class DrawCommand:
    """A single primitive call as seen by a RecordingSurface"""

    op: str
    args: Dict[str, Any]
    color: Optional[Color] = None
    alpha: float = 1.0
    transform: Transform = IDENTITY


class RecordingSurface(Surface):
    """Surface that keeps a log of draw commands instead of pixels"""

    def __init__(self, width: int = 0, height: int = 0):
        super().__init__(width, height)
        self.commands: List[DrawCommand] = []
        self.captures: List[str] = []

    def _record(self, op: str, color: Optional[Color], **args):
        self.commands.append(
            DrawCommand(
                op=op,
                args=args,
                color=color,
                alpha=self.alpha,
                transform=self.transform,
            )
        )

    def clear(self, color: Color):
        self.commands.clear()
        self._record("clear", color)

    def rect(self, x, y, w, h, color, radius=0.0, center=True):
        self._record("rect", color, x=x, y=y, w=w, h=h, radius=radius, center=center)

    def circle(self, x, y, diameter, color):
        self._record("circle", color, x=x, y=y, diameter=diameter)

    def line(self, x1, y1, x2, y2, color, width=1.0):
        self._record("line", color, x1=x1, y1=y1, x2=x2, y2=y2, width=width)

    def capture(self, path: str):
        self.captures.append(path)

    def ops(self, op: Optional[str] = None) -> List[DrawCommand]:
        if op is None:
            return list(self.commands)
        return [c for c in self.commands if c.op == op]


class RasterSurface(Surface):
    """numpy RGB framebuffer with affine transforms and alpha blending.

    Coverage is binary (pixel centers inside the shape); blending is
    dst * (1 - a) + src * a with a = current alpha.
    """

    def __init__(self, width: int, height: int, background: Color = (0, 0, 0)):
        super().__init__(width, height)
        self.buffer = np.zeros((max(0, height), max(0, width), 3), dtype=np.float32)
        self.buffer[:, :] = background

    def resize(self, width: int, height: int):
        super().resize(width, height)
        self.buffer = np.zeros((max(0, height), max(0, width), 3), dtype=np.float32)

    def clear(self, color: Color):
        self.buffer[:, :] = color

    def to_array(self) -> np.ndarray:
        return np.clip(np.rint(self.buffer), 0, 255).astype(np.uint8)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.to_array())

    def capture(self, path: str):
        self.to_image().save(path)
        logger.info(f"Captured frame to {path}")

    # Rasterization helpers

    def _local_grid(
        self, x0: float, y0: float, x1: float, y1: float
    ) -> Optional[Tuple[slice, slice, np.ndarray, np.ndarray]]:
        """Map the device pixels covering a local box back into local coords"""
        corners = [
            apply_transform(self.transform, x, y)
            for x, y in ((x0, y0), (x1, y0), (x0, y1), (x1, y1))
        ]
        xs = [c[0] for c in corners]
        ys = [c[1] for c in corners]
        height, width = self.buffer.shape[:2]
        px0 = max(0, int(math.floor(min(xs))))
        py0 = max(0, int(math.floor(min(ys))))
        px1 = min(width, int(math.ceil(max(xs))) + 1)
        py1 = min(height, int(math.ceil(max(ys))) + 1)
        if px0 >= px1 or py0 >= py1:
            return None

        a, b, c, d, e, f = self.transform
        det = a * e - b * d
        if det == 0:
            return None
        gx, gy = np.meshgrid(
            np.arange(px0, px1, dtype=np.float32) + 0.5,
            np.arange(py0, py1, dtype=np.float32) + 0.5,
        )
        dx = gx - c
        dy = gy - f
        u = (e * dx - b * dy) / det
        v = (-d * dx + a * dy) / det
        return slice(py0, py1), slice(px0, px1), u, v

    def _blend(self, rows: slice, cols: slice, mask: np.ndarray, color: Color):
        if self.alpha <= 0.0 or not mask.any():
            return
        region = self.buffer[rows, cols]
        src = np.asarray(color[:3], dtype=np.float32)
        region[mask] = region[mask] * (1.0 - self.alpha) + src * self.alpha

    # Primitives

    def rect(self, x, y, w, h, color, radius=0.0, center=True):
        if center:
            cx, cy = x, y
        else:
            cx, cy = x + w / 2, y + h / 2
        hw, hh = abs(w) / 2, abs(h) / 2
        grid = self._local_grid(cx - hw, cy - hh, cx + hw, cy + hh)
        if grid is None:
            return
        rows, cols, u, v = grid
        r = max(0.0, min(radius, hw, hh))
        qx = np.abs(u - cx) - (hw - r)
        qy = np.abs(v - cy) - (hh - r)
        outside = np.hypot(np.maximum(qx, 0.0), np.maximum(qy, 0.0))
        inside = np.minimum(np.maximum(qx, qy), 0.0)
        self._blend(rows, cols, outside + inside - r <= 0.0, color)

    def circle(self, x, y, diameter, color):
        r = abs(diameter) / 2
        grid = self._local_grid(x - r, y - r, x + r, y + r)
        if grid is None:
            return
        rows, cols, u, v = grid
        self._blend(rows, cols, (u - x) ** 2 + (v - y) ** 2 <= r * r, color)

    def line(self, x1, y1, x2, y2, color, width=1.0):
        # Square caps: the stroke extends half its width past each end
        half = max(width, 1.0) / 2
        length = math.hypot(x2 - x1, y2 - y1)
        grid = self._local_grid(
            min(x1, x2) - half, min(y1, y2) - half, max(x1, x2) + half, max(y1, y2) + half
        )
        if grid is None:
            return
        rows, cols, u, v = grid
        if length == 0:
            mask = (np.abs(u - x1) <= half) & (np.abs(v - y1) <= half)
        else:
            ux = (x2 - x1) / length
            uy = (y2 - y1) / length
            along = (u - x1) * ux + (v - y1) * uy
            across = (u - x1) * uy - (v - y1) * ux
            mask = (along >= -half) & (along <= length + half) & (np.abs(across) <= half)
        self._blend(rows, cols, mask, color)
