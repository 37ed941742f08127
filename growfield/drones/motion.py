"""Motion — continuous movement shared by every drone kind.

Positions live in pixel space; cell ``(cx, cy)`` has its centre at
``((cx + 0.5) * tile_size, (cy + 0.5) * tile_size)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Squared pixel distance under which a drone counts as "at" a centre
_ARRIVAL_EPSILON_SQ = 1.0


@dataclass
class Motion:
    """Pixel-space position plus constant-speed steering.

    Attributes:
        tile_size: Pixel size of one grid cell.
        speed: Travel speed in tiles per second.
        x: Horizontal pixel position.
        y: Vertical pixel position.
    """

    tile_size: int
    speed: float
    x: float = 0.0
    y: float = 0.0

    @property
    def pixels_per_second(self) -> float:
        return self.speed * self.tile_size

    def centre_of(self, cx: int, cy: int) -> tuple[float, float]:
        """Return the pixel centre of cell ``(cx, cy)``."""
        half = self.tile_size / 2.0
        return cx * self.tile_size + half, cy * self.tile_size + half

    def cell(self) -> tuple[int, int]:
        """Return the grid coordinates of the cell under this position."""
        return int(self.x // self.tile_size), int(self.y // self.tile_size)

    def place_at(self, cx: int, cy: int) -> None:
        """Snap to the centre of cell ``(cx, cy)``."""
        self.x, self.y = self.centre_of(cx, cy)

    def at_centre_of(self, cx: int, cy: int) -> bool:
        tx, ty = self.centre_of(cx, cy)
        dx, dy = tx - self.x, ty - self.y
        return dx * dx + dy * dy < _ARRIVAL_EPSILON_SQ

    def move_toward(self, cx: int, cy: int, dt: float) -> None:
        """Travel toward the centre of ``(cx, cy)`` for ``dt`` seconds.

        Never overshoots: when the remaining distance fits within this
        tick's travel the position snaps exactly onto the centre.
        """
        tx, ty = self.centre_of(cx, cy)
        dx, dy = tx - self.x, ty - self.y
        dist = math.hypot(dx, dy)
        if dist < 1e-6:
            return
        step = self.pixels_per_second * dt
        if step >= dist:
            self.x, self.y = tx, ty
        else:
            self.x += dx / dist * step
            self.y += dy / dist * step
