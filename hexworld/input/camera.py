"""Camera — maps window pixels to world coordinates and back.

The camera looks at ``position`` (a world point drawn at the centre of
the viewport) with a uniform ``zoom`` factor.  The window layer pans
and zooms it from held keys; the session only asks it to project
pointer positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class ViewProvider(Protocol):
    """Anything that can project a screen position into the world."""

    def screen_to_world(self, screen_pos: tuple[float, float]) -> tuple[float, float]: ...


@dataclass
class Camera:
    """A 2D pan/zoom camera.

    Attributes:
        viewport_width: Window width in pixels.
        viewport_height: Window height in pixels.
        position: World point shown at the viewport centre.
        zoom: Screen pixels per world unit.
        min_zoom: Lower zoom clamp.
        max_zoom: Upper zoom clamp.
    """

    viewport_width: int
    viewport_height: int
    position: tuple[float, float] = (0.0, 0.0)
    zoom: float = 1.0
    min_zoom: float = 0.25
    max_zoom: float = 4.0

    def __post_init__(self) -> None:
        """Validate zoom limits and clamp the starting zoom."""
        if not 0 < self.min_zoom <= self.max_zoom:
            msg = f"invalid zoom range [{self.min_zoom}, {self.max_zoom}]"
            raise ValueError(msg)
        self.zoom = min(self.max_zoom, max(self.min_zoom, self.zoom))

    def screen_to_world(self, screen_pos: tuple[float, float]) -> tuple[float, float]:
        """Project a window pixel into world space."""
        sx, sy = screen_pos
        px, py = self.position
        return (
            (sx - self.viewport_width / 2) / self.zoom + px,
            (sy - self.viewport_height / 2) / self.zoom + py,
        )

    def world_to_screen(self, world_pos: tuple[float, float]) -> tuple[float, float]:
        """Project a world point into window pixels."""
        wx, wy = world_pos
        px, py = self.position
        return (
            (wx - px) * self.zoom + self.viewport_width / 2,
            (wy - py) * self.zoom + self.viewport_height / 2,
        )

    def pan(self, dx: float, dy: float) -> None:
        """Move the view by ``(dx, dy)`` screen pixels."""
        px, py = self.position
        self.position = (px + dx / self.zoom, py + dy / self.zoom)

    def zoom_by(self, factor: float) -> None:
        """Multiply the zoom by ``factor``, keeping it inside the limits."""
        if factor <= 0:
            msg = f"zoom factor must be positive, got {factor}"
            raise ValueError(msg)
        self.zoom = min(self.max_zoom, max(self.min_zoom, self.zoom * factor))

    def look_at(self, world_pos: tuple[float, float]) -> None:
        """Centre the view on ``world_pos``."""
        self.position = (float(world_pos[0]), float(world_pos[1]))
