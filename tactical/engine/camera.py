"""Caméra du plateau: décalage (pan) et facteur d'échelle.

Transformations:
- monde -> écran: ``screen = world * scale + pan``
- écran -> monde: ``world = (screen - pan) / scale``

Le zoom est centré sur le pointeur: le point monde situé sous le pointeur
avant le changement d'échelle y reste après.
"""

from __future__ import annotations

from dataclasses import dataclass

from tactical.engine.geometry import Point
from tactical.engine.rules import MAX_ZOOM, MIN_ZOOM, ZOOM_STEP


@dataclass
class Camera:
    """Etat mutable de la vue (échelle bornée, pan non borné)."""

    scale: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM
    zoom_step: float = ZOOM_STEP

    def __post_init__(self) -> None:
        self.scale = self.clamp_scale(self.scale)

    def clamp_scale(self, scale: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, scale))

    @property
    def pan(self) -> Point:
        return (self.pan_x, self.pan_y)

    def screen_to_world(self, pointer: Point) -> Point:
        """Convert a screen position to world coordinates (no side effect)."""
        return ((pointer[0] - self.pan_x) / self.scale, (pointer[1] - self.pan_y) / self.scale)

    def world_to_screen(self, point: Point) -> Point:
        """Convert a world position to screen coordinates (no side effect)."""
        return (point[0] * self.scale + self.pan_x, point[1] * self.scale + self.pan_y)

    def apply_zoom(self, pointer: Point, direction: int) -> None:
        """Zoom around the pointer.

        Args:
            pointer: Screen position kept fixed by the zoom
            direction: > 0 zooms out (scale / step), otherwise zooms in
        """
        world_x, world_y = self.screen_to_world(pointer)

        if direction > 0:
            new_scale = self.scale / self.zoom_step
        else:
            new_scale = self.scale * self.zoom_step
        new_scale = self.clamp_scale(new_scale)

        self.scale = new_scale
        self.pan_x = pointer[0] - world_x * new_scale
        self.pan_y = pointer[1] - world_y * new_scale

    def pan_by(self, dx: float, dy: float) -> None:
        """Décale la vue de (dx, dy) pixels écran (glisser du plateau)."""
        self.pan_x += dx
        self.pan_y += dy

    def reset(self) -> None:
        """Recentre le plateau: échelle 1, pan nul."""
        self.scale = self.clamp_scale(1.0)
        self.pan_x = 0.0
        self.pan_y = 0.0


__all__ = ["Camera"]
