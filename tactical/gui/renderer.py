"""BoardRenderer: rendu pygame du plateau tactique.

Responsabilités:
- Dessiner la carte (fond + quadrillage) à travers la caméra
- Dessiner les unités (empreinte tournée, repère de front, nom)
- Dessiner les poignées de l'unité sélectionnée, en surbrillance pour
  le geste en cours

Aucun calcul de manoeuvre ici: tout vient de `tactical.engine`.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pygame

from tactical.app.board_service import TargetKind
from tactical.engine.camera import Camera
from tactical.engine.geometry import Footprint, footprint_polygon, local_points_to_world
from tactical.engine.gestures import (
    PIVOT_LEFT,
    AdvancingGesture,
    Gesture,
    RotatingGesture,
    SlidingGesture,
)
from tactical.engine.rules import MAP_HEIGHT, MAP_WIDTH
from tactical.engine.units import Unit, UnitId
from tactical.gui.affordances import handles_for

# Constantes écran
SCREEN_WIDTH = 1100
SCREEN_HEIGHT = 750

# Couleurs
COLOR_BG = (20, 24, 28)
COLOR_MAP = (30, 51, 32)
COLOR_GRID = (42, 66, 44)
COLOR_UNIT = (61, 92, 58)
COLOR_UNIT_BORDER = (201, 162, 39)
COLOR_UNIT_SELECTED = (255, 235, 59)
COLOR_FRONT_MARKER = (201, 162, 39)
COLOR_HANDLE_BORDER = (0, 0, 0)
COLOR_LABEL = (230, 230, 230)

GRID_STEP = 100.0
FRONT_MARKER_SIZE = 8.0


def _screen_points(camera: Camera, world: np.ndarray) -> List[Tuple[float, float]]:
    return [camera.world_to_screen((float(x), float(y))) for x, y in world]


def active_handle_kind(gesture: Gesture) -> Optional[TargetKind]:
    """Poignée à mettre en surbrillance pour le geste courant."""
    if isinstance(gesture, RotatingGesture):
        return TargetKind.ROTATE_LEFT if gesture.pivot == PIVOT_LEFT else TargetKind.ROTATE_RIGHT
    if isinstance(gesture, AdvancingGesture):
        return TargetKind.ADVANCE
    if isinstance(gesture, SlidingGesture):
        return TargetKind.SLIDE
    return None


class BoardRenderer:
    """Rendu de la carte et des unités."""

    def __init__(self, screen: pygame.Surface, footprint: Footprint) -> None:
        """Initialize renderer with pygame surface and unit footprint.

        Args:
            screen: pygame surface to draw on
            footprint: shared unit dimensions
        """
        self.screen = screen
        self.footprint = footprint
        self._handles = handles_for(footprint)

        # Font for labels (lazy init on first render)
        self._font: Optional[pygame.font.Font] = None

    def _ensure_font(self) -> pygame.font.Font:
        """Lazy init font."""
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.SysFont("Arial", 14, bold=True)
        return self._font

    def render_map(self, camera: Camera) -> None:
        """Render the map background and grid."""
        x0, y0 = camera.world_to_screen((0.0, 0.0))
        x1, y1 = camera.world_to_screen((MAP_WIDTH, MAP_HEIGHT))
        pygame.draw.rect(self.screen, COLOR_MAP, pygame.Rect(x0, y0, x1 - x0, y1 - y0))

        for gx in np.arange(GRID_STEP, MAP_WIDTH, GRID_STEP):
            sx, _ = camera.world_to_screen((float(gx), 0.0))
            pygame.draw.line(self.screen, COLOR_GRID, (sx, y0), (sx, y1))
        for gy in np.arange(GRID_STEP, MAP_HEIGHT, GRID_STEP):
            _, sy = camera.world_to_screen((0.0, float(gy)))
            pygame.draw.line(self.screen, COLOR_GRID, (x0, sy), (x1, sy))

    def render_units(
        self,
        units: Iterable[Unit],
        camera: Camera,
        gesture: Gesture,
        drag_offsets: Optional[Dict[UnitId, Tuple[float, float]]] = None,
    ) -> None:
        """Render units in order, then the handles of the selected one on top.

        Args:
            units: Units in drawing order
            camera: Current view transform
            gesture: Live gesture (handle highlight)
            drag_offsets: World offsets of units being free-dragged (preview)
        """
        selected: Optional[Unit] = None
        for unit in units:
            offset = (drag_offsets or {}).get(unit.id)
            if offset is not None:
                unit = unit.moved_to((unit.x + offset[0], unit.y + offset[1]))
            self._render_unit(unit, camera)
            if unit.selected:
                selected = unit

        # Poignées au-dessus de tous les corps, comme pour la détection de clics
        if selected is not None:
            highlight = active_handle_kind(gesture) if gesture.unit_id == selected.id else None
            self._render_handles(selected, camera, highlight)

    def _render_unit(self, unit: Unit, camera: Camera) -> None:
        polygon = _screen_points(camera, footprint_polygon(unit.position, unit.rotation, self.footprint))
        pygame.draw.polygon(self.screen, COLOR_UNIT, polygon)
        border_color = COLOR_UNIT_SELECTED if unit.selected else COLOR_UNIT_BORDER
        pygame.draw.polygon(self.screen, border_color, polygon, width=3 if unit.selected else 2)

        # Repère de front: petit carré centré devant l'unité
        half = FRONT_MARKER_SIZE / 2
        mid = self.footprint.width / 2
        marker = local_points_to_world(
            unit.position,
            unit.rotation,
            ((mid - half, -FRONT_MARKER_SIZE), (mid + half, -FRONT_MARKER_SIZE), (mid + half, 0.0), (mid - half, 0.0)),
        )
        pygame.draw.polygon(self.screen, COLOR_FRONT_MARKER, _screen_points(camera, marker))

        if unit.name and camera.scale >= 0.6:
            centre = polygon_centre(polygon)
            font = self._ensure_font()
            text = font.render(str(unit.name), True, COLOR_LABEL)
            self.screen.blit(text, text.get_rect(center=centre))

    def _render_handles(self, unit: Unit, camera: Camera, highlight: Optional[TargetKind]) -> None:
        for handle in self._handles:
            polygon = _screen_points(camera, handle.world_polygon(unit))
            color = handle.active_color if handle.kind == highlight else handle.color
            pygame.draw.polygon(self.screen, color, polygon)
            pygame.draw.polygon(self.screen, COLOR_HANDLE_BORDER, polygon, width=1)


def polygon_centre(points: Sequence[Tuple[float, float]]) -> Tuple[int, int]:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (int(sum(xs) / len(xs)), int(sum(ys) / len(ys)))


__all__ = ["BoardRenderer", "active_handle_kind", "SCREEN_WIDTH", "SCREEN_HEIGHT", "COLOR_BG"]
