"""Poignées de contrôle d'une unité et détection de clics.

Les poignées sont définies dans le repère local de l'unité (origine au coin
avant-gauche, `lx` vers le flanc droit, `ly` vers l'arrière) puis projetées
dans le monde avec le cap de l'unité. Elles ne sont visibles et cliquables
que sur l'unité sélectionnée.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from tactical.app.board_service import BACKGROUND, PointerTarget, TargetKind
from tactical.engine.camera import Camera
from tactical.engine.geometry import Footprint, Point, local_points_to_world, world_to_local
from tactical.engine.units import Unit

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Handle:
    """Rectangle local (x, y, largeur, hauteur) associé à une cible."""

    kind: TargetKind
    x: float
    y: float
    width: float
    height: float
    color: Color
    active_color: Color

    def contains(self, local: Point) -> bool:
        lx, ly = local
        return self.x <= lx <= self.x + self.width and self.y <= ly <= self.y + self.height

    def local_corners(self) -> Tuple[Point, ...]:
        return (
            (self.x, self.y),
            (self.x + self.width, self.y),
            (self.x + self.width, self.y + self.height),
            (self.x, self.y + self.height),
        )

    def world_polygon(self, unit: Unit) -> np.ndarray:
        return local_points_to_world(unit.position, unit.rotation, self.local_corners())


COLOR_ROTATE = (201, 162, 39)
COLOR_ROTATE_ACTIVE = (255, 213, 79)
COLOR_ADVANCE = (77, 208, 225)
COLOR_ADVANCE_ACTIVE = (128, 203, 196)
COLOR_MANEUVER = (255, 171, 145)
COLOR_HALF_TURN = (206, 147, 216)
COLOR_SLIDE = (144, 202, 249)
COLOR_SLIDE_ACTIVE = (255, 235, 59)


def handles_for(footprint: Footprint) -> Tuple[Handle, ...]:
    """Poignées dans l'ordre de dessin (la dernière est au-dessus)."""
    w, h = footprint.width, footprint.height
    return (
        Handle(TargetKind.ROTATE_RIGHT, w - 10, -10, 16, 16, COLOR_ROTATE, COLOR_ROTATE_ACTIVE),
        Handle(TargetKind.ROTATE_LEFT, -6, -10, 16, 16, COLOR_ROTATE, COLOR_ROTATE_ACTIVE),
        Handle(TargetKind.ADVANCE, w / 2 - 6, -18, 12, 18, COLOR_ADVANCE, COLOR_ADVANCE_ACTIVE),
        Handle(TargetKind.QUARTER_LEFT, -18, h / 2 - 9, 14, 18, COLOR_MANEUVER, COLOR_MANEUVER),
        Handle(TargetKind.QUARTER_RIGHT, w + 4, h / 2 - 9, 14, 18, COLOR_MANEUVER, COLOR_MANEUVER),
        Handle(TargetKind.HALF_TURN, w / 2 - 6, h + 4, 12, 18, COLOR_HALF_TURN, COLOR_HALF_TURN),
        Handle(TargetKind.SLIDE, w / 2 - 6, h / 2 - 6, 12, 12, COLOR_SLIDE, COLOR_SLIDE_ACTIVE),
    )


def hit_test(
    units: Iterable[Unit],
    camera: Camera,
    footprint: Footprint,
    screen_pos: Point,
) -> PointerTarget:
    """Find the element under a screen position.

    The handles of the selected unit are tested first, whatever its place in
    the drawing order, since they are drawn above every unit body. Bodies are
    then scanned top-most first (reverse drawing order).

    Args:
        units: Units in drawing order
        camera: Current view transform
        footprint: Shared unit dimensions
        screen_pos: Pointer position in screen pixels

    Returns:
        The target under the pointer, BACKGROUND if nothing was hit
    """
    world = camera.screen_to_world(screen_pos)
    units = tuple(units)

    selected = next((unit for unit in units if unit.selected), None)
    if selected is not None:
        local = world_to_local(selected.position, selected.rotation, world)
        for handle in reversed(handles_for(footprint)):
            if handle.contains(local):
                return PointerTarget(handle.kind, selected.id)

    for unit in reversed(units):
        lx, ly = world_to_local(unit.position, unit.rotation, world)
        if 0.0 <= lx <= footprint.width and 0.0 <= ly <= footprint.height:
            return PointerTarget(TargetKind.UNIT, unit.id)

    return BACKGROUND


__all__ = ["Handle", "handles_for", "hit_test"]
