"""Utilitaires géométriques du plateau (fonctions pures, sans état).

Conventions:
- Repère monde: x vers la droite, y vers le bas (coordonnées écran).
- Cap (`rotation`) en degrés, 0° = nord (y décroissant), sens horaire.
- Repère local d'une unité: origine au coin avant-gauche, `lx` le long de
  l'axe latéral (vers le flanc droit), `ly` vers l'arrière.

Les coins de l'empreinte se déduisent toujours de (position, cap, empreinte)
par une seule rotation autour de la position.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

import numpy as np

from tactical.engine.rules import UNIT_HEIGHT, UNIT_WIDTH

Point = Tuple[float, float]

FRONT_LEFT = "front_left"
FRONT_RIGHT = "front_right"
BACK_LEFT = "back_left"
BACK_RIGHT = "back_right"

CORNERS: Tuple[str, ...] = (FRONT_LEFT, FRONT_RIGHT, BACK_RIGHT, BACK_LEFT)


@dataclass(frozen=True)
class Footprint:
    """Dimensions d'une unité (largeur = front, hauteur = profondeur)."""

    width: float = UNIT_WIDTH
    height: float = UNIT_HEIGHT

    def corner_offsets(self) -> Dict[str, Point]:
        """Local coordinates of the four corners."""
        return {
            FRONT_LEFT: (0.0, 0.0),
            FRONT_RIGHT: (self.width, 0.0),
            BACK_RIGHT: (self.width, self.height),
            BACK_LEFT: (0.0, self.height),
        }


def angle_from_pivot(pivot: Point, point: Point) -> float:
    """Angle in degrees of `point` seen from `pivot`.

    0° points north (decreasing y) and angles grow clockwise.
    Range is (-180, 180].
    """
    dx = point[0] - pivot[0]
    dy = point[1] - pivot[1]
    return math.degrees(math.atan2(dx, -dy))


def normalize_delta(raw: float) -> float:
    """Ramène une différence d'angle dans l'intervalle [-180, 180)."""
    return ((raw + 540.0) % 360.0) - 180.0


def forward_vector(rotation: float) -> Point:
    """Unit vector toward the front edge for the given heading."""
    rad = math.radians(rotation)
    return (math.sin(rad), -math.cos(rad))


def lateral_vector(rotation: float) -> Point:
    """Unit vector toward the right flank for the given heading."""
    rad = math.radians(rotation)
    return (math.cos(rad), math.sin(rad))


def back_vector(rotation: float) -> Point:
    """Unit vector toward the rear edge (opposite of `forward_vector`)."""
    rad = math.radians(rotation)
    return (-math.sin(rad), math.cos(rad))


def dot(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1]


def local_to_world(position: Point, rotation: float, local: Point) -> Point:
    """Convert unit-local coordinates to world coordinates.

    Args:
        position: World position of the front-left corner
        rotation: Heading in degrees
        local: (lx, ly) in the unit frame

    Returns:
        (x, y) world coordinates
    """
    sx, sy = lateral_vector(rotation)
    bx, by = back_vector(rotation)
    lx, ly = local
    return (position[0] + lx * sx + ly * bx, position[1] + lx * sy + ly * by)


def world_to_local(position: Point, rotation: float, world: Point) -> Point:
    """Inverse of `local_to_world`."""
    offset = (world[0] - position[0], world[1] - position[1])
    return (dot(offset, lateral_vector(rotation)), dot(offset, back_vector(rotation)))


def corner_position(position: Point, rotation: float, footprint: Footprint, corner: str) -> Point:
    """World position of a named footprint corner."""
    return local_to_world(position, rotation, footprint.corner_offsets()[corner])


def anchor_for_corner(corner_world: Point, rotation: float, footprint: Footprint, corner: str) -> Point:
    """Front-left anchor that puts `corner` exactly at `corner_world`.

    Args:
        corner_world: Target world position of the corner
        rotation: Heading of the unit once placed
        footprint: Unit dimensions
        corner: Corner name (FRONT_LEFT, FRONT_RIGHT, BACK_LEFT, BACK_RIGHT)

    Returns:
        World position of the front-left corner
    """
    offset = local_to_world((0.0, 0.0), rotation, footprint.corner_offsets()[corner])
    return (corner_world[0] - offset[0], corner_world[1] - offset[1])


def local_points_to_world(position: Point, rotation: float, points: Iterable[Point]) -> np.ndarray:
    """Vectorised `local_to_world` for a polygon (returns an (n, 2) array)."""
    rad = math.radians(rotation)
    cos_r, sin_r = math.cos(rad), math.sin(rad)
    # Colonnes: axe latéral puis axe arrière
    basis = np.array([[cos_r, sin_r], [-sin_r, cos_r]])
    local = np.asarray(list(points), dtype=float).reshape(-1, 2)
    return local @ basis + np.asarray(position, dtype=float)


def footprint_polygon(position: Point, rotation: float, footprint: Footprint) -> np.ndarray:
    """World corners of the footprint, clockwise from the front-left corner."""
    offsets = footprint.corner_offsets()
    return local_points_to_world(position, rotation, (offsets[name] for name in CORNERS))


__all__ = [
    "Point",
    "Footprint",
    "FRONT_LEFT",
    "FRONT_RIGHT",
    "BACK_LEFT",
    "BACK_RIGHT",
    "CORNERS",
    "angle_from_pivot",
    "normalize_delta",
    "forward_vector",
    "lateral_vector",
    "back_vector",
    "dot",
    "local_to_world",
    "world_to_local",
    "corner_position",
    "anchor_for_corner",
    "local_points_to_world",
    "footprint_polygon",
]
