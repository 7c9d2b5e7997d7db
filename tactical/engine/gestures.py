"""Gestes pilotés au pointeur: rotation, avance, glissement latéral.

Un geste est une valeur immuable capturée à l'appui sur une poignée. Chaque
déplacement du pointeur recalcule l'unité à partir de cet instantané figé,
jamais à partir de la trame précédente (pas de dérive cumulée).

Un seul geste est vivant à la fois: l'état courant est exactement une
instance de `Idle`, `RotatingGesture`, `AdvancingGesture` ou
`SlidingGesture`. Le glisser libre appartient à la surface de rendu.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tactical.engine.geometry import (
    FRONT_LEFT,
    FRONT_RIGHT,
    Footprint,
    Point,
    anchor_for_corner,
    angle_from_pivot,
    corner_position,
    dot,
    forward_vector,
    lateral_vector,
    normalize_delta,
)
from tactical.engine.rules import ROTATION_ARC
from tactical.engine.units import Unit, UnitId

PIVOT_LEFT = "left"
PIVOT_RIGHT = "right"


@dataclass(frozen=True)
class Gesture:
    """Geste de base."""

    @property
    def unit_id(self) -> Optional[UnitId]:
        return None

    @property
    def is_active(self) -> bool:
        return False

    def apply(self, unit: Unit, pointer: Point, footprint: Footprint) -> Unit:
        """Compute the unit for the current pointer world position."""
        return unit


@dataclass(frozen=True)
class Idle(Gesture):
    """Aucun geste en cours."""


IDLE = Idle()


@dataclass(frozen=True)
class _UnitGesture(Gesture):
    target_id: UnitId

    @property
    def unit_id(self) -> Optional[UnitId]:
        return self.target_id

    @property
    def is_active(self) -> bool:
        return True


@dataclass(frozen=True)
class RotatingGesture(_UnitGesture):
    """Rotation autour d'un coin avant, limitée à un quart de tour.

    Args:
        pivot: Poignée saisie ('left' ou 'right')
        pivot_x, pivot_y: Coin tenu fixe (coordonnées monde)
        start_angle: Angle pivot -> pointeur à l'appui
        start_rotation: Cap de l'unité à l'appui

    La poignée 'right' tient le coin avant-gauche (l'ancre) fixe: l'unité ne
    tourne que dans le sens anti-horaire. La poignée 'left' tient le coin
    avant-droit fixe: l'unité ne tourne que dans le sens horaire, et l'ancre
    est recalculée à chaque trame.
    """

    pivot: str
    pivot_x: float
    pivot_y: float
    start_angle: float
    start_rotation: float

    def clamp_delta(self, delta: float) -> float:
        if self.pivot == PIVOT_RIGHT:
            return max(-ROTATION_ARC, min(0.0, delta))
        return max(0.0, min(ROTATION_ARC, delta))

    def apply(self, unit: Unit, pointer: Point, footprint: Footprint) -> Unit:
        pivot = (self.pivot_x, self.pivot_y)
        delta = normalize_delta(angle_from_pivot(pivot, pointer) - self.start_angle)
        rotation = self.start_rotation + self.clamp_delta(delta)

        if self.pivot == PIVOT_LEFT:
            return unit.moved_to(anchor_for_corner(pivot, rotation, footprint, FRONT_RIGHT), rotation)
        return unit.moved_to(unit.position, rotation)


@dataclass(frozen=True)
class _LinearGesture(_UnitGesture):
    start_pointer: Point
    start_position: Point
    rotation_at_start: float

    def travel(self, pointer: Point, axis: Point) -> float:
        """Projection of the pointer displacement on `axis`."""
        offset = (pointer[0] - self.start_pointer[0], pointer[1] - self.start_pointer[1])
        return dot(offset, axis)

    def _moved(self, unit: Unit, axis: Point, distance: float) -> Unit:
        x0, y0 = self.start_position
        return unit.moved_to((x0 + axis[0] * distance, y0 + axis[1] * distance))


@dataclass(frozen=True)
class AdvancingGesture(_LinearGesture):
    """Avance le long du cap figé; jamais de recul."""

    def apply(self, unit: Unit, pointer: Point, footprint: Footprint) -> Unit:
        axis = forward_vector(self.rotation_at_start)
        return self._moved(unit, axis, max(0.0, self.travel(pointer, axis)))


@dataclass(frozen=True)
class SlidingGesture(_LinearGesture):
    """Glissement latéral borné à une largeur d'unité de chaque côté."""

    def apply(self, unit: Unit, pointer: Point, footprint: Footprint) -> Unit:
        axis = lateral_vector(self.rotation_at_start)
        limit = footprint.width
        return self._moved(unit, axis, max(-limit, min(limit, self.travel(pointer, axis))))


def begin_rotating(unit: Unit, pivot: str, pointer: Point, footprint: Footprint) -> RotatingGesture:
    """Capture a rotation gesture from the unit's current state.

    Args:
        unit: Unit under the pressed handle
        pivot: Pressed handle, 'left' or 'right'
        pointer: Pointer world position at press time
        footprint: Unit dimensions

    Returns:
        Frozen rotation gesture
    """
    if pivot == PIVOT_RIGHT:
        pivot_point = corner_position(unit.position, unit.rotation, footprint, FRONT_LEFT)
    elif pivot == PIVOT_LEFT:
        pivot_point = corner_position(unit.position, unit.rotation, footprint, FRONT_RIGHT)
    else:
        raise ValueError(f"Pivot inconnu: {pivot!r}")

    return RotatingGesture(
        target_id=unit.id,
        pivot=pivot,
        pivot_x=pivot_point[0],
        pivot_y=pivot_point[1],
        start_angle=angle_from_pivot(pivot_point, pointer),
        start_rotation=unit.rotation,
    )


def begin_advancing(unit: Unit, pointer: Point) -> AdvancingGesture:
    """Capture an advance gesture from the unit's current state."""
    return AdvancingGesture(
        target_id=unit.id,
        start_pointer=pointer,
        start_position=unit.position,
        rotation_at_start=unit.rotation,
    )


def begin_sliding(unit: Unit, pointer: Point) -> SlidingGesture:
    """Capture a lateral slide gesture from the unit's current state."""
    return SlidingGesture(
        target_id=unit.id,
        start_pointer=pointer,
        start_position=unit.position,
        rotation_at_start=unit.rotation,
    )


__all__ = [
    "PIVOT_LEFT",
    "PIVOT_RIGHT",
    "Gesture",
    "Idle",
    "IDLE",
    "RotatingGesture",
    "AdvancingGesture",
    "SlidingGesture",
    "begin_rotating",
    "begin_advancing",
    "begin_sliding",
]
