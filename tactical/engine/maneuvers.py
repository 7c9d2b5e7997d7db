"""Manoeuvres instantanées: quart de tour gauche/droite, demi-tour.

Chaque manoeuvre conserve exactement un coin de l'empreinte: le coin
`old_corner` de l'unité avant la manoeuvre devient la position monde du
coin `new_corner` après la manoeuvre. Le calcul est en forme close, en une
seule étape, sans état intermédiaire.

| manoeuvre      | cap     | coin conservé (avant -> après)   |
|----------------|---------|----------------------------------|
| quart gauche   | -90°    | avant-gauche -> avant-droit      |
| quart droite   | +90°    | avant-droit  -> avant-gauche     |
| demi-tour      | +180°   | arrière-droit -> avant-gauche    |
"""

from __future__ import annotations

from enum import Enum

from tactical.engine.geometry import (
    BACK_RIGHT,
    FRONT_LEFT,
    FRONT_RIGHT,
    Footprint,
    anchor_for_corner,
    corner_position,
)
from tactical.engine.units import Unit


class Maneuver(str, Enum):
    QUARTER_LEFT = "quarter_left"
    QUARTER_RIGHT = "quarter_right"
    HALF_TURN = "half_turn"


def reposition_about_corner(
    unit: Unit,
    footprint: Footprint,
    old_corner: str,
    new_corner: str,
    rotation_delta: float,
) -> Unit:
    """Turn the unit by `rotation_delta` keeping one footprint corner in place.

    Args:
        unit: Unit before the maneuver
        footprint: Unit dimensions
        old_corner: Corner whose world position is preserved
        new_corner: Corner of the turned unit placed on that position
        rotation_delta: Heading change in degrees

    Returns:
        The repositioned unit (heading is not normalized)
    """
    fixed_point = corner_position(unit.position, unit.rotation, footprint, old_corner)
    rotation = unit.rotation + rotation_delta
    return unit.moved_to(anchor_for_corner(fixed_point, rotation, footprint, new_corner), rotation)


def quarter_left(unit: Unit, footprint: Footprint) -> Unit:
    """Quart de tour à gauche autour du coin avant-gauche courant."""
    return reposition_about_corner(unit, footprint, FRONT_LEFT, FRONT_RIGHT, -90.0)


def quarter_right(unit: Unit, footprint: Footprint) -> Unit:
    """Quart de tour à droite: l'ancien coin avant-droit devient l'ancre."""
    return reposition_about_corner(unit, footprint, FRONT_RIGHT, FRONT_LEFT, 90.0)


def half_turn(unit: Unit, footprint: Footprint) -> Unit:
    """Demi-tour: l'ancien coin arrière-droit devient l'ancre."""
    return reposition_about_corner(unit, footprint, BACK_RIGHT, FRONT_LEFT, 180.0)


_MANEUVERS = {
    Maneuver.QUARTER_LEFT: quarter_left,
    Maneuver.QUARTER_RIGHT: quarter_right,
    Maneuver.HALF_TURN: half_turn,
}


def apply_maneuver(maneuver: Maneuver, unit: Unit, footprint: Footprint) -> Unit:
    return _MANEUVERS[Maneuver(maneuver)](unit, footprint)


__all__ = [
    "Maneuver",
    "reposition_about_corner",
    "quarter_left",
    "quarter_right",
    "half_turn",
    "apply_maneuver",
]
