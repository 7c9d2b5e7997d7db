"""Évènements publiés par la couche interaction (`tactical.app`)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from tactical.engine.gestures import Gesture
from tactical.engine.maneuvers import Maneuver
from tactical.engine.units import Unit, UnitId

# Raisons d'une mutation validée
REASON_GESTURE = "gesture"
REASON_MANEUVER = "maneuver"
REASON_FREE_DRAG = "free_drag"


@dataclass(frozen=True)
class BoardInitializedEvent:
    """Émis lorsque le registre est (ré)initialisé."""

    units: Tuple[Unit, ...]


@dataclass(frozen=True)
class GestureStartedEvent:
    """Émis à l'appui sur une poignée de geste."""

    gesture: Gesture


@dataclass(frozen=True)
class ManeuverAppliedEvent:
    """Émis après une manoeuvre instantanée."""

    maneuver: Maneuver
    previous_unit: Unit
    new_unit: Unit


@dataclass(frozen=True)
class UnitsChangedEvent:
    """Émis après toute mutation validée (fin de geste, manoeuvre, glisser libre)."""

    units: Tuple[Unit, ...]
    reason: str
    unit_id: Optional[UnitId] = None
