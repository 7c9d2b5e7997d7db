"""Service d'interaction du plateau tactique.

`BoardService` possède le registre d'unités, la caméra et le geste courant.
Il reçoit les entrées pointeur/molette déjà extraites par la surface de
rendu et publie un `UnitsChangedEvent` après chaque mutation validée (fin
de geste, manoeuvre, fin de glisser libre).

Tous les gestionnaires sont synchrones et totaux: un identifiant inconnu,
un pointeur indisponible ou une échelle hors bornes n'ont aucun effet
visible et ne lèvent pas d'exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from tactical.app.event_bus import EventBus
from tactical.app.events import (
    REASON_FREE_DRAG,
    REASON_GESTURE,
    REASON_MANEUVER,
    BoardInitializedEvent,
    GestureStartedEvent,
    ManeuverAppliedEvent,
    UnitsChangedEvent,
)
from tactical.app.records import UnitRecord, unit_from_record, unit_to_record
from tactical.engine.camera import Camera
from tactical.engine.geometry import Footprint, Point
from tactical.engine.gestures import (
    IDLE,
    PIVOT_LEFT,
    PIVOT_RIGHT,
    Gesture,
    begin_advancing,
    begin_rotating,
    begin_sliding,
)
from tactical.engine.maneuvers import Maneuver, apply_maneuver
from tactical.engine.units import Unit, UnitId, UnitRegistry

logger = logging.getLogger(__name__)


class TargetKind(str, Enum):
    """Élément de la surface sous le pointeur lors d'un appui."""

    BACKGROUND = "background"
    UNIT = "unit"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    ADVANCE = "advance"
    SLIDE = "slide"
    QUARTER_LEFT = "quarter_left"
    QUARTER_RIGHT = "quarter_right"
    HALF_TURN = "half_turn"


_TARGET_MANEUVERS = {
    TargetKind.QUARTER_LEFT: Maneuver.QUARTER_LEFT,
    TargetKind.QUARTER_RIGHT: Maneuver.QUARTER_RIGHT,
    TargetKind.HALF_TURN: Maneuver.HALF_TURN,
}


@dataclass(frozen=True)
class PointerTarget:
    """Cible d'un appui (type d'élément et unité concernée le cas échéant)."""

    kind: TargetKind
    unit_id: Optional[UnitId] = None


BACKGROUND = PointerTarget(TargetKind.BACKGROUND)

UnitsListener = Callable[[List[UnitRecord]], None]


class BoardService:
    """Orchestre registre, caméra et geste courant.

    Exactement un geste est vivant à la fois (`IDLE` au repos). Un nouvel
    appui sur une poignée remplace le geste en cours sans fusionner d'état.
    """

    def __init__(
        self,
        *,
        footprint: Optional[Footprint] = None,
        camera: Optional[Camera] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.footprint = footprint or Footprint()
        self.camera = camera or Camera()
        self._event_bus = event_bus or EventBus()
        self._registry = UnitRegistry()
        self._gesture: Gesture = IDLE

    # ------------------------------------------------------------------
    # Accès
    # ------------------------------------------------------------------

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def units(self) -> tuple[Unit, ...]:
        return self._registry.units

    @property
    def registry(self) -> UnitRegistry:
        return self._registry

    @property
    def gesture(self) -> Gesture:
        return self._gesture

    @property
    def is_gesture_active(self) -> bool:
        return self._gesture.is_active

    @property
    def active_unit_id(self) -> Optional[UnitId]:
        return self._gesture.unit_id

    def unit(self, unit_id: UnitId) -> Optional[Unit]:
        return self._registry.get(unit_id)

    def records(self) -> List[UnitRecord]:
        """Liste complète des unités sous forme d'enregistrements."""
        return [unit_to_record(unit) for unit in self._registry]

    # ------------------------------------------------------------------
    # Initialisation & notifications
    # ------------------------------------------------------------------

    def initialize(self, units: Iterable[Union[Unit, Mapping[str, Any]]]) -> tuple[Unit, ...]:
        """Seed the registry from unit records (or `Unit` instances).

        An empty input leaves the board empty: defaults are the caller's job.
        """
        seeded = [unit if isinstance(unit, Unit) else unit_from_record(unit) for unit in units]
        self._registry.replace_all(seeded)
        self._gesture = IDLE
        logger.info("Plateau initialisé avec %d unité(s)", len(seeded))
        self._event_bus.publish(BoardInitializedEvent(units=self._registry.units))
        return self._registry.units

    def on_units_changed(self, callback: UnitsListener) -> Callable[[], None]:
        """Register `callback`, called with the full record list after each commit.

        Returns:
            Unsubscribe function
        """

        def _forward(event: UnitsChangedEvent) -> None:
            callback([unit_to_record(unit) for unit in event.units])

        return self._event_bus.subscribe(_forward, UnitsChangedEvent)

    def _commit(self, reason: str, unit_id: Optional[UnitId]) -> None:
        delivered = self._event_bus.publish(
            UnitsChangedEvent(units=self._registry.units, reason=reason, unit_id=unit_id)
        )
        logger.debug("Modification (%s) notifiée à %d abonné(s)", reason, delivered)

    # ------------------------------------------------------------------
    # Entrées pointeur / molette
    # ------------------------------------------------------------------

    def on_wheel(self, screen_pointer: Optional[Point], delta_y: float) -> None:
        """Zoom centred on the pointer; `delta_y > 0` zooms out."""
        if screen_pointer is None:
            return
        self.camera.apply_zoom(screen_pointer, 1 if delta_y > 0 else -1)

    def on_pointer_move(self, screen_pointer: Optional[Point]) -> None:
        """Update the live gesture from the snapshot captured at press time."""
        if screen_pointer is None or not self._gesture.is_active:
            return

        gesture = self._gesture
        pointer = self.camera.screen_to_world(screen_pointer)
        self._registry.replace_unit(
            gesture.unit_id,
            lambda unit: gesture.apply(unit, pointer, self.footprint),
        )

    def on_pointer_down(self, target: PointerTarget, screen_pointer: Optional[Point]) -> None:
        """Dispatch a press on `target`.

        - background: deselect all units
        - unit body: select only that unit
        - gesture handle: begin rotating / advancing / sliding
        - maneuver tab: apply the maneuver immediately
        """
        if screen_pointer is None:
            return

        if target.kind == TargetKind.BACKGROUND:
            self._registry.select_only(None)
            return

        unit = self._registry.get(target.unit_id)
        if unit is None:
            logger.debug("Appui ignoré: unité inconnue %r", target.unit_id)
            return

        if target.kind == TargetKind.UNIT:
            self._registry.select_only(unit.id)
        elif target.kind in _TARGET_MANEUVERS:
            self.apply_maneuver(unit.id, _TARGET_MANEUVERS[target.kind])
        else:
            self._begin_gesture(unit, target.kind, self.camera.screen_to_world(screen_pointer))

    def _begin_gesture(self, unit: Unit, kind: TargetKind, pointer: Point) -> None:
        if kind == TargetKind.ROTATE_LEFT:
            gesture: Gesture = begin_rotating(unit, PIVOT_LEFT, pointer, self.footprint)
        elif kind == TargetKind.ROTATE_RIGHT:
            gesture = begin_rotating(unit, PIVOT_RIGHT, pointer, self.footprint)
        elif kind == TargetKind.ADVANCE:
            gesture = begin_advancing(unit, pointer)
        elif kind == TargetKind.SLIDE:
            gesture = begin_sliding(unit, pointer)
        else:
            raise ValueError(f"Cible sans geste associé: {kind!r}")

        if self._gesture.is_active:
            logger.debug("Geste %r remplacé par %r", self._gesture, gesture)
        self._gesture = gesture
        logger.debug("Début de geste %s sur l'unité %r", type(gesture).__name__, unit.id)
        self._event_bus.publish(GestureStartedEvent(gesture=gesture))

    def on_pointer_up(self) -> None:
        """End the live gesture (no snapping) and notify listeners if one was live."""
        gesture = self._gesture
        self._gesture = IDLE
        if not gesture.is_active:
            return
        logger.debug("Fin de geste %s sur l'unité %r", type(gesture).__name__, gesture.unit_id)
        self._commit(REASON_GESTURE, gesture.unit_id)

    def on_pointer_leave(self) -> None:
        """Le pointeur quitte la surface: même effet qu'un relâchement."""
        self.on_pointer_up()

    def on_pointer_cancel(self) -> None:
        self.on_pointer_up()

    # ------------------------------------------------------------------
    # Manoeuvres, glisser libre, vue
    # ------------------------------------------------------------------

    def apply_maneuver(self, unit_id: UnitId, maneuver: Maneuver) -> bool:
        """Apply a one-shot maneuver and notify listeners.

        Returns:
            True if the unit was repositioned, False if the unit is unknown
            or currently owned by the live gesture
        """
        if self._gesture.is_active and self._gesture.unit_id == unit_id:
            logger.debug("Manoeuvre %s ignorée: geste en cours sur %r", maneuver, unit_id)
            return False

        previous = self._registry.get(unit_id)
        if previous is None:
            logger.debug("Manoeuvre %s ignorée: unité inconnue %r", maneuver, unit_id)
            return False

        self._registry.replace_unit(unit_id, lambda unit: apply_maneuver(maneuver, unit, self.footprint))
        updated = self._registry.get(unit_id)
        logger.debug("Manoeuvre %s appliquée à %r", Maneuver(maneuver).value, unit_id)
        self._event_bus.publish(
            ManeuverAppliedEvent(maneuver=Maneuver(maneuver), previous_unit=previous, new_unit=updated)
        )
        self._commit(REASON_MANEUVER, unit_id)
        return True

    def commit_free_drag(self, unit_id: UnitId, x: float, y: float) -> bool:
        """Valide la position finale d'un glisser libre (fin de drag natif)."""
        if self._gesture.is_active:
            return False
        if not self._registry.replace_unit(unit_id, lambda unit: replace(unit, x=x, y=y)):
            logger.debug("Glisser ignoré: unité inconnue %r", unit_id)
            return False
        self._commit(REASON_FREE_DRAG, unit_id)
        return True

    def pan_view(self, dx: float, dy: float) -> None:
        self.camera.pan_by(dx, dy)

    def reset_view(self) -> None:
        """Recentre le plateau (échelle 1, pan nul)."""
        self.camera.reset()


__all__ = ["TargetKind", "PointerTarget", "BACKGROUND", "BoardService"]
