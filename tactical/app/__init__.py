"""Couche interaction: service du plateau, évènements et enregistrements."""

from .board_service import BoardService, PointerTarget, TargetKind
from .event_bus import EventBus
from .events import (
    BoardInitializedEvent,
    GestureStartedEvent,
    ManeuverAppliedEvent,
    UnitsChangedEvent,
)

__all__ = [
    "BoardService",
    "PointerTarget",
    "TargetKind",
    "EventBus",
    "BoardInitializedEvent",
    "GestureStartedEvent",
    "ManeuverAppliedEvent",
    "UnitsChangedEvent",
]
