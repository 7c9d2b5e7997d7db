"""Orchestrateur de la surface pygame du plateau tactique.

Ce module relie les évènements souris/clavier au `BoardService` et prend en
charge ce qui relève de la surface de rendu:
- la détection de la cible sous le pointeur (poignées, unités, fond),
- le glisser libre d'une unité (aperçu puis validation au relâchement),
- le glisser du plateau lui-même (pan),
- les raccourcis clavier pour les manoeuvres et la vue.

Comme pour le reste de la GUI, le modèle est testable sans boucle pygame
(cf. tests/test_gui_app.py).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import pygame

from tactical.app.board_service import BoardService, PointerTarget, TargetKind
from tactical.engine.geometry import Point
from tactical.engine.gestures import AdvancingGesture, RotatingGesture, SlidingGesture
from tactical.engine.maneuvers import Maneuver
from tactical.engine.units import UnitId
from tactical.gui.affordances import hit_test
from tactical.gui.renderer import COLOR_BG, BoardRenderer

logger = logging.getLogger(__name__)

__all__ = ["ButtonState", "UIState", "FreeDrag", "TacticalBoardApp"]

_ACTION_MANEUVERS = {
    "quarter_left": Maneuver.QUARTER_LEFT,
    "quarter_right": Maneuver.QUARTER_RIGHT,
    "half_turn": Maneuver.HALF_TURN,
}

_ACTION_LABELS = {
    "quarter_left": "Quart de tour gauche",
    "quarter_right": "Quart de tour droite",
    "half_turn": "Demi-tour",
    "reset_view": "Recentrer le plateau",
    "deselect": "Désélectionner",
}


@dataclass(frozen=True)
class ButtonState:
    """Représente l'état d'un bouton/action dans l'interface."""

    label: str
    enabled: bool


@dataclass(frozen=True)
class UIState:
    """Données agrégées pour la couche de présentation."""

    mode: str
    selected_unit_id: Optional[UnitId]
    scale: float
    instructions: str
    buttons: Dict[str, ButtonState]


@dataclass
class FreeDrag:
    """Glisser libre d'une unité, géré par la surface (hors machine à gestes)."""

    unit_id: UnitId
    start_pointer: Point
    offset: Point = (0.0, 0.0)

    @property
    def moved(self) -> bool:
        return self.offset != (0.0, 0.0)


class TacticalBoardApp:
    """Orchestrateur de la surface du plateau.

    Ne gère pas la boucle pygame directement mais fournit les opérations
    nécessaires à l'UI: démarrer le plateau, router les évènements souris,
    déclencher les actions clavier et exposer un état prêt à rendre.
    """

    def __init__(
        self,
        *,
        board_service: Optional[BoardService] = None,
        screen: Optional[pygame.Surface] = None,
    ) -> None:
        self.board_service = board_service or BoardService()
        self.screen = screen

        self._renderer: Optional[BoardRenderer] = None
        self._free_drag: Optional[FreeDrag] = None
        self._pan_anchor: Optional[Point] = None

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    def start(self, records: Iterable[Mapping[str, Any]]) -> None:
        """Initialise le plateau et le renderer."""

        self.board_service.initialize(records)
        if self.screen is not None:
            self._renderer = BoardRenderer(self.screen, self.board_service.footprint)
        self._free_drag = None
        self._pan_anchor = None

    @property
    def renderer(self) -> BoardRenderer:
        """Retourne le renderer pygame associé (initialisé après start)."""

        if self._renderer is None:
            raise RuntimeError("BoardRenderer indisponible tant que le plateau n'est pas démarré")
        return self._renderer

    @property
    def free_drag(self) -> Optional[FreeDrag]:
        return self._free_drag

    @property
    def mode(self) -> str:
        gesture = self.board_service.gesture
        if isinstance(gesture, RotatingGesture):
            return "rotating"
        if isinstance(gesture, AdvancingGesture):
            return "advancing"
        if isinstance(gesture, SlidingGesture):
            return "sliding"
        if self._free_drag is not None:
            return "free_drag"
        if self._pan_anchor is not None:
            return "panning"
        return "idle"

    # ------------------------------------------------------------------
    # Souris
    # ------------------------------------------------------------------

    def target_at(self, pos: Point) -> PointerTarget:
        service = self.board_service
        return hit_test(service.units, service.camera, service.footprint, pos)

    def handle_mouse_down(self, pos: Point) -> PointerTarget:
        """Route a left-button press.

        Returns:
            The target that received the press
        """
        service = self.board_service
        target = self.target_at(pos)
        service.on_pointer_down(target, pos)

        if target.kind == TargetKind.UNIT and not service.is_gesture_active:
            self._free_drag = FreeDrag(unit_id=target.unit_id, start_pointer=service.camera.screen_to_world(pos))
        elif target.kind == TargetKind.BACKGROUND:
            self._pan_anchor = pos
        return target

    def handle_mouse_motion(self, pos: Optional[Point]) -> None:
        if pos is None:
            return
        service = self.board_service

        if service.is_gesture_active:
            service.on_pointer_move(pos)
        elif self._free_drag is not None:
            wx, wy = service.camera.screen_to_world(pos)
            sx, sy = self._free_drag.start_pointer
            self._free_drag.offset = (wx - sx, wy - sy)
        elif self._pan_anchor is not None:
            service.pan_view(pos[0] - self._pan_anchor[0], pos[1] - self._pan_anchor[1])
            self._pan_anchor = pos

    def handle_mouse_up(self) -> None:
        """Relâchement: fin du geste, validation du glisser libre, fin du pan."""

        drag = self._free_drag
        self._free_drag = None
        self._pan_anchor = None

        if drag is not None and drag.moved:
            unit = self.board_service.unit(drag.unit_id)
            if unit is not None:
                self.board_service.commit_free_drag(
                    drag.unit_id, unit.x + drag.offset[0], unit.y + drag.offset[1]
                )
        self.board_service.on_pointer_up()

    def handle_mouse_leave(self) -> None:
        """Le pointeur quitte la fenêtre: traité comme un relâchement."""

        self.handle_mouse_up()

    def handle_wheel(self, pos: Optional[Point], wheel_y: float) -> None:
        """Molette pygame (y > 0 vers le haut = zoom avant)."""

        self.board_service.on_wheel(pos, -wheel_y)

    # ------------------------------------------------------------------
    # Actions clavier
    # ------------------------------------------------------------------

    def _selected_unit_id(self) -> Optional[UnitId]:
        selected = self.board_service.registry.selected
        return selected.id if selected is not None else None

    def trigger_action(self, action: str) -> bool:
        """Déclenche une action nommée.

        Returns:
            True if the action had an effect
        """
        service = self.board_service
        if action == "reset_view":
            service.reset_view()
            return True
        if action == "deselect":
            if self._selected_unit_id() is None:
                return False
            service.registry.select_only(None)
            return True
        if action in _ACTION_MANEUVERS:
            unit_id = self._selected_unit_id()
            if unit_id is None or not self._maneuvers_enabled():
                return False
            return service.apply_maneuver(unit_id, _ACTION_MANEUVERS[action])

        logger.debug("Action inconnue: %s", action)
        return False

    def _maneuvers_enabled(self) -> bool:
        return (
            self._selected_unit_id() is not None
            and not self.board_service.is_gesture_active
            and self._free_drag is None
        )

    # ------------------------------------------------------------------
    # Etat UI & rendu
    # ------------------------------------------------------------------

    def get_instructions(self) -> str:
        mode = self.mode
        if mode == "rotating":
            return "Rotation: déplacez le pointeur autour du coin fixe (90° max)"
        if mode == "advancing":
            return "Avance: tirez vers l'avant de l'unité"
        if mode == "sliding":
            return "Glissement: tirez vers un flanc (une largeur max)"
        if mode == "free_drag":
            return "Déplacement libre"
        if self._selected_unit_id() is None:
            return "Cliquez une unité pour la sélectionner"
        return "Poignées: rotation, avance, glissement, quarts de tour, demi-tour"

    def get_ui_state(self) -> UIState:
        maneuvers_enabled = self._maneuvers_enabled()
        buttons = {
            action: ButtonState(label=label, enabled=maneuvers_enabled)
            for action, label in _ACTION_LABELS.items()
            if action in _ACTION_MANEUVERS
        }
        buttons["reset_view"] = ButtonState(label=_ACTION_LABELS["reset_view"], enabled=True)
        buttons["deselect"] = ButtonState(
            label=_ACTION_LABELS["deselect"], enabled=self._selected_unit_id() is not None
        )
        return UIState(
            mode=self.mode,
            selected_unit_id=self._selected_unit_id(),
            scale=self.board_service.camera.scale,
            instructions=self.get_instructions(),
            buttons=buttons,
        )

    def drag_offsets(self) -> Dict[UnitId, Tuple[float, float]]:
        if self._free_drag is None:
            return {}
        return {self._free_drag.unit_id: self._free_drag.offset}

    def render(self) -> None:
        """Dessine la carte et les unités sur l'écran."""

        service = self.board_service
        renderer = self.renderer
        renderer.screen.fill(COLOR_BG)
        renderer.render_map(service.camera)
        renderer.render_units(service.units, service.camera, service.gesture, self.drag_offsets())
