"""Tests d'intégration légère pour tactical.gui.app.

Ces tests valident le routage des évènements souris/clavier vers le
`BoardService` (sans boucle pygame):
- sélection d'une unité et glisser libre validé au relâchement,
- gestes contraints lancés depuis les poignées,
- pan du plateau et zoom molette,
- raccourcis de manoeuvre sur l'unité sélectionnée.
"""

from __future__ import annotations

import os

import pytest

# Forcer le mode headless pour pygame
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from tactical.app.board_service import BoardService, TargetKind
from tactical.app.records import default_records


@pytest.fixture
def pygame_screen():
    """Initialise pygame en mode headless et retourne une surface écran."""

    pygame.init()
    screen = pygame.display.set_mode((1100, 750))
    try:
        yield screen
    finally:
        pygame.quit()


@pytest.fixture
def board_app(pygame_screen):
    """Construit l'application et démarre le plateau avec les unités de départ."""

    from tactical.gui.app import TacticalBoardApp

    app = TacticalBoardApp(board_service=BoardService(), screen=pygame_screen)
    app.start(default_records())
    return app


@pytest.fixture
def changes(board_app):
    received = []
    board_app.board_service.on_units_changed(received.append)
    return received


def _click(app, pos):
    app.handle_mouse_down(pos)
    app.handle_mouse_up()


def test_app_starts_idle_without_selection(board_app) -> None:
    ui_state = board_app.get_ui_state()

    assert ui_state.mode == "idle"
    assert ui_state.selected_unit_id is None
    assert not ui_state.buttons["quarter_left"].enabled
    assert ui_state.buttons["reset_view"].enabled


def test_click_selects_unit_without_commit(board_app, changes) -> None:
    _click(board_app, (210.0, 240.0))

    assert board_app.get_ui_state().selected_unit_id == 0
    assert board_app.get_ui_state().buttons["half_turn"].enabled
    assert changes == []


def test_free_drag_previews_then_commits(board_app, changes) -> None:
    target = board_app.handle_mouse_down((210.0, 240.0))
    assert target.kind == TargetKind.UNIT

    board_app.handle_mouse_motion((260.0, 290.0))
    assert board_app.mode == "free_drag"
    assert board_app.drag_offsets() == {0: (50.0, 50.0)}
    assert board_app.board_service.unit(0).position == (200.0, 220.0)

    board_app.handle_mouse_up()

    assert board_app.board_service.unit(0).position == (250.0, 270.0)
    assert len(changes) == 1
    assert changes[0][0]["position"] == {"x": 250.0, "y": 270.0}
    assert board_app.mode == "idle"


def test_slide_handle_drives_gesture(board_app, changes) -> None:
    _click(board_app, (210.0, 240.0))

    target = board_app.handle_mouse_down((250.0, 250.0))
    assert target.kind == TargetKind.SLIDE
    assert board_app.mode == "sliding"
    assert board_app.free_drag is None

    board_app.handle_mouse_motion((300.0, 250.0))
    assert board_app.board_service.unit(0).position == pytest.approx((250.0, 220.0))
    assert not board_app.get_ui_state().buttons["quarter_right"].enabled

    board_app.handle_mouse_leave()
    assert board_app.mode == "idle"
    assert len(changes) == 1


def test_background_drag_pans_and_deselects(board_app) -> None:
    _click(board_app, (210.0, 240.0))

    board_app.handle_mouse_down((900.0, 600.0))
    assert board_app.mode == "panning"
    assert board_app.get_ui_state().selected_unit_id is None

    board_app.handle_mouse_motion((910.0, 615.0))
    board_app.handle_mouse_motion((920.0, 620.0))
    board_app.handle_mouse_up()

    camera = board_app.board_service.camera
    assert (camera.pan_x, camera.pan_y) == (20.0, 20.0)
    assert board_app.mode == "idle"


def test_wheel_up_zooms_in(board_app) -> None:
    board_app.handle_wheel((400.0, 300.0), 1)
    assert board_app.get_ui_state().scale > 1.0

    assert board_app.trigger_action("reset_view")
    assert board_app.get_ui_state().scale == 1.0


def test_keyboard_maneuvers_target_selected_unit(board_app, changes) -> None:
    assert not board_app.trigger_action("quarter_right")

    _click(board_app, (210.0, 240.0))
    assert board_app.trigger_action("quarter_right")

    unit = board_app.board_service.unit(0)
    assert unit.rotation == 90.0
    assert unit.position == pytest.approx((300.0, 220.0))
    assert len(changes) == 1

    assert board_app.trigger_action("deselect")
    assert not board_app.trigger_action("deselect")
    assert not board_app.trigger_action("unknown")


def test_render_no_crash(board_app) -> None:
    _click(board_app, (210.0, 240.0))
    board_app.handle_mouse_down((200.0, 215.0))
    board_app.handle_mouse_motion((260.0, 300.0))

    board_app.render()

    board_app.handle_mouse_up()
    board_app.render()


def test_renderer_unavailable_before_start() -> None:
    from tactical.gui.app import TacticalBoardApp

    app = TacticalBoardApp()
    with pytest.raises(RuntimeError):
        _ = app.renderer


def test_quarter_tab_reachable_over_neighbour(board_app, changes):
    service = board_app.board_service
    _click(board_app, (210, 240))  # sélectionne l'unité 0

    target = board_app.handle_mouse_down((311, 250))
    board_app.handle_mouse_up()

    assert target.kind == TargetKind.QUARTER_RIGHT and target.unit_id == 0
    assert service.unit(0).rotation == 90.0
    assert service.unit(0).position == pytest.approx((300.0, 220.0))
    assert service.unit(1).rotation == 0.0
    assert len(changes) == 1
