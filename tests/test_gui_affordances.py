"""Tests de la détection de clics sur les poignées et les unités."""

import pytest

from tactical.app.board_service import BoardService, TargetKind
from tactical.app.records import default_records
from tactical.engine.camera import Camera
from tactical.engine.geometry import Footprint
from tactical.engine.units import Unit
from tactical.gui.affordances import handles_for, hit_test

FOOTPRINT = Footprint(width=100.0, height=60.0)


def _units(selected: bool = True, rotation: float = 0.0):
    return [Unit(id=0, x=200.0, y=220.0, rotation=rotation, selected=selected)]


@pytest.mark.parametrize(
    "pos, kind",
    [
        ((250.0, 250.0), TargetKind.SLIDE),
        ((210.0, 240.0), TargetKind.UNIT),
        ((300.0, 215.0), TargetKind.ROTATE_RIGHT),
        ((200.0, 215.0), TargetKind.ROTATE_LEFT),
        ((250.0, 210.0), TargetKind.ADVANCE),
        ((190.0, 250.0), TargetKind.QUARTER_LEFT),
        ((310.0, 250.0), TargetKind.QUARTER_RIGHT),
        ((250.0, 290.0), TargetKind.HALF_TURN),
        ((10.0, 10.0), TargetKind.BACKGROUND),
    ],
)
def test_hit_test_selected_unit(pos, kind) -> None:
    target = hit_test(_units(), Camera(), FOOTPRINT, pos)

    assert target.kind == kind
    if kind != TargetKind.BACKGROUND:
        assert target.unit_id == 0
    else:
        assert target.unit_id is None


def test_handles_ignored_on_unselected_unit() -> None:
    assert hit_test(_units(selected=False), Camera(), FOOTPRINT, (250.0, 250.0)).kind == TargetKind.UNIT
    assert hit_test(_units(selected=False), Camera(), FOOTPRINT, (310.0, 250.0)).kind == TargetKind.BACKGROUND


def test_hit_test_follows_rotation() -> None:
    # Cap 90°: l'avant regarde l'est, la poignée d'avance passe à droite de l'ancre.
    target = hit_test(_units(rotation=90.0), Camera(), FOOTPRINT, (209.0, 270.0))

    assert target.kind == TargetKind.ADVANCE


def test_hit_test_uses_camera_transform() -> None:
    camera = Camera(scale=2.0, pan_x=10.0, pan_y=20.0)

    # Centre de la poignée de glissement: monde (250, 250) -> écran (510, 520)
    assert hit_test(_units(), camera, FOOTPRINT, (510.0, 520.0)).kind == TargetKind.SLIDE
    assert hit_test(_units(), camera, FOOTPRINT, (250.0, 250.0)).kind == TargetKind.BACKGROUND


def test_top_most_unit_wins() -> None:
    units = [
        Unit(id="below", x=200.0, y=220.0),
        Unit(id="above", x=250.0, y=240.0),
    ]

    assert hit_test(units, Camera(), FOOTPRINT, (270.0, 260.0)).unit_id == "above"
    assert hit_test(units, Camera(), FOOTPRINT, (210.0, 230.0)).unit_id == "below"


def test_handle_table_matches_footprint() -> None:
    handles = handles_for(FOOTPRINT)

    assert {handle.kind for handle in handles} == {
        TargetKind.ROTATE_LEFT,
        TargetKind.ROTATE_RIGHT,
        TargetKind.ADVANCE,
        TargetKind.SLIDE,
        TargetKind.QUARTER_LEFT,
        TargetKind.QUARTER_RIGHT,
        TargetKind.HALF_TURN,
    }
    half_turn = next(handle for handle in handles if handle.kind == TargetKind.HALF_TURN)
    assert (half_turn.x, half_turn.y) == (44.0, 64.0)


def test_selected_handles_win_over_later_unit_bodies() -> None:
    # Unités de départ côte à côte: l'onglet quart-droit de l'unité 0 est
    # entièrement recouvert par le corps de l'unité 1.
    service = BoardService()
    service.initialize(default_records())
    service.registry.select_only(0)

    target = hit_test(service.units, service.camera, service.footprint, (311.0, 250.0))

    assert target.kind == TargetKind.QUARTER_RIGHT
    assert target.unit_id == 0


def test_unselected_overlap_still_goes_to_top_most_body() -> None:
    service = BoardService()
    service.initialize(default_records())

    target = hit_test(service.units, service.camera, service.footprint, (311.0, 250.0))

    assert target.kind == TargetKind.UNIT
    assert target.unit_id == 1
