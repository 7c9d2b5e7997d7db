#!/usr/bin/env python3
"""Lance le plateau tactique (surface pygame).

Raccourcis clavier:
- Q      : quart de tour à gauche (unité sélectionnée)
- E      : quart de tour à droite
- H      : demi-tour
- R      : recentrer le plateau
- ESC    : désélectionner, ou quitter si aucune sélection

Souris: clic sur une unité pour la sélectionner et la déplacer librement,
poignées pour les gestes contraints, glisser le fond pour déplacer la vue,
molette pour zoomer autour du pointeur.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence, Tuple

import pygame

from tactical.app.board_service import BoardService
from tactical.app.records import UnitRecord, default_records, normalize_rows, records_to_rows
from tactical.gui.app import TacticalBoardApp
from tactical.gui.renderer import SCREEN_HEIGHT, SCREEN_WIDTH

logger = logging.getLogger("tactical.play_board")

KEY_BINDINGS: Tuple[Tuple[str, int, str], ...] = (
    ("Q", pygame.K_q, "quarter_left"),
    ("E", pygame.K_e, "quarter_right"),
    ("H", pygame.K_h, "half_turn"),
    ("R", pygame.K_r, "reset_view"),
)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument(
        "--units",
        help="Fichier JSON de lignes d'unités (position_x, position_y, rotation, type, name)",
    )
    parser.add_argument(
        "--save",
        help="Fichier JSON où réécrire les lignes d'unités après chaque modification",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Niveau de journalisation (défaut: INFO)",
    )
    return parser.parse_args(argv)


def load_records(path: Optional[str]) -> List[UnitRecord]:
    """Charge les unités d'un fichier JSON ou retourne les unités de départ."""

    if path is None:
        return default_records()
    with open(path, encoding="utf-8") as handle:
        rows = json.load(handle)
    records = normalize_rows(rows)
    return records or default_records()


def save_rows(path: str, records: List[UnitRecord]) -> None:
    """Ecrit les enregistrements du plateau sous forme de lignes de persistance."""

    rows = records_to_rows(records)
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(rows, handle, indent=2)
    logger.debug("%d ligne(s) écrite(s) dans %s", len(rows), path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    pygame.display.set_caption("Plateau tactique")

    service = BoardService()
    service.on_units_changed(
        lambda records: logger.info("Unités modifiées: %s", json.dumps(records))
    )
    if args.save:
        service.on_units_changed(lambda records: save_rows(args.save, records))
    app = TacticalBoardApp(board_service=service, screen=screen)
    app.start(load_records(args.units))

    clock = pygame.time.Clock()
    pygame.font.init()
    font = pygame.font.SysFont("Arial", 18, bold=True)
    small_font = pygame.font.SysFont("Arial", 14)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    if not app.trigger_action("deselect"):
                        running = False
                    continue
                for _label, key, action in KEY_BINDINGS:
                    if event.key == key:
                        app.trigger_action(action)
                        break
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                app.handle_mouse_down(event.pos)
            elif event.type == pygame.MOUSEMOTION:
                app.handle_mouse_motion(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                app.handle_mouse_up()
            elif event.type == pygame.MOUSEWHEEL:
                app.handle_wheel(pygame.mouse.get_pos(), event.y)
            elif event.type == pygame.WINDOWLEAVE:
                app.handle_mouse_leave()

        app.render()

        ui_state = app.get_ui_state()
        instructions = font.render(ui_state.instructions, True, (255, 255, 255))
        screen.blit(instructions, (20, 20))

        y_offset = 50
        for label, _key, action in KEY_BINDINGS:
            button_state = ui_state.buttons.get(action)
            enabled = button_state.enabled if button_state else False
            text = f"[{label}] {button_state.label if button_state else action}"
            color = (200, 255, 200) if enabled else (120, 120, 120)
            screen.blit(small_font.render(text, True, color), (20, y_offset))
            y_offset += 20

        zoom_text = small_font.render(f"Zoom: {ui_state.scale:.2f}", True, (240, 240, 240))
        screen.blit(zoom_text, (SCREEN_WIDTH - 120, 20))

        pygame.display.flip()
        clock.tick(60)

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
