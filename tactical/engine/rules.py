"""Règles et constantes du plateau tactique.

Ce module expose les constantes partagées par le moteur:
- empreinte d'une unité (`UNIT_WIDTH`, `UNIT_HEIGHT`)
- bornes et pas du zoom caméra
- arc maximal d'une rotation pilotée au pointeur
- dimensions de la carte
"""

# Empreinte commune à toutes les unités (unités monde)
UNIT_WIDTH: float = 100.0
UNIT_HEIGHT: float = 60.0

# Caméra
MIN_ZOOM: float = 0.3
MAX_ZOOM: float = 3.0
ZOOM_STEP: float = 1.05

# Rotation autour d'un coin: 90° au maximum depuis le cap de départ
ROTATION_ARC: float = 90.0

# Carte (unités monde)
MAP_WIDTH: float = 3000.0
MAP_HEIGHT: float = 2000.0

__all__ = [
    "UNIT_WIDTH",
    "UNIT_HEIGHT",
    "MIN_ZOOM",
    "MAX_ZOOM",
    "ZOOM_STEP",
    "ROTATION_ARC",
    "MAP_WIDTH",
    "MAP_HEIGHT",
]
