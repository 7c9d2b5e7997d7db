"""GUI package: surface pygame du plateau tactique.

Modules:
- affordances: poignées de contrôle et détection de clics
- renderer: rendu de la carte, des unités et des poignées
- app: orchestrateur (routage souris/clavier, glisser libre, pan)
"""

__all__ = [
    "affordances",
    "renderer",
    "app",
]
