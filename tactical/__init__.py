"""Plateau tactique: placement et manoeuvres d'unités sur une carte zoomable."""

__all__ = ["engine", "app", "gui"]
