"""Engine package exposing geometry, camera, units, gestures and maneuvers."""

from . import rules  # re-export for convenience

__all__ = ["rules"]
