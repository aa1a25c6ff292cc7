"""
Domain Services Package

Architectural Intent:
- Contains domain services implementing business logic
- Planning is pure and free of platform side effects
"""

from bluegreen.domain.services.rotation_planner import RotationPlanner

__all__ = ["RotationPlanner"]
