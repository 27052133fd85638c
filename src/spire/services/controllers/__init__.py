"""UI-agnostic controllers for game flow orchestration."""
from __future__ import annotations

from .spire_controller import GameSnapshot, ProfileSummary, SpireController, build_controller

__all__ = [
    "GameSnapshot",
    "ProfileSummary",
    "SpireController",
    "build_controller",
]
