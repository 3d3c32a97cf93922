"""Game domain services: move validation and outcome detection.

This package contains pure domain logic that is imported by the session
coordinator, keeping transport concerns separated from core game mechanics.
"""

from .rules import WIN_LINES, apply_move, check_winner  # noqa: F401
