# Movement tuning passed to the underlying navigator
# src/spec/movement.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class MovementProfile:
    """
    Knobs that make the underlying search cheaper and more predictable.

    Defaults trade capability for speed: no digging, no pillaring, no
    scaffolding, and limited drops.
    """

    can_dig: bool = False
    allow_1x1_towers: bool = False
    allow_free_motion: bool = False
    scaffolding_blocks: Tuple[str, ...] = ()
    max_drop_down: int = 4
    infinite_liquid_dropdown: bool = False
