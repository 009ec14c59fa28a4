"""
Bridge puzzle engine: islands, bridges and pluggable placement rules.
"""

__version__ = "0.1.0"

from .core import (
    BridgePuzzle, FlowPuzzle, Island, Bridge, BridgeType, BridgeInventory,
    PuzzleValidator, ValidationResult
)
from .constraints import Constraint, ConstraintResult, ConstraintType, create_constraint
from .geometry import Point, Placement

__all__ = [
    'BridgePuzzle', 'FlowPuzzle', 'Island', 'Bridge', 'BridgeType', 'BridgeInventory',
    'PuzzleValidator', 'ValidationResult',
    'Constraint', 'ConstraintResult', 'ConstraintType', 'create_constraint',
    'Point', 'Placement',
]
