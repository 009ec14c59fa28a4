# bridgepuzzle/core/__init__.py
"""
Core data structures and utilities for the bridge puzzle engine.
"""

from .bridge import Bridge, BridgeType
from .inventory import BridgeInventory
from .puzzle import BridgePuzzle, Island
from .flow import FlowPuzzle, FlowSquare, Direction, ConnectivityState, ConnectivityTile
from .validator import PuzzleValidator, ValidationResult, ConstraintReport, StructureReport
from .utils import setup_logger, timer, load_puzzle_spec, save_puzzle_spec

__all__ = [
    # Data structures
    'Bridge', 'BridgeType', 'BridgeInventory', 'BridgePuzzle', 'Island',

    # Water
    'FlowPuzzle', 'FlowSquare', 'Direction', 'ConnectivityState', 'ConnectivityTile',

    # Validation
    'PuzzleValidator', 'ValidationResult', 'ConstraintReport', 'StructureReport',

    # Utilities
    'setup_logger', 'timer', 'load_puzzle_spec', 'save_puzzle_spec'
]
