"""
Pluggable puzzle constraints.
"""

from .base import Constraint, ConstraintResult, ConstraintType
from .bridge_constraints import (
    AllBridgesPlacedConstraint, NoCrossingConstraint,
    BridgeMustCoverIslandConstraint, BridgeLengthConstraint
)
from .cell_constraints import (
    GridCellConstraint, MustTouchAHorizontalBridge, MustTouchAVerticalBridge,
    EnclosedAreaSizeConstraint, MustHaveWaterConstraint
)
from .island_constraints import (
    IslandConstraint, IslandMustBeCoveredConstraint, IslandColorSeparationConstraint,
    IslandColourSeparationConstraint, IslandDirectionalBridgeConstraint,
    IslandPassingBridgeCountConstraint, IslandVisibilityConstraint,
    IslandBridgeCountConstraint
)
from .registry import (
    CONSTRAINT_REGISTRY, get_constraint_class,
    create_constraint, create_constraints_from_spec
)

__all__ = [
    # Base classes
    'Constraint',
    'ConstraintResult',
    'ConstraintType',
    'GridCellConstraint',
    'IslandConstraint',

    # Bridge rules
    'AllBridgesPlacedConstraint',
    'NoCrossingConstraint',
    'BridgeMustCoverIslandConstraint',
    'BridgeLengthConstraint',

    # Cell rules
    'MustTouchAHorizontalBridge',
    'MustTouchAVerticalBridge',
    'EnclosedAreaSizeConstraint',
    'MustHaveWaterConstraint',

    # Island rules
    'IslandMustBeCoveredConstraint',
    'IslandColorSeparationConstraint',
    'IslandColourSeparationConstraint',
    'IslandDirectionalBridgeConstraint',
    'IslandPassingBridgeCountConstraint',
    'IslandVisibilityConstraint',
    'IslandBridgeCountConstraint',

    # Registry
    'CONSTRAINT_REGISTRY',
    'get_constraint_class',
    'create_constraint',
    'create_constraints_from_spec',
]
