"""
Construction of constraints from declarative puzzle specs.
"""

from typing import Dict, Any, List, Type, Iterable

from .base import Constraint, ConstraintType
from .bridge_constraints import (
    AllBridgesPlacedConstraint, NoCrossingConstraint,
    BridgeMustCoverIslandConstraint, BridgeLengthConstraint
)
from .cell_constraints import (
    MustTouchAHorizontalBridge, MustTouchAVerticalBridge,
    EnclosedAreaSizeConstraint, MustHaveWaterConstraint
)
from .island_constraints import (
    IslandMustBeCoveredConstraint, IslandColorSeparationConstraint,
    IslandColourSeparationConstraint, IslandDirectionalBridgeConstraint,
    IslandPassingBridgeCountConstraint, IslandVisibilityConstraint,
    IslandBridgeCountConstraint
)


# Constraint registry keyed by spec type
CONSTRAINT_REGISTRY: Dict[ConstraintType, Type[Constraint]] = {
    ConstraintType.ALL_BRIDGES_PLACED: AllBridgesPlacedConstraint,
    ConstraintType.NO_CROSSING: NoCrossingConstraint,
    ConstraintType.MUST_TOUCH_HORIZONTAL_BRIDGE: MustTouchAHorizontalBridge,
    ConstraintType.MUST_TOUCH_VERTICAL_BRIDGE: MustTouchAVerticalBridge,
    ConstraintType.ISLAND_MUST_BE_COVERED: IslandMustBeCoveredConstraint,
    ConstraintType.ISLAND_COLOR_SEPARATION: IslandColorSeparationConstraint,
    ConstraintType.ISLAND_COLOUR_SEPARATION: IslandColourSeparationConstraint,
    ConstraintType.ISLAND_DIRECTIONAL_BRIDGE: IslandDirectionalBridgeConstraint,
    ConstraintType.ISLAND_PASSING_BRIDGE_COUNT: IslandPassingBridgeCountConstraint,
    ConstraintType.ISLAND_VISIBILITY: IslandVisibilityConstraint,
    ConstraintType.ISLAND_BRIDGE_COUNT: IslandBridgeCountConstraint,
    ConstraintType.ENCLOSED_AREA_SIZE: EnclosedAreaSizeConstraint,
    ConstraintType.BRIDGE_MUST_COVER_ISLAND: BridgeMustCoverIslandConstraint,
    ConstraintType.BRIDGE_LENGTH: BridgeLengthConstraint,
    ConstraintType.MUST_HAVE_WATER: MustHaveWaterConstraint,
}

_missing = set(ConstraintType) - set(CONSTRAINT_REGISTRY)
if _missing:
    raise RuntimeError(f"No constraint class registered for: {sorted(t.value for t in _missing)}")


def get_constraint_class(name: str) -> Type[Constraint]:
    """
    Look up a constraint class by its spec type name.

    Raises:
        ValueError: If the name is not a known constraint type
    """
    try:
        constraint_type = ConstraintType(name)
    except ValueError:
        available = [t.value for t in ConstraintType]
        raise ValueError(f"Unknown constraint type: {name}. Available: {available}") from None

    return CONSTRAINT_REGISTRY[constraint_type]


def create_constraint(spec: Dict[str, Any]) -> Constraint:
    """
    Create one constraint from a {type, params?, id?, description?} entry.

    Raises:
        ValueError: On an unknown type or missing parameters
    """
    if 'type' not in spec:
        raise ValueError(f"Constraint entry has no type: {spec}")

    constraint_class = get_constraint_class(spec['type'])
    constraint = constraint_class.from_spec(spec.get('params') or {})
    constraint.id = spec.get('id')
    constraint.description = spec.get('description')
    return constraint


def create_constraints_from_spec(specs: Iterable[Dict[str, Any]]) -> List[Constraint]:
    """Create constraints in spec order; entries without an id get c1, c2, ..."""
    constraints = []
    for index, spec in enumerate(specs):
        constraint = create_constraint(spec)
        if not constraint.id:
            constraint.id = f"c{index + 1}"
        constraints.append(constraint)
    return constraints
