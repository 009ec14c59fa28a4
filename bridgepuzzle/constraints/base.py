"""
Base class and result type shared by every puzzle constraint.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any, ClassVar


class ConstraintType(Enum):
    """Every constraint a puzzle spec may name"""
    ALL_BRIDGES_PLACED = "AllBridgesPlacedConstraint"
    NO_CROSSING = "NoCrossingConstraint"
    MUST_TOUCH_HORIZONTAL_BRIDGE = "MustTouchAHorizontalBridge"
    MUST_TOUCH_VERTICAL_BRIDGE = "MustTouchAVerticalBridge"
    ISLAND_MUST_BE_COVERED = "IslandMustBeCoveredConstraint"
    ISLAND_COLOR_SEPARATION = "IslandColorSeparationConstraint"
    ISLAND_COLOUR_SEPARATION = "IslandColourSeparationConstraint"
    ISLAND_DIRECTIONAL_BRIDGE = "IslandDirectionalBridgeConstraint"
    ISLAND_PASSING_BRIDGE_COUNT = "IslandPassingBridgeCountConstraint"
    ISLAND_VISIBILITY = "IslandVisibilityConstraint"
    ISLAND_BRIDGE_COUNT = "IslandBridgeCountConstraint"
    ENCLOSED_AREA_SIZE = "EnclosedAreaSizeConstraint"
    BRIDGE_MUST_COVER_ISLAND = "BridgeMustCoverIslandConstraint"
    BRIDGE_LENGTH = "BridgeLengthConstraint"
    MUST_HAVE_WATER = "MustHaveWaterConstraint"


@dataclass
class ConstraintResult:
    """Outcome of a single constraint check"""
    satisfied: bool
    affected_elements: List[str] = field(default_factory=list)  # island ids, bridge ids, "x,y" cells
    message: Optional[str] = None
    glyph_message: Optional[str] = None

    def __bool__(self):
        return self.satisfied

    def __repr__(self):
        status = "Satisfied" if self.satisfied else "Violated"
        return f"ConstraintResult({status}, affected={self.affected_elements})"


def cell_key(x: int, y: int) -> str:
    return f"{x},{y}"


def require(params: Optional[Dict[str, Any]], *names: str) -> List[Any]:
    """
    Fetch required spec parameters in order.

    Raises:
        ValueError: If any parameter is missing
    """
    params = params or {}
    missing = [name for name in names if params.get(name) is None]
    if missing:
        raise ValueError(f"Missing constraint parameter(s): {', '.join(missing)}")
    return [params[name] for name in names]


class Constraint(ABC):
    """
    An independently checkable puzzle rule.

    check() must not mutate the puzzle. The violations list is a cache of
    the last check for debugging and highlighting only.
    """

    constraint_type: ClassVar[ConstraintType]

    def __init__(self):
        self.id: Optional[str] = None
        self.description: Optional[str] = None
        self.violations: List[Any] = []

    @abstractmethod
    def check(self, puzzle) -> ConstraintResult:
        """Evaluate the rule against the current puzzle state."""
        pass

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'Constraint':
        """Build the constraint from spec parameters. Parameterless by default."""
        return cls()

    def params(self) -> Dict[str, Any]:
        """Spec parameters that recreate this constraint"""
        return {}

    def to_spec(self) -> Dict[str, Any]:
        spec: Dict[str, Any] = {'type': self.constraint_type.value}
        params = self.params()
        if params:
            spec['params'] = params
        if self.id:
            spec['id'] = self.id
        return spec

    def _island_not_found(self, island_id: str) -> ConstraintResult:
        self.violations = [island_id]
        return ConstraintResult(
            satisfied=False,
            affected_elements=[],
            message=f"Island {island_id} not found"
        )

    def __repr__(self):
        params = ', '.join(f"{k}={v!r}" for k, v in self.params().items())
        return f"{self.__class__.__name__}({params})"
