"""
Constraints over the set of bridges as a whole.
"""

from typing import Dict, Any, Optional

from .base import Constraint, ConstraintResult, ConstraintType, require
from ..geometry import segments_intersect, shares_endpoint, covers_interior
from .. import config


class AllBridgesPlacedConstraint(Constraint):
    """Every bridge in the inventory must be placed"""

    constraint_type = ConstraintType.ALL_BRIDGES_PLACED

    def check(self, puzzle) -> ConstraintResult:
        unplaced = [b.id for b in puzzle.bridges if not b.is_placed]
        self.violations = unplaced
        ok = not unplaced
        return ConstraintResult(
            satisfied=ok,
            affected_elements=unplaced,
            message=None if ok else f"Some bridges are unplaced: {', '.join(unplaced)}"
        )


class NoCrossingConstraint(Constraint):
    """
    No two placed bridges may cross. Bridges that share an endpoint meet at
    a junction and are never reported.
    """

    constraint_type = ConstraintType.NO_CROSSING

    def check(self, puzzle) -> ConstraintResult:
        placed = [b for b in puzzle.bridges if b.is_placed]
        violations = []

        for i, b1 in enumerate(placed):
            for b2 in placed[i + 1:]:
                if self._cross(b1.placement, b2.placement):
                    violations.append(f"{b1.id}:{b2.id}")

        self.violations = violations
        ok = not violations
        return ConstraintResult(
            satisfied=ok,
            affected_elements=violations,
            message=None if ok else f"Crossing bridges detected: {', '.join(violations)}"
        )

    @staticmethod
    def _cross(a, b) -> bool:
        if shares_endpoint(a, b):
            return False
        return segments_intersect(a.start, a.end, b.start, b.end)


class BridgeMustCoverIslandConstraint(Constraint):
    """Placed bridges whose type must cover an island pass over at least one"""

    constraint_type = ConstraintType.BRIDGE_MUST_COVER_ISLAND

    def check(self, puzzle) -> ConstraintResult:
        violations = []

        for bridge in puzzle.placed_bridges:
            if not bridge.type.must_cover_island:
                continue
            if not any(covers_interior(bridge.placement, i.x, i.y) for i in puzzle.islands):
                violations.append(bridge.id)

        self.violations = violations
        ok = not violations
        plural = '' if len(violations) == 1 else 's'
        return ConstraintResult(
            satisfied=ok,
            affected_elements=violations,
            message=None if ok else f"Bridge{plural} must cover island{plural}: {', '.join(violations)}",
            glyph_message=None if ok else "not island under bridge"
        )


class BridgeLengthConstraint(Constraint):
    """Placed bridges of one type must span a fixed length"""

    constraint_type = ConstraintType.BRIDGE_LENGTH

    def __init__(self, type_id: str, expected_length: float):
        super().__init__()
        self.type_id = type_id
        self.expected_length = expected_length

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'BridgeLengthConstraint':
        type_id, length = require(params, 'typeId', 'length')
        return cls(type_id, float(length))

    def params(self) -> Dict[str, Any]:
        return {'typeId': self.type_id, 'length': self.expected_length}

    def check(self, puzzle) -> ConstraintResult:
        violations = [
            b.id for b in puzzle.placed_bridges
            if b.type.id == self.type_id
            and abs(b.placement.length - self.expected_length) > config.LENGTH_TOLERANCE
        ]

        self.violations = violations
        ok = not violations
        return ConstraintResult(
            satisfied=ok,
            affected_elements=violations,
            message=None if ok else f"Bridge length mismatch for type {self.type_id}: {', '.join(violations)}"
        )
