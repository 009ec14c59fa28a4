"""
Constraints anchored on islands.
"""

from typing import Dict, Any, Optional, List, Set

import networkx as nx

from .base import Constraint, ConstraintResult, ConstraintType, require
from ..geometry import covers_interior, within


class IslandConstraint(Constraint):
    """Base class for constraints parameterised by one island id"""

    def __init__(self, island_id: str):
        super().__init__()
        self.island_id = island_id

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None):
        island_id, = require(params, 'islandId')
        return cls(str(island_id))

    def params(self) -> Dict[str, Any]:
        return {'islandId': self.island_id}


class IslandMustBeCoveredConstraint(IslandConstraint):
    """At least one bridge must pass directly over the island"""

    constraint_type = ConstraintType.ISLAND_MUST_BE_COVERED

    def check(self, puzzle) -> ConstraintResult:
        island = puzzle.get_island(self.island_id)
        if island is None:
            return self._island_not_found(self.island_id)

        covering = [b for b in puzzle.placed_bridges if covers_interior(b.placement, island.x, island.y)]
        ok = bool(covering)
        self.violations = [] if ok else [self.island_id]

        return ConstraintResult(
            satisfied=ok,
            affected_elements=[b.id for b in covering] if ok else [self.island_id],
            message=None if ok else
            f"Island {self.island_id} at ({island.x}, {island.y}) must be covered by a bridge",
            glyph_message=None if ok else "no bridge over island"
        )


class IslandColorSeparationConstraint(Constraint):
    """
    Islands of two colours must never end up connected.

    Connected components come from the island graph of placed bridges; a
    component holding islands of both colours is a violation and all of its
    islands are reported.
    """

    constraint_type = ConstraintType.ISLAND_COLOR_SEPARATION
    param_names = ('color1', 'color2')

    def __init__(self, colour1: str, colour2: str):
        super().__init__()
        self.colour1 = colour1
        self.colour2 = colour2

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None):
        params = params or {}
        # Either spelling is accepted for either registry name
        first = params.get('color1', params.get('colour1'))
        second = params.get('color2', params.get('colour2'))
        colour1, colour2 = require({'colour1': first, 'colour2': second}, 'colour1', 'colour2')
        return cls(str(colour1), str(colour2))

    def params(self) -> Dict[str, Any]:
        return dict(zip(self.param_names, (self.colour1, self.colour2)))

    def check(self, puzzle) -> ConstraintResult:
        graph = puzzle.island_graph()
        violations: List[str] = []

        # Islands in declaration order within each component
        order = {island.id: index for index, island in enumerate(puzzle.islands)}
        for component in nx.connected_components(graph):
            colours = {graph.nodes[island_id].get('colour') for island_id in component}
            if self.colour1 in colours and self.colour2 in colours:
                violations.extend(sorted(component, key=order.get))

        self.violations = violations
        ok = not violations
        return ConstraintResult(
            satisfied=ok,
            affected_elements=violations,
            message=None if ok else
            f"Islands of colour {self.colour1} must not connect to islands of colour {self.colour2}",
            glyph_message=None if ok else f"{self.colour1} island must-not connected {self.colour2} island"
        )


class IslandColourSeparationConstraint(IslandColorSeparationConstraint):
    constraint_type = ConstraintType.ISLAND_COLOUR_SEPARATION
    param_names = ('colour1', 'colour2')


def count_bridges_by_direction(island, bridges) -> Dict[str, int]:
    """Bucket bridges leaving the island by the side their far end lies on"""
    counts = {'left': 0, 'right': 0, 'up': 0, 'down': 0}

    for bridge in bridges:
        if not bridge.is_placed or not bridge.placement.has_endpoint(island.x, island.y):
            continue

        other = bridge.placement.other_end(island.x, island.y)
        if other.x < island.x:
            counts['left'] += 1
        elif other.x > island.x:
            counts['right'] += 1
        elif other.y < island.y:
            counts['up'] += 1
        elif other.y > island.y:
            counts['down'] += 1

    return counts


class IslandDirectionalBridgeConstraint(IslandConstraint):
    """
    Requires or forbids double bridges around an island.

    Modes:
        double_horizontal: two bridges on one horizontal side, or one left and one right
        double_vertical: two bridges on one vertical side, or one up and one down
        double_any_direction: two bridges on any single side
        no_double_any_direction: no side has two bridges
    """

    constraint_type = ConstraintType.ISLAND_DIRECTIONAL_BRIDGE
    MODES = ('double_horizontal', 'double_vertical', 'double_any_direction', 'no_double_any_direction')

    def __init__(self, island_id: str, mode: str):
        super().__init__(island_id)
        self.mode = mode

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'IslandDirectionalBridgeConstraint':
        island_id, mode = require(params, 'islandId', 'constraintType')
        return cls(str(island_id), str(mode))

    def params(self) -> Dict[str, Any]:
        return {'islandId': self.island_id, 'constraintType': self.mode}

    def check(self, puzzle) -> ConstraintResult:
        island = puzzle.get_island(self.island_id)
        if island is None:
            return self._island_not_found(self.island_id)

        if self.mode not in self.MODES:
            self.violations = [self.island_id]
            return ConstraintResult(
                satisfied=False,
                affected_elements=[],
                message=f"Unknown constraint type: {self.mode}"
            )

        bridges = puzzle.bridges_from_island(island)
        c = count_bridges_by_direction(island, bridges)
        summary = f"left: {c['left']}, right: {c['right']}, up: {c['up']}, down: {c['down']}"

        if self.mode == 'double_horizontal':
            ok = c['left'] == 2 or c['right'] == 2 or (c['left'] == 1 and c['right'] == 1)
            requirement = "requires 2 bridges in same horizontal direction OR one left and one right"
        elif self.mode == 'double_vertical':
            ok = c['up'] == 2 or c['down'] == 2 or (c['up'] == 1 and c['down'] == 1)
            requirement = "requires 2 bridges in same vertical direction OR one up and one down"
        elif self.mode == 'double_any_direction':
            ok = 2 in c.values()
            requirement = "requires 2 bridges in any single direction"
        else:
            ok = 2 not in c.values()
            requirement = "must NOT have 2 bridges in any single direction"

        self.violations = [] if ok else [self.island_id]
        return ConstraintResult(
            satisfied=ok,
            affected_elements=[] if ok else [self.island_id] + [b.id for b in bridges],
            message=None if ok else f"Island {self.island_id} {requirement} ({summary})"
        )


class IslandPassingBridgeCountConstraint(IslandConstraint):
    """
    Counts bridges that pass the island without touching it.

    Directions:
        above / below: horizontal bridges at any distance above or below
        left / right: vertical bridges at any distance left or right
        adjacent: bridges exactly one cell away on any side
    """

    constraint_type = ConstraintType.ISLAND_PASSING_BRIDGE_COUNT

    def __init__(self, island_id: str, direction: str, expected_count: int):
        super().__init__(island_id)
        self.direction = direction
        self.expected_count = expected_count

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'IslandPassingBridgeCountConstraint':
        island_id, direction, count = require(params, 'islandId', 'direction', 'count')
        return cls(str(island_id), str(direction), int(count))

    def params(self) -> Dict[str, Any]:
        return {'islandId': self.island_id, 'direction': self.direction, 'count': self.expected_count}

    def check(self, puzzle) -> ConstraintResult:
        island = puzzle.get_island(self.island_id)
        if island is None:
            return self._island_not_found(self.island_id)

        passing = [
            b.id for b in puzzle.placed_bridges
            if not b.placement.has_endpoint(island.x, island.y) and self._passes(b.placement, island)
        ]
        ok = len(passing) == self.expected_count
        self.violations = [] if ok else [self.island_id]

        return ConstraintResult(
            satisfied=ok,
            affected_elements=passing if ok else [self.island_id] + passing,
            message=None if ok else
            f"Island {self.island_id} requires {self.expected_count} bridges passing "
            f"{self.direction}, but has {len(passing)}"
        )

    def _passes(self, placement, island) -> bool:
        start, end = placement.start, placement.end

        if start.y == end.y:
            if not within(island.x, start.x, end.x):
                return False
            if self.direction == 'above':
                return start.y < island.y
            if self.direction == 'below':
                return start.y > island.y
            if self.direction == 'adjacent':
                return abs(start.y - island.y) == 1
            return False

        if start.x == end.x:
            if not within(island.y, start.y, end.y):
                return False
            if self.direction == 'left':
                return start.x < island.x
            if self.direction == 'right':
                return start.x > island.x
            if self.direction == 'adjacent':
                return abs(start.x - island.x) == 1
            return False

        return False


class IslandVisibilityConstraint(IslandConstraint):
    """
    The island must see exactly `expected_count` other islands.

    Walking outward along each of the four rays, the next island met is
    visible only if it is bridged to the previous island on that ray (the
    source island first). The first gap ends the ray.
    """

    constraint_type = ConstraintType.ISLAND_VISIBILITY
    DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0))

    def __init__(self, island_id: str, expected_count: int):
        super().__init__(island_id)
        self.expected_count = expected_count

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'IslandVisibilityConstraint':
        island_id, count = require(params, 'islandId', 'count')
        return cls(str(island_id), int(count))

    def params(self) -> Dict[str, Any]:
        return {'islandId': self.island_id, 'count': self.expected_count}

    def check(self, puzzle) -> ConstraintResult:
        island = puzzle.get_island(self.island_id)
        if island is None:
            return self._island_not_found(self.island_id)

        visible = self.visible_islands(puzzle, island)
        ok = len(visible) == self.expected_count
        self.violations = [] if ok else [self.island_id]

        return ConstraintResult(
            satisfied=ok,
            affected_elements=visible if ok else [self.island_id] + visible,
            message=None if ok else
            f"Island {self.island_id} requires {self.expected_count} visible islands, but has {len(visible)}"
        )

    def visible_islands(self, puzzle, source) -> List[str]:
        """Ids of visible islands, deduplicated, in discovery order"""
        seen: Set[str] = set()
        visible: List[str] = []

        for dx, dy in self.DIRECTIONS:
            for island_id in self._walk(puzzle, source, dx, dy):
                if island_id not in seen:
                    seen.add(island_id)
                    visible.append(island_id)

        return visible

    @staticmethod
    def _walk(puzzle, source, dx: int, dy: int) -> List[str]:
        found = []
        previous = source
        x, y = source.x + dx, source.y + dy

        while puzzle.in_bounds(x, y):
            island = puzzle.island_at(x, y)
            if island is not None:
                if puzzle.get_bridge_count_between(previous.id, island.id) == 0:
                    break
                found.append(island.id)
                previous = island
            x, y = x + dx, y + dy

        return found


class IslandBridgeCountConstraint(Constraint):
    """Islands tagged num_bridges=N must have exactly N bridges attached"""

    constraint_type = ConstraintType.ISLAND_BRIDGE_COUNT

    def check(self, puzzle) -> ConstraintResult:
        violations = []
        glyphs = []

        for island in puzzle.islands:
            expected = island.num_bridges
            if expected is None:
                continue

            actual = len(puzzle.bridges_from_island(island))
            if actual != expected:
                violations.append(island.id)
                glyphs.append("not-enough bridge" if actual < expected else "too-many bridge")

        self.violations = violations
        return ConstraintResult(
            satisfied=not violations,
            affected_elements=violations,
            message=f"Incorrect bridge count: {', '.join(violations)}" if violations else None,
            glyph_message=glyphs[0] if glyphs else None
        )
