"""
Constraints attached to a single grid cell.
"""

from typing import Dict, Any, Optional, List, Tuple

from .base import Constraint, ConstraintResult, ConstraintType, cell_key, require
from ..geometry import covers_cell, within, EMPTY
from ..traversal import breadth_first, grid_neighbours


class GridCellConstraint(Constraint):
    """Base class for constraints on the cell at (x, y)"""

    def __init__(self, x: int, y: int):
        super().__init__()
        self.x = x
        self.y = y

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None):
        x, y = require(params, 'x', 'y')
        return cls(int(x), int(y))

    def params(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y}

    @property
    def key(self) -> str:
        return cell_key(self.x, self.y)


class _MustTouchBridge(GridCellConstraint):
    """At least one bridge of the given orientation runs alongside the cell"""

    orientation = ""

    def _touching(self, puzzle) -> List:
        touching = []
        for bridge in puzzle.placed_bridges:
            start, end = bridge.start, bridge.end
            if self.orientation == "horizontal":
                # One row above or below, spanning the cell's column
                adjacent = (start.y == end.y and abs(self.y - start.y) == 1
                            and within(self.x, start.x, end.x))
            else:
                adjacent = (start.x == end.x and abs(self.x - start.x) == 1
                            and within(self.y, start.y, end.y))
            if adjacent:
                touching.append(bridge)
        return touching

    def check(self, puzzle) -> ConstraintResult:
        touching = self._touching(puzzle)
        ok = bool(touching)
        self.violations = [] if ok else [self.key]

        return ConstraintResult(
            satisfied=ok,
            affected_elements=[b.id for b in touching],
            message=None if ok else f"No {self.orientation} bridge adjacent to space ({self.x}, {self.y})",
            glyph_message=None if ok else "no adjacent bridge"
        )


class MustTouchAHorizontalBridge(_MustTouchBridge):
    """A horizontal bridge must run directly above or below the cell"""

    constraint_type = ConstraintType.MUST_TOUCH_HORIZONTAL_BRIDGE
    orientation = "horizontal"


class MustTouchAVerticalBridge(_MustTouchBridge):
    """A vertical bridge must run directly left or right of the cell"""

    constraint_type = ConstraintType.MUST_TOUCH_VERTICAL_BRIDGE
    orientation = "vertical"


class EnclosedAreaSizeConstraint(GridCellConstraint):
    """
    The cell must lie in an enclosed area of exactly `expected_size` cells.

    An area is the set of unoccupied cells reachable orthogonally from the
    cell, where islands and every cell spanned by a bridge are occupied. An
    area that reaches the edge of the grid is open, not enclosed.

    Size 0 is special: the cell must be covered by a bridge or be open to the
    outside.
    """

    constraint_type = ConstraintType.ENCLOSED_AREA_SIZE

    def __init__(self, x: int, y: int, expected_size: int):
        super().__init__(x, y)
        self.expected_size = expected_size

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'EnclosedAreaSizeConstraint':
        x, y, size = require(params, 'x', 'y', 'size')
        return cls(int(x), int(y), int(size))

    def params(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y, 'size': self.expected_size}

    def check(self, puzzle) -> ConstraintResult:
        is_covered = any(covers_cell(b.placement, self.x, self.y) for b in puzzle.placed_bridges)

        if self.expected_size == 0:
            if is_covered:
                self.violations = []
                return ConstraintResult(satisfied=True)

            cells, is_enclosed = self.flood_area(puzzle)
            ok = not is_enclosed
            self.violations = [] if ok else [self.key]
            return ConstraintResult(
                satisfied=ok,
                affected_elements=[] if ok else [self.key],
                message=None if ok else
                f"Cell ({self.x}, {self.y}) with size=0 must be covered by a bridge or open to outside, "
                f"but is in an enclosed area"
            )

        if is_covered:
            self.violations = [self.key]
            return ConstraintResult(
                satisfied=False,
                affected_elements=[self.key],
                message=f"Cell ({self.x}, {self.y}) is covered by a bridge but should be in an "
                        f"enclosed area of size {self.expected_size}"
            )

        cells, is_enclosed = self.flood_area(puzzle)
        area = [cell_key(x, y) for x, y in cells]
        ok = is_enclosed and len(cells) == self.expected_size
        self.violations = [] if ok else [self.key]

        if ok:
            message = None
        elif is_enclosed:
            message = (f"Cell ({self.x}, {self.y}) is in an enclosed area of size {len(cells)}, "
                       f"but requires size {self.expected_size}")
        else:
            message = (f"Cell ({self.x}, {self.y}) is not in a fully enclosed area "
                       f"(requires size {self.expected_size})")

        return ConstraintResult(
            satisfied=ok,
            affected_elements=area if ok else [self.key] + area,
            message=message
        )

    def flood_area(self, puzzle) -> Tuple[List[Tuple[int, int]], bool]:
        """
        Flood from the constrained cell through unoccupied cells.

        Returns:
            (cells reached, whether the area is enclosed)
        """
        if not puzzle.in_bounds(self.x, self.y):
            return [], False

        grid = puzzle.occupancy_grid()

        def free_neighbours(cell):
            return [
                (nx, ny) for nx, ny in grid_neighbours(*cell)
                if puzzle.in_bounds(nx, ny) and grid[ny, nx] == EMPTY
            ]

        cells = breadth_first([(self.x, self.y)], free_neighbours)
        is_enclosed = not any(
            x == 0 or y == 0 or x == puzzle.width - 1 or y == puzzle.height - 1
            for x, y in cells
        )
        return cells, is_enclosed


class MustHaveWaterConstraint(GridCellConstraint):
    """The tile at (x, y) must hold water"""

    constraint_type = ConstraintType.MUST_HAVE_WATER

    def check(self, puzzle) -> ConstraintResult:
        # Only flow puzzles carry water
        tile_has_water = getattr(puzzle, 'tile_has_water', None)
        has = bool(tile_has_water(self.x, self.y)) if callable(tile_has_water) else False

        self.violations = [] if has else [self.key]
        return ConstraintResult(
            satisfied=has,
            affected_elements=list(self.violations),
            message=None if has else f"Tile ({self.x},{self.y}) must have water."
        )
