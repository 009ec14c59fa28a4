"""
Bridge puzzles with flowing water.

Water enters at edge inputs and source squares and moves one square at a
time along each square's outgoing directions. Bridges dam the squares they
pass over, so placing or removing a bridge changes where the water ends up.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, Iterable, Set

from .puzzle import BridgePuzzle
from .utils import timer
from ..geometry import Point, Placement, interior_cells, is_axis_aligned
from ..traversal import breadth_first


class Direction(Enum):
    """Compass direction of an outgoing channel"""
    N = "N"
    S = "S"
    E = "E"
    W = "W"

    @property
    def delta(self) -> Tuple[int, int]:
        return {
            Direction.N: (0, -1),
            Direction.S: (0, 1),
            Direction.E: (1, 0),
            Direction.W: (-1, 0),
        }[self]


@dataclass(frozen=True)
class FlowSquare:
    """Flow metadata for one tile"""
    x: int
    y: int
    outgoing: Tuple[Direction, ...] = field(default_factory=tuple)
    is_source: bool = False
    rocky: bool = False  # holds water but never passes it on
    obstacle: bool = False  # no water, no bridges across
    pontoon: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FlowSquare':
        """
        Create a flow square from a spec entry.

        Raises:
            ValueError: On an unknown outgoing direction
        """
        outgoing = []
        for value in data.get('outgoing') or []:
            try:
                outgoing.append(Direction(value))
            except ValueError:
                raise ValueError(f"Unknown flow direction {value!r} at ({data['x']}, {data['y']})") from None

        return cls(
            x=int(data['x']),
            y=int(data['y']),
            outgoing=tuple(outgoing),
            is_source=bool(data.get('isSource', False)),
            rocky=bool(data.get('rocky', False)),
            obstacle=bool(data.get('obstacle', False)),
            pontoon=bool(data.get('pontoon', False)),
        )

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {'x': self.x, 'y': self.y, 'outgoing': [d.value for d in self.outgoing]}
        for key, value in (('isSource', self.is_source), ('rocky', self.rocky),
                           ('obstacle', self.obstacle), ('pontoon', self.pontoon)):
            if value:
                data[key] = True
        return data


class ConnectivityState(Enum):
    """How a walker may cross a tile once the puzzle is solved"""
    BLOCKED = "blocked"
    PASSABLE_HIGH = "passableHigh"  # on a bridge deck or floating pontoon
    PASSABLE_LOW = "passableLow"  # dry ground


@dataclass
class ConnectivityTile:
    x: int
    y: int
    state: ConnectivityState
    pontoon: bool = False
    rocky: bool = False
    obstacle: bool = False


class FlowPuzzle(BridgePuzzle):
    """Bridge puzzle whose tiles carry water"""

    def __init__(self, puzzle_id: str, width: int, height: int,
                 flow_squares: Optional[Iterable[FlowSquare]] = None,
                 edge_inputs: Optional[Iterable[Any]] = None,
                 **kwargs):
        """
        Initialize a flow puzzle.

        Args:
            puzzle_id: Puzzle identifier
            width: Width of the puzzle grid
            height: Height of the puzzle grid
            flow_squares: Flow metadata per tile; tiles without one stay dry
            edge_inputs: Points where water enters from outside the grid
            **kwargs: Remaining BridgePuzzle arguments
        """
        super().__init__(puzzle_id, width, height, **kwargs)
        self.flow_squares: Dict[Tuple[int, int], FlowSquare] = {}
        for square in flow_squares or []:
            self.flow_squares[(square.x, square.y)] = square

        self.edge_inputs: List[Point] = []
        self.set_edge_inputs(edge_inputs or [])

    def get_flow_square(self, x: int, y: int) -> Optional[FlowSquare]:
        return self.flow_squares.get((x, y))

    def set_edge_inputs(self, inputs: Iterable[Any]):
        """Replace the edge inputs with the given points"""
        self.edge_inputs = []
        for value in inputs:
            point = Point.coerce(value)
            if point not in self.edge_inputs:
                self.edge_inputs.append(point)
        self.logger.debug(f"Edge inputs set to {self.edge_inputs}")

    def could_place_bridge_of_type(self, start_island_id: str, end_island_id: str,
                                   type_id: Optional[str] = None) -> bool:
        """Base rules, plus no obstacle between the islands"""
        if not super().could_place_bridge_of_type(start_island_id, end_island_id, type_id):
            return False

        start = self.get_island(start_island_id).position
        end = self.get_island(end_island_id).position
        if not is_axis_aligned(start, end):
            return True

        for x, y in interior_cells(Placement(start, end)):
            square = self.get_flow_square(x, y)
            if square and square.obstacle:
                return False

        return True

    def blocked_cells(self) -> Set[Tuple[int, int]]:
        """Obstacle tiles plus tiles strictly inside a placed bridge"""
        blocked = {key for key, square in self.flow_squares.items() if square.obstacle}
        for bridge in self.placed_bridges:
            blocked.update(interior_cells(bridge.placement))
        return blocked

    @timer
    def compute_water(self) -> Set[Tuple[int, int]]:
        """
        Propagate water from the edge inputs and source squares.

        Returns:
            Coordinates of every wet tile
        """
        blocked = self.blocked_cells()

        seeds = [(p.x, p.y) for p in self.edge_inputs]
        seeds += [key for key, square in self.flow_squares.items() if square.is_source]
        seeds = [key for key in seeds if key in self.flow_squares and key not in blocked]

        def downstream(cell):
            square = self.flow_squares[cell]
            if square.rocky:
                return []
            targets = []
            for direction in square.outgoing:
                dx, dy = direction.delta
                target = (cell[0] + dx, cell[1] + dy)
                if target in self.flow_squares and target not in blocked:
                    targets.append(target)
            return targets

        return set(breadth_first(seeds, downstream))

    def tile_has_water(self, x: int, y: int) -> bool:
        return (x, y) in self.compute_water()

    def get_has_water_grid(self) -> Dict[Tuple[int, int], bool]:
        """Wet/dry state of every tile that has a flow square"""
        wet = self.compute_water()
        return {key: key in wet for key in self.flow_squares}

    def get_edge_output(self) -> List[Point]:
        """Wet tiles on the grid perimeter, in row-major order"""
        wet = self.compute_water()
        return [
            Point(x, y) for x, y in sorted(wet, key=lambda cell: (cell[1], cell[0]))
            if x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1
        ]

    def get_baked_connectivity(self) -> List[ConnectivityTile]:
        """
        Traversal state of every grid tile in row-major order.

        Obstacles block. Tiles under a bridge deck are high. Pontoons float
        high on water and rest low when dry. Open water and dry rocky ground
        block. Anything else is low ground.
        """
        wet = self.compute_water()
        covered = set()
        for bridge in self.placed_bridges:
            covered.update(interior_cells(bridge.placement))

        tiles = []
        for y in range(self.height):
            for x in range(self.width):
                square = self.get_flow_square(x, y) or FlowSquare(x, y)
                has_water = (x, y) in wet

                if square.obstacle:
                    state = ConnectivityState.BLOCKED
                elif (x, y) in covered:
                    state = ConnectivityState.PASSABLE_HIGH
                elif square.pontoon:
                    state = ConnectivityState.PASSABLE_HIGH if has_water else ConnectivityState.PASSABLE_LOW
                elif has_water or square.rocky:
                    state = ConnectivityState.BLOCKED
                else:
                    state = ConnectivityState.PASSABLE_LOW

                tiles.append(ConnectivityTile(x, y, state, square.pontoon, square.rocky, square.obstacle))

        return tiles

    @staticmethod
    def _spec_kwargs(data: dict) -> Dict[str, Any]:
        kwargs = BridgePuzzle._spec_kwargs(data)
        kwargs['flow_squares'] = [FlowSquare.from_dict(s) for s in data.get('flowSquares') or []]
        kwargs['edge_inputs'] = [Point.coerce(p) for p in data.get('edgeInputs') or []]
        return kwargs

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['flowSquares'] = [s.to_dict() for s in self.flow_squares.values()]
        data['edgeInputs'] = [p.as_dict() for p in self.edge_inputs]
        return data

