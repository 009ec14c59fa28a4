"""
Core data structure for bridge puzzles.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Union, Any, Iterable
from pathlib import Path

import numpy as np
import networkx as nx

from .bridge import Bridge, BridgeType
from .inventory import BridgeInventory
from .utils import setup_logger, load_puzzle_spec, save_puzzle_spec
from ..geometry import Point, covers_interior, span_cells, is_axis_aligned, EMPTY, ISLAND, BRIDGE
from ..constraints.base import Constraint
from ..constraints.registry import create_constraints_from_spec
from ..constraints.bridge_constraints import BridgeLengthConstraint
from .. import config


@dataclass(frozen=True)
class Island:
    """A fixed grid point that bridges connect to or pass over"""
    id: str
    x: int
    y: int
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def tag_value(self, *keys: str) -> Optional[str]:
        """Value of the first 'key=value' tag matching any of the keys"""
        for tag in self.tags:
            name, sep, value = tag.partition('=')
            if sep and name in keys:
                return value
        return None

    @property
    def colour(self) -> Optional[str]:
        return self.tag_value('colour', 'color')

    @property
    def num_bridges(self) -> Optional[int]:
        """Required bridge count from a 'num_bridges=N' tag, if present and numeric"""
        value = self.tag_value('num_bridges')
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Island':
        tags = data.get('tags', data.get('constraints')) or []
        return cls(str(data['id']), int(data['x']), int(data['y']), tuple(tags))

    def to_dict(self) -> dict:
        return {'id': self.id, 'x': self.x, 'y': self.y, 'constraints': list(self.tags)}

    def __repr__(self):
        return f"Island({self.id}, ({self.x}, {self.y}))"


class BridgePuzzle:
    """Puzzle aggregate: islands, the bridge inventory and the active constraints"""

    def __init__(self, puzzle_id: str, width: int, height: int,
                 islands: Optional[Iterable[Island]] = None,
                 bridge_types: Optional[Iterable[Tuple[BridgeType, int]]] = None,
                 constraints: Optional[List[Constraint]] = None,
                 max_num_bridges: int = config.DEFAULT_MAX_NUM_BRIDGES):
        """
        Initialize a bridge puzzle.

        Args:
            puzzle_id: Puzzle identifier
            width: Width of the puzzle grid
            height: Height of the puzzle grid
            islands: Islands in the puzzle
            bridge_types: (bridge type, count) pairs for the inventory
            constraints: Active constraints. When empty, a length constraint
                is derived for every fixed-length bridge type.
            max_num_bridges: Maximum parallel bridges between one island pair

        Raises:
            ValueError: On duplicate island ids or positions
        """
        self.logger = setup_logger(self.__class__.__name__)
        self.id = puzzle_id
        self.width = width
        self.height = height
        self.max_num_bridges = max_num_bridges
        self.islands: List[Island] = []
        self._id_to_island: Dict[str, Island] = {}
        self._island_map: Dict[Tuple[int, int], Island] = {}

        for island in islands or []:
            self._add_island(island)

        self.inventory = BridgeInventory(bridge_types or [])

        self.constraints: List[Constraint] = list(constraints or [])
        if not self.constraints:
            self.constraints = self._derive_length_constraints()

    def _add_island(self, island: Island):
        if island.id in self._id_to_island:
            raise ValueError(f"Duplicate island id: {island.id}")
        if (island.x, island.y) in self._island_map:
            raise ValueError(f"Island already exists at ({island.x}, {island.y})")

        self.islands.append(island)
        self._id_to_island[island.id] = island
        self._island_map[(island.x, island.y)] = island

    def _derive_length_constraints(self) -> List[Constraint]:
        derived = []
        for bridge_type in self.inventory.bridge_types:
            if bridge_type.has_length():
                constraint = BridgeLengthConstraint(bridge_type.id, bridge_type.length)
                constraint.id = f"length:{bridge_type.id}"
                derived.append(constraint)
        return derived

    @property
    def bridges(self) -> List[Bridge]:
        """All bridges (placed or unplaced)"""
        return self.inventory.bridges

    @property
    def placed_bridges(self) -> List[Bridge]:
        return [b for b in self.inventory.bridges if b.is_placed]

    def get_island(self, island_id: str) -> Optional[Island]:
        return self._id_to_island.get(island_id)

    def island_at(self, x: int, y: int) -> Optional[Island]:
        return self._island_map.get((x, y))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def place_bridge(self, bridge_id: str, start, end) -> bool:
        """
        Set the endpoints of a bridge. Legality is the caller's concern and
        should be checked first with could_place_bridge_of_type.

        Raises:
            ValueError: If the bridge id is unknown
        """
        bridge = self.inventory.get_bridge(bridge_id)
        bridge.place(Point.coerce(start), Point.coerce(end))
        self.logger.debug(f"Placed {bridge}")
        return True

    def remove_bridge(self, bridge_id: str):
        """
        Clear a bridge's endpoints and return it to the pool.

        Raises:
            ValueError: If the bridge id is unknown
        """
        bridge = self.inventory.get_bridge(bridge_id)
        bridge.clear()
        self.inventory.return_bridge(bridge_id)
        self.logger.debug(f"Removed {bridge_id}")

    def take_bridge_of_type(self, type_id: str) -> Optional[Bridge]:
        return self.inventory.take_bridge(type_id)

    def get_available_bridge_types(self) -> List[BridgeType]:
        return self.inventory.bridge_types

    def available_counts(self) -> Dict[str, int]:
        return self.inventory.counts_by_type()

    def all_bridges_placed(self) -> bool:
        return all(b.is_placed for b in self.inventory.bridges)

    def bridges_from_island(self, island: Island) -> List[Bridge]:
        """Placed bridges with an endpoint exactly on the island"""
        return [b for b in self.placed_bridges if b.placement.has_endpoint(island.x, island.y)]

    def get_bridge_count_between(self, start_island_id: str, end_island_id: str) -> int:
        """Count placed bridges between two islands (both directions)"""
        start_island = self.get_island(start_island_id)
        end_island = self.get_island(end_island_id)
        if not start_island or not end_island:
            return 0

        return sum(1 for b in self.placed_bridges
                   if b.placement.connects(start_island.position, end_island.position))

    def could_place_bridge_at(self, start_island_id: str, end_island_id: str) -> bool:
        return self.could_place_bridge_of_type(start_island_id, end_island_id, None)

    def could_place_bridge_of_type(self, start_island_id: str, end_island_id: str,
                                   type_id: Optional[str] = None) -> bool:
        """
        Whether a bridge could join the two islands under the puzzle rules.

        Without a type only island existence and the parallel-bridge limit
        are checked. With one, the islands must also share a row or column.
        """
        if start_island_id == end_island_id:
            return False

        start_island = self.get_island(start_island_id)
        end_island = self.get_island(end_island_id)
        if not start_island or not end_island:
            return False

        if self.get_bridge_count_between(start_island_id, end_island_id) >= self.max_num_bridges:
            return False

        if not type_id:
            return True

        if not is_axis_aligned(start_island.position, end_island.position):
            return False

        bridge_type = self.inventory.get_type(type_id)
        if bridge_type is None:
            self.logger.warning(f"Unknown bridge type {type_id}; allowing placement")
            return True

        if not bridge_type.can_cover_island and not bridge_type.must_cover_island:
            if self.bridge_would_cross_islands(start_island, end_island):
                return False

        return bridge_type.allows_span(start_island.position, end_island.position)

    def bridge_would_cross_islands(self, start_island: Island, end_island: Island) -> bool:
        """True if any other island lies strictly between the two on their shared row or column"""
        if start_island.x != end_island.x and start_island.y != end_island.y:
            return False

        if start_island.y == end_island.y:  # Horizontal
            y = start_island.y
            for x in range(min(start_island.x, end_island.x) + 1, max(start_island.x, end_island.x)):
                if (x, y) in self._island_map:
                    return True
        else:  # Vertical
            x = start_island.x
            for y in range(min(start_island.y, end_island.y) + 1, max(start_island.y, end_island.y)):
                if (x, y) in self._island_map:
                    return True

        return False

    def bridges_at(self, x: int, y: int) -> List[Bridge]:
        """
        Placed bridges passing through (x, y).

        The point must sit at the same proportion t in [0, 1] along the
        bridge for every coordinate that varies.
        """
        found = []
        for bridge in self.placed_bridges:
            start, end = bridge.start, bridge.end
            dx = end.x - start.x
            dy = end.y - start.y
            if dx == 0 and dy == 0:
                continue

            px = (x - start.x) / dx if dx != 0 else None
            py = (y - start.y) / dy if dy != 0 else None

            if dx != 0 and dy != 0:
                if px == py and 0 <= px <= 1:
                    found.append(bridge)
            elif dx == 0:
                if x == start.x and 0 <= py <= 1:
                    found.append(bridge)
            elif y == start.y and 0 <= px <= 1:
                found.append(bridge)

        return found

    def bridges_covering(self, x: int, y: int) -> List[Bridge]:
        """Placed bridges passing over (x, y) as an interior point"""
        return [b for b in self.placed_bridges if covers_interior(b.placement, x, y)]

    def island_graph(self) -> nx.MultiGraph:
        """
        Islands as nodes, one edge per placed bridge whose endpoints are both
        islands. Edge keys are bridge ids.
        """
        graph = nx.MultiGraph()
        for island in self.islands:
            graph.add_node(island.id, x=island.x, y=island.y, colour=island.colour)

        for bridge in self.placed_bridges:
            start_island = self.island_at(bridge.start.x, bridge.start.y)
            end_island = self.island_at(bridge.end.x, bridge.end.y)
            if start_island and end_island:
                graph.add_edge(start_island.id, end_island.id, key=bridge.id)

        return graph

    def occupancy_grid(self) -> np.ndarray:
        """
        Grid indexed [y, x]: ISLAND for island cells, BRIDGE for cells a
        placed orthogonal bridge spans, EMPTY otherwise.
        """
        grid = np.full((self.height, self.width), EMPTY, dtype=np.int8)

        for bridge in self.placed_bridges:
            for x, y in span_cells(bridge.placement):
                if self.in_bounds(x, y):
                    grid[y, x] = BRIDGE

        for island in self.islands:
            if self.in_bounds(island.x, island.y):
                grid[island.y, island.x] = ISLAND

        return grid

    @classmethod
    def from_dict(cls, data: dict) -> 'BridgePuzzle':
        """
        Create a puzzle from a declarative spec.

        Raises:
            ValueError: On unknown constraint types, missing constraint
                parameters or duplicate islands
        """
        return cls(**cls._spec_kwargs(data))

    @staticmethod
    def _spec_kwargs(data: dict) -> Dict[str, Any]:
        """Constructor arguments for a spec dictionary"""
        size = data['size']
        max_num_bridges = data.get('maxNumBridges')
        if max_num_bridges is None:
            max_num_bridges = config.DEFAULT_MAX_NUM_BRIDGES

        return {
            'puzzle_id': str(data.get('id', '')),
            'width': int(size['width']),
            'height': int(size['height']),
            'islands': [Island.from_dict(i) for i in data.get('islands', [])],
            'bridge_types': [
                (BridgeType.from_dict(t), int(t.get('count', config.DEFAULT_BRIDGE_COUNT)))
                for t in data.get('bridgeTypes', [])
            ],
            'constraints': create_constraints_from_spec(data.get('constraints') or []),
            'max_num_bridges': int(max_num_bridges),
        }

    def to_dict(self) -> dict:
        """Convert the puzzle definition (not its placements) to a spec dictionary"""
        type_counts: Dict[str, int] = {}
        for bridge in self.inventory.bridges:
            type_counts[bridge.type.id] = type_counts.get(bridge.type.id, 0) + 1

        return {
            'id': self.id,
            'size': {'width': self.width, 'height': self.height},
            'islands': [i.to_dict() for i in self.islands],
            'bridgeTypes': [
                dict(t.to_dict(), count=type_counts.get(t.id, 0))
                for t in self.inventory.bridge_types
            ],
            'constraints': [c.to_spec() for c in self.constraints],
            'maxNumBridges': self.max_num_bridges,
        }

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> 'BridgePuzzle':
        """Load a puzzle from a JSON or YAML file"""
        puzzle = cls.from_dict(load_puzzle_spec(filepath))
        puzzle.logger.info(f"Loaded {puzzle!r} from {filepath}")
        return puzzle

    def save(self, filepath: Union[str, Path]):
        save_puzzle_spec(self.to_dict(), filepath)

    def __str__(self):
        """Grid picture of the current state (useful for debugging)"""
        grid = [['.' for _ in range(self.width)] for _ in range(self.height)]
        symbols = {('h', 1): '─', ('h', 2): '═', ('v', 1): '│', ('v', 2): '║'}

        # Bridges per cell and orientation
        counts: Dict[Tuple[int, int, str], int] = {}
        for bridge in self.placed_bridges:
            placement = bridge.placement
            if placement.is_horizontal:
                orientation = 'h'
            elif placement.is_vertical:
                orientation = 'v'
            else:
                continue
            for x, y in span_cells(placement):
                if self.in_bounds(x, y):
                    key = (x, y, orientation)
                    counts[key] = counts.get(key, 0) + 1

        for (x, y, orientation), count in counts.items():
            if grid[y][x] != '.':
                grid[y][x] = '┼'
            else:
                grid[y][x] = symbols[(orientation, min(count, 2))]

        for island in self.islands:
            if self.in_bounds(island.x, island.y):
                count = island.num_bridges
                grid[island.y][island.x] = str(count) if count is not None and 0 <= count <= 9 else 'o'

        return '\n'.join(''.join(row) for row in grid)

    def __repr__(self):
        return (f"{self.__class__.__name__}({self.id!r}, {self.width}x{self.height}, "
                f"{len(self.islands)} islands, {len(self.placed_bridges)}/{len(self.bridges)} bridges placed)")
