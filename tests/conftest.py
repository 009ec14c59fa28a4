import pytest

from bridgepuzzle.core.puzzle import BridgePuzzle
from bridgepuzzle.core.flow import FlowPuzzle


def build_spec(islands=(), width=5, height=5, bridge_types=None, constraints=None, **extra):
    """Spec dictionary with compact island tuples (id, x, y, *tags)"""
    spec = {
        'id': 'test',
        'size': {'width': width, 'height': height},
        'islands': [
            {'id': island[0], 'x': island[1], 'y': island[2], 'constraints': list(island[3:])}
            for island in islands
        ],
        'bridgeTypes': bridge_types if bridge_types is not None else [{'id': 'wood', 'count': 6}],
        'constraints': constraints or [],
    }
    spec.update(extra)
    return spec


@pytest.fixture
def make_puzzle():
    def factory(*args, **kwargs):
        return BridgePuzzle.from_dict(build_spec(*args, **kwargs))
    return factory


@pytest.fixture
def make_flow_puzzle():
    def factory(*args, **kwargs):
        return FlowPuzzle.from_dict(build_spec(*args, **kwargs))
    return factory


@pytest.fixture
def square_puzzle(make_puzzle):
    """Four islands at the corners of a 2x2 square, all sides bridged"""
    puzzle = make_puzzle([('A', 1, 1), ('B', 3, 1), ('C', 1, 3), ('D', 3, 3)])
    puzzle.place_bridge('b1', (1, 1), (3, 1))
    puzzle.place_bridge('b2', (3, 1), (3, 3))
    puzzle.place_bridge('b3', (3, 3), (1, 3))
    puzzle.place_bridge('b4', (1, 3), (1, 1))
    return puzzle
