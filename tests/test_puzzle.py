import json

import numpy as np
import pytest

from bridgepuzzle.core.puzzle import BridgePuzzle, Island
from bridgepuzzle.constraints import BridgeLengthConstraint, NoCrossingConstraint
from bridgepuzzle.geometry import Point, EMPTY, ISLAND, BRIDGE


class TestConstruction:

    def test_duplicate_island_id_raises(self, make_puzzle):
        with pytest.raises(ValueError, match="Duplicate island id"):
            make_puzzle([('A', 0, 0), ('A', 2, 0)])

    def test_duplicate_island_position_raises(self, make_puzzle):
        with pytest.raises(ValueError, match="already exists"):
            make_puzzle([('A', 0, 0), ('B', 0, 0)])

    def test_length_constraints_derived_without_explicit_constraints(self, make_puzzle):
        puzzle = make_puzzle(bridge_types=[
            {'id': 'short', 'length': 2, 'count': 1},
            {'id': 'rope', 'count': 1},
        ])
        assert len(puzzle.constraints) == 1
        constraint = puzzle.constraints[0]
        assert isinstance(constraint, BridgeLengthConstraint)
        assert constraint.type_id == 'short'
        assert constraint.expected_length == 2

    def test_explicit_constraints_replace_derived_ones(self, make_puzzle):
        puzzle = make_puzzle(
            bridge_types=[{'id': 'short', 'length': 2, 'count': 1}],
            constraints=[{'type': 'NoCrossingConstraint'}]
        )
        assert len(puzzle.constraints) == 1
        assert isinstance(puzzle.constraints[0], NoCrossingConstraint)

    def test_max_num_bridges_defaults_to_two(self, make_puzzle):
        assert make_puzzle().max_num_bridges == 2

    def test_island_tags(self):
        island = Island.from_dict({'id': 'A', 'x': 1, 'y': 2, 'constraints': ['color=red', 'num_bridges=3']})
        assert island.colour == 'red'
        assert island.num_bridges == 3
        assert Island('B', 0, 0, ('num_bridges=lots',)).num_bridges is None


class TestMutations:

    def test_place_and_remove(self, make_puzzle):
        puzzle = make_puzzle([('A', 0, 0), ('B', 3, 0)])
        bridge = puzzle.take_bridge_of_type('wood')
        assert puzzle.place_bridge(bridge.id, {'x': 0, 'y': 0}, Point(3, 0))
        assert bridge.start == Point(0, 0)
        assert puzzle.available_counts() == {'wood': 5}

        puzzle.remove_bridge(bridge.id)
        assert bridge.placement is None
        assert puzzle.available_counts() == {'wood': 6}

    def test_unknown_bridge_id_raises(self, make_puzzle):
        puzzle = make_puzzle()
        with pytest.raises(ValueError):
            puzzle.place_bridge('b99', (0, 0), (1, 0))
        with pytest.raises(ValueError):
            puzzle.remove_bridge('b99')

    def test_all_bridges_placed(self, make_puzzle):
        puzzle = make_puzzle(bridge_types=[{'id': 'wood', 'count': 1}])
        assert not puzzle.all_bridges_placed()
        puzzle.place_bridge('b1', (0, 0), (1, 0))
        assert puzzle.all_bridges_placed()


class TestPlacementLegality:

    @pytest.fixture
    def puzzle(self, make_puzzle):
        return make_puzzle(
            [('A', 0, 0), ('B', 2, 0), ('C', 4, 0), ('D', 0, 3)],
            bridge_types=[
                {'id': 'wood', 'count': 4},
                {'id': 'long', 'count': 1, 'canCoverIsland': True},
                {'id': 'three', 'count': 1, 'length': 3},
            ]
        )

    def test_same_or_missing_island(self, puzzle):
        assert not puzzle.could_place_bridge_of_type('A', 'A')
        assert not puzzle.could_place_bridge_of_type('A', 'Z')

    def test_untyped_check_ignores_geometry(self, puzzle):
        assert puzzle.could_place_bridge_at('A', 'C')

    def test_max_parallel_bridges(self, puzzle):
        puzzle.place_bridge('b1', (0, 0), (2, 0))
        assert puzzle.could_place_bridge_of_type('A', 'B', 'wood')
        puzzle.place_bridge('b2', (2, 0), (0, 0))
        assert puzzle.get_bridge_count_between('B', 'A') == 2
        assert not puzzle.could_place_bridge_of_type('A', 'B', 'wood')

    def test_island_in_between_blocks_non_covering_types(self, puzzle):
        assert not puzzle.could_place_bridge_of_type('A', 'C', 'wood')
        assert puzzle.could_place_bridge_of_type('A', 'C', 'long')

    def test_fixed_length_must_match(self, puzzle):
        assert puzzle.could_place_bridge_of_type('A', 'D', 'three')
        assert not puzzle.could_place_bridge_of_type('A', 'B', 'three')

    def test_unknown_type_is_allowed(self, puzzle):
        assert puzzle.could_place_bridge_of_type('A', 'B', 'mystery')

    def test_typed_check_rejects_diagonal_pairs(self, puzzle):
        # B (2, 0) and D (0, 3) share neither a row nor a column
        assert not puzzle.could_place_bridge_of_type('B', 'D', 'wood')
        assert not puzzle.could_place_bridge_of_type('B', 'D', 'long')
        assert not puzzle.could_place_bridge_of_type('B', 'D', 'mystery')
        assert puzzle.could_place_bridge_at('B', 'D')


class TestQueries:

    def test_bridges_at_interpolates(self, make_puzzle):
        puzzle = make_puzzle()
        puzzle.place_bridge('b1', (0, 1), (4, 1))
        puzzle.place_bridge('b2', (2, 0), (2, 4))
        puzzle.place_bridge('b3', (0, 0), (4, 4))

        assert [b.id for b in puzzle.bridges_at(2, 1)] == ['b1', 'b2']
        assert [b.id for b in puzzle.bridges_at(3, 3)] == ['b3']
        assert [b.id for b in puzzle.bridges_at(0, 1)] == ['b1']
        assert puzzle.bridges_at(4, 0) == []

    def test_bridges_from_island_needs_exact_endpoint(self, make_puzzle):
        puzzle = make_puzzle([('A', 0, 0), ('B', 2, 0), ('C', 4, 0)])
        puzzle.place_bridge('b1', (0, 0), (4, 0))
        puzzle.place_bridge('b2', (2, 0), (2, 3))

        assert [b.id for b in puzzle.bridges_from_island(puzzle.get_island('A'))] == ['b1']
        assert [b.id for b in puzzle.bridges_from_island(puzzle.get_island('B'))] == ['b2']

    def test_bridge_count_between_unknown_ids(self, make_puzzle):
        assert make_puzzle([('A', 0, 0)]).get_bridge_count_between('A', 'nope') == 0

    def test_island_graph(self, make_puzzle):
        puzzle = make_puzzle([('A', 0, 0, 'colour=red'), ('B', 2, 0), ('C', 4, 4)])
        puzzle.place_bridge('b1', (0, 0), (2, 0))
        puzzle.place_bridge('b2', (0, 0), (2, 0))
        puzzle.place_bridge('b3', (4, 4), (4, 0))  # dangles off an island

        graph = puzzle.island_graph()
        assert graph.number_of_edges('A', 'B') == 2
        assert graph.number_of_edges() == 2
        assert graph.nodes['A']['colour'] == 'red'

    def test_occupancy_grid(self, square_puzzle):
        grid = square_puzzle.occupancy_grid()
        assert grid.shape == (5, 5)
        assert grid[1, 1] == ISLAND
        assert grid[1, 2] == BRIDGE
        assert grid[2, 2] == EMPTY
        assert np.count_nonzero(grid == BRIDGE) == 4

    def test_str_draws_bridges(self, make_puzzle):
        puzzle = make_puzzle([('A', 0, 0, 'num_bridges=2'), ('B', 3, 0)], width=4, height=1)
        puzzle.place_bridge('b1', (0, 0), (3, 0))
        puzzle.place_bridge('b2', (0, 0), (3, 0))
        assert str(puzzle) == "2══o"


class TestSerialization:

    def test_round_trip_through_dict(self, make_puzzle):
        puzzle = make_puzzle(
            [('A', 0, 0, 'colour=red'), ('B', 2, 0)],
            bridge_types=[{'id': 'wood', 'count': 2, 'length': 2}],
            constraints=[{'type': 'IslandVisibilityConstraint', 'params': {'islandId': 'A', 'count': 1}}]
        )
        copy = BridgePuzzle.from_dict(puzzle.to_dict())

        assert [i.to_dict() for i in copy.islands] == [i.to_dict() for i in puzzle.islands]
        assert copy.available_counts() == {'wood': 2}
        assert copy.inventory.get_type('wood').length == 2
        assert [c.to_spec() for c in copy.constraints] == [c.to_spec() for c in puzzle.constraints]

    def test_load_json_and_yaml(self, tmp_path, make_puzzle):
        puzzle = make_puzzle([('A', 0, 0), ('B', 2, 0)])

        json_path = tmp_path / 'puzzle.json'
        puzzle.save(json_path)
        assert json.loads(json_path.read_text())['islands'][1]['id'] == 'B'

        yaml_path = tmp_path / 'puzzle.yaml'
        puzzle.save(yaml_path)
        loaded = BridgePuzzle.load(yaml_path)
        assert [i.id for i in loaded.islands] == ['A', 'B']

    def test_load_rejects_unknown_suffix(self, tmp_path):
        path = tmp_path / 'puzzle.txt'
        path.write_text('{}')
        with pytest.raises(ValueError, match="Unsupported"):
            BridgePuzzle.load(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            BridgePuzzle.load(tmp_path / 'missing.json')
