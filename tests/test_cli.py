import json
import logging

import pytest
from click.testing import CliRunner

from bridgepuzzle import config
from bridgepuzzle.cli import main, parse_placement
from bridgepuzzle.geometry import Point
from conftest import build_spec


@pytest.fixture(autouse=True)
def restore_log_level(monkeypatch):
    monkeypatch.setattr(config, 'LOG_LEVEL', config.LOG_LEVEL)


@pytest.fixture
def puzzle_file(tmp_path):
    spec = build_spec(
        [('A', 0, 0), ('B', 2, 0)],
        bridge_types=[{'id': 'wood', 'count': 1}],
        constraints=[{'type': 'AllBridgesPlacedConstraint'}, {'type': 'NoCrossingConstraint'}]
    )
    path = tmp_path / 'puzzle.json'
    path.write_text(json.dumps(spec))
    return path


def test_solved_puzzle_exits_zero(puzzle_file):
    result = CliRunner().invoke(main, [str(puzzle_file), '--place', 'b1:0,0:2,0'])
    assert result.exit_code == 0
    assert "Puzzle solved" in result.output
    assert "2/2 constraints satisfied" in result.output


def test_unsolved_puzzle_exits_one(puzzle_file):
    result = CliRunner().invoke(main, [str(puzzle_file), '--show-grid'])
    assert result.exit_code == 1
    assert "[FAIL] c1 AllBridgesPlacedConstraint" in result.output
    assert "o.o" in result.output


def test_unknown_bridge_id(puzzle_file):
    result = CliRunner().invoke(main, [str(puzzle_file), '--place', 'b9:0,0:2,0'])
    assert result.exit_code == 1
    assert "No such bridge b9" in result.output


def test_missing_file(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / 'nope.json')])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_flow_puzzle_file(tmp_path):
    spec = build_spec(
        width=2, height=1,
        constraints=[{'type': 'MustHaveWaterConstraint', 'params': {'x': 1, 'y': 0}}],
        flowSquares=[{'x': 0, 'y': 0, 'outgoing': ['E'], 'isSource': True}, {'x': 1, 'y': 0}]
    )
    path = tmp_path / 'flow.json'
    path.write_text(json.dumps(spec))

    result = CliRunner().invoke(main, [str(path)])
    assert result.exit_code == 0


def test_parse_placement():
    assert parse_placement('b2:1,2:1,5') == ('b2', Point(1, 2), Point(1, 5))
    with pytest.raises(ValueError):
        parse_placement('b2:1,2')
    with pytest.raises(ValueError):
        parse_placement('b2:a,2:1,5')


def test_malformed_yaml_is_reported(tmp_path):
    path = tmp_path / 'broken.yaml'
    path.write_text('size: [unclosed\n')

    result = CliRunner().invoke(main, [str(path)])
    assert result.exit_code == 1
    assert "Error loading puzzle" in result.output


def test_verbose_reaches_puzzle_and_validator_loggers(puzzle_file):
    CliRunner().invoke(main, [str(puzzle_file), '--verbose'])
    assert logging.getLogger('BridgePuzzle').level == logging.DEBUG
    assert logging.getLogger('PuzzleValidator').level == logging.DEBUG

    CliRunner().invoke(main, [str(puzzle_file)])
    assert logging.getLogger('PuzzleValidator').level == logging.WARNING
