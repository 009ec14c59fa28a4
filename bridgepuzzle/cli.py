"""
Command line check of a puzzle file against its constraints.

Usage:
    bridgepuzzle-check puzzle.json --place b1:0,0:2,0 --place b2:2,0:2,3
    bridgepuzzle-check puzzle.yaml --show-grid --verbose
"""

import sys
from pathlib import Path
from typing import Tuple

import click
import yaml

from .core.puzzle import BridgePuzzle
from .core.flow import FlowPuzzle
from .core.validator import PuzzleValidator
from .core.utils import setup_logger, load_puzzle_spec
from .geometry import Point
from . import config


def parse_placement(value: str) -> Tuple[str, Point, Point]:
    """
    Parse 'ID:X1,Y1:X2,Y2' into a bridge id and two points.

    Raises:
        ValueError: If the text is malformed
    """
    parts = value.split(':')
    if len(parts) != 3:
        raise ValueError(f"Placement should look like ID:X1,Y1:X2,Y2, got {value!r}")

    bridge_id, start, end = parts
    try:
        x1, y1 = (int(v) for v in start.split(','))
        x2, y2 = (int(v) for v in end.split(','))
    except ValueError:
        raise ValueError(f"Placement coordinates must be integers: {value!r}") from None

    return bridge_id, Point(x1, y1), Point(x2, y2)


def load_any_puzzle(puzzle_path: Path) -> BridgePuzzle:
    """Load a flow puzzle when the file describes water, else a plain puzzle"""
    data = load_puzzle_spec(puzzle_path)
    if data.get('flowSquares') or data.get('edgeInputs'):
        return FlowPuzzle.from_dict(data)
    return BridgePuzzle.from_dict(data)


@click.command()
@click.argument('puzzle_file', type=click.Path())
@click.option('--place', '-p', 'placements', multiple=True, metavar='ID:X1,Y1:X2,Y2',
              help='Place a bridge before checking (repeatable)')
@click.option('--show-grid', '-g', is_flag=True, help='Print the grid after placing bridges')
@click.option('--verbose', is_flag=True, help='Enable verbose output')
def main(puzzle_file, placements, show_grid, verbose):
    """Check a bridge puzzle and report every constraint."""

    # Loggers set up from here on use this level
    config.LOG_LEVEL = "DEBUG" if verbose else "WARNING"
    logger = setup_logger("PuzzleCheck")

    puzzle_path = Path(puzzle_file)
    if not puzzle_path.exists():
        click.echo(f"Error: Puzzle file '{puzzle_file}' not found")
        sys.exit(1)

    try:
        puzzle = load_any_puzzle(puzzle_path)
    except (ValueError, KeyError, yaml.YAMLError) as e:
        click.echo(f"Error loading puzzle: {e}")
        sys.exit(1)
    logger.info(f"Loaded {puzzle!r}")

    for value in placements:
        try:
            bridge_id, start, end = parse_placement(value)
            puzzle.place_bridge(bridge_id, start, end)
        except ValueError as e:
            click.echo(f"Error: {e}")
            sys.exit(1)

    structure = PuzzleValidator.validate_structure(puzzle)
    for error in structure.errors:
        click.echo(f"Structure error: {error}")
    for warning in structure.warnings:
        click.echo(f"Structure warning: {warning}")

    if show_grid:
        click.echo(str(puzzle))
        click.echo()

    result = PuzzleValidator(puzzle).validate_all()
    for report in result.per_constraint:
        status = "OK  " if report.result.satisfied else "FAIL"
        line = f"[{status}] {report.constraint_id} {report.type}"
        if report.result.message:
            line += f": {report.result.message}"
        click.echo(line)

    click.echo(f"\n{len(result.per_constraint) - result.unsatisfied_count}/"
               f"{len(result.per_constraint)} constraints satisfied")

    if result.all_satisfied:
        click.echo("Puzzle solved")
        sys.exit(0)

    click.echo("Puzzle not solved")
    sys.exit(1)


if __name__ == '__main__':
    main()
