"""
Validator for bridge puzzle constraints.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

import networkx as nx

from .puzzle import BridgePuzzle
from .utils import setup_logger, timer
from ..constraints.base import ConstraintResult


@dataclass
class ConstraintReport:
    """Outcome of one constraint within a validation run"""
    constraint_id: Optional[str]
    type: str
    result: ConstraintResult


@dataclass
class ValidationResult:
    """Aggregate outcome of running every constraint"""
    all_satisfied: bool
    unsatisfied_count: int
    per_constraint: List[ConstraintReport] = field(default_factory=list)

    @property
    def violations(self) -> List[ConstraintReport]:
        return [r for r in self.per_constraint if not r.result.satisfied]

    def __bool__(self):
        return self.all_satisfied

    def __repr__(self):
        status = "Solved" if self.all_satisfied else "Unsolved"
        return f"ValidationResult({status}, {self.unsatisfied_count}/{len(self.per_constraint)} unsatisfied)"


@dataclass
class StructureReport:
    """Invariant breaches found by validate_structure; only errors make it invalid"""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        return f"StructureReport({len(self.errors)} errors, {len(self.warnings)} warnings)"


class PuzzleValidator:
    """Runs every constraint of a puzzle and aggregates the outcome"""

    def __init__(self, puzzle: BridgePuzzle):
        self.puzzle = puzzle
        self.logger = setup_logger(self.__class__.__name__)

    @timer
    def validate_all(self) -> ValidationResult:
        """
        Check every constraint against the current puzzle state.

        Nothing is cached; each call re-runs every check.
        """
        reports = []
        for constraint in self.puzzle.constraints:
            result = constraint.check(self.puzzle)
            reports.append(ConstraintReport(constraint.id, constraint.constraint_type.value, result))
            if not result.satisfied:
                self.logger.debug(f"{constraint.id} ({constraint.constraint_type.value}): {result.message}")

        unsatisfied = sum(1 for r in reports if not r.result.satisfied)
        self.logger.debug(f"{len(reports) - unsatisfied}/{len(reports)} constraints satisfied")

        return ValidationResult(
            all_satisfied=unsatisfied == 0,
            unsatisfied_count=unsatisfied,
            per_constraint=reports
        )

    def is_solved(self) -> bool:
        return self.validate_all().all_satisfied

    @staticmethod
    def validate_structure(puzzle: BridgePuzzle) -> StructureReport:
        """Check the invariants that construction and mutation do not enforce"""
        report = StructureReport()

        if puzzle.width <= 0 or puzzle.height <= 0:
            report.errors.append("Invalid puzzle dimensions")

        if not puzzle.islands:
            report.warnings.append("Puzzle has no islands")

        for island in puzzle.islands:
            if not puzzle.in_bounds(island.x, island.y):
                report.errors.append(f"Island {island.id} at ({island.x}, {island.y}) is outside the grid")

        seen = set()
        for bridge in puzzle.bridges:
            if bridge.id in seen:
                report.errors.append(f"Duplicate bridge id: {bridge.id}")
            seen.add(bridge.id)

        pair_counts: Dict[frozenset, int] = {}
        for bridge in puzzle.placed_bridges:
            placement = bridge.placement
            if placement.start == placement.end:
                report.errors.append(f"Bridge {bridge.id} has zero length")
                continue
            if not (placement.is_horizontal or placement.is_vertical):
                report.errors.append(f"Bridge {bridge.id} is not horizontal or vertical")

            start_island = puzzle.island_at(placement.start.x, placement.start.y)
            end_island = puzzle.island_at(placement.end.x, placement.end.y)
            if start_island is None or end_island is None:
                report.warnings.append(f"Bridge {bridge.id} does not end on islands at both ends")
                continue

            pair = frozenset((start_island.id, end_island.id))
            pair_counts[pair] = pair_counts.get(pair, 0) + 1

        for pair, count in pair_counts.items():
            if count > puzzle.max_num_bridges:
                a, b = sorted(pair)
                report.errors.append(f"Islands {a} and {b} joined by {count} bridges "
                                   f"(max {puzzle.max_num_bridges})")

        return report

    @staticmethod
    def get_puzzle_statistics(puzzle: BridgePuzzle) -> Dict[str, Any]:
        """Get various statistics about the puzzle"""
        graph = puzzle.island_graph()

        stats = {
            'width': puzzle.width,
            'height': puzzle.height,
            'num_islands': len(puzzle.islands),
            'num_bridges': len(puzzle.bridges),
            'num_placed': len(puzzle.placed_bridges),
            'available': puzzle.available_counts(),
            'num_constraints': len(puzzle.constraints),
            'density': len(puzzle.islands) / (puzzle.width * puzzle.height) if puzzle.width * puzzle.height else 0,
            'num_components': nx.number_connected_components(graph),
        }

        # Constraint type distribution
        type_dist: Dict[str, int] = {}
        for constraint in puzzle.constraints:
            name = constraint.constraint_type.value
            type_dist[name] = type_dist.get(name, 0) + 1
        stats['constraint_types'] = type_dist

        return stats

