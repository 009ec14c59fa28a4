"""
Breadth-first traversal shared by the grid flood fill and water propagation.
"""

from collections import deque
from typing import Callable, Hashable, Iterable, List, TypeVar

Node = TypeVar('Node', bound=Hashable)


def breadth_first(starts: Iterable[Node],
                  neighbours: Callable[[Node], Iterable[Node]]) -> List[Node]:
    """
    Visit every node reachable from any of the start nodes.

    A node is marked visited when it is enqueued, so each node is expanded at
    most once. Start nodes are always visited, even if no neighbour function
    would lead back to them.

    Args:
        starts: Seed nodes, visited in the order given
        neighbours: Returns the nodes reachable in one step from a node

    Returns:
        Visited nodes in breadth-first order
    """
    visited = set()
    order: List[Node] = []
    queue = deque()

    for node in starts:
        if node not in visited:
            visited.add(node)
            queue.append(node)

    while queue:
        current = queue.popleft()
        order.append(current)

        for neighbour in neighbours(current):
            if neighbour not in visited:
                visited.add(neighbour)
                queue.append(neighbour)

    return order


def grid_neighbours(x: int, y: int):
    """Orthogonal neighbours in up, down, left, right order"""
    return [(x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)]
