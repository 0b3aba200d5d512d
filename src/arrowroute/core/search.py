"""Bidirectional shortest-path search over the visibility graph.

Implements NBA* (New Bidirectional A*): two best-first frontiers grow at the
same time, one forward from the source guided by the straight-line distance to
the target, one backward from the target guided by the straight-line distance
to the source. A node settled by either side is closed for both. Nodes whose
estimate cannot beat the best complete path found so far are not expanded.
"""

import heapq
import itertools
import math
from dataclasses import dataclass

from arrowroute.core.geometry import distance
from arrowroute.domain import VisibilityGraph


@dataclass(slots=True)
class _NodeState:
    """Per-node bookkeeping shared by both search directions."""

    g_forward: float = math.inf
    g_backward: float = math.inf
    f_forward: float = math.inf
    f_backward: float = math.inf
    parent_forward: int | None = None
    parent_backward: int | None = None
    closed: bool = False


class BidirectionalSearch:
    """NBA* path finder for one visibility graph.

    Edge weights are the true costs; the heuristic is the Euclidean distance
    between node positions, which is admissible and consistent for graphs
    whose weights are Euclidean lengths.

    Example:
        search = BidirectionalSearch(graph)
        node_path = search.find(graph.start_index, graph.end_index)
    """

    def __init__(self, graph: VisibilityGraph) -> None:
        self.graph = graph
        self._best_cost = math.inf
        self._meeting: int | None = None
        self._f_forward_min = math.inf
        self._f_backward_min = math.inf

    def _heuristic(self, a: int, b: int) -> float:
        return distance(self.graph.position(a), self.graph.position(b))

    def find(self, source: int, target: int) -> list[int]:
        """Find a shortest node path from source to target.

        Args:
            source: Index of the first node
            target: Index of the last node

        Returns:
            Node indices from source to target, or an empty list when the
            target is unreachable
        """
        if source == target:
            return [source]

        states = [_NodeState() for _ in self.graph.nodes]
        counter = itertools.count()
        open_forward: list[tuple[float, int, int]] = []
        open_backward: list[tuple[float, int, int]] = []

        estimate = self._heuristic(source, target)
        self._f_forward_min = estimate
        self._f_backward_min = estimate

        origin = states[source]
        origin.g_forward = 0.0
        origin.f_forward = estimate
        heapq.heappush(open_forward, (estimate, next(counter), source))

        goal = states[target]
        goal.g_backward = 0.0
        goal.f_backward = estimate
        heapq.heappush(open_backward, (estimate, next(counter), target))

        self._best_cost = math.inf
        self._meeting = None

        while open_forward and open_backward:
            # Entries left on both sides can no longer improve the best path
            if min(self._f_forward_min, self._f_backward_min) >= self._best_cost:
                break

            if len(open_forward) < len(open_backward):
                self._expand_forward(states, open_forward, counter, source, target)
            else:
                self._expand_backward(states, open_backward, counter, source, target)

        if self._meeting is None:
            return []
        return self._reconstruct(states, self._meeting)

    def _expand_forward(
        self,
        states: list[_NodeState],
        frontier: list[tuple[float, int, int]],
        counter: "itertools.count[int]",
        source: int,
        target: int,
    ) -> None:
        f_score, _, node = heapq.heappop(frontier)
        state = states[node]

        if not state.closed and f_score <= state.f_forward:
            state.closed = True
            reduced = state.g_forward + self._f_backward_min - self._heuristic(source, node)
            if state.f_forward < self._best_cost and reduced < self._best_cost:
                for neighbor, weight in self.graph.neighbors(node):
                    other = states[neighbor]
                    if other.closed:
                        continue

                    tentative = state.g_forward + weight
                    if tentative < other.g_forward:
                        other.g_forward = tentative
                        other.f_forward = tentative + self._heuristic(neighbor, target)
                        other.parent_forward = node
                        heapq.heappush(frontier, (other.f_forward, next(counter), neighbor))

                    candidate = other.g_forward + other.g_backward
                    if candidate < self._best_cost:
                        self._best_cost = candidate
                        self._meeting = neighbor

        _discard_stale(frontier, states, forward=True)
        if frontier:
            self._f_forward_min = frontier[0][0]

    def _expand_backward(
        self,
        states: list[_NodeState],
        frontier: list[tuple[float, int, int]],
        counter: "itertools.count[int]",
        source: int,
        target: int,
    ) -> None:
        f_score, _, node = heapq.heappop(frontier)
        state = states[node]

        if not state.closed and f_score <= state.f_backward:
            state.closed = True
            reduced = state.g_backward + self._f_forward_min - self._heuristic(node, target)
            if state.f_backward < self._best_cost and reduced < self._best_cost:
                for neighbor, weight in self.graph.neighbors(node):
                    other = states[neighbor]
                    if other.closed:
                        continue

                    tentative = state.g_backward + weight
                    if tentative < other.g_backward:
                        other.g_backward = tentative
                        other.f_backward = tentative + self._heuristic(source, neighbor)
                        other.parent_backward = node
                        heapq.heappush(frontier, (other.f_backward, next(counter), neighbor))

                    candidate = other.g_forward + other.g_backward
                    if candidate < self._best_cost:
                        self._best_cost = candidate
                        self._meeting = neighbor

        _discard_stale(frontier, states, forward=False)
        if frontier:
            self._f_backward_min = frontier[0][0]

    @staticmethod
    def _reconstruct(states: list[_NodeState], meeting: int) -> list[int]:
        path = [meeting]
        node = states[meeting].parent_forward
        while node is not None:
            path.append(node)
            node = states[node].parent_forward
        path.reverse()

        node = states[meeting].parent_backward
        while node is not None:
            path.append(node)
            node = states[node].parent_backward
        return path


def _discard_stale(
    frontier: list[tuple[float, int, int]], states: list[_NodeState], forward: bool
) -> None:
    """Pop superseded or closed entries off the top of a frontier."""
    while frontier:
        f_score, _, node = frontier[0]
        state = states[node]
        current = state.f_forward if forward else state.f_backward
        if not state.closed and f_score <= current:
            return
        heapq.heappop(frontier)


def find_node_path(graph: VisibilityGraph) -> list[int]:
    """Search the graph from its start node to its end node."""
    return BidirectionalSearch(graph).find(graph.start_index, graph.end_index)
