import logging

import numpy as np
import networkx as nx

from common.errors import InvariantViolation, StateSpaceTooLarge
from common.graph import NO_PATH, to_networkx

logger = logging.getLogger(__name__)

UNSET = -2  # state not computed yet
NONE = -1   # state computed, no completion exists


class Infeasible:
    """No Hamiltonian path visits every location from the start."""

    def __repr__(self):
        return 'INFEASIBLE'


INFEASIBLE = Infeasible()


class Leg:
    def __init__(self, source, target, cost):
        self.source = source
        self.target = target
        self.cost = cost

    def __iter__(self):
        return iter((self.source, self.target, self.cost))

    def __eq__(self, other):
        return isinstance(other, Leg) and tuple(self) == tuple(other)

    def __repr__(self):
        return f'Leg({self.source} -> {self.target}, {self.cost})'


class Itinerary:
    def __init__(self, start, legs, total_cost):
        self.start = start
        self.legs = legs
        self.total_cost = total_cost

    @property
    def stops(self):
        return [self.start] + [leg.target for leg in self.legs]


class StateTable:
    """
    Dense (location, visited mask) side-tables: minimum remaining cost and best next location.
    """

    def __init__(self, num_nodes):
        self.num_nodes = num_nodes
        self.full_mask = (1 << num_nodes) - 1
        self.memo = np.full((num_nodes, 1 << num_nodes), NO_PATH, dtype=np.uint64)
        self.choice = np.full((num_nodes, 1 << num_nodes), UNSET, dtype=np.int8)
        self.expansions = 0

    @staticmethod
    def required_bytes(num_nodes):
        per_state = np.dtype(np.uint64).itemsize + np.dtype(np.int8).itemsize
        return num_nodes * (1 << num_nodes) * per_state

    def is_computed(self, current, visited):
        return int(self.choice[current, visited]) != UNSET

    def lookup(self, current, visited):
        return int(self.memo[current, visited]), int(self.choice[current, visited])

    def store(self, current, visited, cost, best_next):
        self.memo[current, visited] = cost
        self.choice[current, visited] = best_next
        self.expansions += 1


def complete_path(current, visited, dist, table):
    """
    Minimum cost to visit every location outside `visited`, starting from `current`.

    dist: N x N nested list of ints, NO_PATH where no edge
    table: StateTable consulted and filled in place
    return: (cost, best_next), cost is NO_PATH and best_next is NONE when no completion exists
    """
    if visited == table.full_mask:
        return 0, NONE  # open path, nothing charged for returning
    if table.is_computed(current, visited):
        return table.lookup(current, visited)

    min_cost = NO_PATH
    best_next = NONE
    row = dist[current]
    for nxt in range(table.num_nodes):
        if visited & (1 << nxt): continue
        if row[nxt] == NO_PATH: continue

        rest, _ = complete_path(nxt, visited | (1 << nxt), dist, table)
        if rest == NO_PATH: continue  # dead end below, keep the sentinel out of the sum
        cost = row[nxt] + rest
        # strict comparison: lowest index wins ties
        if cost < min_cost:
            min_cost = cost
            best_next = nxt

    table.store(current, visited, min_cost, best_next)
    return min_cost, best_next


class HeldKarpSolver:
    """
    Exact open-path TSP over a DistanceMatrix by memoized recursion on (location, visited mask).
    """

    def __init__(self, matrix, max_table_bytes=1 << 30):
        self.matrix = matrix
        self.num_nodes = len(matrix)
        self.max_table_bytes = max_table_bytes

        self.start = None
        self.table = None
        self.result = None
        self.status = 'populated'

    @property
    def expansions(self):
        return 0 if self.table is None else self.table.expansions

    def __is_connected(self):
        graph = to_networkx(self.matrix)
        return nx.is_connected(graph)

    def __allocate(self):
        required = StateTable.required_bytes(self.num_nodes)
        if required > self.max_table_bytes:
            raise StateSpaceTooLarge(
                f'{self.num_nodes} cities need {required} bytes of DP tables '
                f'(limit {self.max_table_bytes}).')
        return StateTable(self.num_nodes)

    def solve(self, start=0):
        if not 0 <= start < self.num_nodes:
            raise ValueError(f'start must be within [0, {self.num_nodes}), got {start}')
        if self.status in ('solved', 'infeasible', 'reconstructed') and self.start == start:
            return self.result

        logger.info('[Solver] Run the Dynamic Programming (%d cities) ...', self.num_nodes)
        self.start = start
        if self.num_nodes > 1 and not self.__is_connected():
            logger.info('\t Graph is disconnected, no route can visit every city')
            self.table = None
            self.result = INFEASIBLE
            self.status = 'infeasible'
            return self.result

        self.table = self.__allocate()
        cost, _ = complete_path(start, 1 << start, self.matrix.rows(), self.table)
        logger.info('\t States expanded: %d', self.table.expansions)

        if cost == NO_PATH:
            self.result = INFEASIBLE
            self.status = 'infeasible'
        else:
            self.result = cost
            self.status = 'solved'
        logger.info('\t Minimum cost: %s', self.result)
        return self.result

    def walk(self):
        """
        Replay the choice table from the start state, yielding one Leg per step.
        """
        if self.status not in ('solved', 'reconstructed'):
            raise InvariantViolation(f'Cannot reconstruct a route in state {self.status!r}.')

        current = self.start
        visited = 1 << current
        full_mask = (1 << self.num_nodes) - 1
        while visited != full_mask:
            if not self.table.is_computed(current, visited):
                raise InvariantViolation(f'State ({current}, {visited:#x}) was never computed.')
            _, nxt = self.table.lookup(current, visited)
            if nxt == NONE:
                raise InvariantViolation(
                    f'Route ended at {current} with unvisited cities (mask {visited:#x}).')
            yield Leg(current, nxt, self.matrix.cost(current, nxt))
            visited |= 1 << nxt
            current = nxt

    def reconstruct(self):
        legs = list(self.walk())
        total_cost = sum(leg.cost for leg in legs)
        if total_cost != self.result:
            raise InvariantViolation(
                f'Route cost {total_cost} differs from the solved minimum {self.result}.')
        self.status = 'reconstructed'
        return Itinerary(self.start, legs, total_cost)
