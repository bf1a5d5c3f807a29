import logging

import numpy as np
import networkx as nx

from common.errors import CapacityExceeded, CostOverflow, EmptyInput

logger = logging.getLogger(__name__)

# Reserved "no edge / no completion" value, never used in arithmetic.
NO_PATH = int(np.iinfo(np.uint64).max)


class LocationRegistry:
    """
    Dense name <-> index mapping, indices assigned in first-seen order.
    """

    def __init__(self, capacity=64):
        self.capacity = capacity
        self.names = []
        self.__index = {}

    def __len__(self):
        return len(self.names)

    def __contains__(self, name):
        return name in self.__index

    def __iter__(self):
        return iter(self.names)

    def register(self, name):
        idx = self.__index.get(name)
        if idx is not None: return idx

        if len(self.names) >= self.capacity:
            raise CapacityExceeded(f'Too many cities (maximum is {self.capacity}).')
        idx = len(self.names)
        self.names.append(name)
        self.__index[name] = idx
        return idx

    def index_of(self, name):
        return self.__index[name]

    def name_of(self, idx):
        return self.names[idx]


class DistanceMatrix:
    """
    Symmetric N x N table of non-negative integer costs, NO_PATH where no edge exists.
    """

    def __init__(self, num_nodes):
        self.num_nodes = num_nodes
        self.table = np.full((num_nodes, num_nodes), NO_PATH, dtype=np.uint64)

    def __len__(self):
        return self.num_nodes

    def set_edge(self, i, j, cost):
        if not 0 <= cost < NO_PATH:
            raise CostOverflow(f'Edge cost {cost} is outside [0, {NO_PATH}).')
        self.table[i][j] = cost
        self.table[j][i] = cost

    def cost(self, i, j):
        return int(self.table[i][j])

    def has_edge(self, i, j):
        return self.cost(i, j) != NO_PATH

    def max_cost(self):
        real = self.table[self.table != NO_PATH]
        if real.size == 0: return 0
        return int(real.max())

    def rows(self):
        # plain ints keep the solver's sums exact
        return self.table.tolist()

    def edges(self):
        for i in range(self.num_nodes):
            for j in range(i + 1, self.num_nodes):
                if self.has_edge(i, j):
                    yield i, j, self.cost(i, j)


def build_graph(edges, capacity=64):
    """
    Register every city of the parsed edges and fill the distance matrix.

    edges: iterable of (city_a, city_b, cost), later duplicates overwrite earlier ones
    return: (registry, matrix)
    """
    edges = list(edges)
    registry = LocationRegistry(capacity=capacity)
    indexed = []
    for city_a, city_b, cost in edges:
        i = registry.register(city_a)
        j = registry.register(city_b)
        indexed.append((i, j, cost))

    if len(registry) == 0:
        raise EmptyInput('the input file is empty or contains no valid data.')

    matrix = DistanceMatrix(len(registry))
    for i, j, cost in indexed:
        matrix.set_edge(i, j, cost)

    # An optimal path has at most N-1 legs; their sum must stay below the sentinel.
    legs = max(len(registry) - 1, 1)
    if matrix.max_cost() * legs >= NO_PATH:
        raise CostOverflow(
            f'Edge costs up to {matrix.max_cost()} over {legs} legs could overflow the cost range.')

    logger.info('[Graph] %d cities and %d edges', len(registry), len(list(matrix.edges())))
    return registry, matrix


def to_networkx(matrix, registry=None):
    graph = nx.Graph()
    for i in range(len(matrix)):
        if registry is None:
            graph.add_node(i)
        else:
            graph.add_node(i, name=registry.name_of(i))
    for i, j, cost in matrix.edges():
        graph.add_edge(i, j, weight=cost)
    return graph
