"""Tests for the itinerary report."""
from common.graph import build_graph
from solver.held_karp import HeldKarpSolver, Itinerary, Leg
from solver.report import format_itinerary, format_leg, no_route_message, render_report


class TestFormat:
    def test_leg(self):
        registry, _ = build_graph([('X', 'Y', 3)])
        assert format_leg(registry, Leg(0, 1, 3)) == 'X -( 3 )-> Y'

    def test_itinerary(self):
        registry, _ = build_graph([('A', 'B', 5), ('B', 'C', 10)])
        itinerary = Itinerary(0, [Leg(0, 1, 5), Leg(1, 2, 10)], 15)
        assert format_itinerary(registry, itinerary) == [
            'A -( 5 )-> B',
            'B -( 10 )-> C',
            'Total cost: 15',
        ]

    def test_single_stop(self):
        registry, _ = build_graph([('Solo', 'Solo', 0)])
        assert format_itinerary(registry, Itinerary(0, [], 0)) == ['Total cost: 0']


class TestRenderReport:
    def test_feasible(self):
        registry, matrix = build_graph([('A', 'B', 5), ('B', 'C', 10), ('A', 'C', 7)])
        solver = HeldKarpSolver(matrix)
        solver.solve()
        assert render_report(registry, solver) == [
            'A -( 5 )-> B',
            'B -( 10 )-> C',
            'Total cost: 15',
        ]

    def test_infeasible(self):
        registry, matrix = build_graph([('A', 'B', 5), ('C', 'C', 0)])
        solver = HeldKarpSolver(matrix)
        solver.solve()
        assert render_report(registry, solver) == [no_route_message]
        assert no_route_message == 'No valid TSP route found.'
