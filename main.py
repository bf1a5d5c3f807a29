import logging
import sys

from common.errors import TSPError, UsageError
from common.graph import build_graph
from common.parser import load_edges
from parameters import SolverParameters
from solver.held_karp import HeldKarpSolver
from solver.report import render_report

logger = logging.getLogger(__name__)

usage = 'Usage: tsp-dp <filename>'


def run(path, params=None, out=None):
    if params is None:
        params = SolverParameters()
    if out is None:
        out = sys.stdout
    if hasattr(out, 'reconfigure'):
        # names are echoed back byte for byte, whatever their encoding
        out.reconfigure(errors='surrogateescape')
    logger.info('[Main] %r', params)

    edges = load_edges(path, max_name_length=params.max_name_length)
    registry, matrix = build_graph(edges, capacity=params.max_cities)

    solver = HeldKarpSolver(matrix, max_table_bytes=params.max_table_bytes)
    solver.solve(start=0)
    for line in render_report(registry, solver):
        print(line, file=out)


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    params = SolverParameters()
    logging.basicConfig(stream=sys.stderr, level=params.log_level,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        if len(argv) != 1:
            raise UsageError(usage)
        run(argv[0], params=params)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    except TSPError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        return exc.exit_code
    return 0


if __name__ == '__main__':
    sys.exit(main())
