import logging
import re

from common.errors import FileOpenError, NameTooLong, ParseError
from common.graph import NO_PATH

logger = logging.getLogger(__name__)

# CityA-CityB: <non-negative integer>
edge_pattern = re.compile(r'^(?P<city_a>[^-]+)-(?P<city_b>[^:]+?)\s*:\s*(?P<cost>\S+)\s*$')


def parse_line(line, line_no=None, max_name_length=511):
    """
    Split one edge line into (city_a, city_b, cost).
    """
    match = edge_pattern.match(line.rstrip('\r\n'))
    if match is None:
        raise ParseError(f'malformed edge {line.strip()!r}', line_no)

    city_a = match.group('city_a').strip()
    city_b = match.group('city_b').strip()
    if not city_a or not city_b:
        raise ParseError('empty city name', line_no)
    for city in (city_a, city_b):
        if len(city) > max_name_length:
            raise NameTooLong(
                'City name exceeds the maximum allowed length of '
                f'{max_name_length} characters.')

    raw_cost = match.group('cost')
    if not raw_cost.isdigit() or not raw_cost.isascii():
        raise ParseError(f'invalid cost {raw_cost!r}', line_no)
    cost = int(raw_cost)
    if cost >= NO_PATH:
        raise ParseError(f'cost {raw_cost} is out of range', line_no)
    return city_a, city_b, cost


def parse_edges(lines, max_name_length=511):
    edges = []
    for line_no, line in enumerate(lines, start=1):
        edges.append(parse_line(line, line_no=line_no, max_name_length=max_name_length))
    return edges


def load_edges(path, max_name_length=511):
    """
    Parse a whole edge-list file; any bad line aborts the entire file.
    """
    logger.info('[Parser] Reading %s', path)
    try:
        with open(path, 'r', encoding='utf-8', errors='surrogateescape') as f:
            lines = f.readlines()
    except OSError as exc:
        raise FileOpenError(f'cannot open the file: {exc}') from exc

    edges = parse_edges(lines, max_name_length=max_name_length)
    logger.info('[Parser] %d edge lines parsed', len(edges))
    return edges
