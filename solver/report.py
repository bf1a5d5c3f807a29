no_route_message = 'No valid TSP route found.'


def format_leg(registry, leg):
    return '{} -( {} )-> {}'.format(registry.name_of(leg.source), leg.cost, registry.name_of(leg.target))


def format_itinerary(registry, itinerary):
    lines = [format_leg(registry, leg) for leg in itinerary.legs]
    lines.append(f'Total cost: {itinerary.total_cost}')
    return lines


def render_report(registry, solver):
    """
    Lines to print for a solved engine: the route and its cost, or the no-route message.
    """
    if solver.status == 'infeasible':
        return [no_route_message]
    return format_itinerary(registry, solver.reconstruct())
