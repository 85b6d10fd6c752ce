import logging

import click

from .parser import ParseError, parse_puzzle
from .puzzle import UNKNOWN, solve_puzzle
from .solver import render_packing

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


@click.command()
@click.argument('input_file', type=click.File('r'))
@click.option('-n', '--node-limit', type=click.IntRange(min=1), envvar='SHAPE_PACKER_NODE_LIMIT',
              help='Give up on a region after this many placements and report it as unknown')
@click.option('-w', '--workers', type=click.IntRange(min=1), default=1, show_default=True,
              envvar='SHAPE_PACKER_WORKERS', help='Number of processes searching regions in parallel')
@click.option('-s', '--show', is_flag=True, help='Print the status of each region and the packings found')
@click.option('-v', '--verbose', count=True, help='Log more, repeat for debug output')
def main(input_file, node_limit, workers, show, verbose):
    """Count the regions of INPUT_FILE that can fit all of their shapes."""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=LOG_LEVELS[min(verbose, len(LOG_LEVELS) - 1)],
    )

    try:
        puzzle = parse_puzzle(input_file.read())
    except ParseError as e:
        raise click.BadParameter(str(e), param_hint='INPUT_FILE')

    packable = 0
    for i, outcome in enumerate(solve_puzzle(puzzle, node_limit=node_limit, workers=workers), start=1):
        if outcome.status == UNKNOWN:
            click.echo(f'Region {i} ({outcome.spec}): gave up after {outcome.stats.attempts} placements', err=True)
        packable += outcome.packable

        if show:
            click.echo(f'Region {i} ({outcome.spec}): {outcome.status}')
            if outcome.packing is not None:
                click.echo(render_packing(outcome.spec.width, outcome.spec.height, outcome.packing))
            click.echo()

    click.echo(packable)


if __name__ == '__main__':
    main()
