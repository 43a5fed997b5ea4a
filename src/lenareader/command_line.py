"""
Command line utility:

Recording information `lenareader info`
Reading selections `lenareader read`
"""
import time
import logging
import logging.config

import click
import coloredlogs
import numpy as np

import lenareader
from lenareader import RecordingReader, ReadOptions, LenaReaderError
from lenareader.util import (load_logging_config_file, human_readable_time,
                             save_metadata, change_extension)


def configure_logging(logger_level, log_file=None):
    """Configure logging using the packaged config file, console output is
    colored
    """
    logging_config = load_logging_config_file()
    logging_config['root']['level'] = logger_level

    if log_file is not None:
        logging_config['handlers']['file']['filename'] = log_file
    else:
        del logging_config['handlers']['file']
        logging_config['root']['handlers'] = []

    logging.config.dictConfig(logging_config)
    coloredlogs.install(level=logger_level,
                        fmt=logging_config['formatters']['simple']['format'])


def parse_spec(spec):
    """
    Parse a selection given in the command line:

    * 'all'
    * a comma separated list '1,3,5' (negative values exclude: '-2,-3')
    * an inclusive range '2:8'
    """
    spec = spec.strip()

    if spec == 'all':
        return spec

    try:
        if ':' in spec:
            start, end = spec.split(':')
            return list(range(int(start), int(end) + 1))

        return [int(value) for value in spec.split(',')]
    except ValueError:
        raise click.BadParameter('Invalid selection "{}", use "all", a list '
                                 '("1,3,5") or a range ("2:8")'.format(spec))


def _parse_select(ctx, param, value):
    selection = {}

    for item in value:
        if '=' not in item:
            raise click.BadParameter('Selections must be AXIS=SPEC, got "{}"'
                                     .format(item))

        axis, spec = item.split('=', 1)
        selection[axis.strip()] = parse_spec(spec)

    return selection


@click.group()
@click.version_option(version=lenareader.__version__)
def cli():
    """Command line group
    """
    pass


@cli.command()
@click.argument('header', type=click.Path(exists=True, dir_okay=False,
                                          resolve_path=True))
def info(header):
    """
    Print recording information from the HEADER file
    """
    try:
        reader = RecordingReader(header)
    except LenaReaderError as e:
        raise click.ClickException(str(e))

    h = reader.header

    click.echo('Data file: {}'.format(h.path_to_data))
    click.echo('Encoding: {} ({})'.format(h.encoding, h.encoding.dtype))
    click.echo('Data offset: {:,} bytes'.format(h.data_offset))
    click.echo('Dimensions (declared order): {}'
               .format(', '.join('{}={}'.format(axis.value,
                                                h.shape.size(axis))
                                 for axis in h.declared_axes)))

    if len(h.time):
        click.echo('Time: {:g} to {:g} seconds ({:g} Hz)'
                   .format(h.time[0], h.time[-1], h.sample_rate))


@cli.command()
@click.argument('header', type=click.Path(exists=True, dir_okay=False,
                                          resolve_path=True))
@click.argument('output', type=click.Path(dir_okay=False))
@click.option('-s', '--select', multiple=True, callback=_parse_select,
              help='Axis selection AXIS=SPEC where SPEC is "all", a list '
              '("1,3,5"), a range ("2:8") or a list of exclusions ("-2"), '
              'can be used more than once. Indexes are 1-based')
@click.option('-o', '--options', 'path_to_options',
              type=click.Path(exists=True, dir_okay=False),
              help='yaml file with read options', default=None)
@click.option('--no-optimize', is_flag=True, default=False,
              help='Read the whole array and select in memory')
@click.option('-l', '--logger_level',
              help='Python logger level, defaults to INFO',
              default='INFO')
@click.option('--log_file', type=click.Path(dir_okay=False), default=None,
              help='Also log to this file')
def read(header, output, select, path_to_options, no_optimize, logger_level,
         log_file):
    """
    Read a selection from the recording described in HEADER and save it in
    OUTPUT (npy format), the applied selection is saved next to it (yaml)
    """
    configure_logging(logger_level, log_file)
    logger = logging.getLogger(__name__)

    logger.info('lenareader version: %s', lenareader.__version__)

    start = time.time()

    changes = {}

    if select:
        changes['data_selection'] = select

    if no_optimize:
        changes['optimize'] = False

    try:
        if path_to_options is not None:
            options = ReadOptions.from_yaml(path_to_options)
        else:
            options = ReadOptions()

        options = options.replace(**changes)
        reader = RecordingReader(header)
        res = reader.read(options=options)
    except (LenaReaderError, ValueError) as e:
        raise click.ClickException(str(e))

    if res.empty:
        click.echo('Selection reduces to nothing, nothing was saved')
        return

    np.save(output, res.data)

    elapsed = time.time() - start

    path_to_metadata = change_extension(output, 'yaml')
    save_metadata(path_to_metadata,
                  source=reader.header.path_to_data,
                  axes=list(res.axes),
                  shape=list(res.shape),
                  selection={axis: indexes.tolist() for axis, indexes
                             in zip(res.axes, res.selection)},
                  bytes_read=res.plan.byte_count,
                  elapsed=human_readable_time(elapsed))

    logger.info('Saved %s with shape %s (%s) in %s', output, res.shape,
                ' x '.join(res.axes), human_readable_time(elapsed))
