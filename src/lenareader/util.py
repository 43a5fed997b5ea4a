"""
Utility functions
"""
import os
import datetime
import logging

import yaml
from dateutil.relativedelta import relativedelta
from pkg_resources import resource_filename

import lenareader

logger = logging.getLogger(__name__)


def load_yaml(path):
    with open(path) as f:
        content = yaml.safe_load(f)
    return content


def load_yaml_asset(path):
    """
    Load a yaml located in the assets folder
    by specifying a relative path to the assets/ folder
    """
    relative_path = os.path.join('assets', path)
    absolute_path = resource_filename('lenareader', relative_path)
    return load_yaml(absolute_path)


def load_logging_config_file():
    content = load_yaml_asset(os.path.join('logger', 'config.yaml'))
    return content


def human_readable_time(seconds):
    """Return a human readable string for a given amount of seconds

    Notes
    -----
    Based on: https://stackoverflow.com/a/26165034
    """
    if seconds < 60:
        return '{:.4f} seconds'.format(seconds)

    intervals = ['days', 'hours', 'minutes', 'seconds']
    delta = relativedelta(seconds=seconds)
    return (' '.join('{} {}'.format(getattr(delta, k), k) for k in intervals
            if getattr(delta, k)))


def save_metadata(path, **extra):
    """Save a yaml file with the package version, a timestamp and any extra
    key-value pairs
    """
    timestamp = datetime.datetime.now().strftime('%c')
    metadata = dict(version=lenareader.__version__, timestamp=timestamp)
    metadata.update(extra)

    with open(path, 'w') as f:
        yaml.safe_dump(metadata, f, default_flow_style=None)

    logger.debug('Saved metadata in %s', path)


def change_extension(path, new_extension):
    root, _ = os.path.splitext(path)
    return '{}.{}'.format(root, new_extension)
