"""
Read options
"""
import copy
import pprint
import logging

import numpy as np

from lenareader.config.validate import validate
from lenareader.util import load_yaml


def _to_builtin(value):
    """Convert numpy arrays and scalars (possibly nested in lists, tuples or
    dicts) to builtin types so they can be validated
    """
    if isinstance(value, np.ndarray):
        return value.tolist()
    elif isinstance(value, np.generic):
        return value.item()
    elif isinstance(value, (list, tuple)):
        return [_to_builtin(element) for element in value]
    elif isinstance(value, dict):
        return {key: _to_builtin(element) for key, element in value.items()}
    elif isinstance(value, range):
        return list(value)
    else:
        return value


class ReadOptions(object):
    """
    Options to read a recording, read-only once initialized

    Parameters
    ----------
    data_selection: list or dict, optional
        Per axis selection. A list has one item per dimension in the order
        the header declares them, a dict maps axis names ('sensor', 'time',
        'trial', 'frequency') to selections. Missing axes are read entirely.
        Defaults to everything

    sensor_name: str or list, optional
        Regular expression (or list of them), case insensitive, only sensors
        whose name matches (any of) them are kept. A list of 1-based sensor
        indexes keeps those sensors, in that order, among the ones still
        selected by data_selection and sensor_category

    sensor_category: str, optional
        'ALL' (default), 'MEG', 'EEG', 'EEG+MEG', 'DC' or 'ADC', only sensors
        whose category matches are kept. Sensors without a category in the
        header match when their name starts with the category

    trials: int or list, optional
        1-based trials to read, overrides the trial selection in
        data_selection

    time_window: list, optional
        [start, end] in seconds, reads the samples closest to start and end
        and everything in between, overrides the time selection in
        data_selection

    logical_order: list, optional
        Axis names in the order they should appear in the output, defaults
        to sensor, time, trial, frequency

    optimize: bool, optional
        Read only the bytes needed (default), if False, reads the whole array
        and selects in memory

    Raises
    ------
    ValueError
        If any of the options is invalid

    Notes
    -----
    After initialization, attributes cannot be changed, use
    :meth:`ReadOptions.replace` to get a modified copy
    """

    def __init__(self, **options):
        self._logger = logging.getLogger(__name__)
        self._path_to_file = None
        self._data = validate(_to_builtin(options), 'options')

    @classmethod
    def from_mapping(cls, mapping):
        return cls(**mapping)

    @classmethod
    def from_yaml(cls, path_to_file):
        mapping = load_yaml(path_to_file) or {}
        obj = cls(**mapping)

        # save path for reference, helps debugging
        obj._path_to_file = path_to_file
        obj._logger.debug('Loaded from file: %s', path_to_file)

        return obj

    def replace(self, **changes):
        """Return a new ReadOptions with some values replaced
        """
        options = self.as_dict()
        options.update(changes)
        return type(self)(**options)

    def as_dict(self):
        return copy.deepcopy(self._data)

    def __setattr__(self, name, value):
        if not name.startswith('_'):
            raise AttributeError('Cannot set values once the object has '
                                 'been initialized')
        else:
            self.__dict__[name] = value

    def __getattr__(self, key):
        data = self.__dict__.get('_data', {})

        if key not in data:
            raise AttributeError('Unknown option "{}", options are: {}'
                                 .format(key, ', '.join(sorted(data))))

        return copy.deepcopy(data[key])

    def __eq__(self, other):
        return isinstance(other, ReadOptions) and self._data == other._data

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        s = 'ReadOptions('

        if self._path_to_file is not None:
            s += 'loaded from: {}, '.format(self._path_to_file)

        return s + pprint.pformat(self._data, indent=4) + ')'
