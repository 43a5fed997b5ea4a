"""
Recording headers

Headers are already-parsed mappings (usually a yaml file next to the binary
file) describing where the array is, how its elements are encoded and its
dimensions, in the order they are declared (slowest varying first)
"""
import os
import logging

import numpy as np

from lenareader.axes import Axis, ArrayShape
from lenareader.encoding import ElementEncoding
from lenareader.errors import InconsistentShape
from lenareader.config.validate import validate
from lenareader.util import load_yaml


class RecordingHeader(object):
    """
    Recording metadata needed to read the binary data

    Parameters
    ----------
    mapping: dict
        Header content, see assets/config/header.yaml for the schema

    root_folder: str, optional
        Folder used to resolve a relative data_filename, defaults to the
        current working directory

    Raises
    ------
    ValueError
        If the mapping does not conform to the header schema
    UnknownAxis
        If a dimension name is not one of the known dimensions
    UnsupportedEncoding
        If data_type, data_size or data_format are not supported
    InconsistentShape
        If the dimensions are not consistent (e.g. repeated dimensions or
        a sensor list with a different length than the sensor dimension)

    Notes
    -----
    After initialization, attributes cannot be changed
    """

    def __init__(self, mapping, root_folder=None):
        self._logger = logging.getLogger(__name__)
        self._path_to_file = None

        self._data = validate(mapping, 'header')
        self._root_folder = root_folder or os.getcwd()

        dimensions = self._data['dimensions']
        self._dimensions = {Axis.parse(dim['name']): dim
                            for dim in dimensions}

        self._shape = ArrayShape.from_declared(
            [dim['size'] for dim in dimensions],
            [dim['name'] for dim in dimensions])

        self._encoding = ElementEncoding.from_header(
            self._data['data_type'],
            self._data['data_size'],
            self._data.get('data_format'))

        sensors = self._sensors()

        if sensors is not None and len(sensors) != self._shape.size(
                Axis.SENSOR):
            raise InconsistentShape('The sensor dimension has {} elements '
                                    'but {} sensors are listed'
                                    .format(self._shape.size(Axis.SENSOR),
                                            len(sensors)))

        if Axis.TIME in self._dimensions and self.sample_rate is None:
            self._logger.warning('Time dimension has no sample_rate, time '
                                 'vector and time windows are not available')

    @classmethod
    def from_yaml(cls, path_to_file):
        """Load a header from a yaml file, a relative data_filename is
        resolved relative to the header folder
        """
        mapping = load_yaml(path_to_file)

        root_folder = os.path.dirname(os.path.abspath(path_to_file))
        obj = cls(mapping, root_folder)

        # save path for reference, helps debugging
        obj._path_to_file = str(path_to_file)
        obj._logger.debug('Loaded header from file: %s', path_to_file)

        return obj

    def __setattr__(self, name, value):
        if not name.startswith('_'):
            raise AttributeError('Cannot set values once the object has '
                                 'been initialized')
        else:
            self.__dict__[name] = value

    def _sensors(self):
        if Axis.SENSOR not in self._dimensions:
            return None

        return self._dimensions[Axis.SENSOR].get('sensors')

    @property
    def path_to_file(self):
        return self._path_to_file

    @property
    def shape(self):
        """Array shape, storage order (fastest varying first)
        """
        return self._shape

    @property
    def declared_axes(self):
        """Axes in the order the header declares them (slowest first)
        """
        return self._shape.axes[::-1]

    @property
    def encoding(self):
        return self._encoding

    @property
    def data_offset(self):
        """Bytes before the array starts in the data file
        """
        return self._data.get('data_offset', 0)

    @property
    def path_to_data(self):
        filename = self._data['data_filename']

        if os.path.isabs(filename):
            return filename

        return os.path.join(self._root_folder, filename)

    @property
    def expected_size(self):
        """Minimum size (in bytes) of the data file
        """
        return self.data_offset + self._shape.n_elements * self._encoding.width

    @property
    def sensor_names(self):
        """Sensor names (None if not available)
        """
        sensors = self._sensors()
        return None if sensors is None else [s['name'] for s in sensors]

    @property
    def sensor_categories(self):
        """Sensor categories (None if not available)
        """
        sensors = self._sensors()
        return (None if sensors is None
                else [s.get('category') for s in sensors])

    @property
    def sample_rate(self):
        if Axis.TIME not in self._dimensions:
            return None

        return self._dimensions[Axis.TIME].get('sample_rate')

    @property
    def pre_trigger(self):
        if Axis.TIME not in self._dimensions:
            return 0

        return self._dimensions[Axis.TIME].get('pre_trigger') or 0

    @property
    def time(self):
        """
        Time (in seconds) of every sample, relative to the trigger, empty if
        there is no time dimension or sample rate
        """
        if self.sample_rate is None:
            return np.array([])

        n_samples = self._shape.size(Axis.TIME)

        return (np.arange(1, n_samples + 1) / float(self.sample_rate) -
                self.pre_trigger)

    def __repr__(self):
        return ('RecordingHeader(data={}, shape={}, encoding={}, offset={})'
                .format(self.path_to_data, self._shape, self._encoding,
                        self.data_offset))
