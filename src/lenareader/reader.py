"""
Reading selections from recordings
"""
import os
import re
import logging
from collections.abc import Mapping

import numpy as np
import parmap
from tqdm import tqdm

from lenareader.axes import Axis
from lenareader.config import ReadOptions
from lenareader.errors import (InconsistentShape, InvalidSelection,
                               ReadError)
from lenareader.extract import extract
from lenareader.header import RecordingHeader
from lenareader.selection import normalize_axis

logger = logging.getLogger(__name__)


class RecordingReader(object):
    """
    Recording reader, reads any subset of sensors, time samples, trials and
    frequencies from a recording, reading only the bytes it needs

    Parameters
    ----------
    header: str, pathlib.Path or RecordingHeader
        Path to a yaml header file or a RecordingHeader

    Raises
    ------
    ReadError
        If the data file does not exist or is smaller than the array the
        header describes

    Notes
    -----
    Selections are 1-based. A list selection has one item per dimension in
    the order the header declares them, a dict selection maps axis names
    ('sensor', 'time', 'trial', 'frequency') to items. Regardless of the
    order in the file, data is returned in (sensor, time, trial, frequency)
    order, unless a different logical_order is requested

    Examples
    --------
    >>> reader = RecordingReader('path/to/recording.yaml')
    >>> res = reader.read(dict(sensor=[1, 2], trial=[-1]))
    >>> res.data.shape
    """

    def __init__(self, header):
        if not isinstance(header, RecordingHeader):
            header = RecordingHeader.from_yaml(str(header))

        self._header = header

        path = header.path_to_data

        if not os.path.isfile(path):
            raise ReadError('Data file {} does not exist'.format(path))

        filesize = os.path.getsize(path)

        if filesize < header.expected_size:
            raise ReadError('Wrong filesize and/or header, filesize {:,} '
                            'bytes is smaller than the {:,} bytes the '
                            'header describes'
                            .format(filesize, header.expected_size))

        if filesize > header.expected_size:
            logger.debug('%s has %i trailing bytes after the array', path,
                         filesize - header.expected_size)

    @classmethod
    def from_mapping(cls, mapping, root_folder=None):
        return cls(RecordingHeader(mapping, root_folder))

    @property
    def header(self):
        return self._header

    @property
    def shape(self):
        """Array shape (storage order)
        """
        return self._header.shape

    @property
    def time(self):
        return self._header.time

    def __repr__(self):
        return ('Reader for {} with axes {} in "{}"'
                .format(self._header.shape, self._header.declared_axes,
                        self._header.path_to_data))

    def _storage_selection(self, data_selection):
        """Convert a declared order list or an axis dict to a storage order
        list
        """
        shape = self._header.shape
        storage = [None] * shape.ndim

        if isinstance(data_selection, Mapping):
            for axis, item in data_selection.items():
                storage[shape.position(axis)] = item

            return storage

        data_selection = list(data_selection)

        if len(data_selection) > shape.ndim:
            raise InconsistentShape('Selection has {} items but the '
                                    'recording only has {} dimensions'
                                    .format(len(data_selection), shape.ndim))

        for axis, item in zip(self._header.declared_axes, data_selection):
            storage[shape.position(axis)] = item

        return storage

    def _sensor_filter(self, indexes, options):
        """Apply sensor_name and sensor_category to the selected sensors
        """
        names = self._header.sensor_names

        if names is None:
            raise InvalidSelection('Cannot filter sensors by name or '
                                   'category, the header does not list '
                                   'sensors')

        categories = self._header.sensor_categories

        if options.sensor_category != 'ALL':
            devices = options.sensor_category.split('+')
            indexes = [i for i in indexes
                       if any(_match_device(device, names[i - 1],
                                            categories[i - 1])
                              for device in devices)]

        if options.sensor_name is not None:
            patterns = options.sensor_name

            if isinstance(patterns, str):
                patterns = [patterns]

            if all(isinstance(p, str) for p in patterns):
                indexes = [i for i in indexes
                           if any(re.search(p, names[i - 1], re.IGNORECASE)
                                  for p in patterns)]
            elif not any(isinstance(p, str) for p in patterns):
                # indexes named here, in this order, that are still selected
                named = normalize_axis(patterns, len(names),
                                       Axis.SENSOR.value).tolist()
                selected = set(indexes)
                indexes = [i for i in named if i in selected]
            else:
                raise InvalidSelection('sensor_name must be a list of '
                                       'patterns or a list of indexes, got: '
                                       '{}'.format(patterns))

        return indexes

    def _time_window(self, time_window):
        """Contiguous 1-based range of the samples closest to a time window
        """
        time = self._header.time

        if not len(time):
            raise InvalidSelection('Cannot select a time window, the header '
                                   'has no time dimension or sample_rate')

        start, end = time_window

        if start > end:
            raise InvalidSelection('Time window start ({}) is after its end '
                                   '({})'.format(start, end))

        period = 1.0 / self._header.sample_rate
        idx = [int(np.argmin(np.abs(time - t))) for t in (start, end)]
        dist = [abs(time[i] - t) for i, t in zip(idx, (start, end))]

        if any(d > period for d in dist):
            raise InvalidSelection('Selection time window goes beyond the '
                                   'time range [{:g} .. {:g}] of the data'
                                   .format(time[0], time[-1]))

        return list(range(idx[0] + 1, idx[1] + 2))

    def resolve(self, options):
        """
        Resolve options into a raw selection in storage order

        Parameters
        ----------
        options: ReadOptions

        Returns
        -------
        list
            One raw selection item per axis, storage order
        """
        shape = self._header.shape
        storage = self._storage_selection(options.data_selection)

        if (options.sensor_name is not None or
                options.sensor_category != 'ALL'):
            position = shape.position(Axis.SENSOR)
            indexes = normalize_axis(storage[position],
                                     shape.sizes[position],
                                     Axis.SENSOR.value).tolist()
            storage[position] = self._sensor_filter(indexes, options)

            # an empty list would mean "all" to the normalizer
            if not len(storage[position]):
                storage[position] = np.zeros(shape.sizes[position],
                                             dtype=bool)

        if options.trials is not None:
            storage[shape.position(Axis.TRIAL)] = options.trials

        if options.time_window is not None:
            storage[shape.position(Axis.TIME)] = self._time_window(
                options.time_window)

        return storage

    def read(self, selection=None, options=None, **kwargs):
        """
        Read a selection

        Parameters
        ----------
        selection: list or dict, optional
            Per axis selection (see class notes), overrides
            options.data_selection

        options: ReadOptions, dict, optional
            Read options

        **kwargs
            Any option accepted by ReadOptions, overrides the values in
            options

        Returns
        -------
        ExtractedArray or SelectionEmpty
            SelectionEmpty if the selection reduces to nothing, in that case
            nothing is read
        """
        if options is None:
            options = ReadOptions()
        elif not isinstance(options, ReadOptions):
            options = ReadOptions.from_mapping(options)

        if selection is not None:
            kwargs['data_selection'] = selection

        if kwargs:
            options = options.replace(**kwargs)

        storage = self.resolve(options)

        logger.debug('Reading %s from %s', self._header.shape,
                     self._header.path_to_data)

        res = extract(self._header.path_to_data, self._header.shape,
                      self._header.encoding, storage,
                      base_offset=self._header.data_offset,
                      logical_order=options.logical_order,
                      optimize=options.optimize)

        if res.empty:
            logger.warning('According to options, data selection reduces '
                           'to nothing (empty axes: %s)',
                           ', '.join(res.empty_axes))

        return res


def _match_device(device, name, category):
    """Sensors with a category match it exactly, sensors without one match
    when their name starts with the device
    """
    if category is not None:
        return category.upper() == device.upper()

    return re.match(re.escape(device), name, re.IGNORECASE) is not None


def _read_one(path_to_header, selection, options):
    return RecordingReader(path_to_header).read(selection, options)


def read_many(paths, selection=None, options=None, n_processors=1,
              show_progress_bar=False):
    """
    Read the same selection from several recordings

    Parameters
    ----------
    paths: iterable
        Paths to header files

    selection: list or dict, optional
        Per axis selection

    options: ReadOptions or dict, optional
        Read options

    n_processors: int, optional
        Number of processes, every recording is read independently, with
        its own file handle. Defaults to 1 (no multiprocessing)

    show_progress_bar: bool, optional
        Show a progress bar, defaults to False

    Returns
    -------
    list
        One ExtractedArray or SelectionEmpty per path, in the same order
    """
    paths = [str(path) for path in paths]

    if isinstance(options, ReadOptions):
        options = options.as_dict()

    if n_processors > 1 and len(paths) > 1:
        logger.info('Reading %i recordings using %i processes', len(paths),
                    n_processors)
        return parmap.map(_read_one, paths, selection, options,
                          pm_pbar=show_progress_bar,
                          pm_processes=n_processors)

    results = []
    iterator = paths

    if show_progress_bar:
        iterator = tqdm(iterator, total=len(paths))

    for path in iterator:
        logger.info('Reading: %s', path)
        results.append(_read_one(path, selection, options))

    return results
