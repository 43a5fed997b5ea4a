"""
Extracting selections from binary arrays
"""
import os
import logging

import numpy as np
from numpy.lib.stride_tricks import as_strided

from lenareader.errors import ReadError
from lenareader.plan import plan_read, full_read_plan
from lenareader.selection import normalize, is_empty, empty_axes

logger = logging.getLogger(__name__)


class ExtractedArray(object):
    """
    Result of reading a selection

    Parameters
    ----------
    data: numpy.ndarray
        Selected data in logical order

    selection: tuple of numpy.ndarray
        Applied 1-based selection, one array per axis in logical order

    axes: tuple of str
        Axis names in logical order

    plan: lenareader.plan.ReadPlan
        Plan used to read the data
    """
    empty = False

    def __init__(self, data, selection, axes, plan):
        self.data = data
        self.selection = selection
        self.axes = axes
        self.plan = plan

    @property
    def shape(self):
        return self.data.shape

    @property
    def dtype(self):
        return self.data.dtype

    def __array__(self, dtype=None, copy=None):
        return self.data if dtype is None else self.data.astype(dtype)

    def __repr__(self):
        return ('ExtractedArray(shape={}, axes={}, dtype={})'
                .format(self.data.shape, self.axes, self.data.dtype))


class SelectionEmpty(object):
    """
    Result of reading a selection that reduces to nothing, no data was read

    Parameters
    ----------
    selection: tuple of numpy.ndarray
        Applied 1-based selection, one array per axis in logical order

    axes: tuple of str
        Axis names in logical order

    empty_axes: tuple of str
        Names of the axes whose selection is empty
    """
    empty = True
    data = None
    plan = None

    def __init__(self, selection, axes, empty_axes):
        self.selection = selection
        self.axes = axes
        self.empty_axes = empty_axes

    @property
    def shape(self):
        return tuple(len(indexes) for indexes in self.selection)

    def __repr__(self):
        return ('SelectionEmpty(axes={}, empty_axes={})'
                .format(self.axes, self.empty_axes))


def _source_size(f):
    current = f.tell()
    size = f.seek(0, os.SEEK_END)
    f.seek(current, os.SEEK_SET)
    return size


def _read_bytes(f, start, n):
    """Seek to start and read exactly n bytes from an open file
    """
    size = _source_size(f)

    if start + n > size:
        raise ReadError('Cannot read {:,} bytes starting at byte {:,}, the '
                        'file only has {:,} bytes'.format(n, start, size))

    f.seek(start, os.SEEK_SET)
    content = f.read(n)

    if len(content) != n:
        raise ReadError('Short read: expected {:,} bytes starting at byte '
                        '{:,} but got {:,}'.format(n, start, len(content)))

    return content


def read_bytes(source, start, n):
    """
    Read n bytes starting at start from a path or a seekable file object

    Raises
    ------
    ReadError
        If the file cannot be opened, seeking fails or less than n bytes are
        available
    """
    try:
        if hasattr(source, 'read'):
            return _read_bytes(source, start, n)

        with open(source, 'rb') as f:
            return _read_bytes(f, start, n)
    except ReadError:
        raise
    except (IOError, OSError, ValueError) as e:
        raise ReadError('Error reading {:,} bytes at byte {:,} from {}: {}'
                        .format(n, start, getattr(source, 'name', source), e))


def execute(plan, source, encoding, base_offset=0):
    """
    Execute a read plan

    Parameters
    ----------
    plan: lenareader.plan.ReadPlan
        Plan to execute

    source: str, pathlib.Path or file object
        Binary file, file objects must be open in binary mode and seekable

    encoding: lenareader.encoding.ElementEncoding
        Element encoding

    base_offset: int, optional
        Bytes before the array starts in the file

    Returns
    -------
    numpy.ndarray
        Selected data in storage order
    """
    logger.debug('Reading %i bytes starting at byte %i', plan.byte_count,
                 base_offset + plan.offset)

    content = read_bytes(source, base_offset + plan.offset, plan.byte_count)

    span = encoding.decode(content)
    window = as_strided(span, shape=plan.read_shape, strides=plan.strides,
                        writeable=False)

    data = window

    for axis, residual in enumerate(plan.residuals):
        if residual is not None:
            data = np.take(data, residual, axis=axis)

    # native byte order, owning its memory
    return data.astype(encoding.dtype.newbyteorder('='))


def extract(source, shape, encoding, selection=None, base_offset=0,
            logical_order=None, optimize=True):
    """
    Read a selection from an N-dimensional array stored in a binary file

    Parameters
    ----------
    source: str, pathlib.Path or file object
        Binary file

    shape: lenareader.axes.ArrayShape
        Array shape (storage order)

    encoding: lenareader.encoding.ElementEncoding
        Element encoding

    selection: sequence, optional
        Raw selection, one item per axis in storage order, see
        :mod:`lenareader.selection`. Defaults to everything

    base_offset: int, optional
        Bytes before the array starts in the file

    logical_order: sequence, optional
        Order of the axes in the output, defaults to the canonical order
        (sensor, time, trial, frequency) for tagged shapes and the storage
        order for untagged shapes

    optimize: bool, optional
        If False, read the whole array and filter in memory

    Returns
    -------
    ExtractedArray or SelectionEmpty

    Raises
    ------
    InvalidSelection, InconsistentShape, SelectionOutOfRange
        If the selection is not valid for the shape
    ReadError
        If reading fails
    """
    normalized = normalize(selection, shape)
    permutation = shape.permutation(logical_order)

    logical_selection = tuple(normalized[i] for i in permutation)
    logical_axes = tuple(shape.names[i] for i in permutation)

    if is_empty(normalized):
        return SelectionEmpty(logical_selection, logical_axes,
                              empty_axes(normalized, shape))

    if optimize:
        plan = plan_read(normalized, shape.sizes, encoding.width)
    else:
        plan = full_read_plan(normalized, shape.sizes, encoding.width)

    data = execute(plan, source, encoding, base_offset)
    data = np.transpose(data, permutation)

    return ExtractedArray(np.ascontiguousarray(data), logical_selection,
                          logical_axes, plan)
