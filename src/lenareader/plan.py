"""
Read planning: translate a normalized selection into the bytes to read

Arrays are stored with the first (storage order) axis varying fastest, so
the distance in bytes between two consecutive indexes in axis j (its
stride) is the element size times the sizes of all the faster axes.

A plan reads a single window of the file: every axis reads ``count``
consecutive indexes starting at ``start``. Axes whose selection cannot be
read exactly (non contiguous selections) are read entirely and the
selection is applied in memory after decoding (residual filter)
"""
import logging
from collections import namedtuple

import numpy as np

from lenareader.selection import is_contiguous, is_full

logger = logging.getLogger(__name__)


AxisPlan = namedtuple('AxisPlan', ['start', 'count', 'stride', 'skip',
                                   'offset', 'residual'])
AxisPlan.__doc__ = """
Plan for a single axis

start: int
    0-based first index read
count: int
    Number of consecutive indexes read
stride: int
    Bytes between two consecutive indexes
skip: int
    Bytes skipped in this axis between two consecutive indexes of the next
    (slower) axis
offset: int
    Contribution of this axis to the byte offset of the first element read
residual: numpy.ndarray or None
    0-based indexes (relative to start) to take after reading, None if
    everything read is wanted
"""


class ReadPlan(object):
    """
    Instructions to read a selection from a binary array

    Parameters
    ----------
    axes: sequence of AxisPlan
        One plan per axis, storage order

    extents: sequence of int
        Axis sizes, storage order

    itemsize: int
        Bytes per element

    optimized: bool
        Whether the plan was computed by :func:`plan_read` (True) or is the
        full read fallback (False)
    """

    def __init__(self, axes, extents, itemsize, optimized):
        self._axes = tuple(axes)
        self._extents = tuple(extents)
        self._itemsize = itemsize
        self._optimized = optimized

    @property
    def axes(self):
        return self._axes

    @property
    def itemsize(self):
        return self._itemsize

    @property
    def optimized(self):
        return self._optimized

    @property
    def offset(self):
        """Byte offset (relative to the start of the array) of the first
        element read
        """
        return sum(axis.offset for axis in self._axes)

    @property
    def byte_count(self):
        """Bytes transferred: from the first to the last element in the
        window, both included
        """
        span = sum((axis.count - 1) * axis.stride for axis in self._axes)
        return span + self._itemsize

    @property
    def read_shape(self):
        """Shape of the window, storage order
        """
        return tuple(axis.count for axis in self._axes)

    @property
    def strides(self):
        """Strides (in bytes) of the window inside the bytes read
        """
        return tuple(axis.stride for axis in self._axes)

    @property
    def residuals(self):
        return tuple(axis.residual for axis in self._axes)

    @property
    def output_shape(self):
        """Shape after applying residual filters, storage order
        """
        return tuple(axis.count if axis.residual is None
                     else len(axis.residual) for axis in self._axes)

    @property
    def run_bytes(self):
        """Length of every contiguous run of bytes inside the window
        """
        run = self._itemsize

        for axis, extent in zip(self._axes, self._extents):
            run *= axis.count

            if axis.count < extent:
                break

        return run

    @property
    def n_runs(self):
        """Number of contiguous runs of bytes inside the window
        """
        total = self._itemsize

        for count in self.read_shape:
            total *= count

        return total // self.run_bytes

    @property
    def total_bytes(self):
        """Size of the whole array in bytes
        """
        total = self._itemsize

        for extent in self._extents:
            total *= extent

        return total

    def __repr__(self):
        return ('ReadPlan(offset={}, byte_count={}, read_shape={}, '
                'runs={}x{} bytes, optimized={})'
                .format(self.offset, self.byte_count, self.read_shape,
                        self.n_runs, self.run_bytes, self._optimized))


def _strides(extents, itemsize):
    strides = []
    stride = itemsize

    for extent in extents:
        strides.append(stride)
        stride *= extent

    return strides


def _residual(indexes, extent):
    """Residual filter for an axis that is read entirely
    """
    if is_full(indexes, extent):
        return None

    return np.asarray(indexes, dtype=np.int64) - 1


def _axis_plan(start, count, stride, extent, residual):
    return AxisPlan(start=start, count=count, stride=stride,
                    skip=stride * (extent - count), offset=start * stride,
                    residual=residual)


def collapsible_prefix(selection, extents):
    """
    Number of leading (fastest) axes whose selection is either a single index
    or the full extent, these axes are folded into the byte offset and need
    no filtering
    """
    prefix = 0

    for indexes, extent in zip(selection, extents):
        if len(indexes) == 1 or is_full(indexes, extent):
            prefix += 1
        else:
            break

    return prefix


def full_read_plan(selection, extents, itemsize):
    """
    Plan that reads the whole array and applies every selection in memory,
    always valid

    Parameters
    ----------
    selection: tuple of numpy.ndarray
        Normalized (1-based) selection, storage order

    extents: sequence of int
        Axis sizes, storage order

    itemsize: int
        Bytes per element
    """
    extents = tuple(extents)
    axes = [_axis_plan(0, extent, stride, extent,
                       _residual(indexes, extent))
            for indexes, extent, stride
            in zip(selection, extents, _strides(extents, itemsize))]

    return ReadPlan(axes, extents, itemsize, optimized=False)


def plan_read(selection, extents, itemsize):
    """
    Plan the smallest single window read that contains a selection

    Axes are visited from the fastest to the slowest. While selections are
    contiguous increasing runs (a single index or the full extent included)
    exactly that run is read. From the first non contiguous selection on,
    that axis and every slower one are read entirely and their selections
    become residual filters

    Parameters
    ----------
    selection: tuple of numpy.ndarray
        Normalized (1-based) selection, storage order

    extents: sequence of int
        Axis sizes, storage order

    itemsize: int
        Bytes per element

    Returns
    -------
    ReadPlan
        A plan whose result is identical to :func:`full_read_plan`
    """
    extents = tuple(extents)
    axes = []
    contiguous = True

    for indexes, extent, stride in zip(selection, extents,
                                       _strides(extents, itemsize)):
        contiguous = contiguous and is_contiguous(indexes)

        if contiguous:
            axes.append(_axis_plan(int(indexes[0]) - 1, len(indexes), stride,
                                   extent, None))
        else:
            axes.append(_axis_plan(0, extent, stride, extent,
                                   _residual(indexes, extent)))

    plan = ReadPlan(axes, extents, itemsize, optimized=True)

    logger.debug('Planned read: %s (collapsible prefix: %i axes, %i of %i '
                 'bytes)', plan, collapsible_prefix(selection, extents),
                 plan.byte_count, plan.total_bytes)

    return plan
