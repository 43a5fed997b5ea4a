"""
Normalizing per axis selections

A raw selection has one item per axis (storage order), every item can be:

* ``None``, an empty sequence or the keyword ``'all'``: every index
* a boolean mask with one element per index in the axis
* an integer or a sequence of (1-based) integers: those indexes, in the given
  order, repeats allowed
* a sequence of negative integers: every index except the named ones

Normalized selections are tuples with one 1-based numpy integer array per
axis
"""
import logging
from numbers import Integral

import numpy as np

from lenareader.errors import (InvalidSelection, InconsistentShape,
                               SelectionOutOfRange)

logger = logging.getLogger(__name__)

ALL = 'all'


def _is_all(item):
    if item is None:
        return True

    if isinstance(item, str):
        if item == ALL:
            return True

        raise InvalidSelection('Unknown keyword for data selection: "{}"'
                               .format(item))

    return False


def _to_array(item, name):
    """Convert a selection item to a 1D numpy array
    """
    if isinstance(item, (bool, np.bool_)):
        raise InvalidSelection('Cannot use a single boolean as selection for '
                               '<{}>, use a mask instead'.format(name))

    if isinstance(item, Integral):
        return np.array([int(item)])

    try:
        arr = np.asarray(item)
    except (TypeError, ValueError):
        raise InvalidSelection('Invalid selection for <{}>: {!r}'
                               .format(name, item))

    if arr.ndim != 1:
        raise InvalidSelection('Selection for <{}> must be one-dimensional, '
                               'got shape {}'.format(name, arr.shape))

    return arr


def _mask_to_indexes(mask, extent, name):
    if mask.shape[0] != extent:
        raise InvalidSelection('Boolean mask for <{}> has the wrong length, '
                               'expected {}, got {}'
                               .format(name, extent, mask.shape[0]))

    return np.flatnonzero(mask) + 1


def _to_integers(arr, name):
    if arr.dtype.kind in 'iu':
        return arr.astype(np.int64)

    if arr.dtype.kind == 'f' and np.all(np.isfinite(arr)):
        as_int = arr.astype(np.int64)

        if np.all(as_int == arr):
            return as_int

    raise InvalidSelection('Selection for <{}> must contain integers, got: {}'
                           .format(name, arr))


def _check_bounds(indexes, extent, name):
    out = (indexes < 1) | (indexes > extent)

    if np.any(out):
        raise SelectionOutOfRange(name, extent, indexes[out].tolist())


def normalize_axis(item, extent, name='dim0'):
    """
    Normalize the selection for a single axis

    Parameters
    ----------
    item
        Raw selection (see module docstring)

    extent: int
        Number of elements in the axis

    name: str, optional
        Axis name, used in error messages

    Returns
    -------
    numpy.ndarray
        1-based indexes (int64), possibly empty

    Raises
    ------
    InvalidSelection
        If the item cannot be interpreted or mixes positive and negative
        indexes
    SelectionOutOfRange
        If any index (or excluded index) falls outside [1, extent]
    """
    if _is_all(item):
        return np.arange(1, extent + 1, dtype=np.int64)

    arr = _to_array(item, name)

    if arr.size == 0:
        return np.arange(1, extent + 1, dtype=np.int64)

    if arr.dtype.kind == 'b':
        return _mask_to_indexes(arr, extent, name).astype(np.int64)

    indexes = _to_integers(arr, name)
    negative = indexes < 0

    if np.all(negative):
        excluded = -indexes
        _check_bounds(excluded, extent, name)
        full = np.arange(1, extent + 1, dtype=np.int64)
        return full[~np.isin(full, excluded)]

    if np.any(negative):
        raise InvalidSelection('Selection for <{}> mixes positive and '
                               'negative indexes, exclusions must be given '
                               'on their own: {}'.format(name,
                                                         indexes.tolist()))

    _check_bounds(indexes, extent, name)

    return indexes


def normalize(selection, shape):
    """
    Normalize a raw selection against an array shape

    Parameters
    ----------
    selection: sequence or None
        One item per axis in storage order, missing trailing axes are
        selected entirely. None selects everything

    shape: lenareader.axes.ArrayShape
        Array shape

    Returns
    -------
    tuple
        One 1-based numpy integer array per axis. If any of them is empty
        the selection reduces to nothing, see :func:`is_empty`

    Raises
    ------
    InconsistentShape
        If the selection has more items than the array has axes
    """
    if selection is None:
        selection = []
    elif isinstance(selection, str) or not hasattr(selection, '__len__'):
        raise InconsistentShape('Selection must be a sequence with one item '
                                'per axis, got: {!r}'.format(selection))

    selection = list(selection)

    if len(selection) > shape.ndim:
        raise InconsistentShape('Selection has {} items but the array only '
                                'has {} axes ({})'
                                .format(len(selection), shape.ndim,
                                        ', '.join(shape.names)))

    # pad missing trailing axes with "all"
    selection = selection + [None] * (shape.ndim - len(selection))

    normalized = tuple(normalize_axis(item, extent, name)
                       for item, extent, name
                       in zip(selection, shape.sizes, shape.names))

    if is_empty(normalized):
        logger.debug('Selection reduces to nothing in axes: %s',
                     ', '.join(empty_axes(normalized, shape)))

    return normalized


def is_empty(normalized):
    """Whether a normalized selection selects no elements at all
    """
    return any(len(indexes) == 0 for indexes in normalized)


def empty_axes(normalized, shape):
    """Names of the axes with an empty selection
    """
    return tuple(name for indexes, name in zip(normalized, shape.names)
                 if len(indexes) == 0)


def is_full(indexes, extent):
    """Whether a normalized axis selection is exactly 1..extent
    """
    return (len(indexes) == extent and
            bool(np.all(indexes == np.arange(1, extent + 1))))


def is_contiguous(indexes):
    """Whether a normalized axis selection is an increasing run without gaps
    (a single index is contiguous)
    """
    return len(indexes) > 0 and bool(np.all(np.diff(indexes) == 1))
