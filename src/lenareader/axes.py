"""
Canonical axes and array shapes
"""
from enum import Enum
from numbers import Integral

from lenareader.errors import InconsistentShape, UnknownAxis


class Axis(Enum):
    """Canonical axes a recording can have, in canonical (logical) order
    """
    SENSOR = 'sensor'
    TIME = 'time'
    TRIAL = 'trial'
    FREQUENCY = 'frequency'

    @classmethod
    def parse(cls, value):
        """Get an Axis from an Axis, an axis name ('sensor') or a header
        dimension name ('sensor_range')
        """
        if isinstance(value, cls):
            return value

        name = str(value).lower()

        if name in DIMENSION_NAMES:
            return DIMENSION_NAMES[name]

        try:
            return cls(name)
        except ValueError:
            raise UnknownAxis('Unknown axis "{}", valid axes are: {}'
                              .format(value,
                                      ', '.join(a.value for a in cls)))


# dimension names as found in LENA headers
DIMENSION_NAMES = {
    'sensor_range': Axis.SENSOR,
    'time_range': Axis.TIME,
    'datablock_range': Axis.TRIAL,
    'frequency_range': Axis.FREQUENCY,
}

CANONICAL_ORDER = (Axis.SENSOR, Axis.TIME, Axis.TRIAL, Axis.FREQUENCY)


class ArrayShape(object):
    """
    Dimension sizes of an array in storage order, the first axis varies
    fastest in the binary file

    Parameters
    ----------
    sizes: iterable of int
        Number of elements in every axis (storage order)

    axes: iterable of Axis or str, optional
        Axis tag for every dimension (storage order). If None, axes are
        left untagged and named 'dim0', 'dim1', ...

    Raises
    ------
    InconsistentShape
        If there are no axes, a size is smaller than one, the number of
        tags does not match the number of sizes or a tag is repeated
    """

    def __init__(self, sizes, axes=None):
        sizes = tuple(sizes)

        if not sizes:
            raise InconsistentShape('An array must have at least one axis')

        for size in sizes:
            if int(size) != size or size < 1:
                raise InconsistentShape('Axis sizes must be positive '
                                        'integers, got: {}'.format(sizes))

        if axes is not None:
            axes = tuple(Axis.parse(axis) for axis in axes)

            if len(axes) != len(sizes):
                raise InconsistentShape('Got {} sizes but {} axes'
                                        .format(len(sizes), len(axes)))

            if len(set(axes)) != len(axes):
                raise InconsistentShape('Repeated axes: {}'
                                        .format(self._names(axes)))

        self._sizes = tuple(int(size) for size in sizes)
        self._axes = axes

    @classmethod
    def from_declared(cls, sizes, axes=None):
        """Build a shape from sizes in declared (header) order, where the
        last dimension varies fastest
        """
        sizes = tuple(sizes)[::-1]
        axes = None if axes is None else tuple(axes)[::-1]
        return cls(sizes, axes)

    @staticmethod
    def _names(axes):
        return ', '.join(axis.value for axis in axes)

    @property
    def sizes(self):
        """Sizes in storage order
        """
        return self._sizes

    @property
    def axes(self):
        """Axis tags in storage order (None if untagged)
        """
        return self._axes

    @property
    def names(self):
        """Axis names in storage order
        """
        if self._axes is None:
            return tuple('dim{}'.format(i) for i in range(self.ndim))

        return tuple(axis.value for axis in self._axes)

    @property
    def ndim(self):
        return len(self._sizes)

    @property
    def n_elements(self):
        total = 1

        for size in self._sizes:
            total *= size

        return total

    def position(self, axis):
        """Storage position of an axis
        """
        axis = Axis.parse(axis)

        if self._axes is None or axis not in self._axes:
            raise UnknownAxis('Array has no "{}" axis, axes are: {}'
                              .format(axis.value, ', '.join(self.names)))

        return self._axes.index(axis)

    def size(self, axis):
        return self._sizes[self.position(axis)]

    def canonical_order(self):
        """Axes present in the array in canonical order
        """
        if self._axes is None:
            return tuple(range(self.ndim))

        return tuple(axis for axis in CANONICAL_ORDER if axis in self._axes)

    def permutation(self, logical_order=None):
        """
        Storage positions in the order they have to appear in the output so
        the output follows logical_order

        Parameters
        ----------
        logical_order: iterable of Axis, str or int, optional
            Output axes, defaults to the canonical order. Integers are
            interpreted as storage positions

        Raises
        ------
        InconsistentShape
            If logical_order does not contain every axis exactly once
        """
        if logical_order is None:
            logical_order = self.canonical_order()

        positions = tuple(int(order) if isinstance(order, Integral)
                          else self.position(order)
                          for order in logical_order)

        if sorted(positions) != list(range(self.ndim)):
            raise InconsistentShape('Logical order must contain every axis '
                                    'exactly once, got {} for an array with '
                                    'axes: {}'.format(list(logical_order),
                                                      ', '.join(self.names)))

        return positions

    def __len__(self):
        return self.ndim

    def __iter__(self):
        return iter(self._sizes)

    def __eq__(self, other):
        return (isinstance(other, ArrayShape) and
                self._sizes == other._sizes and self._axes == other._axes)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self._sizes, self._axes))

    def __repr__(self):
        return ('ArrayShape({})'
                .format(', '.join('{}={}'.format(name, size)
                                  for name, size in zip(self.names,
                                                        self._sizes))))
