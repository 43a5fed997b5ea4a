"""
Exceptions raised by lenareader

Every error derives from LenaReaderError and from the builtin exception a
caller would expect for that situation (IndexError for out of range
indexes, ValueError for malformed input and IOError for read failures), so
both ``except LenaReaderError`` and ``except ValueError`` work
"""


class LenaReaderError(Exception):
    """Base class for all lenareader errors
    """
    pass


class InvalidSelection(LenaReaderError, ValueError):
    """A selection item cannot be interpreted (unknown keyword, mask with the
    wrong length, mixed positive and negative indexes, non integers)
    """
    pass


class InconsistentShape(InvalidSelection):
    """The number of selected axes does not match the number of axes in the
    array, or the header declares an invalid shape
    """
    pass


class SelectionOutOfRange(LenaReaderError, IndexError):
    """A requested index lies outside [1, extent] for its axis

    Parameters
    ----------
    axis: str
        Name of the axis

    extent: int
        Number of elements in the axis

    indexes: list
        Offending (1-based) indexes
    """

    def __init__(self, axis, extent, indexes):
        self.axis = axis
        self.extent = extent
        self.indexes = list(indexes)

        super(SelectionOutOfRange, self).__init__(
            'Selection of <{}> is beyond authorized range [ 1 .. {} ], '
            'got: {}'.format(axis, extent, self.indexes))


class UnsupportedEncoding(LenaReaderError, ValueError):
    """The element encoding has no known width or decode rule
    """
    pass


class UnknownAxis(LenaReaderError, ValueError):
    """A dimension name does not map to any of the canonical axes
    """
    pass


class ReadError(LenaReaderError, IOError):
    """Seeking or reading the binary file failed or returned fewer bytes than
    requested
    """
    pass
