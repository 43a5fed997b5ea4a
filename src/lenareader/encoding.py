"""
Element encodings: how every array element is stored in the binary file
"""
import logging

import numpy as np

from lenareader.errors import UnsupportedEncoding

logger = logging.getLogger(__name__)

UNSIGNED = 'unsigned'
SIGNED = 'signed'
FLOAT = 'float'

# valid widths (in bytes) for every kind of element
WIDTHS = {
    UNSIGNED: (1, 2, 4, 8),
    SIGNED: (1, 2, 4, 8),
    FLOAT: (4, 8),
}

# numpy type codes
_CODES = {UNSIGNED: 'u', SIGNED: 'i', FLOAT: 'f'}

# 'data_type' values in LENA headers
HEADER_TYPES = {
    'unsigned fixed': UNSIGNED,
    'fixed': SIGNED,
    'floating': FLOAT,
}

# 'data_format' values in LENA headers
HEADER_FORMATS = {
    'LittleEndian': 'little',
    'BigEndian': 'big',
}

_BYTE_ORDERS = {'little': '<', 'big': '>', 'native': '='}


class ElementEncoding(object):
    """
    Encoding of the elements in a binary array

    Parameters
    ----------
    kind: str
        One of 'unsigned', 'signed' or 'float'

    width: int
        Bytes per element, 1, 2, 4 or 8 for integers, 4 or 8 for floats

    byte_order: str, optional
        'little', 'big' or 'native' (default)

    Raises
    ------
    UnsupportedEncoding
        If the combination of kind, width and byte order is not supported
    """

    def __init__(self, kind, width, byte_order='native'):
        if kind not in WIDTHS:
            raise UnsupportedEncoding('Unknown element kind "{}", must be one '
                                      'of: {}'.format(kind,
                                                      ', '.join(WIDTHS)))

        try:
            width = int(width)
        except (TypeError, ValueError):
            raise UnsupportedEncoding('Element width must be an integer, '
                                      'got: {}'.format(width))

        if width not in WIDTHS[kind]:
            raise UnsupportedEncoding('Unsupported width for {} elements: {} '
                                      'bytes, valid widths are: {}'
                                      .format(kind, width, WIDTHS[kind]))

        if byte_order not in _BYTE_ORDERS:
            raise UnsupportedEncoding('Unknown byte order "{}", must be one '
                                      'of: {}'.format(byte_order,
                                                      ', '.join(_BYTE_ORDERS)))

        self._kind = kind
        self._width = width
        self._byte_order = byte_order

    @classmethod
    def from_header(cls, data_type, data_size, data_format=None):
        """
        Build an encoding from the 'data_type', 'data_size' and 'data_format'
        header fields

        Examples
        --------
        >>> ElementEncoding.from_header('floating', 4, 'BigEndian').dtype
        dtype('>f4')
        """
        if data_type not in HEADER_TYPES:
            raise UnsupportedEncoding('Unknown data_type "{}", must be one '
                                      'of: {}'.format(data_type,
                                                      ', '.join(HEADER_TYPES)))

        if data_format is None:
            logger.warning('No data_format provided, assuming native byte '
                           'order')
            byte_order = 'native'
        elif data_format in HEADER_FORMATS:
            byte_order = HEADER_FORMATS[data_format]
        else:
            raise UnsupportedEncoding('Unknown data_format "{}", must be one '
                                      'of: {}'
                                      .format(data_format,
                                              ', '.join(HEADER_FORMATS)))

        return cls(HEADER_TYPES[data_type], data_size, byte_order)

    @classmethod
    def from_dtype(cls, dtype):
        """Build an encoding from a numpy dtype (or anything np.dtype takes)
        """
        try:
            dtype = np.dtype(dtype)
        except TypeError:
            raise UnsupportedEncoding('Not a valid dtype: {}'.format(dtype))

        kind = {value: key for key, value in _CODES.items()}.get(dtype.kind)

        if kind is None:
            raise UnsupportedEncoding('Unsupported dtype: {}'.format(dtype))

        if dtype.byteorder == '<':
            byte_order = 'little'
        elif dtype.byteorder == '>':
            byte_order = 'big'
        else:
            byte_order = 'native'

        return cls(kind, dtype.itemsize, byte_order)

    @property
    def kind(self):
        return self._kind

    @property
    def width(self):
        """Bytes per element
        """
        return self._width

    @property
    def byte_order(self):
        return self._byte_order

    @property
    def dtype(self):
        """numpy dtype used to decode the elements
        """
        return np.dtype('{}{}{}'.format(_BYTE_ORDERS[self._byte_order],
                                        _CODES[self._kind], self._width))

    def decode(self, buffer, count=-1):
        """Decode raw bytes into a 1D array
        """
        return np.frombuffer(buffer, dtype=self.dtype, count=count)

    def __eq__(self, other):
        return (isinstance(other, ElementEncoding) and
                self.dtype == other.dtype)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.dtype.str)

    def __repr__(self):
        return ('ElementEncoding(kind={!r}, width={}, byte_order={!r})'
                .format(self._kind, self._width, self._byte_order))
