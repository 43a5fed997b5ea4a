"""
lenareader init file

Selective reader for LENA binary recordings: reads any per axis subset of an
N-dimensional array stored in a binary file, reading only the bytes needed
"""
import logging
from logging import NullHandler

logging.getLogger(__name__).addHandler(NullHandler())

__version__ = '0.3.0dev'

from lenareader.axes import Axis, ArrayShape  # noqa: E402
from lenareader.encoding import ElementEncoding  # noqa: E402
from lenareader.config import ReadOptions  # noqa: E402
from lenareader.errors import (LenaReaderError, InvalidSelection,  # noqa
                               InconsistentShape, SelectionOutOfRange,
                               UnsupportedEncoding, UnknownAxis, ReadError)
from lenareader.extract import (extract, ExtractedArray,  # noqa: E402
                                SelectionEmpty)
from lenareader.header import RecordingHeader  # noqa: E402
from lenareader.reader import RecordingReader, read_many  # noqa: E402

__all__ = ['Axis', 'ArrayShape', 'ElementEncoding', 'ReadOptions',
           'LenaReaderError', 'InvalidSelection', 'InconsistentShape',
           'SelectionOutOfRange', 'UnsupportedEncoding', 'UnknownAxis',
           'ReadError', 'extract', 'ExtractedArray', 'SelectionEmpty',
           'RecordingHeader', 'RecordingReader', 'read_many']
