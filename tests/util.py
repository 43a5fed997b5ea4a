import os
import random

import numpy as np
import yaml

PATH_TO_TESTS = os.path.dirname(os.path.realpath(__file__))


def seed(i):
    random.seed(i)
    np.random.seed(i)


def write_recording(folder, data, dimensions, data_type='floating',
                    data_format='LittleEndian', data_offset=0,
                    name='recording', **header):
    """
    Write data (a C-order array whose axes follow dimensions, so the last
    declared dimension varies fastest) and its yaml header in folder,
    returns the path to the header
    """
    path_to_data = os.path.join(folder, '{}.bin'.format(name))
    path_to_header = os.path.join(folder, '{}.yaml'.format(name))

    with open(path_to_data, 'wb') as f:
        f.write(b'\x00' * data_offset)
        f.write(np.ascontiguousarray(data).tobytes())

    mapping = dict(data_filename='{}.bin'.format(name),
                   data_type=data_type,
                   data_size=data.dtype.itemsize,
                   data_format=data_format,
                   data_offset=data_offset,
                   dimensions=dimensions)
    mapping.update(header)

    with open(path_to_header, 'w') as f:
        yaml.safe_dump(mapping, f)

    return path_to_header
