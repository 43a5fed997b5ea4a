import os
import shutil
import tempfile

import numpy as np
import pytest

from lenareader import ArrayShape, ElementEncoding
from util import seed, write_recording, PATH_TO_TESTS


@pytest.fixture(autouse=True)
def setup():
    seed(0)


@pytest.fixture()
def path_to_tests():
    return PATH_TO_TESTS


@pytest.fixture
def make_tmp_folder():
    temp = tempfile.mkdtemp()
    yield temp
    shutil.rmtree(temp)


@pytest.fixture
def scenario(request):
    """
    4 sensors x 10 time samples x 2 trials of float32 in a file, sensors
    vary fastest, then time, then trials
    """
    temp = tempfile.NamedTemporaryFile(delete=False)
    path = temp.name

    def delete_file():
        os.unlink(path)

    request.addfinalizer(delete_file)

    # C order (trial, time, sensor) so sensor varies fastest
    data = np.arange(80, dtype='float32').reshape(2, 10, 4)
    data.tofile(temp)
    temp.close()

    shape = ArrayShape([4, 10, 2], ['sensor', 'time', 'trial'])
    encoding = ElementEncoding('float', 4)

    return data, shape, encoding, path


SENSORS = [dict(name='MLC11', category='MEG'),
           dict(name='MLC12', category='MEG'),
           dict(name='Fz', category='EEG'),
           dict(name='Cz', category='EEG'),
           dict(name='STI101', category='ADC')]


@pytest.fixture
def recording(make_tmp_folder):
    """
    Recording with 3 trials x 20 samples x 5 sensors (declared order) stored
    big endian after a 16 bytes offset, returns the path to the header and
    the data in (sensor, time, trial) order
    """
    data = np.random.rand(3, 20, 5).astype('>f8')
    dimensions = [dict(name='datablock_range', size=3),
                  dict(name='time_range', size=20, sample_rate=100.,
                       pre_trigger=0.05),
                  dict(name='sensor_range', size=5, sensors=SENSORS)]

    path = write_recording(make_tmp_folder, data, dimensions,
                           data_format='BigEndian', data_offset=16)

    return path, data.transpose(2, 1, 0).astype('f8')
