# coding: utf-8

"""
Reading selections with RecordingReader
"""

import os

import numpy as np
import yaml

from lenareader import RecordingReader, read_many


# generate data: 10 trials x 1000 samples x 32 sensors, the last declared
# dimension varies fastest in the file
output_folder = os.path.join(os.path.expanduser('~'), 'data/lenareader')

if not os.path.exists(output_folder):
    os.makedirs(output_folder)

data = np.random.rand(10, 1000, 32).astype('float32')
data.tofile(os.path.join(output_folder, 'recording.bin'))

sensors = [dict(name='EEG{:03d}'.format(i), category='EEG')
           for i in range(1, 33)]

header = dict(data_filename='recording.bin',
              data_type='floating',
              data_size=4,
              data_format='LittleEndian',
              dimensions=[dict(name='datablock_range', size=10),
                          dict(name='time_range', size=1000,
                               sample_rate=1000., pre_trigger=0.2),
                          dict(name='sensor_range', size=32,
                               sensors=sensors)])

path_to_header = os.path.join(output_folder, 'recording.yaml')

with open(path_to_header, 'w') as f:
    yaml.safe_dump(header, f)


reader = RecordingReader(path_to_header)
reader


# indexes are 1-based, output is always (sensor, time, trial)
res = reader.read(dict(sensor=[1, 2, 3], trial=[5]))
res.shape, res.plan


# list selections follow the order in the header: trial, time, sensor
res = reader.read([[-1], None, [10]])
res.shape


# options: sensor names, time windows (seconds) and trials
res = reader.read(sensor_name='^EEG00', time_window=[0.0, 0.1], trials=[1, 2])
res.shape


# a selection that reduces to nothing does not read anything
res = reader.read(sensor_name='^MEG')
res.empty, res.empty_axes


# same selection from several recordings
results = read_many([path_to_header] * 4, dict(sensor=[1]), n_processors=2)
[r.shape for r in results]
