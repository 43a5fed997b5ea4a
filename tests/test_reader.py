import os

import numpy as np
import pytest
import yaml

from lenareader import (RecordingReader, RecordingHeader, ReadOptions,
                        read_many, ReadError, InvalidSelection,
                        InconsistentShape, UnknownAxis, SelectionOutOfRange)
from util import write_recording


def test_reads_everything(recording):
    path, expected = recording
    res = RecordingReader(path).read()

    assert res.axes == ('sensor', 'time', 'trial')
    np.testing.assert_array_equal(res.data, expected)


def test_list_selection_follows_declared_order(recording):
    path, expected = recording

    # declared order is trial, time, sensor
    res = RecordingReader(path).read([[2], None, [1, 4]])

    np.testing.assert_array_equal(res.data, expected[[0, 3]][:, :, [1]])


def test_dict_selection(recording):
    path, expected = recording

    res = RecordingReader(path).read(dict(sensor=[5, 1], time='all',
                                          trial=[-1]))

    np.testing.assert_array_equal(res.data, expected[[4, 0]][:, :, [1, 2]])


def test_rejects_unknown_axis_in_dict(recording):
    path, _ = recording

    with pytest.raises(UnknownAxis):
        RecordingReader(path).read(dict(frequency=[1]))


def test_rejects_too_many_items(recording):
    path, _ = recording

    with pytest.raises(InconsistentShape):
        RecordingReader(path).read([None, None, None, None])


def test_out_of_range(recording):
    path, _ = recording

    with pytest.raises(SelectionOutOfRange):
        RecordingReader(path).read(dict(time=[21]))


def test_sensor_name(recording):
    path, expected = recording

    res = RecordingReader(path).read(sensor_name='^mlc')

    np.testing.assert_array_equal(res.data, expected[[0, 1]])


def test_sensor_name_list(recording):
    path, expected = recording

    res = RecordingReader(path).read(sensor_name=['Fz', 'STI'])

    np.testing.assert_array_equal(res.data, expected[[2, 4]])


def test_sensor_name_within_selection(recording):
    path, expected = recording

    res = RecordingReader(path).read(dict(sensor=[4, 3, 2]),
                                     sensor_name='z$')

    np.testing.assert_array_equal(res.data, expected[[3, 2]])


def test_sensor_name_indexes(recording):
    path, expected = recording

    res = RecordingReader(path).read(sensor_name=[3, 1])

    np.testing.assert_array_equal(res.data, expected[[2, 0]])


def test_sensor_name_indexes_keep_category_filter(recording):
    path, expected = recording
    reader = RecordingReader(path)

    # sensor 1 is MEG
    res = reader.read(sensor_category='EEG', sensor_name=[1])

    assert res.empty
    assert res.empty_axes == ('sensor',)

    res = reader.read(sensor_category='EEG', sensor_name=[4, 1, 3])

    np.testing.assert_array_equal(res.selection[0], [4, 3])
    np.testing.assert_array_equal(res.data, expected[[3, 2]])


def test_sensor_name_indexes_keep_data_selection(recording):
    path, expected = recording

    res = RecordingReader(path).read(dict(sensor=[2, 5]),
                                     sensor_name=[5, 1])

    np.testing.assert_array_equal(res.selection[0], [5])
    np.testing.assert_array_equal(res.data, expected[[4]])


def test_sensor_name_indexes_out_of_range(recording):
    path, _ = recording

    with pytest.raises(SelectionOutOfRange):
        RecordingReader(path).read(sensor_name=[6])


def test_sensor_name_rejects_mixed_list(recording):
    path, _ = recording

    with pytest.raises(InvalidSelection):
        RecordingReader(path).read(sensor_name=['Fz', 1])


def test_sensor_category_matches_category_only(make_tmp_folder):
    data = np.random.rand(2, 4).astype('<f4')
    sensors = [dict(name='ADC01', category='ADC'),
               dict(name='DC01', category='DC'),
               dict(name='DC02', category=None),
               dict(name='ADC02', category=None)]
    path = write_recording(make_tmp_folder, data,
                           [dict(name='time_range', size=2),
                            dict(name='sensor_range', size=4,
                                 sensors=sensors)])

    reader = RecordingReader(path)

    dc = reader.read(sensor_category='DC')
    adc = reader.read(sensor_category='ADC')

    np.testing.assert_array_equal(dc.selection[0], [2, 3])
    np.testing.assert_array_equal(adc.selection[0], [1, 4])
    np.testing.assert_array_equal(dc.data, data.T[[1, 2]])


def test_sensor_category(recording):
    path, expected = recording
    reader = RecordingReader(path)

    eeg = reader.read(sensor_category='EEG')
    both = reader.read(sensor_category='EEG+MEG')

    np.testing.assert_array_equal(eeg.data, expected[[2, 3]])
    np.testing.assert_array_equal(both.data, expected[[0, 1, 2, 3]])


def test_sensor_filter_reducing_to_nothing_is_empty(recording):
    path, _ = recording

    res = RecordingReader(path).read(sensor_name='^nothing')

    assert res.empty
    assert res.empty_axes == ('sensor',)


def test_trials_override_selection(recording):
    path, expected = recording

    res = RecordingReader(path).read(dict(trial=[1]), trials=[3, 2])

    np.testing.assert_array_equal(res.data, expected[:, :, [2, 1]])


def test_time_window(recording):
    path, expected = recording
    reader = RecordingReader(path)

    # samples are at 1/100 - 0.05 = -0.04, -0.03, ...
    res = reader.read(time_window=[-0.021, 0.0])

    np.testing.assert_array_equal(res.selection[1], [3, 4, 5])
    np.testing.assert_array_equal(res.data, expected[:, 2:5])


@pytest.mark.parametrize('window', [[-1.0, 0.0], [0.0, 1.0], [0.1, 0.0]])
def test_rejects_invalid_time_window(recording, window):
    path, _ = recording

    with pytest.raises(InvalidSelection):
        RecordingReader(path).read(time_window=window)


def test_logical_order(recording):
    path, expected = recording

    res = RecordingReader(path).read(logical_order=['trial', 'sensor',
                                                    'time'])

    assert res.axes == ('trial', 'sensor', 'time')
    np.testing.assert_array_equal(res.data, expected.transpose(2, 0, 1))


def test_options_object(recording):
    path, expected = recording
    options = ReadOptions(data_selection=dict(sensor=[2]), optimize=False)

    res = RecordingReader(path).read(options=options)

    assert not res.plan.optimized
    np.testing.assert_array_equal(res.data, expected[[1]])


def test_options_mapping(recording):
    path, expected = recording

    res = RecordingReader(path).read(options=dict(trials=2))

    np.testing.assert_array_equal(res.data, expected[:, :, [1]])


def test_optimized_reads_less(recording):
    path, expected = recording
    reader = RecordingReader(path)

    res = reader.read(dict(sensor=[2, 3], trial=[2]))

    assert res.plan.byte_count < res.plan.total_bytes
    np.testing.assert_array_equal(res.data, expected[[1, 2]][:, :, [1]])


def test_sensor_filter_without_sensor_list(make_tmp_folder):
    data = np.zeros((2, 3), dtype='<f4')
    path = write_recording(make_tmp_folder, data,
                           [dict(name='time_range', size=2),
                            dict(name='sensor_range', size=3)])

    with pytest.raises(InvalidSelection):
        RecordingReader(path).read(sensor_name='Fz')


def test_missing_data_file(make_tmp_folder):
    data = np.zeros((2, 3), dtype='<f4')
    path = write_recording(make_tmp_folder, data,
                           [dict(name='time_range', size=2),
                            dict(name='sensor_range', size=3)])
    os.remove(os.path.join(make_tmp_folder, 'recording.bin'))

    with pytest.raises(ReadError):
        RecordingReader(path)


def test_data_file_too_small(make_tmp_folder):
    data = np.zeros((2, 3), dtype='<f4')
    path = write_recording(make_tmp_folder, data,
                           [dict(name='time_range', size=3),
                            dict(name='sensor_range', size=3)])

    with pytest.raises(ReadError):
        RecordingReader(path)


def test_from_mapping(make_tmp_folder):
    data = np.arange(6, dtype='<i2').reshape(2, 3)
    path = write_recording(make_tmp_folder, data,
                           [dict(name='time_range', size=2),
                            dict(name='sensor_range', size=3)],
                           data_type='fixed')

    with open(path) as f:
        mapping = yaml.safe_load(f)

    reader = RecordingReader.from_mapping(mapping, make_tmp_folder)
    res = reader.read(dict(time=[2]))

    assert isinstance(reader.header, RecordingHeader)
    np.testing.assert_array_equal(res.data, [[3], [4], [5]])


def test_read_many(make_tmp_folder):
    paths = []
    expected = []

    for i in range(3):
        data = np.random.rand(2, 4).astype('<f4')
        paths.append(write_recording(make_tmp_folder, data,
                                     [dict(name='time_range', size=2),
                                      dict(name='sensor_range', size=4)],
                                     name='recording{}'.format(i)))
        expected.append(data.T[[0, 2]])

    results = read_many(paths, dict(sensor=[1, 3]), show_progress_bar=True)

    assert len(results) == 3

    for res, exp in zip(results, expected):
        np.testing.assert_array_equal(res.data, exp)


def test_read_many_in_parallel(make_tmp_folder):
    paths = []
    expected = []

    for i in range(2):
        data = np.random.rand(3, 2).astype('<f4')
        paths.append(write_recording(make_tmp_folder, data,
                                     [dict(name='datablock_range', size=3),
                                      dict(name='sensor_range', size=2)],
                                     name='recording{}'.format(i)))
        expected.append(data.T[:, [2]])

    results = read_many(paths, options=ReadOptions(trials=[3]),
                        n_processors=2)

    for res, exp in zip(results, expected):
        np.testing.assert_array_equal(res.data, exp)
