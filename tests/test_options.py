import os

import numpy as np
import pytest
import yaml

from lenareader import ReadOptions


def test_defaults():
    options = ReadOptions()

    assert options.data_selection == []
    assert options.sensor_name is None
    assert options.sensor_category == 'ALL'
    assert options.trials is None
    assert options.time_window is None
    assert options.logical_order is None
    assert options.optimize is True


def test_accepts_numpy_values():
    options = ReadOptions(trials=np.array([1, 3]),
                          data_selection=[np.array([True, False]), None])

    assert options.trials == [1, 3]
    assert options.data_selection == [[True, False], None]


def test_accepts_dict_selection():
    options = ReadOptions(data_selection=dict(sensor=[1, 2], trial='all'))
    assert options.data_selection == dict(sensor=[1, 2], trial='all')


@pytest.mark.parametrize('options', [
    dict(sensor_category='MEEG'),
    dict(time_window=[0.1]),
    dict(time_window=['a', 'b']),
    dict(optimize='yes'),
    dict(unknown_option=1),
])
def test_rejects_invalid_options(options):
    with pytest.raises(ValueError):
        ReadOptions(**options)


def test_cannot_modify_once_initialized():
    options = ReadOptions()

    with pytest.raises(AttributeError):
        options.trials = [1]


def test_returned_values_are_copies():
    options = ReadOptions(trials=[1, 2])
    options.trials.append(3)

    assert options.trials == [1, 2]


def test_replace():
    options = ReadOptions(trials=[1, 2])
    new = options.replace(optimize=False)

    assert new.trials == [1, 2]
    assert new.optimize is False
    assert options.optimize is True


def test_unknown_attribute():
    with pytest.raises(AttributeError):
        ReadOptions().something


def test_from_yaml(make_tmp_folder):
    path = os.path.join(make_tmp_folder, 'options.yaml')

    with open(path, 'w') as f:
        yaml.safe_dump(dict(sensor_name='^ML', time_window=[0.0, 0.1]), f)

    options = ReadOptions.from_yaml(path)

    assert options.sensor_name == '^ML'
    assert options.time_window == [0.0, 0.1]
    assert options == ReadOptions(sensor_name='^ML', time_window=[0., 0.1])
