import numpy as np

from lenareader.plan import plan_read, full_read_plan, collapsible_prefix


def sel(*axes):
    return tuple(np.array(axis, dtype='int64') for axis in axes)


def test_full_selection_reads_everything_in_one_run():
    plan = plan_read(sel(range(1, 5), range(1, 11), [1, 2]), (4, 10, 2), 4)

    assert plan.offset == 0
    assert plan.byte_count == 320
    assert plan.read_shape == (4, 10, 2)
    assert plan.residuals == (None, None, None)
    assert plan.n_runs == 1
    assert plan.run_bytes == 320


def test_single_trial_with_contiguous_sensors():
    plan = plan_read(sel([1, 2], range(1, 11), [2]), (4, 10, 2), 4)

    # second trial starts at element 40
    assert plan.offset == 160
    # from element 40 to element 40 + 9 * 4 + 1 (both included)
    assert plan.byte_count == 152
    assert plan.read_shape == (2, 10, 1)
    assert plan.strides == (4, 16, 160)
    assert plan.residuals == (None, None, None)
    assert plan.n_runs == 10
    assert plan.run_bytes == 8
    assert plan.output_shape == (2, 10, 1)


def test_axis_plan_terms():
    plan = plan_read(sel([2, 3], [4], [2]), (4, 10, 2), 2)
    sensor, time, trial = plan.axes

    assert (sensor.start, sensor.count, sensor.stride) == (1, 2, 2)
    assert sensor.skip == 4
    assert sensor.offset == 2
    assert (time.start, time.count, time.offset) == (3, 1, 24)
    assert time.skip == 9 * 8
    assert (trial.start, trial.count, trial.offset) == (1, 1, 80)
    assert plan.offset == 2 + 24 + 80
    assert plan.byte_count == 4


def test_non_contiguous_axis_is_read_entirely_with_its_slower_axes():
    plan = plan_read(sel([1], [5, 3], [2]), (4, 10, 2), 4)
    sensor, time, trial = plan.axes

    assert (sensor.start, sensor.count) == (0, 1)
    assert sensor.residual is None
    assert (time.start, time.count) == (0, 10)
    np.testing.assert_equal(time.residual, [4, 2])
    assert (trial.start, trial.count) == (0, 2)
    np.testing.assert_equal(trial.residual, [1])
    assert plan.output_shape == (1, 2, 1)


def test_full_axes_after_gap_need_no_residual():
    plan = plan_read(sel([1, 3], range(1, 11), [1, 2]), (4, 10, 2), 4)
    sensor, time, trial = plan.axes

    assert sensor.count == 4
    np.testing.assert_equal(sensor.residual, [0, 2])
    assert time.residual is None
    assert trial.residual is None
    assert plan.byte_count == 320


def test_decreasing_selection_is_not_contiguous():
    plan = plan_read(sel([3, 2, 1]), (4,), 8)

    assert plan.read_shape == (4,)
    np.testing.assert_equal(plan.axes[0].residual, [2, 1, 0])


def test_fallback_reads_everything():
    plan = full_read_plan(sel([1, 2], range(1, 11), [2]), (4, 10, 2), 4)

    assert not plan.optimized
    assert plan.offset == 0
    assert plan.byte_count == plan.total_bytes == 320
    np.testing.assert_equal(plan.axes[0].residual, [0, 1])
    assert plan.axes[1].residual is None
    np.testing.assert_equal(plan.axes[2].residual, [1])


def test_optimized_never_reads_more_than_fallback():
    extents = (5, 7, 3, 2)

    for _ in range(50):
        selection = tuple(np.sort(np.random.choice(np.arange(1, n + 1),
                                                   size=np.random.randint(
                                                       1, n + 1),
                                                   replace=False))
                          for n in extents)
        optimized = plan_read(selection, extents, 4)
        fallback = full_read_plan(selection, extents, 4)

        assert optimized.byte_count <= fallback.byte_count
        assert (optimized.offset + optimized.byte_count <=
                fallback.total_bytes)


def test_collapsible_prefix():
    extents = (4, 10, 2)

    assert collapsible_prefix(sel(range(1, 5), [3], [1, 2]), extents) == 3
    assert collapsible_prefix(sel([2], range(1, 11), [1]), extents) == 3
    assert collapsible_prefix(sel([1, 2], range(1, 11), [1]), extents) == 0
    assert collapsible_prefix(sel(range(1, 5), [2, 3], [1]), extents) == 1
