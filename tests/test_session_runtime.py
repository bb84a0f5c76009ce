import math

import pytest

from routine_tracker.core.enums import TimerState, TrackedMetric
from routine_tracker.core.errors import StateError, ValidationError
from routine_tracker.services.materializer import materialize
from routine_tracker.services.session_runtime import SessionRuntime, coerce_set_value


@pytest.fixture
def runtime(plan, catalog, clock):
    return SessionRuntime(materialize(plan, 0, catalog), clock=clock)


def test_starts_idle(runtime):
    assert runtime.state is TimerState.IDLE
    assert runtime.elapsed_seconds == 0
    assert runtime.progress_percent == 0


def test_pause_resume_preserves_elapsed(runtime, clock):
    runtime.start()
    clock.advance(5)
    runtime.pause()
    assert runtime.elapsed_seconds == 5
    assert runtime.draft.duration_seconds == 5

    clock.advance(60)  # paused time does not count
    assert runtime.elapsed_seconds == 5

    runtime.start()
    clock.advance(3)
    runtime.pause()
    assert runtime.elapsed_seconds == 8
    assert runtime.state is TimerState.PAUSED


def test_fractional_seconds_survive_pause_resume(runtime, clock):
    for _ in range(4):
        runtime.start()
        clock.advance(2.9)
        runtime.pause()

    # 11.6s accumulated; only the reported value is floored
    assert runtime.elapsed_seconds == 11
    assert runtime.draft.duration_seconds == 11

    runtime.start()
    clock.advance(0.5)
    assert runtime.snapshot().elapsed_seconds == 12


def test_tick_updates_draft_duration(runtime, clock):
    runtime.start()
    clock.advance(2.6)
    assert runtime.tick() == 2
    assert runtime.draft.duration_seconds == 2
    clock.advance(1)
    runtime.tick()
    assert runtime.draft.duration_seconds == 3


def test_tick_is_noop_unless_running(runtime, clock):
    clock.advance(10)
    assert runtime.tick() == 0


def test_reset_needs_confirmation(runtime, clock):
    runtime.start()
    clock.advance(7)
    assert runtime.reset() is False
    assert runtime.state is TimerState.RUNNING
    assert runtime.elapsed_seconds == 7

    assert runtime.reset(confirmed=True) is True
    assert runtime.state is TimerState.IDLE
    assert runtime.elapsed_seconds == 0
    assert runtime.draft.duration_seconds == 0

    runtime.start()
    clock.advance(1)
    assert runtime.elapsed_seconds == 1


def test_reset_from_paused(runtime, clock):
    runtime.start()
    clock.advance(4)
    runtime.pause()
    runtime.reset(confirmed=True)
    assert runtime.state is TimerState.IDLE
    assert runtime.elapsed_seconds == 0


def test_invalid_transitions(runtime):
    with pytest.raises(StateError):
        runtime.pause()
    runtime.start()
    with pytest.raises(StateError):
        runtime.start()


def test_finish_stops_running_timer(runtime, clock):
    runtime.start()
    clock.advance(90)
    draft = runtime.finish()
    assert runtime.state is TimerState.PAUSED
    assert draft.duration_seconds == 90


def test_toggle_updates_live_progress(runtime):
    # 3 bench sets + 1 plank set
    assert runtime.toggle_set_completion(0, 0, True) == 25
    assert runtime.toggle_set_completion(0, 1, True) == 50
    assert runtime.toggle_set_completion(1, 0, True) == 75
    assert runtime.toggle_set_completion(0, 1, False) == 50
    assert runtime.draft.exercises[0].completed_sets[1].is_completed is False


@pytest.mark.parametrize("exercise_index, set_index", [(0, 3), (2, 0), (-1, 0), (0, -1)])
def test_out_of_range_indices(runtime, exercise_index, set_index):
    with pytest.raises(IndexError):
        runtime.toggle_set_completion(exercise_index, set_index, True)
    with pytest.raises(IndexError):
        runtime.update_set_value(exercise_index, set_index, "reps", 5)


def test_update_set_value(runtime):
    assert runtime.update_set_value(0, 2, "weight", "62.5") == 62.5
    assert runtime.update_set_value(0, 2, "reps", 8) == 8
    record = runtime.draft.exercises[0].completed_sets[2]
    assert (record.reps, record.weight) == (8, 62.5)
    # untouched neighbours
    assert runtime.draft.exercises[0].completed_sets[1].weight == 60


def test_unknown_field_rejected(runtime):
    with pytest.raises(ValidationError):
        runtime.update_set_value(0, 0, "tempo", 3)


def test_update_set_is_all_or_nothing(runtime):
    with pytest.raises(ValidationError):
        runtime.update_set(0, 0, values={"reps": 12, "tempo": 3}, completed=True)
    record = runtime.draft.exercises[0].completed_sets[0]
    assert record.reps == 10
    assert record.is_completed is False

    runtime.update_set(0, 0, values={"reps": 12, "weight": "abc"}, completed=True)
    assert (record.reps, record.weight, record.is_completed) == (12, 0, True)
    assert runtime.progress_percent == 25


@pytest.mark.parametrize(
    "field, value, expected",
    [
        (TrackedMetric.REPS, "12", 12),
        (TrackedMetric.REPS, 8.9, 8),
        (TrackedMetric.REPS, "", 0),
        (TrackedMetric.REPS, "ten", 0),
        (TrackedMetric.WEIGHT, -5, 0),
        (TrackedMetric.WEIGHT, math.inf, 0),
        (TrackedMetric.WEIGHT, math.nan, 0),
        (TrackedMetric.WEIGHT, True, 0),
        (TrackedMetric.WEIGHT, None, 0),
        (TrackedMetric.DISTANCE, " 400.5 ", 400.5),
        (TrackedMetric.DURATION, "45.7", 45),
    ],
)
def test_tolerant_coercion(field, value, expected):
    assert coerce_set_value(field, value) == expected


def test_snapshot(runtime, clock):
    runtime.start()
    clock.advance(3725)
    runtime.toggle_set_completion(0, 0, True)
    snap = runtime.snapshot()
    assert snap.state is TimerState.RUNNING
    assert snap.elapsed_seconds == 3725
    assert snap.elapsed_display == "1:02:05"
    assert snap.progress_percent == 25
    assert snap.draft.duration_seconds == 3725
    # snapshot is a copy
    snap.draft.exercises[0].completed_sets[0].is_completed = False
    assert runtime.draft.exercises[0].completed_sets[0].is_completed is True


def test_metadata_edits(runtime):
    runtime.set_notes("Heavy day")
    assert runtime.draft.notes == "Heavy day"
