import pytest

from perfmodel.costs import Unit
from perfmodel.events import (
    INVALID_CPU_ID,
    INVALID_PID,
    MAX_TIME,
    MAX_TIME_RANGE,
    CostSummary,
    CpuEvents,
    Event,
    EventResults,
    FilterAction,
    Summary,
    ThreadEvents,
    ThreadState,
    TimeRange,
    ZoomAction,
)
from perfmodel.symbols import Symbol


def test_time_range_default_is_invalid_and_empty():
    time_range = TimeRange()
    assert not time_range.is_valid()
    assert time_range.is_empty()
    assert time_range.delta() == 0


@pytest.mark.parametrize("start,end", [(1, 0), (0, 1), (5, 10)])
def test_time_range_valid_when_bound_set(start, end):
    assert TimeRange(start, end).is_valid()


def test_time_range_contains_includes_bounds():
    time_range = TimeRange(10, 20)
    assert time_range.contains(10)
    assert time_range.contains(20)
    assert time_range.contains(15)
    assert not time_range.contains(9)
    assert not time_range.contains(21)
    assert time_range.delta() == 20 - 10


def test_time_range_normalized():
    assert TimeRange(20, 10).normalized() == TimeRange(10, 20)
    ordered = TimeRange(1, 2)
    assert ordered.normalized() == ordered
    assert TimeRange(20, 10) != TimeRange(10, 20)


def test_max_time_range_covers_everything():
    assert MAX_TIME_RANGE.contains(0)
    assert MAX_TIME_RANGE.contains(MAX_TIME)
    assert MAX_TIME == 2**64 - 1
    assert INVALID_CPU_ID == 2**32 - 1


def test_event_defaults_and_equality():
    event = Event()
    assert (event.type, event.stack_id, event.cpu_id) == (-1, -1, INVALID_CPU_ID)
    assert Event(time=1, cost=2) == Event(time=1, cost=2)
    assert Event(time=1) != Event(time=2)


def test_thread_events_defaults():
    thread = ThreadEvents()
    assert thread.time == MAX_TIME_RANGE
    assert thread.last_switch_time == MAX_TIME
    assert thread.state is ThreadState.UNKNOWN
    assert thread == ThreadEvents()
    assert ThreadEvents(name="worker") != thread


def test_cpu_events_equality():
    assert CpuEvents(1, [Event(time=3)]) == CpuEvents(1, [Event(time=3)])
    assert CpuEvents(1) != CpuEvents(2)


def test_cost_summary_equality_ignores_unit():
    assert CostSummary("cycles", 1, 2, Unit.TIME) == CostSummary("cycles", 1, 2, Unit.UNKNOWN)
    assert CostSummary("cycles", 1, 2) != CostSummary("cycles", 1, 3)


def test_cost_summary_str():
    assert str(CostSummary("cycles", 1, 2)) == (
        "CostSummary{label = cycles, sampleCount = 1, totalPeriod = 2}"
    )


def test_summary_collections_are_independent():
    first = Summary()
    second = Summary()
    first.errors.append("lost events")
    assert second.errors == []


def test_find_thread_returns_latest_match():
    older = ThreadEvents(pid=1, tid=2, name="old")
    newer = ThreadEvents(pid=1, tid=2, name="new")
    other = ThreadEvents(pid=1, tid=3)
    results = EventResults(threads=[older, other, newer])
    assert results.find_thread(1, 2) is newer
    assert results.find_thread(1, 3) is other
    assert results.find_thread(9, 9) is None


def test_find_thread_returns_mutable_thread():
    results = EventResults(threads=[ThreadEvents(pid=4, tid=4)])
    results.find_thread(4, 4).name = "renamed"
    assert results.threads[0].name == "renamed"


def test_event_results_equality():
    assert EventResults() == EventResults()
    assert EventResults(off_cpu_time_cost_id=1) != EventResults()


def test_filter_action_default_is_invalid():
    action = FilterAction()
    assert not action.is_valid()
    assert action.process_id == INVALID_PID


@pytest.mark.parametrize(
    "kwargs",
    [
        {"time": TimeRange(1, 2)},
        {"process_id": 1},
        {"thread_id": 1},
        {"cpu_id": 0},
        {"exclude_process_ids": [1]},
        {"exclude_thread_ids": [1]},
        {"exclude_cpu_ids": [1]},
        {"include_symbols": {Symbol("main")}},
        {"exclude_symbols": {Symbol("main")}},
    ],
)
def test_filter_action_valid_with_any_restriction(kwargs):
    assert FilterAction(**kwargs).is_valid()


def test_zoom_action_validity():
    assert not ZoomAction().is_valid()
    assert ZoomAction(TimeRange(0, 5)).is_valid()