import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from core.domain.enums import DependencyType, NodeKind
from core.domain.planning import Activity
from core.exceptions import CyclicGraphError
from core.services.scheduling import (
    activity_duration,
    build_schedule_graph,
    detect_cycles,
    topological_sort,
    would_create_cycle,
)
from core.services.scheduling.models import Node, ScheduleGraph
from core.services.scheduling.results import apply_float

from conftest import PROJECT_ID, activity, dep, milestone


def test_activity_duration_rounds_up_and_clamps():
    assert activity_duration(date(2026, 3, 1), date(2026, 3, 11)) == 10
    assert activity_duration(datetime(2026, 3, 1, 8), datetime(2026, 3, 2, 9)) == 2
    assert activity_duration(date(2026, 3, 11), date(2026, 3, 1)) == 0
    assert activity_duration(None, date(2026, 3, 1)) == 0
    assert activity_duration(date(2026, 3, 1), None) == 0


def test_activity_duration_mixes_dates_and_aware_datetimes():
    # 2026-03-01 00:00 to 2026-03-05 12:00 UTC is four and a half days
    assert activity_duration(date(2026, 3, 1), datetime(2026, 3, 5, 12, tzinfo=timezone.utc)) == 5
    cet = timezone(timedelta(hours=1))
    assert activity_duration(datetime(2026, 3, 1, 1, tzinfo=cet), date(2026, 3, 3)) == 2
    assert activity_duration(datetime(2026, 3, 5, tzinfo=timezone.utc), date(2026, 3, 1)) == 0


def test_builder_records_edges_on_both_endpoints():
    graph = build_schedule_graph(
        [activity("a", 2), activity("b", 3)],
        [milestone("m")],
        [dep("a", "b", DependencyType.START_TO_START, lag_days=1), dep("b", "m", target_kind=NodeKind.MILESTONE)],
    )
    assert len(graph) == 3
    assert graph.nodes["a"].successors == ["b"]
    assert graph.nodes["b"].predecessors == ["a"]
    assert graph.nodes["m"].kind == NodeKind.MILESTONE
    assert graph.nodes["m"].duration == 0
    edge = graph.incoming("b")[0]
    assert edge.dependency_type == DependencyType.START_TO_START
    assert edge.lag_days == 1
    assert [n.id for n in graph.sinks()] == ["m"]


def test_builder_drops_unknown_references_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        graph = build_schedule_graph([activity("a", 2)], [], [dep("a", "ghost"), dep("ghost", "a")])

    assert graph.nodes["a"].successors == []
    assert graph.nodes["a"].predecessors == []
    assert "unknown node" in caplog.text


def test_dangling_policy_ignore_logs_at_debug(caplog, monkeypatch):
    monkeypatch.setenv("CPM_DANGLING_DEPENDENCY_POLICY", "ignore")
    with caplog.at_level(logging.WARNING):
        build_schedule_graph([activity("a", 2)], [], [dep("a", "ghost")])
    assert "unknown node" not in caplog.text


def test_builder_warns_on_inverted_dates(caplog):
    backwards = Activity(
        id="x",
        project_id=PROJECT_ID,
        title="x",
        planned_start=date(2026, 3, 10),
        planned_end=date(2026, 3, 1),
    )
    with caplog.at_level(logging.WARNING):
        graph = build_schedule_graph([backwards], [], [])
    assert graph.nodes["x"].duration == 0
    assert "before it starts" in caplog.text


def test_builder_drops_malformed_dependencies(caplog):
    deps = [dep("a", "b", "XX"), dep("b", "c", lag_days="soon"), dep("a", "c")]
    with caplog.at_level(logging.WARNING):
        graph = build_schedule_graph([activity("a", 2), activity("b", 3), activity("c", 1)], [], deps)

    assert graph.nodes["a"].successors == ["c"]
    assert graph.nodes["b"].predecessors == []
    assert graph.nodes["b"].successors == []
    assert caplog.text.count("is malformed") == 2


def test_detect_cycles_empty_for_dag():
    graph = build_schedule_graph([activity("a1", 5), activity("a2", 5)], [], [dep("a1", "a2")])
    assert detect_cycles(graph) == []


def test_detect_cycles_reports_path_from_revisited_node():
    graph = build_schedule_graph(
        [activity("a"), activity("b"), activity("c")],
        [],
        [dep("a", "b"), dep("b", "c"), dep("c", "b")],
    )
    assert detect_cycles(graph) == [["b", "c"]]


def test_detect_cycles_reports_disjoint_cycles_and_self_loops():
    graph = build_schedule_graph(
        [activity("a"), activity("b"), activity("c"), activity("d")],
        [],
        [dep("a", "b"), dep("b", "a"), dep("c", "d"), dep("d", "c"), dep("d", "d")],
    )
    cycles = detect_cycles(graph)
    assert ["a", "b"] in cycles
    assert ["c", "d"] in cycles
    assert ["d"] in cycles


def test_detect_cycles_handles_deep_chains_without_recursion():
    count = 5000
    activities = [activity(f"n{i}", 1) for i in range(count)]
    deps = [dep(f"n{i}", f"n{i + 1}") for i in range(count - 1)]
    deps.append(dep(f"n{count - 1}", "n0"))
    graph = build_schedule_graph(activities, [], deps)

    cycles = detect_cycles(graph)
    assert len(cycles) == 1
    assert len(cycles[0]) == count


def test_topological_sort_respects_edges():
    graph = build_schedule_graph(
        [activity("c"), activity("b"), activity("a")],
        [],
        [dep("a", "b"), dep("b", "c")],
    )
    assert [n.id for n in topological_sort(graph)] == ["a", "b", "c"]


def test_topological_sort_raises_with_cycle_details():
    graph = build_schedule_graph(
        [activity("start"), activity("x"), activity("y")],
        [],
        [dep("start", "x"), dep("x", "y"), dep("y", "x")],
    )
    with pytest.raises(CyclicGraphError) as exc:
        topological_sort(graph)
    assert exc.value.cycle == ["x", "y"]
    assert sorted(exc.value.unresolved_ids) == ["x", "y"]
    assert "x -> y -> x" in str(exc.value)


def test_would_create_cycle():
    existing = [dep("a", "b")]
    assert would_create_cycle(existing, "b", "a") is True
    assert would_create_cycle(existing, "b", "c") is False
    assert would_create_cycle([dep("a", "b"), dep("b", "c")], "c", "a") is True
    assert would_create_cycle([], "a", "b") is False
    assert would_create_cycle([], "a", "a") is True
    # existing records stay untouched
    assert [(d.source_id, d.target_id) for d in existing] == [("a", "b")]


def test_negative_float_is_reported_not_clamped(caplog):
    graph = ScheduleGraph()
    node = graph.add_node(Node(id="late", kind=NodeKind.ACTIVITY, title="late", duration=2))
    node.earliest_start, node.latest_start = 5, 3

    with caplog.at_level(logging.WARNING):
        apply_float(graph)

    assert node.total_float == -2
    assert node.is_critical is False
    assert "Negative total float" in caplog.text
