import json
from datetime import date

import pytest

import main_cli
from core.domain.enums import DependencyType, NodeKind
from core.exceptions import ValidationError
from infra.services import build_services
from infra.snapshot import ProjectSnapshot


SNAPSHOT = {
    "project_id": "tender-42",
    "activities": [
        {"id": "a1", "title": "Marktverkenning", "planned_start": "2026-03-01", "planned_end": "2026-03-06"},
        {"id": "a2", "title": "Leidraad schrijven", "planned_start": "2026-03-01", "planned_end": "2026-03-11"},
        {"id": "a3", "title": "Juridische review", "planned_start": "2026-03-11", "planned_end": "2026-03-14"},
    ],
    "milestones": [{"id": "m1", "title": "Publicatie", "target_date": "2026-03-20"}],
    "dependencies": [
        {"id": "d1", "source_id": "a1", "target_id": "a3", "dependency_type": "finish_to_start", "lag_days": 0},
        {"id": "d2", "source_id": "a2", "target_id": "a3"},
        {"source_id": "a3", "target_id": "m1", "target_kind": "milestone", "dependency_type": "FS"},
    ],
}


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "project.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "logs" / "cpm.log"


def test_snapshot_load_maps_records(snapshot_file):
    snapshot = ProjectSnapshot.load(snapshot_file)

    assert snapshot.project_id == "tender-42"
    a1 = snapshot.activity_repo.get("a1")
    assert a1.planned_start == date(2026, 3, 1)
    assert a1.project_id == "tender-42"
    assert snapshot.milestone_repo.get("m1").target_date == date(2026, 3, 20)
    deps = snapshot.dependency_repo.list_by_project("tender-42")
    assert len(deps) == 3
    assert deps[1].dependency_type == DependencyType.FINISH_TO_START
    assert deps[2].target_kind == NodeKind.MILESTONE
    assert deps[2].id


def test_snapshot_save_round_trip(tmp_path, snapshot_file):
    snapshot = ProjectSnapshot.load(snapshot_file)
    out = snapshot.save(tmp_path / "copy.json")

    reloaded = ProjectSnapshot.load(out)
    assert reloaded.to_dict() == snapshot.to_dict()


def test_snapshot_rejects_bad_records(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"activities": [{"id": "a", "planned_start": "tomorrow"}]}), encoding="utf-8")
    with pytest.raises(ValidationError) as exc:
        ProjectSnapshot.load(bad)
    assert exc.value.code == "SNAPSHOT_INVALID"

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValidationError):
        ProjectSnapshot.load(broken)


def test_snapshot_with_mixed_date_forms_schedules(tmp_path):
    data = {
        "project_id": "tender-7",
        "activities": [
            {"id": "a1", "planned_start": "2026-03-01", "planned_end": "2026-03-05T12:00:00Z"},
            {"id": "a2", "planned_start": "2026-03-05T12:00:00+01:00", "planned_end": "2026-03-08"},
        ],
        "dependencies": [{"source_id": "a1", "target_id": "a2"}],
    }
    path = tmp_path / "mixed.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    services = build_services(ProjectSnapshot.load(path))
    result = services["planning_service"].calculate_project_schedule("tender-7")

    assert result.nodes["a1"].duration == 5
    assert result.nodes["a2"].duration == 3
    assert result.project_duration == 8


def test_cli_schedule_json(snapshot_file, log_file, capsys):
    code = main_cli.main(["--log-file", str(log_file), "schedule", str(snapshot_file), "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["project_duration"] == 13
    assert payload["critical_path"] == ["a2", "a3", "m1"]
    assert payload["nodes"]["a1"]["total_float"] == 5


def test_cli_schedule_table_and_export(tmp_path, snapshot_file, log_file, capsys):
    export = tmp_path / "plan.xlsx"
    code = main_cli.main(
        ["--log-file", str(log_file), "schedule", str(snapshot_file), "--export", str(export)]
    )

    assert code == 0
    out = capsys.readouterr().out
    assert "Project duration: 13 day(s)" in out
    assert "Critical path: a2 -> a3 -> m1" in out
    assert export.exists()


def test_cli_add_dependency_blocks_cycle(snapshot_file, log_file, capsys):
    code = main_cli.main(
        ["--log-file", str(log_file), "add-dependency", str(snapshot_file), "a3", "a1"]
    )

    assert code == 1
    assert "DEPENDENCY_CYCLE" in capsys.readouterr().err
    assert len(json.loads(snapshot_file.read_text(encoding="utf-8"))["dependencies"]) == 3


def test_cli_add_dependency_persists(snapshot_file, log_file):
    code = main_cli.main(
        ["--log-file", str(log_file), "add-dependency", str(snapshot_file), "a1", "a2", "--type", "SS", "--lag", "2"]
    )

    assert code == 0
    stored = json.loads(snapshot_file.read_text(encoding="utf-8"))["dependencies"]
    added = [d for d in stored if d["source_id"] == "a1" and d["target_id"] == "a2"]
    assert added and added[0]["dependency_type"] == "start_to_start"
    assert added[0]["lag_days"] == 2


def test_cli_check_dependency_reports_impact(snapshot_file, log_file, capsys):
    code = main_cli.main(
        ["--log-file", str(log_file), "check-dependency", str(snapshot_file), "a2", "a1", "--impact"]
    )

    assert code == 0
    out = capsys.readouterr().out
    assert "[DEPENDENCY_VALID]" in out
    assert "Marktverkenning" in out


def test_cli_reports_cycle_in_stored_data(tmp_path, log_file, capsys):
    payload = dict(SNAPSHOT)
    payload["dependencies"] = SNAPSHOT["dependencies"] + [{"source_id": "a3", "target_id": "a2"}]
    path = tmp_path / "cyclic.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    code = main_cli.main(["--log-file", str(log_file), "schedule", str(path)])

    assert code == 1
    assert "circular dependencies detected" in capsys.readouterr().err


def test_cli_missing_snapshot(tmp_path, log_file, capsys):
    code = main_cli.main(["--log-file", str(log_file), "schedule", str(tmp_path / "nope.json")])
    assert code == 2
    assert "snapshot not found" in capsys.readouterr().err


def test_cli_rejects_unknown_dependency_type(snapshot_file, log_file, capsys):
    code = main_cli.main(
        ["--log-file", str(log_file), "add-dependency", str(snapshot_file), "a1", "a2", "--type", "XX"]
    )
    assert code == 1
    assert "DEPENDENCY_TYPE_INVALID" in capsys.readouterr().err
    assert len(ProjectSnapshot.load(snapshot_file).dependency_repo.list_by_project("tender-42")) == 3
