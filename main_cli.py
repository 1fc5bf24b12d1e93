# main_cli.py
"""
Command line front end for the CPM scheduling engine.

Usage:
    tender-cpm schedule <snapshot.json> [--project ID] [--json] [--export out.xlsx]
    tender-cpm check-dependency <snapshot.json> SOURCE TARGET [--type FS] [--lag N] [--impact]
    tender-cpm add-dependency <snapshot.json> SOURCE TARGET [--type FS] [--lag N]

Exit codes: 0 ok, 1 domain error (cycle, invalid dependency, bad snapshot), 2 usage error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from core.domain.enums import NodeKind
from core.exceptions import CyclicGraphError, DomainError
from core.reporting.api import export_schedule
from core.services.scheduling.models import CPMResult
from infra.logging_config import bind_trace_id, setup_logging
from infra.services import build_services_from_file
from infra.version import get_app_version

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DOMAIN_ERROR = 1
EXIT_USAGE_ERROR = 2


def _result_to_dict(result: CPMResult) -> dict:
    return {
        "project_duration": result.project_duration,
        "critical_path": result.critical_ids,
        "nodes": {
            node_id: {
                "kind": node.kind.value,
                "title": node.title,
                "duration": node.duration,
                "earliest_start": node.earliest_start,
                "earliest_finish": node.earliest_finish,
                "latest_start": node.latest_start,
                "latest_finish": node.latest_finish,
                "total_float": node.total_float,
                "is_critical": node.is_critical,
                "predecessors": list(node.predecessors),
                "successors": list(node.successors),
            }
            for node_id, node in result.nodes.items()
        },
    }


def _print_table(result: CPMResult) -> None:
    header = f"{'ID':<20} {'Title':<30} {'Dur':>4} {'ES':>5} {'EF':>5} {'LS':>5} {'LF':>5} {'Float':>6}  Crit"
    print(header)
    print("-" * len(header))
    for node in sorted(result.nodes.values(), key=lambda n: (n.earliest_start, n.id)):
        print(
            f"{node.id[:20]:<20} {node.title[:30]:<30} {node.duration:>4} "
            f"{node.earliest_start:>5} {node.earliest_finish:>5} "
            f"{node.latest_start:>5} {node.latest_finish:>5} {node.total_float:>6}  "
            f"{'*' if node.is_critical else ''}"
        )
    print()
    print(f"Project duration: {result.project_duration} day(s)")
    print(f"Critical path: {' -> '.join(result.critical_ids) or '(none)'}")


def cmd_schedule(args) -> int:
    services = build_services_from_file(args.snapshot)
    project_id = args.project or services["snapshot"].project_id
    result = services["planning_service"].calculate_project_schedule(project_id)

    if args.json:
        print(json.dumps(_result_to_dict(result), indent=2))
    else:
        _print_table(result)

    if args.export:
        path = export_schedule(result, args.export, title=f"Critical path - {project_id}")
        print(f"Exported to {path}", file=sys.stderr)
    return EXIT_OK


def _dependency_kwargs(args, project_id: str) -> dict:
    return {
        "project_id": project_id,
        "source_id": args.source,
        "target_id": args.target,
        "source_kind": NodeKind(args.source_kind),
        "target_kind": NodeKind(args.target_kind),
        "dependency_type": args.type,
        "lag_days": args.lag,
    }


def cmd_check_dependency(args) -> int:
    services = build_services_from_file(args.snapshot)
    project_id = args.project or services["snapshot"].project_id
    diagnostic = services["planning_service"].get_dependency_diagnostics(
        include_impact=args.impact,
        **_dependency_kwargs(args, project_id),
    )
    print(f"[{diagnostic.code}] {diagnostic.message}")
    for row in diagnostic.impact_rows:
        print(
            f"  {row.title}: start {row.before_start} -> {row.after_start} "
            f"({row.start_shift_days:+d}d), finish {row.before_finish} -> {row.after_finish} "
            f"({row.finish_shift_days:+d}d)"
        )
    return EXIT_OK if diagnostic.is_valid else EXIT_DOMAIN_ERROR


def cmd_add_dependency(args) -> int:
    services = build_services_from_file(args.snapshot)
    snapshot = services["snapshot"]
    project_id = args.project or snapshot.project_id
    dep = services["planning_service"].add_dependency(**_dependency_kwargs(args, project_id))
    snapshot.save(args.snapshot)
    print(f"Added dependency {dep.id}: {dep.source_id} -> {dep.target_id} ({dep.dependency_type.short_code}, lag {dep.lag_days})")
    return EXIT_OK


def _add_dependency_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("source", help="Source activity/milestone id")
    parser.add_argument("target", help="Target activity/milestone id")
    parser.add_argument("--type", default="FS", help="FS, SS, FF, SF or the full name (default FS)")
    parser.add_argument("--lag", type=int, default=0, help="Lag in days, may be negative")
    parser.add_argument("--source-kind", choices=[k.value for k in NodeKind], default=NodeKind.ACTIVITY.value)
    parser.add_argument("--target-kind", choices=[k.value for k in NodeKind], default=NodeKind.ACTIVITY.value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tender-cpm", description="Critical path scheduling for tender projects")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs here instead of the user data dir")
    sub = parser.add_subparsers(dest="command", required=True)

    p_schedule = sub.add_parser("schedule", help="Compute the critical path of a project snapshot")
    p_schedule.add_argument("snapshot", type=Path)
    p_schedule.add_argument("--project", default=None, help="Project id (defaults to the snapshot's project)")
    p_schedule.add_argument("--json", action="store_true", help="Print the result as JSON")
    p_schedule.add_argument("--export", type=Path, default=None, help="Also export to .csv or .xlsx")
    p_schedule.set_defaults(func=cmd_schedule)

    p_check = sub.add_parser("check-dependency", help="Validate a candidate dependency without saving it")
    p_check.add_argument("snapshot", type=Path)
    p_check.add_argument("--project", default=None)
    p_check.add_argument("--impact", action="store_true", help="Show the schedule shift it would cause")
    _add_dependency_arguments(p_check)
    p_check.set_defaults(func=cmd_check_dependency)

    p_add = sub.add_parser("add-dependency", help="Validate and store a dependency in the snapshot")
    p_add.add_argument("snapshot", type=Path)
    p_add.add_argument("--project", default=None)
    _add_dependency_arguments(p_add)
    p_add.set_defaults(func=cmd_add_dependency)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(log_file=args.log_file)

    with bind_trace_id() as trace_id:
        logger.info("Running %s (trace %s)", args.command, trace_id)
        try:
            return args.func(args)
        except CyclicGraphError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_DOMAIN_ERROR
        except DomainError as exc:
            print(f"Error [{exc.code}]: {exc}", file=sys.stderr)
            return EXIT_DOMAIN_ERROR
        except FileNotFoundError as exc:
            print(f"Error: snapshot not found: {exc.filename}", file=sys.stderr)
            return EXIT_USAGE_ERROR


if __name__ == "__main__":
    sys.exit(main())
