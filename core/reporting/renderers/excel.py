from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.domain.enums import NodeKind
from core.reporting.contexts import ScheduleReportContext


SCHEDULE_HEADERS = [
    "ID",
    "Type",
    "Title",
    "Duration (days)",
    "Earliest start",
    "Earliest finish",
    "Latest start",
    "Latest finish",
    "Total float",
    "Critical",
]


class ExcelScheduleRenderer:
    def render(self, ctx: ScheduleReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")
        critical_fill = PatternFill("solid", fgColor="F8D7DA")

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"

        ws["A1"] = ctx.title
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        kv("Project duration (days)", ctx.project_duration)
        kv("Nodes", len(ctx.rows))
        kv("Milestones", ctx.milestone_count)
        kv("Critical nodes", ctx.critical_count)

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 15

        # ---------------- Schedule ----------------
        ws_sched = wb.create_sheet("Schedule")
        for col_index, h in enumerate(SCHEDULE_HEADERS, start=1):
            cell = ws_sched.cell(row=1, column=col_index, value=h)
            cell.font = header_font
            cell.alignment = center
            cell.fill = header_fill
            cell.border = thin_border

        for row_index, r in enumerate(ctx.rows, start=2):
            values = [
                r.node_id,
                "Milestone" if r.kind == NodeKind.MILESTONE else "Activity",
                r.title,
                r.duration,
                r.earliest_start,
                r.earliest_finish,
                r.latest_start,
                r.latest_finish,
                r.total_float,
                "Yes" if r.is_critical else "No",
            ]
            for col_index, v in enumerate(values, start=1):
                cell = ws_sched.cell(row=row_index, column=col_index, value=v)
                cell.border = thin_border
                if r.is_critical:
                    cell.fill = critical_fill

        ws_sched.column_dimensions["A"].width = 36
        ws_sched.column_dimensions["B"].width = 12
        ws_sched.column_dimensions["C"].width = 30
        for col_letter in ("D", "E", "F", "G", "H", "I", "J"):
            ws_sched.column_dimensions[col_letter].width = 15
        ws_sched.freeze_panes = "A2"

        wb.save(output_path)
        return output_path
