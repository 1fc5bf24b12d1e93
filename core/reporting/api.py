"""Reporting API wrappers around renderer classes."""

from __future__ import annotations

import logging
from pathlib import Path

from core.exceptions import ValidationError
from core.reporting.contexts import build_schedule_context
from core.reporting.renderers.delimited import CsvScheduleRenderer
from core.reporting.renderers.excel import ExcelScheduleRenderer
from core.services.scheduling.models import CPMResult

logger = logging.getLogger(__name__)

_RENDERERS = {
    ".csv": CsvScheduleRenderer,
    ".xlsx": ExcelScheduleRenderer,
}


def export_schedule(result: CPMResult, output_path: str | Path, title: str = "Critical path") -> Path:
    path = Path(output_path)
    renderer_cls = _RENDERERS.get(path.suffix.lower())
    if renderer_cls is None:
        raise ValidationError(
            f"Unsupported export format '{path.suffix}'. Use .csv or .xlsx.",
            code="EXPORT_FORMAT_UNSUPPORTED",
        )
    ctx = build_schedule_context(result, title=title)
    written = renderer_cls().render(ctx, path)
    logger.info("Exported schedule (%d rows) to %s", len(ctx.rows), written)
    return written


__all__ = ["export_schedule"]
