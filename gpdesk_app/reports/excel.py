"""Spreadsheet exports built with pandas' openpyxl writer."""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence

import pandas as pd
from openpyxl.utils import get_column_letter

from gpdesk_app.core.column_config import get_columns
from gpdesk_app.core.config import TOTAL_LABEL
from gpdesk_app.core.models import WorklogModel
from gpdesk_app.features.project_month.context import MonthContext

logger = logging.getLogger(__name__)

ISSUE_SHEET = "Resumen de Issues"
MODULE_SHEET = "Desglose por Módulo"
CONSULTANT_SHEET = "Desglose por Consultor"
HOURS_SHEET = "Detalle Horas"


def _fmt(value, decimals: int = 2) -> str:
    try:
        return f"{float(value):.{decimals}f}"
    except (TypeError, ValueError):
        return ""


def issue_summary_frame(ctx: MonthContext) -> pd.DataFrame:
    df = ctx.issue_summary
    out = pd.DataFrame(
        {
            "Key": df["key"],
            "Resumen": df["summary"],
            "Estado": df["status"],
            "Prioridad": df["priority"],
            "Asignado": df["assignee"],
            "Tipo": df["issue_type"],
            "Horas": df["hours"].map(_fmt),
        }
    )
    return out[get_columns("issue_summary")]


def module_breakdown_frame(ctx: MonthContext) -> pd.DataFrame:
    df = ctx.modules
    df = df[df["module"] != TOTAL_LABEL] if not df.empty else df
    out = pd.DataFrame(
        {
            "Módulo": df["module"],
            "Tickets": df["tickets"].map(lambda v: int(v or 0)),
            "Horas Totales": df["hours"].map(_fmt),
            "Promedio h/Ticket": df["avg_hours"].map(_fmt),
        }
    )
    return out[get_columns("module_breakdown")]


def consultant_breakdown_frame(ctx: MonthContext) -> pd.DataFrame:
    df = ctx.consultants
    df = df[df["name"] != TOTAL_LABEL] if not df.empty else df
    out = pd.DataFrame(
        {
            "Consultor": df["name"],
            "Tickets": df["tickets"].map(lambda v: int(v or 0)),
            "% Tickets": df["pct_tickets"].map(lambda v: _fmt(v, 1)),
            "Horas": df["hours"].map(_fmt),
            "% Horas": df["pct_hours"].map(lambda v: _fmt(v, 1)),
            "Promedio h/t": df["avg_hours"].map(_fmt),
        }
    )
    return out[get_columns("consultant_breakdown")]


def hours_detail_frame(worklogs: Sequence[WorklogModel], month: str) -> pd.DataFrame:
    rows = [
        {"Clave": w.key, "Asignado": w.assignee, "Mes": month, "Horas": round(float(w.hours or 0), 2)}
        for w in worklogs
    ]
    return pd.DataFrame(rows, columns=["Clave", "Asignado", "Mes", "Horas"])[get_columns("hours_detail")]


def _finish_sheet(writer: pd.ExcelWriter, sheet_name: str) -> None:
    ws = writer.sheets[sheet_name]
    max_col = max(ws.max_column, 1)
    ws.freeze_panes = "A2"
    ws.auto_filter.ref = f"A1:{get_column_letter(max_col)}1"
    for idx in range(1, max_col + 1):
        letter = get_column_letter(idx)
        longest = max((len(str(c.value)) for c in ws[letter] if c.value is not None), default=8)
        ws.column_dimensions[letter].width = min(max(longest + 2, 10), 60)


def _write_sheets(sheets: dict[str, pd.DataFrame]) -> bytes:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for name, df in sheets.items():
            df.to_excel(writer, index=False, sheet_name=name)
            _finish_sheet(writer, name)
    output.seek(0)
    return output.read()


def build_analysis_workbook(ctx: MonthContext) -> bytes:
    """Three-sheet workbook for the detailed analysis export."""
    logger.debug("Building analysis workbook for %s/%s", ctx.project_name, ctx.month)
    return _write_sheets(
        {
            ISSUE_SHEET: issue_summary_frame(ctx),
            MODULE_SHEET: module_breakdown_frame(ctx),
            CONSULTANT_SHEET: consultant_breakdown_frame(ctx),
        }
    )


def build_hours_workbook(worklogs: Sequence[WorklogModel], month: str) -> bytes:
    return _write_sheets({HOURS_SHEET: hours_detail_frame(worklogs, month)})
