"""Mapping raw provider rows into canonical records.

The upstream views have renamed columns more than once (``estado`` vs
``status``, ``asignado`` vs ``assignee_name``...). Every alias list lives here
so aggregation code only ever sees one record shape.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import asdict
from datetime import datetime
from typing import Any

import pandas as pd

from .config import (
    DEFAULT_MODULE_LABEL,
    NOT_AVAILABLE_LABEL,
    UNASSIGNED_LABEL,
    UNKNOWN_LABEL,
)
from .models import (
    ConsultantHours,
    IssueModel,
    ModuleHours,
    PriorityCount,
    ProjectModel,
    StatusCount,
    TopTicket,
    TypeCount,
    WorklogModel,
)

FIELD_ALIASES: dict[str, dict[str, Sequence[str]]] = {
    "project": {
        "id": ("id",),
        "name": ("nombre", "name"),
        "tracker_id": ("jira_id", "tracker_id"),
        "contracted_hours": ("horas_contratadas", "contracted_hours"),
        "status": ("estado", "status"),
        "description": ("descripcion", "description"),
    },
    "issue": {
        "key": ("clave", "key", "ticket_key"),
        "summary": ("resumen", "summary"),
        "status": ("estado", "status"),
        "priority": ("prioridad", "priorida", "priority"),
        "issue_type": ("tipo", "issuetype", "type"),
        "assignee": ("asignado", "assignee", "assignee_name"),
        "created": ("fechacreacion", "created"),
        "module": ("modulo", "componente", "module"),
    },
    "worklog": {
        "key": ("clave", "ticket_key", "key"),
        "assignee": ("assignee_name", "asignado"),
        "hours": ("horas", "hours"),
        "created": ("created_at_jira", "created"),
        "comment": ("comentario", "comment"),
    },
    "status": {
        "status": ("estado", "status"),
        "count": ("total_issues", "total_tickets"),
    },
    "priority": {
        "priority": ("priorida", "prioridad", "priority"),
        "count": ("total", "total_tickets"),
        "pct": ("pct_mes",),
    },
    "type": {
        "issue_type": ("issuetype", "tipo", "type"),
        "count": ("total_issues", "total", "cantidad"),
    },
    "module": {
        "module": ("modulo", "module"),
        "hours": ("total_horas",),
        "tickets": ("total_issues", "total_tickets"),
    },
    "consultant": {
        "name": ("asignado", "assignee_name"),
        "tickets": ("total_issues",),
        "hours": ("total_horas",),
        "pct_tickets": ("porcentaje_issues",),
        "pct_hours": ("porcentaje_horas",),
    },
    "top_ticket": {
        "key": ("ticket", "clave"),
        "hours": ("ticket_horas",),
    },
}


def _first(row: dict[str, Any], aliases: Sequence[str]) -> Any:
    for name in aliases:
        value = row.get(name)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _number(row: dict[str, Any], aliases: Sequence[str], default: float = 0.0) -> float:
    """First alias that parses as a non-zero number, else ``default``.

    Zero falls through to the next alias, matching how the views report
    counts under whichever column happens to be populated.
    """
    for name in aliases:
        value = to_float(row.get(name))
        if value:
            return value
    return default


def _text(row: dict[str, Any], aliases: Sequence[str], default: str = UNKNOWN_LABEL) -> str:
    value = _first(row, aliases)
    if value is None:
        return default
    return str(value).strip() or default


def parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    ts = pd.to_datetime(value, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def map_project(raw: dict[str, Any]) -> ProjectModel:
    aliases = FIELD_ALIASES["project"]
    tracker = _first(raw, aliases["tracker_id"])
    return ProjectModel(
        id=str(_first(raw, aliases["id"]) or ""),
        name=_text(raw, aliases["name"], default=""),
        tracker_id=str(tracker).strip() if tracker is not None else None,
        contracted_hours=to_float(_first(raw, aliases["contracted_hours"])),
        status=_first(raw, aliases["status"]),
        description=_first(raw, aliases["description"]),
    )


def map_issue(raw: dict[str, Any]) -> IssueModel:
    aliases = FIELD_ALIASES["issue"]
    return IssueModel(
        key=_text(raw, aliases["key"], default=NOT_AVAILABLE_LABEL),
        summary=_text(raw, aliases["summary"], default=NOT_AVAILABLE_LABEL),
        status=_text(raw, aliases["status"], default=NOT_AVAILABLE_LABEL),
        priority=_text(raw, aliases["priority"], default=NOT_AVAILABLE_LABEL),
        issue_type=_text(raw, aliases["issue_type"], default=NOT_AVAILABLE_LABEL),
        assignee=_text(raw, aliases["assignee"], default=NOT_AVAILABLE_LABEL),
        created=parse_timestamp(_first(raw, aliases["created"])),
        module=_text(raw, aliases["module"], default=DEFAULT_MODULE_LABEL),
    )


def map_worklog(raw: dict[str, Any]) -> WorklogModel:
    aliases = FIELD_ALIASES["worklog"]
    return WorklogModel(
        key=_text(raw, aliases["key"], default=""),
        assignee=_text(raw, aliases["assignee"], default=UNASSIGNED_LABEL),
        hours=_number(raw, aliases["hours"]),
        created=parse_timestamp(_first(raw, aliases["created"])),
        comment=_first(raw, aliases["comment"]),
    )


def map_status(raw: dict[str, Any]) -> StatusCount:
    aliases = FIELD_ALIASES["status"]
    return StatusCount(status=_text(raw, aliases["status"]), count=int(_number(raw, aliases["count"])))


def map_priority(raw: dict[str, Any]) -> PriorityCount:
    aliases = FIELD_ALIASES["priority"]
    return PriorityCount(
        priority=_text(raw, aliases["priority"]),
        count=int(_number(raw, aliases["count"])),
        pct=_number(raw, aliases["pct"]),
    )


def map_type(raw: dict[str, Any]) -> TypeCount:
    aliases = FIELD_ALIASES["type"]
    return TypeCount(issue_type=_text(raw, aliases["issue_type"]), count=int(_number(raw, aliases["count"])))


def map_module(raw: dict[str, Any]) -> ModuleHours:
    aliases = FIELD_ALIASES["module"]
    return ModuleHours(
        module=_text(raw, aliases["module"]),
        hours=_number(raw, aliases["hours"]),
        tickets=int(_number(raw, aliases["tickets"])),
    )


def map_consultant(raw: dict[str, Any]) -> ConsultantHours:
    aliases = FIELD_ALIASES["consultant"]
    return ConsultantHours(
        name=_text(raw, aliases["name"]),
        tickets=int(_number(raw, aliases["tickets"])),
        hours=_number(raw, aliases["hours"]),
        pct_tickets=_number(raw, aliases["pct_tickets"]),
        pct_hours=_number(raw, aliases["pct_hours"]),
    )


def map_top_ticket(raw: dict[str, Any]) -> TopTicket:
    aliases = FIELD_ALIASES["top_ticket"]
    return TopTicket(key=_text(raw, aliases["key"], default=NOT_AVAILABLE_LABEL), hours=_number(raw, aliases["hours"]))


def map_rows(rows: Iterable[dict[str, Any]] | None, mapper) -> list:
    return [mapper(r) for r in (rows or []) if isinstance(r, dict)]


def records_to_dataframe(records: Iterable[Any], columns: Sequence[str]) -> pd.DataFrame:
    """DataFrame of dataclass records with a stable column set, even when empty."""
    rows = [asdict(r) for r in records]
    if not rows:
        return pd.DataFrame(columns=list(columns))
    df = pd.DataFrame(rows)
    for col in columns:
        if col not in df.columns:
            df[col] = None
    return df[list(columns)]


WORKLOG_COLUMNS: Sequence[str] = ("key", "assignee", "hours", "created", "comment")
ISSUE_COLUMNS: Sequence[str] = (
    "key",
    "summary",
    "status",
    "priority",
    "issue_type",
    "assignee",
    "created",
    "module",
)


def worklogs_to_dataframe(worklogs: Iterable[WorklogModel]) -> pd.DataFrame:
    return records_to_dataframe(worklogs, WORKLOG_COLUMNS)


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    return records_to_dataframe(issues, ISSUE_COLUMNS)
