"""Hours detail: worklogs sorted by consultant and ticket with subtotal rows."""

from __future__ import annotations

import functools
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

import pandas as pd
import pytz

from gpdesk_app.core.config import (
    GRAND_TOTAL_LABEL,
    SUBTOTAL_PREFIX,
    TIMEZONE,
    UNASSIGNED_LABEL,
)
from gpdesk_app.core.models import WorklogModel

from .totals import format_hours

_TICKET_NUMBER = re.compile(r"-(\d+)$")

ENTRY = "entry"
SUBTOTAL = "subtotal"
TOTAL = "total"


def ticket_number(key: str | None) -> int | None:
    match = _TICKET_NUMBER.search(key or "")
    return int(match.group(1)) if match else None


def compare_ticket_keys(a: str | None, b: str | None) -> int:
    """Order ``ABC-2`` before ``ABC-10``.

    Keys ending in ``-<digits>`` compare by that number; equal numbers or keys
    without one fall back to plain string order.
    """
    a, b = a or "", b or ""
    na, nb = ticket_number(a), ticket_number(b)
    if na is not None and nb is not None and na != nb:
        return -1 if na < nb else 1
    if a == b:
        return 0
    return -1 if a < b else 1


ticket_sort_key = functools.cmp_to_key(compare_ticket_keys)


def consultant_name(worklog: WorklogModel) -> str:
    name = (worklog.assignee or "").strip()
    return name or UNASSIGNED_LABEL


def _created_sort_value(worklog: WorklogModel) -> float:
    return worklog.created.timestamp() if worklog.created else float("-inf")


def _sort_key(worklog: WorklogModel) -> tuple:
    name = consultant_name(worklog)
    # exact name second so case variants stay contiguous
    return (name.lower(), name, ticket_sort_key(worklog.key), _created_sort_value(worklog))


def sort_worklogs(worklogs: Sequence[WorklogModel]) -> list[WorklogModel]:
    return sorted(worklogs, key=_sort_key)


def format_local_date(value: datetime | None, tz_name: str = TIMEZONE) -> str:
    """``dd/mm/yyyy`` in the dashboard timezone; empty for missing dates."""
    if value is None:
        return ""
    tz = pytz.timezone(tz_name)
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(tz).strftime("%d/%m/%Y")


@dataclass(slots=True)
class DetailRow:
    kind: str
    date: str
    ticket: str
    consultant: str
    hours: float
    comment: str = ""

    @property
    def hours_label(self) -> str:
        return format_hours(self.hours)


def group_worklogs(worklogs: Sequence[WorklogModel]) -> list[DetailRow]:
    """Entries per consultant, a subtotal after each consultant, then a grand total.

    Returns an empty list when there are no worklogs.
    """
    if not worklogs:
        return []
    rows: list[DetailRow] = []
    grand_total = 0.0
    current: str | None = None
    subtotal = 0.0
    for w in sort_worklogs(worklogs):
        name = consultant_name(w)
        if current is not None and name != current:
            rows.append(DetailRow(SUBTOTAL, "", "", f"{SUBTOTAL_PREFIX} {current}", subtotal))
            subtotal = 0.0
        current = name
        hours = float(w.hours or 0)
        subtotal += hours
        grand_total += hours
        rows.append(
            DetailRow(
                ENTRY,
                format_local_date(w.created),
                w.key or "",
                name,
                hours,
                (w.comment or "").strip(),
            )
        )
    rows.append(DetailRow(SUBTOTAL, "", "", f"{SUBTOTAL_PREFIX} {current}", subtotal))
    rows.append(DetailRow(TOTAL, "", "", GRAND_TOTAL_LABEL, grand_total))
    return rows


def detail_rows_to_dataframe(rows: Sequence[DetailRow]) -> pd.DataFrame:
    """Table with the report headers; hours rendered as ``N.NN h``."""
    columns = ["Fecha", "Ticket", "Consultor", "Horas", "Comentario"]
    data = [
        {
            "Fecha": r.date,
            "Ticket": r.ticket,
            "Consultor": r.consultant,
            "Horas": r.hours_label,
            "Comentario": r.comment,
        }
        for r in rows
    ]
    return pd.DataFrame(data, columns=columns)
