"""Percentages, averages, TOTAL rows and the headline KPIs (pure functions)."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import pandas as pd

from gpdesk_app.core.config import FIXED_STATUSES, TOTAL_LABEL
from gpdesk_app.core.models import ConsultantHours, PriorityCount, StatusCount, TypeCount
from gpdesk_app.core.status import closed_count


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent_of_total(value: float, total: float) -> float:
    """``value / max(total, 1) * 100``; never NaN or infinite."""
    value = float(value or 0)
    total = float(total or 0)
    return value / max(total, 1.0) * 100.0


def average_per_ticket(hours: float, tickets: int) -> float:
    return float(hours or 0) / max(int(tickets or 0), 1)


def completion_rate(closed: int, total: int) -> int:
    """Closed tickets as a whole percentage of all tickets (0 when there are none)."""
    return round_half_up(int(closed or 0) / max(int(total or 0), 1) * 100)


def format_hours(value: float, decimals: int = 2) -> str:
    return f"{float(value or 0):.{decimals}f} h"


def format_pct(value: float, decimals: int = 1) -> str:
    return f"{float(value or 0):.{decimals}f}%"


@dataclass(slots=True)
class HeadlineKpis:
    total_tickets: int
    total_hours: float
    closed_tickets: int
    completion_rate: int


def headline_kpis(total_tickets: int, total_hours: float, statuses: Iterable[StatusCount]) -> HeadlineKpis:
    closed = closed_count(statuses)
    return HeadlineKpis(
        total_tickets=int(total_tickets or 0),
        total_hours=float(total_hours or 0),
        closed_tickets=closed,
        completion_rate=completion_rate(closed, total_tickets),
    )


def status_total(statuses: Iterable[StatusCount]) -> int:
    return sum(int(s.count) for s in statuses)


def merge_fixed_statuses(statuses: Sequence[StatusCount], total_tickets: int) -> pd.DataFrame:
    """One row per fixed workflow status with count and share of all tickets."""
    counts: dict[str, int] = {}
    for row in statuses:
        counts.setdefault(row.status, int(row.count))
    rows = [
        {
            "status": status,
            "count": counts.get(status, 0),
            "pct": percent_of_total(counts.get(status, 0), total_tickets),
        }
        for status in FIXED_STATUSES
    ]
    return pd.DataFrame(rows, columns=["status", "count", "pct"])


def status_breakdown(statuses: Sequence[StatusCount]) -> pd.DataFrame:
    """Statuses with at least one ticket, share computed against their own sum."""
    total = status_total(statuses)
    rows = [
        {"status": s.status, "count": int(s.count), "pct": percent_of_total(s.count, total)}
        for s in statuses
        if int(s.count) > 0
    ]
    return pd.DataFrame(rows, columns=["status", "count", "pct"])


def priority_breakdown(priorities: Sequence[PriorityCount]) -> pd.DataFrame:
    rows = [{"priority": p.priority, "count": int(p.count), "pct": float(p.pct)} for p in priorities]
    return pd.DataFrame(rows, columns=["priority", "count", "pct"])


def type_breakdown(types: Sequence[TypeCount]) -> pd.DataFrame:
    rows = [{"issue_type": t.issue_type, "count": int(t.count)} for t in types]
    return pd.DataFrame(rows, columns=["issue_type", "count"])


def consultant_breakdown(consultants: Sequence[ConsultantHours]) -> pd.DataFrame:
    rows = [
        {
            "name": c.name,
            "tickets": int(c.tickets),
            "hours": float(c.hours),
            "pct_tickets": float(c.pct_tickets),
            "pct_hours": float(c.pct_hours),
            "avg_hours": average_per_ticket(c.hours, c.tickets) if c.tickets > 0 else 0.0,
        }
        for c in consultants
    ]
    return pd.DataFrame(rows, columns=["name", "tickets", "hours", "pct_tickets", "pct_hours", "avg_hours"])


def with_total_row(
    df: pd.DataFrame,
    label_col: str,
    sum_cols: Sequence[str],
    *,
    fixed: dict[str, object] | None = None,
    label: str = TOTAL_LABEL,
) -> pd.DataFrame:
    """Append a synthetic TOTAL row summing ``sum_cols``.

    Columns in ``fixed`` take the given value on the TOTAL row (e.g. ``100``
    for percentage columns); any other column is left empty.
    """
    total: dict[str, object] = {col: None for col in df.columns}
    total[label_col] = label
    for col in sum_cols:
        total[col] = pd.to_numeric(df[col], errors="coerce").fillna(0).sum() if col in df.columns else 0
    for col, value in (fixed or {}).items():
        total[col] = value
    total_df = pd.DataFrame([total], columns=list(df.columns) or list(total.keys()))
    if df.empty:
        return total_df
    return pd.concat([df, total_df], ignore_index=True)


def billing_summary(consumed: float, contracted: float) -> pd.DataFrame:
    """Contracted vs consumed vs additional hours with an over-budget flag."""
    consumed = float(consumed or 0)
    contracted = float(contracted or 0)
    additional = max(0.0, consumed - contracted)
    rows = [
        {"concept": "Horas Contratadas", "hours": contracted, "state": "Base"},
        {
            "concept": "Horas Consumidas",
            "hours": consumed,
            "state": "Excedido" if consumed > contracted else "En rango",
        },
        {
            "concept": "Horas Adicionales",
            "hours": additional,
            "state": "Facturable" if additional > 0 else "-",
        },
    ]
    return pd.DataFrame(rows, columns=["concept", "hours", "state"])
