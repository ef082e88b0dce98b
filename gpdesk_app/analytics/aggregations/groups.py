"""Grouping worklogs and issues by assignee, module and ticket."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from gpdesk_app.core.config import UNKNOWN_LABEL
from gpdesk_app.core.mappers import issues_to_dataframe, worklogs_to_dataframe
from gpdesk_app.core.models import IssueModel, ModuleHours, WorklogModel

from .totals import average_per_ticket, percent_of_total

_GROUP_FIELDS = {"assignee", "key"}


def hours_by_ticket(worklogs: Sequence[WorklogModel]) -> dict[str, float]:
    totals: dict[str, float] = {}
    for w in worklogs:
        if not w.key:
            continue
        totals[w.key] = totals.get(w.key, 0.0) + float(w.hours or 0)
    return totals


def group_hours(worklogs: Sequence[WorklogModel], by: str = "assignee") -> pd.DataFrame:
    """Sum of hours and distinct tickets per ``by`` field, with shares of the total."""
    if by not in _GROUP_FIELDS:
        raise ValueError(f"Cannot group worklogs by {by!r}")
    df = worklogs_to_dataframe(worklogs)
    columns = [by, "tickets", "hours", "pct_hours", "avg_hours"]
    if df.empty:
        return pd.DataFrame(columns=columns)
    df["hours"] = pd.to_numeric(df["hours"], errors="coerce").fillna(0.0)
    agg = (
        df.groupby(by, dropna=False)
        .agg(tickets=("key", "nunique"), hours=("hours", "sum"))
        .reset_index()
        .sort_values(by=["hours", by], ascending=[False, True])
    )
    total = float(agg["hours"].sum())
    agg["pct_hours"] = agg["hours"].apply(lambda h: percent_of_total(h, total))
    agg["avg_hours"] = agg.apply(lambda r: average_per_ticket(r["hours"], r["tickets"]), axis=1)
    return agg[columns].reset_index(drop=True)


def issue_summary(issues: Sequence[IssueModel], worklogs: Sequence[WorklogModel]) -> pd.DataFrame:
    """Issue metadata joined with the hours logged on each ticket in the period."""
    columns = ["key", "summary", "status", "priority", "assignee", "issue_type", "module", "hours"]
    df = issues_to_dataframe(issues)
    if df.empty:
        return pd.DataFrame(columns=columns)
    hours = hours_by_ticket(worklogs)
    df["hours"] = df["key"].map(lambda k: hours.get(k, 0.0))
    return df[columns].reset_index(drop=True)


def module_ticket_counts(issues: Sequence[IssueModel]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for issue in issues:
        module = issue.module or UNKNOWN_LABEL
        counts[module] = counts.get(module, 0) + 1
    return counts


def module_details(modules: Sequence[ModuleHours], issues: Sequence[IssueModel]) -> pd.DataFrame:
    """Per-module tickets, hours and average hours per ticket.

    The module view does not always report ticket counts; a module showing 0
    falls back to the number of worked issues tagged with that module.
    """
    columns = ["module", "tickets", "hours", "avg_hours"]
    if not modules:
        return pd.DataFrame(columns=columns)
    counted = module_ticket_counts(issues)
    rows = []
    for m in modules:
        tickets = m.tickets if m.tickets > 0 else counted.get(m.module, 0)
        rows.append(
            {
                "module": m.module,
                "tickets": int(tickets),
                "hours": float(m.hours),
                "avg_hours": average_per_ticket(m.hours, tickets),
            }
        )
    return pd.DataFrame(rows, columns=columns)


def top_tickets_by_hours(worklogs: Sequence[WorklogModel], limit: int = 5) -> pd.DataFrame:
    """Fallback ranking from raw worklogs when the ticket-hours view is empty."""
    totals = hours_by_ticket(worklogs)
    ranked = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]
    return pd.DataFrame([{"key": k, "hours": h} for k, h in ranked], columns=["key", "hours"])
