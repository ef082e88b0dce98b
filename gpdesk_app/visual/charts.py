"""Chart builders (Altair) for the monthly breakdowns."""

from __future__ import annotations

import altair as alt
import pandas as pd

from gpdesk_app.analytics.metrics.calendar import CalendarCell
from gpdesk_app.core.config import CALENDAR_WEEKDAY_LABELS, TOTAL_LABEL
from gpdesk_app.core.status import ordered_status_labels, status_color


def _without_total(df: pd.DataFrame, label_col: str) -> pd.DataFrame:
    if df.empty or label_col not in df.columns:
        return df
    return df[df[label_col] != TOTAL_LABEL]


def status_chart(df: pd.DataFrame):
    """Horizontal bars per status using the workflow colors."""
    if df.empty:
        return None
    domain = ordered_status_labels(df["status"])
    palette = [status_color(s) for s in domain]
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("count:Q", title="Tickets"),
            y=alt.Y("status:N", title=None, sort=domain),
            color=alt.Color("status:N", scale=alt.Scale(domain=domain, range=palette), legend=None),
            tooltip=[
                alt.Tooltip("status:N", title="Estado"),
                alt.Tooltip("count:Q", title="Tickets"),
                alt.Tooltip("pct:Q", title="%", format=".1f"),
            ],
        )
        .properties(height=220)
    )


def priority_chart(df: pd.DataFrame):
    data = _without_total(df, "priority")
    if data.empty:
        return None
    return (
        alt.Chart(data)
        .mark_arc(innerRadius=50)
        .encode(
            theta=alt.Theta("count:Q"),
            color=alt.Color("priority:N", title="Prioridad"),
            tooltip=[
                alt.Tooltip("priority:N", title="Prioridad"),
                alt.Tooltip("count:Q", title="Tickets"),
                alt.Tooltip("pct:Q", title="%", format=".1f"),
            ],
        )
        .properties(height=260)
    )


def type_chart(df: pd.DataFrame):
    if df.empty:
        return None
    return (
        alt.Chart(df)
        .mark_bar(color="#9b59b6")
        .encode(
            x=alt.X("issue_type:N", title="Tipo", sort="-y"),
            y=alt.Y("count:Q", title="Tickets"),
            tooltip=[alt.Tooltip("issue_type:N", title="Tipo"), alt.Tooltip("count:Q", title="Tickets")],
        )
        .properties(height=260)
    )


def module_hours_chart(df: pd.DataFrame):
    data = _without_total(df, "module")
    if data.empty:
        return None
    return (
        alt.Chart(data)
        .mark_bar(color="#e67e22")
        .encode(
            x=alt.X("hours:Q", title="Horas"),
            y=alt.Y("module:N", title=None, sort="-x"),
            tooltip=[
                alt.Tooltip("module:N", title="Módulo"),
                alt.Tooltip("tickets:Q", title="Tickets"),
                alt.Tooltip("hours:Q", title="Horas", format=".2f"),
                alt.Tooltip("avg_hours:Q", title="Promedio h/Ticket", format=".2f"),
            ],
        )
        .properties(height=max(160, 28 * len(data)))
    )


def consultant_hours_chart(df: pd.DataFrame):
    data = _without_total(df, "name")
    if data.empty:
        return None
    return (
        alt.Chart(data)
        .mark_bar(color="#2980b9")
        .encode(
            x=alt.X("hours:Q", title="Horas"),
            y=alt.Y("name:N", title=None, sort="-x"),
            tooltip=[
                alt.Tooltip("name:N", title="Consultor"),
                alt.Tooltip("tickets:Q", title="Tickets"),
                alt.Tooltip("hours:Q", title="Horas", format=".2f"),
                alt.Tooltip("pct_hours:Q", title="% Horas", format=".1f"),
            ],
        )
        .properties(height=max(160, 28 * len(data)))
    )


def consumption_chart(consumed: float, contracted: float):
    """Contracted vs consumed bars; consumed turns red once over the contract."""
    df = pd.DataFrame(
        [
            {"concept": "Contratadas", "hours": float(contracted or 0), "color": "#34495e"},
            {
                "concept": "Consumidas",
                "hours": float(consumed or 0),
                "color": "#e74c3c" if consumed > contracted else "#2ecc71",
            },
        ]
    )
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("hours:Q", title="Horas"),
            y=alt.Y("concept:N", title=None, sort=None),
            color=alt.Color("color:N", scale=None),
            tooltip=[alt.Tooltip("concept:N", title="Concepto"), alt.Tooltip("hours:Q", title="Horas", format=".2f")],
        )
        .properties(height=120)
    )


def calendar_heatmap(cells: list[CalendarCell]):
    """Sunday-first month grid with the number of tickets created per day."""
    if not cells:
        return None
    df = pd.DataFrame(
        [
            {
                "week": c.row,
                "weekday": f"{c.column}-{CALENDAR_WEEKDAY_LABELS[c.column]}",
                "day": c.day,
                "count": c.count,
            }
            for c in cells
        ]
    )
    order = [f"{i}-{label}" for i, label in enumerate(CALENDAR_WEEKDAY_LABELS)]
    base = alt.Chart(df).encode(
        x=alt.X("weekday:O", sort=order, title=None, axis=alt.Axis(labelExpr="split(datum.label, '-')[1]")),
        y=alt.Y("week:O", title=None, axis=None),
    )
    rect = base.mark_rect(stroke="#cbd5e1").encode(
        color=alt.Color("count:Q", scale=alt.Scale(scheme="oranges"), title="Tickets"),
        tooltip=[alt.Tooltip("day:Q", title="Día"), alt.Tooltip("count:Q", title="Tickets creados")],
    )
    text = base.mark_text(baseline="middle", fontSize=11).encode(text="day:Q")
    return (rect + text).properties(height=260)
