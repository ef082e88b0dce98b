"""Pure builder of everything the pages, PDF and workbook show for one month."""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from gpdesk_app.analytics.aggregations import groups, hours_detail, totals
from gpdesk_app.analytics.metrics import calendar as cal
from gpdesk_app.analytics.metrics import performance as perf
from gpdesk_app.core.config import REPORT_TOP_TICKETS
from gpdesk_app.core.models import MonthData, ProjectModel


def resolve_contracted_hours(
    project: ProjectModel | None,
    fallback: float,
    *,
    use_project: bool = True,
) -> float:
    """Project contract when set (and positive), else the caller's default.

    With ``use_project=False`` the default is returned as is; the management
    report always bills against its fixed base.
    """
    if use_project and project is not None and project.contracted_hours and project.contracted_hours > 0:
        return float(project.contracted_hours)
    return float(fallback)


@dataclass(slots=True)
class MonthContext:
    project_name: str
    month: str
    kpis: totals.HeadlineKpis
    contracted_hours: float
    billing: pd.DataFrame
    consumption: perf.Consumption
    performance: perf.PerformanceSummary
    fixed_statuses: pd.DataFrame
    statuses: pd.DataFrame
    priorities: pd.DataFrame
    types: pd.DataFrame
    modules: pd.DataFrame
    consultants: pd.DataFrame
    consultant_efficiency: pd.DataFrame
    issue_summary: pd.DataFrame
    top_tickets: pd.DataFrame
    detail_rows: list[hours_detail.DetailRow] = field(default_factory=list)
    calendar_cells: list[cal.CalendarCell] = field(default_factory=list)
    empty: bool = False


def _top_tickets(data: MonthData, limit: int) -> pd.DataFrame:
    if data.top_tickets:
        ranked = sorted(data.top_tickets, key=lambda t: -t.hours)[:limit]
        return pd.DataFrame([{"key": t.key, "hours": t.hours} for t in ranked], columns=["key", "hours"])
    return groups.top_tickets_by_hours(data.worklogs, limit)


def _average_total_row(df: pd.DataFrame) -> pd.DataFrame:
    last = df.index[-1]
    df.loc[last, "avg_hours"] = totals.average_per_ticket(df.loc[last, "hours"], df.loc[last, "tickets"])
    return df


def build_month_context(
    data: MonthData,
    contracted_fallback: float,
    top_n: int = REPORT_TOP_TICKETS,
    *,
    use_project_contract: bool = True,
) -> MonthContext:
    project_name = data.project.name if data.project else ""
    month = data.month or ""
    kpis = totals.headline_kpis(data.total_tickets, data.total_hours, data.statuses)
    contracted = resolve_contracted_hours(data.project, contracted_fallback, use_project=use_project_contract)

    priorities = totals.with_total_row(
        totals.priority_breakdown(data.priorities), "priority", ["count"], fixed={"pct": 100.0}
    )
    modules = _average_total_row(
        totals.with_total_row(groups.module_details(data.modules, data.issues), "module", ["tickets", "hours"])
    )
    consultants = _average_total_row(
        totals.with_total_row(
            totals.consultant_breakdown(data.consultants),
            "name",
            ["tickets", "hours"],
            fixed={"pct_tickets": 100.0, "pct_hours": 100.0},
        )
    )

    cells: list[cal.CalendarCell] = []
    if month:
        year, month_num = cal.parse_month(month)
        cells = cal.month_grid(
            year, month_num, cal.count_by_day(data.calendar_issues, year, month_num)
        )

    return MonthContext(
        project_name=project_name,
        month=month,
        kpis=kpis,
        contracted_hours=contracted,
        billing=totals.billing_summary(data.total_hours, contracted),
        consumption=perf.consumption(data.total_hours, contracted),
        performance=perf.performance_summary(data.total_hours, data.total_tickets, data.statuses),
        fixed_statuses=totals.merge_fixed_statuses(data.statuses, data.total_tickets),
        statuses=totals.status_breakdown(data.statuses),
        priorities=priorities if data.priorities else totals.priority_breakdown([]),
        types=totals.type_breakdown(data.types),
        modules=modules if data.modules else groups.module_details([], []),
        consultants=consultants if data.consultants else totals.consultant_breakdown([]),
        consultant_efficiency=perf.consultant_efficiency(data.consultants),
        issue_summary=groups.issue_summary(data.issues, data.worklogs),
        top_tickets=_top_tickets(data, top_n),
        detail_rows=hours_detail.group_worklogs(data.worklogs),
        calendar_cells=cells,
        empty=data.is_empty,
    )
