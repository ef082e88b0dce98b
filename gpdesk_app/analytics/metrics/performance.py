"""Hours consumption, team efficiency and velocity."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from gpdesk_app.core.models import ConsultantHours, StatusCount
from gpdesk_app.core.status import closed_count

from ..aggregations.totals import average_per_ticket, round_half_up


@dataclass(slots=True)
class Consumption:
    consumed: float
    contracted: float
    pct: float
    over_budget: bool
    remaining: float


def consumption(consumed: float, contracted: float) -> Consumption:
    consumed = float(consumed or 0)
    contracted = float(contracted or 0)
    pct = consumed / contracted * 100 if contracted > 0 else 0.0
    return Consumption(
        consumed=consumed,
        contracted=contracted,
        pct=pct,
        over_budget=pct > 100,
        remaining=max(0.0, contracted - consumed),
    )


def team_efficiency(total_hours: float, total_tickets: int) -> int:
    """``min(1 / avg_hours * 100, 100)`` where avg is hours per ticket."""
    if not total_hours or not total_tickets:
        return 0
    avg = average_per_ticket(total_hours, total_tickets)
    if avg <= 0:
        return 0
    return round_half_up(min(1 / avg * 100, 100))


def velocity(statuses: Sequence[StatusCount]) -> int:
    return closed_count(statuses)


@dataclass(slots=True)
class PerformanceSummary:
    avg_hours_per_ticket: float
    efficiency: int
    velocity: int


def performance_summary(total_hours: float, total_tickets: int, statuses: Sequence[StatusCount]) -> PerformanceSummary:
    return PerformanceSummary(
        avg_hours_per_ticket=average_per_ticket(total_hours, total_tickets) if total_tickets else 0.0,
        efficiency=team_efficiency(total_hours, total_tickets),
        velocity=velocity(statuses),
    )


def consultant_efficiency(consultants: Sequence[ConsultantHours]) -> pd.DataFrame:
    """Per-consultant hours per ticket relative to the team average.

    Efficiency is ``team_avg / consultant_avg * 100``; above 100 means the
    consultant closes tickets with fewer hours than the team. It is None for a
    consultant without logged hours.
    """
    columns = ["name", "tickets", "hours", "avg_hours", "efficiency"]
    if not consultants:
        return pd.DataFrame(columns=columns)
    total_hours = sum(float(c.hours) for c in consultants)
    total_tickets = sum(int(c.tickets) for c in consultants)
    team_avg = average_per_ticket(total_hours, total_tickets)
    rows = []
    for c in consultants:
        avg = float(c.hours) / c.tickets if c.tickets > 0 else 0.0
        rows.append(
            {
                "name": c.name,
                "tickets": int(c.tickets),
                "hours": float(c.hours),
                "avg_hours": avg,
                "efficiency": team_avg / avg * 100 if avg > 0 else None,
            }
        )
    return pd.DataFrame(rows, columns=columns).sort_values("hours", ascending=False).reset_index(drop=True)
