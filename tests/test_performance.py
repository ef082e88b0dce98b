import pandas as pd

from gpdesk_app.analytics.metrics.performance import (
    consultant_efficiency,
    consumption,
    performance_summary,
    team_efficiency,
)
from gpdesk_app.core.models import ConsultantHours, StatusCount


def test_consumption_over_budget():
    c = consumption(120, 100)
    assert c.pct == 120
    assert c.over_budget
    assert c.remaining == 0


def test_consumption_without_contract():
    c = consumption(10, 0)
    assert c.pct == 0
    assert not c.over_budget


def test_team_efficiency_is_capped():
    assert team_efficiency(10, 5) == 50
    assert team_efficiency(2, 4) == 100
    assert team_efficiency(0, 4) == 0


def test_performance_summary_velocity_counts_closed():
    summary = performance_summary(8, 4, [StatusCount("Cerrado", 3), StatusCount("Bloqueado", 1)])
    assert summary.velocity == 3
    assert summary.avg_hours_per_ticket == 2.0


def test_consultant_efficiency_relative_to_team():
    df = consultant_efficiency([ConsultantHours("Ana", 2, 2.0), ConsultantHours("Luis", 2, 6.0), ConsultantHours("Eva", 0, 0.0)])
    by_name = df.set_index("name")
    # team average is 2h/ticket
    assert by_name.loc["Ana", "efficiency"] == 200.0
    assert round(by_name.loc["Luis", "efficiency"], 1) == 66.7
    assert pd.isna(by_name.loc["Eva", "efficiency"])
    assert list(df["name"])[0] == "Luis"
