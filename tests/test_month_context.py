from gpdesk_app.core.models import MonthData
from gpdesk_app.features.project_month.context import build_month_context, resolve_contracted_hours


def test_context_headline_and_billing(sample_month):
    ctx = build_month_context(sample_month, contracted_fallback=50)
    assert ctx.kpis.completion_rate == 50
    assert ctx.contracted_hours == 50
    billing = ctx.billing.set_index("concept")
    assert billing.loc["Horas Consumidas", "state"] == "En rango"
    assert not ctx.consumption.over_budget


def test_project_contract_wins_over_fallback(sample_month):
    sample_month.project.contracted_hours = 4.0
    ctx = build_month_context(sample_month, contracted_fallback=70)
    assert ctx.contracted_hours == 4.0
    assert ctx.billing.set_index("concept").loc["Horas Adicionales", "hours"] == 2.0
    assert resolve_contracted_hours(None, 70) == 70.0


def test_context_tables_carry_total_rows(sample_month):
    ctx = build_month_context(sample_month, contracted_fallback=50)
    modules = ctx.modules.set_index("module")
    assert modules.loc["FI", "tickets"] == 2  # backfilled from issues
    assert modules.loc["TOTAL", "hours"] == 6.0
    assert modules.loc["TOTAL", "tickets"] == 3
    consultants = ctx.consultants.set_index("name")
    assert consultants.loc["TOTAL", "pct_hours"] == 100.0
    assert consultants.loc["TOTAL", "avg_hours"] == 2.0
    assert ctx.priorities.iloc[-1]["count"] == 4


def test_context_detail_calendar_and_top(sample_month):
    ctx = build_month_context(sample_month, contracted_fallback=50)
    assert [r.kind for r in ctx.detail_rows][-1] == "total"
    assert ctx.detail_rows[0].ticket == "ACME-2"
    by_day = {c.day: c.count for c in ctx.calendar_cells}
    assert by_day[3] == 2 and by_day[20] == 1 and by_day[4] == 0
    assert list(ctx.top_tickets["key"]) == ["ACME-2", "ACME-10", "ACME-7"]


def test_empty_month_context():
    ctx = build_month_context(MonthData(month="2026-08"), contracted_fallback=50)
    assert ctx.empty
    assert ctx.modules.empty and ctx.consultants.empty and ctx.priorities.empty
    assert ctx.detail_rows == []
    assert len(ctx.calendar_cells) == 31


def test_management_context_ignores_project_contract(sample_month):
    sample_month.project.contracted_hours = 120.0
    ctx = build_month_context(sample_month, contracted_fallback=50, use_project_contract=False)
    assert ctx.contracted_hours == 50.0
    assert ctx.billing.set_index("concept").loc["Horas Contratadas", "hours"] == 50.0

    analysis = build_month_context(sample_month, contracted_fallback=70)
    assert analysis.contracted_hours == 120.0
    assert resolve_contracted_hours(sample_month.project, 0, use_project=False) == 0.0
