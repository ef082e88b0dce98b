import pandas as pd

from gpdesk_app.analytics.aggregations.totals import (
    average_per_ticket,
    billing_summary,
    completion_rate,
    headline_kpis,
    merge_fixed_statuses,
    percent_of_total,
    status_breakdown,
    with_total_row,
)
from gpdesk_app.core.models import StatusCount


def test_percent_of_total_never_divides_by_zero():
    assert percent_of_total(0, 0) == 0
    assert percent_of_total(1, 4) == 25.0
    assert percent_of_total(None, None) == 0


def test_average_per_ticket():
    assert average_per_ticket(10, 4) == 2.5
    assert average_per_ticket(3, 0) == 3.0


def test_completion_rate_rounds_half_up():
    assert completion_rate(1, 3) == 33
    assert completion_rate(1, 8) == 13
    assert completion_rate(0, 0) == 0
    assert completion_rate(4, 4) == 100


def test_headline_kpis_count_exact_closed_label():
    statuses = [StatusCount("cerrado", 5), StatusCount("Cerrado", 2), StatusCount("Bloqueado", 1)]
    kpis = headline_kpis(8, 12.5, statuses)
    assert kpis.closed_tickets == 2
    assert kpis.completion_rate == 25
    assert kpis.total_hours == 12.5


def test_merge_fixed_statuses_fills_missing():
    df = merge_fixed_statuses([StatusCount("Cerrado", 3), StatusCount("Otro", 1)], total_tickets=10)
    assert list(df["status"]) == ["Bloqueado", "Cancelado", "Cerrado", "Pruebas de usuario", "Trabajo en curso"]
    assert df.set_index("status").loc["Cerrado", "pct"] == 30.0
    assert df.set_index("status").loc["Bloqueado", "count"] == 0


def test_status_breakdown_drops_zero_rows():
    df = status_breakdown([StatusCount("Cerrado", 3), StatusCount("Cancelado", 0), StatusCount("Bloqueado", 1)])
    assert list(df["status"]) == ["Cerrado", "Bloqueado"]
    assert df["pct"].sum() == 100.0


def test_with_total_row():
    df = pd.DataFrame({"name": ["a", "b"], "hours": [1.5, 2.5], "pct": [37.5, 62.5]})
    out = with_total_row(df, "name", ["hours"], fixed={"pct": 100.0})
    assert len(out) == 3
    last = out.iloc[-1]
    assert last["name"] == "TOTAL"
    assert last["hours"] == 4.0
    assert last["pct"] == 100.0


def test_billing_summary_over_contract():
    df = billing_summary(consumed=62.5, contracted=50).set_index("concept")
    assert df.loc["Horas Consumidas", "state"] == "Excedido"
    assert df.loc["Horas Adicionales", "hours"] == 12.5
    assert df.loc["Horas Adicionales", "state"] == "Facturable"


def test_billing_summary_within_contract():
    df = billing_summary(consumed=40, contracted=50).set_index("concept")
    assert df.loc["Horas Contratadas", "state"] == "Base"
    assert df.loc["Horas Consumidas", "state"] == "En rango"
    assert df.loc["Horas Adicionales", "hours"] == 0
    assert df.loc["Horas Adicionales", "state"] == "-"
