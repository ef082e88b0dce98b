import pandas as pd

from gpdesk_app.analytics.metrics.calendar import month_grid
from gpdesk_app.core.models import StatusCount
from gpdesk_app.core.status import clean_status_name, closed_count, ordered_status_labels, status_color
from gpdesk_app.visual.charts import calendar_heatmap, module_hours_chart, priority_chart, status_chart


def test_clean_status_name():
    assert clean_status_name(None) == "Unknown"
    assert clean_status_name(" nan ") == "Unknown"
    assert clean_status_name(" Cerrado ") == "Cerrado"


def test_closed_count_requires_exact_label():
    assert closed_count([StatusCount("Closed", 4), StatusCount("Cerrado ", 2)]) == 0
    assert closed_count([StatusCount("Cerrado", 2)]) == 2


def test_ordered_status_labels_and_colors():
    labels = ordered_status_labels(["Nuevo", "Cerrado", "Abierto"])
    assert labels[:5] == ["Bloqueado", "Cancelado", "Cerrado", "Pruebas de usuario", "Trabajo en curso"]
    assert labels[5:] == ["Abierto", "Nuevo"]
    assert status_color("Cerrado") == "#10b981"
    assert status_color("Nuevo") == "#94a3b8"


def test_charts_handle_empty_frames():
    assert status_chart(pd.DataFrame(columns=["status", "count", "pct"])) is None
    assert priority_chart(pd.DataFrame({"priority": ["TOTAL"], "count": [0], "pct": [100.0]})) is None
    assert calendar_heatmap([]) is None


def test_charts_build():
    df = pd.DataFrame({"status": ["Cerrado", "Nuevo"], "count": [2, 1], "pct": [66.7, 33.3]})
    assert status_chart(df) is not None
    modules = pd.DataFrame({"module": ["FI", "TOTAL"], "tickets": [2, 2], "hours": [3.0, 3.0], "avg_hours": [1.5, 1.5]})
    chart = module_hours_chart(modules)
    assert chart is not None
    assert list(chart.data["module"]) == ["FI"]
    assert calendar_heatmap(month_grid(2026, 8, {3: 2})) is not None
