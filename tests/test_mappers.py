import math

from gpdesk_app.core.mappers import (
    map_consultant,
    map_issue,
    map_project,
    map_rows,
    map_status,
    map_worklog,
    to_float,
    worklogs_to_dataframe,
)


def test_to_float_rejects_garbage():
    assert to_float("2.5") == 2.5
    assert to_float(None) is None
    assert to_float("abc") is None
    assert to_float(math.nan) is None
    assert to_float(True) is None


def test_map_project_strips_tracker_and_parses_hours():
    project = map_project({"id": 3, "nombre": "Acme", "jira_id": " ACME ", "horas_contratadas": "40", "estado": "activo"})
    assert project.id == "3"
    assert project.tracker_id == "ACME"
    assert project.contracted_hours == 40.0


def test_map_worklog_defaults():
    log = map_worklog({"clave": "A-1", "horas": "2.5", "created_at_jira": "2026-08-03T10:00:00Z"})
    assert log.assignee == "Sin Asignar"
    assert log.hours == 2.5
    assert log.created.year == 2026 and log.created.tzinfo is not None


def test_map_issue_placeholders():
    issue = map_issue({"clave": "A-1", "fechacreacion": "not a date"})
    assert issue.summary == "N/A"
    assert issue.module == "General"
    assert issue.created is None


def test_count_aliases_skip_zero_values():
    row = {"estado": "Cerrado", "total_issues": 0, "total_tickets": 4}
    assert map_status(row).count == 4


def test_map_consultant_aliases():
    c = map_consultant({"assignee_name": "Ana", "total_issues": 3, "total_horas": 7.5, "porcentaje_horas": 60})
    assert (c.name, c.tickets, c.hours, c.pct_hours) == ("Ana", 3, 7.5, 60.0)


def test_map_rows_skips_non_dicts_and_keeps_columns():
    logs = map_rows([{"clave": "A-1", "horas": 1}, None, "junk"], map_worklog)
    assert len(logs) == 1
    assert list(worklogs_to_dataframe([]).columns) == ["key", "assignee", "hours", "created", "comment"]
