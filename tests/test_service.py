import pytest

from gpdesk_app.core.models import ProjectModel
from gpdesk_app.core.service import ProjectService, month_bounds
from gpdesk_app.core.supabase_client import SupabaseProvider

AUG = "2026-08-01"

ROWS = {
    "proyectos": [
        {"id": "1", "nombre": "Zeta", "jira_id": "ZET", "estado": "activo"},
        {"id": "2", "nombre": "acme", "jira_id": "ACME", "estado": "Activo", "horas_contratadas": 40},
        {"id": "3", "nombre": "Old", "jira_id": "OLD", "estado": "cerrado"},
    ],
    "v_tickets_mes_proyecto": [
        {"proyecto": "ACME", "mes": AUG, "total_tickets": 4},
        {"proyecto": "ACME", "mes": "2026-07-01", "total_tickets": 2},
        {"proyecto": "ACME", "mes": "2026-07-01T00:00:00", "total_tickets": 2},
    ],
    "v_issues_mes_proyecto_estado": [
        {"proyecto": "ACME", "mes": AUG, "estado": "Cerrado", "total_issues": 2},
        {"proyecto": "ACME", "mes": AUG, "estado": "Bloqueado", "total_issues": 2},
    ],
    "v_horas_mes_proyecto": [{"proyecto": "ACME", "mes": AUG, "total_horas": 6.5}],
    "v_horas_totales_detalles": [
        {"proyecto": "ACME", "mes": AUG, "clave": "ACME-2", "assignee_name": "Ana", "horas": 4.5},
        {"proyecto": "ACME", "mes": AUG, "clave": "ACME-9", "assignee_name": None, "horas": 2},
    ],
    "issues": [
        {"proyecto": "ACME", "clave": "ACME-2", "resumen": "Factura", "estado": "Cerrado", "fechacreacion": "2026-08-03"},
        {"proyecto": "ACME", "clave": "ACME-9", "resumen": "Pedido", "estado": "Bloqueado", "fechacreacion": "2026-08-10"},
        {"proyecto": "ACME", "clave": "ACME-50", "resumen": "Otro", "estado": "Cerrado", "fechacreacion": "2026-08-11"},
    ],
}


class DummyProvider(SupabaseProvider):
    """Applies eq/in filters to canned rows; ``broken`` views raise."""

    def __init__(self, rows=None, broken=()):
        self.rows = rows if rows is not None else ROWS
        self.broken = set(broken)
        self.queries = []

    def fetch(self, query):
        self.queries.append(query)
        if query.view in self.broken:
            raise RuntimeError(f"Query on {query.view} failed")
        out = list(self.rows.get(query.view, []))
        for op, column, value in query.filters:
            if op == "eq":
                out = [r for r in out if r.get(column) == value]
            elif op == "in":
                out = [r for r in out if r.get(column) in value]
        if query.single or query.limit:
            out = out[: 1 if query.single else query.limit]
        return out


def test_month_bounds():
    assert month_bounds("2026-08") == ("2026-08-01", "2026-09-01")
    assert month_bounds("2026-12") == ("2026-12-01", "2027-01-01")
    with pytest.raises(ValueError):
        month_bounds("2026-13")


def test_list_projects_filters_active_and_sorts():
    projects = ProjectService(DummyProvider()).list_projects()
    assert [p.name for p in projects] == ["acme", "Zeta"]


def test_get_project():
    svc = ProjectService(DummyProvider())
    assert svc.get_project("2").contracted_hours == 40.0
    assert svc.get_project("99") is None
    assert svc.get_project(None) is None


def test_list_months_distinct_newest_first():
    svc = ProjectService(DummyProvider())
    project = svc.get_project("2")
    assert svc.list_months(project) == ["2026-08", "2026-07"]


def test_fetch_month_maps_every_dataset():
    provider = DummyProvider()
    svc = ProjectService(provider)
    project = svc.get_project("2")
    seen = []
    data = svc.fetch_month(project, "2026-08", progress=lambda msg, cur, tot: seen.append((cur, tot)))
    assert data.total_tickets == 4
    assert data.total_hours == 6.5
    assert [s.status for s in data.statuses] == ["Cerrado", "Bloqueado"]
    assert {w.assignee for w in data.worklogs} == {"Ana", "Sin Asignar"}
    # only issues with worklogs get metadata
    assert sorted(i.key for i in data.issues) == ["ACME-2", "ACME-9"]
    assert len(data.calendar_issues) == 3
    assert seen[-1] == (10, 10)
    in_queries = [q for q in provider.queries if any(op == "in" for op, _, _ in q.filters)]
    assert in_queries and in_queries[0].view == "issues"


def test_fetch_month_tolerates_failing_views():
    svc = ProjectService(DummyProvider(broken={"v_horas_mes_proyecto", "v_issues_mes_proyecto_estado"}))
    project = svc.get_project("2")
    data = svc.fetch_month(project, "2026-08")
    assert data.total_hours == 0.0
    assert data.statuses == []
    assert data.total_tickets == 4


def test_fetch_month_without_selection_is_empty():
    svc = ProjectService(DummyProvider())
    assert svc.fetch_month(None, "2026-08").is_empty
    no_tracker = ProjectModel(id="5", name="Sin clave", tracker_id=None)
    assert svc.fetch_month(no_tracker, "2026-08").is_empty
