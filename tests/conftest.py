"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import gpdesk_app` works.
"""

from __future__ import annotations

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gpdesk_app.core.models import (  # noqa: E402
    ConsultantHours,
    IssueModel,
    ModuleHours,
    MonthData,
    PriorityCount,
    ProjectModel,
    StatusCount,
    TopTicket,
    TypeCount,
    WorklogModel,
)


def make_worklog(key, assignee, hours, day=3, comment=None):
    return WorklogModel(
        key=key,
        assignee=assignee,
        hours=hours,
        created=datetime(2026, 8, day, 9, 0, tzinfo=UTC),
        comment=comment,
    )


def make_issue(key, module="FI", day=5, status="Cerrado", assignee="Ana"):
    return IssueModel(
        key=key,
        summary=f"Resumen {key}",
        status=status,
        priority="Alta",
        issue_type="Incidencia",
        assignee=assignee,
        created=datetime(2026, 8, day, 10, 0, tzinfo=UTC),
        module=module,
    )


@pytest.fixture
def sample_month() -> MonthData:
    project = ProjectModel(id="7", name="Acme Retail", tracker_id="ACME", contracted_hours=None, status="activo")
    worklogs = [
        make_worklog("ACME-10", "Ana", 2.0, day=4, comment="Ajuste de informes"),
        make_worklog("ACME-2", "Ana", 3.0, day=3),
        make_worklog("ACME-7", "Luis", 1.0, day=6),
    ]
    return MonthData(
        project=project,
        month="2026-08",
        total_tickets=4,
        total_hours=6.0,
        statuses=[StatusCount("Cerrado", 2), StatusCount("Trabajo en curso", 1), StatusCount("Bloqueado", 1)],
        priorities=[PriorityCount("Alta", 3, 75.0), PriorityCount("Media", 1, 25.0)],
        types=[TypeCount("Incidencia", 3), TypeCount("Consulta", 1)],
        modules=[ModuleHours("FI", 5.0, 0), ModuleHours("SD", 1.0, 1)],
        consultants=[ConsultantHours("Ana", 2, 5.0, 66.7, 83.3), ConsultantHours("Luis", 1, 1.0, 33.3, 16.7)],
        worklogs=worklogs,
        calendar_issues=[make_issue("ACME-2", day=3), make_issue("ACME-10", day=3), make_issue("ACME-7", day=20)],
        top_tickets=[TopTicket("ACME-2", 3.0), TopTicket("ACME-10", 2.0), TopTicket("ACME-7", 1.0)],
        issues=[make_issue("ACME-2"), make_issue("ACME-10"), make_issue("ACME-7", module="SD", assignee="Luis")],
    )
