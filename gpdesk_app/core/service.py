"""ProjectService: project lookup, month discovery and the per-month fetch batch."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from .config import (
    ACTIVE_PROJECT_STATUS,
    FETCH_MAX_WORKERS,
    TOP_TICKETS_FETCH_LIMIT,
    VIEWS,
)
from .mappers import (
    map_consultant,
    map_issue,
    map_module,
    map_priority,
    map_project,
    map_rows,
    map_status,
    map_top_ticket,
    map_type,
    map_worklog,
    to_float,
)
from .models import MonthData, ProjectModel
from .supabase_client import SupabaseProvider, ViewQuery, view

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]


def month_bounds(month: str) -> tuple[str, str]:
    """Return (``YYYY-MM-01``, first day of the following month)."""
    year_str, month_str = month.split("-")[:2]
    year, month_num = int(year_str), int(month_str)
    if not 1 <= month_num <= 12:
        raise ValueError(f"Invalid month: {month}")
    next_month = 1 if month_num == 12 else month_num + 1
    next_year = year + 1 if month_num == 12 else year
    return f"{year:04d}-{month_num:02d}-01", f"{next_year:04d}-{next_month:02d}-01"


class ProjectService:
    def __init__(self, provider: SupabaseProvider):
        self.provider = provider

    # ------------------ Projects & Months ------------------
    def list_projects(self) -> list[ProjectModel]:
        rows = self._safe_fetch(
            "projects",
            view(VIEWS["projects"], "id,nombre,jira_id,horas_contratadas,estado,descripcion"),
        )
        projects = [map_project(r) for r in rows]
        active = [p for p in projects if (p.status or "").strip().lower() == ACTIVE_PROJECT_STATUS]
        return sorted(active, key=lambda p: p.name.lower())

    def get_project(self, project_id: str | None) -> ProjectModel | None:
        if not project_id:
            return None
        query = view(VIEWS["projects"]).eq("id", project_id)
        try:
            row = self.provider.fetch_one(query)
        except Exception as exc:
            logger.error("Failed to load project %s: %s", project_id, exc)
            return None
        return map_project(row) if row else None

    def list_months(self, project: ProjectModel | None) -> list[str]:
        if project is None or not project.tracker_id:
            return []
        rows = self._safe_fetch(
            "months",
            view(VIEWS["tickets_month"], "mes").eq("proyecto", project.tracker_id),
        )
        months = {str(r.get("mes"))[:7] for r in rows if r.get("mes")}
        return sorted(months, reverse=True)

    # ------------------ Month Batch ------------------
    def fetch_month(
        self,
        project: ProjectModel | None,
        month: str | None,
        *,
        progress: ProgressCallback | None = None,
    ) -> MonthData:
        """Fetch and normalize every dataset shown for one project/month.

        The reads are independent, so they are issued together on a thread
        pool and joined before mapping. A failing read is logged and treated
        as empty; it never fails the whole batch.
        """
        if project is None or not project.tracker_id or not month:
            return MonthData(project=project, month=month)

        tracker = project.tracker_id
        month_start, month_end = month_bounds(month)

        def monthly(name: str, columns: str = "*") -> ViewQuery:
            return view(VIEWS[name], columns).eq("proyecto", tracker).eq("mes", month_start)

        queries: dict[str, ViewQuery] = {
            "kpi": monthly("tickets_month").limited(1),
            "status": monthly("status_month"),
            "priority": monthly("priority_month"),
            "assignee": monthly("assignee_month"),
            "type": monthly("type_month"),
            "module": monthly("module_hours_month"),
            "hours": monthly("hours_month", "total_horas").limited(1),
            "details": monthly("hours_detail").ordered("created_at_jira", descending=True),
            "calendar": view(VIEWS["issues"], "clave,fechacreacion,resumen,estado")
            .eq("proyecto", tracker)
            .where("gte", "fechacreacion", month_start)
            .where("lt", "fechacreacion", month_end),
            "top": monthly("ticket_hours")
            .ordered("ticket_horas", descending=True)
            .limited(TOP_TICKETS_FETCH_LIMIT),
        }

        if progress:
            progress(f"Consultando datos de {project.name} ({month})", 0, len(queries))
        started = time.perf_counter()
        results: dict[str, list[dict[str, Any]]] = {}
        with ThreadPoolExecutor(max_workers=FETCH_MAX_WORKERS) as pool:
            futures = {name: pool.submit(self._safe_fetch, name, q) for name, q in queries.items()}
            for done, (name, fut) in enumerate(futures.items(), start=1):
                results[name] = fut.result()
                if progress:
                    progress(f"Consultando datos de {project.name} ({month})", done, len(queries))
        logger.debug("Fetched %s queries for %s/%s in %.2fs", len(queries), tracker, month, time.perf_counter() - started)

        kpi_row = results["kpi"][0] if results["kpi"] else {}
        hours_row = results["hours"][0] if results["hours"] else {}
        worklogs = map_rows(results["details"], map_worklog)

        data = MonthData(
            project=project,
            month=month,
            total_tickets=int(to_float(kpi_row.get("total_tickets")) or 0),
            total_hours=to_float(hours_row.get("total_horas")) or 0.0,
            statuses=map_rows(results["status"], map_status),
            priorities=map_rows(results["priority"], map_priority),
            types=map_rows(results["type"], map_type),
            modules=map_rows(results["module"], map_module),
            consultants=map_rows(results["assignee"], map_consultant),
            worklogs=worklogs,
            calendar_issues=map_rows(results["calendar"], map_issue),
            top_tickets=map_rows(results["top"], map_top_ticket),
        )
        data.issues = self.fetch_issue_metadata(sorted({w.key for w in worklogs if w.key}))
        return data

    def fetch_issue_metadata(self, keys: list[str]):
        """Issue rows for the tickets that received worklogs in the period."""
        if not keys:
            return []
        rows = self._safe_fetch("issue_metadata", view(VIEWS["issues"]).where("in", "clave", keys))
        return map_rows(rows, map_issue)

    # ------------------ Internal Helpers ------------------
    def _safe_fetch(self, name: str, query: ViewQuery) -> list[dict[str, Any]]:
        try:
            return self.provider.fetch(query)
        except Exception as exc:
            logger.error("Query %s on %s failed: %s", name, query.view, exc)
            return []
