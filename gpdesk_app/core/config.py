"""Central configuration, constants, view names, and shared column definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

# =============================================================================
# Backend Settings
# =============================================================================
TIMEZONE = "Europe/Madrid"
SECRETS_SECTION = "supabase"
PROVIDER_CACHE_TTL_SECONDS = 300.0

# Tables and views exposed by the managed backend. The schema is owned
# upstream; only the names live here.
VIEWS: dict[str, str] = {
    "projects": "proyectos",
    "issues": "issues",
    "tickets_month": "v_tickets_mes_proyecto",
    "status_month": "v_issues_mes_proyecto_estado",
    "priority_month": "v_tickets_mes_proyecto_prioridad_pct",
    "type_month": "v_issues_mes_proyecto_tipo",
    "assignee_month": "v_issues_mes_proyecto_asignacion",
    "module_hours_month": "v_horas_mes_modulo_proyecto",
    "hours_month": "v_horas_mes_proyecto",
    "hours_detail": "v_horas_totales_detalles",
    "ticket_hours": "v_horas_totales_por_proyecto_ticket",
}

ACTIVE_PROJECT_STATUS = "activo"

# Fan-out tuning for the per-month fetch batch (I/O bound HTTP calls)
FETCH_MAX_WORKERS = 6
TOP_TICKETS_FETCH_LIMIT = 10

# =============================================================================
# Workflow Status Configuration
# =============================================================================
# Exact label used for closed tickets; completion rate depends on it.
CLOSED_STATUS = "Cerrado"

FIXED_STATUSES: Sequence[str] = (
    "Bloqueado",
    "Cancelado",
    "Cerrado",
    "Pruebas de usuario",
    "Trabajo en curso",
)

STATUS_COLORS: dict[str, str] = {
    "Bloqueado": "#ef4444",
    "Cancelado": "#94a3b8",
    "Cerrado": "#10b981",
    "Pruebas de usuario": "#eab308",
    "Trabajo en curso": "#3b82f6",
}

# =============================================================================
# Placeholders for missing provider fields
# =============================================================================
UNKNOWN_LABEL = "Unknown"
UNASSIGNED_LABEL = "Sin Asignar"
DEFAULT_MODULE_LABEL = "General"
NOT_AVAILABLE_LABEL = "N/A"
TOTAL_LABEL = "TOTAL"
GRAND_TOTAL_LABEL = "TOTAL GENERAL"
SUBTOTAL_PREFIX = "Subtotal"
EMPTY_PERIOD_MESSAGE = "No hay datos para este período."

# =============================================================================
# Contracted hours fallbacks
# =============================================================================
# The management report historically assumed 50 contracted hours and the
# detailed analysis 70 when the project row has none. The hours page shows 0.
MANAGEMENT_REPORT_CONTRACTED_HOURS = 50.0
ANALYSIS_CONTRACTED_HOURS_FALLBACK = 70.0
HOURS_PAGE_CONTRACTED_HOURS_FALLBACK = 0.0

# =============================================================================
# Report Settings
# =============================================================================
REPORT_BRAND = "GPARTNER CONSULTING - Informe de Gestión"
REPORT_TOP_TICKETS = 5
LOGO_PATH = Path(__file__).resolve().parent.parent / "assets" / "logo.png"

# RGB triples used by the PDF renderer
PRIMARY_COLOR = (41, 128, 185)
SECONDARY_COLOR = (52, 73, 94)
ACCENT_COLOR = (230, 126, 34)
HOT_COLOR = (231, 76, 60)
KPI_COLORS = ((52, 152, 219), (46, 204, 113), (155, 89, 182))

CALENDAR_WEEKDAY_LABELS: Sequence[str] = ("D", "L", "M", "M", "J", "V", "S")

# =============================================================================
# Export column sets (overridable through columns.yaml)
# =============================================================================
ISSUE_SUMMARY_COLUMNS: Sequence[str] = (
    "Key",
    "Resumen",
    "Estado",
    "Prioridad",
    "Asignado",
    "Tipo",
    "Horas",
)

MODULE_BREAKDOWN_COLUMNS: Sequence[str] = (
    "Módulo",
    "Tickets",
    "Horas Totales",
    "Promedio h/Ticket",
)

CONSULTANT_BREAKDOWN_COLUMNS: Sequence[str] = (
    "Consultor",
    "Tickets",
    "% Tickets",
    "Horas",
    "% Horas",
    "Promedio h/t",
)

HOURS_DETAIL_COLUMNS: Sequence[str] = (
    "Clave",
    "Asignado",
    "Mes",
    "Horas",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    session_max_idle: timedelta = timedelta(hours=8)


SETTINGS = AppSettings()
