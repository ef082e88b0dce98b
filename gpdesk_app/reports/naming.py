"""Download filenames for exported reports."""

from __future__ import annotations

import re

_UNSAFE = re.compile(r"[^a-zA-Z0-9]")
DEFAULT_PROJECT_NAME = "Proyecto"


def sanitize_name(name: str | None) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with ``_``."""
    if not name:
        return DEFAULT_PROJECT_NAME
    return _UNSAFE.sub("_", name)


def report_filename(project: str | None, month: str | None, report_name: str, ext: str) -> str:
    return f"{sanitize_name(project)}_{month or ''}_{report_name}.{ext.lstrip('.')}"


def management_report_filename(project: str | None, month: str | None) -> str:
    return f"Informe_Gestion_{sanitize_name(project)}_{month or ''}.pdf"


def analysis_filename(project: str | None, month: str | None, ext: str) -> str:
    return report_filename(project, month, "Analisis_Detallado", ext)


def hours_export_filename(project: str | None, month: str | None) -> str:
    return f"{sanitize_name(project)}_{month or ''}.xlsx"
