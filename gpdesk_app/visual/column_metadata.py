"""Central column metadata and helpers for table rendering."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import streamlit as st

# Mapping of raw column keys to (label, help text, format key)
# format key: "int" -> integer, "float1"/"float2" -> decimals, "pct" -> percentage,
# None -> default text column
COLUMN_METADATA: dict[str, tuple[str, str, str | None]] = {
    "key": ("Ticket", "Clave del ticket en el gestor de incidencias.", None),
    "summary": ("Resumen", "Resumen del ticket.", None),
    "status": ("Estado", "Estado actual del flujo de trabajo.", None),
    "priority": ("Prioridad", "Prioridad asignada al ticket.", None),
    "issue_type": ("Tipo", "Tipo de incidencia.", None),
    "assignee": ("Asignado", "Consultor responsable del ticket.", None),
    "module": ("Módulo", "Módulo funcional del ticket.", None),
    "name": ("Consultor", "Consultor con horas imputadas en el periodo.", None),
    "count": ("Tickets", "Número de tickets.", "int"),
    "tickets": ("Tickets", "Número de tickets distintos.", "int"),
    "pct": ("%", "Porcentaje sobre el total.", "pct"),
    "pct_tickets": ("% Tickets", "Porcentaje de tickets sobre el total del periodo.", "pct"),
    "pct_hours": ("% Horas", "Porcentaje de horas sobre el total del periodo.", "pct"),
    "hours": ("Horas", "Horas imputadas en el periodo.", "float2"),
    "avg_hours": ("Promedio h/Ticket", "Horas medias por ticket.", "float2"),
    "efficiency": (
        "Eficiencia",
        "Promedio del equipo dividido entre el promedio del consultor (100 = media).",
        "float1",
    ),
    "concept": ("Concepto", "Concepto de facturación.", None),
    "state": ("Situación", "Situación respecto a las horas contratadas.", None),
}


def apply_column_metadata(
    columns: Iterable[str],
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return a column_config dictionary with human labels and hover help."""

    config: dict[str, Any] = dict(existing or {})
    for col in columns:
        if col in config:
            continue
        meta = COLUMN_METADATA.get(col)
        if not meta:
            continue
        label, help_text, fmt = meta
        if fmt == "int":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%d")
        elif fmt == "float1":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%.1f")
        elif fmt == "float2":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%.2f")
        elif fmt == "pct":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%.1f%%")
        else:
            config[col] = st.column_config.Column(label, help=help_text)
    return config
