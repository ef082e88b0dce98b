"""Settings view: project contract data, export columns and cache control."""

from __future__ import annotations

import streamlit as st

from gpdesk_app.app import register_page
from gpdesk_app.core.column_config import load_column_sets
from gpdesk_app.core.config import (
    ANALYSIS_CONTRACTED_HOURS_FALLBACK,
    MANAGEMENT_REPORT_CONTRACTED_HOURS,
    SETTINGS,
)
from gpdesk_app.core.session import DashboardSession

from ._common import require_service


@register_page("Configuración")
def settings_page(session: DashboardSession):
    st.title("Configuración")
    service = require_service(session)
    if service is None:
        return

    project = service.get_project(session.project_id) if session.project_id else None
    st.subheader("Proyecto")
    if project is None:
        st.info("Ningún proyecto seleccionado.")
    else:
        st.json(
            {
                "id": project.id,
                "nombre": project.name,
                "clave": project.tracker_id,
                "horas_contratadas": project.contracted_hours,
                "estado": project.status,
            }
        )
    st.caption(
        f"El informe de gestión factura siempre sobre {MANAGEMENT_REPORT_CONTRACTED_HOURS:.0f} h; "
        f"el análisis detallado usa las horas del proyecto o {ANALYSIS_CONTRACTED_HOURS_FALLBACK:.0f} h."
    )

    st.subheader("Columnas de exportación")
    reload_cols = st.button("Recargar columns.yaml")
    for name, columns in load_column_sets(reload=reload_cols).items():
        st.write(f"**{name}**: {', '.join(columns)}")

    st.subheader("Sesión")
    st.write(f"Caducidad por inactividad: {SETTINGS.session_max_idle}")
    if st.button("Vaciar caché de consultas"):
        service.provider.clear_cache()
        session.month_data = None
        session.generation.begin()
        st.success("Caché vaciada; los datos se volverán a consultar.")
