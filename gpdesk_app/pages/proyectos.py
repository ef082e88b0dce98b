"""Project and month selection."""

from __future__ import annotations

import streamlit as st

from gpdesk_app.app import register_page
from gpdesk_app.core.session import DashboardSession

from ._common import require_service


@register_page("Proyectos")
def projects_page(session: DashboardSession):
    st.title("Proyectos")
    st.caption("Elige el proyecto activo y el mes a analizar.")
    service = require_service(session)
    if service is None:
        return

    projects = service.list_projects()
    if not projects:
        st.info("No hay proyectos activos.")
        return
    by_id = {p.id: p for p in projects}
    ids = list(by_id)
    index = ids.index(session.project_id) if session.project_id in by_id else 0
    project_id = st.selectbox(
        "Proyecto",
        ids,
        index=index,
        format_func=lambda pid: by_id[pid].name,
    )
    session.select_project(project_id)
    project = by_id[project_id]

    months = service.list_months(project)
    if not months:
        st.info("El proyecto no tiene meses con tickets.")
        return
    month_index = months.index(session.month) if session.month in months else 0
    month = st.selectbox("Mes", months, index=month_index)
    session.select_month(month)

    cols = st.columns(3)
    cols[0].metric("Clave en el gestor", project.tracker_id or "-")
    cols[1].metric(
        "Horas contratadas",
        f"{project.contracted_hours:.1f}" if project.contracted_hours is not None else "-",
    )
    cols[2].metric("Estado", project.status or "-")
    if project.description:
        st.markdown(project.description)
    st.success(f"Seleccionado {project.name} | {month}. Usa las demás páginas para ver el análisis.")
