"""Helpers shared by the project/month pages."""

from __future__ import annotations

import logging

import streamlit as st

from gpdesk_app.core.config import EMPTY_PERIOD_MESSAGE
from gpdesk_app.core.models import MonthData, ProjectModel
from gpdesk_app.core.service import ProjectService
from gpdesk_app.core.session import DashboardSession
from gpdesk_app.features.project_month.context import MonthContext, build_month_context
from gpdesk_app.visual.progress import ProgressReporter

logger = logging.getLogger(__name__)


def require_service(session: DashboardSession) -> ProjectService | None:
    if session.service is None:
        st.warning("Configura la conexión en la página Conexión primero.")
        return None
    return session.service


def current_project(session: DashboardSession) -> ProjectModel | None:
    service = require_service(session)
    if service is None:
        return None
    if not session.project_id or not session.month:
        st.info("Selecciona un proyecto y un mes en la página Proyectos.")
        return None
    project = service.get_project(session.project_id)
    if project is None:
        st.error("No se pudo cargar el proyecto seleccionado.")
    return project


def load_month_data(session: DashboardSession) -> MonthData | None:
    """Month batch for the current selection, fetched once per selection."""
    project = current_project(session)
    if project is None:
        return None
    if session.month_data is not None:
        return session.month_data
    token = session.generation.current
    reporter = ProgressReporter(f"Cargando {project.name} ({session.month})")
    try:
        data = session.service.fetch_month(project, session.month, progress=reporter.callback)
    except Exception as exc:
        logger.error("Month batch for %s/%s failed: %s", project.tracker_id, session.month, exc)
        reporter.error(f"No se pudieron cargar los datos: {exc}")
        raise
    if not session.store(token, data):
        reporter.discard()
        return None
    reporter.complete("Datos cargados.")
    return data


def month_context(
    session: DashboardSession,
    contracted_fallback: float,
    *,
    use_project_contract: bool = True,
) -> MonthContext | None:
    data = load_month_data(session)
    if data is None:
        return None
    if data.is_empty:
        st.info(EMPTY_PERIOD_MESSAGE)
        return None
    return build_month_context(data, contracted_fallback, use_project_contract=use_project_contract)


def offer_download(label: str, build, file_name: str, mime: str, *, key: str) -> None:
    """Render a download button for ``build()``; show the error instead if it fails."""
    try:
        payload = build()
    except Exception as exc:
        logger.error("Export %s failed: %s", file_name, exc)
        st.error(f"No se pudo generar {file_name}: {exc}")
        return
    st.download_button(label, data=payload, file_name=file_name, mime=mime, key=key)
