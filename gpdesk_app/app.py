"""Application entry point: page registry, router and session composition root."""

from __future__ import annotations

import streamlit as st

from gpdesk_app.core.session import DashboardSession

PAGES = {}

SESSION_KEY = "dashboard_session"
CONNECTION_PAGE = "Conexión"


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def get_session() -> DashboardSession:
    """One ``DashboardSession`` per browser session, created on first use."""
    session = st.session_state.get(SESSION_KEY)
    if session is None:
        session = DashboardSession()
        st.session_state[SESSION_KEY] = session
    if session.touch():
        st.sidebar.info("La sesión estuvo inactiva demasiado tiempo; selecciona de nuevo el proyecto.")
    return session


def main():
    st.sidebar.title("GPDesk Analytics")
    pages = list(PAGES.keys())
    if not pages:
        st.write("No hay páginas registradas.")
        return
    preferred_order = [
        "Proyectos",
        "Resumen",
        "Tickets",
        "Horas",
        "Equipo",
        "Rendimiento",
        "Análisis Detallado",
        "Configuración",
        CONNECTION_PAGE,
    ]

    ordered = [name for name in preferred_order if name in pages]
    trailing = sorted(name for name in pages if name not in preferred_order)
    pages = ordered + trailing

    session = get_session()
    if CONNECTION_PAGE in pages and not session.ready:
        default = pages.index(CONNECTION_PAGE)
    else:
        default = 0
    page = st.sidebar.selectbox("Página", pages, index=default)
    if session.project_id and session.month:
        st.sidebar.caption(f"Proyecto {session.project_id} | {session.month}")
    PAGES[page](session)


if __name__ == "__main__":
    main()
