"""Performance: average hours per ticket, efficiency and velocity."""

from __future__ import annotations

import streamlit as st

from gpdesk_app.app import register_page
from gpdesk_app.core.config import MANAGEMENT_REPORT_CONTRACTED_HOURS
from gpdesk_app.core.session import DashboardSession
from gpdesk_app.visual.tables import render_table

from ._common import month_context


@register_page("Rendimiento")
def performance_page(session: DashboardSession):
    st.title("Rendimiento")
    ctx = month_context(session, MANAGEMENT_REPORT_CONTRACTED_HOURS, use_project_contract=False)
    if ctx is None:
        return
    perf = ctx.performance

    cols = st.columns(4)
    cols[0].metric("Promedio h/Ticket", f"{perf.avg_hours_per_ticket:.2f}")
    cols[1].metric("Eficiencia", f"{perf.efficiency}%")
    cols[2].metric("Velocidad", perf.velocity, help="Tickets cerrados en el periodo.")
    cols[3].metric("Tasa de Cierre", f"{ctx.kpis.completion_rate}%")

    st.subheader("Eficiencia por consultor")
    st.caption("100 equivale al promedio del equipo; valores mayores indican menos horas por ticket.")
    render_table(ctx.consultant_efficiency, ["name", "tickets", "hours", "avg_hours", "efficiency"])
