"""Team: tickets and hours per consultant."""

from __future__ import annotations

import streamlit as st

from gpdesk_app.app import register_page
from gpdesk_app.core.config import MANAGEMENT_REPORT_CONTRACTED_HOURS
from gpdesk_app.core.session import DashboardSession
from gpdesk_app.visual.charts import consultant_hours_chart
from gpdesk_app.visual.tables import highlight_total

from ._common import month_context


@register_page("Equipo")
def team_page(session: DashboardSession):
    st.title("Equipo")
    ctx = month_context(session, MANAGEMENT_REPORT_CONTRACTED_HOURS, use_project_contract=False)
    if ctx is None:
        return
    if ctx.consultants.empty:
        st.info("No hay horas imputadas por consultores en este periodo.")
        return

    chart = consultant_hours_chart(ctx.consultants)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)

    table = ctx.consultants.rename(
        columns={
            "name": "Consultor",
            "tickets": "Tickets",
            "pct_tickets": "% Tickets",
            "hours": "Horas",
            "pct_hours": "% Horas",
            "avg_hours": "Promedio h/t",
        }
    )
    st.dataframe(
        highlight_total(table, "Consultor").format(
            {"% Tickets": "{:.1f}%", "% Horas": "{:.1f}%", "Horas": "{:.2f}", "Promedio h/t": "{:.2f}"},
            na_rep="-",
        ),
        hide_index=True,
    )
