"""Executive summary: headline KPIs, status distribution and the management report."""

from __future__ import annotations

import streamlit as st

from gpdesk_app.app import register_page
from gpdesk_app.core.config import MANAGEMENT_REPORT_CONTRACTED_HOURS
from gpdesk_app.core.session import DashboardSession
from gpdesk_app.reports.naming import management_report_filename
from gpdesk_app.reports.pdf import render_report
from gpdesk_app.visual.charts import status_chart
from gpdesk_app.visual.tables import render_table

from ._common import month_context, offer_download


@register_page("Resumen")
def summary_page(session: DashboardSession):
    st.title("Resumen")
    ctx = month_context(session, MANAGEMENT_REPORT_CONTRACTED_HOURS, use_project_contract=False)
    if ctx is None:
        return
    st.caption(f"{ctx.project_name} | {ctx.month}")

    cols = st.columns(3)
    cols[0].metric("Total Tickets", ctx.kpis.total_tickets)
    cols[1].metric("Horas Totales", f"{ctx.kpis.total_hours:.1f}")
    cols[2].metric("Tasa de Cierre", f"{ctx.kpis.completion_rate}%")

    st.subheader("Estados")
    total_status = int(ctx.statuses["count"].sum()) if not ctx.statuses.empty else 0
    st.caption(f"{total_status} tickets con estado en el periodo.")
    chart = status_chart(ctx.statuses)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)
    render_table(ctx.fixed_statuses, ["status", "count", "pct"])

    st.subheader("Facturación")
    render_table(ctx.billing, ["concept", "hours", "state"])

    st.markdown("---")
    if st.button("Generar informe de gestión (PDF)", type="primary"):
        offer_download(
            "Descargar informe",
            lambda: render_report(ctx),
            management_report_filename(ctx.project_name, ctx.month),
            "application/pdf",
            key="management_report",
        )
