"""Hours: consumption against the contract, module hours and the worklog detail."""

from __future__ import annotations

import streamlit as st

from gpdesk_app.analytics.aggregations.groups import group_hours
from gpdesk_app.app import register_page
from gpdesk_app.core.config import HOURS_PAGE_CONTRACTED_HOURS_FALLBACK
from gpdesk_app.core.session import DashboardSession
from gpdesk_app.reports.excel import build_hours_workbook
from gpdesk_app.reports.naming import hours_export_filename
from gpdesk_app.visual.charts import consumption_chart, module_hours_chart
from gpdesk_app.visual.tables import render_detail_rows, render_table

from ._common import month_context, offer_download

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@register_page("Horas")
def hours_page(session: DashboardSession):
    st.title("Horas")
    ctx = month_context(session, HOURS_PAGE_CONTRACTED_HOURS_FALLBACK)
    if ctx is None:
        return
    consumption = ctx.consumption

    cols = st.columns(3)
    cols[0].metric("Horas consumidas", f"{consumption.consumed:.2f}")
    cols[1].metric("Horas contratadas", f"{consumption.contracted:.2f}")
    cols[2].metric(
        "Consumo",
        f"{consumption.pct:.1f}%" if consumption.contracted > 0 else "-",
        delta="Excedido" if consumption.over_budget else None,
        delta_color="inverse",
    )
    if consumption.contracted > 0:
        st.progress(min(consumption.pct / 100, 1.0))
        st.altair_chart(consumption_chart(consumption.consumed, consumption.contracted), use_container_width=True)
    else:
        st.info("El proyecto no tiene horas contratadas configuradas.")

    st.subheader("Horas por módulo")
    chart = module_hours_chart(ctx.modules)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)
    render_table(ctx.modules, ["module", "tickets", "hours", "avg_hours"])

    data = session.month_data
    if data is not None and data.worklogs:
        st.subheader("Horas imputadas por consultor")
        render_table(group_hours(data.worklogs, by="assignee"), ["assignee", "tickets", "hours", "pct_hours", "avg_hours"])

    st.subheader("Detalle de horas")
    render_detail_rows(ctx.detail_rows)
    if data is not None and data.worklogs:
        offer_download(
            "Descargar detalle (Excel)",
            lambda: build_hours_workbook(data.worklogs, ctx.month),
            hours_export_filename(ctx.project_name, ctx.month),
            XLSX_MIME,
            key="hours_export",
        )
