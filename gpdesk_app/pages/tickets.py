"""Ticket breakdowns: priority, type, creation calendar and most worked tickets."""

from __future__ import annotations

import streamlit as st

from gpdesk_app.app import register_page
from gpdesk_app.core.config import MANAGEMENT_REPORT_CONTRACTED_HOURS
from gpdesk_app.core.session import DashboardSession
from gpdesk_app.visual.charts import calendar_heatmap, priority_chart, type_chart
from gpdesk_app.visual.tables import render_table

from ._common import month_context


@register_page("Tickets")
def tickets_page(session: DashboardSession):
    st.title("Tickets")
    ctx = month_context(session, MANAGEMENT_REPORT_CONTRACTED_HOURS, use_project_contract=False)
    if ctx is None:
        return

    left, right = st.columns(2)
    with left:
        st.subheader("Prioridad")
        chart = priority_chart(ctx.priorities)
        if chart is not None:
            st.altair_chart(chart, use_container_width=True)
        render_table(ctx.priorities, ["priority", "count", "pct"])
    with right:
        st.subheader("Tipo")
        chart = type_chart(ctx.types)
        if chart is not None:
            st.altair_chart(chart, use_container_width=True)
        render_table(ctx.types, ["issue_type", "count"])

    st.subheader("Tickets creados por día")
    chart = calendar_heatmap(ctx.calendar_cells)
    if chart is None:
        st.info("Sin tickets creados en el mes.")
    else:
        st.altair_chart(chart, use_container_width=True)

    st.subheader("Tickets con más horas")
    render_table(ctx.top_tickets, ["key", "hours"])

    st.subheader("Tickets trabajados")
    render_table(ctx.issue_summary, ["key", "summary", "status", "priority", "assignee", "issue_type", "module", "hours"])
