"""Detailed analysis with billing, breakdowns and the PDF/Excel exports."""

from __future__ import annotations

import streamlit as st

from gpdesk_app.app import register_page
from gpdesk_app.core.config import ANALYSIS_CONTRACTED_HOURS_FALLBACK
from gpdesk_app.core.session import DashboardSession
from gpdesk_app.reports.excel import build_analysis_workbook
from gpdesk_app.reports.naming import analysis_filename
from gpdesk_app.reports.pdf import render_report
from gpdesk_app.visual.tables import render_table

from ._common import month_context, offer_download
from .horas import XLSX_MIME


@register_page("Análisis Detallado")
def analysis_page(session: DashboardSession):
    st.title("Análisis Detallado")
    ctx = month_context(session, ANALYSIS_CONTRACTED_HOURS_FALLBACK)
    if ctx is None:
        return
    st.caption(f"{ctx.project_name} | {ctx.month}")

    st.subheader("Facturación")
    render_table(ctx.billing, ["concept", "hours", "state"])
    if ctx.consumption.over_budget:
        st.warning(
            f"Se han superado las horas contratadas en {ctx.consumption.consumed - ctx.contracted_hours:.2f} h."
        )

    st.subheader("Resumen de issues")
    render_table(ctx.issue_summary, ["key", "summary", "status", "priority", "assignee", "issue_type", "hours"])

    left, right = st.columns(2)
    with left:
        st.subheader("Desglose por módulo")
        render_table(ctx.modules, ["module", "tickets", "hours", "avg_hours"])
    with right:
        st.subheader("Desglose por consultor")
        render_table(ctx.consultants, ["name", "tickets", "pct_tickets", "hours", "pct_hours", "avg_hours"])

    st.markdown("---")
    pdf_col, xlsx_col = st.columns(2)
    with pdf_col:
        if st.button("Generar PDF", type="primary"):
            offer_download(
                "Descargar PDF",
                lambda: render_report(ctx),
                analysis_filename(ctx.project_name, ctx.month, "pdf"),
                "application/pdf",
                key="analysis_pdf",
            )
    with xlsx_col:
        if st.button("Generar Excel"):
            offer_download(
                "Descargar Excel",
                lambda: build_analysis_workbook(ctx),
                analysis_filename(ctx.project_name, ctx.month, "xlsx"),
                XLSX_MIME,
                key="analysis_xlsx",
            )
