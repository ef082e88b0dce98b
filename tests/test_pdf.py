import logging

from conftest import make_worklog

from gpdesk_app.core.models import MonthData
from gpdesk_app.features.project_month.context import build_month_context
from gpdesk_app.reports.pdf import CONTENT_BOTTOM_MM, SECTION_GAP_MM, ReportRenderer, render_report


def test_report_has_four_pages(sample_month, tmp_path):
    ctx = build_month_context(sample_month, contracted_fallback=50)
    renderer = ReportRenderer(ctx, logo_path=tmp_path / "missing.png")
    pdf = renderer.render()
    assert pdf.startswith(b"%PDF")
    assert renderer.page_count == 4


def test_hours_detail_continues_on_new_pages(sample_month):
    sample_month.worklogs = [
        make_worklog(f"ACME-{i}", f"Consultor {i % 6}", 0.5, day=1 + i % 28, comment="Seguimiento " * (i % 4))
        for i in range(240)
    ]
    ctx = build_month_context(sample_month, contracted_fallback=50)
    renderer = ReportRenderer(ctx, logo_path=None)
    renderer.render()
    assert renderer.page_count > 5


def test_empty_month_still_renders():
    ctx = build_month_context(MonthData(month="2026-08"), contracted_fallback=50)
    assert render_report(ctx, logo_path=None).startswith(b"%PDF")


def test_unreadable_logo_is_skipped(sample_month, tmp_path, caplog):
    logo = tmp_path / "logo.png"
    logo.write_text("not an image", encoding="utf-8")
    ctx = build_month_context(sample_month, contracted_fallback=50)
    with caplog.at_level(logging.WARNING, logger="gpdesk_app.reports.pdf"):
        pdf = render_report(ctx, logo_path=logo)
    assert pdf.startswith(b"%PDF")
    assert "could not be loaded" in caplog.text


class LateCalendarRenderer(ReportRenderer):
    """Starts the deep-dive page with little room left above the footer."""

    def _deep_dive(self):
        self.y = CONTENT_BOTTOM_MM - 40
        super()._deep_dive()

    def _calendar(self):
        self.calendar_page = self.page_count
        super()._calendar()
        self.calendar_bottom = self.y - SECTION_GAP_MM


def test_calendar_moves_to_next_page_when_it_would_reach_the_footer(sample_month):
    ctx = build_month_context(sample_month, contracted_fallback=50)
    ctx.top_tickets = ctx.top_tickets.iloc[0:0]
    renderer = LateCalendarRenderer(ctx, logo_path=None)
    renderer.render()
    assert renderer.calendar_page == 4
    assert renderer.calendar_bottom <= CONTENT_BOTTOM_MM
    assert renderer.page_count == 5
