"""Management report PDF drawn on a reportlab canvas.

Positions are expressed in millimetres from the top-left corner of an A4
page and converted to reportlab's bottom-left coordinates when drawing.
Tables are platypus ``Table`` objects placed with ``wrapOn``/``drawOn``; the
hours detail is split across as many pages as it needs.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as rl_canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from gpdesk_app.analytics.aggregations.hours_detail import ENTRY, SUBTOTAL, TOTAL, DetailRow
from gpdesk_app.analytics.aggregations.totals import format_hours, format_pct
from gpdesk_app.analytics.metrics.calendar import GRID_COLUMNS, GRID_ROWS, dot_radius
from gpdesk_app.core.config import (
    ACCENT_COLOR,
    CALENDAR_WEEKDAY_LABELS,
    EMPTY_PERIOD_MESSAGE,
    HOT_COLOR,
    KPI_COLORS,
    LOGO_PATH,
    PRIMARY_COLOR,
    REPORT_BRAND,
    SECONDARY_COLOR,
)
from gpdesk_app.features.project_month.context import MonthContext

logger = logging.getLogger(__name__)

PAGE_WIDTH_MM = A4[0] / mm
PAGE_HEIGHT_MM = A4[1] / mm
MARGIN_MM = 15.0
CONTENT_WIDTH_MM = PAGE_WIDTH_MM - 2 * MARGIN_MM
HEADER_HEIGHT_MM = 30.0
FOOTER_HEIGHT_MM = 15.0
CONTENT_BOTTOM_MM = PAGE_HEIGHT_MM - FOOTER_HEIGHT_MM - 5
SECTION_GAP_MM = 8.0

CALENDAR_HEADER_HEIGHT_MM = 6.0
CALENDAR_ROW_HEIGHT_MM = 10.0
SECTION_TITLE_HEIGHT_MM = 8.0

_COMMENT_STYLE = ParagraphStyle(name="DetailComment", fontName="Helvetica", fontSize=7, leading=8.5)


def rgb(triple: Sequence[int]) -> colors.Color:
    r, g, b = triple
    return colors.Color(r / 255.0, g / 255.0, b / 255.0)


def _table_style(header_rgb: Sequence[int] = PRIMARY_COLOR, total_last: bool = False) -> TableStyle:
    cmds = [
        ("BACKGROUND", (0, 0), (-1, 0), rgb(header_rgb)),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.3, colors.HexColor("#cbd5e1")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f8fafc")]),
    ]
    if total_last:
        cmds += [
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ("BACKGROUND", (0, -1), (-1, -1), colors.HexColor("#e2e8f0")),
        ]
    return TableStyle(cmds)


def _detail_style(rows: Sequence[DetailRow]) -> TableStyle:
    style = _table_style(SECONDARY_COLOR)
    for idx, row in enumerate(rows, start=1):
        if row.kind == SUBTOTAL:
            style.add("FONTNAME", (0, idx), (-1, idx), "Helvetica-Bold")
            style.add("BACKGROUND", (0, idx), (-1, idx), colors.HexColor("#e2e8f0"))
        elif row.kind == TOTAL:
            style.add("FONTNAME", (0, idx), (-1, idx), "Helvetica-Bold")
            style.add("BACKGROUND", (0, idx), (-1, idx), rgb(PRIMARY_COLOR))
            style.add("TEXTCOLOR", (0, idx), (-1, idx), colors.white)
    return style


class ReportRenderer:
    """Four-section management report for one project and month."""

    def __init__(self, ctx: MonthContext, logo_path: str | Path | None = LOGO_PATH):
        self.ctx = ctx
        self.logo_path = Path(logo_path) if logo_path else None
        self.page_count = 0
        self._buffer = io.BytesIO()
        self._canvas: rl_canvas.Canvas | None = None
        self._logo: ImageReader | None = None
        self._title = ""
        self.y = 0.0

    # ------------------ Public API ------------------
    def render(self) -> bytes:
        self._canvas = rl_canvas.Canvas(self._buffer, pagesize=A4)
        self._canvas.setTitle(f"Informe de Gestión {self.ctx.project_name} {self.ctx.month}")
        self._logo = self._load_logo()

        self._start_page("Resumen Ejecutivo", first=True)
        self._executive_summary()
        self._start_page("Métricas Detalladas")
        self._detailed_metrics()
        self._start_page("Análisis Detallado")
        self._deep_dive()
        self._start_page("Detalle de Horas")
        self._hours_detail()

        self._canvas.save()
        logger.debug("Rendered report for %s/%s with %s pages", self.ctx.project_name, self.ctx.month, self.page_count)
        return self._buffer.getvalue()

    # ------------------ Page furniture ------------------
    def _load_logo(self) -> ImageReader | None:
        if self.logo_path is None or not self.logo_path.exists():
            return None
        try:
            reader = ImageReader(str(self.logo_path))
            reader.getSize()
            return reader
        except Exception as exc:
            logger.warning("Report logo %s could not be loaded: %s", self.logo_path, exc)
            return None

    def _start_page(self, title: str, first: bool = False) -> None:
        if not first:
            self._canvas.showPage()
        self.page_count += 1
        self._title = title
        self._header()
        self._footer()
        self.y = HEADER_HEIGHT_MM + 8

    def _continue_page(self) -> None:
        self._start_page(f"{self._title} (cont.)" if not self._title.endswith("(cont.)") else self._title)

    def _pdf_y(self, top_mm: float) -> float:
        return (PAGE_HEIGHT_MM - top_mm) * mm

    def _header(self) -> None:
        c = self._canvas
        c.setFillColor(rgb(PRIMARY_COLOR))
        c.rect(0, self._pdf_y(HEADER_HEIGHT_MM), PAGE_WIDTH_MM * mm, HEADER_HEIGHT_MM * mm, stroke=0, fill=1)
        text_x = MARGIN_MM
        if self._logo is not None:
            c.drawImage(
                self._logo,
                MARGIN_MM * mm,
                self._pdf_y(25),
                width=20 * mm,
                height=20 * mm,
                preserveAspectRatio=True,
                mask="auto",
            )
            text_x += 25
        c.setFillColor(colors.white)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(text_x * mm, self._pdf_y(14), self._title)
        c.setFont("Helvetica", 10)
        c.drawString(text_x * mm, self._pdf_y(22), f"{self.ctx.project_name} | {self.ctx.month}")

    def _footer(self) -> None:
        c = self._canvas
        c.setStrokeColor(rgb(SECONDARY_COLOR))
        c.setLineWidth(0.3)
        footer_top = PAGE_HEIGHT_MM - FOOTER_HEIGHT_MM
        c.line(MARGIN_MM * mm, self._pdf_y(footer_top), (PAGE_WIDTH_MM - MARGIN_MM) * mm, self._pdf_y(footer_top))
        c.setFillColor(rgb(SECONDARY_COLOR))
        c.setFont("Helvetica", 8)
        c.drawString(MARGIN_MM * mm, self._pdf_y(PAGE_HEIGHT_MM - 8), REPORT_BRAND)
        c.drawRightString((PAGE_WIDTH_MM - MARGIN_MM) * mm, self._pdf_y(PAGE_HEIGHT_MM - 8), f"Página {self.page_count}")

    def _section_title(self, text: str, color: Sequence[int] = SECONDARY_COLOR) -> None:
        c = self._canvas
        c.setFillColor(rgb(color))
        c.setFont("Helvetica-Bold", 12)
        c.drawString(MARGIN_MM * mm, self._pdf_y(self.y + 4), text)
        self.y += SECTION_TITLE_HEIGHT_MM

    def _note(self, text: str) -> None:
        c = self._canvas
        c.setFillColor(colors.HexColor("#64748b"))
        c.setFont("Helvetica-Oblique", 9)
        c.drawString(MARGIN_MM * mm, self._pdf_y(self.y + 4), text)
        self.y += 8

    def _fits(self, height_mm: float) -> bool:
        return self.y + height_mm <= CONTENT_BOTTOM_MM

    def _place(self, table: Table, x_mm: float, width_mm: float) -> float:
        """Draw ``table`` at (x, self.y) and return its height in mm."""
        _, height = table.wrapOn(self._canvas, width_mm * mm, (CONTENT_BOTTOM_MM - self.y) * mm)
        table.drawOn(self._canvas, x_mm * mm, self._pdf_y(self.y) - height)
        return height / mm

    def _table(
        self,
        header: Sequence[str],
        rows: Sequence[Sequence[object]],
        widths_mm: Sequence[float],
        *,
        header_rgb: Sequence[int] = PRIMARY_COLOR,
        total_last: bool = False,
    ) -> Table:
        table = Table([list(header)] + [list(r) for r in rows], colWidths=[w * mm for w in widths_mm], repeatRows=1)
        table.setStyle(_table_style(header_rgb, total_last))
        return table

    def _table_height(self, table: Table, width_mm: float) -> float:
        _, height = table.wrap(width_mm * mm, PAGE_HEIGHT_MM * mm)
        return height / mm

    # ------------------ Page 1 ------------------
    def _executive_summary(self) -> None:
        ctx = self.ctx
        c = self._canvas
        gap = 5.0
        box_w = (CONTENT_WIDTH_MM - 2 * gap) / 3
        box_h = 25.0
        boxes = (
            ("Total Tickets", str(ctx.kpis.total_tickets)),
            ("Horas Totales", format_hours(ctx.kpis.total_hours, 1)),
            ("Tasa de Cierre", f"{ctx.kpis.completion_rate}%"),
        )
        for idx, (label, value) in enumerate(boxes):
            x = MARGIN_MM + idx * (box_w + gap)
            c.setFillColor(rgb(KPI_COLORS[idx]))
            c.roundRect(x * mm, self._pdf_y(self.y + box_h), box_w * mm, box_h * mm, 2 * mm, stroke=0, fill=1)
            c.setFillColor(colors.white)
            c.setFont("Helvetica", 9)
            c.drawCentredString((x + box_w / 2) * mm, self._pdf_y(self.y + 8), label)
            c.setFont("Helvetica-Bold", 16)
            c.drawCentredString((x + box_w / 2) * mm, self._pdf_y(self.y + 18), value)
        self.y += box_h + SECTION_GAP_MM

        self._section_title("Facturación")
        billing_rows = [(r["concept"], format_hours(r["hours"]), r["state"]) for r in ctx.billing.to_dict("records")]
        table = self._table(("Concepto", "Horas", "Estado"), billing_rows, (80, 50, CONTENT_WIDTH_MM - 130))
        if ctx.consumption.over_budget:
            table.setStyle(TableStyle([("TEXTCOLOR", (2, 2), (2, 2), rgb(HOT_COLOR))]))
        self.y += self._place(table, MARGIN_MM, CONTENT_WIDTH_MM) + SECTION_GAP_MM

        self._section_title("Estado de Tickets")
        status_rows = [
            (r["status"], int(r["count"]), format_pct(r["pct"])) for r in ctx.fixed_statuses.to_dict("records")
        ]
        table = self._table(("Estado", "Cantidad", "% del Total"), status_rows, (80, 50, CONTENT_WIDTH_MM - 130))
        self.y += self._place(table, MARGIN_MM, CONTENT_WIDTH_MM) + SECTION_GAP_MM

    # ------------------ Page 2 ------------------
    def _detailed_metrics(self) -> None:
        ctx = self.ctx
        half = (CONTENT_WIDTH_MM - 6) / 2
        top = self.y
        self._section_title("Prioridad")
        if ctx.priorities.empty:
            self._note(EMPTY_PERIOD_MESSAGE)
            left_h = 8.0
        else:
            rows = [(r["priority"], int(r["count"]), format_pct(r["pct"])) for r in ctx.priorities.to_dict("records")]
            table = self._table(("Prioridad", "Tickets", "%"), rows, (half * 0.5, half * 0.25, half * 0.25), total_last=True)
            left_h = self._place(table, MARGIN_MM, half)

        self.y = top
        c = self._canvas
        c.setFillColor(rgb(SECONDARY_COLOR))
        c.setFont("Helvetica-Bold", 12)
        c.drawString((MARGIN_MM + half + 6) * mm, self._pdf_y(self.y + 4), "Tipo")
        self.y += 8
        if ctx.types.empty:
            right_h = 8.0
        else:
            rows = [(r["issue_type"], int(r["count"])) for r in ctx.types.to_dict("records")]
            table = self._table(("Tipo", "Tickets"), rows, (half * 0.7, half * 0.3))
            right_h = self._place(table, MARGIN_MM + half + 6, half)
        self.y = top + 8 + max(left_h, right_h) + SECTION_GAP_MM

        self._section_title("Horas por Módulo", ACCENT_COLOR)
        if ctx.modules.empty:
            self._note(EMPTY_PERIOD_MESSAGE)
        else:
            rows = [
                (r["module"], int(r["tickets"]), format_hours(r["hours"]), format_hours(r["avg_hours"]))
                for r in ctx.modules.to_dict("records")
            ]
            table = self._table(
                ("Módulo", "Tickets", "Horas", "Promedio h/Ticket"),
                rows,
                (CONTENT_WIDTH_MM - 105, 25, 40, 40),
                header_rgb=ACCENT_COLOR,
                total_last=True,
            )
            self._place_or_continue(table)
            self.y += SECTION_GAP_MM

        if ctx.consultants.empty:
            self._section_title("Rendimiento por Consultor")
            self._note(EMPTY_PERIOD_MESSAGE)
            return
        rows = [
            (
                r["name"],
                int(r["tickets"]),
                format_pct(r["pct_tickets"]),
                format_hours(r["hours"]),
                format_pct(r["pct_hours"]),
                format_hours(r["avg_hours"]),
            )
            for r in ctx.consultants.to_dict("records")
        ]
        table = self._table(
            ("Consultor", "Tickets", "% Tickets", "Horas", "% Horas", "Promedio h/t"),
            rows,
            (CONTENT_WIDTH_MM - 125, 20, 25, 30, 25, 25),
            total_last=True,
        )
        if not self._fits(8 + self._table_height(table, CONTENT_WIDTH_MM)):
            self._continue_page()
        self._section_title("Rendimiento por Consultor")
        self._place_or_continue(table)

    # ------------------ Page 3 ------------------
    def _deep_dive(self) -> None:
        ctx = self.ctx
        self._section_title("Top Tickets por Horas", HOT_COLOR)
        if ctx.top_tickets.empty:
            self._note(EMPTY_PERIOD_MESSAGE)
        else:
            rows = [
                (idx, r["key"], format_hours(r["hours"]))
                for idx, r in enumerate(ctx.top_tickets.to_dict("records"), start=1)
            ]
            table = self._table(("#", "Ticket", "Horas"), rows, (15, CONTENT_WIDTH_MM - 55, 40), header_rgb=HOT_COLOR)
            self.y += self._place(table, MARGIN_MM, CONTENT_WIDTH_MM) + SECTION_GAP_MM

        if not self._fits(SECTION_TITLE_HEIGHT_MM + self._calendar_height()):
            self._continue_page()
        self._section_title("Calendario de Creación de Tickets")
        self._calendar()

    def _calendar_height(self) -> float:
        rows = min(max((cell.row + 1 for cell in self.ctx.calendar_cells), default=0), GRID_ROWS)
        return CALENDAR_HEADER_HEIGHT_MM + rows * CALENDAR_ROW_HEIGHT_MM

    def _calendar(self) -> None:
        c = self._canvas
        cell_w = CONTENT_WIDTH_MM / GRID_COLUMNS
        top = self.y
        c.setFont("Helvetica-Bold", 8)
        for col, label in enumerate(CALENDAR_WEEKDAY_LABELS):
            x = MARGIN_MM + col * cell_w
            c.setFillColor(rgb(SECONDARY_COLOR))
            c.rect(x * mm, self._pdf_y(top + CALENDAR_HEADER_HEIGHT_MM), cell_w * mm, CALENDAR_HEADER_HEIGHT_MM * mm, stroke=0, fill=1)
            c.setFillColor(colors.white)
            c.drawCentredString((x + cell_w / 2) * mm, self._pdf_y(top + 4.2), label)

        grid_top = top + CALENDAR_HEADER_HEIGHT_MM
        c.setStrokeColor(colors.HexColor("#cbd5e1"))
        c.setLineWidth(0.3)
        rows_used = 0
        for cell in self.ctx.calendar_cells:
            rows_used = max(rows_used, cell.row + 1)
            x = MARGIN_MM + cell.column * cell_w
            y = grid_top + cell.row * CALENDAR_ROW_HEIGHT_MM
            c.rect(x * mm, self._pdf_y(y + CALENDAR_ROW_HEIGHT_MM), cell_w * mm, CALENDAR_ROW_HEIGHT_MM * mm, stroke=1, fill=0)
            c.setFillColor(rgb(SECONDARY_COLOR))
            c.setFont("Helvetica", 7)
            c.drawString((x + 1.5) * mm, self._pdf_y(y + 3.5), str(cell.day))
            radius = dot_radius(cell.count)
            if radius:
                c.setFillColor(rgb(HOT_COLOR))
                c.circle((x + cell_w / 2) * mm, self._pdf_y(y + CALENDAR_ROW_HEIGHT_MM / 2 + 1), radius * mm, stroke=0, fill=1)
                c.setFont("Helvetica", 6)
                c.setFillColor(rgb(SECONDARY_COLOR))
                c.drawRightString((x + cell_w - 1.5) * mm, self._pdf_y(y + CALENDAR_ROW_HEIGHT_MM - 1.5), str(cell.count))
        self.y = grid_top + min(rows_used, GRID_ROWS) * CALENDAR_ROW_HEIGHT_MM + SECTION_GAP_MM

    # ------------------ Page 4+ ------------------
    def _hours_detail(self) -> None:
        rows = self.ctx.detail_rows
        if not rows:
            self._note(EMPTY_PERIOD_MESSAGE)
            return
        widths = (22, 28, 40, 22, CONTENT_WIDTH_MM - 112)
        data = [["Fecha", "Ticket", "Consultor", "Horas", "Comentario"]]
        for row in rows:
            comment = Paragraph(escape(row.comment), _COMMENT_STYLE) if row.kind == ENTRY and row.comment else ""
            data.append([row.date, row.ticket, row.consultant, row.hours_label, comment])
        table = Table(data, colWidths=[w * mm for w in widths], repeatRows=1)
        table.setStyle(_detail_style(rows))
        self._place_or_continue(table)

    def _place_or_continue(self, table: Table) -> float:
        """Draw ``table`` from the cursor, splitting onto continuation pages.

        Returns the height used on the last page.
        """
        remaining: Table | None = table
        used = 0.0
        while remaining is not None:
            avail_h = (CONTENT_BOTTOM_MM - self.y) * mm
            _, height = remaining.wrapOn(self._canvas, CONTENT_WIDTH_MM * mm, avail_h)
            if height <= avail_h:
                remaining.drawOn(self._canvas, MARGIN_MM * mm, self._pdf_y(self.y) - height)
                used = height / mm
                remaining = None
                continue
            parts = remaining.split(CONTENT_WIDTH_MM * mm, avail_h)
            if len(parts) < 2:
                if self.y <= HEADER_HEIGHT_MM + 8:
                    # a single row taller than a page; draw it and let it clip
                    remaining.drawOn(self._canvas, MARGIN_MM * mm, self._pdf_y(self.y) - height)
                    used = height / mm
                    remaining = None
                    continue
                self._continue_page()
                continue
            head, remaining = parts[0], parts[1]
            _, head_h = head.wrapOn(self._canvas, CONTENT_WIDTH_MM * mm, avail_h)
            head.drawOn(self._canvas, MARGIN_MM * mm, self._pdf_y(self.y) - head_h)
            self._continue_page()
        self.y += used
        return used


def render_report(ctx: MonthContext, logo_path: str | Path | None = LOGO_PATH) -> bytes:
    return ReportRenderer(ctx, logo_path=logo_path).render()
