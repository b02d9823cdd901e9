"""Single-page PDF assessment report drawn with the ReportLab canvas."""

from __future__ import annotations

import io
import time
from datetime import datetime
from typing import Optional, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from ..models.recommendations import BAND_COLORS, DISCLAIMER
from .assessment import Assessment


MARGIN = 40
LINE_HEIGHT = 18
ACCENT_BAR_WIDTH = 7
SECTION_SPACING = 32
BOX_SPACING = 18

HEADER_COLOR = (41, 128, 185)
BG_COLOR = (245, 245, 245)
BORDER_COLOR = (200, 200, 200)
DIVIDER_COLOR = (220, 220, 220)

ASSESSMENT_TYPES = {
    "voice": "Voice Analysis",
    "health": "Health Metrics Analysis",
}


def _rgb(color: Tuple[int, int, int]) -> Tuple[float, float, float]:
    return tuple(c / 255.0 for c in color)  # type: ignore[return-value]


def new_report_id() -> str:
    return f"PD{str(int(time.time() * 1000))[-6:]}"


def _report_date(assessment: Assessment) -> str:
    try:
        dt = datetime.fromisoformat(assessment.created_at)
    except ValueError:
        return assessment.created_at
    return dt.strftime("%B %d, %Y")


class _Page:
    """Top-down drawing helper: y grows downward from the top edge."""

    def __init__(self, pdf: canvas.Canvas):
        self.pdf = pdf
        self.width, self.height = A4

    def rect(self, x: float, top: float, w: float, h: float, fill=None, stroke=None, line_width: float = 1) -> None:
        pdf = self.pdf
        if fill is not None:
            pdf.setFillColorRGB(*_rgb(fill))
        if stroke is not None:
            pdf.setStrokeColorRGB(*_rgb(stroke))
            pdf.setLineWidth(line_width)
        pdf.rect(x, self.height - top - h, w, h, fill=int(fill is not None), stroke=int(stroke is not None))

    def line(self, x1: float, y: float, x2: float, color=DIVIDER_COLOR) -> None:
        self.pdf.setStrokeColorRGB(*_rgb(color))
        self.pdf.setLineWidth(1)
        self.pdf.line(x1, self.height - y, x2, self.height - y)

    def text(self, x: float, y: float, value: str, font: str = "Helvetica", size: float = 10, color=(0, 0, 0)) -> None:
        self.pdf.setFont(font, size)
        self.pdf.setFillColorRGB(*_rgb(color))
        self.pdf.drawString(x, self.height - y, value)


def _draw_watermark(page: _Page) -> None:
    pdf = page.pdf
    pdf.saveState()
    pdf.setFillColorRGB(*_rgb(HEADER_COLOR))
    pdf.setFillAlpha(0.08)
    pdf.setFont("Helvetica", 70)
    pdf.translate(page.width / 2, page.height / 2)
    pdf.rotate(35)
    pdf.drawCentredString(0, 0, "ParkinsonCare")
    pdf.restoreState()


def _draw_footer(page: _Page, page_number: int) -> None:
    grey = (100, 100, 100)
    footer_y = 820
    page.text(MARGIN, footer_y, "© ParkinsonCare. All rights reserved.", size=8, color=grey)
    page.text(page.width - MARGIN - 200, footer_y, "Confidential - For Medical Use Only", size=8, color=grey)
    page.pdf.setFont("Helvetica", 8)
    page.pdf.drawCentredString(page.width / 2, page.height - footer_y, f"Page {page_number}")


def build_assessment_report(
    assessment: Assessment,
    username: Optional[str] = None,
    report_id: Optional[str] = None,
) -> bytes:
    """Render an assessment into PDF bytes."""
    report_id = report_id or new_report_id()
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)
    pdf.setTitle(f"PD-Assessment-{report_id}")
    page = _Page(pdf)
    content_width = page.width - 2 * MARGIN
    page_number = 1

    page.rect(0, 0, page.width, page.height, fill=BG_COLOR)
    _draw_watermark(page)

    # Header
    page.rect(0, 0, page.width, 100, fill=HEADER_COLOR)
    page.text(MARGIN, 40, "Parkinson's Disease Assessment Center", "Helvetica-Bold", 24, (255, 255, 255))
    page.text(MARGIN, 60, "Advanced Neurological Assessment Division", size=12, color=(255, 255, 255))

    # Report details
    top = 130
    page.rect(MARGIN - ACCENT_BAR_WIDTH - 3, top, ACCENT_BAR_WIDTH, 90, fill=HEADER_COLOR)
    page.rect(MARGIN, top, content_width, 90, fill=(255, 255, 255))
    page.rect(MARGIN, top, content_width, 40, stroke=HEADER_COLOR, line_width=2)
    page.text(MARGIN + 10, top + 26, "DIAGNOSTIC ASSESSMENT REPORT", "Helvetica-Bold", 14)
    page.text(MARGIN + 10, top + 60, f"Report Date: {_report_date(assessment)}")
    page.text(MARGIN + 260, top + 60, f"Report ID: {report_id}")
    kind_label = ASSESSMENT_TYPES.get(assessment.kind, assessment.kind.title())
    page.text(MARGIN + 10, top + 80, f"Assessment Type: {kind_label}")
    if username:
        page.text(MARGIN + 260, top + 80, f"Patient: {username}")
    page.line(MARGIN, top + 95, MARGIN + content_width)

    # Risk section
    y = top + 120
    risk_bg, risk_fg = BAND_COLORS[assessment.band]
    box_height = 90
    page.rect(MARGIN - ACCENT_BAR_WIDTH - 3, y - 30, ACCENT_BAR_WIDTH, box_height + 40, fill=risk_bg)
    page.rect(MARGIN, y - 30, content_width, box_height + 40, fill=risk_bg)
    page.text(MARGIN + 10, y - 10, "RISK ASSESSMENT RESULTS", "Helvetica-Bold", 16, risk_fg)
    page.rect(MARGIN + 10, y, content_width - 20, box_height, fill=(255, 255, 255), stroke=BORDER_COLOR)
    page.text(MARGIN + 25, y + 30, "Risk Classification:", "Helvetica-Bold", 13)
    page.rect(MARGIN + 170, y + 15, 120, 28, fill=risk_bg)
    page.text(MARGIN + 175, y + 34, assessment.band.label, "Helvetica-Bold", 13, risk_fg)
    page.text(MARGIN + 25, y + 60, "Assessment Score:", "Helvetica-Bold", 13)
    page.text(MARGIN + 170, y + 60, f"{assessment.score:.2f}%", size=13)
    page.line(MARGIN, y + box_height + 15, MARGIN + content_width)

    # Recommendations
    y += box_height + 40 + SECTION_SPACING
    page.rect(MARGIN, y - 30, content_width, 30, fill=(255, 255, 255))
    page.text(MARGIN + 10, y - 10, "CLINICAL RECOMMENDATIONS", "Helvetica-Bold", 16, HEADER_COLOR)
    y += 10
    for rec in assessment.recommendations:
        lines = simpleSplit(rec, "Helvetica", 11, content_width - 40)
        box = max(40, len(lines) * LINE_HEIGHT * 0.9 + 22)
        if y + box > 780:
            _draw_footer(page, page_number)
            pdf.showPage()
            page_number += 1
            y = 60
        page.rect(MARGIN, y, content_width, box, fill=BG_COLOR)
        page.text(MARGIN + 10, y + 25, "•", "Helvetica-Bold", 11)
        for i, line in enumerate(lines):
            page.text(MARGIN + 25, y + 25 + i * LINE_HEIGHT * 0.9, line, size=11)
        y += box + BOX_SPACING

    page.line(MARGIN, y, MARGIN + content_width)
    y += 16
    for i, line in enumerate(simpleSplit(DISCLAIMER, "Helvetica", 9, content_width)):
        page.text(MARGIN, y + i * 12, line, size=9, color=(100, 100, 100))

    _draw_footer(page, page_number)
    pdf.showPage()
    pdf.save()
    return buf.getvalue()
