"""
export.py

Criteria summary and PDF rendering of a prediction result set.
- Uses ReportLab for layout (SimpleDocTemplate), built entirely in memory.
"""
import io
import logging
from datetime import datetime
from typing import Any, List, Optional, Tuple
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .classifier import classify
from .models import Criteria, PredictionMode

logger = logging.getLogger(__name__)

TABLE_HEADERS = ("Institute", "Branch", "College Type", "Seat Type", "Closing Rank", "Percentile")
HEADER_COLOR = colors.HexColor('#4361ee')

_CACHED_STYLES = None


def get_styles():
    global _CACHED_STYLES
    if _CACHED_STYLES is None:
        styles = getSampleStyleSheet()
        styles.add(ParagraphStyle(
            name='ReportTitle', fontSize=18, leading=22,
            alignment=TA_CENTER,
            fontName='Helvetica-Bold',
            spaceAfter=12
        ))
        styles.add(ParagraphStyle(
            name='ParamLine', fontSize=12, leading=16,
            fontName='Helvetica'
        ))
        styles.add(ParagraphStyle(
            name='TableHeader', fontSize=9, leading=11,
            alignment=TA_CENTER,
            textColor=colors.white,
            fontName='Helvetica-Bold'
        ))
        styles.add(ParagraphStyle(
            name='TableCell', fontSize=9, leading=11,
            alignment=TA_LEFT,
            fontName='Helvetica'
        ))
        _CACHED_STYLES = styles
    return _CACHED_STYLES


def _joined(values) -> str:
    values = sorted(v for v in values if v != "All")
    return ", ".join(values) if values else "All"


def criteria_summary(criteria: Criteria) -> List[Tuple[str, str]]:
    """Label/value pairs describing the criteria behind a result set."""
    by_percentile = criteria.mode == PredictionMode.PERCENTILE
    threshold = "" if criteria.threshold is None else _cell(criteria.threshold)
    return [
        ("Seat Type", _joined(criteria.seat_types)),
        ("Branch", _joined(criteria.branches)),
        ("College Type", _joined(criteria.college_types)),
        ("Region", _joined(criteria.regions)),
        ("Filter By", "Percentile" if by_percentile else "Rank"),
        ("Percentile" if by_percentile else "Rank", threshold),
        ("Results", "All" if criteria.limit == "all" else str(criteria.limit)),
    ]


def _cell(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return "N/A"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def export_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"college-predictor-results-{int(now.timestamp() * 1000)}.pdf"


def build_results_pdf(
    result: pd.DataFrame,
    summary: List[Tuple[str, str]],
    generated_on: Optional[datetime] = None
) -> bytes:
    """
    Render a result set and its criteria summary as a PDF

    Args:
        result (pd.DataFrame): Result set to export, in display order
        summary (list): Label/value pairs from criteria_summary
        generated_on (datetime): Date printed in the footer

    Returns:
        bytes: PDF document
    """
    styles = get_styles()
    generated_on = generated_on or datetime.now()
    footer = f"Generated on {generated_on.strftime('%d/%m/%Y')} | College Predictor"

    story: List = [Paragraph("College Prediction Results", styles['ReportTitle'])]
    for label, value in summary:
        story.append(Paragraph(escape(f"{label}: {value}"), styles['ParamLine']))
    story.append(Spacer(1, 0.2 * inch))

    data = [[Paragraph(h, styles['TableHeader']) for h in TABLE_HEADERS]]
    for row in result.to_dict(orient='records'):
        data.append([
            Paragraph(escape(_cell(row.get('Institute'))), styles['TableCell']),
            Paragraph(escape(_cell(row.get('Branch'))), styles['TableCell']),
            classify(row.get('Institute')).value,
            _cell(row.get('Seat Type')),
            _cell(row.get('Rank')),
            _cell(row.get('Percentile')),
        ])

    table = Table(
        data,
        colWidths=[2.2 * inch, 1.6 * inch, 1.1 * inch, 0.8 * inch, 0.7 * inch, 0.8 * inch],
        repeatRows=1
    )
    table_style = TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_COLOR),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#dde3e8')),
        ('FONTSIZE', (0, 1), (-1, -1), 9),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('ALIGN', (2, 1), (-1, -1), 'CENTER'),
    ])
    for r in range(1, len(data)):
        if r % 2 == 0:
            table_style.add('BACKGROUND', (0, r), (-1, r), colors.HexColor('#f2f5fc'))
    table.setStyle(table_style)
    story.append(table)

    def _on_page(canvas, doc_obj):
        canvas.saveState()
        canvas.setFont('Helvetica', 10)
        canvas.drawCentredString(doc_obj.pagesize[0] / 2, 0.4 * inch, footer)
        canvas.restoreState()

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch,
        topMargin=0.5 * inch,
        bottomMargin=0.7 * inch,
        title="College Prediction Results",
    )
    doc.build(story, onFirstPage=_on_page, onLaterPages=_on_page)
    pdf_bytes = buffer.getvalue()
    buffer.close()

    logger.info(f"Exported {len(result)} results to PDF ({len(pdf_bytes)} bytes)")
    return pdf_bytes
