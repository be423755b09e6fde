"""
Report service for the Mentoring Report Generator
Readiness checks, report document assembly and PDF rendering
"""

import logging
import re
from collections import namedtuple
from datetime import datetime
from io import BytesIO
from xml.sax.saxutils import escape as xml_escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    BaseDocTemplate, Frame, NextPageTemplate, PageTemplate, Paragraph, Table, TableStyle,
)

from models.dashboard import INPUT_METHODS
from models.report import ReportDocument, TABLE_HEADERS, is_report_type
from utils.errors import ExportFailure
from utils.validators import validate_report_type

logger = logging.getLogger(__name__)

ReadinessProblem = namedtuple('ReadinessProblem', ['category', 'message'])

class ReadinessResult(namedtuple('ReadinessResult', ['ready', 'problems'])):
    __slots__ = ()

    @property
    def categories(self):
        return [problem.category for problem in self.problems]

    @property
    def message(self):
        return '; '.join(problem.message for problem in self.problems)

# Fixed page geometry, measured from the top-left corner of page one
PAGE_MARGIN = 14 * mm
HEADER_X = 20 * mm
METADATA_LEFT_X = 20 * mm
METADATA_RIGHT_X = 120 * mm
DEPARTMENT_Y = 20 * mm
INSTITUTION_Y = 30 * mm
METADATA_LEFT_Y = 50 * mm
METADATA_RIGHT_Y = 60 * mm
METADATA_LINE_HEIGHT = 10 * mm
TABLE_START_Y = 100 * mm
TABLE_COLUMN_FRACTIONS = [0.09, 0.30, 0.20, 0.41]
DEFAULT_HEADER_FILL = (41, 128, 185)
STRIPE_COLOR = colors.Color(245 / 255.0, 245 / 255.0, 245 / 255.0)

class ReportService:
    """Service for validating, assembling and rendering mentoring reports"""

    @staticmethod
    def check_readiness(report_type, metadata, input_method, rows):
        """Check whether a report may be previewed or exported.

        Collects every problem instead of stopping at the first one, so callers
        can tell a missing report type apart from missing metadata or rows.
        """
        problems = []

        is_valid, message = validate_report_type(report_type)
        if not is_valid:
            problems.append(ReadinessProblem('report_type', message))

        missing = metadata.missing_fields()
        if missing:
            problems.append(ReadinessProblem(
                'metadata',
                f"Please fill all academic metadata fields: {', '.join(missing)}"
            ))
        invalid = metadata.invalid_fields()
        if invalid:
            problems.append(ReadinessProblem(
                'metadata',
                f"Please choose a listed value for: {', '.join(invalid)}"
            ))

        if input_method not in INPUT_METHODS:
            problems.append(ReadinessProblem('rows', "Please choose file upload or manual entry"))
        elif not rows:
            if input_method == 'file':
                problems.append(ReadinessProblem('rows', "Please upload a file"))
            else:
                problems.append(ReadinessProblem('rows', "Please add at least one student entry"))

        return ReadinessResult(ready=not problems, problems=problems)

    @staticmethod
    def build_document(metadata, report_type, rows):
        """Combine metadata and normalized rows into a new ReportDocument"""
        return ReportDocument(metadata=metadata, report_type=report_type, rows=tuple(rows))

    @staticmethod
    def build_filename(report_type, batch, timestamp=None):
        """File name for a PDF export: {report_type}_{batch}_{epoch millis}.pdf"""
        if timestamp is None:
            timestamp = int(datetime.now().timestamp() * 1000)
        safe_type = re.sub(r'\s+', '_', report_type or '')
        return f"{safe_type}_{batch}_{timestamp}.pdf"

    # ------------------------- PDF Helper Utilities -------------------------
    @staticmethod
    def _get_paragraph_style():
        """Return the 10pt cell style used for body cells"""
        styles = getSampleStyleSheet()
        return ParagraphStyle(
            'Cell',
            parent=styles['Normal'],
            fontSize=10,
            leading=12,
            spaceAfter=0,
            spaceBefore=0,
        )

    @staticmethod
    def _get_header_paragraph_style():
        styles = getSampleStyleSheet()
        return ParagraphStyle(
            'HeaderCell',
            parent=styles['Normal'],
            fontName='Helvetica-Bold',
            fontSize=10,
            leading=12,
            textColor=colors.white,
            spaceAfter=0,
            spaceBefore=0,
        )

    @staticmethod
    def _to_paragraph(value, style):
        """Convert a cell value to a Paragraph so long text wraps within the column"""
        text = xml_escape('' if value is None else str(value)).replace('\n', '<br/>')
        return Paragraph(text, style)

    @staticmethod
    def _calc_colwidths_from_fracs(total_width, fracs):
        safe_fracs = fracs or []
        s = float(sum(safe_fracs)) or 1.0
        return [total_width * (f / s) for f in safe_fracs]

    @staticmethod
    def _build_table(document, page_width, header_fill):
        cell_style = ReportService._get_paragraph_style()
        header_style = ReportService._get_header_paragraph_style()

        rows = [[ReportService._to_paragraph(header, header_style) for header in TABLE_HEADERS]]
        for cells in document.table_rows():
            rows.append([ReportService._to_paragraph(cell, cell_style) for cell in cells])

        table = Table(
            rows,
            repeatRows=1,
            colWidths=ReportService._calc_colwidths_from_fracs(page_width, TABLE_COLUMN_FRACTIONS),
        )
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.Color(*[c / 255.0 for c in header_fill])),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [STRIPE_COLOR, colors.white]),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('LEFTPADDING', (0, 0), (-1, -1), 4),
            ('RIGHTPADDING', (0, 0), (-1, -1), 4),
            ('TOPPADDING', (0, 0), (-1, -1), 3),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 3),
        ]))
        return table

    @staticmethod
    def _draw_header_block(canvas, doc, document):
        """Institution header and the two-column metadata block at fixed positions on page one"""
        page_height = doc.pagesize[1]
        metadata = document.metadata
        left, right = metadata.display_items(document.report_type)

        canvas.saveState()
        canvas.setFont('Helvetica', 16)
        canvas.drawString(HEADER_X, page_height - DEPARTMENT_Y, metadata.department or '')
        canvas.setFont('Helvetica', 14)
        canvas.drawString(HEADER_X, page_height - INSTITUTION_Y, metadata.institution or '')

        canvas.setFont('Helvetica', 12)
        for index, (label, value) in enumerate(left):
            y = page_height - (METADATA_LEFT_Y + index * METADATA_LINE_HEIGHT)
            canvas.drawString(METADATA_LEFT_X, y, f"{label}: {value}")
        for index, (label, value) in enumerate(right):
            y = page_height - (METADATA_RIGHT_Y + index * METADATA_LINE_HEIGHT)
            canvas.drawString(METADATA_RIGHT_X, y, f"{label}: {value}")
        canvas.restoreState()
        ReportService._draw_page_number(canvas, doc)

    @staticmethod
    def _draw_page_number(canvas, doc):
        canvas.saveState()
        canvas.setFont('Helvetica', 8)
        canvas.drawRightString(doc.pagesize[0] - PAGE_MARGIN, PAGE_MARGIN / 2, f"Page {doc.page}")
        canvas.restoreState()

    @staticmethod
    def generate_pdf(document, header_fill=None):
        """Render a ReportDocument to PDF bytes.

        Page one carries the header block and starts the table below it; later
        pages continue the table with the header row repeated.
        Raises ExportFailure for an empty document or when rendering fails.
        """
        if document.is_empty:
            raise ExportFailure("There are no student rows to export")
        if not is_report_type(document.report_type):
            raise ExportFailure("Please select a report type")

        header_fill = header_fill or DEFAULT_HEADER_FILL
        page_width, page_height = A4
        content_width = page_width - 2 * PAGE_MARGIN
        buffer = BytesIO()
        try:
            doc = BaseDocTemplate(
                buffer,
                pagesize=A4,
                leftMargin=PAGE_MARGIN,
                rightMargin=PAGE_MARGIN,
                topMargin=PAGE_MARGIN,
                bottomMargin=PAGE_MARGIN,
                title=f"{document.report_type_label} - {document.metadata.batch}",
                author=document.metadata.institution or '',
            )
            first_frame = Frame(
                PAGE_MARGIN, PAGE_MARGIN, content_width, page_height - TABLE_START_Y - PAGE_MARGIN,
                leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0, id='first',
            )
            later_frame = Frame(
                PAGE_MARGIN, PAGE_MARGIN, content_width, page_height - 2 * PAGE_MARGIN,
                leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0, id='later',
            )
            doc.addPageTemplates([
                PageTemplate(
                    id='first',
                    frames=[first_frame],
                    onPage=lambda canvas, d: ReportService._draw_header_block(canvas, d, document),
                ),
                PageTemplate(id='later', frames=[later_frame], onPage=ReportService._draw_page_number),
            ])
            doc.build([
                NextPageTemplate('later'),
                ReportService._build_table(document, content_width, header_fill),
            ])
            return buffer.getvalue()
        except Exception as e:
            logger.error("PDF rendering failed for %s", document.report_type, exc_info=True)
            raise ExportFailure() from e
        finally:
            buffer.close()
