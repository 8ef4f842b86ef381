"""
Asset Intelligence Workbench - Market Report PDF

Generates a printable market report from a MarketReport.
Uses ReportLab for deterministic PDF generation.

Output Structure:
1. Cover (subject, asset type, size, filters)
2. Demographic Rings
3. Comparable Properties
4. Market Statistics
5. Nearby Major Routes
6. Summary
7. Notice
"""

import re
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    KeepTogether,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from core.analyzer import MarketReport
from utils.formatting import format_currency, format_miles, format_number, format_percent, format_rent


# =============================================================================
# Report Generation Result Types
# =============================================================================

@dataclass
class ReportSuccess:
    """Returned when PDF generation succeeds."""
    path: Path
    comps_included: int


# Comps table is capped for print; the full list stays in the JSON output
MAX_PRINTED_COMPS = 25


# =============================================================================
# Color Palette
# =============================================================================

class Palette:
    """Print-friendly palette: charcoal text, navy accent."""
    BLACK = colors.Color(0.1, 0.1, 0.1)
    CHARCOAL = colors.Color(0.2, 0.2, 0.22)
    SLATE = colors.Color(0.35, 0.38, 0.42)
    GRAY = colors.Color(0.5, 0.5, 0.5)
    LIGHT_GRAY = colors.Color(0.85, 0.85, 0.85)
    PALE_GRAY = colors.Color(0.95, 0.95, 0.95)
    WHITE = colors.white

    ACCENT = colors.Color(0.13, 0.4, 0.85)
    ACCENT_LIGHT = colors.Color(0.92, 0.94, 0.97)


# =============================================================================
# Style Configuration
# =============================================================================

def get_report_styles():
    """Paragraph styles for the market report."""
    styles = getSampleStyleSheet()

    styles.add(ParagraphStyle(
        name='CoverBrand',
        parent=styles['Normal'],
        fontSize=10,
        leading=13,
        textColor=Palette.SLATE,
        alignment=TA_LEFT,
        fontName='Helvetica',
        letterSpacing=1.5,
    ))

    styles.add(ParagraphStyle(
        name='CoverTitle',
        parent=styles['Normal'],
        fontSize=22,
        leading=28,
        textColor=Palette.CHARCOAL,
        alignment=TA_LEFT,
        fontName='Helvetica-Bold',
        spaceAfter=8*mm,
    ))

    styles.add(ParagraphStyle(
        name='CoverSubtitle',
        parent=styles['Normal'],
        fontSize=11,
        leading=15,
        textColor=Palette.SLATE,
        fontName='Helvetica',
        spaceAfter=3*mm,
    ))

    styles.add(ParagraphStyle(
        name='SectionTitle',
        parent=styles['Normal'],
        fontSize=14,
        leading=18,
        textColor=Palette.CHARCOAL,
        fontName='Helvetica-Bold',
        spaceBefore=18,
        spaceAfter=10,
    ))

    styles['BodyText'].fontSize = 9.5
    styles['BodyText'].leading = 14.25
    styles['BodyText'].textColor = Palette.CHARCOAL
    styles['BodyText'].spaceAfter = 6
    styles['BodyText'].alignment = TA_JUSTIFY
    styles['BodyText'].fontName = 'Helvetica'

    styles.add(ParagraphStyle(
        name='SmallText',
        parent=styles['Normal'],
        fontSize=8,
        leading=12,
        textColor=Palette.GRAY,
        fontName='Helvetica',
        spaceAfter=4,
    ))

    styles.add(ParagraphStyle(
        name='MetricValue',
        parent=styles['Normal'],
        fontSize=16,
        leading=20,
        textColor=Palette.ACCENT,
        alignment=TA_CENTER,
        fontName='Helvetica-Bold',
    ))

    styles.add(ParagraphStyle(
        name='MetricLabel',
        parent=styles['Normal'],
        fontSize=8,
        leading=10,
        textColor=Palette.SLATE,
        alignment=TA_CENTER,
        fontName='Helvetica',
    ))

    return styles


def _table_style(header_rows: int = 1) -> TableStyle:
    return TableStyle([
        ('FONTNAME', (0, 0), (-1, header_rows - 1), 'Helvetica-Bold'),
        ('FONTNAME', (0, header_rows), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 8.5),
        ('BACKGROUND', (0, 0), (-1, header_rows - 1), Palette.CHARCOAL),
        ('TEXTCOLOR', (0, 0), (-1, header_rows - 1), Palette.WHITE),
        ('TEXTCOLOR', (0, header_rows), (-1, -1), Palette.CHARCOAL),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('ALIGN', (0, 0), (0, -1), 'LEFT'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('GRID', (0, 0), (-1, -1), 0.5, Palette.LIGHT_GRAY),
        ('TOPPADDING', (0, 0), (-1, -1), 2*mm),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 2*mm),
        ('ROWBACKGROUNDS', (0, header_rows), (-1, -1), [Palette.WHITE, Palette.PALE_GRAY]),
    ])


def report_slug(report: MarketReport) -> str:
    """Filesystem-safe identifier for a report."""
    base = f"{report.subject.asset_type.value}-{report.subject.display_name}"
    slug = re.sub(r"[^A-Za-z0-9]+", "-", base).strip("-").lower()
    return slug[:60] or "report"


# =============================================================================
# Report Generator Class
# =============================================================================

class MarketReportGenerator:
    """
    Generates market report PDFs.

    Usage:
        generator = MarketReportGenerator()
        result = generator.generate_report(report)

    Same input always produces the same document content.
    """

    PAGE_WIDTH, PAGE_HEIGHT = letter
    MARGIN_LEFT = 18*mm
    MARGIN_RIGHT = 18*mm
    MARGIN_TOP = 18*mm
    MARGIN_BOTTOM = 22*mm

    def __init__(self, output_dir: Union[str, Path] = "reports"):
        self.styles = get_report_styles()
        self.output_dir = Path(output_dir)

    def generate_report(self, report: MarketReport, filename: Optional[str] = None) -> ReportSuccess:
        """
        Write the report PDF to the output directory.

        Args:
            report: Completed market report
            filename: Override for the generated file name

        Returns:
            ReportSuccess with the written path
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / (filename or f"AIW-{report_slug(report)}.pdf")
        output_path.write_bytes(self.generate_to_buffer(report))

        return ReportSuccess(
            path=output_path,
            comps_included=min(len(report.comps), MAX_PRINTED_COMPS),
        )

    def generate_to_buffer(self, report: MarketReport) -> bytes:
        """Generate PDF and return as bytes (for testing or streaming)."""
        buffer = BytesIO()
        self._build_document(report, buffer)
        return buffer.getvalue()

    def _build_document(self, report: MarketReport, buffer: BytesIO):
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            leftMargin=self.MARGIN_LEFT,
            rightMargin=self.MARGIN_RIGHT,
            topMargin=self.MARGIN_TOP,
            bottomMargin=self.MARGIN_BOTTOM,
            title=f"Market Report - {report.subject.display_name}",
            author="Asset Intelligence Workbench",
            subject=f"{report.subject.asset_type.value} market report",
        )

        story = []
        story.extend(self._build_cover(report))
        story.extend(self._build_demographics(report))
        story.append(PageBreak())
        story.extend(self._build_comps(report))
        story.extend(self._build_market_stats(report))
        story.extend(self._build_routes(report))
        story.append(PageBreak())
        story.extend(self._build_summary(report))

        doc.build(story, onFirstPage=self._draw_page_frame, onLaterPages=self._draw_page_frame)

    def _draw_page_frame(self, canvas_obj: canvas.Canvas, doc):
        """Footer: wordmark left, page number right."""
        canvas_obj.saveState()
        canvas_obj.setFont('Helvetica', 7)
        canvas_obj.setFillColor(Palette.GRAY)
        canvas_obj.drawString(
            self.MARGIN_LEFT,
            self.MARGIN_BOTTOM - 10*mm,
            "ASSET INTELLIGENCE WORKBENCH",
        )
        canvas_obj.drawRightString(
            self.PAGE_WIDTH - self.MARGIN_RIGHT,
            self.MARGIN_BOTTOM - 10*mm,
            f"{doc.page}",
        )
        canvas_obj.restoreState()

    # =========================================================================
    # Section 1: Cover
    # =========================================================================

    def _build_cover(self, report: MarketReport) -> list:
        subject = report.subject
        filters = report.filters
        elements = [
            Paragraph("ASSET INTELLIGENCE WORKBENCH", self.styles['CoverBrand']),
            Spacer(1, 6*mm),
            Paragraph(f"{subject.asset_type.value} Market Report", self.styles['CoverTitle']),
            Paragraph(escape(subject.display_name), self.styles['CoverSubtitle']),
            Paragraph(
                f"{format_number(report.subject_sf)} SF | "
                f"{subject.latitude:.4f}, {subject.longitude:.4f}",
                self.styles['CoverSubtitle'],
            ),
            Paragraph(
                f"Comp filters: clear height at least {filters.min_clear_height:g} ft, "
                f"built {filters.year_built_min}-{filters.year_built_max}",
                self.styles['SmallText'],
            ),
        ]
        return elements

    # =========================================================================
    # Section 2: Demographics
    # =========================================================================

    def _build_demographics(self, report: MarketReport) -> list:
        rows = [["Ring", "Pop. density / sq mi", "Median HH income", "Avg HH income", "Households"]]
        for ring in report.demographics:
            rows.append([
                ring.label,
                format_number(ring.population_density),
                format_currency(ring.median_income),
                format_currency(ring.average_income),
                format_number(ring.households),
            ])

        table = Table(rows, colWidths=[52*mm, 32*mm, 30*mm, 30*mm, 30*mm])
        table.setStyle(_table_style())
        return [
            Paragraph("Demographic Rings", self.styles['SectionTitle']),
            table,
        ]

    # =========================================================================
    # Section 3: Comparable Properties
    # =========================================================================

    def _build_comps(self, report: MarketReport) -> list:
        elements = [Paragraph("Comparable Properties", self.styles['SectionTitle'])]

        if not report.comps:
            elements.append(Paragraph(
                "No comps met the filter criteria. Try lowering min clear height "
                "or widening the year-built range.",
                self.styles['BodyText'],
            ))
            return elements

        if report.selection.truncated:
            count_line = (
                f"Showing the nearest {len(report.comps)} of "
                f"{report.selection.after_year_built} comps that match the selected criteria."
            )
        else:
            count_line = f"{len(report.comps)} comps match the selected criteria."
        elements.append(Paragraph(
            count_line,
            self.styles['BodyText'],
        ))

        rows = [["Name", "SF", "Clear ht", "Built", "Distance", "Ask rent"]]
        for comp in report.comps[:MAX_PRINTED_COMPS]:
            rows.append([
                comp.name,
                format_number(comp.square_feet),
                f"{comp.clear_height} ft",
                str(comp.year_built),
                format_miles(comp.distance_miles),
                f"${comp.ask_rent:.2f}",
            ])

        table = Table(rows, colWidths=[50*mm, 26*mm, 22*mm, 20*mm, 28*mm, 28*mm], repeatRows=1)
        table.setStyle(_table_style())
        elements.append(table)

        if len(report.comps) > MAX_PRINTED_COMPS:
            elements.append(Paragraph(
                f"Showing the nearest {MAX_PRINTED_COMPS} of {len(report.comps)} comps.",
                self.styles['SmallText'],
            ))
        return elements

    # =========================================================================
    # Section 4: Market Statistics
    # =========================================================================

    def _build_market_stats(self, report: MarketReport) -> list:
        stats = report.market_stats
        values = [
            Paragraph(format_percent(stats.vacancy_rate), self.styles['MetricValue']),
            Paragraph(f"{format_number(stats.net_absorption)} SF", self.styles['MetricValue']),
            Paragraph(format_rent(stats.avg_asking_rent, report.rent_unit), self.styles['MetricValue']),
        ]
        labels = [
            Paragraph("Vacancy rate", self.styles['MetricLabel']),
            Paragraph("Net absorption (12 mo)", self.styles['MetricLabel']),
            Paragraph("Average asking rents", self.styles['MetricLabel']),
        ]
        metrics = Table([values, labels], colWidths=[58*mm, 58*mm, 58*mm])
        metrics.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), Palette.ACCENT_LIGHT),
            ('TOPPADDING', (0, 0), (-1, 0), 4*mm),
            ('BOTTOMPADDING', (0, 1), (-1, 1), 4*mm),
        ]))
        return [KeepTogether([
            Paragraph("Market Statistics", self.styles['SectionTitle']),
            metrics,
        ])]

    # =========================================================================
    # Section 5: Routes
    # =========================================================================

    def _build_routes(self, report: MarketReport) -> list:
        elements = [Paragraph("Nearby Major Routes", self.styles['SectionTitle'])]

        if not report.routes_available:
            elements.append(Paragraph(
                "Nearby route data was unavailable for this report.",
                self.styles['BodyText'],
            ))
        elif not report.routes:
            elements.append(Paragraph(
                "No major interstates or routes found within the search radius.",
                self.styles['BodyText'],
            ))
        else:
            rows = [["Route", "Distance"]]
            rows.extend([route.name, format_miles(route.distance_miles)] for route in report.routes)
            table = Table(rows, colWidths=[120*mm, 40*mm])
            table.setStyle(_table_style())
            elements.append(table)
        return elements

    # =========================================================================
    # Section 6-7: Summary and Notice
    # =========================================================================

    def _build_summary(self, report: MarketReport) -> list:
        elements = [Paragraph("Summary", self.styles['SectionTitle'])]
        for paragraph in report.summary:
            elements.append(Paragraph(escape(paragraph), self.styles['BodyText']))

        elements.append(Spacer(1, 8*mm))
        elements.append(Paragraph(
            "All demographic, comparable and market figures in this report are modeled "
            "estimates and do not describe real properties or transactions.",
            self.styles['SmallText'],
        ))
        return elements


# =============================================================================
# Convenience Function
# =============================================================================

def generate_report(report: MarketReport, output_dir: Union[str, Path] = "reports") -> ReportSuccess:
    """
    Generate a market report PDF.

    Example:
        result = generate_report(report)
        print(f"Report generated: {result.path}")
    """
    return MarketReportGenerator(output_dir=output_dir).generate_report(report)
