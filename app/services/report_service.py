"""
Report Generation Service
Generates agent coaching PDF reports using ReportLab
"""
import logging
import re
from datetime import datetime
from io import BytesIO
from typing import Dict, List, Mapping, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle,
    PageBreak, HRFlowable
)

from app.services.insight_service import CategoryAnalysis
from app.services.scoring_service import AgentRollup

logger = logging.getLogger(__name__)

BOLD_MARKUP = re.compile(r"\*\*(.+?)\*\*")

STATUS_COLORS = {
    'green': colors.HexColor('#27ae60'),
    'yellow': colors.HexColor('#f39c12'),
    'red': colors.HexColor('#e74c3c')
}


def to_markup(text: str) -> str:
    """
    Escape free text for a Paragraph and turn **bold** into <b> tags.
    Characters the base fonts cannot draw (emoji) are dropped.
    """
    text = text.encode("latin-1", "ignore").decode("latin-1")
    text = escape(text)
    text = BOLD_MARKUP.sub(r"<b>\1</b>", text)
    return text.replace("\n", "<br/>")


class ReportService:
    """Service for generating PDF reports"""

    def __init__(self):
        """Initialize report service"""
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles"""
        def add_style_if_not_exists(style):
            if style.name not in self.styles:
                self.styles.add(style)

        add_style_if_not_exists(ParagraphStyle(
            name='ReportTitle',
            parent=self.styles['Heading1'],
            fontSize=24,
            spaceAfter=20,
            textColor=colors.HexColor('#1a1a2e'),
            alignment=1  # Center
        ))

        add_style_if_not_exists(ParagraphStyle(
            name='ReportSubtitle',
            parent=self.styles['Heading2'],
            fontSize=14,
            spaceAfter=12,
            textColor=colors.HexColor('#4a4a6a'),
            alignment=1
        ))

        add_style_if_not_exists(ParagraphStyle(
            name='SectionHeader',
            parent=self.styles['Heading2'],
            fontSize=16,
            spaceBefore=20,
            spaceAfter=10,
            textColor=colors.HexColor('#667eea'),
            borderPadding=5
        ))

        add_style_if_not_exists(ParagraphStyle(
            name='ScoreDisplay',
            parent=self.styles['Normal'],
            fontSize=48,
            leading=56,
            alignment=1,
            textColor=colors.HexColor('#1a1a2e')
        ))

        self.styles['BodyText'].fontSize = 11
        self.styles['BodyText'].spaceBefore = 6
        self.styles['BodyText'].spaceAfter = 6
        self.styles['BodyText'].leading = 14

    def generate_agent_report(
        self,
        rollup: AgentRollup,
        analyses: Mapping[str, CategoryAnalysis],
        overall_comment: str,
        lead_counts: Optional[Dict[str, int]] = None,
    ) -> bytes:
        """
        Build a coaching PDF for one agent and return its bytes.

        Args:
            rollup: Roster rollup for the agent
            analyses: Category analyses keyed by display name
            overall_comment: Overall coaching paragraph
            lead_counts: Optional Active/Pending/Dead call counts
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            rightMargin=0.75*inch,
            leftMargin=0.75*inch,
            topMargin=0.75*inch,
            bottomMargin=0.75*inch,
            title=f"QC Coaching Report - {rollup.name}",
        )

        story = []
        story.extend(self._build_header(rollup, lead_counts))
        story.extend(self._build_score_summary(rollup, overall_comment))
        story.extend(self._build_category_breakdown(analyses))
        story.extend(self._build_category_details(analyses))
        story.extend(self._build_footer())

        doc.build(story)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.info(f"PDF report generated for agent {rollup.agent_id} ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def _build_header(self, rollup: AgentRollup, lead_counts: Optional[Dict[str, int]]) -> List:
        """Build report header section"""
        elements = []

        elements.append(Paragraph("QC Coaching Report", self.styles['ReportTitle']))
        report_date = datetime.utcnow().strftime('%B %d, %Y')
        elements.append(Paragraph(
            f"{to_markup(rollup.name)} - generated on {report_date}",
            self.styles['ReportSubtitle']
        ))
        elements.append(Spacer(1, 20))

        last_eval = rollup.last_evaluation_date.isoformat() if rollup.last_evaluation_date else 'N/A'
        lead_counts = lead_counts or {}
        info_data = [
            ['Sessions', str(rollup.session_count), 'Last Evaluation', last_eval],
            [
                'Active Leads', str(lead_counts.get('Active', 0)),
                'Pending / Dead', f"{lead_counts.get('Pending', 0)} / {lead_counts.get('Dead', 0)}",
            ],
        ]

        info_table = Table(info_data, colWidths=[1.2*inch, 2.3*inch, 1.4*inch, 2.1*inch])
        info_table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTNAME', (2, 0), (2, -1), 'Helvetica-Bold'),
            ('TEXTCOLOR', (0, 0), (0, -1), colors.HexColor('#667eea')),
            ('TEXTCOLOR', (2, 0), (2, -1), colors.HexColor('#667eea')),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
            ('TOPPADDING', (0, 0), (-1, -1), 8),
        ]))

        elements.append(info_table)
        elements.append(Spacer(1, 20))
        elements.append(HRFlowable(width="100%", thickness=1, color=colors.HexColor('#e0e0e0')))
        return elements

    def _build_score_summary(self, rollup: AgentRollup, overall_comment: str) -> List:
        """Build overall score section"""
        elements = []
        elements.append(Paragraph("Overall Score", self.styles['SectionHeader']))

        score_color = STATUS_COLORS.get(rollup.status, colors.gray)
        score_style = ParagraphStyle(
            'DynamicScore',
            parent=self.styles['ScoreDisplay'],
            textColor=score_color
        )
        elements.append(Paragraph(f"{rollup.overall_score:.1f}%", score_style))
        elements.append(Spacer(1, 15))
        elements.append(Paragraph(to_markup(overall_comment), self.styles['BodyText']))
        return elements

    def _build_category_breakdown(self, analyses: Mapping[str, CategoryAnalysis]) -> List:
        """Build category table"""
        elements = []
        elements.append(Spacer(1, 20))
        elements.append(Paragraph("Category Breakdown", self.styles['SectionHeader']))

        rated = [a for a in analyses.values() if a.session_count > 0]
        if not rated:
            elements.append(Paragraph("No category data available.", self.styles['BodyText']))
            return elements

        table_data = [['Category', 'Score', 'Consistency', 'Trend']]
        for analysis in analyses.values():
            table_data.append([
                analysis.category,
                f"{analysis.score}%" if analysis.session_count else '-',
                f"{analysis.consistency:.0f}%" if analysis.session_count else '-',
                analysis.trend.capitalize(),
            ])

        cat_table = Table(table_data, colWidths=[2.8*inch, 1.2*inch, 1.5*inch, 1.5*inch])
        cat_table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#667eea')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
            ('TOPPADDING', (0, 0), (-1, -1), 8),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#e0e0e0')),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f8f9fa')]),
        ]))
        elements.append(cat_table)
        return elements

    def _build_category_details(self, analyses: Mapping[str, CategoryAnalysis]) -> List:
        """One coaching summary per category"""
        elements = [PageBreak(), Paragraph("Coaching Detail", self.styles['SectionHeader'])]
        for analysis in analyses.values():
            elements.append(Paragraph(f"<b>{to_markup(analysis.category)}</b>", self.styles['Heading3']))
            elements.append(Paragraph(to_markup(analysis.summary_text), self.styles['BodyText']))
            elements.append(Spacer(1, 10))
        return elements

    def _build_footer(self) -> List:
        elements = [Spacer(1, 30)]
        elements.append(HRFlowable(width="100%", thickness=1, color=colors.HexColor('#e0e0e0')))
        elements.append(Paragraph(
            "Scores are recency weighted; recent calls count more than older ones.",
            self.styles['Italic']
        ))
        return elements


# Global service instance (lazy initialization)
_report_service: Optional[ReportService] = None


def get_report_service() -> ReportService:
    """Get or create the report service singleton"""
    global _report_service
    if _report_service is None:
        _report_service = ReportService()
    return _report_service
