"""
PDF generation service.
Renders an invoice with its company and client into an A4 document using ReportLab.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
)

from invoicetree.core.config import settings
from invoicetree.models.invoice import Invoice


logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "COP": "$",
}


def format_currency(amount: Decimal | None, currency: str | None = None) -> str:
    """Format an amount with two decimals and the currency symbol."""
    symbol = CURRENCY_SYMBOLS.get(currency or settings.CURRENCY, "")
    value = Decimal(amount or 0).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_date(d: date | None) -> str:
    """Format a date like 'Mar 5, 2024'."""
    if d is None:
        return "-"
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def _text(value) -> str:
    return escape(str(value)) if value not in (None, "") else ""


class PDFService:
    """Service for rendering invoice PDFs."""

    def __init__(self, currency: str | None = None):
        self.currency = currency or settings.CURRENCY

        self.text_color = colors.HexColor("#111111")
        self.gray_color = colors.HexColor("#666666")
        self.border_color = colors.HexColor("#EEEEEE")
        self.accent_color = colors.HexColor("#10B981")

    def _get_styles(self):
        """Get custom paragraph styles."""
        styles = getSampleStyleSheet()

        styles.add(ParagraphStyle(
            name='InvoiceTitle',
            parent=styles['Heading1'],
            fontName='Helvetica-Bold',
            fontSize=28,
            leading=32,
            textColor=self.text_color,
            spaceAfter=2*mm,
        ))

        styles.add(ParagraphStyle(
            name='InvoiceNumber',
            parent=styles['Normal'],
            fontSize=12,
            textColor=self.gray_color,
        ))

        styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=styles['Normal'],
            fontName='Helvetica-Bold',
            fontSize=11,
            textColor=self.text_color,
            spaceBefore=4*mm,
            spaceAfter=2*mm,
        ))

        styles.add(ParagraphStyle(
            name='CompanyName',
            parent=styles['Normal'],
            fontName='Helvetica-Bold',
            fontSize=14,
            leading=18,
        ))

        styles.add(ParagraphStyle(
            name='NormalText',
            parent=styles['Normal'],
            fontSize=10,
            leading=14,
            textColor=colors.HexColor("#333333"),
        ))

        styles.add(ParagraphStyle(
            name='RightAlign',
            parent=styles['Normal'],
            fontSize=10,
            alignment=TA_RIGHT,
        ))

        styles.add(ParagraphStyle(
            name='Bold',
            parent=styles['Normal'],
            fontSize=10,
            fontName='Helvetica-Bold',
        ))

        styles.add(ParagraphStyle(
            name='BoldRight',
            parent=styles['Normal'],
            fontSize=10,
            fontName='Helvetica-Bold',
            alignment=TA_RIGHT,
        ))

        styles.add(ParagraphStyle(
            name='Footer',
            parent=styles['Normal'],
            fontSize=10,
            textColor=self.gray_color,
            alignment=1,
        ))

        return styles

    def _money(self, amount) -> str:
        return format_currency(amount, self.currency)

    def _party_lines(self, party, tax_label: str = "Tax ID") -> list[str]:
        lines = []
        if party.address:
            lines.append(_text(party.address).replace("\n", "<br/>"))
        if party.tax_id:
            lines.append(f"{tax_label}: {_text(party.tax_id)}")
        if party.phone:
            lines.append(f"Phone: {_text(party.phone)}")
        if party.email:
            lines.append(f"Email: {_text(party.email)}")
        return lines

    def build_elements(self, invoice: Invoice) -> list:
        """Build the flowables of an invoice document."""
        styles = self._get_styles()
        elements = []

        # Header
        elements.append(Paragraph("INVOICE", styles['InvoiceTitle']))
        elements.append(Paragraph(_text(invoice.number), styles['InvoiceNumber']))
        elements.append(Paragraph(
            f"Issued: {format_date(invoice.issue_date)} &nbsp;&nbsp; Due: {format_date(invoice.due_date)}",
            styles['NormalText'],
        ))
        elements.append(Spacer(1, 8*mm))

        # Issuing company
        company = invoice.company
        if company is not None:
            elements.append(Paragraph(_text(company.name), styles['CompanyName']))
            for line in self._party_lines(company):
                elements.append(Paragraph(line, styles['NormalText']))
            elements.append(Spacer(1, 6*mm))

        # Client
        elements.append(Paragraph("BILL TO", styles['SectionHeader']))
        client = invoice.client
        if client is not None:
            elements.append(Paragraph(f"<b>{_text(client.name)}</b>", styles['NormalText']))
            for line in self._party_lines(client):
                elements.append(Paragraph(line, styles['NormalText']))
        else:
            elements.append(Paragraph("-", styles['NormalText']))
        elements.append(Spacer(1, 8*mm))

        # Items
        items_data = [[
            Paragraph("Description", styles['Bold']),
            Paragraph("Qty", styles['BoldRight']),
            Paragraph("Price", styles['BoldRight']),
            Paragraph("Tax", styles['BoldRight']),
            Paragraph("Disc.", styles['BoldRight']),
            Paragraph("Amount", styles['BoldRight']),
        ]]

        for item in invoice.items:
            items_data.append([
                Paragraph(_text(item.description), styles['NormalText']),
                Paragraph(f"{Decimal(item.quantity).normalize():f}", styles['RightAlign']),
                Paragraph(self._money(item.unit_price), styles['RightAlign']),
                Paragraph(f"{Decimal(item.tax_rate).normalize():f}%", styles['RightAlign']),
                Paragraph(f"{Decimal(item.discount_rate).normalize():f}%", styles['RightAlign']),
                Paragraph(self._money(item.subtotal), styles['RightAlign']),
            ])

        items_table = Table(
            items_data,
            colWidths=[62*mm, 18*mm, 26*mm, 18*mm, 18*mm, 28*mm],
            repeatRows=1,
        )
        items_table.setStyle(TableStyle([
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('LINEBELOW', (0, 0), (-1, 0), 1, self.border_color),
            ('LINEBELOW', (0, 1), (-1, -1), 0.5, self.border_color),
            ('TOPPADDING', (0, 0), (-1, -1), 2.5*mm),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 2.5*mm),
        ]))
        elements.append(items_table)
        elements.append(Spacer(1, 6*mm))

        # Totals
        totals_data = [
            ["Subtotal:", self._money(invoice.subtotal)],
            ["Tax:", self._money(invoice.tax_total)],
            ["Discount:", f"-{self._money(invoice.discount_total)}"],
            ["Total:", self._money(invoice.total)],
        ]

        totals_table = Table(totals_data, colWidths=[140*mm, 30*mm])
        totals_table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
            ('FONTNAME', (0, 0), (-1, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -2), 10),
            ('FONTSIZE', (0, -1), (-1, -1), 14),
            ('TOPPADDING', (0, 0), (-1, -1), 1.5*mm),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 1.5*mm),
            ('LINEABOVE', (0, 0), (-1, 0), 1, self.border_color),
            ('LINEABOVE', (0, -1), (-1, -1), 1, self.accent_color),
        ]))
        elements.append(totals_table)
        elements.append(Spacer(1, 8*mm))

        # Notes and terms
        for title, body in (
            ("NOTES", invoice.notes),
            ("TERMS", invoice.terms),
            ("PAYMENT TERMS", invoice.payment_terms),
        ):
            if body:
                elements.append(Paragraph(title, styles['SectionHeader']))
                elements.append(Paragraph(_text(body).replace("\n", "<br/>"), styles['NormalText']))

        elements.append(Spacer(1, 12*mm))
        elements.append(Paragraph(_text(settings.COMPANY_FOOTER), styles['Footer']))

        return elements

    def render_invoice(self, invoice: Invoice) -> bytes:
        """
        Render an invoice to PDF.

        Args:
            invoice: Invoice with items, company and client loaded

        Returns:
            The PDF document as bytes
        """
        buffer = BytesIO()

        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20*mm,
            leftMargin=20*mm,
            topMargin=20*mm,
            bottomMargin=20*mm,
            title=f"Invoice {invoice.number}",
        )
        doc.build(self.build_elements(invoice))

        pdf = buffer.getvalue()
        logger.info(f"Rendered invoice {invoice.number} ({len(pdf)} bytes)")
        return pdf
