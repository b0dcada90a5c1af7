"""ReportLab PDF Generation Service Implementation

Implements PDF generation using ReportLab library.
"""

from decimal import Decimal
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.actor_directory import ActorProfile
from src.app.services.pdf_service import PdfService
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine

DATE_FORMAT = "%d %B %Y"


def _party_lines(profile: Optional[ActorProfile], fallback_id: str) -> List[str]:
    if profile is None:
        return [f"Account {fallback_id}"]
    lines = [profile.business_name or profile.name]
    if profile.business_name and profile.name:
        lines.append(profile.name)
    if profile.email:
        lines.append(profile.email)
    return lines


def _quantity(value: Decimal) -> str:
    text = f"{value:,.6f}".rstrip("0").rstrip(".")
    return text or "0"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Lays out an A4 invoice: parties, dates, line items, totals and notes.
    """

    def generate_invoice(
        self,
        invoice: Invoice,
        invoice_lines: List[InvoiceLine],
        seller: Optional[ActorProfile],
        buyer: Optional[ActorProfile],
        currency: str = "GBP",
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice entity with totals and dates
            invoice_lines: Line items in entry order
            seller: Issuing seller profile
            buyer: Billed buyer profile
            currency: Currency label printed next to amounts

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.invoice_number}",
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=6,
            textColor=colors.HexColor("#2C3E50"),
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )
        small_style = ParagraphStyle(
            "SmallStyle",
            parent=styles["Normal"],
            fontSize=8,
            textColor=colors.HexColor("#666666"),
        )

        # Seller header
        seller_lines = _party_lines(seller, invoice.seller_id)
        elements.append(Paragraph(escape(seller_lines[0]), title_style))
        for line in seller_lines[1:]:
            elements.append(Paragraph(escape(line), header_style))
        elements.append(Spacer(1, 8 * mm))

        # Bill to / invoice details side by side
        bill_to = [Paragraph("BILL TO:", bold_style)] + [
            Paragraph(escape(line), normal_style) for line in _party_lines(buyer, invoice.buyer_id)
        ]
        details = Table(
            [
                ["Invoice No.:", invoice.invoice_number],
                ["Status:", invoice.status.value.replace("_", " ").upper()],
                ["Issue date:", invoice.created_at.strftime(DATE_FORMAT)],
                ["Due date:", invoice.due_date.strftime(DATE_FORMAT)],
            ],
            colWidths=[25 * mm, 45 * mm],
        )
        details.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                ]
            )
        )
        header_table = Table([[bill_to, details]], colWidths=[100 * mm, 70 * mm])
        header_table.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
        elements.append(header_table)
        elements.append(Spacer(1, 10 * mm))

        # Line items
        line_data = [["Description", "Quantity", f"Unit Price ({currency})", f"Amount ({currency})"]]
        for line in invoice_lines:
            description = escape(line.name)
            if line.description:
                description += f"<br/><font size=8 color='#666666'>{escape(line.description)}</font>"
            line_data.append(
                [
                    Paragraph(description, normal_style),
                    _quantity(line.quantity),
                    f"{line.price:,.2f}",
                    f"{line.total:,.2f}",
                ]
            )

        line_table = Table(line_data, colWidths=[80 * mm, 25 * mm, 30 * mm, 35 * mm])
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 9),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 1), (-1, -1), "TOP"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        total_data = [["", "", "Subtotal:", f"{invoice.subtotal:,.2f}"]]
        if invoice.tax > 0:
            total_data.append(["", "", "Tax:", f"{invoice.tax:,.2f}"])
        if invoice.discount > 0:
            total_data.append(["", "", "Discount:", f"-{invoice.discount:,.2f}"])
        total_data.append(["", "", f"TOTAL DUE ({currency}):", f"{invoice.total:,.2f}"])

        total_table = Table(total_data, colWidths=[60 * mm, 20 * mm, 55 * mm, 35 * mm])
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("FONTNAME", (2, -1), (-1, -1), "Helvetica-Bold"),
                    ("LINEABOVE", (2, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(total_table)

        if invoice.notes:
            elements.append(Spacer(1, 10 * mm))
            elements.append(Paragraph("Notes:", bold_style))
            elements.append(Paragraph(escape(invoice.notes), normal_style))

        elements.append(Spacer(1, 15 * mm))
        elements.append(Paragraph("Thank you for your business", small_style))

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
