"""
Invoice / estimate PDF renderer using fpdf2.

Draws a finalized document: business header, document title and number,
bill-to block, line items with alternating row shading, and the GST
summary. Reads the frozen document only; nothing is recomputed except the
per-line amount shown in the table.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException

from ledgerbook.config.settings import LedgerSettings, PdfSettings, get_settings
from ledgerbook.core.entities.document import Document
from ledgerbook.core.exceptions import RenderError

# Built-in PDF fonts only cover Latin-1
_PDF_ENCODING = "latin-1"


def _encodable(text: str) -> bool:
    try:
        text.encode(_PDF_ENCODING)
    except UnicodeEncodeError:
        return False
    return True


def _safe_text(text: str) -> str:
    """Replace characters the built-in fonts cannot draw with '?'."""
    return text.encode(_PDF_ENCODING, errors="replace").decode(_PDF_ENCODING)


class IDocumentPdfRenderer(ABC):
    """Interface for document PDF rendering implementations."""

    @abstractmethod
    def render(self, document: Document) -> bytes:
        """Render a document into PDF bytes."""
        ...


class _DocumentPdf(FPDF):
    """FPDF subclass that renders a footer on every page."""

    def __init__(self, pdf_settings: PdfSettings) -> None:
        super().__init__()
        self._pdf_settings = pdf_settings
        self._generation_date = datetime.now().strftime("%Y-%m-%d %H:%M")

    def footer(self) -> None:
        """Render footer with page numbers and generation date."""
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.cell(0, 5, _safe_text(self._pdf_settings.footer_text), align="L")
        self.set_x(-60)
        self.cell(
            0,
            5,
            f"Page {self.page_no()} of {{nb}} | {self._generation_date}",
            align="R",
        )


class Fpdf2DocumentRenderer(IDocumentPdfRenderer):
    """Renders invoice and estimate PDFs using fpdf2."""

    def __init__(
        self,
        pdf_settings: PdfSettings | None = None,
        ledger_settings: LedgerSettings | None = None,
    ) -> None:
        settings = get_settings() if pdf_settings is None or ledger_settings is None else None
        self._settings = pdf_settings or settings.pdf
        self._ledger = ledger_settings or settings.ledger

    @property
    def currency(self) -> str:
        symbol = self._ledger.currency_symbol
        return symbol if _encodable(symbol) else self._settings.currency_fallback

    def money(self, amount: float) -> str:
        """Two decimals with the currency marker, e.g. ``Rs. 1,250.00``."""
        separator = "" if len(self.currency) == 1 else " "
        return f"{self.currency}{separator}{amount:,.2f}"

    def render(self, document: Document) -> bytes:
        """Render a Document into PDF bytes."""
        pdf = _DocumentPdf(self._settings)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=True, margin=20)

        try:
            pdf.add_page()
            self._render_header(pdf, document)
            self._render_separator(pdf)
            self._render_items_table(pdf, document)
            self._render_summary(pdf, document)
            return bytes(pdf.output())
        except FPDFException as e:
            raise RenderError(document.id, str(e)) from e

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _render_header(self, pdf: FPDF, document: Document) -> None:
        """Render business details, title, number, date and bill-to block."""
        pdf.set_font("Helvetica", "B", 14)
        pdf.cell(
            0, 7, _safe_text(self._settings.company_name),
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

        pdf.set_font("Helvetica", "", 8)
        for line in (
            self._settings.company_address,
            f"Tel: {self._settings.company_phone}" if self._settings.company_phone else "",
            f"Email: {self._settings.company_email}" if self._settings.company_email else "",
        ):
            if line:
                pdf.cell(
                    0, 4, _safe_text(line),
                    new_x=XPos.LMARGIN, new_y=YPos.NEXT,
                )

        pdf.ln(4)
        pdf.set_font("Helvetica", "B", 18)
        pdf.cell(
            0, 12, document.type.value.upper(), align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(3)

        pdf.set_font("Helvetica", "", 10)
        pdf.cell(
            0, 6, f"Number: {document.number}",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.cell(
            0, 6, f"Date: {document.date.isoformat()}",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

        pdf.ln(2)
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(0, 6, "Bill To:", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(
            0, 6, _safe_text(document.client_name),
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        if document.client_address:
            pdf.multi_cell(
                0, 5, _safe_text(document.client_address),
                new_x=XPos.LMARGIN, new_y=YPos.NEXT,
            )
        pdf.ln(3)

    @staticmethod
    def _render_separator(pdf: FPDF) -> None:
        """Draw a horizontal line separator between header and body."""
        y = pdf.get_y()
        pdf.set_draw_color(100, 100, 100)
        pdf.line(10, y, 200, y)
        pdf.set_draw_color(0, 0, 0)
        pdf.ln(4)

    def _render_items_table(self, pdf: FPDF, document: Document) -> None:
        """Render items table with borders and alternating row shading."""
        col_widths = [90, 35, 25, 40]
        headers = ["Product", "Price", "Quantity", "Total"]

        pdf.set_font("Helvetica", "B", 9)
        pdf.set_fill_color(70, 70, 70)
        pdf.set_text_color(255, 255, 255)
        for width, header in zip(col_widths, headers):
            pdf.cell(width, 7, header, border=1, fill=True, align="C")
        pdf.ln()
        pdf.set_text_color(0, 0, 0)

        pdf.set_font("Helvetica", "", 9)
        for idx, item in enumerate(document.items, 1):
            fill = idx % 2 == 0
            if fill:
                pdf.set_fill_color(240, 240, 240)

            pdf.cell(col_widths[0], 6, _safe_text(item.name[:50]), border=1, fill=fill)
            pdf.cell(
                col_widths[1], 6, self.money(item.price),
                border=1, align="R", fill=fill,
            )
            pdf.cell(
                col_widths[2], 6, str(item.quantity),
                border=1, align="R", fill=fill,
            )
            pdf.cell(
                col_widths[3], 6, self.money(item.line_total),
                border=1, align="R", fill=fill,
            )
            pdf.ln()

        pdf.ln(3)

    def _render_summary(self, pdf: FPDF, document: Document) -> None:
        """Render subtotal, GST and grand total."""
        rate = f"{self._ledger.gst_rate * 100:g}%"

        pdf.set_font("Helvetica", "", 10)
        pdf.cell(150, 6, "Subtotal:", align="R")
        pdf.cell(
            0, 6, self.money(document.subtotal), align="R",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.cell(150, 6, f"GST ({rate}):", align="R")
        pdf.cell(
            0, 6, self.money(document.gst_amount), align="R",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(150, 8, "Grand Total:", align="R")
        pdf.cell(
            0, 8, self.money(document.total), align="R",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(3)
