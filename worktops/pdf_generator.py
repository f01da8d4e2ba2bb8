"""
PDF Quote Generator.

Renders the export records (see export.build_export) as a printable
quotation. Uses fpdf2 (pure Python, no system dependencies).

Sections:
1. Header (company name, title, date)
2. One block per worktop
3. Grand total
"""

from datetime import datetime

from fpdf import FPDF

from .export import pdf_blocks


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        text
        .replace("\u20ac", "EUR")  # euro sign
        .replace("\u00b2", "2")    # superscript two
        .replace("\u2022", "-")    # bullet
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class QuotePDF(FPDF):
    """Quotation document with a page-numbered footer."""

    def __init__(self, company_name=""):
        super().__init__()
        self.company_name = company_name
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # Title is drawn once on the first page

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        """Render a section header bar."""
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def text_line(self, text, height=8):
        self.cell(0, height, _safe(text), new_x="LMARGIN", new_y="NEXT")


def generate_quote_pdf(export: dict, company_name: str = "", currency: str = "€",
                       created_at: datetime = None) -> bytes:
    """
    Generate a PDF quotation.

    Args:
        export: dict from export.build_export
        company_name: printed above the title; omitted when empty
        currency: currency symbol used in the price lines
        created_at: date printed in the header (defaults to now)

    Returns:
        PDF bytes
    """
    pdf = QuotePDF(company_name=company_name)
    pdf.alias_nb_pages()
    pdf.add_page()

    # ── Header ──
    if company_name:
        pdf.set_font("Helvetica", "B", 20)
        pdf.cell(0, 10, _safe(company_name), new_x="LMARGIN", new_y="NEXT")

    pdf.set_font("Helvetica", "B", 16)
    pdf.text_line("Worktop Quotations", height=10)
    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(100, 100, 100)
    pdf.text_line(f"Date: {(created_at or datetime.now()).strftime('%B %d, %Y')}", height=5)
    pdf.set_text_color(0, 0, 0)
    pdf.ln(4)

    # ── Worktops ──
    pdf.section_header("WORKTOPS")
    pdf.set_font("Helvetica", "", 12)
    blocks = pdf_blocks(export, currency)
    if not blocks:
        pdf.text_line("No worktops in this quotation.")
    for lines in blocks:
        for line in lines:
            pdf.text_line(line)
        pdf.ln(8)

    # ── Grand total ──
    total = export["grand_total"]
    pdf.section_header("GRAND TOTAL")
    pdf.set_font("Helvetica", "", 11)
    pdf.cell(130, 7, _safe(f"Excl. VAT ({currency})"))
    pdf.cell(60, 7, total["excl_tax"], align="R", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(130, 7, _safe(f"Incl. VAT 19% ({currency})"))
    pdf.cell(60, 7, total["incl_tax"], align="R", new_x="LMARGIN", new_y="NEXT")

    return bytes(pdf.output())
