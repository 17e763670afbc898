"""
PDF projection report.

Renders one ProjectionResult with fpdf2 (pure Python, no system dependencies).

Sections, always in this order:
1. Header + key assumptions
2. KPIs
3. Production summary (daily / monthly / annual)
4. Profit & Loss
5. Balance Sheet
6. Warnings (byproduct limit)
"""

from datetime import datetime

from fpdf import FPDF

from .formatters import format_number, format_percentage
from .results import ProjectionResult
from .statements import balance_sheet, kpi_cards, production_summary, profit_and_loss, warnings


def _fmt(amount) -> str:
    """Whole rupees in Indian grouping. Core PDF fonts have no rupee glyph."""
    try:
        value = float(amount)
    except (ValueError, TypeError):
        return "Rs. 0"
    if value < 0:
        return f"Rs. -{format_number(-value)}"
    return f"Rs. {format_number(value)}"


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        text
        .replace("\u20b9", "Rs. ")  # rupee sign
        .replace("\u2022", "-")    # bullet
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class ProjectionPDF(FPDF):
    """Report layout: section bars, two-column statements."""

    def __init__(self, title=""):
        super().__init__()
        self.report_title = title
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # Drawn once on the first page

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def table_header(self, cols):
        """cols: [(label, width), ...]. First column left, the rest right."""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for i, (label, width) in enumerate(cols):
            self.cell(width, 6, label, border="B", fill=True, align="L" if i == 0 else "R")
        self.ln()

    def table_row(self, values, widths, bold=False):
        self.set_font("Helvetica", "B" if bold else "", 8)
        for i, (val, width) in enumerate(zip(values, widths)):
            self.cell(width, 5.5, _safe(str(val)), align="L" if i == 0 else "R")
        self.ln()

    def statement(self, lines):
        """Label / amount rows; headers bold with no amount, subtotals ruled."""
        for line in lines:
            if line["is_header"]:
                self.set_font("Helvetica", "B", 9)
                self.cell(0, 6, line["label"], new_x="LMARGIN", new_y="NEXT")
                continue
            if line["is_subtotal"]:
                self.set_font("Helvetica", "B", 9)
                self.cell(130, 6, line["label"], border="T")
                self.cell(60, 6, _fmt(line["amount"]), border="T", align="R")
            else:
                self.set_font("Helvetica", "", 9)
                self.cell(130, 5.5, f"  {line['label']}")
                self.cell(60, 5.5, _fmt(line["amount"]), align="R")
            self.ln()
        self.ln(4)


def generate_projection_pdf(result: ProjectionResult, company_name: str = "",
                            generated_at: datetime = None) -> bytes:
    """
    Generate the projection report.

    Args:
        result: a successful ProjectionResult
        company_name: printed above the title when set
        generated_at: report timestamp (defaults to now)

    Returns:
        PDF bytes
    """
    if not result.ok:
        raise ValueError(f"Cannot render a failed projection: {result.error}")

    p = result.params
    pdf = ProjectionPDF(title="Poha Mill Financial Projection")
    pdf.alias_nb_pages()
    pdf.add_page()

    # ── SECTION 1: Header ──
    if company_name:
        pdf.set_font("Helvetica", "B", 20)
        pdf.cell(0, 10, _safe(company_name), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 8, pdf.report_title, new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(100, 100, 100)
    stamp = (generated_at or datetime.now()).strftime("%B %d, %Y")
    pdf.cell(0, 5, f"Generated: {stamp}", new_x="LMARGIN", new_y="NEXT")
    pdf.set_text_color(0, 0, 0)
    pdf.ln(2)

    assumptions = [
        f"{format_number(p.processing_rate)} kg/hr x {format_number(p.hours_per_day)} hr/day x "
        f"{format_number(p.days_per_month)} days/month",
        f"Yield {format_percentage(p.primary_yield_pct)}, byproduct sale target "
        f"{format_percentage(p.byproduct_sale_pct)} of paddy",
        f"Paddy {_fmt(p.raw_material_price)}/kg, poha {_fmt(p.primary_price)}/kg, "
        f"byproduct {_fmt(p.byproduct_price)}/kg",
        f"Equity {format_percentage(p.equity_contribution_pct)}, interest "
        f"{format_percentage(p.interest_rate_pct)}, tax {format_percentage(p.tax_rate_pct)}",
    ]
    pdf.set_font("Helvetica", "", 8)
    for line in assumptions:
        pdf.cell(0, 4.5, _safe(f"  - {line}"), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    # ── SECTION 2: KPIs ──
    pdf.section_header("KEY INDICATORS")
    cols = [("Indicator", 70), ("Value", 60), ("Detail", 60)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)
    for card in kpi_cards(result):
        pdf.table_row([card["title"], card["display"], card["subtitle"]], widths)
    pdf.ln(4)

    # ── SECTION 3: Production summary ──
    pdf.section_header("PRODUCTION SUMMARY")
    cols = [("Metric", 70), ("Daily", 40), ("Monthly", 40), ("Annual", 40)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)
    for row in production_summary(result):
        fmt = _fmt if row["unit"] == "currency" else format_number
        pdf.table_row([row["metric"], fmt(row["daily"]), fmt(row["monthly"]), fmt(row["annual"])], widths)
    pdf.ln(4)

    # ── SECTION 4: P&L ──
    pdf.section_header("PROFIT & LOSS (ANNUAL)")
    pdf.statement(profit_and_loss(result))

    # ── SECTION 5: Balance sheet ──
    pdf.section_header("BALANCE SHEET")
    pdf.statement(balance_sheet(result))

    # ── SECTION 6: Warnings ──
    notes = warnings(result)
    if notes:
        pdf.section_header("WARNINGS")
        pdf.set_font("Helvetica", "", 8)
        for note in notes:
            pdf.cell(0, 4.5, _safe(f"  - {note}"), new_x="LMARGIN", new_y="NEXT")

    return bytes(pdf.output())
