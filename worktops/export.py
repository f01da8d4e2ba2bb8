"""
Export records: the structured rows behind the CSV and PDF downloads.

Reads a snapshot of the quotation once, so edits made while an export is
being written do not leak into it. Money is formatted to 2 decimals here and
only here; grand totals are summed before formatting.
"""

import csv
import io
import logging

from .quotation import QuotationAggregator

logger = logging.getLogger(__name__)

CSV_HEADER = ["Worktop ID", "Length(cm)", "Width(cm)", "Price excl. VAT(€)", "Price incl. VAT(€)"]


def fmt2(amount: float) -> str:
    """148.756 -> '148.76'"""
    return f"{amount:.2f}"


def build_export(quotation: QuotationAggregator) -> dict:
    """
    Build export records for every panel plus the grand total.

    Returns:
        {
            rows: [{label, position, length_cm, width_cm, area_m2, perimeter_m,
                    inner_length_cm, inner_width_cm, has_inner_edging,
                    total_excl_tax, total_incl_tax}, ...],
            grand_total: {excl_tax, incl_tax},
        }
    Length/width are the raw text as typed; money, area and perimeter are
    2-decimal strings. Consumers should ignore keys they don't know.
    """
    panels = quotation.snapshot()
    priced = quotation.priced_panels(panels)
    totals = quotation.pricing.sum_totals(priced)

    rows = []
    for p in priced:
        fields = p["fields"]
        rows.append({
            "label": p["export_id"],
            "position": p["position"],
            "length_cm": fields["length_cm"],
            "width_cm": fields["width_cm"],
            "area_m2": fmt2(p["area_m2"]),
            "perimeter_m": fmt2(p["perimeter_m"]),
            "inner_length_cm": fields["inner_length_cm"],
            "inner_width_cm": fields["inner_width_cm"],
            "has_inner_edging": p["has_inner_edging"],
            "total_excl_tax": fmt2(p["total_excl_tax"]),
            "total_incl_tax": fmt2(p["total_incl_tax"]),
        })

    logger.info("Export built for %d worktop(s)", len(rows))
    return {
        "rows": rows,
        "grand_total": {
            "excl_tax": fmt2(totals["excl_tax"]),
            "incl_tax": fmt2(totals["incl_tax"]),
        },
    }


def export_csv(export: dict) -> str:
    """CSV text: header, one row per worktop, then a TOTAL row. Lines end with \\n."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in export["rows"]:
        writer.writerow([
            row["label"],
            row["length_cm"],
            row["width_cm"],
            row["total_excl_tax"],
            row["total_incl_tax"],
        ])
    total = export["grand_total"]
    writer.writerow(["TOTAL", "", "", total["excl_tax"], total["incl_tax"]])
    return output.getvalue()


def pdf_blocks(export: dict, currency: str = "€") -> list:
    """PDF body text: one list of lines per worktop."""
    blocks = []
    for row in export["rows"]:
        blocks.append([
            f"Worktop #{row['position']} (ID:{row['label']})",
            f"  Length (cm): {row['length_cm']}",
            f"  Width (cm): {row['width_cm']}",
            f"  Price excl. VAT ({currency}): {row['total_excl_tax']}",
            f"  Price incl. VAT ({currency}): {row['total_incl_tax']}",
        ])
    return blocks
