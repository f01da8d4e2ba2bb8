"""
Export downloads.

GET /api/quotations/{id}/csv: worktop prices as CSV
GET /api/quotations/{id}/pdf: printable quotation PDF

Both read one snapshot of the quotation at request time.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ..config import settings
from ..export import build_export, export_csv
from ..pdf_generator import generate_quote_pdf
from ..sessions import SessionRegistry, get_registry

router = APIRouter(prefix="/quotations", tags=["exports"])


def _get_quotation(quotation_id: str, registry: SessionRegistry):
    session = registry.get(quotation_id)
    if not session:
        raise HTTPException(status_code=404, detail="Quotation not found")
    return session.quotation


@router.get("/{quotation_id}/export")
def get_export(quotation_id: str, registry: SessionRegistry = Depends(get_registry)):
    """The structured records behind the CSV and PDF."""
    return build_export(_get_quotation(quotation_id, registry))


@router.get("/{quotation_id}/csv")
def download_csv(quotation_id: str, registry: SessionRegistry = Depends(get_registry)):
    export = build_export(_get_quotation(quotation_id, registry))
    return Response(
        content=export_csv(export),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.CSV_FILENAME}"',
        },
    )


@router.get("/{quotation_id}/pdf")
def download_pdf(quotation_id: str, registry: SessionRegistry = Depends(get_registry)):
    """
    Generate and download the quotation PDF.

    Returns: application/pdf
    """
    export = build_export(_get_quotation(quotation_id, registry))
    pdf_bytes = generate_quote_pdf(
        export,
        company_name=settings.COMPANY_NAME,
        currency=settings.CURRENCY_SYMBOL,
    )
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.PDF_FILENAME}"',
        },
    )
