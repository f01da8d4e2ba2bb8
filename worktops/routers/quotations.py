"""
Quotation API: live worktop quotation editing.

POST   /api/quotations                        : Open a quotation with one empty worktop
GET    /api/quotations/{id}                   : All worktops, priced, plus grand totals
POST   /api/quotations/{id}/panels            : Add a worktop (it becomes the expanded one)
PATCH  /api/quotations/{id}/panels/{panel_id} : Change one field of a worktop
DELETE /api/quotations/{id}/panels/{panel_id} : Remove a worktop
PUT    /api/quotations/{id}/active            : Expand a worktop, or collapse all
GET    /api/quotations/{id}/preview           : Isometric preview geometry (JSON)
GET    /api/quotations/{id}/preview.svg       : Isometric preview (SVG)
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from pydantic import ValidationError

from ..config import settings
from ..export import fmt2
from ..preview_svg import render_placeholder_svg, render_svg
from ..projection import ProjectionEngine
from ..schemas import ActivePanelUpdate, FieldUpdate, QuotationView
from ..sessions import QuotationSession, SessionRegistry, get_registry

router = APIRouter(prefix="/quotations", tags=["quotations"])

# Stateless; safe to share
projection = ProjectionEngine()

NO_DIMENSIONS = "No dimensions"
NO_SELECTION = "Select a worktop"

# Figures shown to the user with 2 decimals
_DISPLAY_KEYS = (
    "area_m2",
    "auto_perimeter_m",
    "perimeter_m",
    "panel_cost_excl_tax",
    "panel_cost_incl_tax",
    "edge_cost_excl_tax",
    "edge_cost_incl_tax",
    "total_excl_tax",
    "total_incl_tax",
)


def _get_session(quotation_id: str, registry: SessionRegistry) -> QuotationSession:
    session = registry.get(quotation_id)
    if not session:
        raise HTTPException(status_code=404, detail="Quotation not found")
    return session


def _view(session: QuotationSession) -> dict:
    """Full quotation state, recomputed from the current fields."""
    quotation = session.quotation
    panels = quotation.priced_panels()
    for p in panels:
        p["display"] = {key: fmt2(p[key]) for key in _DISPLAY_KEYS}
    totals = quotation.pricing.sum_totals(panels)
    return {
        "quotation_id": session.id,
        "active_panel_id": session.active_panel_id,
        "currency": settings.CURRENCY_SYMBOL,
        "panels": panels,
        "grand_totals": {
            "excl_tax": totals["excl_tax"],
            "incl_tax": totals["incl_tax"],
            "excl_tax_display": fmt2(totals["excl_tax"]),
            "incl_tax_display": fmt2(totals["incl_tax"]),
        },
    }


def _preview_geometry(session: QuotationSession, panel_id: Optional[int]):
    """Returns (geometry or None, placeholder message)."""
    target_id = panel_id if panel_id is not None else session.active_panel_id
    if target_id is None:
        return None, NO_SELECTION
    panel = session.quotation.get_panel(target_id)
    if panel is None:
        raise HTTPException(status_code=404, detail="Worktop not found")
    geo = projection.project(panel)
    return geo, NO_DIMENSIONS


# --- Endpoints ---

@router.post("", response_model=QuotationView)
def open_quotation(registry: SessionRegistry = Depends(get_registry)):
    """Open a new quotation holding one empty, expanded worktop."""
    session = registry.create()
    return _view(session)


@router.get("/{quotation_id}", response_model=QuotationView)
def get_quotation(quotation_id: str, registry: SessionRegistry = Depends(get_registry)):
    return _view(_get_session(quotation_id, registry))


@router.post("/{quotation_id}/panels", response_model=QuotationView)
def add_panel(quotation_id: str, registry: SessionRegistry = Depends(get_registry)):
    """Append an empty worktop and expand it."""
    session = _get_session(quotation_id, registry)
    session.add_panel()
    return _view(session)


@router.patch("/{quotation_id}/panels/{panel_id}", response_model=QuotationView)
def update_panel_field(
    quotation_id: str,
    panel_id: int,
    request: FieldUpdate,
    registry: SessionRegistry = Depends(get_registry),
):
    """
    Change one field. Unknown worktop ids are ignored (the quotation is
    returned unchanged); unknown field names are a 400.
    """
    session = _get_session(quotation_id, registry)
    try:
        session.quotation.update_field(panel_id, request.field, request.value)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid value for {request.field}: {e.errors()[0]['msg']}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _view(session)


@router.delete("/{quotation_id}/panels/{panel_id}", response_model=QuotationView)
def remove_panel(quotation_id: str, panel_id: int, registry: SessionRegistry = Depends(get_registry)):
    """Remove a worktop. Removing an unknown id is not an error."""
    session = _get_session(quotation_id, registry)
    session.remove_panel(panel_id)
    return _view(session)


@router.put("/{quotation_id}/active", response_model=QuotationView)
def set_active_panel(
    quotation_id: str,
    request: ActivePanelUpdate,
    registry: SessionRegistry = Depends(get_registry),
):
    """Expand one worktop (panel_id) or collapse all (panel_id: null)."""
    session = _get_session(quotation_id, registry)
    session.set_active(request.panel_id)
    return _view(session)


@router.get("/{quotation_id}/preview")
def get_preview(
    quotation_id: str,
    panel_id: Optional[int] = Query(None),
    registry: SessionRegistry = Depends(get_registry),
):
    """
    Preview geometry for the expanded worktop (or ?panel_id=).

    When there is nothing to draw: {"renderable": false, "message": ...}.
    """
    session = _get_session(quotation_id, registry)
    geo, message = _preview_geometry(session, panel_id)
    if geo is None:
        return {"renderable": False, "message": message}
    return geo


@router.get("/{quotation_id}/preview.svg")
def get_preview_svg(
    quotation_id: str,
    panel_id: Optional[int] = Query(None),
    registry: SessionRegistry = Depends(get_registry),
):
    session = _get_session(quotation_id, registry)
    geo, message = _preview_geometry(session, panel_id)
    svg = render_svg(geo) if geo is not None else render_placeholder_svg(message)
    return Response(content=svg, media_type="image/svg+xml")
