from pydantic import BaseModel
from typing import Optional, Union


class FieldUpdate(BaseModel):
    field: str
    value: Union[str, bool, int, float, None] = None


class ActivePanelUpdate(BaseModel):
    panel_id: Optional[int] = None


class GrandTotals(BaseModel):
    excl_tax: float
    incl_tax: float
    excl_tax_display: str
    incl_tax_display: str


class PanelView(BaseModel):
    id: int
    position: int
    label: str
    export_id: str
    fields: dict
    area_m2: float
    auto_perimeter_m: float
    perimeter_m: float
    panel_cost_excl_tax: float
    panel_cost_incl_tax: float
    edge_cost_excl_tax: float
    edge_cost_incl_tax: float
    total_excl_tax: float
    total_incl_tax: float
    has_inner_edging: bool
    inner_edging_priced: bool
    notes: list[str] = []
    display: dict = {}


class QuotationView(BaseModel):
    quotation_id: str
    active_panel_id: Optional[int] = None
    currency: str
    panels: list[PanelView] = []
    grand_totals: GrandTotals
