"""
Quotation Aggregator: the ordered list of panels and its totals.

Holds PanelSpecs in insertion order and nothing else. Costs are recomputed
from the current fields every time they are read. Which panel is expanded in
the UI is the caller's business, not the aggregator's.
"""

import itertools
import logging

from .models import FLAG_FIELDS, INPUT_FIELDS, TEXT_FIELDS, PanelSpec, export_id, position_label
from .pricing_engine import PricingEngine

logger = logging.getLogger(__name__)


class QuotationAggregator:
    """
    One quotation: an ordered collection of panels.

    Panel ids come from a per-quotation counter, so they are unique, strictly
    increasing and never handed out twice, even after removals.
    """

    def __init__(self, pricing: PricingEngine = None):
        self.pricing = pricing or PricingEngine()
        self._panels: list[PanelSpec] = []
        self._next_id = itertools.count(1)

    def __len__(self) -> int:
        return len(self._panels)

    @property
    def panels(self) -> list:
        """Current panels in insertion order (a new list of the live PanelSpecs)."""
        return list(self._panels)

    @property
    def panel_ids(self) -> list:
        return [p.id for p in self._panels]

    def get_panel(self, panel_id: int):
        for panel in self._panels:
            if panel.id == panel_id:
                return panel
        return None

    def add_panel(self) -> int:
        """Append an empty panel and return its id."""
        panel = PanelSpec(id=next(self._next_id))
        self._panels.append(panel)
        logger.debug("Added panel %s (position %d)", panel.id, len(self._panels))
        return panel.id

    def remove_panel(self, panel_id: int) -> bool:
        """Remove a panel. Unknown ids are ignored. Returns True if something was removed."""
        for index, panel in enumerate(self._panels):
            if panel.id == panel_id:
                del self._panels[index]
                logger.debug("Removed panel %s", panel_id)
                return True
        logger.debug("Remove ignored, no panel %s", panel_id)
        return False

    def update_field(self, panel_id: int, field: str, value) -> bool:
        """
        Replace one input field of a panel.

        Unknown panel ids are a no-op (returns False). An unknown field name
        raises ValueError. Text fields store whatever text they are given;
        None stores "". Flag fields accept anything pydantic reads as a bool.
        """
        if field not in INPUT_FIELDS:
            raise ValueError(
                f"Unknown panel field: {field}. Available: {list(INPUT_FIELDS)}"
            )
        panel = self.get_panel(panel_id)
        if panel is None:
            logger.debug("Update ignored, no panel %s", panel_id)
            return False

        if field in TEXT_FIELDS:
            value = "" if value is None else str(value)
        elif field in FLAG_FIELDS and value is None:
            value = False
        setattr(panel, field, value)
        logger.debug("Panel %s: %s = %r", panel_id, field, value)
        return True

    def snapshot(self) -> list:
        """Deep copies of the panels, unaffected by later edits."""
        return [p.model_copy(deep=True) for p in self._panels]

    def priced_panels(self, panels: list = None) -> list:
        """
        Every panel with its position, input fields and PricedPanel figures.

        Prices `panels` when given (e.g. a snapshot), else the live list.
        """
        rows = []
        for index, panel in enumerate(self._panels if panels is None else panels):
            row = {
                "id": panel.id,
                "position": index + 1,
                "label": position_label(index),
                "export_id": export_id(index),
                "fields": panel.inputs(),
            }
            row.update(self.pricing.price_panel(panel))
            rows.append(row)
        return rows

    def grand_totals(self, panels: list = None) -> dict:
        """Sum of every panel's excl. and incl. VAT totals, in insertion order."""
        return self.pricing.sum_totals(self.priced_panels(panels))
