"""
Pricing Engine: turns panel geometry into money.

Pure math. Area × panel rate, perimeter × edge rate, sum, then VAT.
Nothing is rounded here; rounding to 2 decimals happens at the output
boundary (API views, CSV, PDF) so grand totals sum full-precision figures.

Input: PanelSpec
Output: PricedPanel dict
"""

import logging

from . import geometry
from .models import PanelSpec
from .units import finite

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Prices one panel at a time.

    Every PanelSpec prices to a number, however degenerate its fields:
    missing or garbage dimensions simply price as zero, and so does any
    figure that overflows a float.
    """

    # Panel material: base rate × factor per m² (108.8 per m²)
    PANEL_BASE_RATE = 68
    PANEL_RATE_FACTOR = 1.6

    # Edge finishing per running meter
    EDGE_RATE_PER_M = 3.5

    # Flat VAT, applied to the excl. VAT sum
    VAT_MULTIPLIER = 1.19

    def panel_cost(self, area_m2: float) -> float:
        """Material cost for `area_m2` square meters of panel."""
        return finite(self.PANEL_BASE_RATE * self.PANEL_RATE_FACTOR * area_m2)

    def edge_cost(self, perimeter_m: float) -> float:
        """Edge finishing cost for `perimeter_m` meters of edge."""
        return finite(perimeter_m * self.EDGE_RATE_PER_M)

    def with_vat(self, amount: float) -> float:
        return finite(amount * self.VAT_MULTIPLIER)

    def price_panel(self, panel: PanelSpec) -> dict:
        """
        Price a single panel.

        Returns:
            PricedPanel dict:
            {
                area_m2: float,
                auto_perimeter_m: float,
                perimeter_m: float,
                panel_cost_excl_tax: float,
                panel_cost_incl_tax: float,
                edge_cost_excl_tax: float,
                edge_cost_incl_tax: float,
                total_excl_tax: float,
                total_incl_tax: float,
                has_inner_edging: bool,
                inner_edging_priced: bool,
                notes: list[str],
            }

        has_inner_edging is passed through untouched. There is no rate for
        edging the inner cut yet, so inner_edging_priced is always False and
        a note says so when the flag is set.
        """
        area = geometry.area_m2(panel)
        perimeter = geometry.perimeter_m(panel)

        panel_cost = self.panel_cost(area)
        edge_cost = self.edge_cost(perimeter)
        total_excl = finite(panel_cost + edge_cost)

        notes = []
        if panel.has_inner_edging:
            notes.append("Inner cut edging requested - not included in this price.")
        if panel.use_custom_perimeter:
            notes.append("Edge finishing priced on a custom perimeter.")

        return {
            "area_m2": area,
            "auto_perimeter_m": geometry.auto_perimeter_m(panel),
            "perimeter_m": perimeter,
            "panel_cost_excl_tax": panel_cost,
            "panel_cost_incl_tax": self.with_vat(panel_cost),
            "edge_cost_excl_tax": edge_cost,
            "edge_cost_incl_tax": self.with_vat(edge_cost),
            "total_excl_tax": total_excl,
            "total_incl_tax": self.with_vat(total_excl),
            "has_inner_edging": panel.has_inner_edging,
            "inner_edging_priced": False,
            "notes": notes,
        }

    def sum_totals(self, priced_panels: list) -> dict:
        """
        Grand totals over already priced panels, in the order given.

        Excl. and incl. VAT are summed independently from each panel's
        full-precision totals.
        """
        excl = 0.0
        incl = 0.0
        for priced in priced_panels:
            excl += priced["total_excl_tax"]
            incl += priced["total_incl_tax"]
        return {"excl_tax": finite(excl), "incl_tax": finite(incl)}
