"""
Domain model for a worktop quotation.

PanelSpec holds exactly what the user typed. Nothing derived (area, cost,
preview) is stored on it; those are recomputed from the fields on every read.
"""

from pydantic import BaseModel, ConfigDict

# Raw text fields, parsed with units.to_number when read
TEXT_FIELDS = (
    "length_cm",
    "width_cm",
    "custom_perimeter_m",
    "inner_length_cm",
    "inner_width_cm",
)

# Boolean toggles
FLAG_FIELDS = (
    "use_custom_perimeter",
    "has_inner_edging",
)

INPUT_FIELDS = TEXT_FIELDS + FLAG_FIELDS


class PanelSpec(BaseModel):
    """One priceable worktop, possibly with a centered sink/hob cut-out."""

    model_config = ConfigDict(validate_assignment=True)

    id: int
    length_cm: str = ""
    width_cm: str = ""
    use_custom_perimeter: bool = False
    custom_perimeter_m: str = ""
    inner_length_cm: str = ""
    inner_width_cm: str = ""
    # Recorded but not priced; see PricingEngine.price_panel
    has_inner_edging: bool = False

    def inputs(self) -> dict:
        """The user-editable fields, without the id."""
        return self.model_dump(include=set(INPUT_FIELDS))


def position_label(index: int) -> str:
    """Display label for the panel at 0-based position `index`."""
    return f"Worktop #{index + 1}"


def export_id(index: int) -> str:
    """Export id for the panel at 0-based position `index` (worktop1, worktop2, ...)."""
    return f"worktop{index + 1}"
