"""
Panel geometry: area and perimeter from a PanelSpec.

Lengths come in as centimeters, area goes out in m², perimeter in m.
"""

from .models import PanelSpec
from .units import cm2_to_m2, cm_to_m, finite, to_number


def area_m2(panel: PanelSpec) -> float:
    """Outer area in m². The inner cut-out is not subtracted."""
    return cm2_to_m2(to_number(panel.length_cm), to_number(panel.width_cm))


def auto_perimeter_m(panel: PanelSpec) -> float:
    """Perimeter derived from the outer length and width, in meters."""
    return cm_to_m(finite(to_number(panel.length_cm) * 2 + to_number(panel.width_cm) * 2))


def perimeter_m(panel: PanelSpec) -> float:
    """
    Perimeter used for edge finishing.

    With use_custom_perimeter set, the custom value wins outright: an empty
    or unparsable custom field prices as 0 m, it never falls back to the
    auto perimeter.
    """
    if panel.use_custom_perimeter:
        return to_number(panel.custom_perimeter_m)
    return auto_perimeter_m(panel)


def outer_dimensions(panel: PanelSpec) -> tuple:
    return to_number(panel.length_cm), to_number(panel.width_cm)


def inner_dimensions(panel: PanelSpec) -> tuple:
    return to_number(panel.inner_length_cm), to_number(panel.inner_width_cm)


def has_inner_cut(panel: PanelSpec) -> bool:
    """True when both cut-out dimensions are non-zero."""
    inner_l, inner_w = inner_dimensions(panel)
    return bool(inner_l and inner_w)
