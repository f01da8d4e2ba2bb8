"""
Projection Engine: isometric preview geometry for one panel.

The panel is modeled as a slab: top face at z=0, bottom face at z=-THICKNESS,
optional cut-out centered on the top face. Every 3D corner is mapped to 2D
screen coordinates with a fixed isometric transform. The output is plain
coordinate data; drawing it is left to a renderer (see preview_svg).

Corner order is the same on every face:
    0: (0, 0)   1: (L, 0)   2: (L, W)   3: (0, W)
so side face i joins top[i], top[(i+1) % 4], bottom[(i+1) % 4], bottom[i].
"""

import math

from . import geometry
from .models import PanelSpec
from .units import finite

COS_30 = math.sqrt(3) / 2


def iso_x(x: float, y: float, z: float = 0.0) -> float:
    return (x - y) * COS_30


def iso_y(x: float, y: float, z: float = 0.0) -> float:
    return (x + y) * 0.5 - z


def project_point(x: float, y: float, z: float = 0.0) -> tuple:
    """Screen position of a 3D point. Coordinates that overflow read as 0."""
    return (finite(iso_x(x, y, z)), finite(iso_y(x, y, z)))


def rectangle_corners(x0: float, y0: float, length: float, width: float, z: float = 0.0) -> list:
    """The four corners of an axis-aligned rectangle, in face order."""
    return [
        (x0, y0, z),
        (x0 + length, y0, z),
        (x0 + length, y0 + width, z),
        (x0, y0 + width, z),
    ]


def _cm_text(value: float) -> str:
    """200.0 -> '200 cm', 62.5 -> '62.5 cm'."""
    if float(value).is_integer():
        return f"{int(value)} cm"
    return f"{value} cm"


def _readable_angle(dx: float, dy: float) -> float:
    """Screen angle of an edge in degrees, flipped into (-90, 90] so text is never upside down."""
    angle = math.degrees(math.atan2(dy, dx))
    if angle > 90:
        angle -= 180
    elif angle <= -90:
        angle += 180
    return angle


class ProjectionEngine:
    """Builds ProjectedGeometry dicts for the preview collaborator."""

    # Display units, not priced
    THICKNESS = 2.0
    PADDING = 1.0

    # Dimension lines sit this far off the edge they measure
    LABEL_LINE_OFFSET = 0.5
    LENGTH_TEXT_RISE = 0.8

    def project(self, panel: PanelSpec):
        """
        Project a panel for preview.

        Returns None when length or width reads as 0 ("no renderable
        geometry"); the caller shows a placeholder instead.

        A cut-out with only one non-zero dimension is a flat line with
        nothing to draw, so it is left out of `inner` and of the viewport.

        Otherwise returns:
            {
                renderable: True,
                length_cm: float,
                width_cm: float,
                thickness: float,
                top: [(x, y) × 4],
                bottom: [(x, y) × 4],
                inner: [(x, y) × 4] or None,
                side_faces: [[(x, y) × 4] × 4],
                viewport: {min_x, min_y, max_x, max_y, x, y, width, height},
                labels: {length: {...}, width: {...}},
            }
        """
        length, width = geometry.outer_dimensions(panel)
        if not length or not width:
            return None

        top = [project_point(*p) for p in rectangle_corners(0.0, 0.0, length, width, 0.0)]
        bottom = [project_point(*p) for p in rectangle_corners(0.0, 0.0, length, width, -self.THICKNESS)]

        inner = None
        if geometry.has_inner_cut(panel):
            inner_l, inner_w = geometry.inner_dimensions(panel)
            x0 = finite((length - inner_l) / 2)
            y0 = finite((width - inner_w) / 2)
            inner = [project_point(*p) for p in rectangle_corners(x0, y0, inner_l, inner_w, 0.0)]

        side_faces = []
        for i in range(4):
            j = (i + 1) % 4
            side_faces.append([top[i], top[j], bottom[j], bottom[i]])

        return {
            "renderable": True,
            "length_cm": length,
            "width_cm": width,
            "thickness": self.THICKNESS,
            "top": top,
            "bottom": bottom,
            "inner": inner,
            "side_faces": side_faces,
            "viewport": self.viewport(top + bottom + (inner or [])),
            "labels": self._labels(top, length, width),
        }

    def viewport(self, points: list) -> dict:
        """Bounding box of the projected points, padded on every side."""
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)
        pad = self.PADDING
        return {
            "min_x": min_x,
            "min_y": min_y,
            "max_x": max_x,
            "max_y": max_y,
            "x": min_x - pad,
            "y": min_y - pad,
            "width": finite(max_x - min_x + pad * 2),
            "height": finite(max_y - min_y + pad * 2),
        }

    def _labels(self, top: list, length: float, width: float) -> dict:
        off = self.LABEL_LINE_OFFSET

        # Length: along the front top edge (corner 0 -> 1), drawn just above it
        (ax, ay), (bx, by) = top[0], top[1]
        length_label = {
            "text": _cm_text(length),
            "line": [(ax, ay - off), (bx, by - off)],
            "anchor": (ax / 2 + bx / 2, ay / 2 + by / 2 - self.LENGTH_TEXT_RISE),
            "rotation": 0.0,
        }

        # Width: along the right top edge (corner 1 -> 2), drawn just right of it
        (cx, cy), (dx, dy) = top[1], top[2]
        width_label = {
            "text": _cm_text(width),
            "line": [(cx + off, cy), (dx + off, dy)],
            "anchor": (cx / 2 + dx / 2 + off, cy / 2 + dy / 2),
            "rotation": _readable_angle(dx - cx, dy - cy),
        }

        return {"length": length_label, "width": width_label}
