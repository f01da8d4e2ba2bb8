"""
SVG rendering of a ProjectedGeometry (see projection.ProjectionEngine).

Draw order: side faces, bottom, top, inner cut, then the two dimension labels.
"""

SIDE_FILL = "#444444"
BOTTOM_FILL = "#555555"
TOP_FILL = "#666666"
INNER_FILL = "#222222"
EDGE_STROKE = "#888888"
TOP_STROKE = "#AAAAAA"
LABEL_COLOR = "#FFFFFF"

FACE_STROKE_WIDTH = 0.05
LABEL_STROKE_WIDTH = 0.02
LABEL_FONT_SIZE = 0.7


def _points(pts) -> str:
    return " ".join(f"{x:.4f},{y:.4f}" for x, y in pts)


def _polygon(pts, fill, stroke) -> str:
    return (f'<polygon points="{_points(pts)}" fill="{fill}" stroke="{stroke}"'
            f' stroke-width="{FACE_STROKE_WIDTH}"/>')


def _label(label) -> list:
    (x1, y1), (x2, y2) = label["line"]
    ax, ay = label["anchor"]
    lines = [f'<line x1="{x1:.4f}" y1="{y1:.4f}" x2="{x2:.4f}" y2="{y2:.4f}"'
             f' stroke="{LABEL_COLOR}" stroke-width="{LABEL_STROKE_WIDTH}"/>']
    transform = ""
    if label["rotation"]:
        transform = f' transform="rotate({label["rotation"]:.1f} {ax:.4f} {ay:.4f})"'
    lines.append(f'<text x="{ax:.4f}" y="{ay:.4f}" font-size="{LABEL_FONT_SIZE}"'
                 f' fill="{LABEL_COLOR}" text-anchor="middle"{transform}>{label["text"]}</text>')
    return lines


def render_svg(geo: dict) -> str:
    """SVG document for a renderable ProjectedGeometry."""
    vp = geo["viewport"]
    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg"'
        f' viewBox="{vp["x"]:.4f} {vp["y"]:.4f} {vp["width"]:.4f} {vp["height"]:.4f}"'
        f' preserveAspectRatio="xMidYMid meet">'
    ]
    for face in geo["side_faces"]:
        lines.append(_polygon(face, SIDE_FILL, EDGE_STROKE))
    lines.append(_polygon(geo["bottom"], BOTTOM_FILL, EDGE_STROKE))
    lines.append(_polygon(geo["top"], TOP_FILL, TOP_STROKE))
    if geo["inner"]:
        lines.append(_polygon(geo["inner"], INNER_FILL, TOP_STROKE))
    lines.extend(_label(geo["labels"]["length"]))
    lines.extend(_label(geo["labels"]["width"]))
    lines.append("</svg>")
    return "\n".join(lines)


def render_placeholder_svg(message: str) -> str:
    """Stand-in drawing when there is nothing to project."""
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 40">\n'
        f'<text x="100" y="24" font-size="12" fill="#9CA3AF" text-anchor="middle">{message}</text>\n'
        '</svg>'
    )
