"""SVG page for inspecting outlines, areas and decoration results."""

from __future__ import annotations

from typing import Iterable, Optional

import svgwrite
import svgwrite.container
import svgwrite.path

from skipink.area import Area
from skipink.decoration import DecorationShape, as_outline
from skipink.outline import Outline


class SvgDebugPage:
    """A page (canvas) described by SVG in device units (y pointing down).

    Contains groups/layers:
        - glyphs      -- input outlines
        - offsets     -- offset areas (outlined only)
        - decorations -- decoration fill shapes
    """

    drawing: svgwrite.Drawing
    glyph_layer: svgwrite.container.Group
    offset_layer: svgwrite.container.Group
    decoration_layer: svgwrite.container.Group

    def __init__(self, width: float, height: float):
        """
        Initialize the page.

        Args:
            width (float): The width of the page in device units.
            height (float): The height of the page in device units.
        """
        # profile="full" to support numbers with more than 4 decimal digits
        self.drawing = svgwrite.Drawing(size=(width, height), viewBox=f"0 0 {width} {height}", profile="full")
        self.glyph_layer = self.drawing.g(id="glyphs")
        self.offset_layer = self.drawing.g(id="offsets")
        self.decoration_layer = self.drawing.g(id="decorations")
        self.drawing.add(self.glyph_layer)
        self.drawing.add(self.offset_layer)
        self.drawing.add(self.decoration_layer)

    def _path(self, outline: Outline, **attribs) -> Optional[svgwrite.path.Path]:
        data = outline.to_svg_path()
        if not data:
            return None
        return self.drawing.path(d=data, fill_rule="nonzero", **attribs)

    def add_outline(self, outline: Outline, fill: str = "black") -> None:
        """Add a filled outline to the glyph layer."""
        path = self._path(outline, fill=fill)
        if path is not None:
            self.glyph_layer.add(path)

    def add_area(self, area: Area, stroke: str = "magenta", stroke_width: float = 0.5) -> None:
        """Add the contours of an area, stroked only, to the offset layer."""
        path = self._path(area.to_outline(), fill="none", stroke=stroke, stroke_width=stroke_width)
        if path is not None:
            self.offset_layer.add(path)

    def add_decoration(self, shapes: Iterable[DecorationShape], fill: str = "blue") -> None:
        """Add decoration fill shapes to the decoration layer."""
        for shape in shapes:
            path = self._path(as_outline(shape), fill=fill)
            if path is not None:
                self.decoration_layer.add(path)

    def tostring(self) -> str:
        """The SVG document as a string."""
        return self.drawing.tostring()

    def save(self, filename: str, pretty: bool = False) -> None:
        """Write the SVG document to _filename_."""
        self.drawing.saveas(filename, pretty=pretty)


def main():
    """Main"""
    # pylint: disable=import-outside-toplevel
    from skipink.common import DecorationStrategy
    from skipink.decoration import DecorationBand, build_decoration
    from skipink.offset import offset

    glyphs = Outline.join(
        Outline.from_rect(100.0, 50.0, 100.0, 120.0),
        Outline(
            [(220.0, 50.0), (250.0, 50.0), (275.0, 110.0), (250.0, 170.0), (220.0, 170.0)],
            ["M", "L", "Q", "L", "Z"],
        ),
    )
    band = DecorationBand(0.0, 140.0, 400.0, 12.0)

    page = SvgDebugPage(400.0, 220.0)
    page.add_outline(glyphs)
    page.add_area(offset(glyphs, band.height))
    page.add_decoration(build_decoration(band, glyphs, DecorationStrategy.OFFSET_MASK))
    page.save("skipink_debug.svg", pretty=True)
    print("Saved skipink_debug.svg")


if __name__ == "__main__":
    main()
