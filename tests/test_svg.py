"""Test module for skipink.svg

The tests are run using pytest.
"""

from skipink.area import Area
from skipink.decoration import DecorationBand
from skipink.outline import Outline
from skipink.svg import SvgDebugPage


def test_layers_and_fill_rule():
    """Outlines, areas and decorations land in their layers, filled non-zero."""
    page = SvgDebugPage(100.0, 50.0)
    page.add_outline(Outline.from_rect(10.0, 10.0, 20.0, 20.0))
    page.add_area(Area.from_rect(5.0, 5.0, 30.0, 30.0))
    page.add_decoration([DecorationBand(0.0, 40.0, 100.0, 2.0)])
    text = page.tostring()
    for layer in ("glyphs", "offsets", "decorations"):
        assert f'id="{layer}"' in text
    assert 'fill-rule="nonzero"' in text
    assert "M 10 10 L 30 10 L 30 30 L 10 30 Z" in text
    assert len(page.decoration_layer.elements) == 1


def test_empty_shapes_are_skipped():
    """Nothing is added for empty outlines and areas."""
    page = SvgDebugPage(100.0, 50.0)
    page.add_outline(Outline())
    page.add_area(Area())
    assert not page.glyph_layer.elements
    assert not page.offset_layer.elements


def test_save(tmp_path):
    """The page is written as an SVG file."""
    page = SvgDebugPage(100.0, 50.0)
    page.add_outline(Outline.from_rect(10.0, 10.0, 20.0, 20.0))
    filename = tmp_path / "page.svg"
    page.save(str(filename))
    assert filename.read_text(encoding="utf-8").lstrip().startswith("<?xml")
