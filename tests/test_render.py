import xml.etree.ElementTree as ET

import pytest

from qrlive.render import Rect, css_color, rasterize, to_svg, vector_rects
from qrlive.symbol import encode

from conftest import SVG_NS, svg_to_image


@pytest.fixture
def symbol():
    return encode("https://example.com", 'M')


def dark_count(symbol):
    return sum(sum(row) for row in symbol.modules)


def test_one_rect_per_dark_module(symbol):
    rects = vector_rects(symbol)
    assert len(rects) == dark_count(symbol)
    assert all(r.width == 1 and r.height == 1 for r in rects)
    # top-left finder corner sits right after the quiet zone
    assert rects[0] == Rect(4, 4, 1, 1)
    assert min(r.x for r in rects) == 4
    assert max(r.x for r in rects) == symbol.size + 3


def test_quiet_zone_must_be_four_modules(symbol):
    with pytest.raises(ValueError):
        vector_rects(symbol, border=2)
    with pytest.raises(ValueError):
        rasterize(symbol, border=3)


def test_svg_document(symbol):
    markup = to_svg(symbol)
    root = ET.fromstring(markup)
    dim = symbol.size + 8
    assert root.tag == SVG_NS + 'svg'
    assert root.get('viewBox') == f"0 0 {dim} {dim}"
    assert root.get('width') == str(dim)
    assert len(list(root.iter(SVG_NS + 'rect'))) == dark_count(symbol) + 1


def test_svg_colors():
    markup = to_svg(encode("hello"), dark=(0, 0, 128), light='#ffffee')
    assert 'fill="#000080"' in markup
    assert 'fill="#ffffee"' in markup
    assert css_color((255, 0, 16)) == '#ff0010'


def test_raster_size_and_colors(symbol):
    img = rasterize(symbol, size=330)
    assert img.size == (330, 330)
    assert img.mode == 'RGB'
    # quiet zone is light, finder corner is dark; 330 / 33 = 10 px per module
    assert img.getpixel((5, 5)) == (255, 255, 255)
    assert img.getpixel((45, 45)) == (0, 0, 0)


def test_raster_matches_modules_without_antialiasing(symbol):
    scale = 6
    dim = symbol.size + 8
    img = rasterize(symbol, size=dim * scale)
    assert set(img.getdata()) <= {(0, 0, 0), (255, 255, 255)}
    for row in range(symbol.size):
        for col in range(symbol.size):
            pixel = img.getpixel(((col + 4) * scale + 2, (row + 4) * scale + 2))
            assert (pixel == (0, 0, 0)) == symbol.modules[row][col]


def test_raster_custom_colors(symbol):
    img = rasterize(symbol, size=165, dark=(20, 40, 60), light=(250, 240, 230))
    assert img.getpixel((0, 0)) == (250, 240, 230)
    assert img.getpixel((22, 22)) == (20, 40, 60)


def test_raster_too_small(symbol):
    with pytest.raises(ValueError):
        rasterize(symbol, size=20)


def test_vector_and_raster_agree(symbol):
    vector = svg_to_image(to_svg(symbol), scale=6).convert('RGB')
    raster = rasterize(symbol, size=(symbol.size + 8) * 6)
    assert list(vector.getdata()) == list(raster.getdata())


def test_vector_and_raster_decode_to_same_text(symbol, decode):
    assert decode(svg_to_image(to_svg(symbol))) == "https://example.com"
    assert decode(rasterize(symbol)) == "https://example.com"
