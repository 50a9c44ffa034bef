import random
import xml.etree.ElementTree as ET

import pytest
from PIL import Image, ImageDraw

SVG_NS = '{http://www.w3.org/2000/svg}'


def random_url(rng: random.Random) -> str:
    domains = ['example.com', 'test.org', 'sample.net', 'demo.io']
    paths = ['page', 'article', 'product', 'user', 'item']
    return f"https://{rng.choice(domains)}/{rng.choice(paths)}/{rng.randrange(10000)}"


@pytest.fixture
def urls():
    rng = random.Random(1234)
    return [random_url(rng) for _ in range(3)]


def svg_to_image(markup: str, scale: int = 8) -> Image.Image:
    """Draw the rectangles of an SVG produced by ``to_svg`` onto a bitmap."""
    root = ET.fromstring(markup)
    dim = int(root.get('width'))
    img = Image.new('L', (dim * scale, dim * scale), 255)
    draw = ImageDraw.Draw(img)
    for rect in root.iter(SVG_NS + 'g'):
        for cell in rect.iter(SVG_NS + 'rect'):
            x, y = int(cell.get('x')), int(cell.get('y'))
            w, h = int(cell.get('width')), int(cell.get('height'))
            draw.rectangle([x * scale, y * scale, (x + w) * scale - 1, (y + h) * scale - 1], fill=0)
    return img


@pytest.fixture
def decode():
    """Decode a PIL image with zbar; skipped when the zbar library is missing."""
    pyzbar = pytest.importorskip('pyzbar.pyzbar', exc_type=ImportError)

    def _decode(img: Image.Image) -> str:
        results = pyzbar.decode(img.convert('L'))
        assert results, "no QR code found in image"
        return results[0].data.decode('utf-8')

    return _decode
