# infinitune/services/cover.py
"""
Procedural cover art.

A 300x300 SVG: diagonal two-stop gradient, a handful of translucent shapes in
the complementary hue, title and artist centered on top. Returned as a base64
data URI so a record carries its own cover without any file or network I/O.
"""

from __future__ import annotations

import base64
import math
from xml.sax.saxutils import escape

from infinitune.services.randomizer import SeededStream

CANVAS = 300
TITLE_MAX_CHARS = 20
DATA_URI_PREFIX = "data:image/svg+xml;base64,"

_XML_ENTITIES = {"'": "&apos;", '"': "&quot;"}


def escape_xml(text: str) -> str:
    """Escapes the five XML-significant characters."""
    return escape(text, _XML_ENTITIES)


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """h in degrees, s and l in percent. Channels round half up."""
    l /= 100.0
    a = s * min(l, 1.0 - l) / 100.0

    def channel(n: int) -> str:
        k = (n + h / 30.0) % 12
        color = l - a * max(min(k - 3, 9 - k, 1), -1)
        return f"{int(math.floor(255 * color + 0.5)):02x}"

    return f"#{channel(0)}{channel(8)}{channel(4)}"


def _num(v: float) -> str:
    return f"{v:g}"


def _draw_shape(stream: SeededStream, accent_hue: int) -> str:
    is_circle = stream.next_float() > 0.5
    fill = hsl_to_hex(accent_hue, stream.next_int(50, 90), stream.next_int(40, 70))
    opacity = f"{stream.next_float() * 0.3 + 0.1:.2f}"

    if is_circle:
        r = stream.next_int(20, 150)
        cx = stream.next_int(0, CANVAS)
        cy = stream.next_int(0, CANVAS)
        return f'<circle cx="{cx}" cy="{cy}" r="{r}" fill="{fill}" opacity="{opacity}" />'

    w = stream.next_int(50, 200)
    h = stream.next_int(50, 200)
    x = stream.next_int(-50, CANVAS - 50)
    y = stream.next_int(-50, CANVAS - 50)
    rotate = stream.next_int(0, 90)
    return (
        f'<rect x="{x}" y="{y}" width="{w}" height="{h}" fill="{fill}" opacity="{opacity}" '
        f'transform="rotate({rotate} {_num(x + w / 2)} {_num(y + h / 2)})" />'
    )


def render_cover_svg(stream: SeededStream, title: str, artist: str) -> str:
    base_hue = stream.next_int(0, 359)
    bg1 = hsl_to_hex(base_hue, 60, 20)
    bg2 = hsl_to_hex((base_hue + 40) % 360, 70, 30)
    accent_hue = (base_hue + 180) % 360

    shapes_count = stream.next_int(3, 5)
    shapes = "\n    ".join(_draw_shape(stream, accent_hue) for _ in range(shapes_count))

    return f"""<svg width="{CANVAS}" height="{CANVAS}" viewBox="0 0 {CANVAS} {CANVAS}" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <linearGradient id="grad" x1="0%" y1="0%" x2="100%" y2="100%">
      <stop offset="0%" style="stop-color:{bg1};stop-opacity:1" />
      <stop offset="100%" style="stop-color:{bg2};stop-opacity:1" />
    </linearGradient>
    <filter id="shadow">
      <feDropShadow dx="1" dy="1" stdDeviation="2" flood-color="black" flood-opacity="0.5" />
    </filter>
  </defs>
  <rect width="{CANVAS}" height="{CANVAS}" fill="url(#grad)" />
  <g>
    {shapes}
  </g>
  <text x="50%" y="45%" dominant-baseline="middle" text-anchor="middle" fill="white" font-family="system-ui, sans-serif" font-weight="bold" font-size="24" filter="url(#shadow)">{escape_xml(title[:TITLE_MAX_CHARS])}</text>
  <text x="50%" y="60%" dominant-baseline="middle" text-anchor="middle" fill="white" fill-opacity="0.8" font-family="system-ui, sans-serif" font-size="14" filter="url(#shadow)">{escape_xml(artist)}</text>
</svg>"""


def encode_data_uri(svg: str) -> str:
    return DATA_URI_PREFIX + base64.b64encode(svg.encode("utf-8")).decode("ascii")


def generate_cover(stream: SeededStream, title: str, artist: str) -> str:
    """Draws a cover from the stream and returns it as a data URI."""
    return encode_data_uri(render_cover_svg(stream, title, artist))
