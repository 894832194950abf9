from __future__ import annotations

import base64
import xml.etree.ElementTree as ET

from infinitune.services.cover import (
    DATA_URI_PREFIX,
    escape_xml,
    generate_cover,
    hsl_to_hex,
    render_cover_svg,
)
from infinitune.services.randomizer import SeededStream

SVG_NS = "{http://www.w3.org/2000/svg}"


def _decode(uri: str) -> str:
    assert uri.startswith(DATA_URI_PREFIX)
    return base64.b64decode(uri[len(DATA_URI_PREFIX):]).decode("utf-8")


def test_hsl_to_hex_primaries() -> None:
    assert hsl_to_hex(0, 100, 50) == "#ff0000"
    assert hsl_to_hex(120, 100, 50) == "#00ff00"
    assert hsl_to_hex(240, 100, 50) == "#0000ff"
    assert hsl_to_hex(0, 0, 0) == "#000000"
    assert hsl_to_hex(0, 0, 100) == "#ffffff"


def test_hsl_to_hex_always_valid_hex() -> None:
    for h in range(0, 360, 7):
        for s, l in ((60, 20), (70, 30), (90, 70), (50, 40)):
            out = hsl_to_hex(h, s, l)
            assert len(out) == 7 and out.startswith("#")
            int(out[1:], 16)


def test_escape_xml_all_five() -> None:
    assert escape_xml("<a & 'b' \"c\">") == "&lt;a &amp; &apos;b&apos; &quot;c&quot;&gt;"


def test_cover_is_well_formed_svg() -> None:
    for i in range(20):
        svg = _decode(generate_cover(SeededStream(f"cover_{i}"), "Title", "Artist"))
        root = ET.fromstring(svg)
        assert root.tag == f"{SVG_NS}svg"
        assert root.get("width") == "300"


def test_cover_shape_count() -> None:
    for i in range(30):
        root = ET.fromstring(render_cover_svg(SeededStream(f"shapes_{i}"), "T", "A"))
        group = root.find(f"{SVG_NS}g")
        assert group is not None
        shapes = list(group)
        assert 3 <= len(shapes) <= 5
        for shape in shapes:
            assert shape.tag in (f"{SVG_NS}circle", f"{SVG_NS}rect")
            assert 0.1 <= float(shape.get("opacity")) <= 0.4
            if shape.tag == f"{SVG_NS}rect":
                assert shape.get("transform").startswith("rotate(")


def test_cover_text_is_escaped_and_truncated() -> None:
    title = "<Rock & Roll> 'n' \"Blues\" forever and ever"
    artist = "AC/DC & <Friends>"
    svg = render_cover_svg(SeededStream("escape"), title, artist)

    root = ET.fromstring(svg)
    texts = root.findall(f"{SVG_NS}text")
    assert [t.text for t in texts] == [title[:20], artist]

    text_markup = svg[svg.index("<text"):]
    assert "<Rock" not in text_markup
    assert "& " not in text_markup
    assert "&amp;" in text_markup


def test_cover_is_byte_identical_for_same_stream() -> None:
    a = generate_cover(SeededStream("same"), "Title", "Artist")
    b = generate_cover(SeededStream("same"), "Title", "Artist")
    assert a == b


def test_cover_differs_between_seeds() -> None:
    a = generate_cover(SeededStream("one"), "Title", "Artist")
    b = generate_cover(SeededStream("two"), "Title", "Artist")
    assert a != b


def test_cover_draws_do_not_depend_on_text() -> None:
    s1 = SeededStream("text")
    s2 = SeededStream("text")
    render_cover_svg(s1, "Short", "X")
    render_cover_svg(s2, "A much longer title than twenty characters", "Someone Else")
    assert s1.next_int(0, 10**6) == s2.next_int(0, 10**6)
