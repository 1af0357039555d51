from __future__ import annotations

import json
from pathlib import Path

import pytest

from gendoc.config import GendocConfig
from gendoc.exceptions import EmptyTocError
from gendoc.session import Session
from gendoc.writers import EventWriter

PNG_BYTES = b"\x89PNG\r\n\x1a\n-not-a-real-image-"


def errors(messages: list[str]) -> list[str]:
    return [message for message in messages if message.startswith("gendoc error")]


def test_forward_reference_is_resolved_by_later_heading(parse):
    session = parse("<h1>Intro</h1><p>See <a>Setup</a>.</p>\n<h2>Setup</h2>")
    session.finish()

    assert 'href="#setup"' in session.writer.body
    assert "@GENDOC:" not in session.writer.body
    assert session.error_count == 0


def test_forward_reference_resolved_through_heading_name(parse):
    session = parse("<h1>Intro</h1><a>Getting Started</a><h2 start>Getting Started</h2>")
    session.finish()

    assert "<a href=\"#start\" onclick=\"c('start')\">Getting Started</a>" in session.writer.body
    assert session.error_count == 0


def test_backward_reference_links_immediately(parse):
    session = parse("<h1>Intro</h1><h2>Setup</h2><a>Setup</a>")
    assert "<a href=\"#setup\" onclick=\"c('setup')\">Setup</a>" in session.writer.body


def test_unresolved_reference_reported_once_per_slug(parse, messages):
    session = parse("<h1>Intro</h1>\n<a>Setup</a>\n<a>setup</a><a>Other</a>")
    session.finish()

    assert errors(messages) == [
        "gendoc error: doc.xml:2: unresolved link: Setup",
        "gendoc error: doc.xml:3: unresolved link: Other",
    ]
    assert session.error_count == 2


def test_link_with_explicit_target(parse):
    session = parse("<h1>Intro</h1><h2>Setup</h2>")
    session.internal_link("the setup", "Setup")
    assert "<a href=\"#setup\" onclick=\"c('setup')\">the setup</a>" in session.writer.body


def test_link_without_usable_id(parse, messages):
    session = parse("<h1>Intro</h1><a>???</a>")
    assert errors(messages) == ["gendoc error: doc.xml:1: no id for link (???)"]
    assert session.toc.forward == {}


def test_duplicate_heading_id(parse, messages):
    session = parse("<h1>Intro</h1><h2>Same</h2><h2>same</h2>")

    assert errors(messages) == ["gendoc error: doc.xml:1: id for heading isn't unique (same)"]
    assert session.toc.title("same") == "Same"
    assert "\n<h2>same</h2>" in session.writer.body


def test_heading_without_usable_id(parse, messages):
    session = parse("<h1>Intro</h1><h2>???</h2>")
    assert errors(messages) == ["gendoc error: doc.xml:1: no id for heading (???)"]
    assert "\n<h2>???</h2>" in session.writer.body


def test_empty_heading_name(parse, messages):
    parse("<h1>  </h1>")
    assert errors(messages) == ["gendoc error: doc.xml:1: empty heading name"]


def test_invalid_heading_level(session, messages):
    session.heading(7, "Too Deep")
    assert errors(messages) == ["gendoc error: :0: invalid heading level"]


def test_unclosed_container_reported_once_per_section(parse, messages):
    session = parse(
        "<h1>First</h1><table><tr><td>x</td></tr>\n"
        "<h1>Second</h1><table><tr><td>y</td></tr></table>"
    )
    session.finish()

    assert errors(messages) == ["gendoc error: doc.xml:2: unclosed table in section First"]
    assert session.error_count == 1


def test_caption_starts_a_section(parse, messages):
    session = parse("<cap>Reference</cap><h1>Intro</h1><b>")
    session.finish()

    assert session.toc.entries["!0"].level == 0
    assert errors(messages) == ["gendoc error: doc.xml:1: unclosed b in section Intro"]


def test_rejected_tags_produce_no_output(parse):
    session = parse("<li>item</li><td>x</td>")
    assert session.writer.body == "itemx"
    assert session.error_count == 4


def test_page_navigation_links(parse):
    session = parse("<h1>One</h1>text<h1>Two</h1>more<h1>Three</h1>end")
    session.finish()
    html = session.writer.body

    assert (
        '<br style="clear:both;"><label class="btn next" accesskey="n" for="_two" title="Two">Next</label></div>'
        in html
    )
    assert '<label class="btn prev" accesskey="p" for="_one" title="One">Previous</label>' in html
    assert '<label class="btn next" accesskey="n" for="_three" title="Three">Next</label></div>' in html
    assert html.endswith(
        'end<br style="clear:both;"><label class="btn prev" accesskey="p" for="_two" title="Two">'
        "Previous</label></div>"
    )
    assert html.count('<div class="page"') == 3
    assert html.count('for="_one" title="Home"') == 3


def test_hello_page(parse):
    session = parse("<hello><h1>Welcome</h1>hi</hello><h1>Intro</h1>x")
    session.finish()
    html = session.writer.body

    assert html.startswith('<div class="page" rel="_">\n<h1>Welcome</h1>hi')
    assert "welcome" not in session.toc
    assert '<label class="btn next" accesskey="n" for="_intro" title="Intro">Next</label>' in html
    assert '<label class="home" for="_" title="Home">' in html
    assert html.endswith('x<br style="clear:both;"><label class="btn prev" accesskey="p" for="_">Previous</label></div>')
    assert session.hello_used


def test_doc_block_sets_labels(parse):
    session = parse(
        "<doc>\n  <title>My Doc</title>\n  <theme>style.css</theme>\n  <next>Weiter</next>\n</doc>",
        filename="docs/manual.xml",
    )

    assert session.labels["title"] == "My Doc"
    assert session.labels["next"] == "Weiter"
    assert session.labels["theme"] == str(Path("docs/style.css"))
    assert session.position.line == 5


def test_include_restores_position(tmp_path, session, messages):
    main = tmp_path / "main.xml"
    part = tmp_path / "part.xml"
    main.write_text("<h1>Main</h1>\n<include part.xml>\n</i>\n", encoding="utf-8")
    part.write_text("<h2>Part</h2>\n</b>\n", encoding="utf-8")

    session.include(main)

    assert errors(messages) == [
        f"gendoc error: {part}:2: cannot close, bold is not open",
        f"gendoc error: {main}:3: cannot close, italic is not open",
    ]
    assert list(session.toc.entries) == ["main", "part"]


def test_include_cycle_is_reported_once(tmp_path, session, messages):
    first = tmp_path / "a.xml"
    second = tmp_path / "b.xml"
    first.write_text("<h1>A</h1>\n<include b.xml>\n", encoding="utf-8")
    second.write_text("<h2>B</h2>\n<include a.xml>\n", encoding="utf-8")

    session.include(first)

    assert errors(messages) == [f"gendoc error: {second}:0: include cycle ({first})"]
    assert list(session.toc.entries) == ["a", "b"]
    assert session.position.filename == ""


def test_include_of_itself(tmp_path, session, messages):
    page = tmp_path / "page.xml"
    page.write_text("<h1>Page</h1>\n<include page.xml>\nafter\n", encoding="utf-8")

    session.include(page)

    assert errors(messages) == [f"gendoc error: {page}:0: include cycle ({page})"]
    assert "after" in session.writer.body


def test_same_file_may_be_included_twice(tmp_path, session, messages):
    (tmp_path / "part.xml").write_text("<h2>Part</h2>\n", encoding="utf-8")
    (tmp_path / "other.xml").write_text("<h2>Other</h2>\n", encoding="utf-8")
    main = tmp_path / "main.xml"
    main.write_text("<h1>Main</h1>\n<include part.xml>\n<include other.xml>\n<include part.xml>\n", encoding="utf-8")

    session.include(main)

    assert not any("include cycle" in message for message in messages)


def test_include_missing_file(tmp_path, session, messages):
    session.include(tmp_path / "missing.xml")
    assert len(errors(messages)) == 1
    assert errors(messages)[0].startswith(f"gendoc error: {tmp_path / 'missing.xml'}:0: unable to read")


def test_include_unknown_format_is_parsed_natively(tmp_path, session, messages):
    notes = tmp_path / "notes.md"
    notes.write_text("<h1>Notes</h1>", encoding="utf-8")

    session.include(notes)

    assert errors(messages) == [
        f"gendoc error: {notes}:1: there is no reader for the 'md' format, parsing it as gendoc markup"
    ]
    assert "notes" in session.toc


def test_include_respects_size_limit(tmp_path, messages):
    session = Session(GendocConfig(max_file_size=4), sink=messages.append)
    big = tmp_path / "big.xml"
    big.write_text("<h1>Too big</h1>", encoding="utf-8")

    session.include(big)

    assert "exceeds the maximum allowed size of 4 bytes" in errors(messages)[0]
    assert len(session.toc) == 0


def test_api_from_python_source(tmp_path, parse, messages):
    (tmp_path / "mod.py").write_text(
        "##\n# Add two numbers.\n# @param a first\n# @param b second\n# @return sum\ndef add(a, b):\n    return a + b\n",
        encoding="utf-8",
    )

    session = parse("<h1>API</h1><api python mod.py>", filename=str(tmp_path / "doc.xml"))
    html = session.writer.body

    assert '<dl><dt><div class="pre">' in html
    assert '<span class="hl_k">def</span> <span class="hl_f">add</span>' in html
    assert "Add two numbers. " in html
    assert "<tr><th>Arguments</th></tr><tr><td>a first</td></tr><tr><td>b second</td></tr>" in html
    assert "<tr><th>Return Value</th></tr><tr><td>sum</td></tr>" in html
    assert html.endswith("</dd></dl><br>")
    assert errors(messages) == []


def test_api_from_c_source(tmp_path, parse):
    (tmp_path / "lib.h").write_text(
        "/** Opens a <handle>.\n * @param path file to open\n */\nint open_file(const char *path);\n",
        encoding="utf-8",
    )

    session = parse("<h1>API</h1><api c lib.h>", filename=str(tmp_path / "doc.xml"))
    html = session.writer.body

    assert "Opens a &lt;handle&gt;. " in html
    assert "<td>path file to open</td>" in html
    assert "Return Value" not in html


def test_api_missing_source(tmp_path, parse, messages):
    parse("<h1>API</h1><api c nothing.h>", filename=str(tmp_path / "doc.xml"))
    assert errors(messages) == [
        f"gendoc error: {tmp_path / 'nothing.h'}:0: unable to read source (No such file or directory)"
    ]


def test_embedded_image(tmp_path, parse):
    (tmp_path / "pic.png").write_bytes(PNG_BYTES)

    session = parse("<imgc pic.png>", filename=str(tmp_path / "doc.xml"))

    assert session.writer.body.startswith(
        '<div class="imgc"><img class="imgc" alt="pic.png" src="data:image/png;base64,'
    )


def test_embedded_image_strips_document_url(tmp_path, parse):
    (tmp_path / "pic.png").write_bytes(PNG_BYTES)

    session = parse(
        "<doc><url>https://docs.example.com/</url></doc><imgl https://docs.example.com/pic.png>",
        filename=str(tmp_path / "doc.xml"),
    )

    assert session.writer.body.startswith('<img class="imgl" alt="pic.png"')
    assert session.error_count == 0


@pytest.mark.parametrize(
    ("name", "reason"),
    [("missing.png", "No such file or directory"), ("notes.txt", "not an image")],
)
def test_unreadable_image(tmp_path, parse, messages, name, reason):
    (tmp_path / "notes.txt").write_text("text", encoding="utf-8")

    parse(f"<imgr {name}>", filename=str(tmp_path / "doc.xml"))

    assert len(errors(messages)) == 1
    assert errors(messages) == [f"gendoc error: {tmp_path / name}:0: unable to read image ({reason})"]


def test_finish_without_headings(parse):
    session = parse("just some text")
    with pytest.raises(EmptyTocError):
        session.finish()


def test_render_html_document(parse):
    session = parse("<doc><title>Manual</title><version>v2</version></doc><h1>Intro</h1><h2>Usage</h2>x")
    session.finish()
    document = session.render()

    assert document.startswith("<!DOCTYPE html>\n<html lang=\"en\">")
    assert "<title>Manual</title>" in document
    assert '<input type="radio" name="page" id="_intro" checked>' in document
    assert '<li rel="intro"><label class="toc" for="_intro">Intro</label>' in document
    assert '<li class="h2"><a href="#usage" onclick="m()">Usage</a></li>' in document
    assert '<div class="version">v2</div>' in document


def test_render_event_document(parse):
    session = Session(writer=EventWriter({}))
    session.parse("<h1>Intro</h1><a>Later</a><h2>Later</h2>")
    session.finish()
    payload = json.loads(session.render())

    assert payload["toc"] == [
        {"id": "intro", "level": 1, "name": "Intro"},
        {"id": "later", "level": 2, "name": "Later"},
    ]
    assert ["internal_link", "Later", "later"] in payload["events"]
    assert payload["events"][-1] == ["page_close"]
    assert payload["errors"] == 0
