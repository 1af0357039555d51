import dataclasses

import pytest

from gendoc.models import EmbeddedImage, ForwardReference, Position, Token, TocEntry, TokenClass


def test_token_class_values_are_css_suffixes():
    assert [kind.value for kind in TokenClass] == ["", "c", "p", "o", "n", "s", "t", "k", "v", "f"]


def test_token_is_mutable():
    token = Token(TokenClass.VALUE, "x")
    token.text += "1"
    token.kind = TokenClass.FUNCTION

    assert token == Token(TokenClass.FUNCTION, "x1")


def test_position_defaults_and_format():
    assert str(Position()) == ":0"
    assert str(Position("docs/manual.xml", 12)) == "docs/manual.xml:12"


def test_toc_entry_is_frozen():
    entry = TocEntry(1, "Intro")
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.name = "Other"


def test_forward_reference_keeps_its_position():
    position = Position("a.xml", 3)
    reference = ForwardReference(position, "Setup")

    assert reference.position == Position("a.xml", 3)
    assert reference.name == "Setup"


def test_embedded_image_custom_values():
    image = EmbeddedImage("image/png", b"\x89PNG")

    assert image.mime == "image/png"
    assert image.data == b"\x89PNG"
