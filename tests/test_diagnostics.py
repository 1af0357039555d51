from __future__ import annotations

import pytest

from gendoc.diagnostics import Diagnostics
from gendoc.models import Position


def test_error_is_prefixed_with_position_and_counted():
    received: list[str] = []
    diagnostics = Diagnostics(received.append)
    diagnostics.position = Position("doc.xml", 4)

    diagnostics.error("bold is already open")

    assert received == ["gendoc error: doc.xml:4: bold is already open"]
    assert diagnostics.messages == received
    assert diagnostics.error_count == 1


def test_warning_is_not_counted():
    diagnostics = Diagnostics()
    diagnostics.warning("not gendoc compatible tag '<span>'")

    assert diagnostics.messages == ["gendoc warning: :0: not gendoc compatible tag '<span>'"]
    assert diagnostics.error_count == 0


def test_error_at_explicit_position():
    diagnostics = Diagnostics()
    diagnostics.error("unresolved link: Setup", Position("a.xml", 7))
    assert diagnostics.messages == ["gendoc error: a.xml:7: unresolved link: Setup"]


def test_io_error_uses_line_zero():
    diagnostics = Diagnostics()
    diagnostics.position = Position("doc.xml", 9)
    diagnostics.io_error("missing.xml", "unable to read")
    assert diagnostics.messages == ["gendoc error: missing.xml:0: unable to read"]


def test_snapshot_is_independent_of_later_moves():
    diagnostics = Diagnostics()
    diagnostics.position = Position("doc.xml", 2)
    snapshot = diagnostics.snapshot()
    diagnostics.advance("a\nb\n")

    assert snapshot == Position("doc.xml", 2)
    assert diagnostics.position.line == 4


def test_entering_restores_position():
    diagnostics = Diagnostics()
    diagnostics.position = Position("main.xml", 5)

    with diagnostics.entering("part.xml") as position:
        assert position == Position("part.xml", 1)
        diagnostics.advance("\n\n")
        assert str(diagnostics.position) == "part.xml:3"

    assert diagnostics.position == Position("main.xml", 5)


def test_entering_restores_position_on_error():
    diagnostics = Diagnostics()
    diagnostics.position = Position("main.xml", 5)

    with pytest.raises(RuntimeError):
        with diagnostics.entering("part.xml"):
            raise RuntimeError("boom")

    assert diagnostics.position == Position("main.xml", 5)
