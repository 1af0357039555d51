from __future__ import annotations

import pytest

from gendoc.diagnostics import Diagnostics
from gendoc.validator import StructuralValidator


@pytest.fixture()
def validator() -> StructuralValidator:
    return StructuralValidator(Diagnostics())


def errors(validator: StructuralValidator) -> list[str]:
    return [message.split(": ", 2)[2] for message in validator.diagnostics.messages]


def test_exclusive_container_cannot_be_reopened(validator):
    assert validator.open("b")
    assert not validator.open("b")
    assert errors(validator) == ["bold is already open"]
    assert validator.depth("b") == 1


def test_nestable_container_counts_depth(validator):
    validator.open("p")
    validator.open("p")
    assert validator.depth("p") == 2
    assert validator.close("p")
    assert validator.close("p")
    assert not validator.close("p")
    assert errors(validator) == ["cannot close, paragraph is not open"]


def test_list_item_needs_a_list(validator):
    assert not validator.open_list_item()
    validator.open("ul")
    assert validator.open_list_item()
    assert validator.close_list_item()
    assert validator.close_list("ul")
    assert errors(validator) == ["cannot add list item, no list is open"]


def test_closing_list_with_open_item(validator):
    validator.open("ol")
    validator.open_list_item()
    assert validator.close_list("ol")
    assert errors(validator) == ["list item is still open"]


def test_nested_lists(validator):
    validator.open("ul")
    validator.open_list_item()
    validator.open("ol")
    validator.open_list_item()
    assert validator.close_list_item()
    assert validator.close_list("ol")
    assert validator.close_list_item()
    assert validator.close_list("ul")
    assert errors(validator) == []


def test_data_list_items(validator):
    assert not validator.open_data_item("dt")
    validator.open("dl")
    assert validator.open_data_item("dt")
    assert validator.close_data_item("dt")
    assert not validator.close_data_item("dd")
    validator.open_data_item("dd")
    validator.close_data_list()
    assert errors(validator) == [
        "cannot add data topic, data list is not open",
        "cannot close, data description is not open",
        "data list item is still open",
    ]


def test_table_cell_needs_an_open_row(validator):
    validator.open("table")
    assert not validator.open_cell("td", "tr", "table")
    assert validator.open_row("tr", "table")
    assert validator.open_cell("th", "tr", "table")
    assert validator.close_cell("th", "tr")
    assert validator.open_cell("td", "tr", "table")
    assert validator.close_row("tr", "table", ("th", "td"))
    assert errors(validator) == [
        "cannot add table cell, table row is not open",
        "table cell is still open",
    ]


def test_row_needs_its_container(validator):
    assert not validator.open_row("gr", "grid")
    assert not validator.close_row("tr", "table", ("th", "td"))
    assert not validator.close_container("grid", "gr")
    assert errors(validator) == [
        "cannot add row, grid is not open",
        "cannot close, table row is not open",
        "cannot close, grid is not open",
    ]


def test_closing_container_with_open_row(validator):
    validator.open("grid")
    validator.open_row("gr", "grid")
    assert validator.close_container("grid", "gr")
    assert errors(validator) == ["grid row is still open"]


def test_check_section_reports_each_leftover_and_resets(validator):
    validator.open("table")
    validator.open("b")
    validator.open("ul")
    validator.close_list("ul")

    validator.check_section("Intro")
    assert errors(validator) == ["unclosed table in section Intro", "unclosed b in section Intro"]
    assert validator.counters == {}

    validator.check_section("Next")
    assert len(errors(validator)) == 2


def test_check_section_without_a_name(validator):
    validator.open("quote")
    validator.check_section("")
    assert errors(validator) == ["unclosed quote in section unknown"]
