"""Test closing-brace outdent."""

from __future__ import annotations

import pytest

from focusedit.outdent import auto_outdent, check_outdent, outdent_edit
from focusedit.tokens import Edit


class TestCheckOutdent:
    @pytest.mark.parametrize(
        ("line", "text"),
        [("    ", "}"), ("\t", "}"), ("  ", "  }"), ("    ", "}\n")],
    )
    def test_triggers(self, line, text):
        assert check_outdent(line, text) is True

    @pytest.mark.parametrize(
        ("line", "text"),
        [("", "}"), ("  x", "}"), ("    ", "x"), ("    ", ")"), ("    ", "x}")],
    )
    def test_does_not_trigger(self, line, text):
        assert check_outdent(line, text) is False


class TestAutoOutdent:
    def test_closing_table(self, make_buffer):
        buf = make_buffer("let table = {", "    key: 1", "    ")
        buf.set_line(2, "    }")
        edit = auto_outdent(buf, 2)
        assert edit == Edit(2, 0, 4, "")
        assert buf.get_line(2) == "}"

    def test_idempotent(self, make_buffer):
        buf = make_buffer("let table = {", "    key: 1", "    }")
        auto_outdent(buf, 2)
        after_once = buf.lines
        assert auto_outdent(buf, 2) is None
        assert buf.lines == after_once

    def test_aligns_with_nested_opener(self, make_buffer):
        buf = make_buffer("let a = {", "    let b = {", "        x", "            }", "}")
        auto_outdent(buf, 3)
        assert buf.get_line(3) == "    }"

    def test_indents_under_opener(self, make_buffer):
        buf = make_buffer("    let a = {", "x", "}")
        auto_outdent(buf, 2)
        assert buf.get_line(2) == "    }"

    def test_keeps_text_after_brace(self, make_buffer):
        buf = make_buffer("let a = {", "  x", "      } |> run")
        auto_outdent(buf, 2)
        assert buf.get_line(2) == "} |> run"

    def test_no_opener(self, make_buffer):
        buf = make_buffer("let x = 1", "    }")
        assert auto_outdent(buf, 1) is None
        assert buf.get_line(1) == "    }"

    def test_opener_inside_string(self, make_buffer):
        buf = make_buffer('let s = "{"', "    }")
        assert auto_outdent(buf, 1) is None

    def test_not_a_brace_line(self, make_buffer):
        buf = make_buffer("let a = {", "    x")
        assert auto_outdent(buf, 1) is None

    def test_brace_inside_open_string(self, make_buffer):
        buf = make_buffer("{", '"text', "    }")
        assert auto_outdent(buf, 2) is None


class TestOutdentEdit:
    def test_does_not_modify_buffer(self, make_buffer):
        buf = make_buffer("{", "    }")
        assert outdent_edit(buf, 1) == Edit(1, 0, 4, "")
        assert buf.get_line(1) == "    }"
