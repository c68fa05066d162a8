"""Tests for CAS assignment parsing and validation."""

import pytest

from stackinput.cas import CasString


class TestCasStringParsing:

    def test_valid_assignment(self):
        cs = CasString.parse("val0:x^2+1")
        assert cs.valid
        assert cs.key == "val0"
        assert cs.expression == "x^2+1"
        assert str(cs) == "val0:x^2+1"

    def test_assignment_helper(self):
        cs = CasString.assignment("val3", "sin(x)")
        assert cs.valid
        assert cs.raw == "val3:sin(x)"

    def test_colon_inside_string_is_not_the_assignment(self):
        cs = CasString.parse('"a:b"')
        assert not cs.valid

    def test_string_value(self):
        cs = CasString.parse('val0:"Hello; world"')
        assert cs.valid
        assert cs.expression == '"Hello; world"'

    def test_missing_assignment(self):
        cs = CasString.parse("x^2")
        assert not cs.valid
        assert "key:expression" in cs.errors[0]


class TestCasStringValidation:

    def test_empty_expression(self):
        cs = CasString.assignment("val0", "")
        assert not cs.valid
        assert "empty" in cs.errors[0]

    @pytest.mark.parametrize("key", ["0val", "va l", "", "_x"])
    def test_bad_key(self, key):
        cs = CasString.assignment(key, "x")
        assert not cs.valid

    @pytest.mark.parametrize("expr", ["x;y", "x$", "a\\b", "__import__(os)"])
    def test_forbidden_characters(self, expr):
        cs = CasString.assignment("val0", expr)
        assert not cs.valid
        assert any("not allowed" in e for e in cs.errors)

    @pytest.mark.parametrize("expr", ["(x+1", "x+1)", "[a,b)"])
    def test_unbalanced_brackets(self, expr):
        cs = CasString.assignment("val0", expr)
        assert not cs.valid
        assert any("bracket" in e for e in cs.errors)

    def test_unbalanced_quotes(self):
        cs = CasString.assignment("val0", '"abc')
        assert not cs.valid
        assert any("quotes" in e for e in cs.errors)
