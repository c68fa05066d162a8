"""Tests for parsing dropdown options and teacher answers."""

import pytest

from stackinput.errors import DuplicateOptionError, MalformedOptionError, UnrecognizedFlagError
from stackinput.input import (
    DisplayMode,
    DropdownConfig,
    Option,
    WidgetKind,
    parse_option,
    parse_options,
    parse_teacher_answer,
)


class TestParseOptions:
    """The comma-separated options parameter."""

    def test_defaults(self):
        result = parse_options("")
        assert result.config == DropdownConfig()
        assert result.config.widget_type == "select"
        assert result.config.shuffle is True
        assert result.config.display_mode == "casstring"
        assert result.warnings == []

    def test_whitespace_only_gives_defaults(self):
        assert parse_options("   ").config == DropdownConfig()

    @pytest.mark.parametrize("raw, expected", [
        ("latex", DisplayMode.LATEX),
        ("LaTeX", DisplayMode.LATEX),
        (" latexinline ", DisplayMode.LATEXINLINE),
        ("latex, casstring", DisplayMode.CASSTRING),
    ])
    def test_display_mode(self, raw, expected):
        assert parse_options(raw).config.display_mode == expected.value

    @pytest.mark.parametrize("raw, expected", [
        ("radio", WidgetKind.RADIO),
        ("CHECKBOX", WidgetKind.CHECKBOX),
        ("radio, select", WidgetKind.SELECT),
    ])
    def test_widget_type(self, raw, expected):
        assert parse_options(raw).config.widget_type == expected.value

    def test_select_is_matched_per_token(self):
        result = parse_options("checkbox, latex, select")
        assert result.config.widget_type == "select"
        assert result.config.display_mode == "LaTeX"

    def test_shuffle_flags(self):
        assert parse_options("shuffle").config.shuffle is True
        assert parse_options("noshuffle").config.shuffle is False

    def test_empty_tokens_are_ignored(self):
        result = parse_options("radio,,")
        assert result.config.widget_type == "radio"
        assert result.warnings == []

    def test_unknown_flag_is_a_warning(self):
        result = parse_options("radio, sparkly")
        assert result.config.widget_type == "radio"
        assert len(result.warnings) == 1
        assert "sparkly" in result.warnings[0]

    def test_unknown_flag_raises_when_strict(self):
        with pytest.raises(UnrecognizedFlagError) as exc_info:
            parse_options("sparkly", strict=True)
        assert exc_info.value.details == {"flag": "sparkly"}


class TestParseOption:
    """A single [value, correct, display] triple."""

    def test_triple_with_display(self):
        option = parse_option("x^2,true,x^{2}")
        assert option.value == "x^2"
        assert option.raw_display == "x^{2}"
        assert option.display == "x^{2}"
        assert option.correct is True

    def test_bracketed_pair_uses_value_as_display(self):
        option = parse_option("[x^3, false]")
        assert option.value == "x^3"
        assert option.display_override is None
        assert option.display == "x^3"
        assert option.correct is False

    @pytest.mark.parametrize("flag", ["True", "TRUE", "1", "yes", "false", ""])
    def test_only_literal_true_is_correct(self, flag):
        assert parse_option(f"[a,{flag}]").correct is False

    def test_too_few_fields(self):
        assert parse_option("[a]") is None
        assert parse_option("a") is None

    def test_empty_value(self):
        assert parse_option("[,true]") is None
        assert parse_option("[ ,true,shown]") is None

    def test_option_model_defaults_display(self):
        assert Option(value="y").display == "y"
        assert Option(value="y", display_override="why").display == "why"


class TestParseTeacherAnswer:
    """The whole list of options."""

    def test_well_formed_list(self):
        result = parse_teacher_answer("[[x^2,true,x^{2}],[x^3,false],[x,false]]")
        assert [o.value for o in result.options] == ["x^2", "x^3", "x"]
        assert result.number_correct == 1
        assert result.warnings == []

    def test_option_count_matches_well_formed_triples(self):
        result = parse_teacher_answer("[[a,true],[b],[c,false],d]")
        assert [o.value for o in result.options] == ["a", "c"]
        assert len(result.warnings) == 2

    def test_empty_value_is_malformed(self):
        result = parse_teacher_answer("[[,true],[b,false]]")
        assert [o.value for o in result.options] == ["b"]
        assert len(result.warnings) == 1
        assert "malformed" in result.warnings[0]

    def test_empty_value_raises_when_strict(self):
        with pytest.raises(MalformedOptionError):
            parse_teacher_answer("[[,true],[b,false]]", strict=True)

    def test_malformed_raises_when_strict(self):
        with pytest.raises(MalformedOptionError):
            parse_teacher_answer("[[a,true],[b]]", strict=True)

    def test_duplicate_values_keep_first(self):
        result = parse_teacher_answer("[[a,true,first],[a,false,second],[b,false]]")
        assert [o.value for o in result.options] == ["a", "b"]
        assert result.options[0].display == "first"
        assert result.options[0].correct is True
        assert len(result.warnings) == 1

    def test_duplicate_keeps_a_later_correct_flag(self):
        result = parse_teacher_answer("[[a,false,first],[a,true,second],[b,false]]")
        assert [o.value for o in result.options] == ["a", "b"]
        assert result.options[0].display == "first"
        assert result.options[0].correct is True
        assert result.number_correct == 1
        assert len(result.warnings) == 1

    def test_duplicate_raises_when_strict(self):
        with pytest.raises(DuplicateOptionError):
            parse_teacher_answer("[[a,true],[a,false]]", strict=True)

    def test_zero_correct_is_reported_not_raised(self):
        result = parse_teacher_answer("[[a,false],[b,false]]")
        assert result.number_correct == 0
        assert len(result.options) == 2

    def test_nested_expressions(self):
        result = parse_teacher_answer('[[f(x,y),true],[[1,2],false],["a, b",false]]')
        assert [o.value for o in result.options] == ["f(x,y)", "[1,2]", '"a, b"']
