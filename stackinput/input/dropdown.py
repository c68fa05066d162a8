"""
Dropdown input: a list of choices specified by the teacher.

The teacher answer is a CAS list of options, each itself a list
``[value, correct, display]``::

    [[x^2, true, x^{2}], [x^3, false], [x, false]]

``value`` is the CAS expression submitted when the option is chosen,
``correct`` is ``true`` for correct options, and the optional ``display``
overrides what the student sees. The ``options`` parameter is a
comma-separated list of flags:

    shuffle, noshuffle              randomise the option order (default on)
    casstring, latex, latexinline   how options are displayed
    select, radio, checkbox         which widget to use

In ``latex`` and ``latexinline`` mode every display is sent to the CAS in one
batch and replaced by its typeset form.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from html import escape
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..cas.session import CasSession, SympyCasSession
from ..errors import (
    CasEvaluationError,
    DuplicateOptionError,
    MalformedOptionError,
    NoCorrectAnswerError,
    UnrecognizedFlagError,
)
from ..strings import StringProvider, get_strings
from ..utils import list_to_array
from .base import StackInput
from .state import InputState
from .widgets import FormField, SelectionWidget, WidgetKind

logger = logging.getLogger(__name__)


class DisplayMode(str, Enum):
    """How option labels are produced"""
    CASSTRING = "casstring"
    LATEX = "LaTeX"
    LATEXINLINE = "LaTeXinline"


class DropdownConfig(BaseModel):
    """Settings parsed from the options parameter"""

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)

    widget_type: WidgetKind = Field(default=WidgetKind.SELECT, validate_default=True)
    shuffle: bool = True
    display_mode: DisplayMode = Field(default=DisplayMode.CASSTRING, validate_default=True)


class Option(BaseModel):
    """
    One candidate answer.

    Attributes:
        value: CAS expression, unique within the input; the selection key
        display_override: Third field of the authored triple, if any
        display: What the student sees
        correct: Whether choosing this option is correct
    """

    model_config = ConfigDict(validate_assignment=True)

    value: str
    display_override: Optional[str] = None
    display: str = ""
    correct: bool = False

    def model_post_init(self, __context: Any) -> None:
        if not self.display:
            self.display = self.value if self.display_override is None else self.display_override

    @property
    def raw_display(self) -> str:
        """Display text before any wrapping or typesetting."""
        return self.value if self.display_override is None else self.display_override


class OptionsParseResult(BaseModel):
    config: DropdownConfig = Field(default_factory=DropdownConfig)
    warnings: list[str] = Field(default_factory=list)


class AnswerParseResult(BaseModel):
    options: list[Option] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def number_correct(self) -> int:
        return sum(1 for option in self.options if option.correct)


# flag -> (setting, value)
_FLAGS: dict[str, tuple[str, Any]] = {
    "shuffle": ("shuffle", True),
    "noshuffle": ("shuffle", False),
    "casstring": ("display_mode", DisplayMode.CASSTRING),
    "latex": ("display_mode", DisplayMode.LATEX),
    "latexinline": ("display_mode", DisplayMode.LATEXINLINE),
    "select": ("widget_type", WidgetKind.SELECT),
    "radio": ("widget_type", WidgetKind.RADIO),
    "checkbox": ("widget_type", WidgetKind.CHECKBOX),
}


def parse_options(
    raw: str,
    strings: Optional[StringProvider] = None,
    strict: bool = False,
) -> OptionsParseResult:
    """
    Parse the comma-separated options parameter.

    Tokens are trimmed and matched case-insensitively; later tokens win.

    Args:
        raw: Options string, e.g. ``"radio, latex"``
        strings: String provider for warnings
        strict: Raise on unknown tokens instead of collecting warnings

    Returns:
        OptionsParseResult with the config and any warnings

    Raises:
        UnrecognizedFlagError: For an unknown token, when strict
    """
    strings = strings or get_strings()
    result = OptionsParseResult()

    if not raw or raw.strip() == "":
        return result

    settings: dict[str, Any] = {}
    for token in raw.split(","):
        flag = token.strip().lower()
        if not flag:
            continue

        if flag not in _FLAGS:
            message = strings.get_string("ddl_unknown_option", flag=flag)
            if strict:
                raise UnrecognizedFlagError(message, flag)
            logger.debug("Ignoring unknown dropdown option %r", flag)
            result.warnings.append(message)
            continue

        setting, value = _FLAGS[flag]
        settings[setting] = value

    result.config = DropdownConfig(**settings)
    return result


def parse_option(text: str) -> Optional[Option]:
    """
    Parse one ``[value, correct, display]`` triple.

    Outer brackets are optional.

    Returns:
        Option, or None if there are fewer than two fields or the value is
        empty (the empty key is reserved for "not answered")

    Examples:
        >>> parse_option("x^2,true,x^{2}")
        Option(value='x^2', display_override='x^{2}', display='x^{2}', correct=True)
    """
    fields = list_to_array(text, False)
    if len(fields) < 2 or not fields[0].strip():
        return None

    return Option(
        value=fields[0],
        display_override=fields[2] if len(fields) > 2 else None,
        correct=fields[1] == "true",
    )


def parse_teacher_answer(
    teacher_answer: str,
    strings: Optional[StringProvider] = None,
    strict: bool = False,
) -> AnswerParseResult:
    """
    Parse the teacher answer into options.

    Malformed elements and repeated values are skipped with a warning. The
    first occurrence of a value keeps its position and display, and is correct
    if any occurrence is marked correct.

    Args:
        teacher_answer: CAS list of option triples
        strings: String provider for warnings
        strict: Raise instead of collecting warnings

    Returns:
        AnswerParseResult with options in authored order

    Raises:
        MalformedOptionError: For an element with fewer than two fields or an
            empty value, when strict
        DuplicateOptionError: For a repeated value, when strict
    """
    strings = strings or get_strings()
    result = AnswerParseResult()
    seen: dict[str, Option] = {}

    for element in list_to_array(teacher_answer, False):
        option = parse_option(element)

        if option is None:
            message = strings.get_string("ddl_badanswer", option=element)
            if strict:
                raise MalformedOptionError(message, element)
            result.warnings.append(message)
            continue

        if option.value in seen:
            message = strings.get_string("ddl_duplicates", value=option.value)
            if strict:
                raise DuplicateOptionError(message, option.value)
            if option.correct:
                seen[option.value].correct = True
            result.warnings.append(message)
            continue

        seen[option.value] = option
        result.options.append(option)

    return result


class DropdownInput(StackInput):
    """
    Input that is a dropdown list, radio group or checkbox list that the
    teacher has specified.

    The choice set is built once per instance: a given ``seed`` always gives
    the same shuffled order, and render and validation share it.
    """

    input_type = "dropdown"

    def __init__(
        self,
        name: str,
        teacher_answer: str = "",
        parameters: Optional[dict[str, Any]] = None,
        strings: Optional[StringProvider] = None,
        cas_session: Optional[CasSession] = None,
        cas_timeout: Optional[float] = None,
        seed: Optional[int] = None,
        strict: bool = False,
    ):
        """
        Create a dropdown input.

        Args:
            name: Field name
            teacher_answer: List of option triples
            parameters: mustVerify, showValidation, options
            strings: Provider for localised messages
            cas_session: CAS used for LaTeX display (SymPy by default)
            cas_timeout: Seconds allowed for the CAS batch
            seed: Shuffle seed, normally derived from the question attempt
            strict: Raise on malformed options and unknown flags
        """
        super().__init__(name, teacher_answer, parameters, strings)
        self.cas_session = cas_session
        self.cas_timeout = cas_timeout
        self.seed = seed
        self.strict = strict

        self.config = DropdownConfig()
        self.options: list[Option] = []
        self.warnings: list[str] = []
        self.parsed: Optional[AnswerParseResult] = None
        self._choices: Optional[dict[str, str]] = None

    @classmethod
    def get_parameters_defaults(cls) -> dict[str, Any]:
        return {
            "mustVerify": False,
            "showValidation": 0,
            "options": "",
        }

    @property
    def valid(self) -> bool:
        """Whether adaptation produced a render-ready option list."""
        return not self.errors and bool(self.options)

    def adapt_to_model_answer(self, teacher_answer: str) -> None:
        """
        Build the options from the teacher answer.

        Args:
            teacher_answer: List of ``[value, correct, display]`` triples

        Raises:
            NoCorrectAnswerError: If no option is marked correct (no CAS call is made)
            CasEvaluationError: If the CAS fails to typeset the displays
        """
        self.teacher_answer = teacher_answer
        self.errors = []
        self.warnings = []
        self.options = []
        self.reset_choices()

        # (1) Register the options.
        parsed_options = parse_options(self.get_parameter("options", ""), self.strings, self.strict)
        self.config = parsed_options.config
        self.warnings.extend(parsed_options.warnings)

        # (2) Sort out the option records.
        self.parsed = parse_teacher_answer(teacher_answer, self.strings, self.strict)
        self.warnings.extend(self.parsed.warnings)

        if self.parsed.number_correct == 0:
            message = self.strings.get_string("ddl_nocorrectanswersupplied")
            self.errors.append(message)
            logger.info("Dropdown %s has no correct answer", self.name)
            raise NoCorrectAnswerError(message, teacher_answer)

        # (3) Work out what the student sees.
        self.options = self.resolve_display(self.parsed.options)

        logger.debug(
            "Dropdown %s adapted: %d options, display=%s, widget=%s",
            self.name, len(self.options), self.config.display_mode, self.config.widget_type,
        )

    def resolve_display(self, options: list[Option]) -> list[Option]:
        """
        Produce the display of every option for the configured display mode.

        All or nothing: on a CAS error no option is updated.

        Raises:
            CasEvaluationError: If the CAS reports an error or times out
        """
        if self.config.display_mode == DisplayMode.CASSTRING.value:
            return [
                option.model_copy(update={"display": f"<code>{escape(option.raw_display, quote=False)}</code>"})
                for option in options
            ]

        # The display form may differ from the value, so that is what we typeset.
        expressions = {f"val{i}": option.raw_display for i, option in enumerate(options)}

        if self.cas_session is None:
            self.cas_session = SympyCasSession(self.strings)

        result = self.cas_session.evaluate_batch(expressions, timeout=self.cas_timeout)
        if not result.ok:
            self.errors.append(result.errors)
            logger.warning("CAS failed for dropdown %s: %s", self.name, result.errors)
            raise CasEvaluationError(result.errors, expressions)

        if self.config.display_mode == DisplayMode.LATEX.value:
            template = "\\[{}\\]"
        else:
            template = "\\({}\\)"

        return [
            option.model_copy(update={"display": template.format(result.get_display_key(f"val{i}"))})
            for i, option in enumerate(options)
        ]

    def get_choices(self) -> dict[str, str]:
        """
        The choices offered, keyed by CAS value, in display order.

        The first entry is always the "not answered" sentinel with key "".
        Empty when there are no options.
        """
        if not self.options:
            return {}

        if self._choices is None:
            # Shuffle the records before keying them by value.
            values = list(self.options)
            if self.config.shuffle:
                random.Random(self.seed).shuffle(values)

            choices = {"": self.strings.get_string("notanswered")}
            for option in values:
                choices[option.value] = option.display
            self._choices = choices

        return dict(self._choices)

    def reset_choices(self) -> None:
        """Forget the cached choice order."""
        self._choices = None

    def get_correct_values(self) -> list[str]:
        return [option.value for option in self.options if option.correct]

    def get_teacher_answer_display(self) -> str:
        """Displays of the correct options, comma separated."""
        return ", ".join(option.display for option in self.options if option.correct)

    # Responses

    def _checkbox_names(self) -> list[str]:
        return [f"{self.name}_{i}" for i in range(1, len(self.options) + 1)]

    def response_to_contents(self, response: dict[str, str]) -> list[str]:
        if self.config.widget_type == WidgetKind.CHECKBOX.value:
            return [response[key] for key in self._checkbox_names() if response.get(key, "") != ""]
        return super().response_to_contents(response)

    def contents_to_maxima(self, contents: list[str]) -> str:
        if self.config.widget_type == WidgetKind.CHECKBOX.value:
            return "[" + ",".join(contents) + "]"
        return super().contents_to_maxima(contents)

    def contents_display(self, contents: list[str]) -> str:
        choices = self.get_choices()
        return ", ".join(choices.get(value, value) for value in contents)

    def validate_contents(self, contents: list[str]) -> str:
        choices = self.get_choices()
        if self.config.widget_type == WidgetKind.CHECKBOX.value:
            submitted = contents
        else:
            submitted = contents[:1]

        for value in submitted:
            if value not in choices:
                return self.strings.get_string("dropdowngotunrecognisedvalue")
        return ""

    # Rendering

    def build_widget(
        self,
        state: Optional[InputState],
        fieldname: str,
        readonly: bool,
    ) -> Optional[SelectionWidget]:
        """
        Describe the widget to show.

        Returns:
            SelectionWidget, or None when there are no choices
        """
        choices = self.get_choices()
        if not choices:
            return None

        selected = [value for value in (state.contents if state else []) if value in choices]
        return SelectionWidget(
            kind=self.config.widget_type,
            name=fieldname,
            choices=choices,
            selected=selected or [""],
            disabled=readonly,
        )

    def render(self, state: Optional[InputState], fieldname: str, readonly: bool) -> str:
        widget = self.build_widget(state, fieldname, readonly)
        if widget is None:
            return self.strings.get_string("ddl_empty")
        return widget.to_html()

    def testinput_field(self) -> FormField:
        """Field for this input on the teacher's test-input form."""
        choices = self.get_choices()
        if not choices:
            return FormField(kind="static", name=self.name, label=self.name,
                             text=self.strings.get_string("ddl_empty"))
        return FormField(kind="select", name=self.name, label=self.name, choices=choices)
