"""Input types and their supporting models."""

from .base import StackInput
from .dropdown import (
    AnswerParseResult,
    DisplayMode,
    DropdownConfig,
    DropdownInput,
    Option,
    OptionsParseResult,
    parse_option,
    parse_options,
    parse_teacher_answer,
)
from .factory import InputRegistry, get_registry, make_input, register_input
from .state import InputState, InputStatus
from .widgets import FormField, SelectionWidget, WidgetKind

__all__ = [
    "StackInput",
    "AnswerParseResult",
    "DisplayMode",
    "DropdownConfig",
    "DropdownInput",
    "Option",
    "OptionsParseResult",
    "parse_option",
    "parse_options",
    "parse_teacher_answer",
    "InputRegistry",
    "get_registry",
    "make_input",
    "register_input",
    "InputState",
    "InputStatus",
    "FormField",
    "SelectionWidget",
    "WidgetKind",
]
