"""
Base class for input types.

An input type owns one answer field of a question. It is configured from a
teacher answer and a parameter record, renders the field, and turns the
submitted form data into an InputState.

Reference: the host question engine's ``stack_input`` base class.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from ..strings import StringProvider, get_strings
from .state import InputState, InputStatus

logger = logging.getLogger(__name__)


class StackInput(ABC):
    """
    Abstract input type.

    Subclasses must implement:
    - render(): HTML for the field
    - input_type: Class variable naming the type in the registry

    Subclasses usually override:
    - get_parameters_defaults(): Extra parameters they accept
    - adapt_to_model_answer(): Derive configuration from the teacher answer
    - validate_contents(): Type-specific checks on submitted contents
    """

    input_type: ClassVar[str] = "unknown"

    def __init__(
        self,
        name: str,
        teacher_answer: str = "",
        parameters: Optional[dict[str, Any]] = None,
        strings: Optional[StringProvider] = None,
    ):
        """
        Create an input.

        Args:
            name: Field name (also the CAS variable holding the answer)
            teacher_answer: Model answer as CAS text
            parameters: Values overriding get_parameters_defaults()
            strings: Provider for localised messages

        Raises:
            ValueError: If a parameter is not accepted by this input type
        """
        self.name = name
        self.teacher_answer = teacher_answer
        self.strings = strings or get_strings()

        defaults = self.get_parameters_defaults()
        self.parameters: dict[str, Any] = dict(defaults)
        for key, value in (parameters or {}).items():
            if key not in defaults:
                raise ValueError(
                    f"Input type '{self.input_type}' does not accept parameter '{key}'"
                )
            self.parameters[key] = value

        # Configuration errors (teacher-facing)
        self.errors: list[str] = []

    @classmethod
    def get_parameters_defaults(cls) -> dict[str, Any]:
        """
        Return the default values for the parameters.

        Returns:
            Parameter name -> default value
        """
        return {
            "mustVerify": True,
            "showValidation": 1,
        }

    def get_parameter(self, name: str, default: Any = None) -> Any:
        return self.parameters.get(name, default)

    def requires_validation(self) -> bool:
        """Whether a response must be validated before it is graded."""
        return bool(self.get_parameter("mustVerify", False))

    def adapt_to_model_answer(self, teacher_answer: str) -> None:
        """Take the model answer into account (default: just store it)."""
        self.teacher_answer = teacher_answer

    def get_errors(self) -> str:
        return " ".join(self.errors)

    # Responses

    def response_to_contents(self, response: dict[str, str]) -> list[str]:
        """Extract this input's contents from submitted form data."""
        if self.name in response:
            return [response[self.name]]
        return []

    def contents_to_maxima(self, contents: list[str]) -> str:
        """Express contents as CAS text."""
        return contents[0] if contents else ""

    def contents_display(self, contents: list[str]) -> str:
        """Contents as shown back to the student."""
        return self.contents_to_maxima(contents)

    def is_blank_response(self, contents: list[str]) -> bool:
        return all(item.strip() == "" for item in contents)

    def validate_contents(self, contents: list[str]) -> str:
        """
        Type-specific validation.

        Returns:
            Localised error message, or "" if the contents are acceptable
        """
        return ""

    def validate_student_response(self, response: dict[str, str]) -> InputState:
        """
        Validate submitted form data.

        Invalid input is reported in the returned state, not raised: it is
        ordinary student error.

        Args:
            response: Form data (field name -> submitted value)

        Returns:
            InputState for this input
        """
        contents = self.response_to_contents(response)

        if self.is_blank_response(contents):
            return InputState(status=InputStatus.BLANK, contents=contents)

        error = self.validate_contents(contents)
        if error:
            logger.debug("Input %s rejected contents %r", self.name, contents)
            return InputState(
                status=InputStatus.INVALID,
                contents=contents,
                errors=error,
            )

        status = InputStatus.VALID if self.requires_validation() else InputStatus.SCORE
        return InputState(
            status=status,
            contents=contents,
            contentsmodified=self.contents_to_maxima(contents),
            contentsdisplayed=self.contents_display(contents),
        )

    @abstractmethod
    def render(self, state: Optional[InputState], fieldname: str, readonly: bool) -> str:
        """
        Render the input.

        Args:
            state: Current state (None before the first submission)
            fieldname: Form field name
            readonly: Render disabled

        Returns:
            HTML
        """
        pass
