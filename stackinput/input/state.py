"""
Input state: the outcome of validating a student's response.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InputStatus(str, Enum):
    """Validation status of a response"""
    BLANK = "blank"
    VALID = "valid"
    INVALID = "invalid"
    SCORE = "score"


class InputState(BaseModel):
    """
    State of one input after validation.

    Attributes:
        status: Blank, valid, invalid, or score (valid and ready to grade)
        contents: The submitted values, as a list
        contentsmodified: Contents as passed on to the CAS
        contentsdisplayed: Contents as shown back to the student
        errors: Localised error message (empty when valid)
        note: Machine-readable note for response analysis
    """

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)

    status: InputStatus = InputStatus.BLANK
    contents: list[str] = Field(default_factory=list)
    contentsmodified: str = ""
    contentsdisplayed: str = ""
    errors: str = ""
    note: str = ""

    @field_validator("contents", mode="before")
    @classmethod
    def validate_contents(cls, v: Any) -> list[str]:
        """Accept a bare string as a one-element list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(item) for item in v]

    @property
    def is_blank(self) -> bool:
        return self.status == InputStatus.BLANK.value
