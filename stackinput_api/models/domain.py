"""
Request and response models for the input API.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from stackinput.input import InputState, SelectionWidget


class InputRequest(BaseModel):
    """An input definition as authored by the teacher"""
    name: str = Field("ans1", description="Input (field) name")
    teacher_answer: str = Field(..., description="Model answer, e.g. [[x,true],[y,false]]")
    parameters: Dict[str, Any] = Field(default_factory=dict, description="Input parameters (mustVerify, options, ...)")
    seed: Optional[int] = Field(None, description="Attempt seed; use the same seed to render and validate")

    @field_validator("teacher_answer")
    @classmethod
    def limit_teacher_answer(cls, v):
        """Reject oversized model answers"""
        if len(v) > 10000:
            raise ValueError("Teacher answer too long (max 10000 characters)")
        return v


class RenderRequest(InputRequest):
    """Request to render an input"""
    contents: List[str] = Field(default_factory=list, description="Currently selected values")
    fieldname: Optional[str] = Field(None, description="Form field name (defaults to the input name)")
    readonly: bool = False


class ValidateRequest(InputRequest):
    """Request to validate a student response"""
    response: Dict[str, str] = Field(..., description="Submitted form data by field name")


class InputTypeInfo(BaseModel):
    """A registered input type"""
    input_type: str
    parameters: Dict[str, Any]


class RenderResponse(BaseModel):
    """Rendered input"""
    html: str
    widget: Optional[SelectionWidget] = None
    warnings: List[str] = Field(default_factory=list)
    seed: Optional[int] = None


class ValidateResponse(BaseModel):
    """Validation outcome for a student response"""
    state: InputState
    warnings: List[str] = Field(default_factory=list)
    seed: Optional[int] = None
