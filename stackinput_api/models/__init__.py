"""Request/response models package"""

from .domain import (
    InputRequest,
    RenderRequest,
    ValidateRequest,
    InputTypeInfo,
    RenderResponse,
    ValidateResponse,
)

__all__ = [
    "InputRequest",
    "RenderRequest",
    "ValidateRequest",
    "InputTypeInfo",
    "RenderResponse",
    "ValidateResponse",
]
