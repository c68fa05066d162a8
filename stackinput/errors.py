"""
Exceptions raised by input types.

Warning-level errors (malformed options, duplicate values, unknown flags) are
normally collected as diagnostics and only raised when parsing is strict.
"""

from typing import Any, Dict, Optional


class StackError(Exception):
    """Base exception for input errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(StackError):
    """Raised when teacher-authored input configuration is invalid"""


class NoCorrectAnswerError(ValidationError):
    """Raised when no option in the teacher answer is marked correct"""

    def __init__(self, message: str, teacher_answer: str = ""):
        super().__init__(message, details={"teacher_answer": teacher_answer})


class MalformedOptionError(ValidationError):
    """Raised for an option with fewer than two fields"""

    def __init__(self, message: str, option: str):
        super().__init__(message, details={"option": option})


class DuplicateOptionError(ValidationError):
    """Raised when two options share the same value"""

    def __init__(self, message: str, value: str):
        super().__init__(message, details={"value": value})


class UnrecognizedFlagError(ValidationError):
    """Raised for an unknown token in the options string"""

    def __init__(self, message: str, flag: str):
        super().__init__(message, details={"flag": flag})


class CasEvaluationError(StackError):
    """Raised when the CAS reports an error (or times out)"""

    def __init__(self, message: str, expressions: Optional[Dict[str, str]] = None):
        super().__init__(message, details={"expressions": expressions or {}})
