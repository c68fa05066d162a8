"""
Shared pytest fixtures for the stackinput tests.

This module provides:
- A recording fake CAS session, so tests can assert whether the CAS was called
- The English string table
- A factory for adapted dropdown inputs
"""

import pytest
from typing import Any, Optional

from stackinput.cas import CasResult, CasSession
from stackinput.input import DropdownInput
from stackinput.strings import get_strings


class FakeCasSession(CasSession):
    """CAS session returning canned results and recording every batch."""

    def __init__(self, display: Optional[dict[str, str]] = None, errors: str = ""):
        self.display = display
        self.errors = errors
        self.calls: list[dict[str, str]] = []
        self.timeouts: list[Optional[float]] = []

    def evaluate_batch(self, expressions: dict[str, str], timeout: Optional[float] = None) -> CasResult:
        self.calls.append(dict(expressions))
        self.timeouts.append(timeout)
        if self.errors:
            return CasResult(errors=self.errors)
        # Echo the expressions back unless told otherwise
        display = self.display if self.display is not None else dict(expressions)
        return CasResult(display=display, values=dict(expressions))


@pytest.fixture
def strings():
    """English string table"""
    return get_strings("en")


@pytest.fixture
def fake_cas():
    """Echoing fake CAS session"""
    return FakeCasSession()


@pytest.fixture
def make_dropdown(fake_cas):
    """Factory for dropdown inputs adapted to a teacher answer."""
    def _make(teacher_answer: str, options: str = "", adapt: bool = True, **kwargs: Any) -> DropdownInput:
        kwargs.setdefault("cas_session", fake_cas)
        ddl = DropdownInput("ans1", teacher_answer, {"options": options}, **kwargs)
        if adapt:
            ddl.adapt_to_model_answer(teacher_answer)
        return ddl
    return _make


@pytest.fixture
def fake_cas_factory():
    """The FakeCasSession class, for tests needing canned results or errors"""
    return FakeCasSession
