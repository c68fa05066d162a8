"""
Pytest configuration and fixtures.

Provides shared fixtures for testing the API.
"""

import pytest
from typing import Optional

from fastapi.testclient import TestClient

from stackinput.cas import CasResult, CasSession
from stackinput_api.main import app
from stackinput_api.services import InputService, get_input_service


class EchoCasSession(CasSession):
    """CAS session typesetting every expression as itself"""

    def __init__(self, errors: str = ""):
        self.errors = errors
        self.calls = 0

    def evaluate_batch(self, expressions: dict[str, str], timeout: Optional[float] = None) -> CasResult:
        self.calls += 1
        if self.errors:
            return CasResult(errors=self.errors)
        return CasResult(display=dict(expressions), values=dict(expressions))


@pytest.fixture
def cas_session() -> EchoCasSession:
    """Echoing CAS session"""
    return EchoCasSession()


@pytest.fixture
def input_service(cas_session) -> InputService:
    """Input service using the echo CAS"""
    return InputService(cas_session=cas_session, cas_timeout=1.0, strict=False)


@pytest.fixture
def client(input_service) -> TestClient:
    """FastAPI test client with the echo CAS injected"""
    app.dependency_overrides[get_input_service] = lambda: input_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def dropdown_definition() -> dict:
    """A dropdown as a teacher would author it"""
    return {
        "name": "ans1",
        "teacher_answer": "[[x^2,true,x^{2}],[x^3,false],[x,false]]",
        "parameters": {"options": "latex"},
        "seed": 12345,
    }
