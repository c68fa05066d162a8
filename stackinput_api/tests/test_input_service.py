"""
Tests for InputService.

Unit tests for input service business logic.
"""

import logging

import pytest

from stackinput.errors import CasEvaluationError, NoCorrectAnswerError
from stackinput_api.core.errors import BadParametersError, UnknownInputTypeError
from stackinput_api.models import RenderRequest, ValidateRequest


@pytest.mark.asyncio
async def test_list_input_types(input_service):
    """Test listing registered input types"""
    types = await input_service.list_input_types()
    assert [t.input_type for t in types] == ["dropdown"]


@pytest.mark.asyncio
async def test_render(input_service, dropdown_definition):
    """Test rendering a dropdown"""
    result = await input_service.render("dropdown", RenderRequest(**dropdown_definition))

    assert result.widget is not None
    assert len(result.widget.choices) == 4
    assert result.warnings == []


@pytest.mark.asyncio
async def test_render_collects_warnings(input_service):
    """Test authoring warnings are returned, not raised"""
    request = RenderRequest(teacher_answer="[[a,true],[b]]", parameters={"options": "sparkly"})
    result = await input_service.render("dropdown", request)

    assert len(result.warnings) == 2


@pytest.mark.asyncio
async def test_render_checkbox_selection(input_service):
    """Test checkbox contents map back onto numbered fields"""
    request = RenderRequest(
        teacher_answer="[[a,true],[b,true],[c,false]]",
        parameters={"options": "checkbox"},
        contents=["a", "b"],
    )
    result = await input_service.render("dropdown", request)

    assert result.widget.kind == "checkbox"
    assert sorted(result.widget.selected) == ["a", "b"]


@pytest.mark.asyncio
async def test_validate(input_service, dropdown_definition):
    """Test validating a student response"""
    request = ValidateRequest(**dropdown_definition, response={"ans1": "x"})
    result = await input_service.validate("dropdown", request)

    assert result.state.status == "score"
    assert result.state.contents == ["x"]


@pytest.mark.asyncio
async def test_validate_logs_request_context(input_service, dropdown_definition, caplog):
    """Test that validation is logged with the request context"""
    request = ValidateRequest(**dropdown_definition, response={"ans1": "x"})

    with caplog.at_level(logging.INFO, logger="stackinput_api.services.input_service"):
        await input_service.validate("dropdown", request)

    record = next(r for r in caplog.records if r.getMessage() == "Validated response")
    assert record.extra_data == {
        "input_type": "dropdown",
        "name": "ans1",
        "seed": 12345,
        "status": "score",
    }


@pytest.mark.asyncio
async def test_no_correct_answer(input_service, cas_session):
    """Test that nothing is sent to the CAS without a correct answer"""
    request = ValidateRequest(teacher_answer="[[a,false]]", parameters={"options": "latex"}, response={})

    with pytest.raises(NoCorrectAnswerError):
        await input_service.validate("dropdown", request)
    assert cas_session.calls == 0


@pytest.mark.asyncio
async def test_cas_error(input_service, cas_session, dropdown_definition):
    """Test CAS failures propagate"""
    cas_session.errors = "boom"

    with pytest.raises(CasEvaluationError):
        await input_service.render("dropdown", RenderRequest(**dropdown_definition))


@pytest.mark.asyncio
async def test_unknown_type(input_service, dropdown_definition):
    """Test unknown input types are rejected"""
    with pytest.raises(UnknownInputTypeError):
        await input_service.render("matrix", RenderRequest(**dropdown_definition))


@pytest.mark.asyncio
async def test_bad_parameters(input_service):
    """Test unknown parameters are rejected"""
    request = RenderRequest(teacher_answer="[[a,true]]", parameters={"boxWidth": 3})

    with pytest.raises(BadParametersError):
        await input_service.render("dropdown", request)
