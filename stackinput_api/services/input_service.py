"""
Input service for business logic.

Builds inputs from teacher definitions, renders them and validates student
responses.
"""

from typing import Optional, List

from stackinput.cas import CasSession, SympyCasSession
from stackinput.input import DropdownInput, InputRegistry, StackInput, get_registry
from stackinput.strings import StringProvider, get_strings

from ..models.domain import (
    InputRequest,
    InputTypeInfo,
    RenderRequest,
    RenderResponse,
    ValidateRequest,
    ValidateResponse,
)
from ..core.config import settings
from ..core.errors import BadParametersError, UnknownInputTypeError
from ..core.logging import get_context_logger, get_logger

logger = get_logger(__name__)


class InputService:
    """
    Service for input operations.

    Each request rebuilds its input from the teacher definition; the attempt
    seed keeps the shuffled order identical between render and validate.
    """

    def __init__(
        self,
        cas_session: Optional[CasSession] = None,
        strings: Optional[StringProvider] = None,
        registry: Optional[InputRegistry] = None,
        cas_timeout: Optional[float] = None,
        strict: Optional[bool] = None,
    ):
        self.strings = strings or get_strings(settings.LANGUAGE)
        self.cas_session = cas_session or SympyCasSession(self.strings, settings.CAS_TIMEOUT)
        self.registry = registry or get_registry()
        self.cas_timeout = settings.CAS_TIMEOUT if cas_timeout is None else cas_timeout
        self.strict = settings.STRICT_PARSING if strict is None else strict

        logger.info("InputService initialized")

    async def list_input_types(self) -> List[InputTypeInfo]:
        """List registered input types with their parameter defaults"""
        return [
            InputTypeInfo(
                input_type=input_type,
                parameters=self.registry.get_parameters_defaults(input_type),
            )
            for input_type in self.registry.get_registered_types()
        ]

    def build_input(self, input_type: str, request: InputRequest) -> StackInput:
        """
        Create an input and adapt it to the teacher answer.

        Raises:
            UnknownInputTypeError: If the type is not registered
            BadParametersError: If a parameter is not accepted
            NoCorrectAnswerError: If no option is marked correct
            CasEvaluationError: If the CAS fails
        """
        if self.registry.get(input_type) is None:
            raise UnknownInputTypeError(input_type)

        kwargs = {"strings": self.strings}
        if issubclass(self.registry.get(input_type), DropdownInput):
            kwargs.update(
                cas_session=self.cas_session,
                cas_timeout=self.cas_timeout,
                seed=request.seed,
                strict=self.strict,
            )

        try:
            input_obj = self.registry.make_input(
                input_type,
                request.name,
                request.teacher_answer,
                request.parameters,
                **kwargs,
            )
        except ValueError as e:
            raise BadParametersError(str(e))

        input_obj.adapt_to_model_answer(request.teacher_answer)
        return input_obj

    async def render(self, input_type: str, request: RenderRequest) -> RenderResponse:
        """Render an input with the given selection"""
        log = get_context_logger(__name__, input_type=input_type, name=request.name, seed=request.seed)
        log.info("Rendering input")

        input_obj = self.build_input(input_type, request)
        fieldname = request.fieldname or request.name
        state = input_obj.validate_student_response(
            self._contents_to_response(input_obj, request.contents)
        )

        widget = None
        if isinstance(input_obj, DropdownInput):
            widget = input_obj.build_widget(state, fieldname, request.readonly)

        return RenderResponse(
            html=input_obj.render(state, fieldname, request.readonly),
            widget=widget,
            warnings=getattr(input_obj, "warnings", []),
            seed=request.seed,
        )

    async def validate(self, input_type: str, request: ValidateRequest) -> ValidateResponse:
        """Validate a student response"""
        input_obj = self.build_input(input_type, request)
        state = input_obj.validate_student_response(request.response)

        log = get_context_logger(__name__, input_type=input_type, name=request.name, seed=request.seed)
        log.info("Validated response", extra_data={"status": state.status})

        return ValidateResponse(
            state=state,
            warnings=getattr(input_obj, "warnings", []),
            seed=request.seed,
        )

    @staticmethod
    def _contents_to_response(input_obj: StackInput, contents: List[str]) -> dict:
        """Form data that would produce the given contents"""
        if isinstance(input_obj, DropdownInput) and input_obj.config.widget_type == "checkbox":
            return {f"{input_obj.name}_{i}": value for i, value in enumerate(contents, start=1)}
        return {input_obj.name: contents[0]} if contents else {}


# Singleton instance
_input_service: Optional[InputService] = None


def get_input_service() -> InputService:
    """Get input service instance (singleton)"""
    global _input_service

    if _input_service is None:
        _input_service = InputService()

    return _input_service
