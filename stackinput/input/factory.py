"""
Input type registry.

Provides name-based dispatch so a question can declare its inputs by type
name (``"dropdown"``) and have them built with the right class.
"""

from __future__ import annotations

from typing import Any, Optional

from .base import StackInput
from .dropdown import DropdownInput


class InputRegistry:
    """Registry of input types by name."""

    def __init__(self) -> None:
        self._inputs: dict[str, type[StackInput]] = {}

    def register(self, input_class: type[StackInput], input_type: Optional[str] = None) -> None:
        """
        Register an input class.

        Args:
            input_class: StackInput subclass
            input_type: Name to register under (defaults to the class's input_type)

        Raises:
            TypeError: If input_class is not a StackInput subclass
        """
        if not (isinstance(input_class, type) and issubclass(input_class, StackInput)):
            raise TypeError(f"input_class must be a subclass of StackInput, got {input_class}")
        self._inputs[input_type or input_class.input_type] = input_class

    def get(self, input_type: str) -> Optional[type[StackInput]]:
        return self._inputs.get(input_type)

    def get_registered_types(self) -> list[str]:
        return sorted(self._inputs)

    def get_parameters_defaults(self, input_type: str) -> dict[str, Any]:
        input_class = self._require(input_type)
        return input_class.get_parameters_defaults()

    def make_input(
        self,
        input_type: str,
        name: str,
        teacher_answer: str = "",
        parameters: Optional[dict[str, Any]] = None,
        **kwargs: Any,
    ) -> StackInput:
        """
        Create an input of a registered type.

        Args:
            input_type: Registered type name
            name: Field name
            teacher_answer: Model answer
            parameters: Input parameters
            **kwargs: Extra constructor arguments (cas_session, seed, ...)

        Raises:
            ValueError: If the type is not registered or a parameter is unknown
        """
        input_class = self._require(input_type)
        return input_class(name, teacher_answer, parameters, **kwargs)

    def _require(self, input_type: str) -> type[StackInput]:
        input_class = self.get(input_type)
        if input_class is None:
            raise ValueError(f"No input registered for type: {input_type}")
        return input_class


_global_registry = InputRegistry()
_global_registry.register(DropdownInput)


def register_input(input_class: type[StackInput], input_type: Optional[str] = None) -> None:
    """Register an input class in the global registry."""
    _global_registry.register(input_class, input_type)


def get_registry() -> InputRegistry:
    return _global_registry


def make_input(
    input_type: str,
    name: str,
    teacher_answer: str = "",
    parameters: Optional[dict[str, Any]] = None,
    **kwargs: Any,
) -> StackInput:
    """Create an input from the global registry."""
    return _global_registry.make_input(input_type, name, teacher_answer, parameters, **kwargs)
