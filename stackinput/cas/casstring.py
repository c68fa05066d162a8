"""
Single CAS assignment (``key:expression``) with validation.

Validation is syntactic only: it catches empty expressions, bad keys,
mismatched brackets or quotes and characters that would let an expression
escape its statement. Semantic errors are reported by the CAS session.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..strings import StringProvider, get_strings
from ..utils import balanced_brackets

KEY_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")

# Statement terminators, escapes and dunder names are never allowed outside strings.
FORBIDDEN_CHARS = (";", "$", "\\", "__")


def _outside_strings(text: str) -> str:
    """Return text with the contents of double-quoted strings removed."""
    result = []
    in_string = False
    escaped = False
    for char in text:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
                result.append(char)
            continue
        if char == '"':
            in_string = True
        result.append(char)
    return "".join(result)


def _split_assignment(text: str) -> tuple[str, str] | None:
    """Split ``key:expr`` at the first colon outside strings."""
    in_string = False
    for i, char in enumerate(text):
        if char == '"':
            in_string = not in_string
        elif char == ":" and not in_string:
            return text[:i].strip(), text[i + 1:].strip()
    return None


class CasString(BaseModel):
    """
    A named CAS expression.

    Attributes:
        raw: The assignment as written
        key: Variable name receiving the value
        expression: Right-hand side
        errors: Validation messages (empty when valid)
    """

    model_config = ConfigDict(validate_assignment=True)

    raw: str
    key: str = ""
    expression: str = ""
    errors: list[str] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    @classmethod
    def assignment(
        cls,
        key: str,
        expression: str,
        strings: Optional[StringProvider] = None,
    ) -> CasString:
        """Build and validate ``key:expression``."""
        return cls.parse(f"{key}:{expression}", strings)

    @classmethod
    def parse(cls, raw: str, strings: Optional[StringProvider] = None) -> CasString:
        """
        Parse and validate an assignment.

        Args:
            raw: Text of the form ``key:expression``
            strings: String provider for error messages

        Returns:
            CasString; check ``valid`` / ``errors``
        """
        strings = strings or get_strings()

        parts = _split_assignment(raw)
        if parts is None:
            return cls(raw=raw, errors=[strings.get_string("casstring_noassignment", text=raw)])

        key, expression = parts
        errors: list[str] = []

        if not KEY_PATTERN.match(key):
            errors.append(strings.get_string("casstring_badkey", key=key))

        if not expression:
            errors.append(strings.get_string("casstring_empty", key=key))
        elif _outside_strings(expression).count('"') % 2:
            errors.append(strings.get_string("casstring_unbalancedquotes", text=expression))
        else:
            bare = _outside_strings(expression)
            found = [c for c in FORBIDDEN_CHARS if c in bare]
            if found:
                errors.append(strings.get_string(
                    "casstring_forbiddenchar", chars=" ".join(found)))
            if not balanced_brackets(expression):
                errors.append(strings.get_string(
                    "casstring_unbalancedbrackets", text=expression))

        return cls(raw=raw, key=key, expression=expression, errors=errors)

    def __str__(self) -> str:
        return f"{self.key}:{self.expression}" if self.key else self.raw
