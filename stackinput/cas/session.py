"""
CAS sessions.

A CAS session evaluates a batch of named expressions atomically: the caller
gets either every display form or an error string, never a partial result.

CasSession is the interface input types depend on. SympyCasSession is a
reference implementation that reads Maxima-style syntax with SymPy and
typesets results with ``sympy.latex``.
"""

from __future__ import annotations

import json
import logging
import re
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import Any, Optional

import sympy as sp
from pydantic import BaseModel, ConfigDict, Field
from sympy.parsing.sympy_parser import (
    convert_equals_signs,
    convert_xor,
    parse_expr,
    standard_transformations,
)

from ..strings import StringProvider, get_strings
from .casstring import CasString

logger = logging.getLogger(__name__)

# Maxima has no implicit multiplication, so neither do we.
_TRANSFORMATIONS = standard_transformations + (
    convert_xor,
    convert_equals_signs,
)

# Maxima constants and their SymPy spelling
_MAXIMA_CONSTANTS = (
    (re.compile(r"%pi\b"), "pi"),
    (re.compile(r"%e\b"), "E"),
    (re.compile(r"%i\b"), "I"),
)

_STRING_LITERAL = re.compile(r'^"((?:[^"\\]|\\.)*)"$')


class CasResult(BaseModel):
    """
    Outcome of a batch evaluation.

    Attributes:
        display: LaTeX display form per name
        values: Evaluated value (as CAS text) per name
        errors: Error text; empty on success
    """

    model_config = ConfigDict(validate_assignment=True)

    display: dict[str, str] = Field(default_factory=dict)
    values: dict[str, str] = Field(default_factory=dict)
    errors: str = ""

    @property
    def ok(self) -> bool:
        return not self.errors

    def get_display_key(self, key: str) -> str:
        """Display form of one name (empty string if absent)."""
        return self.display.get(key, "")


class CasSession(ABC):
    """Interface to a computer algebra system."""

    @abstractmethod
    def evaluate_batch(
        self,
        expressions: dict[str, str],
        timeout: Optional[float] = None,
    ) -> CasResult:
        """
        Evaluate named expressions as one atomic batch.

        Args:
            expressions: Expression text by name, evaluated in order
            timeout: Maximum time in seconds (None = session default)

        Returns:
            CasResult with every display form, or with errors set and no
            display forms
        """
        pass


class SympyCasSession(CasSession):
    """
    CAS session backed by SymPy.

    Understands the Maxima syntax used in teacher answers: ``^`` powers,
    ``%pi``/``%e``/``%i``, ``true``/``false``, lists, sets, equations and
    double-quoted strings. Earlier names in a batch can be used by later ones.
    Expressions are not simplified, so the display follows what was written.

    Each batch runs in a separate Python process (``stackinput.cas.worker``)
    that is killed when the timeout expires.
    """

    def __init__(
        self,
        strings: Optional[StringProvider] = None,
        default_timeout: float = 10.0,
    ):
        self.strings = strings or get_strings()
        self.default_timeout = default_timeout
        self.command = [sys.executable, "-m", "stackinput.cas.worker"]

    def evaluate_batch(
        self,
        expressions: dict[str, str],
        timeout: Optional[float] = None,
    ) -> CasResult:
        timeout = self.default_timeout if timeout is None else timeout

        casstrings = [
            CasString.assignment(key, expr, self.strings)
            for key, expr in expressions.items()
        ]
        invalid = [e for cs in casstrings for e in cs.errors]
        if invalid:
            logger.info("CAS batch rejected: %d invalid expression(s)", len(invalid))
            return CasResult(errors=" ".join(invalid))

        batch = [[cs.key, cs.expression] for cs in casstrings]

        try:
            # subprocess.run kills the child when the timeout expires
            result = subprocess.run(
                self.command,
                input=json.dumps(batch),
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                "CAS batch timed out after %ss (%d expressions)",
                timeout, len(casstrings),
            )
            return CasResult(errors=self.strings.get_string("ddl_cas_timeout", timeout=timeout))

        lines = result.stdout.strip().split("\n")
        if result.returncode != 0 or not lines[-1].startswith("{"):
            logger.error("CAS worker failed (exit code %s): %s", result.returncode, result.stderr)
            return CasResult(errors=self.strings.get_string("cas_failed", error=result.stderr.strip()))

        return self._to_result(json.loads(lines[-1]))

    def _to_result(self, output: dict[str, Any]) -> CasResult:
        """Turn worker output into a CasResult, all or nothing."""
        failures = output.get("failures", [])
        if failures:
            return CasResult(errors=" ".join(
                self.strings.get_string("casstring_parseerror", text=text, error=error)
                for text, error in failures
            ))
        return CasResult(display=output.get("display", {}), values=output.get("values", {}))

    @classmethod
    def instantiate(cls, batch: list[list[str]]) -> dict[str, Any]:
        """
        Evaluate ``[key, expression]`` pairs in order.

        Returns:
            Dict with ``display`` and ``values`` by key, and ``failures`` as
            ``[expression, error]`` pairs
        """
        local_dict: dict[str, Any] = {
            "pi": sp.pi,
            "E": sp.E,
            "I": sp.I,
            "inf": sp.oo,
            "true": sp.true,
            "false": sp.false,
        }
        display: dict[str, str] = {}
        values: dict[str, str] = {}
        failures: list[list[str]] = []

        for key, expression in batch:
            try:
                value = cls.evaluate(expression, local_dict)
            except Exception as e:
                failures.append([expression, str(e)])
                continue

            local_dict[key] = value
            values[key] = str(value)
            display[key] = cls.to_latex(value)

        return {"display": display, "values": values, "failures": failures}

    @staticmethod
    def evaluate(expression: str, local_dict: Optional[dict[str, Any]] = None) -> Any:
        """
        Parse one Maxima-style expression.

        Args:
            expression: Expression text
            local_dict: Names already bound in the session

        Returns:
            SymPy object, Python container, or str for string literals
        """
        expression = expression.strip()

        match = _STRING_LITERAL.match(expression)
        if match:
            return match.group(1).replace('\\"', '"')

        for pattern, replacement in _MAXIMA_CONSTANTS:
            expression = pattern.sub(replacement, expression)

        return parse_expr(
            expression,
            local_dict=dict(local_dict or {}),
            transformations=_TRANSFORMATIONS,
            evaluate=False,
        )

    @staticmethod
    def to_latex(value: Any) -> str:
        """Typeset a value produced by evaluate()."""
        if isinstance(value, str):
            return r"\text{%s}" % value
        return sp.latex(value)
