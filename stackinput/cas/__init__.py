"""CAS interface: assignments, sessions and results."""

from .casstring import CasString
from .session import CasResult, CasSession, SympyCasSession

__all__ = [
    "CasString",
    "CasResult",
    "CasSession",
    "SympyCasSession",
]
