"""
Localised user-facing strings.

Input types never hard-code messages; they receive a StringProvider and look
messages up by key. YamlStringTable is the default provider, reading the
``lang/<language>.yaml`` tables shipped with the package.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml

logger = logging.getLogger(__name__)

LANG_DIR = Path(__file__).parent / "lang"


@runtime_checkable
class StringProvider(Protocol):
    """Lookup of localised strings by key."""

    def get_string(self, key: str, /, **params: Any) -> str:
        ...


class _KeepMissing(dict):
    """format_map helper leaving unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class YamlStringTable:
    """
    String table loaded from a YAML file.

    Unknown keys are returned as ``[[key]]`` so a missing translation is
    visible rather than fatal.
    """

    def __init__(self, language: str = "en", path: str | Path | None = None):
        self.language = language
        self.path = Path(path) if path else LANG_DIR / f"{language}.yaml"

        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"String table {self.path} must be a mapping")

        self._strings: dict[str, str] = {str(k): str(v) for k, v in data.items()}

    def __contains__(self, key: str) -> bool:
        return key in self._strings

    def get_string(self, key: str, /, **params: Any) -> str:
        """
        Get a localised string.

        Args:
            key: String identifier
            **params: Values for ``{name}`` placeholders

        Returns:
            The formatted string
        """
        template = self._strings.get(key)
        if template is None:
            logger.warning("Missing string %r for language %r", key, self.language)
            return f"[[{key}]]"
        if not params:
            return template
        return template.format_map(_KeepMissing({k: str(v) for k, v in params.items()}))


@lru_cache()
def get_strings(language: str = "en") -> YamlStringTable:
    """Get cached string table for a language"""
    return YamlStringTable(language)
