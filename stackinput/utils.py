"""
String utilities for Maxima-style lists.

Teacher answers arrive as CAS list literals such as ``[[x^2,true],[x,false]]``.
These helpers split them at top-level commas, respecting nested brackets and
double-quoted strings.
"""

from __future__ import annotations

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """
    Split text at separators that are not nested in brackets or strings.

    Args:
        text: Text to split
        separator: Single-character separator

    Returns:
        List of trimmed items (empty list for blank text)

    Examples:
        >>> split_top_level("a, f(b,c), [d,e]")
        ['a', 'f(b,c)', '[d,e]']
    """
    if not text.strip():
        return []

    items: list[str] = []
    depth = 0
    in_string = False
    escaped = False
    start = 0

    for i, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(0, depth - 1)
        elif char == separator and depth == 0:
            items.append(text[start:i].strip())
            start = i + 1

    items.append(text[start:].strip())
    return items


def has_outer_brackets(text: str, opener: str = "[") -> bool:
    """Check whether the whole of text is one bracketed group."""
    text = text.strip()
    closer = _OPENERS[opener]
    if len(text) < 2 or text[0] != opener or text[-1] != closer:
        return False

    depth = 0
    in_string = False
    escaped = False
    for i, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            # Outer group closed before the end: "[a],[b]"
            if depth == 0 and i != len(text) - 1:
                return False
    return depth == 0


def list_to_array(text: str, recursive: bool = False) -> list:
    """
    Convert a Maxima list literal into a Python list of strings.

    The outer brackets are optional, so ``"a,true"`` and ``"[a,true]"`` give
    the same result.

    Args:
        text: List literal
        recursive: Also convert nested list elements

    Returns:
        List of element strings (nested lists when recursive)
    """
    text = text.strip()
    if has_outer_brackets(text):
        text = text[1:-1]

    items = split_top_level(text)
    if not recursive:
        return items
    return [list_to_array(item, True) if has_outer_brackets(item) else item for item in items]


def balanced_brackets(text: str) -> bool:
    """Check that (), [] and {} are balanced outside of strings."""
    stack: list[str] = []
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
            continue
        if char == '"':
            in_string = True
        elif char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not stack or stack.pop() != char:
                return False
    return not stack and not in_string
