"""
Selection widget descriptions and their HTML.

The host framework owns real form widgets; these models describe what to
show (kind, field name, ordered choices, selection, disabled flag) and can
produce plain HTML for hosts that just want markup.
"""

from __future__ import annotations

from enum import Enum
from html import escape
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WidgetKind(str, Enum):
    """Kind of selection widget"""
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"


def _attr(value: str) -> str:
    return escape(value, quote=True)


class SelectionWidget(BaseModel):
    """
    A selection widget ready to render.

    Choice labels are trusted markup (they may contain ``<code>`` or math
    delimiters); names and values are escaped.
    """

    model_config = ConfigDict(use_enum_values=True)

    kind: WidgetKind = WidgetKind.SELECT
    name: str
    choices: dict[str, str] = Field(default_factory=dict, description="Value -> label, in display order")
    selected: list[str] = Field(default_factory=list)
    disabled: bool = False

    def to_html(self) -> str:
        if self.kind == WidgetKind.RADIO.value:
            return self._radio_html()
        if self.kind == WidgetKind.CHECKBOX.value:
            return self._checkbox_html()
        return self._select_html()

    def _disabled(self) -> str:
        return ' disabled="disabled"' if self.disabled else ""

    def _select_html(self) -> str:
        options = []
        for value, label in self.choices.items():
            selected = ' selected="selected"' if value in self.selected else ""
            options.append(f'<option value="{_attr(value)}"{selected}>{label}</option>')
        name = _attr(self.name)
        return f'<select id="menu{name}" name="{name}"{self._disabled()}>{"".join(options)}</select>'

    def _radio_html(self) -> str:
        name = _attr(self.name)
        items = []
        for i, (value, label) in enumerate(self.choices.items()):
            field_id = f"{name}_{i}"
            checked = ' checked="checked"' if value in self.selected else ""
            items.append(
                f'<div class="option"><input type="radio" name="{name}" id="{field_id}" '
                f'value="{_attr(value)}"{checked}{self._disabled()} />'
                f'<label for="{field_id}">{label}</label></div>'
            )
        return f'<div class="answer">{"".join(items)}</div>'

    def _checkbox_html(self) -> str:
        name = _attr(self.name)
        items = []
        # Not answering is leaving every box unticked, so no sentinel box.
        choices = [(v, label) for v, label in self.choices.items() if v != ""]
        for i, (value, label) in enumerate(choices, start=1):
            field_name = f"{name}_{i}"
            checked = ' checked="checked"' if value in self.selected else ""
            items.append(
                f'<div class="option"><input type="checkbox" name="{field_name}" id="{field_name}" '
                f'value="{_attr(value)}"{checked}{self._disabled()} />'
                f'<label for="{field_name}">{label}</label></div>'
            )
        return f'<div class="answer">{"".join(items)}</div>'


class FormField(BaseModel):
    """
    Description of a field on the teacher's test-input form.

    ``static`` fields show ``text``; ``select`` fields offer ``choices``.
    """

    kind: str = "select"
    name: str
    label: str = ""
    text: Optional[str] = None
    choices: dict[str, str] = Field(default_factory=dict)
