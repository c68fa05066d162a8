"""stackinput - teacher-specified choice inputs for a question engine.

Subpackages:
- stackinput.input: Input types (dropdown / radio / checkbox)
- stackinput.cas: CAS sessions used to typeset option displays
- stackinput.strings: Localised message tables
"""

__version__ = "0.1.0"

__all__ = []
