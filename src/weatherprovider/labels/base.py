from __future__ import annotations

from typing import Protocol


class LabelResourceError(RuntimeError):
    """Raised when a condition label resource file cannot be loaded."""


class ConditionLabelResolver(Protocol):
    def label_for(self, condition_code: int) -> str:
        """Return the display label for a condition code, or an empty string."""
