"""
Multi-step (wizard) navigation.

States are the top-level group indices `0..G-1`, plus a terminal Summary state
at index `G` when the form shows a response summary. Navigation is strictly
linear: `next`/`previous` move one step and are no-ops at the ends.

`StepNavigator` is immutable; transitions return a new navigator.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional

from form_schema_engine.schemas.form import FormSchema

STEP_LABELS = {
    "en": "STEP {current} OF {total}",
    "es": "PASO {current} DE {total}",
}


@dataclass(frozen=True)
class StepNavigator:
    group_count: int = 0
    show_summary: bool = False
    current: int = 0

    @classmethod
    def for_schema(cls, schema: FormSchema, current: int = 0) -> "StepNavigator":
        """Derive step counts from the schema; an out-of-range position resets to the first step."""
        if not schema.is_multi_step:
            return cls()
        nav = cls(group_count=len(schema.fields), show_summary=bool(schema.show_response_summary))
        if 0 <= current < nav.total_steps:
            return replace(nav, current=current)
        return nav

    def sync(self, schema: FormSchema) -> "StepNavigator":
        return StepNavigator.for_schema(schema, current=self.current)

    @property
    def is_multi_step(self) -> bool:
        return self.group_count > 0

    @property
    def total_steps(self) -> int:
        if not self.is_multi_step:
            return 0
        return self.group_count + (1 if self.show_summary else 0)

    @property
    def is_summary(self) -> bool:
        return self.is_multi_step and self.show_summary and self.current == self.group_count

    @property
    def is_first(self) -> bool:
        return self.current == 0

    @property
    def is_last(self) -> bool:
        return self.current == self.total_steps - 1

    @property
    def group_index(self) -> Optional[int]:
        """Index of the active group, or None on the Summary step (or outside step mode)."""
        if not self.is_multi_step or self.is_summary:
            return None
        return self.current

    def next(self) -> "StepNavigator":
        if self.current + 1 >= self.total_steps:
            return self
        return replace(self, current=self.current + 1)

    def previous(self) -> "StepNavigator":
        if self.current <= 0:
            return self
        return replace(self, current=self.current - 1)

    def reset(self) -> "StepNavigator":
        return replace(self, current=0)

    def actions(self, *, allow_cancel: bool = False) -> List[str]:
        """
        Footer buttons for the active step, left to right.

        The first step offers `cancel` instead of `previous` (when the host
        allows cancelling); the last step, Summary included, offers `submit`.
        """
        if not self.is_multi_step:
            return []
        out: List[str] = []
        if not self.is_first:
            out.append("previous")
        elif allow_cancel:
            out.append("cancel")
        out.append("submit" if self.is_last else "next")
        return out

    def step_label(self, locale: str = "en") -> str:
        template = STEP_LABELS.get(locale, STEP_LABELS["en"])
        return template.format(current=self.current + 1, total=self.total_steps)
