"""
Options editor for choice fields (select, multiselect, radio, imageSelect, imageSelectMulti).

Every mutation replaces the whole field (never the option objects in place)
and returns the new field; `editor.field` always holds the latest version.

Editing rules:
- `add` appends `Option {n}` / `option-{n}`.
- `remove` never leaves the list empty.
- `duplicate` inserts `<label> (copy)` / `<value>-copy` right after the source.
- `move` reorders options by id (drag and drop).
- In translation mode (editing locale != default locale) only option label
  translations can change; value edits, add, remove, duplicate and move are
  disabled.
- Duplicate values are advisory: `duplicate_flags()` marks every occurrence.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, List, Optional, Sequence, Union

from form_schema_engine.builder.fields import (
    COPY_SUFFIX,
    get_options,
    is_multi_value,
    options_payload,
    requires_options,
    with_options,
    with_payload,
)
from form_schema_engine.errors import InvalidDefaultValueError
from form_schema_engine.ids import IdFactory, random_ids
from form_schema_engine.localization import is_translation_mode, resolve_option_label, write_option_label
from form_schema_engine.reorder import move_by_id
from form_schema_engine.schemas.fields import AnyLeafField
from form_schema_engine.schemas.options import FieldOption

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def find_duplicate_values(items: Sequence[FieldOption]) -> List[bool]:
    """One flag per option: True when its (non-empty) value appears more than once."""
    counts = Counter(opt.value for opt in items if not _is_blank(opt.value))
    return [not _is_blank(opt.value) and counts[opt.value] > 1 for opt in items]


def _copy_value(value: str, taken: set) -> str:
    candidate = f"{value}-copy"
    n = 2
    while candidate in taken:
        candidate = f"{value}-copy-{n}"
        n += 1
    return candidate


class OptionsEditor:
    def __init__(
        self,
        field: AnyLeafField,
        *,
        editing_locale: str,
        default_locale: str,
        ids: IdFactory = random_ids,
    ) -> None:
        if not requires_options(field.type):
            raise ValueError(f"Field type {field.type!r} has no options")
        self.field = field
        self.editing_locale = editing_locale
        self.default_locale = default_locale
        self._ids = ids

    @property
    def items(self) -> List[FieldOption]:
        return get_options(self.field)

    @property
    def translation_mode(self) -> bool:
        return is_translation_mode(self.editing_locale, self.default_locale)

    @property
    def can_add(self) -> bool:
        return not self.translation_mode

    @property
    def can_duplicate(self) -> bool:
        return not self.translation_mode

    @property
    def can_edit_value(self) -> bool:
        return not self.translation_mode

    @property
    def can_remove(self) -> bool:
        return not self.translation_mode and len(self.items) > 1

    def _replace(self, items: Sequence[FieldOption]) -> AnyLeafField:
        self.field = self._reconcile_default(with_options(self.field, items))
        return self.field

    def _disabled(self, action: str) -> AnyLeafField:
        logger.debug("options editor: %s ignored for field %s", action, self.field.id)
        return self.field

    def add(self) -> AnyLeafField:
        if not self.can_add:
            return self._disabled("add")
        items = self.items
        taken = {opt.value for opt in items}
        n = len(items) + 1
        while f"option-{n}" in taken:
            n += 1
        option = FieldOption(id=self._ids("opt"), label=f"Option {n}", value=f"option-{n}")
        return self._replace([*items, option])

    def remove(self, index: int) -> AnyLeafField:
        items = self.items
        if not self.can_remove or not 0 <= index < len(items):
            return self._disabled("remove")
        return self._replace(items[:index] + items[index + 1 :])

    def duplicate(self, index: int) -> AnyLeafField:
        items = self.items
        if not self.can_duplicate or not 0 <= index < len(items):
            return self._disabled("duplicate")
        source = items[index]
        clone = source.model_copy(
            update={
                "id": self._ids("opt"),
                "label": f"{source.label} {COPY_SUFFIX}",
                "value": _copy_value(source.value, {opt.value for opt in items}),
            },
            deep=True,
        )
        return self._replace(items[: index + 1] + [clone] + items[index + 1 :])

    def move(self, active_id: str, over_id: str) -> AnyLeafField:
        """Drag-and-drop reorder by option id."""
        if self.translation_mode:
            return self._disabled("move")
        self.field = with_options(self.field, move_by_id(self.items, active_id, over_id))
        return self.field

    def update(self, index: int, *, label: Optional[str] = None, value: Optional[str] = None) -> AnyLeafField:
        items = self.items
        if not 0 <= index < len(items):
            return self._disabled("update")
        if self.translation_mode:
            if label is not None:
                self.set_translation(items[index].id, label)
            return self.field

        option = items[index]
        changes = {}
        if label is not None:
            changes["label"] = label
        if value is not None:
            changes["value"] = value
        if not changes:
            return self.field
        self.field = self._follow_default(index, value)
        items = self.items
        items[index] = option.model_copy(update=changes)
        return self._replace(items)

    def set_translation(self, option_id: str, label: str) -> AnyLeafField:
        """Write the option label in the editing locale (base label in the default locale)."""
        self.field = write_option_label(self.field, option_id, label, self.editing_locale, self.default_locale)
        return self.field

    def label_for(self, option: FieldOption) -> str:
        return resolve_option_label(self.field, option, self.editing_locale, self.default_locale)

    def duplicate_flags(self) -> List[bool]:
        return find_duplicate_values(self.items)

    @property
    def has_duplicate_values(self) -> bool:
        return any(self.duplicate_flags())

    def default_value_choices(self) -> List[FieldOption]:
        """Options eligible as default value (non-empty value after trimming)."""
        return [opt for opt in self.items if not _is_blank(opt.value)]

    def set_default_value(self, value: Union[None, str, Sequence[str]]) -> AnyLeafField:
        if self.translation_mode:
            return self._disabled("set_default_value")
        eligible = {opt.value for opt in self.default_value_choices()}
        if value is None:
            self.field = with_payload(self.field, default_value=None)
            return self.field
        if is_multi_value(self.field.type):
            values = [value] if isinstance(value, str) else list(value)
            bad = [v for v in values if v not in eligible]
            if bad:
                raise InvalidDefaultValueError(f"Default values do not match any option: {bad}")
            self.field = with_payload(self.field, default_value=values)
            return self.field
        if not isinstance(value, str) or value not in eligible:
            raise InvalidDefaultValueError(f"Default value does not match any option: {value!r}")
        self.field = with_payload(self.field, default_value=value)
        return self.field

    def _follow_default(self, index: int, new_value: Optional[str]) -> AnyLeafField:
        """Keep a default pointing at an option whose value is being renamed."""
        items = self.items
        old_value = items[index].value
        if new_value is None or new_value == old_value or _is_blank(new_value):
            return self.field
        if any(opt.value == old_value for i, opt in enumerate(items) if i != index):
            return self.field
        payload = options_payload(self.field)
        current: Any = getattr(payload, "default_value", None)
        if isinstance(current, list) and old_value in current:
            return with_payload(self.field, default_value=[new_value if v == old_value else v for v in current])
        if current == old_value:
            return with_payload(self.field, default_value=new_value)
        return self.field

    def _reconcile_default(self, field: AnyLeafField) -> AnyLeafField:
        """Drop default values that no longer reference an eligible option."""
        payload = options_payload(field)
        current: Any = getattr(payload, "default_value", None)
        if current is None:
            return field
        eligible = {opt.value for opt in get_options(field) if not _is_blank(opt.value)}
        if isinstance(current, list):
            kept = [v for v in current if v in eligible]
            return field if kept == current else with_payload(field, default_value=kept or None)
        return field if current in eligible else with_payload(field, default_value=None)
