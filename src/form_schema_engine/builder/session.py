from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from form_schema_engine.builder import form_ops
from form_schema_engine.builder.fields import find_field
from form_schema_engine.builder.options_editor import OptionsEditor
from form_schema_engine.errors import FieldNotFoundError
from form_schema_engine.ids import IdFactory, random_ids
from form_schema_engine.localization import is_translation_mode, write_field_text, write_group_text
from form_schema_engine.schemas.fields import AnyField, GroupField
from form_schema_engine.schemas.form import FormSchema


@dataclass
class EditingSession:
    """
    The builder's working state: the schema being edited, the locale text
    edits go to, and the id capability used for new fields and options.

    The session owns the schema until it is exported; each operation swaps in
    a new schema object.
    """

    schema: FormSchema = field(default_factory=FormSchema)
    editing_locale: Optional[str] = None
    ids: IdFactory = random_ids

    def __post_init__(self) -> None:
        self._sync_locale()

    def _sync_locale(self) -> None:
        if self.editing_locale not in self.schema.supported_locales:
            self.editing_locale = self.schema.default_locale

    @property
    def translation_mode(self) -> bool:
        return is_translation_mode(self.editing_locale or self.schema.default_locale, self.schema.default_locale)

    def get_field(self, field_id: str) -> AnyField:
        found = find_field(self.schema.fields, field_id)
        if found is None:
            raise FieldNotFoundError(field_id)
        return found

    def add_field(self, field_type: str, *, group_id: Optional[str] = None) -> FormSchema:
        if group_id is None:
            self.schema = form_ops.add_field(self.schema, field_type, ids=self.ids)
        else:
            self.schema = form_ops.add_field_to_group(self.schema, group_id, field_type, ids=self.ids)
        return self.schema

    def replace_field(self, field: AnyField) -> FormSchema:
        self.schema = form_ops.update_field(self.schema, field)
        return self.schema

    def remove_field(self, field_id: str) -> FormSchema:
        self.schema = form_ops.remove_field(self.schema, field_id)
        return self.schema

    def duplicate_field(self, field_id: str) -> FormSchema:
        self.schema = form_ops.duplicate_field_in_schema(self.schema, field_id, ids=self.ids)
        return self.schema

    def move_field(self, active_id: str, over_id: str, *, group_id: Optional[str] = None) -> FormSchema:
        if group_id is None:
            self.schema = form_ops.move_field(self.schema, active_id, over_id)
        else:
            self.schema = form_ops.move_group_field(self.schema, group_id, active_id, over_id)
        return self.schema

    def set_field_text(self, field_id: str, key: str, value: str) -> FormSchema:
        """Edit label/placeholder/description (group title/description) in the editing locale."""
        target = self.get_field(field_id)
        locale = self.editing_locale or self.schema.default_locale
        if isinstance(target, GroupField) and key in ("title", "description"):
            updated = write_group_text(target, key, value, locale, self.schema.default_locale)
        else:
            updated = write_field_text(target, key, value, locale, self.schema.default_locale)
        return self.replace_field(updated)

    def set_form_text(self, key: str, value: str) -> FormSchema:
        self.schema = form_ops.update_form_text(self.schema, key, value, self.editing_locale)
        return self.schema

    def options_editor(self, field_id: str) -> OptionsEditor:
        """An options editor bound to the editing locale; store its result with `replace_field`."""
        return OptionsEditor(
            self.get_field(field_id),
            editing_locale=self.editing_locale or self.schema.default_locale,
            default_locale=self.schema.default_locale,
            ids=self.ids,
        )

    def set_locale_enabled(self, locale: str, enabled: bool) -> FormSchema:
        self.schema = form_ops.set_locale_enabled(self.schema, locale, enabled)
        self._sync_locale()
        return self.schema

    def set_default_locale(self, locale: str) -> FormSchema:
        self.schema = form_ops.set_default_locale(self.schema, locale)
        self._sync_locale()
        return self.schema

    def set_editing_locale(self, locale: str) -> None:
        if locale not in self.schema.supported_locales:
            raise ValueError(f"Locale {locale!r} is not supported by this form")
        self.editing_locale = locale
