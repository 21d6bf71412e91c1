"""
Localization overlays.

Translations are sparse per-locale overrides stored next to the base text
(`field.i18n[locale]`, `schema.i18n[locale]`). The base object stays the single
source of truth for structure (ids, option values, required-ness) in every
locale:

- Reading in the default locale returns the base text.
- Reading in another locale returns the overlay text when it is non-empty,
  otherwise the base text.
- Writing in the default locale writes the base; writing in any other locale
  writes only into that locale's overlay, created on demand.
"""

from __future__ import annotations

from typing import Dict, Optional

from form_schema_engine.builder.fields import get_options, with_options
from form_schema_engine.schemas.fields import AnyField, GroupField, LocalizedFieldData
from form_schema_engine.schemas.form import FormSchema, LocalizedFormMetadata
from form_schema_engine.schemas.options import FieldOption

FIELD_TEXT_KEYS = ("label", "placeholder", "description")
GROUP_TEXT_KEYS = {"title": "group_title", "description": "group_description"}
FORM_TEXT_KEYS = {
    "title": "title",
    "description": "description",
    "submit_button_text": "submit_button_text",
    "submitButtonText": "submit_button_text",
}


def is_translation_mode(locale: str, default_locale: str) -> bool:
    return locale != default_locale


def _text(value: Optional[str]) -> str:
    return value if isinstance(value, str) else ""


def _field_key(key: str) -> str:
    if key not in FIELD_TEXT_KEYS:
        raise ValueError(f"Unsupported field text key: {key!r}")
    return key


def _overlay(field: AnyField, locale: str) -> Optional[LocalizedFieldData]:
    return (field.i18n or {}).get(locale)


def resolve(field: AnyField, key: str, locale: str, default_locale: str) -> str:
    """Effective label/placeholder/description of a field in `locale`."""
    base = _text(getattr(field, _field_key(key)))
    if not is_translation_mode(locale, default_locale):
        return base
    overlay = _overlay(field, locale)
    translated = _text(getattr(overlay, key, None)) if overlay is not None else ""
    return translated or base


def resolve_option_label(field: AnyField, option: FieldOption, locale: str, default_locale: str) -> str:
    """Option labels are looked up by option id, never by value."""
    base = _text(option.label)
    if not is_translation_mode(locale, default_locale):
        return base
    overlay = _overlay(field, locale)
    translated = _text((overlay.options or {}).get(option.id)) if overlay is not None else ""
    return translated or base


def resolve_group_text(group: GroupField, key: str, locale: str, default_locale: str) -> str:
    """
    Group title/description.

    An empty title resolves to the group's (localized) label.
    """
    if key not in GROUP_TEXT_KEYS:
        raise ValueError(f"Unsupported group text key: {key!r}")
    base = _text(getattr(group.group_options, key))
    value = base
    if is_translation_mode(locale, default_locale):
        overlay = _overlay(group, locale)
        translated = _text(getattr(overlay, GROUP_TEXT_KEYS[key], None)) if overlay is not None else ""
        value = translated or base
    if key == "title" and not value:
        return resolve(group, "label", locale, default_locale)
    return value


def resolve_form_text(schema: FormSchema, key: str, locale: str) -> str:
    attr = FORM_TEXT_KEYS.get(key)
    if attr is None:
        raise ValueError(f"Unsupported form text key: {key!r}")
    base = _text(getattr(schema, attr))
    if not is_translation_mode(locale, schema.default_locale):
        return base
    overlay = (schema.i18n or {}).get(locale)
    translated = _text(getattr(overlay, attr, None)) if overlay is not None else ""
    return translated or base


def _with_field_overlay(field: AnyField, locale: str, **changes: object) -> AnyField:
    i18n: Dict[str, LocalizedFieldData] = dict(field.i18n or {})
    entry = i18n.get(locale) or LocalizedFieldData()
    i18n[locale] = entry.model_copy(update=changes)
    return field.model_copy(update={"i18n": i18n})


def write_field_text(field: AnyField, key: str, value: str, locale: str, default_locale: str) -> AnyField:
    attr = _field_key(key)
    if not is_translation_mode(locale, default_locale):
        return field.model_copy(update={attr: value})
    return _with_field_overlay(field, locale, **{attr: value})


def write_option_label(field: AnyField, option_id: str, value: str, locale: str, default_locale: str) -> AnyField:
    items = get_options(field)
    if not any(opt.id == option_id for opt in items):
        raise KeyError(option_id)
    if not is_translation_mode(locale, default_locale):
        return with_options(
            field,
            [opt.model_copy(update={"label": value}) if opt.id == option_id else opt for opt in items],
        )
    overlay = _overlay(field, locale)
    options = dict((overlay.options if overlay is not None else None) or {})
    options[option_id] = value
    return _with_field_overlay(field, locale, options=options)


def write_group_text(group: GroupField, key: str, value: str, locale: str, default_locale: str) -> GroupField:
    overlay_key = GROUP_TEXT_KEYS.get(key)
    if overlay_key is None:
        raise ValueError(f"Unsupported group text key: {key!r}")
    if not is_translation_mode(locale, default_locale):
        return group.model_copy(update={"group_options": group.group_options.model_copy(update={key: value})})
    return _with_field_overlay(group, locale, **{overlay_key: value})


def write_form_text(schema: FormSchema, key: str, value: str, locale: str) -> FormSchema:
    attr = FORM_TEXT_KEYS.get(key)
    if attr is None:
        raise ValueError(f"Unsupported form text key: {key!r}")
    if locale not in schema.supported_locales:
        raise ValueError(f"Locale {locale!r} is not supported by this form")
    if not is_translation_mode(locale, schema.default_locale):
        return schema.model_copy(update={attr: value})
    i18n: Dict[str, LocalizedFormMetadata] = dict(schema.i18n or {})
    entry = i18n.get(locale) or LocalizedFormMetadata()
    i18n[locale] = entry.model_copy(update={attr: value})
    return schema.model_copy(update={"i18n": i18n})
