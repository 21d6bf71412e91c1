"""
Field helpers for the form builder.

- Field creation with type-specific defaults
- Field duplication (fresh ids, "(copy)" label)
- Option payload access regardless of field type
- Lookup helpers over flat or grouped field lists
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from form_schema_engine.errors import UnknownFieldTypeError
from form_schema_engine.ids import IdFactory, random_ids
from form_schema_engine.schemas.fields import (
    FIELD_CLASSES,
    AnyField,
    AnyLeafField,
    FieldValidation,
    GroupField,
    GroupOptions,
    check_exhaustive,
)
from form_schema_engine.schemas.options import (
    DateOptions,
    EmailOptions,
    FieldOption,
    FileUploadOptions,
    ImageSelectMultiOptions,
    ImageSelectOptions,
    MultiSelectOptions,
    PhoneOptions,
    RadioOptions,
    SelectOptions,
    TextareaOptions,
    ToggleOptions,
)

DEFAULT_FIELD_LABEL = "New Field"
COPY_SUFFIX = "(copy)"

# Python attribute holding each type's payload (None: no payload).
PAYLOAD_ATTRS: Dict[str, Optional[str]] = {
    "text": None,
    "textarea": "textarea_options",
    "number": "number_options",
    "email": "email_options",
    "phone": "phone_options",
    "select": "select_options",
    "multiselect": "multi_select_options",
    "radio": "radio_options",
    "toggle": "toggle_options",
    "date": "date_options",
    "time": "date_options",
    "datetime": "date_options",
    "group": "group_options",
    "imageSelect": "image_select_options",
    "imageSelectMulti": "image_select_multi_options",
    "fileUpload": "file_upload_options",
}

CHOICE_TYPES = ("select", "multiselect", "radio", "imageSelect", "imageSelectMulti")
MULTI_VALUE_TYPES = ("multiselect", "imageSelectMulti")


def _no_payload(label: str) -> Dict[str, Any]:
    return {}


_DEFAULT_PAYLOADS: Dict[str, Callable[[str], Dict[str, Any]]] = {
    "text": _no_payload,
    "textarea": lambda label: {
        "textarea_options": TextareaOptions(rows=3, resize="vertical", show_character_count=False)
    },
    "number": _no_payload,
    "email": lambda label: {"email_options": EmailOptions(show_validation_icon=True, validate_on_blur=True)},
    "phone": lambda label: {
        "phone_options": PhoneOptions(format="national", default_country="US", mask="(###) ###-####")
    },
    "select": lambda label: {"select_options": SelectOptions(items=[])},
    "multiselect": lambda label: {"multi_select_options": MultiSelectOptions(items=[], layout="vertical")},
    "radio": lambda label: {"radio_options": RadioOptions(items=[], layout="vertical")},
    "toggle": lambda label: {
        "toggle_options": ToggleOptions(
            default_checked=False,
            style="toggle",
            checked_value=True,
            unchecked_value=False,
        )
    },
    "date": lambda label: {"date_options": DateOptions(mode="date")},
    "time": lambda label: {"date_options": DateOptions(mode="time", hour_cycle=24)},
    "datetime": lambda label: {"date_options": DateOptions(mode="datetime", hour_cycle=24)},
    "group": lambda label: {
        "group_options": GroupOptions(title=label, description="", show_title=True, show_description=False)
    },
    "imageSelect": lambda label: {
        "image_select_options": ImageSelectOptions(items=[], layout="grid", columns=3, allow_clear=False)
    },
    "imageSelectMulti": lambda label: {
        "image_select_multi_options": ImageSelectMultiOptions(items=[], layout="grid", columns=3)
    },
    "fileUpload": lambda label: {
        "file_upload_options": FileUploadOptions(
            accept=[],
            max_size_mb=10,
            max_files=1,
            display_style="dropzone",
            show_file_list=True,
        )
    },
}

check_exhaustive(PAYLOAD_ATTRS, "PAYLOAD_ATTRS")
check_exhaustive(_DEFAULT_PAYLOADS, "_DEFAULT_PAYLOADS")


def id_prefix(field_type: str) -> str:
    return "group" if field_type == "group" else "field"


def create_field(
    field_type: str,
    *,
    label: str = DEFAULT_FIELD_LABEL,
    ids: IdFactory = random_ids,
) -> AnyField:
    """
    Create a new field with type-specific defaults.

    The result satisfies every schema invariant: choice fields start with an
    empty option list and groups with no nested fields.
    """
    cls = FIELD_CLASSES.get(field_type)
    if cls is None:
        raise UnknownFieldTypeError(field_type)
    return cls(
        id=ids(id_prefix(field_type)),
        label=label,
        validation=FieldValidation(required=False),
        **_DEFAULT_PAYLOADS[field_type](label),
    )


def duplicate_field(
    field: AnyField,
    *,
    ids: IdFactory = random_ids,
    label_suffix: str = COPY_SUFFIX,
) -> AnyField:
    """
    Clone a field with a new id and a suffixed label.

    Fields nested in a duplicated group and every option get fresh ids as
    well; option translations are re-keyed to the new option ids.
    """
    copy = _refresh_option_ids(field.model_copy(update={"id": ids(id_prefix(field.type))}, deep=True), ids)
    copy = copy.model_copy(update={"label": f"{field.label} {label_suffix}"})
    if isinstance(copy, GroupField):
        nested = [
            _refresh_option_ids(f.model_copy(update={"id": ids("field")}), ids) for f in copy.group_options.fields
        ]
        copy = copy.model_copy(update={"group_options": copy.group_options.model_copy(update={"fields": nested})})
    return copy


def _refresh_option_ids(field: AnyField, ids: IdFactory) -> AnyField:
    if not requires_options(field.type) or options_payload(field) is None:
        return field
    items = [opt.model_copy(update={"id": ids("opt")}) for opt in get_options(field)]
    mapping: Dict[str, str] = {}
    for old, new in zip(get_options(field), items):
        mapping.setdefault(old.id, new.id)
    out = with_options(field, items)
    if not field.i18n:
        return out
    i18n = {}
    for locale, entry in field.i18n.items():
        if entry.options:
            entry = entry.model_copy(update={"options": {mapping.get(k, k): v for k, v in entry.options.items()}})
        i18n[locale] = entry
    return out.model_copy(update={"i18n": i18n})


def is_group(field: Any) -> bool:
    return getattr(field, "type", None) == "group"


def requires_options(field_type: str) -> bool:
    return field_type in CHOICE_TYPES


def is_multi_value(field_type: str) -> bool:
    return field_type in MULTI_VALUE_TYPES


def options_payload(field: AnyField) -> Any:
    """The field's type-specific payload object (None for payload-less types)."""
    attr = PAYLOAD_ATTRS.get(field.type)
    if not attr:
        return None
    return getattr(field, attr, None)


def get_options(field: AnyField) -> List[FieldOption]:
    if not requires_options(field.type):
        return []
    payload = options_payload(field)
    return list(payload.items) if payload is not None else []


def with_options(field: AnyField, items: Sequence[FieldOption]) -> AnyField:
    """Return a copy of a choice field whose option list is replaced by `items`."""
    if not requires_options(field.type):
        raise ValueError(f"Field type {field.type!r} has no options")
    attr = PAYLOAD_ATTRS[field.type]
    payload = options_payload(field)
    return field.model_copy(update={attr: payload.model_copy(update={"items": list(items)})})


def with_payload(field: AnyField, **changes: Any) -> AnyField:
    """Return a copy of the field with attributes of its payload replaced."""
    attr = PAYLOAD_ATTRS.get(field.type)
    if not attr:
        raise ValueError(f"Field type {field.type!r} has no options payload")
    payload = getattr(field, attr)
    if payload is None:
        raise ValueError(f"Field {field.id!r} has no {attr} to update")
    return field.model_copy(update={attr: payload.model_copy(update=changes)})


def iter_fields(fields: Sequence[AnyField]) -> Iterator[AnyField]:
    """Every field, groups first then their nested fields, in schema order."""
    for field in fields:
        yield field
        if isinstance(field, GroupField):
            yield from field.group_options.fields


def iter_leaf_fields(fields: Sequence[AnyField]) -> Iterator[Tuple[Optional[str], AnyLeafField]]:
    """Ordered `(group_id, field)` pairs; top-level leaf fields have no group id."""
    for field in fields:
        if isinstance(field, GroupField):
            for nested in field.group_options.fields:
                yield field.id, nested
        else:
            yield None, field


def find_field(fields: Sequence[AnyField], field_id: str) -> Optional[AnyField]:
    for field in iter_fields(fields):
        if field.id == field_id:
            return field
    return None


def fields_by_type(fields: Sequence[AnyField], field_type: str) -> List[AnyField]:
    return [f for f in iter_fields(fields) if f.type == field_type]


def has_group_fields(fields: Sequence[AnyField]) -> bool:
    return any(is_group(f) for f in fields)


def display_label(field: AnyField) -> str:
    return field.label or f"Untitled {field.type}"

