"""
Form-level editing operations.

Every function takes a `FormSchema` and returns a new one; the input schema
and its fields are never modified. Fields are addressed by id, at the top
level or inside a group.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from form_schema_engine.builder.fields import create_field, duplicate_field, is_group
from form_schema_engine.errors import FieldNotFoundError, NestedGroupError
from form_schema_engine.ids import IdFactory, random_ids
from form_schema_engine.localization import write_form_text
from form_schema_engine.reorder import index_of, move_by_id
from form_schema_engine.schemas.fields import AnyField, AnyLeafField, GroupField, GroupOptions
from form_schema_engine.schemas.form import FormSchema

logger = logging.getLogger(__name__)

STEP_LABEL = "Step {n}"


def _with_fields(schema: FormSchema, fields: Sequence[AnyField]) -> FormSchema:
    return schema.model_copy(update={"fields": list(fields)})


def _with_group_fields(group: GroupField, fields: Sequence[AnyLeafField]) -> GroupField:
    return group.model_copy(update={"group_options": group.group_options.model_copy(update={"fields": list(fields)})})


def _step_group(n: int, fields: Sequence[AnyLeafField], ids: IdFactory) -> GroupField:
    label = STEP_LABEL.format(n=n)
    return GroupField(
        id=ids("group"),
        label=label,
        group_options=GroupOptions(
            title=label,
            description="",
            show_title=True,
            show_description=False,
            fields=list(fields),
        ),
    )


def _get_group(schema: FormSchema, group_id: str) -> GroupField:
    for field in schema.fields:
        if field.id == group_id:
            if not isinstance(field, GroupField):
                raise ValueError(f"Field {group_id!r} is not a group")
            return field
    raise FieldNotFoundError(group_id)


def _map_container(
    schema: FormSchema,
    field_id: str,
    edit: Callable[[List[AnyField], int], List[AnyField]],
) -> FormSchema:
    """Apply `edit(container, index)` to whichever list holds `field_id`."""
    top = list(schema.fields)
    index = index_of(top, field_id)
    if index is not None:
        return _with_fields(schema, edit(top, index))
    for i, field in enumerate(top):
        if isinstance(field, GroupField):
            nested = list(field.group_options.fields)
            index = index_of(nested, field_id)
            if index is not None:
                top[i] = _with_group_fields(field, edit(nested, index))
                return _with_fields(schema, top)
    raise FieldNotFoundError(field_id)


def add_field(
    schema: FormSchema,
    field_type: str,
    *,
    ids: IdFactory = random_ids,
    label: Optional[str] = None,
) -> FormSchema:
    """
    Append a new field of `field_type` at the top level.

    Adding the first group to a non-empty flat form converts it to step mode:
    every existing field moves into "Step 1" and an empty "Step 2" follows.
    """
    if field_type == "group" and not schema.has_groups and schema.fields:
        first = _step_group(1, schema.fields, ids)
        second = _step_group(2, [], ids)
        logger.info("converted form to step mode (%d fields moved to Step 1)", len(schema.fields))
        return _with_fields(schema, [first, second])
    kwargs = {"label": label} if label is not None else {}
    return _with_fields(schema, [*schema.fields, create_field(field_type, ids=ids, **kwargs)])


def add_field_to_group(
    schema: FormSchema,
    group_id: str,
    field_type: str,
    *,
    ids: IdFactory = random_ids,
    label: Optional[str] = None,
) -> FormSchema:
    if field_type == "group":
        raise NestedGroupError("Groups cannot contain groups")
    group = _get_group(schema, group_id)
    kwargs = {"label": label} if label is not None else {}
    field = create_field(field_type, ids=ids, **kwargs)
    updated = _with_group_fields(group, [*group.group_options.fields, field])
    return _with_fields(schema, [updated if f.id == group_id else f for f in schema.fields])


def update_field(schema: FormSchema, field: AnyField) -> FormSchema:
    """Replace the field with the same id (whole-object replacement)."""

    def edit(container: List[AnyField], index: int) -> List[AnyField]:
        container[index] = field
        return container

    if is_group(field) and index_of(schema.fields, field.id) is None:
        raise NestedGroupError("Groups cannot contain groups")
    return _map_container(schema, field.id, edit)


def remove_field(schema: FormSchema, field_id: str) -> FormSchema:
    def edit(container: List[AnyField], index: int) -> List[AnyField]:
        del container[index]
        return container

    return _map_container(schema, field_id, edit)


def duplicate_field_in_schema(schema: FormSchema, field_id: str, *, ids: IdFactory = random_ids) -> FormSchema:
    """Insert a copy of the field right after the original, in the same container."""

    def edit(container: List[AnyField], index: int) -> List[AnyField]:
        container.insert(index + 1, duplicate_field(container[index], ids=ids))
        return container

    return _map_container(schema, field_id, edit)


def move_field(schema: FormSchema, active_id: str, over_id: str) -> FormSchema:
    """Reorder top-level fields (or steps) by drag-and-drop ids."""
    return _with_fields(schema, move_by_id(schema.fields, active_id, over_id))


def move_group_field(schema: FormSchema, group_id: str, active_id: str, over_id: str) -> FormSchema:
    group = _get_group(schema, group_id)
    updated = _with_group_fields(group, move_by_id(group.group_options.fields, active_id, over_id))
    return _with_fields(schema, [updated if f.id == group_id else f for f in schema.fields])


def _prune_overlays(schema: FormSchema) -> FormSchema:
    keep = set(schema.supported_locales) - {schema.default_locale}

    def prune_field(field: AnyField) -> AnyField:
        if field.i18n and any(k not in keep for k in field.i18n):
            field = field.model_copy(update={"i18n": {k: v for k, v in field.i18n.items() if k in keep} or None})
        if isinstance(field, GroupField):
            field = _with_group_fields(field, [prune_field(f) for f in field.group_options.fields])
        return field

    i18n = schema.i18n
    if i18n:
        i18n = {k: v for k, v in i18n.items() if k in keep} or None
    return schema.model_copy(update={"i18n": i18n, "fields": [prune_field(f) for f in schema.fields]})


def set_locale_enabled(
    schema: FormSchema,
    locale: str,
    enabled: bool,
    *,
    fallback_locale: str = "en",
) -> FormSchema:
    """
    Add or remove a supported locale.

    The list is never left empty (`fallback_locale` is used instead), the
    default locale moves to the first remaining locale when it is removed, and
    overlays for locales that are no longer translatable are dropped.
    """
    current = list(schema.supported_locales or [fallback_locale])
    if enabled:
        locales = current if locale in current else [*current, locale]
    else:
        locales = [code for code in current if code != locale] or [fallback_locale]
    default = schema.default_locale if schema.default_locale in locales else locales[0]
    updated = schema.model_copy(update={"supported_locales": locales, "default_locale": default})
    return _prune_overlays(updated)


def set_default_locale(schema: FormSchema, locale: str) -> FormSchema:
    """Make `locale` the base locale; any overlay stored under it is dropped."""
    if locale not in schema.supported_locales:
        raise ValueError(f"Locale {locale!r} is not supported by this form")
    return _prune_overlays(schema.model_copy(update={"default_locale": locale}))


def update_form_text(schema: FormSchema, key: str, value: str, locale: Optional[str] = None) -> FormSchema:
    """Set title/description/submit text in `locale` (base text in the default locale)."""
    return write_form_text(schema, key, value, locale or schema.default_locale)
