from __future__ import annotations

import pytest

from form_schema_engine.builder import form_ops
from form_schema_engine.builder.fields import create_field
from form_schema_engine.builder.session import EditingSession
from form_schema_engine.errors import FieldNotFoundError, NestedGroupError
from form_schema_engine.schemas.fields import LocalizedFieldData, TextField
from form_schema_engine.schemas.form import FormSchema, LocalizedFormMetadata


def _flat(ids) -> FormSchema:
    schema = FormSchema()
    schema = form_ops.add_field(schema, "text", ids=ids, label="Name")
    return form_ops.add_field(schema, "email", ids=ids, label="Email")


def test_adding_group_to_flat_form_converts_to_steps(ids) -> None:
    flat = _flat(ids)
    original_ids = [f.id for f in flat.fields]

    steps = form_ops.add_field(flat, "group", ids=ids)

    assert len(steps.fields) == 2
    assert all(f.type == "group" for f in steps.fields)
    first, second = steps.fields
    assert [f.id for f in first.group_options.fields] == original_ids
    assert second.group_options.fields == []
    assert (first.label, first.group_options.title) == ("Step 1", "Step 1")
    assert (second.label, second.group_options.title) == ("Step 2", "Step 2")
    assert steps.is_multi_step
    # Input schema untouched.
    assert [f.type for f in flat.fields] == ["text", "email"]


def test_adding_group_to_empty_or_grouped_form_appends(ids) -> None:
    schema = form_ops.add_field(FormSchema(), "group", ids=ids)
    assert [f.type for f in schema.fields] == ["group"]
    schema = form_ops.add_field(schema, "group", ids=ids)
    assert [f.type for f in schema.fields] == ["group", "group"]


def test_add_field_to_group_rejects_groups(ids) -> None:
    schema = form_ops.add_field(FormSchema(), "group", ids=ids)
    group_id = schema.fields[0].id
    schema = form_ops.add_field_to_group(schema, group_id, "radio", ids=ids)
    assert [f.type for f in schema.fields[0].group_options.fields] == ["radio"]

    with pytest.raises(NestedGroupError):
        form_ops.add_field_to_group(schema, group_id, "group", ids=ids)
    with pytest.raises(FieldNotFoundError):
        form_ops.add_field_to_group(schema, "missing", "text", ids=ids)


def test_update_remove_and_duplicate_nested_field(ids) -> None:
    schema = form_ops.add_field(_flat(ids), "group", ids=ids)
    group = schema.fields[0]
    nested = group.group_options.fields[0]

    schema = form_ops.update_field(schema, nested.model_copy(update={"label": "Full name"}))
    assert schema.fields[0].group_options.fields[0].label == "Full name"

    schema = form_ops.duplicate_field_in_schema(schema, nested.id, ids=ids)
    labels = [f.label for f in schema.fields[0].group_options.fields]
    assert labels == ["Full name", "Full name (copy)", "Email"]

    schema = form_ops.remove_field(schema, nested.id)
    assert [f.label for f in schema.fields[0].group_options.fields] == ["Full name (copy)", "Email"]

    with pytest.raises(FieldNotFoundError):
        form_ops.remove_field(schema, nested.id)


def test_group_cannot_be_placed_inside_group(ids) -> None:
    schema = form_ops.add_field(_flat(ids), "group", ids=ids)
    nested = schema.fields[0].group_options.fields[0]
    impostor = create_field("group", ids=ids).model_copy(update={"id": nested.id})
    with pytest.raises(NestedGroupError):
        form_ops.update_field(schema, impostor)


def test_move_fields_top_level_and_in_group(ids) -> None:
    flat = form_ops.add_field(_flat(ids), "phone", ids=ids)
    a, b, c = [f.id for f in flat.fields]
    moved = form_ops.move_field(flat, c, a)
    assert [f.id for f in moved.fields] == [c, a, b]

    steps = form_ops.add_field(flat, "group", ids=ids)
    group_id = steps.fields[0].id
    moved = form_ops.move_group_field(steps, group_id, a, c)
    assert [f.id for f in moved.fields[0].group_options.fields] == [b, c, a]


def test_locales_never_empty_and_default_rehomed() -> None:
    schema = FormSchema(
        supported_locales=["en", "es"],
        default_locale="en",
        fields=[TextField(id="f1", label="Name", i18n={"es": LocalizedFieldData(label="Nombre")})],
        i18n={"es": LocalizedFormMetadata(title="Registro")},
    )

    without_en = form_ops.set_locale_enabled(schema, "en", False)
    assert without_en.supported_locales == ["es"]
    assert without_en.default_locale == "es"
    # "es" became the base locale, so its overlays no longer apply.
    assert without_en.i18n is None
    assert without_en.fields[0].i18n is None

    only = form_ops.set_locale_enabled(FormSchema(), "en", False)
    assert only.supported_locales == ["en"]

    added = form_ops.set_locale_enabled(schema, "fr", True)
    assert added.supported_locales == ["en", "es", "fr"]
    assert form_ops.set_locale_enabled(added, "fr", True).supported_locales == ["en", "es", "fr"]

    removed_es = form_ops.set_locale_enabled(schema, "es", False)
    assert removed_es.fields[0].i18n is None
    assert schema.fields[0].i18n["es"].label == "Nombre"


def test_set_default_locale_requires_supported_locale() -> None:
    schema = FormSchema(supported_locales=["en", "es"])
    assert form_ops.set_default_locale(schema, "es").default_locale == "es"
    with pytest.raises(ValueError):
        form_ops.set_default_locale(schema, "fr")


def test_session_edits_in_editing_locale(ids) -> None:
    session = EditingSession(FormSchema(supported_locales=["en", "es"]), editing_locale="es", ids=ids)
    session.add_field("text")
    field_id = session.schema.fields[0].id

    session.set_field_text(field_id, "label", "Nombre")
    session.set_form_text("title", "Formulario")

    field = session.get_field(field_id)
    assert field.label == "New Field"
    assert field.i18n["es"].label == "Nombre"
    assert session.schema.title == "New Form"
    assert session.schema.i18n["es"].title == "Formulario"
    assert session.translation_mode


def test_session_options_editor_round_trip(ids) -> None:
    session = EditingSession(ids=ids)
    session.add_field("select")
    field_id = session.schema.fields[0].id

    editor = session.options_editor(field_id)
    editor.add()
    editor.add()
    session.replace_field(editor.field)

    items = session.get_field(field_id).select_options.items
    assert [o.value for o in items] == ["option-1", "option-2"]


def test_session_keeps_editing_locale_valid() -> None:
    session = EditingSession(FormSchema(supported_locales=["en", "es"]), editing_locale="es")
    session.set_locale_enabled("es", False)
    assert session.editing_locale == "en"

    session = EditingSession(FormSchema(), editing_locale="de")
    assert session.editing_locale == "en"
    with pytest.raises(ValueError):
        session.set_editing_locale("de")
