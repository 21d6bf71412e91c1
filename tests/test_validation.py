from __future__ import annotations

from form_schema_engine.schemas.fields import GroupField, GroupOptions, LocalizedFieldData, TextField
from form_schema_engine.schemas.form import FormSchema
from form_schema_engine.validation import check_schema, repair_schema


def test_valid_schema_has_no_issues() -> None:
    schema = FormSchema(
        supported_locales=["en", "es"],
        fields=[TextField(id="f1", label="Name", i18n={"es": LocalizedFieldData(label="Nombre")})],
    )
    assert check_schema(schema) == []
    repaired, issues = repair_schema(schema)
    assert issues == []
    assert repaired == schema


def test_field_ids_are_unique_across_groups(ids) -> None:
    schema = FormSchema(
        fields=[
            TextField(id="f1", label="Top"),
            GroupField(id="g1", label="Step", group_options=GroupOptions(fields=[TextField(id="f1", label="Nested")])),
        ]
    )
    issues = check_schema(schema)
    assert [i.code for i in issues] == ["duplicate_field_id"]
    assert issues[0].field_id == "f1"

    repaired, _ = repair_schema(schema, ids=ids)
    assert repaired.fields[1].group_options.fields[0].id == "field-1"
    assert schema.fields[1].group_options.fields[0].id == "f1"


def test_overlay_for_default_locale_is_pruned() -> None:
    schema = FormSchema(fields=[TextField(id="f1", label="Name", i18n={"en": LocalizedFieldData(label="x")})])
    repaired, issues = repair_schema(schema)
    assert [i.code for i in issues] == ["stray_locale_overlay"]
    assert repaired.fields[0].i18n is None
