from __future__ import annotations

import copy
import json

import pytest

from form_schema_engine.errors import SchemaImportError
from form_schema_engine.schema_io import export_filename, export_schema, export_schema_json, import_schema
from form_schema_engine.schemas.form import FormSchema


def test_import_empty_fields_fills_structural_defaults() -> None:
    result = import_schema({"fields": []})
    schema = result.schema
    assert schema.supported_locales == ["en"]
    assert schema.default_locale == "en"
    assert schema.fields == []
    assert schema.title == "New Form"
    assert schema.submit_button_text == "Submit"
    assert result.issues == []


def test_import_default_locale_follows_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORM_ENGINE_DEFAULT_LOCALE", "es")
    schema = import_schema('{"fields": []}').schema
    assert schema.supported_locales == ["es"]
    assert schema.default_locale == "es"


def test_default_locale_defaults_to_first_supported() -> None:
    schema = import_schema({"fields": [], "supportedLocales": ["es", "en"]}).schema
    assert schema.default_locale == "es"


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        b"\xff\xfe",
        "[]",
        {"title": "No fields"},
        {"fields": {"id": "f1"}},
    ],
)
def test_format_errors_reject_without_issues(raw) -> None:
    with pytest.raises(SchemaImportError) as exc:
        import_schema(raw)
    assert exc.value.issues == []


def test_nested_group_is_rejected() -> None:
    raw = {
        "fields": [
            {
                "id": "g1",
                "type": "group",
                "label": "Outer",
                "groupOptions": {"fields": [{"id": "g2", "type": "group", "label": "Inner"}]},
            }
        ]
    }
    with pytest.raises(SchemaImportError) as exc:
        import_schema(raw)
    assert exc.value.issues
    assert exc.value.issues[0].code == "nested_group"


def test_unknown_field_type_is_rejected() -> None:
    with pytest.raises(SchemaImportError):
        import_schema({"fields": [{"id": "f1", "type": "signature", "label": "Sign"}]})


def test_import_never_mutates_input() -> None:
    raw = {
        "fields": [
            {"id": "f1", "type": "text", "label": "A"},
            {"id": "f1", "type": "text", "label": "B"},
        ],
        "defaultLocale": "fr",
    }
    before = copy.deepcopy(raw)
    import_schema(raw)
    assert raw == before


def test_repairs_are_reported(ids) -> None:
    raw = {
        "supportedLocales": ["en", "en"],
        "defaultLocale": "es",
        "i18n": {"de": {"title": "Formular"}},
        "fields": [
            {"id": "f1", "type": "text", "label": "A"},
            {
                "id": "f1",
                "type": "select",
                "label": "B",
                "selectOptions": {
                    "items": [{"id": "o1", "value": "a"}, {"id": "o1", "value": "b"}],
                    "defaultValue": "zzz",
                },
            },
        ],
    }
    result = import_schema(raw, ids=ids)
    schema = result.schema
    codes = {issue.code for issue in result.issues}

    assert {"duplicate_locale", "default_locale_unsupported", "stray_locale_overlay"} <= codes
    assert {"duplicate_field_id", "duplicate_option_id", "default_value_missing_option"} <= codes
    assert all(issue.repaired for issue in result.issues)
    assert schema.supported_locales == ["es", "en"]
    assert schema.default_locale == "es"
    assert schema.i18n is None
    assert schema.fields[0].id == "f1"
    assert schema.fields[1].id == "field-1"
    assert [o.id for o in schema.fields[1].select_options.items] == ["o1", "opt-1"]
    assert schema.fields[1].select_options.default_value is None


def test_strict_import_rejects_instead_of_repairing() -> None:
    raw = {"fields": [{"id": "f1", "type": "text"}, {"id": "f1", "type": "email"}]}
    with pytest.raises(SchemaImportError) as exc:
        import_schema(raw, strict=True)
    assert [i.code for i in exc.value.issues] == ["duplicate_field_id"]
    assert not exc.value.issues[0].repaired


def test_strict_import_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORM_ENGINE_STRICT_IMPORT", "1")
    with pytest.raises(SchemaImportError):
        import_schema({"fields": [{"id": "f1", "type": "text"}, {"id": "f1", "type": "text"}]})


def test_export_then_import_keeps_schema(ids) -> None:
    raw = {
        "title": "Signup",
        "supportedLocales": ["en", "es"],
        "defaultLocale": "en",
        "showResponseSummary": True,
        "fields": [
            {
                "id": "g1",
                "type": "group",
                "label": "Step 1",
                "groupOptions": {
                    "title": "About you",
                    "fields": [
                        {
                            "id": "f1",
                            "type": "radio",
                            "label": "Size",
                            "radioOptions": {"items": [{"id": "o1", "label": "S", "value": "s"}], "defaultValue": "s"},
                            "i18n": {"es": {"label": "Talla"}},
                        }
                    ],
                },
            }
        ],
        "i18n": {"es": {"title": "Registro"}},
        "customKey": {"kept": True},
    }
    first = import_schema(raw, ids=ids)
    assert first.issues == []

    exported = export_schema(first.schema)
    assert exported["customKey"] == {"kept": True}
    assert exported["fields"][0]["groupOptions"]["fields"][0]["radioOptions"]["defaultValue"] == "s"
    assert "placeholder" not in exported["fields"][0]

    again = import_schema(export_schema_json(first.schema), ids=ids).schema
    assert again == first.schema
    assert json.loads(export_schema_json(again)) == exported


def test_export_filename_slugifies_title() -> None:
    schema = FormSchema(title="Customer  Intake Form")
    assert export_filename(schema, now_ms=1700000000000) == "form-customer-intake-form-1700000000000.json"
    assert export_filename(FormSchema(title=""), now_ms=1) == "form-export-1.json"
