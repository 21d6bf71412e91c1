from __future__ import annotations

from form_schema_engine.preview.submission import FILES_META_KEY, build_submission
from form_schema_engine.preview.summary import display_value
from form_schema_engine.preview.values import apply_edit
from form_schema_engine.schema_io import import_schema


def _schema():
    return import_schema(
        {
            "fields": [
                {"id": "name", "type": "text", "label": "Name"},
                {
                    "id": "step",
                    "type": "group",
                    "label": "More",
                    "groupOptions": {
                        "fields": [
                            {
                                "id": "news",
                                "type": "toggle",
                                "label": "News",
                                "toggleOptions": {"defaultChecked": True, "checkedValue": True, "uncheckedValue": False},
                            },
                            {"id": "cv", "type": "fileUpload", "label": "CV"},
                        ]
                    },
                },
            ]
        }
    ).schema


def test_apply_edit_returns_new_mapping() -> None:
    values = {"name": "Ann"}
    out = apply_edit(values, "name", "Bob")
    assert out == {"name": "Bob"}
    assert values == {"name": "Ann"}


def test_submission_applies_defaults_and_file_meta() -> None:
    data = build_submission(
        _schema(),
        {"name": "Ann", "ignored": 1},
        {"cv": [{"name": "cv.pdf", "size": 2048, "type": "application/pdf"}]},
    )
    assert data == {
        "name": "Ann",
        "news": True,
        FILES_META_KEY: {"cv": [{"name": "cv.pdf", "size": 2048, "type": "application/pdf"}]},
    }


def test_submission_without_files_has_no_meta() -> None:
    data = build_submission(_schema(), {}, {"cv": []})
    assert data == {"name": None, "news": True}


def test_display_value_for_scalars() -> None:
    schema = _schema()
    news = schema.fields[1].group_options.fields[0]
    assert display_value(news, True, "en", "en") == "true"
    assert display_value(news, False, "en", "en") == "false"
    assert display_value(schema.fields[0], "", "en", "en") == "-"
    assert display_value(schema.fields[0], ["x", "y"], "en", "en") == "x, y"
