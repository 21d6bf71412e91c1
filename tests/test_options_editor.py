from __future__ import annotations

import pytest

from form_schema_engine.builder.fields import create_field, get_options, with_options
from form_schema_engine.builder.options_editor import OptionsEditor, find_duplicate_values
from form_schema_engine.errors import InvalidDefaultValueError
from form_schema_engine.schemas.options import FieldOption


def _select(*opts, field_type: str = "select"):
    field = create_field(field_type, label="Pick")
    return with_options(field, [FieldOption(id=i, label=label, value=v) for i, label, v in opts])


def _editor(field, ids, locale: str = "en") -> OptionsEditor:
    return OptionsEditor(field, editing_locale=locale, default_locale="en", ids=ids)


def test_duplicate_values_flag_every_occurrence_then_clear(ids) -> None:
    editor = _editor(_select(("o1", "A", "a"), ("o2", "A2", "a")), ids)
    assert editor.duplicate_flags() == [True, True]
    assert editor.has_duplicate_values

    editor.update(1, value="b")

    assert editor.duplicate_flags() == [False, False]
    assert [opt.value for opt in editor.items] == ["a", "b"]


def test_blank_values_are_not_duplicates() -> None:
    items = [FieldOption(id="o1", value=""), FieldOption(id="o2", value="  "), FieldOption(id="o3", value="")]
    assert find_duplicate_values(items) == [False, False, False]


def test_add_uses_next_number(ids) -> None:
    editor = _editor(
        _select(("o1", "Option 1", "option-1"), ("o2", "Option 2", "option-2"), ("o3", "Option 3", "option-3")),
        ids,
    )
    editor.add()
    last = editor.items[-1]
    assert (last.label, last.value) == ("Option 4", "option-4")
    assert last.id == "opt-1"


def test_add_skips_taken_value(ids) -> None:
    editor = _editor(_select(("o1", "Two", "option-2")), ids)
    editor.add()
    assert editor.items[-1].value == "option-3"


def test_remove_never_empties_the_list(ids) -> None:
    editor = _editor(_select(("o1", "Only", "only")), ids)
    assert editor.can_remove is False
    before = editor.field
    assert editor.remove(0) is before
    assert len(editor.items) == 1


def test_remove_drops_option_and_dangling_default(ids) -> None:
    editor = _editor(_select(("o1", "A", "a"), ("o2", "B", "b")), ids)
    editor.set_default_value("b")
    editor.remove(1)
    assert [opt.id for opt in editor.items] == ["o1"]
    assert editor.field.select_options.default_value is None


def test_duplicate_inserts_copy_after_source(ids) -> None:
    editor = _editor(_select(("o1", "Option 1", "option-1"), ("o2", "Option 2", "option-2")), ids)
    editor.duplicate(0)
    items = editor.items
    assert len(items) == 3
    assert (items[1].label, items[1].value) == ("Option 1 (copy)", "option-1-copy")
    assert items[1].id not in {"o1", "o2"}
    assert items[2].id == "o2"


def test_duplicate_of_unique_value_never_collides(ids) -> None:
    editor = _editor(_select(("o1", "A", "a"), ("o2", "A copy", "a-copy")), ids)
    editor.duplicate(0)
    values = [opt.value for opt in editor.items]
    assert values == ["a", "a-copy-2", "a-copy"]
    assert not editor.has_duplicate_values


def test_translation_mode_only_edits_label_translations(ids) -> None:
    field = _select(("o1", "Red", "red"), ("o2", "Blue", "blue"))
    editor = _editor(field, ids, locale="es")
    assert not (editor.can_add or editor.can_remove or editor.can_duplicate or editor.can_edit_value)

    editor.add()
    editor.remove(0)
    editor.duplicate(0)
    editor.update(0, label="Rojo", value="rojo")

    assert [(o.id, o.label, o.value) for o in editor.items] == [("o1", "Red", "red"), ("o2", "Blue", "blue")]
    assert editor.field.i18n["es"].options == {"o1": "Rojo"}
    assert editor.label_for(editor.items[0]) == "Rojo"
    assert editor.label_for(editor.items[1]) == "Blue"


def test_move_reorders_by_id(ids) -> None:
    editor = _editor(_select(("o1", "A", "a"), ("o2", "B", "b"), ("o3", "C", "c")), ids)
    editor.move("o3", "o1")
    assert [opt.id for opt in editor.items] == ["o3", "o1", "o2"]


def test_default_value_must_reference_non_empty_option(ids) -> None:
    editor = _editor(_select(("o1", "A", "a"), ("o2", "Blank", " ")), ids)
    assert [opt.id for opt in editor.default_value_choices()] == ["o1"]
    with pytest.raises(InvalidDefaultValueError):
        editor.set_default_value(" ")
    with pytest.raises(InvalidDefaultValueError):
        editor.set_default_value("zzz")
    editor.set_default_value("a")
    assert editor.field.select_options.default_value == "a"


def test_renamed_value_keeps_default(ids) -> None:
    editor = _editor(_select(("o1", "A", "a"), ("o2", "B", "b"), field_type="multiselect"), ids)
    editor.set_default_value(["a", "b"])
    editor.update(0, value="alpha")
    assert editor.field.multi_select_options.default_value == ["alpha", "b"]


def test_editor_rejects_non_choice_fields(ids) -> None:
    with pytest.raises(ValueError):
        _editor(create_field("text"), ids)


def test_editor_never_mutates_input_field(ids) -> None:
    field = _select(("o1", "A", "a"))
    editor = _editor(field, ids)
    editor.add()
    editor.update(0, label="Changed")
    assert [(o.id, o.label) for o in get_options(field)] == [("o1", "A")]
