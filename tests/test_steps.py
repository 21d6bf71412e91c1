from __future__ import annotations

import pytest

from form_schema_engine.schemas.fields import GroupField, GroupOptions, TextField
from form_schema_engine.schemas.form import FormSchema
from form_schema_engine.steps import StepNavigator


def _steps(count: int, *, summary: bool = True, **kwargs) -> FormSchema:
    groups = [
        GroupField(
            id=f"g{i}",
            label=f"Step {i + 1}",
            group_options=GroupOptions(title=f"Step {i + 1}", fields=[TextField(id=f"f{i}", label=f"Q{i}")]),
        )
        for i in range(count)
    ]
    return FormSchema(fields=groups, show_response_summary=summary, **kwargs)


@pytest.mark.parametrize("groups", [1, 2, 5])
def test_next_reaches_summary_and_previous_returns(groups: int) -> None:
    nav = StepNavigator.for_schema(_steps(groups))
    assert nav.total_steps == groups + 1

    for _ in range(groups):
        nav = nav.next()
    assert nav.is_summary
    assert nav.group_index is None

    back = nav.previous()
    assert back.current == groups - 1
    assert back.group_index == groups - 1


def test_navigation_is_noop_at_the_ends() -> None:
    nav = StepNavigator.for_schema(_steps(2))
    assert nav.previous() == nav
    last = nav.next().next()
    assert last.is_summary
    assert last.next() == last


def test_without_summary_last_group_is_terminal() -> None:
    nav = StepNavigator.for_schema(_steps(3, summary=False))
    assert nav.total_steps == 3
    last = nav.next().next()
    assert last.is_last and not last.is_summary
    assert last.actions() == ["previous", "submit"]


def test_actions_per_position() -> None:
    nav = StepNavigator.for_schema(_steps(2))
    assert nav.actions() == ["next"]
    assert nav.actions(allow_cancel=True) == ["cancel", "next"]
    assert nav.next().actions() == ["previous", "next"]
    assert nav.next().next().actions() == ["previous", "submit"]


def test_sync_resets_when_position_out_of_range() -> None:
    nav = StepNavigator.for_schema(_steps(3), current=3)
    assert nav.is_summary

    shrunk = _steps(1)
    assert nav.sync(shrunk).current == 0

    still_valid = StepNavigator.for_schema(_steps(3), current=1).sync(_steps(2))
    assert still_valid.current == 1


def test_flat_and_mixed_forms_are_not_multi_step() -> None:
    flat = FormSchema(fields=[TextField(id="f1", label="Name")])
    mixed = FormSchema(fields=[*_steps(1).fields, TextField(id="f9", label="Loose")], show_response_summary=True)
    for schema in (flat, mixed, FormSchema()):
        nav = StepNavigator.for_schema(schema)
        assert not nav.is_multi_step
        assert nav.total_steps == 0
        assert nav.next() == nav
        assert nav.actions() == []


def test_step_label_is_localized() -> None:
    nav = StepNavigator.for_schema(_steps(2)).next()
    assert nav.step_label("en") == "STEP 2 OF 3"
    assert nav.step_label("es") == "PASO 2 DE 3"
    assert nav.step_label("fr") == "STEP 2 OF 3"


def test_reset_returns_to_first_step() -> None:
    nav = StepNavigator.for_schema(_steps(2), current=2)
    assert nav.reset().current == 0
