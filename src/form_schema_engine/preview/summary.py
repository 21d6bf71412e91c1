"""
Response summary (the read-only last step of a multi-step form).

Each group contributes a section of `label / display value` rows. Choice
values display as their localized option labels, file fields list the
selected file names, and empty answers display as `-`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from form_schema_engine.builder.fields import get_options, requires_options
from form_schema_engine.localization import resolve, resolve_group_text, resolve_option_label
from form_schema_engine.preview.submission import FileMeta
from form_schema_engine.preview.values import current_value
from form_schema_engine.schemas.fields import AnyLeafField, GroupField
from form_schema_engine.schemas.render import SummaryEntry, SummarySection

EMPTY_DISPLAY = "-"


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def display_value(
    field: AnyLeafField,
    value: Any,
    locale: str,
    default_locale: str,
    files: Sequence[FileMeta] = (),
) -> str:
    if field.type == "fileUpload":
        return ", ".join(f.name for f in files) or EMPTY_DISPLAY
    if value is None or value == "" or value == []:
        return EMPTY_DISPLAY

    raw = list(value) if isinstance(value, (list, tuple)) else [value]
    if requires_options(field.type):
        labels = {}
        for opt in get_options(field):
            labels.setdefault(opt.value, resolve_option_label(field, opt, locale, default_locale))
        parts = [labels.get(v) or _scalar(v) for v in raw]
    else:
        parts = [_scalar(v) for v in raw]
    return ", ".join(parts) or EMPTY_DISPLAY


def build_summary(
    groups: Sequence[GroupField],
    values: Mapping[str, Any],
    locale: str,
    default_locale: str,
    files: Mapping[str, Sequence[FileMeta]],
) -> List[SummarySection]:
    sections: List[SummarySection] = []
    for group in groups:
        entries = []
        for field in group.group_options.fields:
            value = current_value(field, values)
            entries.append(
                SummaryEntry(
                    field_id=field.id,
                    label=resolve(field, "label", locale, default_locale),
                    display_value=display_value(field, value, locale, default_locale, files.get(field.id, ())),
                )
            )
        sections.append(
            SummarySection(
                group_id=group.id,
                title=resolve_group_text(group, "title", locale, default_locale),
                entries=entries,
            )
        )
    return sections


def summary_rows(sections: Sequence[SummarySection]) -> Dict[str, str]:
    """Flatten sections to `{fieldId: display value}`."""
    return {entry.field_id: entry.display_value for section in sections for entry in section.entries}
