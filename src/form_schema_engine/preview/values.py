"""
Render-time field values.

A field's value is the live value when the user has entered one, otherwise its
schema-level default. Values handed out are deep copies so callers can never
alias the live values mapping.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, Mapping

from form_schema_engine.builder.fields import options_payload
from form_schema_engine.schemas.fields import AnyField, check_exhaustive


def _none(field: AnyField) -> Any:
    return None


def _single_default(field: AnyField) -> Any:
    return getattr(options_payload(field), "default_value", None)


def _multi_default(field: AnyField) -> Any:
    return list(getattr(options_payload(field), "default_value", None) or [])


def _toggle_default(field: AnyField) -> Any:
    opts = options_payload(field)
    if opts is None:
        return False
    if opts.default_checked:
        return True if opts.checked_value is None else opts.checked_value
    return False if opts.unchecked_value is None else opts.unchecked_value


VALUE_DEFAULTS: Dict[str, Callable[[AnyField], Any]] = {
    "text": _none,
    "textarea": _none,
    "number": _none,
    "email": _none,
    "phone": _none,
    "select": _single_default,
    "multiselect": _multi_default,
    "radio": _single_default,
    "toggle": _toggle_default,
    "date": _none,
    "time": _none,
    "datetime": _none,
    "group": _none,
    "imageSelect": _single_default,
    "imageSelectMulti": _multi_default,
    # Files travel separately from values (see submission.__filesMeta__).
    "fileUpload": _none,
}

check_exhaustive(VALUE_DEFAULTS, "VALUE_DEFAULTS")


def default_value(field: AnyField) -> Any:
    return VALUE_DEFAULTS[field.type](field)


def current_value(field: AnyField, values: Mapping[str, Any]) -> Any:
    if field.id in values:
        return copy.deepcopy(values[field.id])
    return default_value(field)


def apply_edit(values: Mapping[str, Any], field_id: str, value: Any) -> Dict[str, Any]:
    """Fold one UI edit into a new values dict; the input mapping is left as is."""
    out = dict(values)
    out[field_id] = copy.deepcopy(value)
    return out
