"""
Preview/render projector.

`project(schema, locale, values)` turns a schema plus live values into a
`RenderPlan`. The builder preview and the real submission form both draw from
the plan, so they share field order, localization fallback and step flow.

Rules:
- Text and option labels go through the localization overlays; a locale the
  form does not support renders as the default locale.
- Flat mode (no groups, or mixed groups and fields) lists `(groupId, field)`
  pairs in schema order; groups contribute headers.
- Step mode (every top-level field is a group) only renders the active step,
  or the response summary on the Summary step.
- `project` is pure: identical inputs give equal plans, and neither the schema
  nor the values mapping is modified.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from form_schema_engine.builder.fields import get_options, options_payload, requires_options
from form_schema_engine.localization import resolve, resolve_form_text, resolve_group_text, resolve_option_label
from form_schema_engine.preview.chrome import chrome_strings
from form_schema_engine.preview.submission import FilesByField, normalize_files
from form_schema_engine.preview.summary import build_summary
from form_schema_engine.preview.values import current_value
from form_schema_engine.schemas.fields import AnyField, AnyLeafField, GroupField, check_exhaustive
from form_schema_engine.schemas.form import FormSchema
from form_schema_engine.schemas.render import GroupHeader, RenderedField, RenderedOption, RenderPlan, StepView
from form_schema_engine.steps import StepNavigator

logger = logging.getLogger(__name__)

# Keys that are rendered elsewhere (options, values, nested fields) and never
# end up in `props`.
_PAYLOAD_EXCLUDE = {"items", "default_value", "fields", "title", "description", "show_title", "show_description"}


def _payload_props(field: AnyField) -> Dict[str, Any]:
    payload = options_payload(field)
    if payload is None:
        return {}
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True, exclude=_PAYLOAD_EXCLUDE)


def _input(input_type: str) -> Callable[[AnyField], Dict[str, Any]]:
    def props(field: AnyField) -> Dict[str, Any]:
        return {"inputType": input_type, **_payload_props(field)}

    return props


def _choice(control: str) -> Callable[[AnyField], Dict[str, Any]]:
    def props(field: AnyField) -> Dict[str, Any]:
        return {"control": control, **_payload_props(field)}

    return props


def _group_props(field: AnyField) -> Dict[str, Any]:
    return {"showStepIndicator": bool(getattr(field.group_options, "show_step_indicator", None))}


FIELD_PROPS: Dict[str, Callable[[AnyField], Dict[str, Any]]] = {
    "text": _input("text"),
    "textarea": _input("textarea"),
    "number": _input("number"),
    "email": _input("email"),
    "phone": _input("tel"),
    "select": _choice("select"),
    "multiselect": _choice("checkboxes"),
    "radio": _choice("radio"),
    "toggle": _choice("switch"),
    "date": _input("date"),
    "time": _input("time"),
    "datetime": _input("datetime-local"),
    "group": _group_props,
    "imageSelect": _choice("imageCards"),
    "imageSelectMulti": _choice("imageCards"),
    "fileUpload": _input("file"),
}

check_exhaustive(FIELD_PROPS, "FIELD_PROPS")


def effective_locale(schema: FormSchema, locale: Optional[str]) -> str:
    if locale and locale in schema.supported_locales:
        return locale
    return schema.default_locale


def _is_selected(option_value: str, value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return option_value in value
    return value is not None and option_value == value


def _render_options(field: AnyLeafField, value: Any, locale: str, default_locale: str) -> List[RenderedOption]:
    out = []
    for opt in get_options(field):
        cover = opt.images[0].url if opt.images else None
        out.append(
            RenderedOption(
                id=opt.id,
                value=opt.value,
                label=resolve_option_label(field, opt, locale, default_locale),
                selected=_is_selected(opt.value, value),
                disabled=bool(opt.disabled),
                image_url=cover,
            )
        )
    return out


def render_field(
    field: AnyLeafField,
    values: Mapping[str, Any],
    locale: str,
    default_locale: str,
    *,
    group_id: Optional[str] = None,
) -> RenderedField:
    value = current_value(field, values)
    return RenderedField(
        id=field.id,
        type=field.type,
        group_id=group_id,
        label=resolve(field, "label", locale, default_locale),
        placeholder=resolve(field, "placeholder", locale, default_locale),
        description=resolve(field, "description", locale, default_locale),
        show_title=field.show_title is not False,
        show_description=bool(field.show_description),
        required=field.required,
        value=value,
        options=_render_options(field, value, locale, default_locale) if requires_options(field.type) else [],
        props=FIELD_PROPS[field.type](field),
    )


def group_header(group: GroupField, locale: str, default_locale: str) -> GroupHeader:
    opts = group.group_options
    return GroupHeader(
        id=group.id,
        title=resolve_group_text(group, "title", locale, default_locale),
        description=resolve_group_text(group, "description", locale, default_locale),
        show_title=opts.show_title is not False,
        show_description=bool(opts.show_description),
    )


def _flat(schema: FormSchema, values: Mapping[str, Any], locale: str):
    fields: List[RenderedField] = []
    headers: List[GroupHeader] = []
    for field in schema.fields:
        if isinstance(field, GroupField):
            headers.append(group_header(field, locale, schema.default_locale))
            for nested in field.group_options.fields:
                fields.append(render_field(nested, values, locale, schema.default_locale, group_id=field.id))
        else:
            fields.append(render_field(field, values, locale, schema.default_locale))
    return fields, headers


def _step_view(
    schema: FormSchema,
    nav: StepNavigator,
    values: Mapping[str, Any],
    locale: str,
    files: Mapping[str, Sequence[Any]],
    allow_cancel: bool,
) -> StepView:
    indicator = nav.step_label(locale) if schema.show_step_numbers else None
    view = StepView(
        index=nav.current,
        total=nav.total_steps,
        is_summary=nav.is_summary,
        indicator=indicator,
        actions=nav.actions(allow_cancel=allow_cancel),
    )
    if nav.is_summary:
        view.summary = build_summary(schema.groups, values, locale, schema.default_locale, files)
        return view
    group = schema.fields[nav.group_index]
    view.header = group_header(group, locale, schema.default_locale)
    view.fields = [
        render_field(f, values, locale, schema.default_locale, group_id=group.id) for f in group.group_options.fields
    ]
    return view


def project(
    schema: FormSchema,
    locale: Optional[str],
    values: Optional[Mapping[str, Any]] = None,
    *,
    step: Optional[int] = None,
    files: Optional[FilesByField] = None,
    interactive: bool = False,
    allow_cancel: bool = False,
) -> RenderPlan:
    """
    Resolve `schema` for `locale` and the live `values` into a render plan.

    `step` is the navigator position in step mode (out-of-range positions
    render the first step). Cancel is only offered on interactive forms.
    """
    values = values or {}
    loc = effective_locale(schema, locale)
    chrome = chrome_strings(loc)
    cancel = allow_cancel and interactive
    plan = RenderPlan(
        locale=loc,
        mode="empty",
        title=resolve_form_text(schema, "title", loc) or chrome["untitledForm"],
        description=resolve_form_text(schema, "description", loc),
        submit_button_text=resolve_form_text(schema, "submit_button_text", loc),
        interactive=interactive,
        chrome=chrome,
    )
    if not schema.fields:
        return plan

    if schema.is_multi_step:
        nav = StepNavigator.for_schema(schema, current=step or 0)
        plan.mode = "steps"
        plan.step = _step_view(schema, nav, values, loc, normalize_files(files), cancel)
        plan.actions = list(plan.step.actions)
        return plan

    plan.mode = "flat"
    plan.fields, plan.groups = _flat(schema, values, loc)
    logger.debug("projected flat plan: %d fields, %d groups", len(plan.fields), len(plan.groups))
    plan.actions = ["cancel", "submit"] if cancel else ["submit"]
    return plan
