"""
Schema invariant checks and repairs.

Nested groups never reach this module: the field model rejects them while
parsing. What remains is checked here and either repaired (fresh ids, pruned
overlays, cleared defaults) or reported so strict callers can reject it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from form_schema_engine.builder.fields import (
    get_options,
    id_prefix,
    options_payload,
    requires_options,
    with_options,
    with_payload,
)
from form_schema_engine.ids import IdFactory, random_ids
from form_schema_engine.schemas.fields import AnyField, GroupField
from form_schema_engine.schemas.form import FormSchema

logger = logging.getLogger(__name__)


class SchemaIssue(BaseModel):
    code: str = Field(..., description="Machine-readable issue code")
    message: str
    field_id: Optional[str] = Field(default=None, alias="fieldId")
    repaired: bool = False

    model_config = ConfigDict(populate_by_name=True)


class _Checker:
    def __init__(self, *, ids: IdFactory, repair: bool) -> None:
        self.ids = ids
        self.repair = repair
        self.issues: List[SchemaIssue] = []
        self.seen_ids: set = set()

    def report(self, code: str, message: str, field_id: Optional[str] = None) -> None:
        issue = SchemaIssue(code=code, message=message, field_id=field_id, repaired=self.repair)
        self.issues.append(issue)
        if self.repair:
            logger.warning("schema repaired: %s (%s)", message, code)

    def schema(self, schema: FormSchema) -> FormSchema:
        supported: List[str] = []
        for locale in schema.supported_locales:
            if locale and locale not in supported:
                supported.append(locale)
        if supported != list(schema.supported_locales):
            self.report("duplicate_locale", "supportedLocales contains duplicates or blanks")
        default = schema.default_locale or (supported[0] if supported else "")
        if default and default not in supported:
            self.report(
                "default_locale_unsupported",
                f"defaultLocale {default!r} is not in supportedLocales",
            )
            supported.insert(0, default)
        translated = set(supported) - {default}

        i18n = schema.i18n
        if i18n:
            stray = sorted(k for k in i18n if k not in translated)
            if stray:
                self.report("stray_locale_overlay", f"form i18n has overlays for {stray}")
                i18n = {k: v for k, v in i18n.items() if k in translated}

        fields = [self.field(f, translated) for f in schema.fields]
        if not self.repair:
            return schema
        return schema.model_copy(
            update={
                "supported_locales": supported,
                "default_locale": default,
                "i18n": i18n or None,
                "fields": fields,
            }
        )

    def field(self, field: AnyField, translated: set) -> AnyField:
        update: Dict[str, Any] = {}
        if not field.id or field.id in self.seen_ids:
            new_id = self.ids(id_prefix(field.type))
            self.report(
                "duplicate_field_id",
                f"field id {field.id!r} is missing or already used",
                field_id=field.id or None,
            )
            update["id"] = new_id
            self.seen_ids.add(new_id)
        else:
            self.seen_ids.add(field.id)

        if field.i18n:
            stray = sorted(k for k in field.i18n if k not in translated)
            if stray:
                self.report("stray_locale_overlay", f"field {field.id!r} has overlays for {stray}", field_id=field.id)
                update["i18n"] = {k: v for k, v in field.i18n.items() if k in translated} or None

        out = field.model_copy(update=update) if update else field
        if isinstance(out, GroupField):
            nested = [self.field(f, translated) for f in out.group_options.fields]
            out = out.model_copy(update={"group_options": out.group_options.model_copy(update={"fields": nested})})
        if requires_options(out.type):
            out = self.options(out)
        return out

    def options(self, field: AnyField) -> AnyField:
        items = get_options(field)
        seen: set = set()
        fixed = []
        changed = False
        for opt in items:
            if not opt.id or opt.id in seen:
                new_id = self.ids("opt")
                self.report(
                    "duplicate_option_id",
                    f"option id {opt.id!r} in field {field.id!r} is missing or already used",
                    field_id=field.id,
                )
                opt = opt.model_copy(update={"id": new_id})
                changed = True
            seen.add(opt.id)
            fixed.append(opt)
        if changed:
            field = with_options(field, fixed)

        eligible = {opt.value for opt in fixed if (opt.value or "").strip()}
        current = getattr(options_payload(field), "default_value", None)
        if current is None:
            return field
        if isinstance(current, list):
            kept = [v for v in current if v in eligible]
            if kept != current:
                self.report(
                    "default_value_missing_option",
                    f"field {field.id!r} default values {current} reference missing or empty options",
                    field_id=field.id,
                )
                field = with_payload(field, default_value=kept or None)
        elif current not in eligible:
            self.report(
                "default_value_missing_option",
                f"field {field.id!r} default value {current!r} references a missing or empty option",
                field_id=field.id,
            )
            field = with_payload(field, default_value=None)
        return field


def check_schema(schema: FormSchema) -> List[SchemaIssue]:
    """Report invariant violations without changing anything."""
    checker = _Checker(ids=random_ids, repair=False)
    checker.schema(schema)
    return checker.issues


def repair_schema(schema: FormSchema, *, ids: IdFactory = random_ids) -> Tuple[FormSchema, List[SchemaIssue]]:
    """Return a schema satisfying every invariant plus the list of repairs applied."""
    checker = _Checker(ids=ids, repair=True)
    repaired = checker.schema(schema)
    return repaired, checker.issues

