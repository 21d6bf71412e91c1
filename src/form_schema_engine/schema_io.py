"""
Schema import/export (the persistence contract).

Export serializes the whole schema verbatim (camelCase keys, unset optionals
omitted). Import accepts a dict, JSON text or bytes and:

1. rejects malformed JSON or a missing `fields` array,
2. merges structural defaults for missing top-level keys
   (`supportedLocales` -> `[FORM_ENGINE_DEFAULT_LOCALE]`, `defaultLocale` -> first supported locale),
3. validates the field model (nested groups are rejected here),
4. repairs the remaining invariants, or rejects them when `strict`.

A rejected import raises `SchemaImportError` and never touches the caller's data.
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from form_schema_engine.config import load_settings
from form_schema_engine.errors import SchemaImportError
from form_schema_engine.ids import IdFactory, random_ids
from form_schema_engine.schemas.form import FormSchema
from form_schema_engine.validation import SchemaIssue, check_schema, repair_schema

logger = logging.getLogger(__name__)

RawSchema = Union[str, bytes, bytearray, Dict[str, Any]]


@dataclass
class ImportResult:
    schema: FormSchema
    issues: List[SchemaIssue] = field(default_factory=list)


def export_schema(schema: FormSchema) -> Dict[str, Any]:
    return schema.model_dump(mode="json", by_alias=True, exclude_none=True)


def export_schema_json(schema: FormSchema, *, indent: Optional[int] = 2) -> str:
    return json.dumps(export_schema(schema), ensure_ascii=False, indent=indent)


def export_filename(schema: FormSchema, *, now_ms: Optional[int] = None) -> str:
    """`form-<slugified title>-<timestamp ms>.json`"""
    ts = int(time.time() * 1000) if now_ms is None else int(now_ms)
    slug = re.sub(r"\s+", "-", (schema.title or "").strip()).lower() or "export"
    return f"form-{slug}-{ts}.json"


def _load_raw(raw: RawSchema) -> Dict[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchemaImportError(f"Schema is not valid UTF-8: {e}") from e
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SchemaImportError(f"Malformed JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e
    if not isinstance(raw, dict):
        raise SchemaImportError("Invalid form settings format: expected a JSON object")
    return raw


def merge_defaults(data: Dict[str, Any], *, default_locale: str = "en") -> Dict[str, Any]:
    """Fill missing top-level locale keys; returns a new dict."""
    merged = dict(data)
    supported = merged.get("supportedLocales")
    if not isinstance(supported, list) or not [s for s in supported if s]:
        supported = [default_locale]
    merged["supportedLocales"] = supported
    if not merged.get("defaultLocale"):
        merged["defaultLocale"] = next(s for s in supported if s)
    return merged


def _issue_from_error(err: Dict[str, Any]) -> SchemaIssue:
    loc = ".".join(str(part) for part in err.get("loc", ()))
    ctx = err.get("ctx") or {}
    if err.get("type") == "union_tag_invalid" and ctx.get("tag") == "group":
        return SchemaIssue(code="nested_group", message=f"{loc}: groups cannot contain groups")
    return SchemaIssue(code="invalid_value", message=f"{loc}: {err.get('msg', 'invalid value')}")


def import_schema(
    raw: RawSchema,
    *,
    ids: IdFactory = random_ids,
    strict: Optional[bool] = None,
) -> ImportResult:
    settings = load_settings()
    if strict is None:
        strict = settings.strict_import

    data = _load_raw(raw)
    if not isinstance(data.get("fields"), list):
        raise SchemaImportError("Invalid form settings format: 'fields' must be an array")

    merged = merge_defaults(data, default_locale=settings.default_locale)
    try:
        schema = FormSchema.model_validate(merged)
    except ValidationError as e:
        issues = [_issue_from_error(err) for err in e.errors()]
        logger.info("schema import rejected: %d validation error(s)", len(issues))
        raise SchemaImportError(f"Invalid form schema: {issues[0].message}", issues) from e

    if strict:
        problems = check_schema(schema)
        if problems:
            logger.info("strict schema import rejected: %s", ", ".join(p.code for p in problems))
            raise SchemaImportError(f"Schema violates invariants: {problems[0].message}", problems)
        return ImportResult(schema=schema)

    schema, issues = repair_schema(schema, ids=ids)
    return ImportResult(schema=schema, issues=issues)
