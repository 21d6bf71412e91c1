from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from form_schema_engine.api.models import (
    ExportRequest,
    ImportRequest,
    NavigateRequest,
    PreviewRequest,
    SubmissionRequest,
)
from form_schema_engine.errors import SchemaImportError
from form_schema_engine.preview.projector import effective_locale, project
from form_schema_engine.preview.submission import build_submission
from form_schema_engine.schema_io import ImportResult, export_filename, export_schema, import_schema
from form_schema_engine.steps import StepNavigator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forms", tags=["forms"])

RequestT = TypeVar("RequestT", bound=BaseModel)


class _Rejected(Exception):
    def __init__(self, response: JSONResponse) -> None:
        super().__init__("request rejected")
        self.response = response


def _error(error: str, message: str, status_code: int, issues: Optional[list] = None) -> JSONResponse:
    body: Dict[str, Any] = {"ok": False, "error": error, "message": message}
    if issues:
        body["issues"] = issues
    return JSONResponse(body, status_code=status_code)


def _parse(model: Type[RequestT], body: Any) -> RequestT:
    try:
        return model.model_validate(body)
    except ValidationError as e:
        logger.info("invalid %s: %d error(s)", model.__name__, e.error_count())
        raise _Rejected(_error("invalid_request", f"Invalid request: {e}", 422)) from e


def _import(raw: Any, *, strict: Optional[bool] = None) -> ImportResult:
    try:
        return import_schema(raw, strict=strict)
    except SchemaImportError as e:
        issues = [i.model_dump(by_alias=True, exclude_none=True) for i in e.issues]
        raise _Rejected(_error("schema_import_error", e.message, 422 if issues else 400, issues)) from e


def _issues(result: ImportResult) -> list:
    return [i.model_dump(by_alias=True, exclude_none=True) for i in result.issues]


@router.post("/import")
async def import_form(body: Any = Body(...)) -> JSONResponse:
    try:
        req = _parse(ImportRequest, body)
        result = _import(req.form_schema, strict=req.strict)
    except _Rejected as r:
        return r.response
    return JSONResponse({"ok": True, "schema": export_schema(result.schema), "issues": _issues(result)})


@router.post("/export")
async def export_form(body: Any = Body(...)) -> JSONResponse:
    try:
        req = _parse(ExportRequest, body)
        result = _import(req.form_schema)
    except _Rejected as r:
        return r.response
    return JSONResponse(
        {
            "ok": True,
            "filename": export_filename(result.schema, now_ms=req.now_ms),
            "schema": export_schema(result.schema),
            "issues": _issues(result),
        }
    )


@router.post("/preview")
async def preview_form(body: Any = Body(...)) -> JSONResponse:
    try:
        req = _parse(PreviewRequest, body)
        result = _import(req.form_schema)
    except _Rejected as r:
        return r.response
    plan = project(
        result.schema,
        req.locale,
        req.values,
        step=req.step,
        files=req.files,
        interactive=req.interactive,
        allow_cancel=req.allow_cancel,
    )
    return JSONResponse({"ok": True, "plan": plan.model_dump(mode="json", by_alias=True)})


@router.post("/navigate")
async def navigate_form(body: Any = Body(...)) -> JSONResponse:
    try:
        req = _parse(NavigateRequest, body)
        result = _import(req.form_schema)
    except _Rejected as r:
        return r.response
    nav = StepNavigator.for_schema(result.schema, current=req.current)
    if req.action == "next":
        nav = nav.next()
    elif req.action == "previous":
        nav = nav.previous()
    elif req.action == "reset":
        nav = nav.reset()
    locale = effective_locale(result.schema, req.locale)
    return JSONResponse(
        {
            "ok": True,
            "current": nav.current,
            "totalSteps": nav.total_steps,
            "isSummary": nav.is_summary,
            "indicator": nav.step_label(locale) if nav.is_multi_step else None,
            "actions": nav.actions(allow_cancel=req.allow_cancel),
        }
    )


@router.post("/submission")
async def submission(body: Any = Body(...)) -> JSONResponse:
    try:
        req = _parse(SubmissionRequest, body)
        result = _import(req.form_schema)
    except _Rejected as r:
        return r.response
    return JSONResponse({"ok": True, "data": build_submission(result.schema, req.values, req.files)})
