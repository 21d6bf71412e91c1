from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from form_schema_engine.preview.submission import FileMeta


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Raw persisted schema (object or JSON text); always goes through import.
    form_schema: Union[Dict[str, Any], str] = Field(..., alias="schema")


class ImportRequest(_Request):
    strict: Optional[bool] = Field(
        default=None,
        description="Reject instead of repairing invariant violations (defaults to FORM_ENGINE_STRICT_IMPORT)",
    )


class ExportRequest(_Request):
    now_ms: Optional[int] = Field(default=None, alias="nowMs", description="Timestamp used in the filename")


class PreviewRequest(_Request):
    locale: Optional[str] = None
    values: Dict[str, Any] = Field(default_factory=dict)
    step: Optional[int] = Field(default=None, ge=0)
    files: Dict[str, List[FileMeta]] = Field(default_factory=dict)
    interactive: bool = False
    allow_cancel: bool = Field(default=False, alias="allowCancel")


class NavigateRequest(_Request):
    current: int = Field(default=0, ge=0)
    action: Literal["next", "previous", "reset", "sync"] = "sync"
    locale: str = "en"
    allow_cancel: bool = Field(default=False, alias="allowCancel")


class SubmissionRequest(_Request):
    values: Dict[str, Any] = Field(default_factory=dict)
    files: Dict[str, List[FileMeta]] = Field(default_factory=dict)
