from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from form_schema_engine.builder.fields import iter_leaf_fields
from form_schema_engine.preview.values import current_value
from form_schema_engine.schemas.form import FormSchema

logger = logging.getLogger(__name__)

FILES_META_KEY = "__filesMeta__"


class FileMeta(BaseModel):
    """Metadata of one selected file; the bytes go to the upload collaborator."""

    name: str
    size: int = 0
    type: str = ""

    model_config = ConfigDict(extra="ignore")


FileLike = Union[FileMeta, Mapping[str, Any]]
FilesByField = Mapping[str, Sequence[FileLike]]


def normalize_files(files: Optional[FilesByField]) -> Dict[str, List[FileMeta]]:
    out: Dict[str, List[FileMeta]] = {}
    for field_id, items in (files or {}).items():
        out[field_id] = [f if isinstance(f, FileMeta) else FileMeta.model_validate(f) for f in items or []]
    return out


def build_submission(
    schema: FormSchema,
    values: Mapping[str, Any],
    files: Optional[FilesByField] = None,
) -> Dict[str, Any]:
    """
    Payload handed to the response consumer.

    `{fieldId: value}` for every leaf field (schema defaults applied), plus
    `__filesMeta__: {fieldId: [{name, size, type}]}` when any file field has
    files. File fields themselves carry no value.
    """
    data: Dict[str, Any] = {}
    file_field_ids = set()
    for _, field in iter_leaf_fields(schema.fields):
        if field.type == "fileUpload":
            file_field_ids.add(field.id)
            continue
        data[field.id] = current_value(field, values)

    meta = {
        field_id: [f.model_dump() for f in items]
        for field_id, items in normalize_files(files).items()
        if items and field_id in file_field_ids
    }
    if meta:
        data[FILES_META_KEY] = meta
    logger.debug("built submission: %d values, %d file fields", len(data) - (1 if meta else 0), len(meta))
    return data
