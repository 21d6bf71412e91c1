from form_schema_engine.preview.projector import project
from form_schema_engine.preview.submission import build_submission
from form_schema_engine.preview.values import apply_edit

__all__ = ["apply_edit", "build_submission", "project"]
