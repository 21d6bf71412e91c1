from form_schema_engine.schemas.fields import (
    FIELD_TYPES,
    LEAF_FIELD_TYPES,
    AnyField,
    AnyLeafField,
    FieldValidation,
    FormField,
    GroupField,
    GroupOptions,
    LeafField,
    LocalizedFieldData,
)
from form_schema_engine.schemas.form import FormSchema, LocalizedFormMetadata
from form_schema_engine.schemas.options import FieldOption, ImageRef
from form_schema_engine.schemas.render import RenderedField, RenderedOption, RenderPlan, StepView

__all__ = [
    "FIELD_TYPES",
    "LEAF_FIELD_TYPES",
    "AnyField",
    "AnyLeafField",
    "FieldOption",
    "FieldValidation",
    "FormField",
    "FormSchema",
    "GroupField",
    "GroupOptions",
    "ImageRef",
    "LeafField",
    "LocalizedFieldData",
    "LocalizedFormMetadata",
    "RenderPlan",
    "RenderedField",
    "RenderedOption",
    "StepView",
]
