from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from form_schema_engine.schemas.fields import FormField, GroupField

DEFAULT_TITLE = "New Form"
DEFAULT_SUBMIT_TEXT = "Submit"


class LocalizedFormMetadata(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    submit_button_text: Optional[str] = Field(default=None, alias="submitButtonText")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class FormSchema(BaseModel):
    """
    Ordered top-level fields/groups plus form-level metadata.

    Matches the `FormSettings` JSON the builder exports and the submission
    form consumes.
    """

    title: str = DEFAULT_TITLE
    description: str = ""
    fields: List[FormField] = Field(default_factory=list)
    submit_button_text: str = Field(default=DEFAULT_SUBMIT_TEXT, alias="submitButtonText")
    supported_locales: List[str] = Field(default_factory=lambda: ["en"], alias="supportedLocales")
    default_locale: str = Field(default="en", alias="defaultLocale")
    show_step_numbers: bool = Field(default=True, alias="showStepNumbers")
    show_response_summary: bool = Field(default=False, alias="showResponseSummary")
    i18n: Optional[Dict[str, LocalizedFormMetadata]] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def has_groups(self) -> bool:
        return any(f.type == "group" for f in self.fields)

    @property
    def is_multi_step(self) -> bool:
        """Step mode: at least one field and every top-level field is a group."""
        return bool(self.fields) and all(f.type == "group" for f in self.fields)

    @property
    def groups(self) -> List[GroupField]:
        return [f for f in self.fields if isinstance(f, GroupField)]
