"""
Render plan models.

The projector resolves a schema for one locale and one set of live values into
these objects; the presentation layer only has to draw them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _RenderModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RenderedOption(_RenderModel):
    id: str
    value: str
    label: str
    selected: bool = False
    disabled: bool = False
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class RenderedField(_RenderModel):
    id: str
    type: str
    group_id: Optional[str] = Field(default=None, alias="groupId")
    label: str = ""
    placeholder: str = ""
    description: str = ""
    show_title: bool = Field(default=True, alias="showTitle")
    show_description: bool = Field(default=False, alias="showDescription")
    required: bool = False
    value: Any = None
    options: List[RenderedOption] = Field(default_factory=list)
    props: Dict[str, Any] = Field(default_factory=dict)


class GroupHeader(_RenderModel):
    id: str
    title: str = ""
    description: str = ""
    show_title: bool = Field(default=True, alias="showTitle")
    show_description: bool = Field(default=False, alias="showDescription")


class SummaryEntry(_RenderModel):
    field_id: str = Field(alias="fieldId")
    label: str
    display_value: str = Field(alias="displayValue")


class SummarySection(_RenderModel):
    group_id: str = Field(alias="groupId")
    title: str
    entries: List[SummaryEntry] = Field(default_factory=list)


class StepView(_RenderModel):
    index: int
    total: int
    is_summary: bool = Field(default=False, alias="isSummary")
    indicator: Optional[str] = None
    header: Optional[GroupHeader] = None
    fields: List[RenderedField] = Field(default_factory=list)
    summary: Optional[List[SummarySection]] = None
    actions: List[Literal["previous", "cancel", "next", "submit"]] = Field(default_factory=list)


class RenderPlan(_RenderModel):
    locale: str
    mode: Literal["empty", "flat", "steps"]
    title: str
    description: str = ""
    submit_button_text: str = Field(alias="submitButtonText")
    interactive: bool = False
    # Flat mode: ordered (groupId, field) pairs; groups contribute headers.
    fields: List[RenderedField] = Field(default_factory=list)
    groups: List[GroupHeader] = Field(default_factory=list)
    step: Optional[StepView] = None
    actions: List[Literal["previous", "cancel", "next", "submit"]] = Field(default_factory=list)
    chrome: Dict[str, str] = Field(default_factory=dict)
