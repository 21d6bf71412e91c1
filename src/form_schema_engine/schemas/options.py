"""
Per-field-type option payloads.

These classes mirror the persisted JSON contract (camelCase keys) and are used
to validate imported schemas and to build new fields with empty-but-valid
payloads.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ImageRef(BaseModel):
    """Reference to an image already stored by the blob collaborator."""

    id: str = Field(..., description="Stable id (used for drag-and-drop ordering)")
    url: str = Field(..., description="Resolved URL")
    name: Optional[str] = None
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    thumbnail: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class FieldOption(BaseModel):
    id: str = Field(..., description="Option id (unique within its field)")
    label: str = Field(default="", description="Option label (user-facing, default locale)")
    value: str = Field(default="", description="Value sent in the form submission")
    disabled: Optional[bool] = None
    # Order is carousel order, [0] is the cover image.
    images: Optional[List[ImageRef]] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class _OptionsBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ChoiceOptions(_OptionsBase):
    items: List[FieldOption] = Field(default_factory=list)


class SelectOptions(ChoiceOptions):
    placeholder: Optional[str] = None
    default_value: Optional[str] = Field(default=None, alias="defaultValue")
    allow_clear: Optional[bool] = Field(default=None, alias="allowClear")


class MultiSelectOptions(ChoiceOptions):
    placeholder: Optional[str] = None
    default_value: Optional[List[str]] = Field(default=None, alias="defaultValue")
    max_selections: Optional[int] = Field(default=None, alias="maxSelections", ge=1)
    layout: Optional[Literal["vertical", "horizontal"]] = None


class RadioOptions(ChoiceOptions):
    default_value: Optional[str] = Field(default=None, alias="defaultValue")
    layout: Optional[Literal["vertical", "horizontal"]] = None


class ImageSelectOptions(ChoiceOptions):
    placeholder: Optional[str] = None
    default_value: Optional[str] = Field(default=None, alias="defaultValue")
    allow_clear: Optional[bool] = Field(default=None, alias="allowClear")
    layout: Optional[Literal["grid", "list"]] = None
    columns: Optional[Literal[2, 3, 4]] = None


class ImageSelectMultiOptions(ChoiceOptions):
    placeholder: Optional[str] = None
    default_value: Optional[List[str]] = Field(default=None, alias="defaultValue")
    max_selections: Optional[int] = Field(default=None, alias="maxSelections", ge=1)
    layout: Optional[Literal["grid", "list"]] = None
    columns: Optional[Literal[2, 3, 4]] = None


class ToggleOptions(_OptionsBase):
    checked_value: Optional[Union[bool, str]] = Field(default=None, alias="checkedValue")
    unchecked_value: Optional[Union[bool, str]] = Field(default=None, alias="uncheckedValue")
    default_checked: Optional[bool] = Field(default=None, alias="defaultChecked")
    style: Optional[Literal["toggle", "checkbox"]] = None


class NumberOptions(_OptionsBase):
    step: Optional[float] = None
    display_type: Optional[Literal["number", "currency", "percentage"]] = Field(default=None, alias="displayType")
    currency_code: Optional[str] = Field(default=None, alias="currencyCode")
    decimals: Optional[int] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    thousands_separator: Optional[bool] = Field(default=None, alias="thousandsSeparator")
    allow_negative: Optional[bool] = Field(default=None, alias="allowNegative")


class TextareaOptions(_OptionsBase):
    rows: Optional[int] = None
    min_rows: Optional[int] = Field(default=None, alias="minRows")
    max_rows: Optional[int] = Field(default=None, alias="maxRows")
    resize: Optional[Literal["none", "vertical", "horizontal", "both"]] = None
    show_character_count: Optional[bool] = Field(default=None, alias="showCharacterCount")
    auto_grow: Optional[bool] = Field(default=None, alias="autoGrow")


class EmailOptions(_OptionsBase):
    show_validation_icon: Optional[bool] = Field(default=None, alias="showValidationIcon")
    allow_multiple: Optional[bool] = Field(default=None, alias="allowMultiple")
    validate_on_blur: Optional[bool] = Field(default=None, alias="validateOnBlur")


class PhoneOptions(_OptionsBase):
    format: Optional[Literal["national", "international", "custom"]] = None
    mask: Optional[str] = None
    default_country: Optional[str] = Field(default=None, alias="defaultCountry")
    show_country_code: Optional[bool] = Field(default=None, alias="showCountryCode")


class DateOptions(_OptionsBase):
    mode: Optional[Literal["date", "time", "datetime"]] = None
    hour_cycle: Optional[Literal[12, 24]] = Field(default=None, alias="hourCycle")
    include_seconds: Optional[bool] = Field(default=None, alias="includeSeconds")
    min_date: Optional[str] = Field(default=None, alias="minDate")
    max_date: Optional[str] = Field(default=None, alias="maxDate")
    disable_weekends: Optional[bool] = Field(default=None, alias="disableWeekends")
    min_time: Optional[str] = Field(default=None, alias="minTime")
    max_time: Optional[str] = Field(default=None, alias="maxTime")
    placeholder: Optional[str] = None


class FileUploadOptions(_OptionsBase):
    accept: Optional[List[str]] = None
    max_size_mb: Optional[float] = Field(default=None, alias="maxSizeMB")
    max_files: Optional[int] = Field(default=None, alias="maxFiles", ge=1)
    display_style: Optional[Literal["dropzone", "button"]] = Field(default=None, alias="displayStyle")
    show_file_list: Optional[bool] = Field(default=None, alias="showFileList")
    placeholder: Optional[str] = None
