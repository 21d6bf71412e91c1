"""
Field models.

`FormField` is a discriminated union over `type`. Groups hold a `LeafField`
list, a union that has no group member, so a group nested inside a group is
rejected by validation itself.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Iterable, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from form_schema_engine.schemas.options import (
    DateOptions,
    EmailOptions,
    FileUploadOptions,
    ImageSelectMultiOptions,
    ImageSelectOptions,
    MultiSelectOptions,
    NumberOptions,
    PhoneOptions,
    RadioOptions,
    SelectOptions,
    TextareaOptions,
    ToggleOptions,
)

FIELD_TYPES = (
    "text",
    "textarea",
    "number",
    "email",
    "phone",
    "select",
    "multiselect",
    "radio",
    "toggle",
    "date",
    "time",
    "datetime",
    "group",
    "imageSelect",
    "imageSelectMulti",
    "fileUpload",
)

LEAF_FIELD_TYPES = tuple(t for t in FIELD_TYPES if t != "group")


class LocalizedFieldData(BaseModel):
    """Partial per-locale override of a field's text."""

    label: Optional[str] = None
    placeholder: Optional[str] = None
    description: Optional[str] = None
    # option id -> localized label
    options: Optional[Dict[str, str]] = None
    group_title: Optional[str] = Field(default=None, alias="groupTitle")
    group_description: Optional[str] = Field(default=None, alias="groupDescription")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class FieldValidation(BaseModel):
    required: Optional[bool] = None
    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = Field(default=None, alias="minLength")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    pattern: Optional[str] = None
    error_message: Optional[str] = Field(default=None, alias="errorMessage")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class FieldBase(BaseModel):
    """Attributes shared by every field variant."""

    id: str = Field(..., description="Stable id (unique within the schema)")
    type: str
    label: str = Field(default="", description="Label in the default locale")
    placeholder: Optional[str] = None
    description: Optional[str] = None
    show_title: Optional[bool] = Field(default=None, alias="showTitle")
    show_description: Optional[bool] = Field(default=None, alias="showDescription")
    validation: Optional[FieldValidation] = None
    i18n: Optional[Dict[str, LocalizedFieldData]] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def required(self) -> bool:
        return bool(self.validation and self.validation.required)


class TextField(FieldBase):
    type: Literal["text"] = "text"


class TextareaField(FieldBase):
    type: Literal["textarea"] = "textarea"
    textarea_options: Optional[TextareaOptions] = Field(default=None, alias="textareaOptions")


class NumberField(FieldBase):
    type: Literal["number"] = "number"
    number_options: Optional[NumberOptions] = Field(default=None, alias="numberOptions")


class EmailField(FieldBase):
    type: Literal["email"] = "email"
    email_options: Optional[EmailOptions] = Field(default=None, alias="emailOptions")


class PhoneField(FieldBase):
    type: Literal["phone"] = "phone"
    phone_options: Optional[PhoneOptions] = Field(default=None, alias="phoneOptions")


class SelectField(FieldBase):
    type: Literal["select"] = "select"
    select_options: SelectOptions = Field(default_factory=SelectOptions, alias="selectOptions")


class MultiSelectField(FieldBase):
    type: Literal["multiselect"] = "multiselect"
    multi_select_options: MultiSelectOptions = Field(default_factory=MultiSelectOptions, alias="multiSelectOptions")


class RadioField(FieldBase):
    type: Literal["radio"] = "radio"
    radio_options: RadioOptions = Field(default_factory=RadioOptions, alias="radioOptions")


class ToggleField(FieldBase):
    type: Literal["toggle"] = "toggle"
    toggle_options: ToggleOptions = Field(default_factory=ToggleOptions, alias="toggleOptions")


class DateField(FieldBase):
    type: Literal["date"] = "date"
    date_options: Optional[DateOptions] = Field(default=None, alias="dateOptions")


class TimeField(FieldBase):
    type: Literal["time"] = "time"
    date_options: Optional[DateOptions] = Field(default=None, alias="dateOptions")


class DateTimeField(FieldBase):
    type: Literal["datetime"] = "datetime"
    date_options: Optional[DateOptions] = Field(default=None, alias="dateOptions")


class ImageSelectField(FieldBase):
    type: Literal["imageSelect"] = "imageSelect"
    image_select_options: ImageSelectOptions = Field(default_factory=ImageSelectOptions, alias="imageSelectOptions")


class ImageSelectMultiField(FieldBase):
    type: Literal["imageSelectMulti"] = "imageSelectMulti"
    image_select_multi_options: ImageSelectMultiOptions = Field(
        default_factory=ImageSelectMultiOptions,
        alias="imageSelectMultiOptions",
    )


class FileUploadField(FieldBase):
    type: Literal["fileUpload"] = "fileUpload"
    file_upload_options: FileUploadOptions = Field(default_factory=FileUploadOptions, alias="fileUploadOptions")


LeafField = Annotated[
    Union[
        TextField,
        TextareaField,
        NumberField,
        EmailField,
        PhoneField,
        SelectField,
        MultiSelectField,
        RadioField,
        ToggleField,
        DateField,
        TimeField,
        DateTimeField,
        ImageSelectField,
        ImageSelectMultiField,
        FileUploadField,
    ],
    Field(discriminator="type"),
]


class GroupOptions(BaseModel):
    title: str = ""
    description: str = ""
    show_title: bool = Field(default=True, alias="showTitle")
    show_description: bool = Field(default=False, alias="showDescription")
    show_step_indicator: Optional[bool] = Field(default=None, alias="showStepIndicator")
    fields: List[LeafField] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class GroupField(FieldBase):
    type: Literal["group"] = "group"
    group_options: GroupOptions = Field(default_factory=GroupOptions, alias="groupOptions")

    @property
    def group_fields(self) -> List["AnyLeafField"]:
        return self.group_options.fields


FormField = Annotated[
    Union[
        TextField,
        TextareaField,
        NumberField,
        EmailField,
        PhoneField,
        SelectField,
        MultiSelectField,
        RadioField,
        ToggleField,
        DateField,
        TimeField,
        DateTimeField,
        GroupField,
        ImageSelectField,
        ImageSelectMultiField,
        FileUploadField,
    ],
    Field(discriminator="type"),
]

# Plain unions for annotations (no discriminator metadata).
AnyLeafField = Union[
    TextField,
    TextareaField,
    NumberField,
    EmailField,
    PhoneField,
    SelectField,
    MultiSelectField,
    RadioField,
    ToggleField,
    DateField,
    TimeField,
    DateTimeField,
    ImageSelectField,
    ImageSelectMultiField,
    FileUploadField,
]
AnyField = Union[AnyLeafField, GroupField]

FIELD_CLASSES: Dict[str, type] = {
    "text": TextField,
    "textarea": TextareaField,
    "number": NumberField,
    "email": EmailField,
    "phone": PhoneField,
    "select": SelectField,
    "multiselect": MultiSelectField,
    "radio": RadioField,
    "toggle": ToggleField,
    "date": DateField,
    "time": TimeField,
    "datetime": DateTimeField,
    "group": GroupField,
    "imageSelect": ImageSelectField,
    "imageSelectMulti": ImageSelectMultiField,
    "fileUpload": FileUploadField,
}


def check_exhaustive(table: Mapping[str, Any], what: str, types: Iterable[str] = FIELD_TYPES) -> None:
    """Fail fast when a per-type registry misses a field type."""
    missing = [t for t in types if t not in table]
    if missing:
        raise RuntimeError(f"{what} does not handle field types: {', '.join(missing)}")


check_exhaustive(FIELD_CLASSES, "FIELD_CLASSES")
