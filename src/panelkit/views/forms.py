"""Schema-driven form builder.

Forms are data: a list of ``FormField`` entries, each with its validations.
The same structure renders a create form for an entity and the configuration
form of an action.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import Field

from panelkit.core.types import CamelModel, EntityField, FieldType
from panelkit.exceptions import ValidationError

CREATE_FIELD_MAX_LENGTH = 32

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class FormFieldType(StrEnum):
    """Input widgets a form field can ask for."""

    TEXT = "text"
    PASSWORD = "password"
    EMAIL = "email"
    NUMBER = "number"
    URL = "url"
    TEXTAREA = "textarea"
    BOOLEAN = "boolean"
    SELECTION = "selection"


class Validation(CamelModel):
    """One rule, e.g. ``{"validationType": "maxLength", "constraint": {"length": 32}}``."""

    validation_type: str
    constraint: dict[str, Any] = Field(default_factory=dict)
    error_message: str | None = None


class FormField(CamelModel):
    """One input of a form."""

    name: str
    label: str
    type: FormFieldType = FormFieldType.TEXT
    validations: list[Validation] = Field(default_factory=list)
    options: list[str] | None = None

    @property
    def required(self) -> bool:
        """Whether the field carries a ``required`` validation."""
        return any(v.validation_type == "required" for v in self.validations)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "") or value == []


def _check_required(value: Any, constraint: dict[str, Any]) -> str | None:
    return "Required" if _is_empty(value) else None


def _check_max_length(value: Any, constraint: dict[str, Any]) -> str | None:
    length = constraint.get("length", CREATE_FIELD_MAX_LENGTH)
    if isinstance(value, str) and len(value) > length:
        return f"Must not be more than {length} characters"
    return None


def _check_min_length(value: Any, constraint: dict[str, Any]) -> str | None:
    length = constraint.get("length", 0)
    if isinstance(value, str) and len(value) < length:
        return f"Must be at least {length} characters"
    return None


def _check_email(value: Any, constraint: dict[str, Any]) -> str | None:
    if isinstance(value, str) and not EMAIL_PATTERN.match(value):
        return "Invalid email"
    return None


def _check_number(value: Any, constraint: dict[str, Any]) -> str | None:
    if isinstance(value, bool):
        return "Invalid number"
    if isinstance(value, (int, float)):
        return None
    try:
        float(value)
    except (TypeError, ValueError):
        return "Invalid number"
    return None


def _check_url(value: Any, constraint: dict[str, Any]) -> str | None:
    if isinstance(value, str) and not value.startswith(("http://", "https://")):
        return "Invalid URL"
    return None


VALIDATORS: dict[str, Callable[[Any, dict[str, Any]], str | None]] = {
    "required": _check_required,
    "maxLength": _check_max_length,
    "minLength": _check_min_length,
    "isEmail": _check_email,
    "isNumber": _check_number,
    "isUrl": _check_url,
}


class FormSchema(CamelModel):
    """A complete form: its fields, button and starting values."""

    fields: list[FormField] = Field(default_factory=list)
    button_text: str = "Submit"
    initial_values: dict[str, Any] = Field(default_factory=dict)

    def validate_values(self, values: dict[str, Any]) -> dict[str, str]:
        """Return ``{field: first error}`` for every invalid field.

        Optional fields that are left empty skip their other rules.
        """
        errors: dict[str, str] = {}
        for form_field in self.fields:
            value = values.get(form_field.name)
            if _is_empty(value) and not form_field.required:
                continue
            for validation in form_field.validations:
                check = VALIDATORS.get(validation.validation_type)
                if check is None:
                    continue
                message = check(value, validation.constraint)
                if message:
                    errors[form_field.name] = validation.error_message or message
                    break
        return errors

    def validate_or_raise(self, values: dict[str, Any]) -> None:
        """Raise ``ValidationError`` listing the field errors, if any."""
        errors = self.validate_values(values)
        if errors:
            raise ValidationError(
                f"Invalid values for: {', '.join(sorted(errors))}", field_errors=errors
            )


def build_form_fields(
    schema: dict[str, dict[str, Any]],
    labels: dict[str, str] | None = None,
) -> list[FormField]:
    """Build fields from a ``{name: {type, validations, label, options}}`` mapping."""
    labels = labels or {}
    fields = []
    for name, definition in schema.items():
        fields.append(
            FormField(
                name=name,
                label=labels.get(name) or definition.get("label") or name,
                type=definition.get("type", FormFieldType.TEXT),
                validations=[Validation.model_validate(v) for v in definition.get("validations", [])],
                options=definition.get("options"),
            )
        )
    return fields


def build_form(
    schema: dict[str, dict[str, Any]],
    button_text: str = "Submit",
    initial_values: dict[str, Any] | None = None,
) -> FormSchema:
    """Build a form from a configuration schema mapping."""
    return FormSchema(
        fields=build_form_fields(schema),
        button_text=button_text,
        initial_values=initial_values or {},
    )


_ENTITY_FIELD_INPUTS = {
    FieldType.NUMBER: FormFieldType.NUMBER,
    FieldType.BOOLEAN: FormFieldType.BOOLEAN,
    FieldType.ENUM: FormFieldType.SELECTION,
    FieldType.JSON: FormFieldType.TEXTAREA,
}


def build_create_entity_form(
    fields: list[EntityField],
    labels: dict[str, str] | None = None,
) -> FormSchema:
    """One required input per field, each capped at 32 characters."""
    labels = labels or {}
    return FormSchema(
        fields=[
            FormField(
                name=field.name,
                label=labels.get(field.name) or field.name,
                type=_ENTITY_FIELD_INPUTS.get(FieldType(field.type), FormFieldType.TEXT),
                validations=[
                    Validation(validation_type="required"),
                    Validation(
                        validation_type="maxLength",
                        constraint={"length": CREATE_FIELD_MAX_LENGTH},
                    ),
                ],
                options=field.enumeration,
            )
            for field in fields
        ],
        button_text="Create",
    )
