from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models.field_schema import FieldKind, FieldRule, FieldSchema
from .currency import is_number

"""Data-driven row validation.

validate_row walks every rule of the schema and collects human readable
messages. It never short-circuits and never raises for bad data; extra
columns not declared in the schema are ignored.
"""

__all__ = [
    "validate_row",
]


def _check_rule(rule: FieldRule, values: Mapping[str, Any]) -> str | None:
    value = values.get(rule.name)
    if value is None:
        return f"{rule.name} is required" if rule.required else None

    if rule.kind is FieldKind.TEXT:
        if not isinstance(value, str):
            return f"{rule.name} must be a string"
        if value == "":
            return f"{rule.name} is not allowed to be empty"
    elif rule.kind is FieldKind.NUMBER:
        if not is_number(value):
            return f"{rule.name} must be a number"
    elif rule.kind is FieldKind.TEXT_OR_NUMBER:
        if value == "":
            return f"{rule.name} is not allowed to be empty"
        if not (isinstance(value, str) or is_number(value)):
            return f"{rule.name} must be a string or a number"
    return None


def validate_row(values: Mapping[str, Any], schema: FieldSchema) -> list[str]:
    """Return validation messages for a row, in schema order (empty if valid)."""
    errors: list[str] = []
    for rule in schema:
        message = _check_rule(rule, values)
        if message is not None:
            errors.append(message)
    return errors
