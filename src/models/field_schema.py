from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Declarative field schema for invoice data rows.

The schema is an ordered collection of FieldRule entries. Adding a required
column is a configuration change (see src/config/loader.py), not a code change.
"""

__all__ = [
    "FieldKind",
    "FieldRule",
    "FieldSchema",
    "DEFAULT_INVOICE_ROW_SCHEMA",
]


class FieldKind(Enum):
    """Expected cell kind for a schema field."""
    TEXT = "text"
    NUMBER = "number"
    TEXT_OR_NUMBER = "text_or_number"


@dataclass(frozen=True)
class FieldRule:
    name: str  # ヘッダ行の列名 (trim 済)
    kind: FieldKind
    required: bool = True


@dataclass(frozen=True)
class FieldSchema:
    """Ordered set of field rules. Validation messages follow this order."""
    rules: tuple[FieldRule, ...]

    def __post_init__(self) -> None:
        names = [r.name for r in self.rules]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate field names in schema: {names}")

    @property
    def field_names(self) -> list[str]:
        return [r.name for r in self.rules]

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


DEFAULT_INVOICE_ROW_SCHEMA = FieldSchema(
    rules=(
        FieldRule("Customer", FieldKind.TEXT),
        FieldRule("Cust No", FieldKind.TEXT_OR_NUMBER),
        FieldRule("Project Type", FieldKind.TEXT),
        FieldRule("Quantity", FieldKind.NUMBER),
        FieldRule("Price Per Item", FieldKind.NUMBER),
        FieldRule("Item Price Currency", FieldKind.TEXT),
        FieldRule("Invoice Total Price", FieldKind.NUMBER),
        FieldRule("Invoice Currency", FieldKind.TEXT),
        FieldRule("Status", FieldKind.TEXT),
    )
)
