"""Typed field validation for declarative records.

Checks a raw value against a declared semantic field type. Validation is
structural: nothing is converted, a value either already has the right
shape or it is rejected.

Usage::

    from ballistics.validation import FieldType, check, check_strict

    check(0.45, FieldType.FLOAT)       # True
    check(True, "count")               # False -- bools are not numbers
    check_strict("168", "count")       # raises TypeMismatch
"""

import numbers
from enum import Enum
from typing import Any

from ballistics.exceptions import TypeMismatch, UnknownType


class FieldType(str, Enum):
    """Semantic type tags used in record schemas."""

    STRING = "string"
    FLOAT = "float"
    PERCENT = "percent"
    COUNT = "count"
    INT = "int"
    REFERENCE = "reference"


def _is_number(value: Any) -> bool:
    # bool is a subclass of int, but True is not a caliber
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _field_type(field_type: FieldType | str) -> FieldType:
    try:
        return FieldType(field_type)
    except ValueError:
        raise UnknownType(f"unknown field type: {field_type!r}") from None


def check(value: Any, field_type: FieldType | str) -> bool:
    """Return True if ``value`` satisfies ``field_type``.

    Args:
        value: Raw value taken from a record.
        field_type: A FieldType member or its tag string.

    Raises:
        UnknownType: If ``field_type`` is not a known tag.
    """
    ft = _field_type(field_type)

    if ft in (FieldType.STRING, FieldType.REFERENCE):
        return isinstance(value, str)
    if ft is FieldType.FLOAT:
        return _is_number(value)
    if ft is FieldType.PERCENT:
        return _is_number(value) and 0 <= value <= 1
    if ft is FieldType.COUNT:
        return _is_integer(value) and value >= 0
    # FieldType.INT
    return _is_integer(value)


def check_strict(
    value: Any, field_type: FieldType | str, field: str | None = None
) -> None:
    """Raise TypeMismatch unless ``value`` satisfies ``field_type``.

    ``field`` only enriches the error message and exception context.
    """
    if not check(value, field_type):
        tag = _field_type(field_type).value
        where = f" ({field})" if field else ""
        raise TypeMismatch(
            f"{value!r}{where} is not {tag}", field=field, value=value
        )
