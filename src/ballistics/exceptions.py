"""Custom exception hierarchy for projectile record handling.

Exception tree:
    BallisticsError
    +-- UnknownType              (schema declares a type the validator lacks)
    +-- RecordError              (a single raw record is invalid)
    |   +-- TypeMismatch         (field value fails its declared type)
    |   +-- MissingMandatoryField
    |   +-- NoValidCoefficient   (no g1/g7 present)
    |   +-- UnrecognizedBase     (base spelling has no canonical form)
    |   +-- UnknownDragFunction  (drag model other than g1/g7)
    +-- LoadError                (unknown record group or source)
    +-- NotFound                 (identifier absent from a record set)

Several classes also derive from the matching builtin (``TypeError``,
``KeyError``) so callers catching the builtin keep working.
"""

from typing import Any, Optional


class BallisticsError(Exception):
    """Base exception for all projectile record errors."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
    ):
        self.field = field
        self.value = value
        super().__init__(message)


class UnknownType(BallisticsError):
    """A schema declared a field type the validator does not recognize.

    This is a programming error in the schema, not bad input data.
    """

    pass


class RecordError(BallisticsError):
    """A raw record could not be turned into an entity."""

    pass


class TypeMismatch(RecordError, TypeError):
    """A field value does not satisfy its declared type."""

    pass


class MissingMandatoryField(RecordError, KeyError):
    """A mandatory field is absent from the raw record."""

    pass


class NoValidCoefficient(RecordError):
    """None of the ballistic coefficient fields are present."""

    pass


class UnrecognizedBase(RecordError):
    """A base description matches neither flat-base nor boat-tail."""

    pass


class UnknownDragFunction(RecordError, KeyError):
    """A drag function name other than the known drag models."""

    pass


class LoadError(BallisticsError):
    """Unknown record group or source name, or an unreadable source.

    Fatal to that lookup only.
    """

    pass


class NotFound(BallisticsError, KeyError):
    """The requested identifier is absent from the resolved record set."""

    pass
