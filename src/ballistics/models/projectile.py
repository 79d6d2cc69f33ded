"""Pydantic v2 model for projectile records.

A Projectile is built from one raw record mapping with
``Projectile.model_validate(raw)``. Fields are checked one by one against
the static schema tables below before the frozen model is populated, so a
record either yields a complete entity or raises.
"""

import logging
from functools import cached_property
from typing import Any, Callable, ClassVar, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self

from ballistics.exceptions import (
    MissingMandatoryField,
    NoValidCoefficient,
    RecordError,
    UnknownDragFunction,
    UnrecognizedBase,
)
from ballistics.records import RecordLocator
from ballistics.storage import built_in_locator
from ballistics.validation import FieldType, check_strict

logger = logging.getLogger(__name__)

_BASE_SEPARATORS = str.maketrans("", "", "-_ ")
_BOAT_TAIL = {"boat", "boattail", "bt"}
_FLAT_BASE = {"flat", "flatbase", "fb"}


class Projectile(BaseModel):
    """Validated projectile variant with a preferred drag model."""

    model_config = ConfigDict(frozen=True)

    RECORD_GROUP: ClassVar[str] = "projectiles"

    MANDATORY: ClassVar[dict[str, FieldType]] = {
        "name": FieldType.STRING,
        "cal": FieldType.FLOAT,
        "grains": FieldType.COUNT,
    }
    # at least one of these is required
    BALLISTIC_COEFFICIENT: ClassVar[dict[str, FieldType]] = {
        "g1": FieldType.FLOAT,
        "g7": FieldType.FLOAT,
    }
    OPTIONAL: ClassVar[dict[str, FieldType]] = {
        "sd": FieldType.FLOAT,
        "intended": FieldType.STRING,
        "base": FieldType.STRING,
        "desc": FieldType.STRING,
    }
    DRAG_FUNCTION: ClassVar[dict[str, str]] = {
        "flat": "g1",
        "boat": "g7",
    }
    DRAG_NUMBER: ClassVar[dict[str, int]] = {
        "g1": 1,
        "g7": 7,
    }

    name: str
    cal: int | float
    grains: int = Field(ge=0)
    g1: int | float | None = None
    g7: int | float | None = None
    sd: int | float | None = None
    intended: str | None = None
    base: Literal["flat", "boat"] | None = None
    desc: str | None = None
    ballistic_coefficient: dict[str, int | float] = Field(min_length=1)
    extra: dict[Any, Any] = Field(default_factory=dict)
    yaml_data: dict[Any, Any]

    @model_validator(mode="before")
    @classmethod
    def from_record(cls, data: Any) -> dict[str, Any]:
        """Validate a raw record and map it to model field values.

        Data that is already shaped as fields (e.g. from ``model_dump()``)
        is rebuilt from its ``yaml_data``, so the same checks always run.

        Raises:
            MissingMandatoryField: A mandatory field is absent.
            TypeMismatch: A present field has the wrong type.
            NoValidCoefficient: Neither g1 nor g7 is present.
            UnrecognizedBase: ``base`` is not a flat/boat spelling.
        """
        if not isinstance(data, Mapping):
            raise RecordError(
                f"record is not a mapping (got {type(data).__name__})", value=data
            )
        if "ballistic_coefficient" in data and isinstance(
            data.get("yaml_data"), Mapping
        ):
            data = data["yaml_data"]

        fields: dict[str, Any] = {"yaml_data": dict(data)}

        for field, field_type in cls.MANDATORY.items():
            if field not in data:
                raise MissingMandatoryField(
                    f"missing mandatory field: {field}", field=field
                )
            check_strict(data[field], field_type, field)
            fields[field] = data[field]

        bc: dict[str, int | float] = {}
        for field, field_type in cls.BALLISTIC_COEFFICIENT.items():
            if field in data:
                check_strict(data[field], field_type, field)
                fields[field] = data[field]
                bc[field] = data[field]
        if not bc:
            raise NoValidCoefficient(
                f"no valid ballistic coefficient for {fields['name']!r}"
            )
        fields["ballistic_coefficient"] = bc

        for field, field_type in cls.OPTIONAL.items():
            if field not in data:
                continue
            val = data[field]
            if field == "intended":
                val = str(val)
            check_strict(val, field_type, field)
            if field == "base":
                val = cls.normalize_base(val)
            fields[field] = val

        declared = {**cls.MANDATORY, **cls.BALLISTIC_COEFFICIENT, **cls.OPTIONAL}
        fields["extra"] = {k: v for k, v in data.items() if k not in declared}
        if fields["extra"]:
            logger.debug(
                "Projectile %r has undeclared fields: %s",
                fields["name"], ", ".join(map(str, fields["extra"])),
            )
        return fields

    @staticmethod
    def normalize_base(candidate: Any) -> str:
        """Normalize flat-base and boat-tail spellings to ``flat`` or ``boat``.

        Case, hyphens, underscores and spaces are ignored, so ``"Boat-Tail"``
        and ``"B T"`` both yield ``"boat"``.
        """
        c = str(candidate).lower().translate(_BASE_SEPARATORS)
        if c in _BOAT_TAIL:
            return "boat"
        if c in _FLAT_BASE:
            return "flat"
        raise UnrecognizedBase(f"unknown base: {candidate}", field="base", value=candidate)

    @classmethod
    def drag_number(cls, drag_function: str) -> int:
        """Convert a drag function name to its number, e.g. ``G7`` -> 7."""
        try:
            return cls.DRAG_NUMBER[str(drag_function).lower()]
        except KeyError:
            raise UnknownDragFunction(
                f"unknown drag function: {drag_function}", value=drag_function
            ) from None

    @cached_property
    def drag_function(self) -> str:
        """Preferred drag model among the available coefficients.

        Defaults to the first coefficient in schema order (g1 before g7).
        A known base switches to its structurally preferred model when
        that coefficient is available.
        """
        preferred = next(
            k for k in self.BALLISTIC_COEFFICIENT if k in self.ballistic_coefficient
        )
        if self.base is not None:
            by_base = self.DRAG_FUNCTION[self.base]
            if by_base in self.ballistic_coefficient:
                preferred = by_base
        return preferred

    def bc(self) -> int | float:
        """Ballistic coefficient for the preferred drag function."""
        return self.ballistic_coefficient[self.drag_function]

    def params(self) -> dict[str, Any]:
        """Drag parameters for a trajectory solver."""
        return {
            "drag_function": self.drag_function,
            "drag_number": self.drag_number(self.drag_function),
            "ballistic_coefficient": self.bc(),
        }

    def describe(self) -> str:
        """Return a multi-line human-readable summary."""
        lines = [f"PROJECTILE: {self.name}", "=========="]
        fields: dict[str, Any] = {"Caliber": self.cal, "Grains": self.grains}
        for df in self.BALLISTIC_COEFFICIENT:
            if df in self.ballistic_coefficient:
                fields[f"BC ({df.upper()})"] = self.ballistic_coefficient[df]
        if self.desc:
            fields["Desc"] = self.desc
        for label, val in fields.items():
            lines.append(f"{label.rjust(7)}: {val}")
        return "\n".join(lines)

    @classmethod
    def find(
        cls,
        file: str | None = None,
        id: str | None = None,
        predicate: Callable[[Self], Any] | None = None,
        locator: RecordLocator | None = None,
    ) -> Self | dict[str, Self]:
        """Load projectiles from the built-in records (or ``locator``).

        Returns one Projectile when ``id`` is given, else a dict keyed by
        record id, filtered by ``predicate`` if supplied.
        """
        if locator is None:
            locator = built_in_locator()
        return locator.find(
            cls.model_validate, cls.RECORD_GROUP, file=file, id=id,
            predicate=predicate,
        )
