"""Response shape validation for tool call payloads."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .errors import InvalidFormat, MissingField, ShapeError, WrongType
from .schema import ArrayShape, ObjectShape, ResponseShape, ValidationResult


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _require_fields(payload: Mapping[str, Any], fields: Sequence[str]) -> None:
    for field in fields:
        if field not in payload:
            raise MissingField(field)


def _check_array(response: Any, shape: ArrayShape) -> None:
    if not _is_sequence(response):
        raise WrongType("array", response)
    if not response:
        return
    # Only the first item is inspected; the rest are assumed homogeneous.
    first = response[0]
    if not isinstance(first, Mapping):
        raise WrongType("array of objects", first)
    _require_fields(first, shape.item_fields)


def _check_object(response: Any, shape: ObjectShape) -> None:
    if not isinstance(response, Mapping):
        raise WrongType("object", response)
    _require_fields(response, shape.required_fields)


def validate(response: Any, expected_shape: ResponseShape) -> ValidationResult:
    """Check ``response`` against ``expected_shape`` without side effects.

    Any structured value (a mapping or a non-string sequence) is accepted as a
    starting point; ``None`` and scalars fail with ``invalid_format``. Object
    shapes report the first missing field in declared order. Array shapes only
    look at the first item, so an empty list always validates.
    """
    try:
        if response is None or not (isinstance(response, Mapping) or _is_sequence(response)):
            raise InvalidFormat()
        if isinstance(expected_shape, ArrayShape):
            _check_array(response, expected_shape)
        else:
            _check_object(response, expected_shape)
    except ShapeError as exc:
        return ValidationResult.failed(exc.kind, str(exc))
    return ValidationResult.ok()


__all__ = ["validate"]
