"""Error kinds and exception types shared across the harness."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Classification attached to every non-passing (or mocked) outcome."""

    MISSING_REQUIRED_PARAM = "missing_required_param"
    INVALID_FORMAT = "invalid_format"
    WRONG_TYPE = "wrong_type"
    MISSING_FIELD = "missing_field"
    MOCKED_ENVIRONMENT = "mocked_environment"
    UNEXPECTED_EXCEPTION = "unexpected_exception"


class HarnessError(Exception):
    """Base class for harness failures."""


class RegistryError(HarnessError):
    """Raised when a tool registry file cannot be loaded or is inconsistent."""


class MissingRequiredParam(HarnessError):
    """Raised when a descriptor's sample input lacks a required parameter."""

    kind = ErrorKind.MISSING_REQUIRED_PARAM

    def __init__(self, param: str):
        self.param = param
        super().__init__(f"missing required parameter: {param}")


class ShapeError(HarnessError):
    """Raised by the response validator when a payload does not match its shape."""

    kind: ErrorKind = ErrorKind.INVALID_FORMAT


class InvalidFormat(ShapeError):
    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, reason: str | None = None):
        super().__init__(reason or "response is empty or not a structured value")


class WrongType(ShapeError):
    kind = ErrorKind.WRONG_TYPE

    def __init__(self, expected: str, actual: object):
        self.expected = expected
        self.actual = type(actual).__name__
        super().__init__(f"expected {expected}, got {self.actual}")


class MissingField(ShapeError):
    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"missing field: {field}")


__all__ = [
    "ErrorKind",
    "HarnessError",
    "InvalidFormat",
    "MissingField",
    "MissingRequiredParam",
    "RegistryError",
    "ShapeError",
    "WrongType",
]
