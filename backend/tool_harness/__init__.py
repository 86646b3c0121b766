"""Offline harness for remote project-management tool descriptors."""

from .errors import ErrorKind, HarnessError, RegistryError
from .registry import ToolRegistry, load_registry
from .schema import ArrayShape, InvocationResult, ObjectShape, ToolDescriptor, ValidationResult
from .tester import RunCounters, ToolTester
from .validator import validate

__all__ = [
    "ArrayShape",
    "ErrorKind",
    "HarnessError",
    "InvocationResult",
    "ObjectShape",
    "RegistryError",
    "RunCounters",
    "ToolDescriptor",
    "ToolRegistry",
    "ToolTester",
    "ValidationResult",
    "load_registry",
    "validate",
]
