"""Shared tool harness schema models."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import ErrorKind


class ObjectShape(BaseModel):
    """A response that must be an object carrying every listed field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["object"] = "object"
    required_fields: tuple[str, ...] = ()


class ArrayShape(BaseModel):
    """A response that must be a list whose items carry every listed field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["array"] = "array"
    item_fields: tuple[str, ...] = ()


ResponseShape = Annotated[Union[ObjectShape, ArrayShape], Field(discriminator="kind")]


class ToolDescriptor(BaseModel):
    """Static definition of one remote tool and the response it should produce."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    description: str
    required_params: tuple[str, ...] = ()
    sample_input: dict[str, Any] = Field(default_factory=dict)
    expected_shape: ResponseShape


class InvocationResult(BaseModel):
    """Outcome of calling a remote tool (or the stand-in for it)."""

    model_config = ConfigDict(extra="forbid")

    succeeded: bool
    is_mocked: bool = False
    error_message: str | None = None
    data: Any | None = None


class ValidationResult(BaseModel):
    """Outcome of checking a response against an expected shape."""

    model_config = ConfigDict(extra="forbid")

    valid: bool
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> "ValidationResult":
        return cls(valid=False, error_kind=kind, error_message=message)


class TestScenario(BaseModel):
    """One scenario a live runner should replay against a tool."""

    __test__ = False

    name: str = Field(..., min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)
    expected_result: str = Field(..., serialization_alias="expectedResult")


class ToolTestCases(BaseModel):
    """Scenarios exported for a single tool."""

    name: str
    description: str
    test_scenarios: list[TestScenario] = Field(
        default_factory=list, serialization_alias="testScenarios"
    )


class TestCaseExport(BaseModel):
    """Full fixture document written by the exporter."""

    __test__ = False

    description: str
    tools: list[ToolTestCases] = Field(default_factory=list)

    @property
    def scenario_count(self) -> int:
        return sum(len(tool.test_scenarios) for tool in self.tools)


__all__ = [
    "ArrayShape",
    "InvocationResult",
    "ObjectShape",
    "ResponseShape",
    "TestCaseExport",
    "TestScenario",
    "ToolDescriptor",
    "ToolTestCases",
    "ValidationResult",
]
