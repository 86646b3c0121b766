"""Drives tool descriptors through parameter checks, invocation and validation."""

from __future__ import annotations

import copy
import logging
from dataclasses import asdict, dataclass, field
from typing import Iterable

from .console import StatusLogger
from .errors import ErrorKind, MissingRequiredParam
from .invoker import ToolInvoker
from .schema import ToolDescriptor
from .validator import validate

logger = logging.getLogger(__name__)


@dataclass
class ToolTestResult:
    """Outcome of testing a single descriptor."""

    tool_name: str
    passed: bool
    error_kind: ErrorKind | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["error_kind"] = self.error_kind.value if self.error_kind else None
        return payload


@dataclass
class RunCounters:
    """Pass/fail tallies threaded through one harness run."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    results: list[ToolTestResult] = field(default_factory=list)

    def record_pass(
        self,
        tool_name: str,
        *,
        kind: ErrorKind | None = None,
        message: str | None = None,
    ) -> None:
        self.passed += 1
        self.results.append(ToolTestResult(tool_name, True, kind, message))

    def record_failure(
        self, tool_name: str, *, kind: ErrorKind | None, message: str
    ) -> None:
        self.failed += 1
        self.results.append(ToolTestResult(tool_name, False, kind, message))

    @property
    def consistent(self) -> bool:
        return self.total == self.passed + self.failed


class ToolTester:
    """Certifies tool descriptors one at a time against an invoker."""

    def __init__(
        self,
        invoker: ToolInvoker,
        *,
        status: StatusLogger | None = None,
        treat_mocked_as_pass: bool = True,
    ):
        self.invoker = invoker
        self.status = status or StatusLogger()
        self.treat_mocked_as_pass = treat_mocked_as_pass

    async def run_all(self, descriptors: Iterable[ToolDescriptor]) -> RunCounters:
        """Test every descriptor sequentially, in the order given."""
        counters = RunCounters()
        for descriptor in descriptors:
            await self.test_tool(descriptor, counters)
        return counters

    async def test_tool(self, descriptor: ToolDescriptor, counters: RunCounters) -> bool:
        """Test one descriptor and record the outcome on ``counters``.

        Failures of any kind are recorded rather than raised so that one broken
        descriptor never stops the rest of the run.
        """
        counters.total += 1
        try:
            self.status.info(f"testing {descriptor.name}: {descriptor.description}")
            return await self._exercise(descriptor, counters)
        except MissingRequiredParam as exc:
            counters.record_failure(descriptor.name, kind=exc.kind, message=str(exc))
            self.status.error(f"{descriptor.name}: {exc}")
            return False
        except Exception as exc:
            logger.exception("tool test crashed tool=%s", descriptor.name)
            counters.record_failure(
                descriptor.name,
                kind=ErrorKind.UNEXPECTED_EXCEPTION,
                message=f"{type(exc).__name__}: {exc}",
            )
            self.status.error(f"{descriptor.name}: unexpected error: {exc}")
            return False

    async def _exercise(self, descriptor: ToolDescriptor, counters: RunCounters) -> bool:
        for param in descriptor.required_params:
            if param not in descriptor.sample_input:
                raise MissingRequiredParam(param)

        arguments = copy.deepcopy(descriptor.sample_input)
        result = await self.invoker.invoke(descriptor.name, arguments)
        logger.debug(
            "tool invoked tool=%s succeeded=%s mocked=%s",
            descriptor.name,
            result.succeeded,
            result.is_mocked,
        )

        if result.is_mocked and self.treat_mocked_as_pass:
            message = result.error_message or "no live environment"
            self.status.warning(f"{descriptor.name}: {message}; descriptor accepted as-is")
            counters.record_pass(
                descriptor.name, kind=ErrorKind.MOCKED_ENVIRONMENT, message=message
            )
            return True

        if not result.succeeded:
            message = result.error_message or "tool call failed"
            kind = ErrorKind.MOCKED_ENVIRONMENT if result.is_mocked else None
            self.status.error(f"{descriptor.name}: {message}")
            counters.record_failure(descriptor.name, kind=kind, message=message)
            return False

        validation = validate(result.data, descriptor.expected_shape)
        if not validation.valid:
            message = validation.error_message or "response did not match expected shape"
            self.status.error(f"{descriptor.name}: {message}")
            counters.record_failure(
                descriptor.name, kind=validation.error_kind, message=message
            )
            return False

        self.status.success(f"{descriptor.name}: response matches expected shape")
        counters.record_pass(descriptor.name)
        return True


__all__ = ["RunCounters", "ToolTestResult", "ToolTester"]
