"""Tool invocation contract and the offline stand-in used by the harness."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping

from .schema import InvocationResult

logger = logging.getLogger(__name__)

MOCKED_ERROR_MESSAGE = "tool call requires live environment"


class ToolInvoker(ABC):
    """Minimal interface every tool backend must implement."""

    @abstractmethod
    async def invoke(
        self, tool_name: str, arguments: Mapping[str, Any]
    ) -> InvocationResult:
        """Execute a tool with the provided arguments."""


class MockedInvoker(ToolInvoker):
    """Invoker that never reaches a backend and always reports so."""

    async def invoke(
        self, tool_name: str, arguments: Mapping[str, Any]
    ) -> InvocationResult:
        logger.debug("mocked tool call tool=%s args=%s", tool_name, sorted(arguments))
        return InvocationResult(
            succeeded=False,
            is_mocked=True,
            error_message=MOCKED_ERROR_MESSAGE,
        )


__all__ = ["MOCKED_ERROR_MESSAGE", "MockedInvoker", "ToolInvoker"]
