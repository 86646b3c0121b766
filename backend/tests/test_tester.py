import asyncio

from tool_harness.console import StatusLogger
from tool_harness.errors import ErrorKind
from tool_harness.exporter import build_test_cases
from tool_harness.invoker import MOCKED_ERROR_MESSAGE, MockedInvoker, ToolInvoker
from tool_harness.schema import ArrayShape, InvocationResult, ObjectShape, ToolDescriptor
from tool_harness.tester import RunCounters, ToolTester


class StaticInvoker(ToolInvoker):
    """Returns a fixed result and remembers which tools were called."""

    def __init__(self, result: InvocationResult):
        self.result = result
        self.calls: list[str] = []

    async def invoke(self, tool_name, arguments):
        self.calls.append(tool_name)
        return self.result


class RecordingInvoker(MockedInvoker):
    """Mocked invoker that remembers every call it receives."""

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []

    async def invoke(self, tool_name, arguments):
        self.calls.append((tool_name, dict(arguments)))
        return await super().invoke(tool_name, arguments)


class MutatingInvoker(MockedInvoker):
    async def invoke(self, tool_name, arguments):
        arguments.pop("projectId", None)
        arguments["injected"] = True
        return await super().invoke(tool_name, arguments)


class BrokenStatus(StatusLogger):
    """Status logger whose info line fails for one tool."""

    def __init__(self, console, failing_tool: str):
        super().__init__(console)
        self.failing_tool = failing_tool

    def info(self, message):
        if message.startswith(f"testing {self.failing_tool}:"):
            raise BrokenPipeError("stdout closed")
        super().info(message)


class ExplodingInvoker(ToolInvoker):
    def __init__(self, failing_tool: str):
        self.failing_tool = failing_tool

    async def invoke(self, tool_name, arguments):
        if tool_name == self.failing_tool:
            raise ConnectionError("backend went away")
        return InvocationResult(succeeded=True, data={"id": "x"})


def _descriptor(name="get_project_info", required=("projectId",), sample=None, shape=None):
    return ToolDescriptor(
        name=name,
        description=f"{name} description",
        required_params=required,
        sample_input={"projectId": "proj-1"} if sample is None else sample,
        expected_shape=shape or ObjectShape(required_fields=("id",)),
    )


def _run(tester, descriptor, counters):
    return asyncio.run(tester.test_tool(descriptor, counters))


def test_mocked_invocation_counts_as_pass(status):
    invoker = RecordingInvoker()
    tester = ToolTester(invoker, status=status)
    counters = RunCounters()

    assert _run(tester, _descriptor(), counters) is True

    assert (counters.total, counters.passed, counters.failed) == (1, 1, 0)
    assert counters.results[0].error_kind is ErrorKind.MOCKED_ENVIRONMENT
    assert counters.results[0].message == MOCKED_ERROR_MESSAGE
    assert invoker.calls == [("get_project_info", {"projectId": "proj-1"})]


def test_mocked_invocation_fails_when_policy_disabled(status):
    tester = ToolTester(MockedInvoker(), status=status, treat_mocked_as_pass=False)
    counters = RunCounters()

    assert _run(tester, _descriptor(), counters) is False

    assert (counters.total, counters.passed, counters.failed) == (1, 0, 1)
    assert counters.results[0].error_kind is ErrorKind.MOCKED_ENVIRONMENT


def test_missing_required_param_fails_before_invocation(status):
    invoker = RecordingInvoker()
    tester = ToolTester(invoker, status=status)
    counters = RunCounters()
    descriptor = _descriptor(required=("projectId", "workitemId"))

    assert _run(tester, descriptor, counters) is False

    assert invoker.calls == []
    assert (counters.total, counters.passed, counters.failed) == (1, 0, 1)
    assert counters.results[0].error_kind is ErrorKind.MISSING_REQUIRED_PARAM
    assert "workitemId" in counters.results[0].message


def test_failed_live_call_counts_as_failure(status):
    invoker = StaticInvoker(InvocationResult(succeeded=False, error_message="404 project"))
    tester = ToolTester(invoker, status=status)
    counters = RunCounters()

    assert _run(tester, _descriptor(), counters) is False

    assert counters.failed == 1
    assert counters.results[0].message == "404 project"
    assert counters.results[0].error_kind is None


def test_successful_call_is_validated(status):
    invoker = StaticInvoker(InvocationResult(succeeded=True, data={"id": "proj-1"}))
    tester = ToolTester(invoker, status=status)
    counters = RunCounters()

    assert _run(tester, _descriptor(), counters) is True
    assert counters.passed == 1
    assert counters.results[0].error_kind is None


def test_successful_call_with_bad_shape_fails(status):
    invoker = StaticInvoker(InvocationResult(succeeded=True, data=[{"id": 1}]))
    tester = ToolTester(invoker, status=status)
    counters = RunCounters()
    descriptor = _descriptor(shape=ArrayShape(item_fields=("id", "subject")))

    assert _run(tester, descriptor, counters) is False
    assert counters.results[0].error_kind is ErrorKind.MISSING_FIELD
    assert counters.results[0].message == "missing field: subject"


def test_unexpected_exception_is_isolated_per_descriptor(status, console_buffer):
    tester = ToolTester(ExplodingInvoker("search_workitems"), status=status)
    descriptors = [
        _descriptor(name="get_project_info"),
        _descriptor(name="search_workitems"),
        _descriptor(name="create_workitem"),
    ]

    counters = asyncio.run(tester.run_all(descriptors))

    assert (counters.total, counters.passed, counters.failed) == (3, 2, 1)
    assert [result.tool_name for result in counters.results] == [
        "get_project_info",
        "search_workitems",
        "create_workitem",
    ]
    crashed = counters.results[1]
    assert crashed.error_kind is ErrorKind.UNEXPECTED_EXCEPTION
    assert "backend went away" in crashed.message
    assert "unexpected error" in console_buffer.getvalue()


def test_counters_stay_consistent_across_run(status, registry):
    tester = ToolTester(MockedInvoker(), status=status)
    broken = _descriptor(name="broken", required=("missing",))

    counters = asyncio.run(tester.run_all([*registry, broken]))

    assert counters.consistent
    assert (counters.total, counters.passed, counters.failed) == (6, 5, 1)


def test_failing_status_line_is_isolated_per_descriptor(status, registry):
    broken_status = BrokenStatus(status.console, failing_tool="search_workitems")
    tester = ToolTester(MockedInvoker(), status=broken_status)

    counters = asyncio.run(tester.run_all(registry))

    assert counters.consistent
    assert (counters.total, counters.passed, counters.failed) == (5, 4, 1)
    assert [result.passed for result in counters.results] == [True, False, True, True, True]
    assert counters.results[1].error_kind is ErrorKind.UNEXPECTED_EXCEPTION
    assert "BrokenPipeError" in counters.results[1].message


def test_invoker_cannot_mutate_registry_sample_input(status, registry):
    original = {descriptor.name: dict(descriptor.sample_input) for descriptor in registry}
    tester = ToolTester(MutatingInvoker(), status=status)

    counters = asyncio.run(tester.run_all(registry))

    assert counters.passed == 5
    assert {d.name: d.sample_input for d in registry} == original
    normal_call = build_test_cases(registry).tools[0].test_scenarios[0]
    assert normal_call.params == {"projectId": "proj-demo-001"}
