"""Command-line interface for running the tool harness."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Sequence

from .console import StatusLogger, make_console
from .env import load_dotenv_if_present
from .exporter import FIXTURE_PATH, build_test_cases, write_test_cases
from .invoker import MockedInvoker, ToolInvoker
from .registry import REGISTRY_PATH, load_registry
from .report import build_report, print_report, write_report
from .settings import HarnessSettings, get_settings
from .tester import ToolTester

logger = logging.getLogger(__name__)

GUIDANCE = (
    "Next steps:",
    "  1. Start the remote tool server in a live environment.",
    "  2. Replay the exported scenarios with your live test runner.",
    "  3. Compare each response with the expectedResult tag of its scenario.",
)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check remote tool descriptors and export live test scenarios."
    )
    parser.add_argument(
        "--registry",
        type=Path,
        default=None,
        help="Load tool descriptors from this YAML file instead of the bundled registry.",
    )
    parser.add_argument(
        "--fixture",
        type=Path,
        default=None,
        help="Write the scenario fixture here (default: mcp-test-cases.json next to the package).",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Also write the run report as JSON to this path.",
    )
    parser.add_argument(
        "--tool",
        action="append",
        dest="tools",
        help="Test only the named tool (can be provided multiple times).",
    )
    parser.add_argument(
        "--strict-mock",
        action="store_true",
        help="Count mocked invocations as failures instead of passes.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def _resolve_log_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    logger.warning("unknown log level %r, using WARNING", name)
    return logging.WARNING


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=_resolve_log_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_banner(status: StatusLogger, settings: HarnessSettings, tool_count: int) -> None:
    status.heading("Remote Tool Harness")
    status.info(f"registry: {settings.registry_path or REGISTRY_PATH} ({tool_count} tools)")
    status.info("invocation: mocked, no live backend is contacted")
    policy = "pass" if settings.treat_mocked_as_pass else "fail"
    status.info(f"mocked invocations count as: {policy}")
    status.text()


async def _run_harness(
    settings: HarnessSettings,
    status: StatusLogger,
    *,
    tool_names: Sequence[str] | None,
    report_path: Path | None,
    invoker: ToolInvoker | None,
) -> int:
    registry = load_registry(settings.registry_path)
    selected = registry.select(tool_names)
    _print_banner(status, settings, len(selected))

    tester = ToolTester(
        invoker or MockedInvoker(),
        status=status,
        treat_mocked_as_pass=settings.treat_mocked_as_pass,
    )
    counters = await tester.run_all(selected)
    logger.info(
        "harness run finished total=%s passed=%s failed=%s",
        counters.total,
        counters.passed,
        counters.failed,
    )

    report = build_report(counters)
    status.text()
    print_report(report, status)
    if report_path:
        written = write_report(report, report_path)
        status.info(f"report written to {written}")

    fixture = write_test_cases(
        build_test_cases(registry), settings.fixture_path or FIXTURE_PATH
    )
    status.text()
    status.success(f"test scenarios exported to {fixture}")
    status.text()
    for line in GUIDANCE:
        status.text(line, style="muted")

    return 0 if counters.failed == 0 else 1


async def main(
    argv: Sequence[str] | None = None,
    *,
    invoker: ToolInvoker | None = None,
) -> int:
    args = _parse_args(argv)
    load_dotenv_if_present()
    settings = get_settings().override(
        registry_path=args.registry,
        fixture_path=args.fixture,
        treat_mocked_as_pass=False if args.strict_mock else None,
        use_color=False if args.no_color else None,
    )
    _configure_logging(settings.log_level)
    status = StatusLogger(make_console(use_color=settings.use_color))
    try:
        return await _run_harness(
            settings,
            status,
            tool_names=args.tools,
            report_path=args.report,
            invoker=invoker,
        )
    except KeyboardInterrupt:
        status.error("harness run interrupted")
        return 1
    except Exception as exc:
        logger.exception("harness run failed")
        status.error(f"harness run failed: {exc}")
        return 1


def entrypoint() -> None:
    """Synchronously run the async CLI for convenience."""
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":  # pragma: no cover
    entrypoint()
