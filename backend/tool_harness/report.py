"""Run summary, verdict and report rendering."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .console import StatusLogger
from .tester import RunCounters, ToolTestResult


class Verdict(str, Enum):
    """Overall quality tier derived from the success rate."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


GOOD_THRESHOLD = 80
FAIR_THRESHOLD = 60

RECOMMENDATIONS = {
    Verdict.GOOD: "Tool descriptors look healthy; run the exported scenarios against a live environment.",
    Verdict.FAIR: "Some tools need attention; review the failures above before running live tests.",
    Verdict.POOR: "Most tools failed; fix the descriptors and their sample inputs before going further.",
}


def success_rate(passed: int, total: int) -> int:
    """Percentage of passing tools, rounded half up; 0 for an empty run."""
    if total <= 0:
        return 0
    return math.floor(100 * passed / total + 0.5)


def verdict_for(rate: int) -> Verdict:
    if rate >= GOOD_THRESHOLD:
        return Verdict.GOOD
    if rate >= FAIR_THRESHOLD:
        return Verdict.FAIR
    return Verdict.POOR


@dataclass
class RunReport:
    """Aggregated view of a harness run."""

    total: int
    passed: int
    failed: int
    success_rate: int
    verdict: Verdict
    recommendation: str
    results: list[ToolTestResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "success_rate": self.success_rate,
            "verdict": self.verdict.value,
            "recommendation": self.recommendation,
            "tools": [result.to_dict() for result in self.results],
        }


def build_report(counters: RunCounters) -> RunReport:
    rate = success_rate(counters.passed, counters.total)
    verdict = verdict_for(rate)
    return RunReport(
        total=counters.total,
        passed=counters.passed,
        failed=counters.failed,
        success_rate=rate,
        verdict=verdict,
        recommendation=RECOMMENDATIONS[verdict],
        results=list(counters.results),
    )


def print_report(report: RunReport, status: StatusLogger) -> None:
    """Render a human-readable summary to the status console."""
    status.heading("Tool Test Report")
    status.text(f"Total tools:  {report.total}")
    status.text(f"Passed:       {report.passed}", style="success")
    status.text(f"Failed:       {report.failed}", style="error" if report.failed else None)
    status.text(f"Success rate: {report.success_rate}%")
    status.text()
    for result in report.results:
        detail = f" ({result.message})" if result.message else ""
        if result.passed:
            status.success(f"{result.tool_name}{detail}")
        else:
            status.error(f"{result.tool_name}{detail}")
    status.text()
    if report.verdict is Verdict.GOOD:
        status.success(f"Verdict: {report.verdict.value}. {report.recommendation}")
    elif report.verdict is Verdict.FAIR:
        status.warning(f"Verdict: {report.verdict.value}. {report.recommendation}")
    else:
        status.error(f"Verdict: {report.verdict.value}. {report.recommendation}")


def write_report(report: RunReport, path: Path) -> Path:
    """Persist the machine-readable report."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(report.to_dict(), indent=2) + "\n", encoding="utf-8")
    return target


__all__ = [
    "RunReport",
    "Verdict",
    "build_report",
    "print_report",
    "success_rate",
    "verdict_for",
    "write_report",
]
