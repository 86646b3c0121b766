"""Exports per-tool test scenarios as a JSON fixture for live runners."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from .schema import TestCaseExport, TestScenario, ToolDescriptor, ToolTestCases

logger = logging.getLogger(__name__)

FIXTURE_PATH = Path(__file__).with_name("mcp-test-cases.json")
FIXTURE_DESCRIPTION = "Test scenarios for the remote project-management tools"

PROJECT_ID_PARAM = "projectId"
INVALID_PROJECT_ID = "invalid-project-id"


def build_scenarios(descriptor: ToolDescriptor) -> list[TestScenario]:
    """Return the normal, missing-parameter and invalid-project scenarios."""
    invalid_params = dict(descriptor.sample_input)
    invalid_params[PROJECT_ID_PARAM] = INVALID_PROJECT_ID
    return [
        TestScenario(
            name="normal call",
            params=dict(descriptor.sample_input),
            expected_result="success",
        ),
        TestScenario(
            name="missing required parameters",
            params={},
            expected_result="parameter_error",
        ),
        TestScenario(
            name="invalid project identifier",
            params=invalid_params,
            expected_result="project_not_found",
        ),
    ]


def build_test_cases(descriptors: Iterable[ToolDescriptor]) -> TestCaseExport:
    return TestCaseExport(
        description=FIXTURE_DESCRIPTION,
        tools=[
            ToolTestCases(
                name=descriptor.name,
                description=descriptor.description,
                test_scenarios=build_scenarios(descriptor),
            )
            for descriptor in descriptors
        ],
    )


def render_test_cases(export: TestCaseExport) -> str:
    payload = export.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def write_test_cases(export: TestCaseExport, path: str | Path | None = None) -> Path:
    """Write the fixture, replacing whatever was at ``path`` before."""
    target = Path(path) if path else FIXTURE_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_test_cases(export), encoding="utf-8")
    logger.info(
        "test cases exported path=%s tools=%s scenarios=%s",
        target,
        len(export.tools),
        export.scenario_count,
    )
    return target


__all__ = [
    "FIXTURE_PATH",
    "INVALID_PROJECT_ID",
    "PROJECT_ID_PARAM",
    "build_scenarios",
    "build_test_cases",
    "render_test_cases",
    "write_test_cases",
]
