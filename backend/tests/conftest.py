"""Shared fixtures for the tool harness test suite."""

from __future__ import annotations

import io

import pytest

from tool_harness.console import StatusLogger, make_console
from tool_harness.registry import load_registry
from tool_harness.settings import reset_settings

HARNESS_ENV_VARS = (
    "TOOL_HARNESS_TREAT_MOCKED_AS_PASS",
    "TOOL_HARNESS_REGISTRY_PATH",
    "TOOL_HARNESS_FIXTURE_PATH",
    "TOOL_HARNESS_LOG_LEVEL",
    "TOOL_HARNESS_COLOR",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from harness env vars and the settings cache."""
    for name in HARNESS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def console_buffer():
    return io.StringIO()


@pytest.fixture
def status(console_buffer):
    return StatusLogger(make_console(use_color=False, file=console_buffer))


@pytest.fixture
def registry():
    return load_registry()
