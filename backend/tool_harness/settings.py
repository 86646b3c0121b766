"""Harness settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    return normalized in {"1", "true", "yes", "on"}


def _env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip()
    return normalized or default


def _env_path(name: str) -> Path | None:
    value = _env_str(name)
    return Path(value).expanduser() if value else None


@dataclass(frozen=True)
class HarnessSettings:
    """Runtime configuration for a harness run.

    ``treat_mocked_as_pass`` decides how a mocked invocation is scored: when on,
    a tool whose call could not reach a live backend is certified on the
    structure of its descriptor alone; when off, it counts as a failure.
    """

    treat_mocked_as_pass: bool = True
    registry_path: Path | None = None
    fixture_path: Path | None = None
    log_level: str = "WARNING"
    use_color: bool = True

    @classmethod
    def from_env(cls) -> "HarnessSettings":
        use_color = _env_bool("TOOL_HARNESS_COLOR", True) and os.getenv("NO_COLOR") is None
        return cls(
            treat_mocked_as_pass=_env_bool("TOOL_HARNESS_TREAT_MOCKED_AS_PASS", True),
            registry_path=_env_path("TOOL_HARNESS_REGISTRY_PATH"),
            fixture_path=_env_path("TOOL_HARNESS_FIXTURE_PATH"),
            log_level=(_env_str("TOOL_HARNESS_LOG_LEVEL", "WARNING") or "WARNING").upper(),
            use_color=use_color,
        )

    def override(self, **changes: object) -> "HarnessSettings":
        """Return a copy with the non-None ``changes`` applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied) if applied else self


_SETTINGS: HarnessSettings | None = None


def get_settings() -> HarnessSettings:
    """Return a cached settings instance built from the current environment."""

    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = HarnessSettings.from_env()
    return _SETTINGS


def reset_settings() -> None:
    """Drop the cached settings so the next lookup re-reads the environment."""

    global _SETTINGS
    _SETTINGS = None


__all__ = ["HarnessSettings", "get_settings", "reset_settings"]
