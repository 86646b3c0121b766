"""Tool registry loader and consistency checks."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Sequence

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from .errors import RegistryError
from .schema import ToolDescriptor

logger = logging.getLogger(__name__)

REGISTRY_PATH = Path(__file__).with_name("tools.yaml")


class ToolRegistry(BaseModel):
    """Ordered, immutable collection of tool descriptors."""

    model_config = ConfigDict(frozen=True)

    tools: tuple[ToolDescriptor, ...]

    @model_validator(mode="after")
    def _check_tools(self) -> "ToolRegistry":
        seen: set[str] = set()
        for descriptor in self.tools:
            if descriptor.name in seen:
                msg = f"duplicate tool name detected: {descriptor.name}"
                raise ValueError(msg)
            seen.add(descriptor.name)
            missing = [
                param
                for param in descriptor.required_params
                if param not in descriptor.sample_input
            ]
            if missing:
                msg = (
                    f"tool {descriptor.name} sample_input lacks required params: "
                    f"{', '.join(missing)}"
                )
                raise ValueError(msg)
        return self

    def by_name(self, name: str) -> ToolDescriptor | None:
        """Return the descriptor matching the provided name, if present."""
        for descriptor in self.tools:
            if descriptor.name == name:
                return descriptor
        return None

    def select(self, names: Sequence[str] | None) -> list[ToolDescriptor]:
        """Return the requested descriptors in registry order."""
        if not names:
            return list(self.tools)
        requested = set(names)
        missing = requested - {descriptor.name for descriptor in self.tools}
        if missing:
            raise RegistryError(f"unknown tool names: {', '.join(sorted(missing))}")
        return [descriptor for descriptor in self.tools if descriptor.name in requested]

    def __iter__(self) -> Iterator[ToolDescriptor]:  # type: ignore[override]
        return iter(self.tools)

    def __len__(self) -> int:
        return len(self.tools)


def _load_yaml(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RegistryError(f"cannot read tool registry {path}: {exc}") from exc
    payload = yaml.safe_load(text)
    if payload is None:
        return {"tools": []}
    if isinstance(payload, list):
        return {"tools": payload}
    if isinstance(payload, dict):
        return payload
    raise RegistryError(f"unsupported registry format type={type(payload).__name__}")


def load_registry(path: str | Path | None = None) -> ToolRegistry:
    """Load and validate a tool registry file."""
    registry_path = Path(path) if path else REGISTRY_PATH
    payload = _load_yaml(registry_path)
    try:
        registry = ToolRegistry.model_validate(payload)
    except ValidationError as exc:
        raise RegistryError(f"invalid tool registry {registry_path}: {exc}") from exc
    logger.debug("tool registry loaded path=%s tools=%s", registry_path, len(registry))
    return registry


__all__ = ["REGISTRY_PATH", "ToolRegistry", "load_registry"]
