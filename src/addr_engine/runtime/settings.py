"""Environment-driven settings shared by the address engine and buffers."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "ADDR_ENGINE_"

BLOCK_STYLES = ("paragraph", "indent")


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


def env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunables for evaluation; ``from_env`` reads the ``ADDR_ENGINE_*`` variables.

    ``max_span`` caps how many lines one operator may materialize and is off
    by default. ``pattern_timeout`` bounds, in seconds, the time a single
    search spends matching across the whole buffer.
    """

    max_span: Optional[int] = None
    pattern_timeout: Optional[float] = 1.0
    strict_patterns: bool = False
    block_style: str = "paragraph"

    def __post_init__(self) -> None:
        if self.max_span is not None and self.max_span <= 0:
            raise ValueError("max_span must be positive")
        if self.pattern_timeout is not None and self.pattern_timeout <= 0:
            raise ValueError("pattern_timeout must be positive")
        if self.block_style not in BLOCK_STYLES:
            raise ValueError(
                f"Unknown block style '{self.block_style}', expected one of {BLOCK_STYLES}"
            )

    @classmethod
    def from_env(cls) -> "EngineSettings":
        defaults = cls()
        return cls(
            max_span=env_int("MAX_SPAN", defaults.max_span),
            pattern_timeout=env_float("PATTERN_TIMEOUT", defaults.pattern_timeout),
            strict_patterns=env_flag("STRICT_PATTERNS", defaults.strict_patterns),
            block_style=(env("BLOCK_STYLE") or defaults.block_style).lower(),
        )

    def with_overrides(self, **changes: object) -> "EngineSettings":
        return replace(self, **changes)


__all__ = [
    "BLOCK_STYLES",
    "ENV_PREFIX",
    "EngineSettings",
    "env",
    "env_flag",
    "env_float",
    "env_int",
]
