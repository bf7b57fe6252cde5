"""Environment-driven engine settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "EDIT_ENGINE_"


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Knobs shared by sessions and front ends.

    ``history_limit`` of ``None`` keeps the undo history unbounded.
    """

    history_limit: Optional[int] = None
    buffer_name: str = "default"

    def __post_init__(self) -> None:
        if self.history_limit is not None and self.history_limit < 1:
            raise ValueError("history_limit must be a positive integer or None")
        if not self.buffer_name:
            raise ValueError("buffer_name cannot be empty")

    @classmethod
    def from_env(cls) -> "EngineSettings":
        limit = env_int("HISTORY_LIMIT")
        return cls(
            history_limit=limit or None,
            buffer_name=env("BUFFER_NAME") or "default",
        )


__all__ = ["ENV_PREFIX", "EngineSettings", "env", "env_flag", "env_int"]
