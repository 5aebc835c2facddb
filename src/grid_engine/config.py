"""Environment-driven engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "GRID_ENGINE_"

DESYNC_POLICIES: tuple[str, ...] = ("resync", "raise")
NOTIFICATION_POLICIES: tuple[str, ...] = ("strict", "lenient")


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EngineConfig:
    rows: int = 24
    cols: int = 80
    notification_policy: str = "strict"
    desync_policy: str = "resync"

    def __post_init__(self) -> None:
        if self.rows < 0 or self.cols < 0:
            raise ValueError(f"invalid grid size {self.rows}x{self.cols}")
        if self.notification_policy not in NOTIFICATION_POLICIES:
            raise ValueError(
                f"Unknown notification policy '{self.notification_policy}'"
            )
        if self.desync_policy not in DESYNC_POLICIES:
            raise ValueError(f"Unknown desync policy '{self.desync_policy}'")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            rows=_env_int(source, "ROWS", defaults.rows),
            cols=_env_int(source, "COLS", defaults.cols),
            notification_policy=source.get(
                f"{ENV_PREFIX}NOTIFICATION_POLICY", defaults.notification_policy
            ).lower(),
            desync_policy=source.get(
                f"{ENV_PREFIX}DESYNC_POLICY", defaults.desync_policy
            ).lower(),
        )


__all__ = ["EngineConfig", "DESYNC_POLICIES", "NOTIFICATION_POLICIES"]
