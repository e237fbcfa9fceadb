"""Settings and per-mode display configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from modal_nav.navigation import Mode

ENV_PREFIX = "MODAL_NAV_"
CLIPBOARD_BACKENDS = ("system", "memory")


@dataclass(frozen=True)
class ModeConfig:
    """Status-line presentation for one mode."""

    label: str
    color: str


MODE_CONFIGS: Mapping[Mode, ModeConfig] = {
    Mode.NORMAL: ModeConfig("NORMAL", "#98C379"),
    Mode.VISUAL: ModeConfig("VISUAL", "#6EACDA"),
}


@dataclass(frozen=True)
class NavigationSettings:
    pending_timeout_ms: int = 1000
    clipboard: str = "system"
    log_preset: Optional[str] = None

    def __post_init__(self) -> None:
        if self.pending_timeout_ms <= 0:
            raise ValueError("pending_timeout_ms must be positive")
        if self.clipboard not in CLIPBOARD_BACKENDS:
            raise ValueError(
                f"Unknown clipboard backend '{self.clipboard}', "
                f"expected one of {CLIPBOARD_BACKENDS}"
            )


def _env_int(source: Mapping[str, str], name: str, fallback: int) -> int:
    value = source.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def load_settings(env: Optional[Mapping[str, str]] = None) -> NavigationSettings:
    """Build settings from ``MODAL_NAV_*`` variables (``os.environ`` by default)."""

    source = os.environ if env is None else env
    defaults = NavigationSettings()
    return NavigationSettings(
        pending_timeout_ms=_env_int(
            source, "PENDING_TIMEOUT_MS", defaults.pending_timeout_ms
        ),
        clipboard=source.get(f"{ENV_PREFIX}CLIPBOARD", defaults.clipboard).lower(),
        log_preset=source.get(f"{ENV_PREFIX}LOG_PRESET") or None,
    )


__all__ = [
    "ModeConfig",
    "MODE_CONFIGS",
    "NavigationSettings",
    "CLIPBOARD_BACKENDS",
    "load_settings",
]
