from __future__ import annotations

import pytest

from modal_nav.config import MODE_CONFIGS, NavigationSettings, load_settings
from modal_nav.navigation import Mode


def test_load_settings_defaults_with_empty_env() -> None:
    settings = load_settings({})

    assert settings == NavigationSettings()
    assert settings.clipboard == "system"
    assert settings.log_preset is None


def test_load_settings_reads_prefixed_variables() -> None:
    settings = load_settings(
        {
            "MODAL_NAV_PENDING_TIMEOUT_MS": "250",
            "MODAL_NAV_CLIPBOARD": "MEMORY",
            "MODAL_NAV_LOG_PRESET": "production",
        }
    )

    assert settings.pending_timeout_ms == 250
    assert settings.clipboard == "memory"
    assert settings.log_preset == "production"


def test_load_settings_ignores_unparseable_timeout() -> None:
    settings = load_settings({"MODAL_NAV_PENDING_TIMEOUT_MS": "soon"})

    assert settings.pending_timeout_ms == 1000


def test_settings_reject_unknown_clipboard() -> None:
    with pytest.raises(ValueError):
        NavigationSettings(clipboard="xsel")


def test_settings_reject_non_positive_timeout() -> None:
    with pytest.raises(ValueError):
        NavigationSettings(pending_timeout_ms=0)


def test_every_mode_has_display_config() -> None:
    assert set(MODE_CONFIGS) == set(Mode)
