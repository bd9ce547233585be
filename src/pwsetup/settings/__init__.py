"""pwsetup settings package."""

from pwsetup.settings.config import (
    ActionConfig,
    InstallSettings,
    Settings,
    get_settings,
    inputs_from_environment,
    read_action_input,
)

__all__ = [
    "ActionConfig",
    "InstallSettings",
    "Settings",
    "get_settings",
    "inputs_from_environment",
    "read_action_input",
]
