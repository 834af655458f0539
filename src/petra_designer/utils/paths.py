"""
Path management for Petra Designer

Resolves platform-specific user directories:
- macOS: ~/Library/Application Support/PetraDesigner/
- Linux: ~/.local/share/petra-designer/ (data), ~/.config/petra-designer/ (config)
- Windows: %APPDATA%/PetraDesigner/

Directories are only created when a caller asks for them.
"""
import os
import sys
from pathlib import Path


APP_NAME = "PetraDesigner"
APP_SLUG = "petra-designer"


def _platform_base() -> Path:
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    if sys.platform == "win32":
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    return Path.home() / ".local" / "share"


def get_user_data_dir(create: bool = True) -> Path:
    """
    Get the per-user data directory.

    Args:
        create: Create the directory if it does not exist yet.
    """
    name = APP_SLUG if sys.platform not in ("darwin", "win32") else APP_NAME
    data_dir = _platform_base() / name
    if create:
        data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_user_config_dir(create: bool = True) -> Path:
    """
    Get the per-user config directory.

    Same as the data directory on macOS/Windows, ~/.config/petra-designer on Linux.
    """
    if sys.platform in ("darwin", "win32"):
        return get_user_data_dir(create)
    config_dir = Path.home() / ".config" / APP_SLUG
    if create:
        config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_logs_dir(create: bool = True) -> Path:
    """Get the directory log files are written to."""
    logs_dir = get_user_data_dir(create) / "logs"
    if create:
        logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def get_settings_path() -> Path:
    """Location of settings.json (the file itself may not exist)."""
    return get_user_config_dir(create=False) / "settings.json"
