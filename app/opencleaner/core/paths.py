"""Path management for opencleaner.

Provides the well-known macOS user library locations that the scanners
inspect, plus XDG-style directories for opencleaner's own configuration.

XDG defaults:
- Config: ~/.config/opencleaner/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "opencleaner"

SYSTEM_APPLICATIONS_DIR = Path("/Applications")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/opencleaner/ (or XDG_CONFIG_HOME/opencleaner/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/opencleaner/config.toml.
    """
    return get_config_dir() / "config.toml"


# =============================================================================
# macOS user library locations
# =============================================================================


def get_library_dir(home: Path | None = None) -> Path:
    """Get the user's Library directory.

    Args:
        home: Home directory override. Defaults to the current user's home.

    Returns:
        Path to ~/Library.
    """
    return (home or Path.home()) / "Library"


def get_caches_dir(home: Path | None = None) -> Path:
    """Path to ~/Library/Caches."""
    return get_library_dir(home) / "Caches"


def get_logs_dir(home: Path | None = None) -> Path:
    """Path to ~/Library/Logs."""
    return get_library_dir(home) / "Logs"


def get_preferences_dir(home: Path | None = None) -> Path:
    """Path to ~/Library/Preferences."""
    return get_library_dir(home) / "Preferences"


def get_containers_dir(home: Path | None = None) -> Path:
    """Path to ~/Library/Containers."""
    return get_library_dir(home) / "Containers"


def get_application_support_dir(home: Path | None = None) -> Path:
    """Path to ~/Library/Application Support."""
    return get_library_dir(home) / "Application Support"


def get_trash_dir(home: Path | None = None) -> Path:
    """Path to the user's Trash (~/.Trash)."""
    return (home or Path.home()) / ".Trash"


def get_application_dirs(home: Path | None = None) -> tuple[Path, ...]:
    """Directories holding installed application bundles.

    Returns:
        Tuple of /Applications and ~/Applications.
    """
    return (SYSTEM_APPLICATIONS_DIR, (home or Path.home()) / "Applications")
