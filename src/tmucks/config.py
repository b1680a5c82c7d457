"""Settings file loading, validation, and theme persistence.

Schema on disk (~/.config/tmucks.json, every key optional):

    {
        "snapshot_dir": "~/.config/tmucks",
        "live_config_path": "~/.tmux.conf",
        "notification_timeout": 5.0,
        "reload_command": ["tmux", "source-file"],
        "theme": "textual-dark"
    }

The file lives next to the snapshot directory rather than inside it, since
every regular file in the snapshot directory is listed as a snapshot.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from tmucks.constants import NOTIFICATION_TIMEOUT, RELOAD_COMMAND


class HomeDirUnavailableError(Exception):
    """Raised when the user's home directory cannot be resolved."""


class ConfigError(Exception):
    """Raised when the settings file exists but cannot be parsed or validated."""


def home_dir() -> Path:
    """Return the user's home directory or raise HomeDirUnavailableError."""
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise HomeDirUnavailableError("Could not find home directory") from exc


def settings_path(home: Path | None = None) -> Path:
    return (home or home_dir()) / ".config" / "tmucks.json"


class Settings(BaseModel):
    """Resolved runtime settings."""

    snapshot_dir: Path
    live_config_path: Path
    notification_timeout: float = Field(default=NOTIFICATION_TIMEOUT, gt=0)
    reload_command: list[str] = Field(default_factory=lambda: list(RELOAD_COMMAND), min_length=1)
    theme: str | None = None

    @field_validator("snapshot_dir", "live_config_path")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()


def _defaults(home: Path) -> dict[str, Path]:
    return {
        "snapshot_dir": home / ".config" / "tmucks",
        "live_config_path": home / ".tmux.conf",
    }


def _read(path: Path) -> dict[str, object]:
    try:
        raw: object = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path.name} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"{path.name} must be a JSON object at the top level")
    return raw


def load_settings(path: Path | None = None, home: Path | None = None) -> Settings:
    """Load and validate the settings file.

    Missing keys, or a missing file, fall back to the per-user defaults
    (``~/.config/tmucks`` and ``~/.tmux.conf``).  Raises ConfigError if the
    file exists but is malformed, HomeDirUnavailableError if the defaults
    cannot be resolved.
    """
    home = home or home_dir()
    path = path or settings_path(home)
    data: dict[str, object] = dict(_defaults(home))
    if path.exists():
        data.update(_read(path))
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {path.name}: {exc}") from exc


def load_theme(path: Path) -> str | None:
    """Load the saved theme preference.

    Returns the theme name if set, None otherwise.
    """
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
        return data.get("theme")
    except (json.JSONDecodeError, AttributeError):
        return None


def save_theme(path: Path, theme: str) -> None:
    """Store the theme preference, keeping any other settings in the file."""
    try:
        data = _read(path) if path.exists() else {}
    except ConfigError:
        # Leave a malformed file for the user to fix by hand.
        return
    data["theme"] = theme
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
