"""Configuration management for Timelog."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .paths import VaultPaths

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "HH:mm"
DEFAULT_HEADER_FORMAT = "YYYY-MM-DD"

# Interval range offered by `settings set`; persisted values only need to be positive.
MIN_REPLACEMENT_INTERVAL = 1
MAX_REPLACEMENT_INTERVAL = 180

_VAULT_MARKERS = (".obsidian", ".timelog")


def _find_vault_root(start_dir: Path) -> Optional[Path]:
    """Walk upward from start_dir looking for a vault marker directory."""
    current_dir = start_dir

    while True:
        if any((current_dir / marker).is_dir() for marker in _VAULT_MARKERS):
            return current_dir

        parent_dir = current_dir.parent

        # Stop if we reach filesystem root
        if parent_dir == current_dir:
            return None

        current_dir = parent_dir


def resolve_vault_root(
    document: Optional[Path] = None,
    cli_vault_path: Optional[str] = None,
) -> Path:
    """Resolve vault root path with the following precedence:

    1. CLI --vault option (if provided)
    2. TIMELOG_VAULT environment variable
    3. Walk upward from the document (or cwd) looking for .obsidian/.timelog
    4. The document's directory (or cwd)

    Raises:
        FileNotFoundError: If an explicitly configured vault path does not exist
    """
    if cli_vault_path:
        vault_path = Path(cli_vault_path).resolve()
        if not vault_path.is_dir():
            raise FileNotFoundError(f"Specified vault path does not exist: {vault_path}")
        return vault_path

    env_vault = os.environ.get("TIMELOG_VAULT")
    if env_vault:
        vault_path = Path(env_vault).resolve()
        if not vault_path.is_dir():
            raise FileNotFoundError(f"TIMELOG_VAULT path does not exist: {vault_path}")
        return vault_path

    start_dir = document.resolve().parent if document else Path.cwd()
    return _find_vault_root(start_dir) or start_dir


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _load_config_data(config_file: Path) -> Optional[dict]:
    """Load persisted settings from config.toml if it exists."""
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring malformed config file {config_file}: {e}")
        return None


def load_daily_note_format(paths: VaultPaths) -> str:
    """Read the daily-note date format from the host's daily notes settings.

    Falls back to YYYY-MM-DD when the settings are missing or unreadable.
    """
    settings_file = paths.daily_notes_settings
    if not settings_file.exists():
        return DEFAULT_HEADER_FORMAT

    try:
        data = json.loads(settings_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read daily notes settings {settings_file}: {e}")
        return DEFAULT_HEADER_FORMAT

    fmt = data.get("format") if isinstance(data, dict) else None
    if isinstance(fmt, str) and fmt.strip():
        return fmt.strip()
    return DEFAULT_HEADER_FORMAT


class TimelogConfig(BaseModel):
    """Settings snapshot passed into every detection call.

    Field aliases are the keys persisted in config.toml.
    """

    replacement_interval: int = Field(
        default=30,
        alias="replacementInterval",
        ge=MIN_REPLACEMENT_INTERVAL,
        description="Minimum seconds between automatic prefix insertions",
    )
    use_list: bool = Field(
        default=False,
        alias="useList",
        description="Only prefix top-level list items",
    )
    log_format: str = Field(
        default=DEFAULT_LOG_FORMAT,
        alias="logFormat",
        min_length=1,
        description="Pattern for entry timestamps",
    )
    debounce_ms: int = Field(
        default=500,
        alias="debounceMs",
        ge=0,
        description="Edit-event coalescing delay in milliseconds",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def load(cls, paths: VaultPaths, apply_env: bool = True) -> "TimelogConfig":
        """Load settings: defaults, then config.toml, then environment.

        Invalid persisted values are ignored field by field with a warning.

        Args:
            paths: Vault paths holding config.toml
            apply_env: Apply TIMELOG_* overrides (off when settings are saved back)
        """
        data = _load_config_data(paths.config_file) or {}
        config = cls._validate_fields({}, data, source=str(paths.config_file))

        return config.with_env_overrides() if apply_env else config

    def with_env_overrides(self) -> "TimelogConfig":
        """Apply TIMELOG_* environment variables on top of this snapshot.

        Invalid overrides are ignored with a warning; the snapshot value stays.
        """
        overrides = {}
        env_fields = {
            "TIMELOG_REPLACEMENT_INTERVAL": "replacementInterval",
            "TIMELOG_LOG_FORMAT": "logFormat",
            "TIMELOG_DEBOUNCE_MS": "debounceMs",
        }
        for name, field in env_fields.items():
            value = os.environ.get(name)
            if value is not None:
                overrides[field] = value
        if "TIMELOG_USE_LIST" in os.environ:
            overrides["useList"] = _env_bool("TIMELOG_USE_LIST", self.use_list)

        if not overrides:
            return self
        return self._validate_fields(self.model_dump(by_alias=True), overrides, source="environment")

    @classmethod
    def _validate_fields(cls, base: dict, overrides: dict, source: str) -> "TimelogConfig":
        """Validate overrides on top of base, dropping only the fields that fail.

        Keys are persisted aliases, which is also how pydantic reports error
        locations.
        """
        try:
            return cls.model_validate({**base, **overrides})
        except ValidationError as e:
            invalid = {error["loc"][0] for error in e.errors() if error["loc"]}
            logger.warning(f"Ignoring invalid settings from {source}: {e}")

        fields = cls.model_fields
        kept = {
            key: value
            for key, value in overrides.items()
            if key not in invalid and (key not in fields or fields[key].alias not in invalid)
        }
        try:
            return cls.model_validate({**base, **kept})
        except ValidationError as e:
            logger.warning(f"Falling back to default settings: {e}")
            return cls.model_validate(base) if base else cls()

    def save(self, paths: VaultPaths) -> Path:
        """Persist this snapshot to config.toml."""
        for directory in paths.get_all_directories():
            directory.mkdir(parents=True, exist_ok=True)
        paths.config_file.write_text(self.to_toml_str(), encoding="utf-8")
        return paths.config_file

    def to_toml_str(self) -> str:
        """Generate TOML configuration string."""
        # JSON string escapes are valid TOML basic strings
        return f"""# Timelog settings

# Minimum seconds between automatic timestamp prefixes
replacementInterval = {self.replacement_interval}

# Only prefix top-level list items
useList = {str(self.use_list).lower()}

# Timestamp pattern for log entries
logFormat = {json.dumps(self.log_format)}

# Delay before an edit is evaluated
debounceMs = {self.debounce_ms}
"""
