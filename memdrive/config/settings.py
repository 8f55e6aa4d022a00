"""
DriveConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> drive = Drive()

    >>> # Explicit configuration
    >>> config = DriveConfig(root_name="My Drive", sort_key="size")
    >>> drive = Drive(config=config)

    >>> # From config file
    >>> config = DriveConfig.from_file("./memdrive.toml")

Environment Variables:
    MEMDRIVE_ROOT_NAME - Display name of the root folder
    MEMDRIVE_SORT_KEY - Default listing key: "name" or "size"
    MEMDRIVE_SORT_ORDER - Default listing direction: "asc" or "desc"
    MEMDRIVE_SEED_DEMO - Whether new sessions start with the demo tree
    MEMDRIVE_LOG_LEVEL - Log level used by the CLI
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast

from memdrive.types.inputs import SortConfig, SortKey, SortOrder

# TOML support: tomllib is built-in for Python 3.11+, use tomli for 3.10
try:
    import tomllib

    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return cast(dict[str, Any], tomllib.load(f))

    _HAS_TOML = True
except ImportError:
    try:
        import tomli

        def _load_toml(path: Path) -> dict[str, Any]:
            with open(path, "rb") as f:
                return cast(dict[str, Any], tomli.load(f))

        _HAS_TOML = True
    except ImportError:
        def _load_toml(path: Path) -> dict[str, Any]:
            raise ImportError(
                "TOML parsing requires 'tomli' on Python 3.10. "
                "Install with: pip install tomli"
            )

        _HAS_TOML = False


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


class DriveConfig:
    """Configuration for memdrive."""

    # === Tree ===

    root_id: str = "root"
    """Id of the root folder"""

    root_name: str = "Home"
    """Display name of the root folder"""

    seed_demo: bool = True
    """Start new sessions with the demo content"""

    preview_url_template: str = "memory://{token}/{name}"
    """Preview URL used for image/video uploads that carry no source URL"""

    # === View ===

    sort_key: SortKey = SortKey.NAME
    """Default listing key"""

    sort_order: SortOrder = SortOrder.ASC
    """Default listing direction"""

    # === Logging ===

    log_level: str = "WARNING"
    """Level passed to logging.basicConfig by the CLI"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if self._is_option(key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        self._normalize()

    @classmethod
    def _is_option(cls, key: str) -> bool:
        """True for public settable attributes (not properties or methods)."""
        if key.startswith("_") or not hasattr(cls, key):
            return False
        attr = getattr(cls, key)
        return not isinstance(attr, property) and not callable(attr)

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        import os

        if name := os.getenv("MEMDRIVE_ROOT_NAME"):
            self.root_name = name
        if key := os.getenv("MEMDRIVE_SORT_KEY"):
            self.sort_key = SortKey(key.lower())
        if order := os.getenv("MEMDRIVE_SORT_ORDER"):
            self.sort_order = SortOrder(order.lower())
        if seed := os.getenv("MEMDRIVE_SEED_DEMO"):
            self.seed_demo = _parse_bool(seed)
        if level := os.getenv("MEMDRIVE_LOG_LEVEL"):
            self.log_level = level

    def _normalize(self) -> None:
        """Coerce string overrides into their enum types."""
        self.sort_key = SortKey(self.sort_key)
        self.sort_order = SortOrder(self.sort_order)
        self.log_level = str(self.log_level).upper()
        if not self.root_name.strip():
            raise ValueError("root_name must not be empty")

    @property
    def sort(self) -> SortConfig:
        """Default sort configuration."""
        return SortConfig(key=self.sort_key, order=self.sort_order)

    @classmethod
    def from_file(cls, path: str | Path) -> "DriveConfig":
        """
        Load configuration from TOML file.

        Example TOML:
            [drive]
            root_name = "My Drive"
            seed_demo = false

            [view]
            key = "size"
            order = "desc"

            [logging]
            level = "DEBUG"

        Args:
            path: Path to TOML configuration file

        Returns:
            DriveConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
            ImportError: If tomli not installed on Python 3.10
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = _load_toml(path)

        flat_config: dict[str, Any] = {}

        # Map section names to config key prefixes
        section_mapping = {
            "drive": "",
            "view": "sort_",
            "logging": "log_",
        }

        for section, prefix in section_mapping.items():
            if section in data:
                for key, value in data[section].items():
                    flat_config[f"{prefix}{key}"] = value

        # Also support flat top-level keys
        for key, value in data.items():
            if key not in section_mapping and not isinstance(value, dict):
                flat_config[key] = value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "DriveConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_file(self, path: str | Path) -> None:
        """
        Save configuration to TOML file.

        Args:
            path: Path to write TOML configuration file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str | bool]] = {
            "drive": {
                "root_id": self.root_id,
                "root_name": self.root_name,
                "seed_demo": self.seed_demo,
                "preview_url_template": self.preview_url_template,
            },
            "view": {
                "key": self.sort_key.value,
                "order": self.sort_order.value,
            },
            "logging": {
                "level": self.log_level,
            },
        }

        lines = ["# memdrive configuration", ""]

        for section_name, section_values in sections.items():
            lines.append(f"[{section_name}]")
            for key, value in section_values.items():
                if isinstance(value, bool):
                    lines.append(f"{key} = {str(value).lower()}")
                else:
                    # JSON string escaping is valid for TOML basic strings
                    lines.append(f"{key} = {json.dumps(value)}")
            lines.append("")

        path.write_text("\n".join(lines))

    def with_overrides(self, **kwargs: Any) -> "DriveConfig":
        """Return new config with specified overrides."""
        new_config = DriveConfig.__new__(DriveConfig)
        for key in dir(self):
            if self._is_option(key):
                setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if not new_config._is_option(key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        new_config._normalize()
        return new_config
