"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple, Union
from dataclasses import dataclass, field, fields, asdict

from ...logging_config import get_logger

logger = get_logger(__name__)

Settings = List[Tuple[str, bool]]


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Instance pass toggles
    show_defaults: bool = False
    explicit_boolean: bool = False

    # Definitions pass toggles (Vue only)
    options_api: bool = False

    # Element wrapping slot content
    slot_tag: str = "span"

    # Code style settings
    indent_size: int = 2
    add_comments: bool = True

    # Custom settings (target-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def instance_settings(self) -> Settings:
        """Instance pass toggles in their positional order."""
        return [
            ("showDefaults", self.show_defaults),
            ("explicitBoolean", self.explicit_boolean),
        ]

    def definition_settings(self) -> Settings:
        """Definitions pass toggles in their positional order."""
        return [("optionsApi", self.options_api)]


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        self._configs["react"] = {
            "show_defaults": False,
            "explicit_boolean": False,
            "slot_tag": "span",
            "add_comments": True,
        }

        self._configs["vue"] = {
            "show_defaults": False,
            "explicit_boolean": False,
            "options_api": False,
            "slot_tag": "span",
            "add_comments": True,
        }

    def get_config(
        self,
        language: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a target.

        Args:
            language: Target name ("react", "vue"); None for base defaults
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the target
        """
        base_config = dict(self._configs.get((language or "").lower(), {}))

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys land in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom", {})
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> List[str]:
        """Get list of targets with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """
        Validate configuration for a target.

        Returns:
            List of validation warnings
        """
        warnings = []

        for name in ("show_defaults", "explicit_boolean", "options_api", "add_comments"):
            if not isinstance(getattr(config, name), bool):
                warnings.append(f"{name} should be a boolean, got {getattr(config, name)!r}")

        if not str(config.slot_tag).isidentifier():
            warnings.append(f"Invalid slot_tag: {config.slot_tag}")

        if not isinstance(config.indent_size, int) or config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if language.lower() == "react" and config.options_api:
            warnings.append("options_api has no effect for react")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the target
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)


def read_settings(settings: Optional[Settings], defaults: Settings) -> List[bool]:
    """
    Read positional toggles, falling back to ``defaults`` for missing ones.

    Settings are an ordered list of ``(key, value)`` pairs; only the
    position matters, the key is a label for the UI.
    """
    settings = list(settings or [])
    values = []
    for index, (_, default) in enumerate(defaults):
        if index < len(settings):
            values.append(bool(settings[index][1]))
        else:
            values.append(bool(default))
    return values
