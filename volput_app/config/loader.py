"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from datetime import date
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import InvalidInputError, MalformedDataError
from .defaults import BacktestConfig, get_default_config
from .validation import ConfigValidator

CONFIG_FILENAME = "backtest.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: BacktestConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from the YAML file in the config directory."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            try:
                file_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise MalformedDataError(
                    f"Cannot parse {config_file}: {e}",
                    field=str(config_file),
                ) from e

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise MalformedDataError(
                f"{config_file} must contain a mapping at the top level",
                field=str(config_file),
                value=type(file_config).__name__,
            )
        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-run overrides (highest priority)
        2. backtest.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> BacktestConfig:
        """Merge, validate and build a typed configuration."""
        return self.from_dict(self.merge_config(overrides))

    @classmethod
    def apply_overrides(cls, base: BacktestConfig, overrides: dict[str, Any]) -> BacktestConfig:
        """Return a validated copy of base with per-section overrides applied."""
        return cls.from_dict(cls._deep_merge(cls._dataclass_to_dict(base), overrides))

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> BacktestConfig:
        """
        Validate a nested dictionary of sections and build a BacktestConfig.

        Raises:
            InvalidInputError: On validation errors or unknown sections/fields
        """
        cls._coerce_dates(config)

        errors = ConfigValidator.validate_config(config)
        if errors:
            first = errors[0]
            messages = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise InvalidInputError(
                "Configuration validation failed: " + "; ".join(messages),
                parameter=first.field,
                value=first.value,
                context={"errors": messages},
            )

        defaults = get_default_config()
        section_names = [section.name for section in fields(BacktestConfig)]
        unknown_sections = set(config) - set(section_names)
        if unknown_sections:
            raise InvalidInputError(
                f"Unknown configuration sections: {sorted(unknown_sections)}",
                parameter="config",
                value=sorted(unknown_sections),
            )

        sections = {}
        for name in section_names:
            section_cls = type(getattr(defaults, name))
            values = config.get(name) or {}

            known = {f.name for f in fields(section_cls)}
            unknown = set(values) - known
            if unknown:
                raise InvalidInputError(
                    f"Unknown {name} parameters: {sorted(unknown)}",
                    parameter=name,
                    value=sorted(unknown),
                )
            sections[name] = section_cls(**values)

        return BacktestConfig(**sections)

    @staticmethod
    def _coerce_dates(config: dict[str, Any]) -> None:
        """Convert ISO date strings in the synthetic section to dates."""
        synthetic = config.get("synthetic") or {}
        for key in ("start", "end"):
            value = synthetic.get(key)
            if isinstance(value, str):
                try:
                    synthetic[key] = date.fromisoformat(value)
                except ValueError as e:
                    raise InvalidInputError(
                        f"synthetic.{key} is not an ISO date: {value}",
                        parameter=key,
                        value=value,
                    ) from e

    @staticmethod
    def _dataclass_to_dict(obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = ConfigLoader._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
