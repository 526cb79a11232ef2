"""Configuration defaults, loading and validation."""

from .defaults import BacktestConfig, get_default_config
from .loader import ConfigLoader

__all__ = ["BacktestConfig", "ConfigLoader", "get_default_config"]
