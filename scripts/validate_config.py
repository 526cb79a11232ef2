#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from volput_app.config.loader import ConfigLoader
from volput_app.config.validation import ConfigValidator
from volput_app.errors import DataQualityError, SystemFailureError


def main():
    """Validate backtest.yaml merged over the defaults."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating backtest configuration in {loader.config_dir}...")

    try:
        config = loader.merge_config()
    except DataQualityError as e:
        print(f"❌ Cannot read configuration: {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(config)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    try:
        loader.load()
    except SystemFailureError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print("🎉 Configuration is valid!")
    sys.exit(0)


if __name__ == "__main__":
    main()
