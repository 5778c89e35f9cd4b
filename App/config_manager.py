"""Configuration persistence manager for the EmbeddedTools application.

This module handles loading and saving of application settings to/from JSON files.
"""

import json
from dataclasses import asdict, fields
from pathlib import Path
from typing import Optional, Tuple

from models import (
    CONFIG_FILE,
    SUPPORTED_BIT_DEPTHS,
    AppSettings,
    BitOrder,
    OutputFormat,
    Parity,
)

# AIDEV-NOTE: (min, max) bounds applied to loaded integer settings so a
# hand-edited file can never push out-of-range values into the pipeline
INT_BOUNDS = {
    "lcd_width": (1, 4096),
    "lcd_height": (1, 4096),
    "threshold": (0, 255),
    "font_size": (4, 512),
    "baud_rate": (50, 4_000_000),
    "data_bits": (5, 8),
    "stop_bits": (1, 2),
    "auto_send_interval_ms": (10, 3_600_000),
}


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


class ConfigManager:
    """Handles loading and saving of application settings."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.embedded_tools_config.json)
        """
        self.config_path = config_path

    def load(self) -> AppSettings:
        """Load settings from file, returning defaults if not found.

        Returns:
            AppSettings with loaded or default values
        """
        settings = AppSettings()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                settings = self._from_dict(data)
                print(f"✓ Loaded configuration from {self.config_path}")
        except (OSError, ValueError, TypeError) as e:
            print(f"Warning: Could not load config file: {e}")

        return settings

    def save(self, settings: AppSettings) -> Tuple[bool, Optional[str]]:
        """Save settings to file.

        Args:
            settings: AppSettings to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            with open(self.config_path, "w") as f:
                json.dump(asdict(settings), f, indent=2)
            return True, None
        except (OSError, TypeError) as e:
            return False, str(e)

    def _from_dict(self, data: dict) -> AppSettings:
        """Build AppSettings from parsed JSON (fallback to defaults)."""
        if not isinstance(data, dict):
            raise ValueError("configuration root must be an object")

        defaults = AppSettings()
        values = {}
        for f in fields(AppSettings):
            default = getattr(defaults, f.name)
            value = data.get(f.name, default)
            # Reject values of the wrong type instead of guessing
            if type(value) is not type(default):
                value = default
            values[f.name] = value

        for name, (low, high) in INT_BOUNDS.items():
            values[name] = clamp(values[name], low, high)

        if values["bit_depth"] not in SUPPORTED_BIT_DEPTHS:
            values["bit_depth"] = defaults.bit_depth
        if values["bit_order"] not in {order.value for order in BitOrder}:
            values["bit_order"] = defaults.bit_order
        if OutputFormat.from_tag(values["output_format"]) is None:
            values["output_format"] = defaults.output_format
        if values["parity"] not in {parity.value for parity in Parity}:
            values["parity"] = defaults.parity

        return AppSettings(**values)
