#!/usr/bin/env python3
"""
Configuration Management for the CCSID character scrubber
"""

import copy
import json
import logging
import sys
from typing import Any, Dict, Optional

from .tagging import DEFAULT_TAG_TOOL


class ConfigurationManager:
    """Manages configuration for the scrubber"""

    DEFAULT_CONFIG = {
        "conversion": {
            "input_encoding": "UTF-8",
            "output_encoding": "UTF-8",
            "opt": "delete",  # delete or replace
            "replacement": "?",
            "line_end": "lf",  # cr, lf or crlf
            "smart_quotes": False,
            "malformed": "strict",  # strict, scrub or mark
        },
        "tagging": {
            "enabled": True,
            "tool": DEFAULT_TAG_TOOL,
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s",
            "verbose_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
        "error_handling": {
            "error_log": None,  # append conversion results to this file when set
        },
    }

    def __init__(self, config_file: Optional[str] = None):
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.logger = logging.getLogger(__name__)
        if config_file:
            self.load_config(config_file)

    def load_config(self, config_file: str) -> bool:
        """Load configuration from JSON file"""
        try:
            with open(config_file, "r") as f:
                file_config = json.load(f)
            self._deep_update(self.config, file_config)
            return True
        except (OSError, ValueError) as e:
            self.logger.warning(f"Could not load config file: {e}")
            return False

    def _deep_update(self, original: Dict, update: Dict):
        """Recursively update dictionary, ignoring None values"""
        for key, value in update.items():
            if value is None:
                # Skip None values to avoid overriding existing configuration
                continue
            if isinstance(value, dict) and isinstance(original.get(key), dict):
                self._deep_update(original[key], value)
            else:
                original[key] = value

    def update(self, overrides: Dict):
        """Apply overrides (e.g. from the command line) on top of the current config"""
        self._deep_update(self.config, overrides)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with dot notation"""
        keys = key.split(".")
        current = self.config
        for k in keys:
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return default
        return current

    def __repr__(self):
        return json.dumps(self.config, indent=2)

    def dump_config_json(self):
        """Dump the current configuration as JSON to stdout"""
        json.dump(self.config, sys.stdout, indent=2)
        print()
