"""
JSON configuration for html5_loader.

The ``loader`` section holds default loader options, the ``logging`` section
the settings passed to ``setup_logging`` by the command line tool.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.expanduser("~"), ".html5_loader", "config.json")

DEFAULT_CONFIG: Dict[str, Any] = {
    "loader": {
        "allow_file": False,
        "allow_string": True,
        "disable_html_ns": False,
        "encoding": None,
        "force_encoding": False,
    },
    "logging": {
        "console_level": "INFO",
        "file_level": "DEBUG",
        "log_to_file": False,
        "colored": True,
    },
}


def _overlay(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _overlay(base[key], value)
        else:
            base[key] = copy.deepcopy(value)


class Config:
    """
    Dotted-key access to a JSON configuration file.

    Keys such as ``"loader.allow_file"`` address nested sections. All access
    goes through a lock so a Config can be shared between threads.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: JSON file to read and save (defaults to ~/.html5_loader/config.json)
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.config: Dict[str, Any] = {}
        self._lock = threading.RLock()
        self.load()

    def load(self) -> None:
        """
        Reset to the defaults and lay the file's values over them.

        A missing file is not an error.

        Raises:
            ValueError: If the file is not valid JSON or does not hold a JSON object
        """
        values = copy.deepcopy(DEFAULT_CONFIG)

        if os.path.exists(self.config_path):
            with open(self.config_path, 'r', encoding='utf-8') as f:
                stored = json.load(f)
            if not isinstance(stored, dict):
                raise ValueError(f"Configuration in {self.config_path} must be a JSON object")
            _overlay(values, stored)
            logger.debug(f"Configuration read from {self.config_path}")
        else:
            logger.debug(f"No configuration at {self.config_path}, using defaults")

        with self._lock:
            self.config = values

    def save(self) -> None:
        """Write the current values to the configuration file."""
        snapshot = self.get_all()
        os.makedirs(os.path.dirname(self.config_path) or ".", exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(snapshot, f, indent=4)
        logger.debug(f"Configuration written to {self.config_path}")

    def _locate(self, key: str, create: bool = False) -> Tuple[Optional[Dict[str, Any]], str]:
        # Returns the section holding the last key part, or None if it is missing
        parts: List[str] = key.split('.')
        section = self.config
        for part in parts[:-1]:
            child = section.get(part)
            if not isinstance(child, dict):
                if not create:
                    return None, parts[-1]
                child = section[part] = {}
            section = child
        return section, parts[-1]

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by dotted key.

        Returns:
            A copy of the value, or ``default`` when the key is missing
        """
        with self._lock:
            section, name = self._locate(key)
            if section is None or name not in section:
                return default
            return copy.deepcopy(section[name])

    def set(self, key: str, value: Any) -> None:
        """Store a value by dotted key, creating sections on the way."""
        with self._lock:
            section, name = self._locate(key, create=True)
            section[name] = value

    def remove(self, key: str) -> bool:
        """
        Delete a value by dotted key.

        Returns:
            bool: True if the key existed
        """
        with self._lock:
            section, name = self._locate(key)
            if section is None or name not in section:
                return False
            del section[name]
            return True

    def get_all(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self.config)
