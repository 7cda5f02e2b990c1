# preferences.py
import json
import logging
import os
from typing import Dict, Optional

from config import ConfigurationError


class PreferenceStore:
    """In-memory boolean preference store.

    Stands in for persisted user settings. Values can be seeded from a dict or
    loaded from a JSON object of booleans, e.g. {"show_planetary_images": false}.
    """

    def __init__(self, values: Optional[Dict[str, bool]] = None):
        self._values: Dict[str, bool] = dict(values or {})

    @classmethod
    def from_json_file(cls, path: str) -> 'PreferenceStore':
        """
        Raises:
            ConfigurationError: If the file is unreadable, is not a JSON object,
                                or holds a non-boolean value.
        """
        if not os.path.isfile(path):
            raise ConfigurationError(f"Preference file not found: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read preference file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Preference file {path} must contain a JSON object.")
        for key, value in data.items():
            if not isinstance(value, bool):
                raise ConfigurationError(f"Preference '{key}' in {path} must be true or false, got {value!r}.")
        logging.info(f"Loaded {len(data)} preferences from {path}.")
        return cls(data)

    def get_boolean(self, key: str, default: bool) -> bool:
        return self._values.get(key, default)

    def set_boolean(self, key: str, value: bool):
        self._values[key] = bool(value)

    def __contains__(self, key: str) -> bool:
        return key in self._values
