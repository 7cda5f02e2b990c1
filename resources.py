# resources.py
import logging
from typing import Dict

from config import ConfigurationError

DEFAULT_LOCALE = 'en'

# Display names keyed by descriptor name_key
STRINGS: Dict[str, Dict[str, str]] = {
    'en': {
        'sun': 'Sun', 'moon': 'Moon', 'mercury': 'Mercury', 'venus': 'Venus', 'mars': 'Mars',
        'jupiter': 'Jupiter', 'saturn': 'Saturn', 'uranus': 'Uranus', 'neptune': 'Neptune',
    },
    'de': {
        'sun': 'Sonne', 'moon': 'Mond', 'mercury': 'Merkur', 'venus': 'Venus', 'mars': 'Mars',
        'jupiter': 'Jupiter', 'saturn': 'Saturn', 'uranus': 'Uranus', 'neptune': 'Neptun',
    },
    'fr': {
        'sun': 'Soleil', 'moon': 'Lune', 'mercury': 'Mercure', 'venus': 'Vénus', 'mars': 'Mars',
        'jupiter': 'Jupiter', 'saturn': 'Saturne', 'uranus': 'Uranus', 'neptune': 'Neptune',
    },
    'es': {
        'sun': 'Sol', 'moon': 'Luna', 'mercury': 'Mercurio', 'venus': 'Venus', 'mars': 'Marte',
        'jupiter': 'Júpiter', 'saturn': 'Saturno', 'uranus': 'Urano', 'neptune': 'Neptuno',
    },
}


class StringResources:
    """Localised display names. Unknown locales and missing keys fall back to English."""

    def __init__(self, locale: str = DEFAULT_LOCALE, strings: Dict[str, Dict[str, str]] = STRINGS):
        if locale not in strings:
            logging.warning(f"No strings for locale '{locale}'. Falling back to '{DEFAULT_LOCALE}'.")
            locale = DEFAULT_LOCALE
        self.locale = locale
        self._strings = strings

    def get_string(self, key: str) -> str:
        """
        Raises:
            ConfigurationError: If `key` is missing from both the active and the default locale.
        """
        localized = self._strings.get(self.locale, {})
        if key in localized:
            return localized[key]
        fallback = self._strings.get(DEFAULT_LOCALE, {})
        if key in fallback:
            return fallback[key]
        raise ConfigurationError(f"No string resource '{key}' for locale '{self.locale}'.")

    def get_display_name(self, descriptor) -> str:
        return self.get_string(descriptor.name_key)
