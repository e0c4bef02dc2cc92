import json
import logging
import os
import threading
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)

# Storage key of each page's dark-mode flag
DARK_MODE_KEYS = {
    'alerts': 'weatherAlertsDarkMode',
    'hourly': 'hourlyDarkMode',
    'current': 'weatherDarkMode',
    'overview': 'dashboardDarkMode',
    'weekly': 'darkMode',
    'air_quality': 'airQualityDarkMode',
    'wind': 'windDarkMode',
}


@dataclass(frozen=True)
class PageSettings:
    dark_mode: bool = False
    celsius: bool = True

    def to_dict(self):
        return {'dark_mode': self.dark_mode, 'celsius': self.celsius}


class SettingsStore:
    """Flat key -> bool store. JSON file when a path is given, else process memory."""

    def __init__(self, path=None):
        self.path = path
        self._lock = threading.Lock()
        self._memory = {}

    def _read(self):
        if not self.path:
            return dict(self._memory)
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Settings file {self.path} unreadable, using defaults: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data):
        if not self.path:
            self._memory = dict(data)
            return
        tmp_path = f'{self.path}.tmp'
        with open(tmp_path, 'w') as f:
            json.dump(data, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)

    def get(self, key, default=None):
        with self._lock:
            value = self._read().get(key)
        return value if isinstance(value, bool) else default

    def set(self, key, value):
        with self._lock:
            data = self._read()
            data[key] = bool(value)
            self._write(data)


class SettingsService:
    def __init__(self, store):
        self.store = store

    @staticmethod
    def _keys(page):
        if page not in DARK_MODE_KEYS:
            raise ValueError(f'Unknown page: {page}')
        return DARK_MODE_KEYS[page], f'{page}Celsius'

    def load(self, page):
        dark_key, units_key = self._keys(page)
        defaults = PageSettings()
        return PageSettings(
            dark_mode=self.store.get(dark_key, defaults.dark_mode),
            celsius=self.store.get(units_key, defaults.celsius),
        )

    def save(self, page, settings):
        dark_key, units_key = self._keys(page)
        self.store.set(dark_key, settings.dark_mode)
        self.store.set(units_key, settings.celsius)
        return settings

    def update(self, page, updates):
        """Merge a partial dict of updates; values must be booleans."""
        current = self.load(page)
        changes = {}
        for field in ('dark_mode', 'celsius'):
            if field not in updates:
                continue
            if not isinstance(updates[field], bool):
                raise ValueError(f'"{field}" must be a boolean')
            changes[field] = updates[field]
        return self.save(page, replace(current, **changes))
