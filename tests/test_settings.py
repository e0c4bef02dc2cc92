import json
import pytest
from weatherdash.services.settings_service import (
    SettingsStore, SettingsService, PageSettings, DARK_MODE_KEYS,
)


class TestSettingsStore:
    def test_memory_store(self):
        store = SettingsStore()
        assert store.get('hourlyDarkMode') is None
        store.set('hourlyDarkMode', True)
        assert store.get('hourlyDarkMode') is True

    def test_file_store_persists(self, tmp_path):
        path = tmp_path / 'settings.json'
        SettingsStore(str(path)).set('weatherDarkMode', True)

        assert json.loads(path.read_text()) == {'weatherDarkMode': True}
        assert SettingsStore(str(path)).get('weatherDarkMode') is True

    def test_corrupt_file_uses_defaults(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text('{not json')
        store = SettingsStore(str(path))
        assert store.get('weatherDarkMode', False) is False

        store.set('weatherDarkMode', True)
        assert store.get('weatherDarkMode') is True

    def test_non_boolean_values_ignored(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text(json.dumps({'weatherDarkMode': 'yes'}))
        assert SettingsStore(str(path)).get('weatherDarkMode', False) is False


class TestSettingsService:
    def test_page_keys(self):
        service = SettingsService(SettingsStore())
        service.save('alerts', PageSettings(dark_mode=True, celsius=False))

        assert service.store.get(DARK_MODE_KEYS['alerts']) is True
        assert service.store.get('alertsCelsius') is False
        assert service.load('alerts') == PageSettings(dark_mode=True, celsius=False)

    def test_weekly_uses_shared_dark_mode_key(self):
        service = SettingsService(SettingsStore())
        service.save('weekly', PageSettings(dark_mode=True))
        assert service.store.get('darkMode') is True
        assert service.load('air_quality').dark_mode is False
        assert service.load('wind').dark_mode is False

    def test_defaults(self):
        assert SettingsService(SettingsStore()).load('overview') == PageSettings()

    def test_update_merges(self):
        service = SettingsService(SettingsStore())
        service.update('current', {'celsius': False})
        settings = service.update('current', {'dark_mode': True})
        assert settings == PageSettings(dark_mode=True, celsius=False)

    def test_update_rejects_non_boolean(self):
        service = SettingsService(SettingsStore())
        with pytest.raises(ValueError):
            service.update('current', {'celsius': 1})

    def test_unknown_page(self):
        with pytest.raises(ValueError, match='Unknown page'):
            SettingsService(SettingsStore()).load('radar')
