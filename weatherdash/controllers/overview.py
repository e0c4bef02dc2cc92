from weatherdash.controllers.base import ViewController, present_snapshot
from weatherdash.pipeline.normalize import (
    snapshot_from_current, hourly_entries, daily_entries,
    air_quality_from_payload, uv_from_payload,
)
from weatherdash.services import conditions
from weatherdash.utils.text import format_hour, weekday_short
from weatherdash.utils.units import format_temp


class OverviewController(ViewController):
    """Main dashboard: conditions, forecast, air quality and UV in one view."""
    page = 'overview'

    def fetch(self, lat=None, lon=None, city=None, warnings=None):
        snapshot = snapshot_from_current(self.client.current_weather(lat=lat, lon=lon, city=city))
        lat, lon = snapshot.coord.lat, snapshot.coord.lon

        def _forecast():
            payload = self.client.forecast(lat=lat, lon=lon)
            return hourly_entries(payload), daily_entries(payload)

        results = self._secondary({
            'forecast': _forecast,
            'air_quality': lambda: air_quality_from_payload(self.client.air_pollution(lat, lon)),
            'uv_index': lambda: uv_from_payload(self.client.uv_index(lat, lon)),
        }, warnings)

        hourly, daily = results['forecast'] or ([], [])
        return {
            'snapshot': snapshot,
            'hourly': hourly,
            'daily': daily,
            'air_quality': results['air_quality'],
            'uv_index': results['uv_index'],
        }

    def present(self, data):
        celsius = self.settings.celsius
        tz = self.local_tz()

        air = data['air_quality']
        uv = data['uv_index']
        return {
            'weather': present_snapshot(data['snapshot'], celsius),
            'hourly': [
                {
                    **entry.to_dict(),
                    'time': format_hour(entry.timestamp, tz),
                    'temperature': format_temp(entry.temperature_c, celsius),
                    'icon': conditions.condition_icon(entry.condition_main),
                }
                for entry in data['hourly']
            ],
            'daily': [
                {
                    **entry.to_dict(),
                    'day': weekday_short(entry.timestamp, tz),
                    'temperature': format_temp(entry.temperature_c, celsius),
                    'icon': conditions.condition_icon(entry.condition_main),
                }
                for entry in data['daily']
            ],
            'air_quality': {**air.to_dict(), 'label': conditions.aqi_label(air.aqi)} if air else None,
            'uv_index': {**uv.to_dict(), 'label': conditions.uv_label(uv.value)} if uv else None,
        }
