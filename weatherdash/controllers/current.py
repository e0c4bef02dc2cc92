from weatherdash.controllers.base import ViewController, present_snapshot
from weatherdash.pipeline.normalize import snapshot_from_current, daily_entries
from weatherdash.services import conditions
from weatherdash.utils.text import weekday_short, format_day
from weatherdash.utils.units import format_temp


class CurrentWeatherController(ViewController):
    """Current conditions plus a five-day midday outlook."""
    page = 'current'

    def fetch(self, lat=None, lon=None, city=None, warnings=None):
        snapshot = snapshot_from_current(self.client.current_weather(lat=lat, lon=lon, city=city))

        # Forecast needs the resolved coordinates, so it runs after the snapshot
        coord = snapshot.coord
        results = self._secondary(
            {'forecast': lambda: daily_entries(self.client.forecast(lat=coord.lat, lon=coord.lon))},
            warnings,
        )
        return {'snapshot': snapshot, 'forecast': results['forecast'] or []}

    def present(self, data):
        celsius = self.settings.celsius
        tz = self.local_tz()
        return {
            'weather': present_snapshot(data['snapshot'], celsius),
            'forecast': [
                {
                    **entry.to_dict(),
                    'day': weekday_short(entry.timestamp, tz),
                    'date': format_day(entry.timestamp, tz),
                    'temperature': format_temp(entry.temperature_c, celsius),
                    'icon': conditions.condition_icon(entry.condition_main),
                }
                for entry in data['forecast']
            ],
        }
