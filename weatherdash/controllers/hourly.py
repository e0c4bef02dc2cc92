from weatherdash.controllers.base import ViewController, present_snapshot
from weatherdash.pipeline.normalize import snapshot_from_current, hourly_entries
from weatherdash.services import conditions
from weatherdash.utils.text import format_hour, format_day, time_of_day
from weatherdash.utils.units import (
    format_temp, round_half_up, meters_to_km, meters_to_miles, ms_to_mph,
)


class HourlyController(ViewController):
    page = 'hourly'

    def fetch(self, lat=None, lon=None, city=None, warnings=None):
        snapshot = snapshot_from_current(self.client.current_weather(lat=lat, lon=lon, city=city))
        coord = snapshot.coord
        results = self._secondary(
            {'hourly': lambda: hourly_entries(self.client.forecast(lat=coord.lat, lon=coord.lon))},
            warnings,
        )
        return {'snapshot': snapshot, 'hourly': results['hourly'] or []}

    def present(self, data):
        celsius = self.settings.celsius
        tz = self.local_tz()
        hours = []
        for entry in data['hourly']:
            wind_kmh = entry.wind_speed_kmh or 0
            hours.append({
                **entry.to_dict(),
                'time': format_hour(entry.timestamp, tz),
                'date': format_day(entry.timestamp, tz),
                'time_of_day': time_of_day(entry.timestamp, tz),
                'temperature': format_temp(entry.temperature_c, celsius),
                'feels_like': format_temp(entry.feels_like_c, celsius),
                'pop': round_half_up(entry.pop_pct or 0),
                'wind_kmh': round_half_up(wind_kmh),
                'wind_mph': round(ms_to_mph(wind_kmh / 3.6), 1),
                'visibility_km': round(meters_to_km(entry.visibility_m), 1),
                'visibility_mi': round(meters_to_miles(entry.visibility_m), 1),
                'icon': conditions.condition_icon(entry.condition_main),
            })
        return {'weather': present_snapshot(data['snapshot'], celsius), 'hourly': hours}
