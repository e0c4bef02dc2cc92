from weatherdash.controllers.base import ViewController
from weatherdash.pipeline.normalize import (
    snapshot_from_current, hourly_entries, daily_summaries, GUST_FACTOR,
)
from weatherdash.services import conditions
from weatherdash.utils.text import format_hour, weekday_short
from weatherdash.utils.units import round_half_up, wind_direction

WIND_HOURLY_LIMIT = 24   # 24 x 3h slots = next 3 days


def _gust(speed_kmh, gust_kmh):
    return gust_kmh if gust_kmh is not None else (speed_kmh or 0) * GUST_FACTOR


class WindController(ViewController):
    page = 'wind'

    def fetch(self, lat=None, lon=None, city=None, warnings=None):
        snapshot = snapshot_from_current(self.client.current_weather(lat=lat, lon=lon, city=city))
        coord = snapshot.coord

        def _forecast():
            payload = self.client.forecast(lat=coord.lat, lon=coord.lon)
            return hourly_entries(payload, limit=WIND_HOURLY_LIMIT), daily_summaries(payload)

        results = self._secondary({'forecast': _forecast}, warnings)
        hourly, daily = results['forecast'] or ([], [])
        return {'snapshot': snapshot, 'hourly': hourly, 'daily': daily}

    def present(self, data):
        snapshot = data['snapshot']
        tz = self.local_tz()

        speed = round_half_up(snapshot.wind_speed_kmh)
        gust = round_half_up(_gust(snapshot.wind_speed_kmh, snapshot.wind_gust_kmh))
        advisory = conditions.wind_advisory(speed, gust)

        return {
            'location': snapshot.city_name,
            'country': snapshot.country_code,
            'coord': snapshot.coord.to_dict(),
            'current': {
                'speed': speed,
                'gust': gust,
                'degrees': snapshot.wind_deg,
                'direction': wind_direction(snapshot.wind_deg),
                'beaufort': conditions.beaufort(speed),
                'pressure': snapshot.pressure_hpa,
            },
            'alerts': [advisory] if advisory else [],
            'hourly': [
                {
                    'timestamp': entry.timestamp,
                    'time': format_hour(entry.timestamp, tz),
                    'speed': round_half_up(entry.wind_speed_kmh or 0),
                    'gust': round_half_up(_gust(entry.wind_speed_kmh, entry.wind_gust_kmh)),
                    'degrees': entry.wind_deg,
                    'direction': wind_direction(entry.wind_deg),
                }
                for entry in data['hourly']
            ],
            'daily': [
                {
                    'date': day.date,
                    'day': weekday_short(day.timestamp, tz),
                    'average_speed': round_half_up(day.wind_speed_kmh),
                    'max_speed': round_half_up(day.wind_max_kmh),
                    'max_gust': round_half_up(day.wind_gust_max_kmh),
                    'direction': wind_direction(day.wind_deg),
                }
                for day in data['daily']
            ],
        }
