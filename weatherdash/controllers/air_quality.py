from weatherdash.controllers.base import ViewController
from weatherdash.pipeline.normalize import (
    snapshot_from_current, air_quality_from_payload, air_quality_days, offset_tz,
)
from weatherdash.services import conditions
from weatherdash.utils.text import weekday_short, format_day

# Pollutants shown on the page, in display order; CO is converted to mg/m³
DISPLAY_POLLUTANTS = ('pm2_5', 'pm10', 'o3', 'no2', 'so2', 'co', 'nh3')


class AirQualityController(ViewController):
    """Current air quality on a US EPA style scale, plus a daily forecast."""
    page = 'air_quality'

    def fetch(self, lat=None, lon=None, city=None, warnings=None):
        snapshot = snapshot_from_current(self.client.current_weather(lat=lat, lon=lon, city=city))
        lat, lon = snapshot.coord.lat, snapshot.coord.lon
        tz = offset_tz(snapshot.timezone_offset)

        results = self._secondary({
            'air_quality': lambda: air_quality_from_payload(self.client.air_pollution(lat, lon)),
            'air_forecast': lambda: air_quality_days(self.client.air_pollution_forecast(lat, lon), tz=tz),
        }, warnings)
        return {
            'snapshot': snapshot,
            'air_quality': results['air_quality'],
            'forecast': results['air_forecast'] or [],
        }

    def present(self, data):
        snapshot = data['snapshot']
        tz = self.local_tz()
        reading = data['air_quality']

        current = None
        if reading is not None:
            aqi = conditions.epa_aqi(reading.aqi, reading.components)
            current = {
                'aqi': aqi,
                'status': conditions.epa_aqi_status(aqi),
                'level': reading.aqi,
                'level_label': conditions.aqi_label(reading.aqi),
                'main_pollutant': conditions.main_pollutant(reading.components),
                'components': _display_components(reading.components),
                'timestamp': reading.timestamp,
            }

        forecast = []
        for day in data['forecast']:
            aqi = conditions.epa_aqi(day.aqi, day.components)
            forecast.append({
                'day': weekday_short(day.timestamp, tz),
                'date': format_day(day.timestamp, tz),
                'aqi': aqi,
                'status': conditions.epa_aqi_status(aqi),
                'main_pollutant': conditions.main_pollutant(day.components),
            })

        return {
            'location': snapshot.city_name,
            'country': snapshot.country_code,
            'coord': snapshot.coord.to_dict(),
            'current': current,
            'forecast': forecast,
        }


def _display_components(components):
    shown = {}
    for name in DISPLAY_POLLUTANTS:
        value = float(components.get(name) or 0)
        if name == 'co':
            value /= 1000
        shown[name] = round(value, 1)
    return shown
