from weatherdash.controllers.base import ViewController
from weatherdash.pipeline.normalize import forecast_city, daily_summaries
from weatherdash.services import conditions
from weatherdash.utils.text import weekday_long, format_day, format_clock
from weatherdash.utils.units import format_temp, round_half_up, wind_direction


class WeeklyController(ViewController):
    """Day-by-day outlook aggregated from the 5-day / 3-hour forecast."""
    page = 'weekly'

    def fetch(self, lat=None, lon=None, city=None, warnings=None):
        # The forecast endpoint resolves city names itself, so one call covers the page
        payload = self.client.forecast(lat=lat, lon=lon, city=city)
        return {'city': forecast_city(payload), 'days': daily_summaries(payload)}

    def present(self, data):
        celsius = self.settings.celsius
        tz = self.local_tz()
        city = data['city']
        days = data['days']

        def temp(value):
            return format_temp(value, celsius)

        return {
            'location': city.name,
            'country': city.country_code,
            'coord': city.coord.to_dict(),
            'sunrise': format_clock(city.sunrise, tz),
            'sunset': format_clock(city.sunset, tz),
            'unit': 'C' if celsius else 'F',
            'days': [
                {
                    **day.to_dict(),
                    'day': weekday_long(day.timestamp, tz),
                    'date_label': format_day(day.timestamp, tz),
                    'icon': conditions.condition_icon(day.condition_main),
                    'high': temp(day.temp_max_c),
                    'low': temp(day.temp_min_c),
                    'feels_like_high': temp(day.feels_like_max_c),
                    'feels_like_low': temp(day.feels_like_min_c),
                    'precipitation': round_half_up(day.precipitation_mm),
                    'pop': round_half_up(day.pop_pct),
                    'wind_kmh': round_half_up(day.wind_speed_kmh),
                    'wind_direction': wind_direction(day.wind_deg),
                }
                for day in days
            ],
            'summary': _week_summary(days, celsius) if days else None,
        }


def _week_summary(days, celsius):
    highs = [d.temp_max_c for d in days]
    lows = [d.temp_min_c for d in days]
    return {
        'warmest': format_temp(max(highs), celsius),
        'average_high': format_temp(sum(highs) / len(highs), celsius),
        'average_low': format_temp(sum(lows) / len(lows), celsius),
        'total_precipitation': round_half_up(sum(d.precipitation_mm for d in days)),
        'windiest': round_half_up(max(d.wind_speed_kmh for d in days)),
    }
