import logging
from concurrent.futures import ThreadPoolExecutor

from weatherdash import feature_flags
from weatherdash.controllers.base import ViewController, NEW_YORK, error_message
from weatherdash.integrations.openweather import WeatherError
from weatherdash.models import Severity
from weatherdash.pipeline.normalize import snapshot_from_current
from weatherdash.services import conditions
from weatherdash.utils.text import format_alert_time, time_remaining

logger = logging.getLogger(__name__)

SEVERITY_RANK = [Severity.EXTREME, Severity.SEVERE, Severity.MODERATE, Severity.MINOR, Severity.UNKNOWN]


class AlertsController(ViewController):
    page = 'alerts'
    default_location = NEW_YORK
    default_location_name = 'New York'

    def fetch(self, lat=None, lon=None, city=None, warnings=None):
        alerts_enabled = feature_flags.is_enabled('weather_alerts')

        if lat is None or lon is None:
            # City search: the alerts call needs the coordinates the city resolves to
            snapshot = snapshot_from_current(self.client.current_weather(city=city))
            lat, lon = snapshot.coord.lat, snapshot.coord.lon
            alerts = self._fetch_alerts(lat, lon, warnings) if alerts_enabled else []
            return {'snapshot': snapshot, 'alerts': alerts, 'alerts_enabled': alerts_enabled}

        # Coordinates known up front: location name and alerts load side by side
        with ThreadPoolExecutor(max_workers=2) as executor:
            weather_future = executor.submit(self.client.current_weather, lat=lat, lon=lon)
            alerts_future = executor.submit(self.client.onecall_alerts, lat, lon) if alerts_enabled else None
            snapshot = snapshot_from_current(weather_future.result())
            alerts = self._collect_alerts(alerts_future, warnings) if alerts_future else []
        return {'snapshot': snapshot, 'alerts': alerts, 'alerts_enabled': alerts_enabled}

    def _fetch_alerts(self, lat, lon, warnings):
        try:
            return self.client.onecall_alerts(lat, lon)
        except (WeatherError, ValueError) as e:
            return self._alerts_failed(e, warnings)

    def _collect_alerts(self, future, warnings):
        try:
            return future.result()
        except (WeatherError, ValueError) as e:
            return self._alerts_failed(e, warnings)

    def _alerts_failed(self, error, warnings):
        logger.warning(f"[{self.page}] alerts fetch failed: {error}")
        warnings.append(f'alerts: {error_message(error)}')
        return []

    def present(self, data):
        snapshot = data['snapshot']
        tz = self.local_tz()
        now = self.clock()
        alerts = []
        for alert in data['alerts']:
            category = conditions.alert_category(alert.event)
            alerts.append({
                **alert.to_dict(),
                'badge': conditions.severity_badge(alert.severity),
                'category': category.value,
                'icon': conditions.ALERT_ICONS[category],
                'starts': format_alert_time(alert.start, tz) if alert.start is not None else None,
                'ends': format_alert_time(alert.end, tz) if alert.end is not None else None,
                'remaining': time_remaining(alert.end, now) if alert.end is not None else None,
            })

        highest = None
        if data['alerts']:
            highest = min((a.severity for a in data['alerts']), key=SEVERITY_RANK.index).value

        return {
            'location': snapshot.city_name,
            'country': snapshot.country_code,
            'coord': snapshot.coord.to_dict(),
            'alerts_enabled': data['alerts_enabled'],
            'alert_count': len(alerts),
            'highest_severity': highest or 'None',
            'alerts': alerts,
        }
