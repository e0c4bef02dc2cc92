from weatherdash.controllers.base import (
    ViewController, ViewState, GeolocationError, GEOLOCATION_MESSAGES,
)
from weatherdash.controllers.current import CurrentWeatherController
from weatherdash.controllers.hourly import HourlyController
from weatherdash.controllers.alerts import AlertsController
from weatherdash.controllers.overview import OverviewController
from weatherdash.controllers.weekly import WeeklyController
from weatherdash.controllers.air_quality import AirQualityController
from weatherdash.controllers.wind import WindController

CONTROLLERS = {
    'current': CurrentWeatherController,
    'hourly': HourlyController,
    'alerts': AlertsController,
    'overview': OverviewController,
    'weekly': WeeklyController,
    'air_quality': AirQualityController,
    'wind': WindController,
}

__all__ = [
    'ViewController', 'ViewState', 'GeolocationError', 'GEOLOCATION_MESSAGES',
    'CurrentWeatherController', 'HourlyController', 'AlertsController', 'OverviewController',
    'WeeklyController', 'AirQualityController', 'WindController',
    'CONTROLLERS',
]
