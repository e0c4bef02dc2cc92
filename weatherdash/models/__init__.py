from weatherdash.models.weather import (
    Coordinate,
    WeatherSnapshot,
    ForecastEntry,
    ForecastCity,
    DailySummary,
    AirQualityReading,
    AirQualityDay,
    UVReading,
)
from weatherdash.models.alert import Severity, AlertRecord

__all__ = [
    'Coordinate',
    'WeatherSnapshot',
    'ForecastEntry',
    'ForecastCity',
    'DailySummary',
    'AirQualityReading',
    'AirQualityDay',
    'UVReading',
    'Severity',
    'AlertRecord',
]
