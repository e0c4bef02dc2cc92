from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float

    def to_dict(self):
        return {'lat': self.lat, 'lon': self.lon}


@dataclass(frozen=True)
class WeatherSnapshot:
    """One successful current-weather fetch. Temperatures are Celsius, wind is km/h."""
    city_name: str
    country_code: str
    temperature_c: float
    feels_like_c: float
    humidity_pct: float
    wind_speed_kmh: float
    pressure_hpa: float
    condition_main: str
    condition_description: str
    icon_code: str
    coord: Coordinate
    wind_deg: Optional[float] = None
    wind_gust_kmh: Optional[float] = None
    visibility_m: Optional[float] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None
    timezone_offset: Optional[int] = None

    @property
    def display_name(self):
        if self.country_code:
            return f'{self.city_name}, {self.country_code}'
        return self.city_name

    def to_dict(self):
        data = asdict(self)
        data['coord'] = self.coord.to_dict()
        return data


@dataclass(frozen=True)
class ForecastEntry:
    timestamp: int
    temperature_c: float
    icon_code: str
    description: str
    humidity_pct: Optional[float] = None
    condition_main: str = ''
    feels_like_c: Optional[float] = None
    wind_speed_kmh: Optional[float] = None
    pop_pct: Optional[float] = None
    visibility_m: Optional[float] = None
    wind_deg: Optional[float] = None
    wind_gust_kmh: Optional[float] = None

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class AirQualityReading:
    aqi: int
    components: dict
    timestamp: Optional[int] = None

    def to_dict(self):
        return {'aqi': self.aqi, 'components': dict(self.components), 'timestamp': self.timestamp}


@dataclass(frozen=True)
class UVReading:
    value: float
    timestamp: Optional[int] = None

    def to_dict(self):
        return {'value': self.value, 'timestamp': self.timestamp}


@dataclass(frozen=True)
class ForecastCity:
    """The `city` block of a 5-day forecast response."""
    name: str
    country_code: str
    coord: Coordinate
    timezone_offset: Optional[int] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None

    def to_dict(self):
        data = asdict(self)
        data['coord'] = self.coord.to_dict()
        return data


@dataclass(frozen=True)
class DailySummary:
    """All 3-hour forecast slots of one local calendar day, aggregated."""
    date: str                       # ISO date in the location's timezone
    timestamp: int                  # first slot of the day
    temp_min_c: float
    temp_max_c: float
    feels_like_min_c: float
    feels_like_max_c: float
    wind_speed_kmh: float           # mean
    wind_max_kmh: float
    wind_gust_max_kmh: float
    precipitation_mm: float         # rain + snow volume
    pop_pct: float                  # share of slots with any chance of precipitation
    condition_main: str
    description: str
    icon_code: str
    humidity_pct: Optional[float] = None
    pressure_hpa: Optional[float] = None
    clouds_pct: Optional[float] = None
    wind_deg: Optional[float] = None

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class AirQualityDay:
    date: str
    timestamp: int
    aqi: int                        # provider 1-5 index, averaged over the day
    components: dict                # mean concentration per pollutant, µg/m³

    def to_dict(self):
        return {'date': self.date, 'timestamp': self.timestamp, 'aqi': self.aqi,
                'components': dict(self.components)}
