"""
Display classification for provider condition strings.

Every lookup is an explicit table keyed by an enum, with a documented
fallback member for values the provider introduces later.
"""
import logging
from enum import Enum
from weatherdash.models.alert import Severity
from weatherdash.utils.units import round_half_up

logger = logging.getLogger(__name__)


class Condition(Enum):
    CLEAR = 'Clear'
    CLOUDS = 'Clouds'
    RAIN = 'Rain'
    DRIZZLE = 'Drizzle'
    THUNDERSTORM = 'Thunderstorm'
    SNOW = 'Snow'
    MIST = 'Mist'
    SMOKE = 'Smoke'
    HAZE = 'Haze'
    DUST = 'Dust'
    FOG = 'Fog'
    SAND = 'Sand'
    ASH = 'Ash'
    SQUALL = 'Squall'
    TORNADO = 'Tornado'
    UNKNOWN = 'Unknown'

    @classmethod
    def parse(cls, main):
        for member in cls:
            if main and member.value.lower() == str(main).strip().lower():
                return member
        if main:
            logger.info(f"Unrecognised condition '{main}', using fallback")
        return cls.UNKNOWN


# Fallback: UNKNOWN -> 'cloud'
CONDITION_ICONS = {
    Condition.CLEAR: 'sun',
    Condition.CLOUDS: 'cloud',
    Condition.RAIN: 'cloud-rain',
    Condition.DRIZZLE: 'cloud-drizzle',
    Condition.THUNDERSTORM: 'cloud-lightning',
    Condition.SNOW: 'cloud-snow',
    Condition.MIST: 'cloud-fog',
    Condition.SMOKE: 'cloud-fog',
    Condition.HAZE: 'cloud-fog',
    Condition.DUST: 'wind',
    Condition.FOG: 'cloud-fog',
    Condition.SAND: 'wind',
    Condition.ASH: 'cloud-fog',
    Condition.SQUALL: 'wind',
    Condition.TORNADO: 'tornado',
    Condition.UNKNOWN: 'cloud',
}

# Background theme per condition; temperature extremes override it (see background_theme)
CONDITION_THEMES = {
    Condition.RAIN: 'bg-rainy',
    Condition.DRIZZLE: 'bg-rainy',
    Condition.THUNDERSTORM: 'bg-rainy',
    Condition.CLEAR: 'bg-sunny',
    Condition.CLOUDS: 'bg-cloudy',
    Condition.SNOW: 'bg-snowy',
}
DEFAULT_THEME = 'bg-sunny'


def condition_icon(main):
    return CONDITION_ICONS[Condition.parse(main)]


def background_theme(main, temperature_c):
    condition = Condition.parse(main)
    if condition in (Condition.RAIN, Condition.DRIZZLE, Condition.THUNDERSTORM):
        return CONDITION_THEMES[condition]
    if temperature_c < 15:
        return 'bg-cold'
    if temperature_c > 30:
        return 'bg-hot'
    return CONDITION_THEMES.get(condition, DEFAULT_THEME)


def weather_message(temperature_c):
    if 15 <= temperature_c <= 25:
        return {'message': 'Perfect weather for a walk!', 'type': 'cool'}
    if temperature_c > 30:
        return {'message': "Stay hydrated, it's hot out there!", 'type': 'hot'}
    return {'message': "Grab a jacket, it's chilly!", 'type': 'cool'}


class AlertCategory(Enum):
    RAIN = 'rain'
    WIND = 'wind'
    SNOW = 'snow'
    THUNDER = 'thunder'
    HEAT = 'heat'
    GENERAL = 'general'


# Ordered: first category with a matching keyword wins. Fallback: GENERAL.
ALERT_KEYWORDS = [
    (AlertCategory.RAIN, ('rain', 'flood')),
    (AlertCategory.WIND, ('wind', 'gale')),
    (AlertCategory.SNOW, ('snow', 'ice')),
    (AlertCategory.THUNDER, ('thunder', 'lightning')),
    (AlertCategory.HEAT, ('heat', 'temperature')),
]

ALERT_ICONS = {
    AlertCategory.RAIN: 'cloud-rain',
    AlertCategory.WIND: 'wind',
    AlertCategory.SNOW: 'snowflake',
    AlertCategory.THUNDER: 'zap',
    AlertCategory.HEAT: 'thermometer',
    AlertCategory.GENERAL: 'alert-triangle',
}


def alert_category(event):
    text = (event or '').lower()
    for category, keywords in ALERT_KEYWORDS:
        if any(k in text for k in keywords):
            return category
    return AlertCategory.GENERAL


SEVERITY_BADGES = {
    Severity.EXTREME: ('destructive', 'alert-triangle'),
    Severity.SEVERE: ('destructive', 'alert-triangle'),
    Severity.MODERATE: ('default', 'alert-circle'),
    Severity.MINOR: ('secondary', 'info'),
    Severity.UNKNOWN: ('outline', 'bell'),
}


def severity_badge(severity):
    variant, icon = SEVERITY_BADGES[Severity.parse(severity.value if isinstance(severity, Severity) else severity)]
    return {'variant': variant, 'icon': icon}


AQI_LABELS = {
    1: 'Good',
    2: 'Fair',
    3: 'Moderate',
    4: 'Poor',
    5: 'Very Poor',
}


def aqi_label(aqi):
    return AQI_LABELS.get(aqi, 'Unknown')


# Upper bound (inclusive) -> band; anything above the last bound is Extreme
UV_BANDS = [
    (2, 'Low'),
    (5, 'Moderate'),
    (7, 'High'),
    (10, 'Very High'),
]


def uv_label(uv):
    for upper, label in UV_BANDS:
        if uv <= upper:
            return label
    return 'Extreme'


# Provider index (1-5) -> representative US EPA AQI, used when PM2.5 is missing
EPA_AQI_BY_LEVEL = {1: 25, 2: 75, 3: 125, 4: 175, 5: 250}

# PM2.5 µg/m³ upper bound -> (AQI at the band start, concentration at the band start, slope)
PM25_BANDS = [
    (12.0, 0, 0.0, 4.17),
    (35.4, 50, 12.0, 2.13),
    (55.4, 100, 35.4, 2.5),
    (150.4, 150, 55.4, 0.53),
    (250.4, 200, 150.4, 1.0),
]


def epa_aqi(level, components=None):
    """Approximate US EPA AQI (0-500) from PM2.5, else from the provider's 1-5 index."""
    pm25 = (components or {}).get('pm2_5')
    if pm25:
        for upper, base_aqi, base_conc, slope in PM25_BANDS:
            if pm25 <= upper:
                return round_half_up(base_aqi + (pm25 - base_conc) * slope)
        return round_half_up(300 + (pm25 - 250.4) * 0.4)
    return EPA_AQI_BY_LEVEL.get(level, 50)


EPA_AQI_STATUS = [
    (50, 'Good', 'Air quality is satisfactory, and air pollution poses little or no risk'),
    (100, 'Moderate', 'Air quality is acceptable. However, there may be a risk for some people'),
    (150, 'Unhealthy for Sensitive Groups', 'Members of sensitive groups may experience health effects'),
    (200, 'Unhealthy', 'Some members of the general public may experience health effects'),
    (300, 'Very Unhealthy', 'Health alert: The risk of health effects is increased for everyone'),
]
HAZARDOUS = ('Hazardous', 'Health warning of emergency conditions: everyone is more likely to be affected')


def epa_aqi_status(aqi):
    for upper, label, description in EPA_AQI_STATUS:
        if aqi <= upper:
            return {'label': label, 'description': description}
    return {'label': HAZARDOUS[0], 'description': HAZARDOUS[1]}


POLLUTANT_NAMES = {
    'pm2_5': 'PM2.5',
    'pm10': 'PM10',
    'o3': 'Ozone',
    'no2': 'NO₂',
    'so2': 'SO₂',
    'co': 'CO',
}


def main_pollutant(components):
    """Pollutant with the highest concentration. CO is compared in mg/m³, the rest in µg/m³."""
    levels = {name: float((components or {}).get(name) or 0) for name in POLLUTANT_NAMES}
    levels['co'] /= 1000
    # max() keeps the first of equal values, so ties go to table order
    name = max(POLLUTANT_NAMES, key=levels.get)
    return POLLUTANT_NAMES[name]


# km/h upper bound (exclusive) -> Beaufort force; 118 km/h and above is 12
BEAUFORT_LIMITS = [1, 6, 12, 20, 29, 39, 50, 62, 75, 89, 103, 118]


def beaufort(speed_kmh):
    for force, limit in enumerate(BEAUFORT_LIMITS):
        if speed_kmh < limit:
            return force
    return len(BEAUFORT_LIMITS)


WIND_ADVISORY_SPEED_KMH = 40
WIND_ADVISORY_GUST_KMH = 60
WIND_HIGH_SPEED_KMH = 60


def wind_advisory(speed_kmh, gust_kmh):
    """Advisory dict for strong wind or gusts, else None."""
    if speed_kmh <= WIND_ADVISORY_SPEED_KMH and gust_kmh <= WIND_ADVISORY_GUST_KMH:
        return None
    return {
        'type': 'Wind Advisory',
        'message': f'Strong winds with gusts up to {gust_kmh} km/h expected',
        'severity': 'high' if speed_kmh > WIND_HIGH_SPEED_KMH else 'moderate',
    }
