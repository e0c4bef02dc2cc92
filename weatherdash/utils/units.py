import math

COMPASS_POINTS = ['N', 'NNE', 'NE', 'ENE', 'E', 'ESE', 'SE', 'SSE',
                  'S', 'SSW', 'SW', 'WSW', 'W', 'WNW', 'NW', 'NNW']


def round_half_up(value):
    """Round to the nearest integer, halves towards +infinity (matches browser Math.round)."""
    return int(math.floor(value + 0.5))


def c_to_f(celsius):
    """Celsius to whole-degree Fahrenheit: round(C * 9/5 + 32)."""
    return round_half_up(celsius * 9 / 5 + 32)


def format_temp(celsius, use_celsius=True):
    """Whole-degree display temperature in the requested unit."""
    if celsius is None:
        return None
    return round_half_up(celsius) if use_celsius else c_to_f(celsius)


def ms_to_kmh(ms):
    return ms * 3.6


def ms_to_mph(ms):
    return ms * 2.237


def meters_to_km(meters):
    return meters / 1000


def meters_to_miles(meters):
    return meters * 0.000621371


def wind_direction(deg):
    """16-point compass label for a bearing in degrees."""
    if deg is None:
        return None
    index = round_half_up(deg / 22.5) % 16
    return COMPASS_POINTS[index]
