"""
Proxy blueprint: forwards a location query to OpenWeather with the
server-held API key and relays the provider's JSON.
"""
import logging
from flask import Blueprint, Response, jsonify, request

from weatherdash.integrations.openweather import (
    OpenWeatherClient, ResourceKind, ValidationError, UpstreamHTTPError, NetworkError,
)

logger = logging.getLogger(__name__)

proxy_bp = Blueprint('proxy', __name__)


def parse_coordinates(args):
    """
    Return (lat, lon) floats, or None when either is absent.
    Raises ValidationError for values that are not valid coordinates.
    """
    lat_raw = (args.get('lat') or '').strip()
    lon_raw = (args.get('lon') or '').strip()
    if not lat_raw or not lon_raw:
        return None
    try:
        lat, lon = float(lat_raw), float(lon_raw)
    except ValueError:
        raise ValidationError('Invalid coordinates')
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        raise ValidationError('Invalid coordinates')
    return lat, lon


def _relay(kind, resource, allow_city=False):
    client = OpenWeatherClient()
    if not client.configured:
        logger.error(f"[Proxy] {resource} requested but OPENWEATHER_API_KEY is not set")
        return jsonify({'error': 'API key not configured'}), 500

    try:
        coords = parse_coordinates(request.args)
    except ValidationError as e:
        return jsonify({'error': e.message}), e.status_code

    city = (request.args.get('city') or '').strip() if allow_city else ''
    if coords is None and not city:
        return jsonify({'error': 'Location required' if allow_city else 'Coordinates required'}), 400

    lat, lon = coords if coords else (None, None)
    try:
        body = client.fetch_raw(kind, lat=lat, lon=lon, city=None if coords else city)
    except UpstreamHTTPError as e:
        logger.error(f"[Proxy] {resource} upstream error {e.status_code}: {e.message}")
        return jsonify({'error': e.message}), e.status_code
    except NetworkError as e:
        logger.error(f"[Proxy] {resource} fetch failed: {e}")
        return jsonify({'error': f'Failed to fetch {resource}'}), 500

    # Relay the provider's bytes untouched
    return Response(body, mimetype='application/json')


@proxy_bp.route('/weather')
def weather():
    """Current weather by ?lat=&lon= or ?city=."""
    return _relay(ResourceKind.CURRENT, 'weather data', allow_city=True)


@proxy_bp.route('/forecast')
def forecast():
    """5-day / 3-hour forecast by ?lat=&lon= or ?city=."""
    return _relay(ResourceKind.FORECAST, 'forecast', allow_city=True)


@proxy_bp.route('/air-quality')
def air_quality():
    return _relay(ResourceKind.AIR_POLLUTION, 'air quality')


@proxy_bp.route('/uv')
def uv_index():
    return _relay(ResourceKind.UV_INDEX, 'UV index')
