"""
Provider JSON -> immutable records.

All functions here are pure: the same payload always produces equal records.
Payloads missing required fields, or with fields of the wrong shape,
raise ValueError.
"""
from datetime import datetime, timedelta, timezone

from weatherdash.models import (
    Coordinate, WeatherSnapshot, ForecastEntry, ForecastCity, DailySummary,
    AirQualityReading, AirQualityDay, UVReading, AlertRecord, Severity,
)
from weatherdash.utils.units import ms_to_kmh, round_half_up

# Shape errors from indexing into unexpected JSON
MALFORMED = (KeyError, IndexError, TypeError, AttributeError)

HOURLY_LIMIT = 8   # 8 x 3h slots = next 24 hours
DAILY_LIMIT = 5
WEEKLY_LIMIT = 7
AIR_FORECAST_DAYS = 5
DAILY_SLOT = '12:00:00'
DEFAULT_VISIBILITY_M = 10000
GUST_FACTOR = 1.5   # gust estimate from mean wind when the provider omits wind.gust
POLLUTANTS = ('co', 'no', 'no2', 'o3', 'so2', 'pm2_5', 'pm10', 'nh3')


def offset_tz(offset_seconds):
    """Fixed-offset tzinfo for a provider `timezone` field; UTC when absent."""
    if offset_seconds is None:
        return timezone.utc
    return timezone(timedelta(seconds=offset_seconds))


def _local_date(ts, tz):
    return datetime.fromtimestamp(int(ts), tz).date().isoformat()


def _first_condition(item):
    conditions = item.get('weather') or [{}]
    condition = conditions[0]
    if not isinstance(condition, dict):
        raise TypeError(f'weather entry is {type(condition).__name__}, not an object')
    return condition


def snapshot_from_current(payload):
    """Current-weather payload (/data/2.5/weather, metric) -> WeatherSnapshot."""
    try:
        main = payload['main']
        coord = payload['coord']
        condition = _first_condition(payload)
        wind = payload.get('wind') or {}
        sys = payload.get('sys') or {}
        return WeatherSnapshot(
            city_name=payload.get('name') or '',
            country_code=sys.get('country') or '',
            temperature_c=float(main['temp']),
            feels_like_c=float(main.get('feels_like', main['temp'])),
            humidity_pct=main.get('humidity'),
            wind_speed_kmh=ms_to_kmh(float(wind.get('speed', 0))),
            pressure_hpa=main.get('pressure'),
            condition_main=condition.get('main', ''),
            condition_description=condition.get('description', ''),
            icon_code=condition.get('icon', ''),
            coord=Coordinate(lat=float(coord['lat']), lon=float(coord['lon'])),
            wind_deg=wind.get('deg'),
            wind_gust_kmh=ms_to_kmh(float(wind['gust'])) if wind.get('gust') is not None else None,
            visibility_m=payload.get('visibility'),
            sunrise=sys.get('sunrise'),
            sunset=sys.get('sunset'),
            timezone_offset=payload.get('timezone'),
        )
    except MALFORMED as e:
        raise ValueError(f'Malformed current weather payload: {e!r}') from e


def _forecast_entry(item):
    main = item['main']
    condition = _first_condition(item)
    wind = item.get('wind') or {}
    pop = item.get('pop')
    return ForecastEntry(
        timestamp=int(item['dt']),
        temperature_c=float(main['temp']),
        icon_code=condition.get('icon', ''),
        description=condition.get('description', ''),
        humidity_pct=main.get('humidity'),
        condition_main=condition.get('main', ''),
        feels_like_c=main.get('feels_like'),
        wind_speed_kmh=ms_to_kmh(float(wind['speed'])) if 'speed' in wind else None,
        pop_pct=pop * 100 if pop is not None else None,
        visibility_m=item.get('visibility') or DEFAULT_VISIBILITY_M,
        wind_deg=wind.get('deg'),
        wind_gust_kmh=ms_to_kmh(float(wind['gust'])) if wind.get('gust') is not None else None,
    )


def _forecast_items(payload):
    try:
        items = payload['list']
    except MALFORMED as e:
        raise ValueError(f'Malformed forecast payload: {e!r}') from e
    if not isinstance(items, list):
        raise ValueError('Malformed forecast payload: "list" is not an array')
    return items


def hourly_entries(payload, limit=HOURLY_LIMIT):
    """First `limit` 3-hour slots of a 5-day forecast, in provider (chronological) order."""
    try:
        return [_forecast_entry(item) for item in _forecast_items(payload)[:limit]]
    except MALFORMED as e:
        raise ValueError(f'Malformed forecast entry: {e!r}') from e


def daily_entries(payload, limit=DAILY_LIMIT):
    """One entry per day: the midday slot of each day, up to `limit` days."""
    items = _forecast_items(payload)
    try:
        midday = [item for item in items if DAILY_SLOT in (item.get('dt_txt') or '')]
        return [_forecast_entry(item) for item in midday[:limit]]
    except MALFORMED as e:
        raise ValueError(f'Malformed forecast entry: {e!r}') from e


def forecast_city(payload):
    """Location block of a forecast payload (name, coordinates, UTC offset)."""
    try:
        city = payload['city']
        coord = city['coord']
        return ForecastCity(
            name=city.get('name') or '',
            country_code=city.get('country') or '',
            coord=Coordinate(lat=float(coord['lat']), lon=float(coord['lon'])),
            timezone_offset=city.get('timezone'),
            sunrise=city.get('sunrise'),
            sunset=city.get('sunset'),
        )
    except MALFORMED as e:
        raise ValueError(f'Malformed forecast city: {e!r}') from e


def _mean(values):
    values = [v for v in values if v is not None]
    return sum(values) / len(values) if values else None


def _volume(block):
    return float((block or {}).get('3h') or 0)


def _summarize_day(date, slots):
    entries = [_forecast_entry(slot) for slot in slots]
    # The slot nearest the middle of the day stands for the day's condition
    middle = entries[len(entries) // 2]

    temps = [e.temperature_c for e in entries]
    feels = [e.feels_like_c if e.feels_like_c is not None else e.temperature_c for e in entries]
    winds = [e.wind_speed_kmh or 0 for e in entries]
    gusts = [e.wind_gust_kmh if e.wind_gust_kmh is not None else (e.wind_speed_kmh or 0) * GUST_FACTOR
             for e in entries]
    wet_slots = sum(1 for e in entries if (e.pop_pct or 0) > 0)

    return DailySummary(
        date=date,
        timestamp=entries[0].timestamp,
        temp_min_c=min(temps),
        temp_max_c=max(temps),
        feels_like_min_c=min(feels),
        feels_like_max_c=max(feels),
        wind_speed_kmh=_mean(winds),
        wind_max_kmh=max(winds),
        wind_gust_max_kmh=max(gusts),
        precipitation_mm=sum(_volume(s.get('rain')) + _volume(s.get('snow')) for s in slots),
        pop_pct=wet_slots * 100 / len(entries),
        condition_main=middle.condition_main,
        description=middle.description,
        icon_code=middle.icon_code,
        humidity_pct=_mean([e.humidity_pct for e in entries]),
        pressure_hpa=_mean([s['main'].get('pressure') for s in slots]),
        clouds_pct=_mean([(s.get('clouds') or {}).get('all') for s in slots]),
        wind_deg=middle.wind_deg,
    )


def daily_summaries(payload, limit=WEEKLY_LIMIT):
    """
    Group forecast slots by calendar day in the location's timezone and
    aggregate each day. The first and last days are usually partial.
    """
    items = _forecast_items(payload)
    try:
        tz = offset_tz((payload.get('city') or {}).get('timezone'))
        days = {}
        for item in items:
            days.setdefault(_local_date(item['dt'], tz), []).append(item)
        return [_summarize_day(date, slots) for date, slots in list(days.items())[:limit]]
    except MALFORMED as e:
        raise ValueError(f'Malformed forecast entry: {e!r}') from e


def alerts_from_onecall(payload):
    """One Call `alerts[]` -> AlertRecords. A payload without alerts yields []."""
    try:
        raw_alerts = (payload or {}).get('alerts') or []
        alerts = []
        for index, alert in enumerate(raw_alerts):
            tags = tuple(alert.get('tags') or ())
            start = alert.get('start')
            alerts.append(AlertRecord(
                id=f'{start}-{index}',
                event=alert.get('event') or 'Weather Alert',
                description=alert.get('description') or 'No description available',
                severity=Severity.parse(tags[0] if tags else None),
                start=start,
                end=alert.get('end'),
                sender_name=alert.get('sender_name') or 'Weather Service',
                tags=tags,
            ))
        return alerts
    except MALFORMED as e:
        raise ValueError(f'Malformed alerts payload: {e!r}') from e


def air_quality_from_payload(payload):
    """Air pollution payload -> reading for its first (current) sample."""
    try:
        sample = payload['list'][0]
        return AirQualityReading(
            aqi=int(sample['main']['aqi']),
            components=dict(sample.get('components') or {}),
            timestamp=sample.get('dt'),
        )
    except MALFORMED as e:
        raise ValueError(f'Malformed air quality payload: {e!r}') from e


def air_quality_days(payload, tz=timezone.utc, limit=AIR_FORECAST_DAYS):
    """Hourly air pollution forecast -> per-day means of the index and each pollutant."""
    try:
        days = {}
        for sample in payload['list']:
            days.setdefault(_local_date(sample['dt'], tz), []).append(sample)

        result = []
        for date, samples in list(days.items())[:limit]:
            components = {
                name: sum(float((s.get('components') or {}).get(name) or 0) for s in samples) / len(samples)
                for name in POLLUTANTS
            }
            aqi = round_half_up(sum(int(s['main']['aqi']) for s in samples) / len(samples))
            result.append(AirQualityDay(
                date=date,
                timestamp=int(samples[0]['dt']),
                aqi=aqi,
                components=components,
            ))
        return result
    except MALFORMED as e:
        raise ValueError(f'Malformed air quality forecast: {e!r}') from e


def uv_from_payload(payload):
    try:
        return UVReading(value=float(payload['value']), timestamp=payload.get('date'))
    except MALFORMED as e:
        raise ValueError(f'Malformed UV payload: {e!r}') from e
