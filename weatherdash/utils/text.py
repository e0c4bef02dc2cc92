from datetime import datetime, timezone


def _plural(n, unit):
    return f"{n} {unit}{'s' if n > 1 else ''}"


def time_remaining(end_ts, now=None):
    """Human countdown until a unix timestamp: days, else hours, else minutes."""
    now = now if now is not None else datetime.now(timezone.utc).timestamp()
    remaining = end_ts - now
    if remaining < 0:
        return 'Expired'

    hours = int(remaining // 3600)
    days = hours // 24
    if days > 0:
        return f'{_plural(days, "day")} remaining'
    if hours > 0:
        return f'{_plural(hours, "hour")} remaining'

    minutes = int(remaining // 60)
    return f'{_plural(minutes, "minute")} remaining'


def _to_dt(ts, tz=None):
    return datetime.fromtimestamp(ts, tz or timezone.utc)


def format_alert_time(ts, tz=None):
    """e.g. 'Mon, Jan 20, 02:30 PM'."""
    dt = _to_dt(ts, tz)
    return f"{dt.strftime('%a, %b')} {dt.day}, {dt.strftime('%I:%M %p')}"


def format_hour(ts, tz=None):
    """e.g. '3 PM'."""
    dt = _to_dt(ts, tz)
    hour = dt.hour % 12 or 12
    return f"{hour} {'AM' if dt.hour < 12 else 'PM'}"


def format_day(ts, tz=None):
    """e.g. 'Mon, Jan 20'."""
    dt = _to_dt(ts, tz)
    return f"{dt.strftime('%a, %b')} {dt.day}"


def weekday_short(ts, tz=None):
    return _to_dt(ts, tz).strftime('%a')


def time_of_day(ts, tz=None):
    hour = _to_dt(ts, tz).hour
    if 5 <= hour < 12:
        return 'morning'
    if 12 <= hour < 17:
        return 'afternoon'
    if 17 <= hour < 21:
        return 'evening'
    return 'night'


def weekday_long(ts, tz=None):
    return _to_dt(ts, tz).strftime('%A')


def format_clock(ts, tz=None):
    """24-hour 'HH:MM', e.g. sunrise and sunset."""
    if ts is None:
        return None
    return _to_dt(ts, tz).strftime('%H:%M')
