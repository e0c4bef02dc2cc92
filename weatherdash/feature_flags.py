"""
Runtime switches read from FF_* environment variables at app start.

FF_WEATHER_ALERTS=false turns off the One Call alerts fetch, for keys
without a One Call 3.0 subscription.
"""
import logging
import os

logger = logging.getLogger(__name__)

PREFIX = 'FF_'
TRUE_VALUES = ('true', '1', 'yes', 'on')
FALSE_VALUES = ('false', '0', 'no', 'off')

# Flags that are on unless the environment turns them off
DEFAULTS = {
    'weather_alerts': True,
}

_FLAGS = {}


def _parse(name, raw):
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    logger.warning(f"Ignoring {PREFIX}{name.upper()}={raw!r}: expected one of {TRUE_VALUES + FALSE_VALUES}")
    return DEFAULTS.get(name, False)


def init_flags(environ=None):
    environ = os.environ if environ is None else environ
    _FLAGS.clear()
    _FLAGS.update(DEFAULTS)
    for key, raw in environ.items():
        if not key.startswith(PREFIX):
            continue
        name = key[len(PREFIX):].lower()
        if name not in DEFAULTS:
            logger.info(f"Unknown feature flag {key}")
        _FLAGS[name] = _parse(name, raw)
    disabled = sorted(n for n, on in _FLAGS.items() if not on)
    if disabled:
        logger.info(f"Feature flags off: {', '.join(disabled)}")


def is_enabled(flag_name: str) -> bool:
    return _FLAGS.get(flag_name, DEFAULTS.get(flag_name, False))


def all_flags() -> dict:
    return dict(_FLAGS)


def set_flag(flag_name: str, value: bool):
    _FLAGS[flag_name] = bool(value)
