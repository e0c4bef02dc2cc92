from weatherdash import feature_flags


class TestFeatureFlags:
    def test_defaults(self):
        feature_flags.init_flags(environ={})
        assert feature_flags.is_enabled('weather_alerts') is True
        assert feature_flags.is_enabled('nonexistent') is False

    def test_env_disables(self):
        feature_flags.init_flags(environ={'FF_WEATHER_ALERTS': 'false'})
        assert feature_flags.is_enabled('weather_alerts') is False

    def test_env_values(self):
        feature_flags.init_flags(environ={'FF_WEATHER_ALERTS': 'Off', 'FF_RADAR': 'yes'})
        assert feature_flags.all_flags() == {'weather_alerts': False, 'radar': True}

    def test_unparseable_keeps_default(self):
        feature_flags.init_flags(environ={'FF_WEATHER_ALERTS': 'maybe'})
        assert feature_flags.is_enabled('weather_alerts') is True

    def test_set_flag(self):
        feature_flags.set_flag('weather_alerts', False)
        assert feature_flags.is_enabled('weather_alerts') is False
