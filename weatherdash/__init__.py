import logging
from flask import Flask
from config import Config


def create_app(config_class=None):
    app = Flask(__name__)
    app.config.from_object(config_class or Config)
    # View-models keep the key order they are built in
    app.json.sort_keys = False

    # Logging
    logging.basicConfig(
        level=getattr(logging, app.config.get('LOG_LEVEL', 'INFO')),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    if not app.config.get('OPENWEATHER_API_KEY'):
        app.logger.warning('OPENWEATHER_API_KEY is not set; weather routes will answer 500')

    # Feature flags
    from weatherdash import feature_flags
    feature_flags.init_flags()

    # Preference store shared by the view controllers
    from weatherdash.services.settings_service import SettingsStore
    app.extensions['settings_store'] = SettingsStore(app.config.get('SETTINGS_PATH'))

    # Register blueprints
    from weatherdash.routes import register_blueprints
    register_blueprints(app)

    return app
