from flask import Blueprint, jsonify, current_app
from weatherdash import feature_flags

health_bp = Blueprint('health', __name__)


@health_bp.route('/health')
def health():
    return jsonify({'status': 'ok'})


@health_bp.route('/ready')
def ready():
    key_ok = bool(current_app.config.get('OPENWEATHER_API_KEY'))

    status = 'ready' if key_ok else 'not_ready'
    code = 200 if key_ok else 503
    return jsonify({'status': status, 'api_key': key_ok, 'flags': feature_flags.all_flags()}), code
