"""
Views blueprint: runs a page's view controller for one request and returns
its state (view-model, error, notice) as JSON for the browser to render.
"""
import logging
from flask import Blueprint, jsonify, request, current_app

from weatherdash.controllers import CONTROLLERS, ViewState
from weatherdash.integrations.openweather import OpenWeatherClient, ValidationError
from weatherdash.models import Coordinate
from weatherdash.routes.proxy import parse_coordinates
from weatherdash.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

views_bp = Blueprint('views', __name__)


def _settings_service():
    return SettingsService(current_app.extensions['settings_store'])


@views_bp.route('/views/<page>')
def page_view(page):
    """
    ?city=      -> city search
    ?lat=&lon=  -> browser position
    ?geo_error= -> denied | unavailable | timeout | unsupported (page default is used)
    """
    controller_cls = CONTROLLERS.get(page)
    if controller_cls is None:
        return jsonify({'error': f'Unknown page: {page}'}), 404

    controller = controller_cls(
        OpenWeatherClient(),
        settings_service=_settings_service(),
        max_workers=current_app.config.get('CONTROLLER_WORKERS', 4),
    )

    city = request.args.get('city')
    if city is not None:
        controller.load_settings()
        controller.search_city(city)
    else:
        try:
            coords = parse_coordinates(request.args)
        except ValidationError as e:
            return jsonify({'error': e.message}), e.status_code
        coord = Coordinate(*coords) if coords else None
        controller.mount(coord=coord, geo_error=request.args.get('geo_error'))

    status = 200 if controller.state == ViewState.SUCCESS else (controller.error_status or 500)
    return jsonify(controller.to_dict()), status


@views_bp.route('/settings/<page>')
def get_settings(page):
    try:
        settings = _settings_service().load(page)
    except ValueError as e:
        return jsonify({'error': str(e)}), 404
    return jsonify(settings.to_dict())


@views_bp.route('/settings/<page>', methods=['PUT'])
def update_settings(page):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'JSON body required'}), 400

    service = _settings_service()
    try:
        service.load(page)
    except ValueError as e:
        return jsonify({'error': str(e)}), 404

    try:
        settings = service.update(page, data)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    logger.info(f"[Settings] {page} updated: {settings.to_dict()}")
    return jsonify(settings.to_dict())
