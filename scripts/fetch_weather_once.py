#!/usr/bin/env python3
"""Run one dashboard view controller once for testing/debugging.

Usage: fetch_weather_once.py <page> [city]
       fetch_weather_once.py <page> <lat> <lon>
"""

import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from weatherdash import create_app
from weatherdash.controllers import CONTROLLERS
from weatherdash.integrations.openweather import OpenWeatherClient
from weatherdash.models import Coordinate

if __name__ == '__main__':
    if len(sys.argv) < 2 or sys.argv[1] not in CONTROLLERS:
        print(f"Usage: {sys.argv[0]} <{'|'.join(CONTROLLERS)}> [city | lat lon]")
        sys.exit(2)

    app = create_app()
    page = sys.argv[1]

    with app.app_context():
        controller = CONTROLLERS[page](OpenWeatherClient())
        if len(sys.argv) == 4:
            controller.mount(coord=Coordinate(float(sys.argv[2]), float(sys.argv[3])))
        elif len(sys.argv) == 3:
            controller.search_city(sys.argv[2])
        else:
            controller.mount(geo_error='unsupported')

    state = controller.to_dict()
    print(json.dumps(state, indent=2, default=str))
    print(f"Controller finished in state: {state['state']}")
    sys.exit(0 if state['error'] is None else 1)
