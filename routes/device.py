# ─────────────────────────────────────────────────────────────────
# routes/device.py — Device API Operations
#
# The device API is described by operation ids (from its OpenAPI
# document). Each operation id maps to:
#
#   OPERATIONS[op_id]       → (HTTP method, path, response model)
#   DEFAULT_HANDLERS[op_id] → the function that serves it
#
# device_api.create_app() registers one route per operation, taking
# the handler from the caller's mapping when one is given, so an
# implementation can be swapped without touching the routing.
# ─────────────────────────────────────────────────────────────────

from fastapi import Depends

from database import ThermostatState, get_thermostat_state
from models import DeviceStatus


def get_ip(state: ThermostatState = Depends(get_thermostat_state)) -> DeviceStatus:
    """Reports where the device is reachable and since when it runs."""
    device = state.device()
    return DeviceStatus(ip=device.ip, ssid=device.ssid, currenttime=device.currenttime)


OPERATIONS = {
    "GetIP": ("GET", "/device", DeviceStatus),
}

DEFAULT_HANDLERS = {
    "GetIP": get_ip,
}
