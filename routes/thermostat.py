# ─────────────────────────────────────────────────────────────────
# routes/thermostat.py — Simulated Thermostat Endpoints
#
#   $ curl http://localhost:3333/rest/v1/device
#   {"ip":"192.168.1.123","ssid":"MrWhite","passphrase":"F","currenttime":"..."}
#
#   $ curl http://localhost:3333/rest/v1/temp
#   {"currenttemp":"21.734512","nighttemp":"18.00","daytemp":"24.00","thereshold":"0.20"}
#
#   $ curl -X PUT -d '{"day":"06:00","night":"22:00"}' http://localhost:3333/rest/v1/time
#   $ curl -X PUT -d '{"mode":"day","heating":"on"}' http://localhost:3333/rest/v1/mode
#
# Every PUT overwrites the stored values and echoes the new state.
# Each path also answers with a trailing slash, undocumented.
# ─────────────────────────────────────────────────────────────────

import logging

from fastapi import APIRouter, Depends

from database import ThermostatState, get_thermostat_state
from models import Device, DeviceUpdate, Modes, ModesIn, Temp, Times

logger = logging.getLogger("routes")

router = APIRouter(
    prefix="/rest/v1",
    tags=["Thermostat"]
)


# ── /device ───────────────────────────────────────────────────────

@router.get("/device", response_model=Device)
@router.get("/device/", response_model=Device, include_in_schema=False)
def get_device(state: ThermostatState = Depends(get_thermostat_state)):
    return state.device()


@router.put("/device", response_model=Device)
@router.put("/device/", response_model=Device, include_in_schema=False)
def update_device(data: DeviceUpdate, state: ThermostatState = Depends(get_thermostat_state)):
    return state.update_device(data)


# ── /time ─────────────────────────────────────────────────────────

@router.get("/time", response_model=Times)
@router.get("/time/", response_model=Times, include_in_schema=False)
def get_time(state: ThermostatState = Depends(get_thermostat_state)):
    return state.times()


@router.put("/time", response_model=Times)
@router.put("/time/", response_model=Times, include_in_schema=False)
def update_time(data: Times, state: ThermostatState = Depends(get_thermostat_state)):
    times = state.update_times(data)
    logger.info(f"Times updated: day={times.day} night={times.night}")
    return times


# ── /temp ─────────────────────────────────────────────────────────

@router.get("/temp", response_model=Temp)
@router.get("/temp/", response_model=Temp, include_in_schema=False)
def get_temp(state: ThermostatState = Depends(get_thermostat_state)):
    """Current temperature is a new simulated reading on every call."""
    return state.temp()


@router.put("/temp", response_model=Temp)
@router.put("/temp/", response_model=Temp, include_in_schema=False)
def update_temp(data: Temp, state: ThermostatState = Depends(get_thermostat_state)):
    return state.update_temp(data)


# ── /mode ─────────────────────────────────────────────────────────

@router.get("/mode", response_model=Modes)
@router.get("/mode/", response_model=Modes, include_in_schema=False)
def get_mode(state: ThermostatState = Depends(get_thermostat_state)):
    return state.modes()


@router.put("/mode", response_model=Modes)
@router.put("/mode/", response_model=Modes, include_in_schema=False)
def update_mode(data: ModesIn, state: ThermostatState = Depends(get_thermostat_state)):
    """
    Records the requested mode and heating values.

    They are not checked against any allowed set; the response
    reports [current, requested] for each.
    """
    modes = state.update_modes(data)
    logger.info(f"Modes updated: mode={modes.mode} heating={modes.heating}")
    return modes
