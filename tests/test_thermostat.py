"""
Tests for the simulated thermostat endpoints
"""
import random
import re

from database import TEMP_MAX, TEMP_MIN, ThermostatState
from models import ModesIn

READING_RE = re.compile(r"^-?\d+\.\d{6}$")


def test_get_device(client):
    response = client.get("/rest/v1/device")

    assert response.status_code == 200
    assert response.json() == {
        "ip": "192.168.1.123",
        "ssid": "TestNet",
        "passphrase": "pw",
        "currenttime": "2026-01-02 03:04:05",
    }


def test_update_device(client):
    response = client.put("/rest/v1/device", json={"ssid": "Other", "passphrase": "f"})

    assert response.status_code == 200
    data = response.json()
    assert data["ssid"] == "Other"
    assert data["passphrase"] == "f"
    # ip untouched when not sent
    assert data["ip"] == "192.168.1.123"

    data = client.put("/rest/v1/device", json={"ssid": "x", "ip": "10.0.0.2"}).json()
    assert data["ip"] == "10.0.0.2"
    assert data["passphrase"] == ""


def test_get_temp(client):
    data = client.get("/rest/v1/temp").json()

    assert data["daytemp"] == "24.00"
    assert data["nighttemp"] == "18.00"
    assert data["thereshold"] == "0.20"
    assert READING_RE.match(data["currenttemp"])
    assert TEMP_MIN <= float(data["currenttemp"]) < TEMP_MAX


def test_current_temp_is_not_stored():
    state = ThermostatState(rng=random.Random(1))

    readings = {state.temp().currenttemp for _ in range(5)}

    assert len(readings) > 1


def test_update_temp(client):
    response = client.put(
        "/rest/v1/temp",
        json={"currenttemp": "99.00", "daytemp": "23.00", "nighttemp": "17.50", "thereshold": "0.50"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["daytemp"] == "23.00"
    assert data["nighttemp"] == "17.50"
    assert data["thereshold"] == "0.50"
    assert data["currenttemp"] != "99.00"
    assert client.get("/rest/v1/temp").json()["daytemp"] == "23.00"


def test_get_time(client):
    assert client.get("/rest/v1/time").json() == {"day": "06:00", "night": "22:00"}


def test_update_time(client):
    response = client.put("/rest/v1/time", json={"day": "06:30AM", "night": "21:45"})

    assert response.status_code == 200
    assert response.json() == {"day": "06:30am", "night": "21:45"}
    assert client.get("/rest/v1/time").json() == {"day": "06:30am", "night": "21:45"}


def test_update_time_with_wrong_type_is_400(client):
    response = client.put("/rest/v1/time", json={"day": 6, "night": "22:00"})

    assert response.status_code == 400
    assert response.json()["status"] == "Invalid request."
    assert client.get("/rest/v1/time").json()["day"] == "06:00"


def test_get_mode(client):
    assert client.get("/rest/v1/mode").json() == {
        "mode": ["night", "auto"],
        "heating": ["off", "auto"],
    }


def test_update_mode(client):
    response = client.put("/rest/v1/mode", json={"mode": "day", "heating": "on"})

    assert response.status_code == 200
    assert response.json() == {"mode": ["night", "day"], "heating": ["off", "on"]}


def test_update_mode_accepts_legacy_heating_key(client):
    response = client.put("/rest/v1/mode", json={"mode": "auto", "heting": "auto"})

    assert response.json()["heating"] == ["off", "auto"]


def test_update_mode_does_not_validate_values():
    state = ThermostatState()

    modes = state.update_modes(ModesIn(mode="banana", heating="maybe"))

    assert modes.mode == ["night", "banana"]
    assert modes.heating == ["off", "maybe"]


def test_partial_temp_update_clears_missing_fields(client):
    response = client.put("/rest/v1/temp", json={"daytemp": "25.00"})

    assert response.status_code == 200
    data = response.json()
    assert data["daytemp"] == "25.00"
    assert data["nighttemp"] == ""
    assert data["thereshold"] == ""


def test_trailing_slash_paths_are_served(client):
    for path in ("/rest/v1/device/", "/rest/v1/time/", "/rest/v1/temp/", "/rest/v1/mode/"):
        assert client.get(path, follow_redirects=False).status_code == 200, path

    response = client.put("/rest/v1/time/", json={"day": "07:00", "night": "23:00"}, follow_redirects=False)
    assert response.status_code == 200
    assert client.get("/rest/v1/time").json() == {"day": "07:00", "night": "23:00"}

    response = client.put("/rest/v1/mode/", json={"mode": "day", "heating": "on"}, follow_redirects=False)
    assert response.json()["mode"] == ["night", "day"]
