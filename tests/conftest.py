"""
Pytest configuration and fixtures
"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

import device_api
import main
from config import Settings
from database import ThermostatState

ADMIN_TOKEN = "secret"
STARTED_AT = datetime(2026, 1, 2, 3, 4, 5)


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_token=ADMIN_TOKEN, device_ssid="TestNet", device_passphrase="pw")


@pytest.fixture
def thermostat(settings) -> ThermostatState:
    return ThermostatState(
        ip=settings.device_ip,
        ssid=settings.device_ssid,
        passphrase=settings.device_passphrase,
        started_at=STARTED_AT,
    )


@pytest.fixture
def app(settings, thermostat):
    """A fresh REST server per test, so fixture data never leaks"""
    return main.create_app(settings=settings, thermostat=thermostat)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def device_client(settings, thermostat) -> TestClient:
    return TestClient(device_api.create_app(settings=settings, thermostat=thermostat))
