# ─────────────────────────────────────────────────────────────────
# database.py — In-Memory State
#
# This file owns all data the two servers keep. There is no real
# datastore: the thermostat is simulated and the articles are a
# fixture list that lives as long as the process.
#
# Each application instance builds its own ThermostatState and
# ArticleStore (see main.create_app) and hands them to the routes
# through FastAPI dependencies, so nothing here is process-global
# and every test starts from a clean copy of the fixtures.
#
# Handlers declared with plain `def` run in FastAPI's threadpool,
# so every read and write goes through the store's lock.
# ─────────────────────────────────────────────────────────────────

import logging
import random
from datetime import datetime
from threading import Lock
from typing import List, Optional

from fastapi import Request

from models import (
    Article,
    Device,
    DeviceUpdate,
    Modes,
    ModesIn,
    Temp,
    Times,
    User,
)

logger = logging.getLogger("database")

# Simulated sensor range, degrees Celsius
TEMP_MIN = -10
TEMP_MAX = 40

# Article ids are drawn from [ID_LOW, ID_HIGH)
ID_LOW = 10
ID_HIGH = 110

# Fixture data, copied into every new ArticleStore
ARTICLE_FIXTURES = [
    {"id": "1", "user_id": 100, "title": "Hi", "slug": "hi"},
    {"id": "2", "user_id": 200, "title": "sup", "slug": "sup"},
    {"id": "3", "user_id": 300, "title": "alo", "slug": "alo"},
    {"id": "4", "user_id": 400, "title": "bonjour", "slug": "bonjour"},
    {"id": "5", "user_id": 500, "title": "whats up", "slug": "whats-up"},
]

USER_FIXTURES = [
    {"id": 100, "name": "Peter"},
    {"id": 200, "name": "Julia"},
]


class ThermostatState:
    """
    Simulated thermostat: device identity, temperatures,
    switch-over times and operating modes.

    The "current" mode and heating state are fixed at construction.
    An update only replaces the requested value in slot 1 of each
    pair; slot 0 always reports the current state.
    """

    def __init__(
        self,
        ip: str = "192.168.1.123",
        ssid: str = "MrWhite",
        passphrase: str = "F",
        started_at: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
    ):
        self._lock = Lock()
        self._rng = rng or random.Random()

        self.ip = ip
        self.ssid = ssid
        self.passphrase = passphrase
        self.current_time = (started_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

        self.night_temp = "18.00"
        self.day_temp = "24.00"
        self.threshold = "0.20"

        self.day = "06:00"
        self.night = "22:00"

        self.current_mode = "night"
        self.current_heating = "off"
        self.mode = [self.current_mode, "auto"]
        self.heating = [self.current_heating, "auto"]

    # ── device ────────────────────────────────────────────────────

    def device(self) -> Device:
        with self._lock:
            return Device(
                ip=self.ip,
                ssid=self.ssid,
                passphrase=self.passphrase,
                currenttime=self.current_time,
            )

    def update_device(self, data: DeviceUpdate) -> Device:
        with self._lock:
            self.ssid = data.ssid
            self.passphrase = data.passphrase
            if data.ip is not None:
                self.ip = data.ip
        logger.info(f"Device updated: ssid={data.ssid}")
        return self.device()

    # ── temperature ───────────────────────────────────────────────

    def read_current_temp(self) -> str:
        """A fresh simulated reading; never stored."""
        value = TEMP_MIN + self._rng.random() * (TEMP_MAX - TEMP_MIN)
        return f"{value:f}"

    def temp(self) -> Temp:
        with self._lock:
            return Temp(
                currenttemp=self.read_current_temp(),
                daytemp=self.day_temp,
                nighttemp=self.night_temp,
                thereshold=self.threshold,
            )

    def update_temp(self, data: Temp) -> Temp:
        # currenttemp from the client is ignored
        with self._lock:
            self.day_temp = data.daytemp
            self.night_temp = data.nighttemp
            self.threshold = data.thereshold
        logger.info(
            f"Temp updated: day={data.daytemp} night={data.nighttemp} threshold={data.thereshold}"
        )
        return self.temp()

    # ── switch-over times ─────────────────────────────────────────

    def times(self) -> Times:
        with self._lock:
            return Times(day=self.day, night=self.night)

    def update_times(self, data: Times) -> Times:
        with self._lock:
            self.day = data.day
            self.night = data.night
        return self.times()

    # ── modes ─────────────────────────────────────────────────────

    def modes(self) -> Modes:
        with self._lock:
            return Modes(mode=list(self.mode), heating=list(self.heating))

    def update_modes(self, data: ModesIn) -> Modes:
        with self._lock:
            self.heating = [self.current_heating, data.heating]
            self.mode = [self.current_mode, data.mode]
        return self.modes()


class ArticleStore:
    """
    Ordered list of articles plus the read-only user fixture.

    Lookups are linear scans; the list is small and order matters
    for listing.
    """

    def __init__(
        self,
        articles: Optional[List[dict]] = None,
        users: Optional[List[dict]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._lock = Lock()
        self._rng = rng or random.Random()
        self._articles = [
            Article(**a) for a in (ARTICLE_FIXTURES if articles is None else articles)
        ]
        self._users = [User(**u) for u in (USER_FIXTURES if users is None else users)]

    def list(self) -> List[Article]:
        with self._lock:
            return list(self._articles)

    def get(self, article_id: str) -> Optional[Article]:
        with self._lock:
            for article in self._articles:
                if article.id == article_id:
                    return article
        return None

    def get_by_slug(self, slug: str) -> Optional[Article]:
        with self._lock:
            for article in self._articles:
                if article.slug == slug:
                    return article
        return None

    def _next_id(self) -> str:
        """
        Random id in [ID_LOW, ID_HIGH) not yet taken. Once that
        range is full, one past the largest numeric id.
        """
        taken = {a.id for a in self._articles}
        free = [str(n) for n in range(ID_LOW, ID_HIGH) if str(n) not in taken]
        if free:
            return self._rng.choice(free)
        numeric = [int(i) for i in taken if i.isdigit()]
        return str(max(numeric) + 1)

    def create(self, fields: dict) -> Article:
        with self._lock:
            article = Article(id=self._next_id(), **fields)
            self._articles.append(article)
        logger.info(f"Article created: '{article.id}' ({article.slug})")
        return article

    def update(self, article_id: str, fields: dict) -> Optional[Article]:
        """Overwrites only the given fields. The id never changes."""
        with self._lock:
            for i, article in enumerate(self._articles):
                if article.id == article_id:
                    updated = article.model_copy(update=fields)
                    self._articles[i] = updated
                    return updated
        return None

    def remove(self, article_id: str) -> Optional[Article]:
        with self._lock:
            for i, article in enumerate(self._articles):
                if article.id == article_id:
                    del self._articles[i]
                    logger.info(f"Article removed: '{article_id}'")
                    return article
        return None

    def get_user(self, user_id: int) -> Optional[User]:
        for user in self._users:
            if user.id == user_id:
                return user
        return None


# ── FastAPI dependencies ──────────────────────────────────────────
# Routes ask for the state of the app serving the request, never
# for a module-level instance.

def get_thermostat_state(request: Request) -> ThermostatState:
    return request.app.state.thermostat


def get_article_store(request: Request) -> ArticleStore:
    return request.app.state.articles
