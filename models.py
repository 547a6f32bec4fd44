# ─────────────────────────────────────────────────────────────────
# models.py — Request and Response Payloads (Pydantic Schemas)
#
# Every JSON body the two servers accept or return is declared
# here. Pydantic rejects malformed bodies before they reach the
# handlers; those rejections become 400 responses (see errors.py).
#
# The wire names are kept exactly as existing clients send them,
# including "thereshold" and the legacy "heting" key.
# ─────────────────────────────────────────────────────────────────

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


# ── Thermostat records ────────────────────────────────────────────

class Device(BaseModel):
    """
    Network identity of the thermostat.

    {"ip": "192.168.1.123", "ssid": "MrWhite", "passphrase": "F",
     "currenttime": "2026-10-19 08:00:00"}
    """

    ip: str
    ssid: str
    passphrase: str
    currenttime: str


class DeviceUpdate(BaseModel):
    """Body of PUT /rest/v1/device. The ip is only replaced when sent."""

    ssid: str = ""
    passphrase: str = ""
    ip: Optional[str] = None


class Temp(BaseModel):
    """
    Temperature readings and set points, all as strings.

    On PUT only daytemp, nighttemp and thereshold are stored;
    currenttemp is always a fresh simulated reading.
    """

    currenttemp: str = ""
    nighttemp: str = ""
    daytemp: str = ""
    thereshold: str = ""


class Times(BaseModel):
    """Day and night switch-over times, HH:MM."""

    day: str = ""
    night: str = ""

    @field_validator("day")
    @classmethod
    def lower_day(cls, v: str) -> str:
        return v.lower()


class Modes(BaseModel):
    """
    Operating modes as [current, requested] pairs.

    {"mode": ["night", "auto"], "heating": ["off", "auto"]}

    Older firmware builds sent the same pairs under capitalised keys,
    {"Mode": [...], "Heating": [...]}; clients here get the lower-case
    names shown in the device documentation.
    """

    mode: List[str]
    heating: List[str]


class ModesIn(BaseModel):
    """Body of PUT /rest/v1/mode. Values are taken as-is."""

    mode: str = ""
    heating: str = Field(default="", validation_alias=AliasChoices("heating", "heting"))


# ── Articles ──────────────────────────────────────────────────────

ARTICLE_FIELDS = ("user_id", "title", "slug")


class User(BaseModel):
    id: int
    name: str


class Article(BaseModel):
    id: str
    user_id: int = 0   # the author
    title: str = ""
    slug: str = ""


class UserPayload(BaseModel):
    """User as embedded in article payloads."""

    id: int = 0
    name: str = ""
    role: str = ""


class ArticleRequest(BaseModel):
    """
    Request payload for creating or updating an Article.

    The "id" a client sends is accepted but always discarded. Ids
    are assigned by the store and never change afterwards.
    """

    id: Optional[str] = None
    user_id: Optional[int] = None
    title: Optional[str] = None
    slug: Optional[str] = None
    user: Optional[UserPayload] = None

    def article_fields(self) -> dict:
        """Returns only the article fields the client actually sent."""
        fields = {
            name: getattr(self, name)
            for name in ARTICLE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is not None
        }
        if "title" in fields:
            fields["title"] = fields["title"].lower()
        return fields


class ArticleResponse(BaseModel):
    """
    Response payload for an Article.

    Adds the author (when known) and a computed "elapsed" field on
    top of the stored record.
    """

    id: str
    user_id: int
    title: str
    slug: str
    user: Optional[UserPayload] = None
    elapsed: int = 0


# ── Errors ────────────────────────────────────────────────────────

class ErrResponse(BaseModel):
    """Error body of the thermostat REST server."""

    status: str                    # user-level status message
    code: Optional[int] = None     # application-specific error code
    error: Optional[str] = None    # application-level error message


# ── Device API ────────────────────────────────────────────────────

class DeviceStatus(BaseModel):
    """Response of the device API's GetIP operation."""

    ip: str
    ssid: str
    currenttime: str


class Error(BaseModel):
    """Error body of the device API."""

    code: int
    message: str
