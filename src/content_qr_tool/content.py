"""Content model holding one editable record per QR content kind."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Optional, Union


class ContentKind(str, enum.Enum):
    """Semantic category of the payload placed in the QR code."""

    TEXT = "text"
    URL = "url"
    EMAIL = "email"
    PHONE = "phone"
    SMS = "sms"
    WIFI = "wifi"
    LOCATION = "location"
    VCARD = "vcard"


class WifiSecurity(str, enum.Enum):
    """Wi-Fi authentication types understood by scanners.

    The value is written verbatim into the ``T:`` field of the Wi-Fi payload.
    """

    WPA = "WPA"
    WEP = "WEP"
    NO_PASSWORD = "nopass"


class ErrorCorrection(str, enum.Enum):
    """QR error-correction level."""

    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @property
    def recovery(self) -> float:
        """Approximate fraction of the symbol that may be damaged."""

        return _RECOVERY[self]


_RECOVERY = {
    ErrorCorrection.L: 0.07,
    ErrorCorrection.M: 0.15,
    ErrorCorrection.Q: 0.25,
    ErrorCorrection.H: 0.30,
}


@dataclass(slots=True)
class TextContent:
    text: str = ""


@dataclass(slots=True)
class UrlContent:
    url: str = ""


@dataclass(slots=True)
class EmailContent:
    to: str = ""
    subject: str = ""
    body: str = ""


@dataclass(slots=True)
class PhoneContent:
    number: str = ""


@dataclass(slots=True)
class SmsContent:
    number: str = ""
    message: str = ""


@dataclass(slots=True)
class WifiContent:
    ssid: str = ""
    password: str = ""
    security: WifiSecurity = WifiSecurity.WPA
    hidden: bool = False


@dataclass(slots=True)
class LocationContent:
    latitude: str = ""
    longitude: str = ""


@dataclass(slots=True)
class VCardContent:
    first_name: str = ""
    last_name: str = ""
    organization: str = ""
    phone: str = ""
    email: str = ""
    url: str = ""


Content = Union[
    TextContent,
    UrlContent,
    EmailContent,
    PhoneContent,
    SmsContent,
    WifiContent,
    LocationContent,
    VCardContent,
]
"""Tagged union of the per-kind content variants."""


@dataclass(slots=True)
class ContentRecord:
    """Every kind's fields, kept side by side for the whole session."""

    text: str = ""
    url: str = ""
    email: EmailContent = field(default_factory=EmailContent)
    phone: str = ""
    sms: SmsContent = field(default_factory=SmsContent)
    wifi: WifiContent = field(default_factory=WifiContent)
    location: LocationContent = field(default_factory=LocationContent)
    vcard: VCardContent = field(default_factory=VCardContent)

    def content_for(self, kind: ContentKind | str) -> Content:
        """Return the variant carrying only the data of ``kind``.

        Flat string kinds are wrapped in a fresh variant; structured kinds
        return the record's own sub-record.
        """

        kind = ContentKind(kind)
        if kind is ContentKind.TEXT:
            return TextContent(self.text)
        if kind is ContentKind.URL:
            return UrlContent(self.url)
        if kind is ContentKind.PHONE:
            return PhoneContent(self.phone)
        return getattr(self, kind.value)


_FLAT_FIELDS = ("text", "url", "phone")
_SECTIONS = ("email", "sms", "wifi", "location", "vcard")


@dataclass(slots=True)
class RenderSettings:
    """Settings forwarded to the QR renderer."""

    error_correction: ErrorCorrection = ErrorCorrection.M
    size: int = 256


def coerce_error_correction(level: ErrorCorrection | str) -> ErrorCorrection:
    try:
        return ErrorCorrection(level.upper() if isinstance(level, str) else level)
    except ValueError as exc:
        raise ValueError(f"Unsupported error correction level: {level!r}") from exc


def coerce_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError(f"QR size must be a positive integer, got {size!r}")
    return size


Subscriber = Callable[["ContentModel"], None]


class ContentModel:
    """Session state edited by the UI and observed by a single subscriber.

    The model owns a :class:`ContentRecord`, the active :class:`ContentKind`
    and the :class:`RenderSettings`.  Every successful mutation notifies the
    subscriber, including re-selecting the active kind.
    """

    def __init__(
        self,
        record: Optional[ContentRecord] = None,
        kind: ContentKind | str = ContentKind.TEXT,
        settings: Optional[RenderSettings] = None,
    ) -> None:
        self._record = record if record is not None else ContentRecord()
        self._kind = ContentKind(kind)
        self._settings = settings if settings is not None else RenderSettings()
        self._subscriber: Optional[Subscriber] = None

    @property
    def record(self) -> ContentRecord:
        return self._record

    @property
    def kind(self) -> ContentKind:
        return self._kind

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    def subscribe(self, subscriber: Subscriber) -> None:
        """Register ``subscriber``, replacing any previous one."""

        self._subscriber = subscriber

    def unsubscribe(self) -> None:
        self._subscriber = None

    def _notify(self) -> None:
        if self._subscriber is not None:
            self._subscriber(self)

    def active_content(self) -> Content:
        return self._record.content_for(self._kind)

    def select(self, kind: ContentKind | str) -> None:
        """Make ``kind`` active without touching any sub-record."""

        self._kind = ContentKind(kind)
        self._notify()

    def update(self, name: str, value: str) -> None:
        """Set one of the flat string fields (``text``, ``url``, ``phone``)."""

        if name not in _FLAT_FIELDS:
            raise ValueError(f"Unknown content field: {name}")
        _check_type(name, value, str)
        setattr(self._record, name, value)
        self._notify()

    def update_nested(self, section: str, name: str, value: Any) -> None:
        """Set ``name`` inside the structured sub-record ``section``."""

        if section not in _SECTIONS:
            raise ValueError(f"Unknown content section: {section}")
        target = getattr(self._record, section)
        known = {item.name: item for item in fields(target)}
        if name not in known:
            raise ValueError(f"Unknown field {name!r} in section {section!r}")

        if isinstance(target, WifiContent) and name == "security":
            value = _coerce_security(value)
        elif isinstance(target, WifiContent) and name == "hidden":
            _check_type(f"{section}.{name}", value, bool)
        else:
            _check_type(f"{section}.{name}", value, str)

        setattr(target, name, value)
        self._notify()

    def set_error_correction(self, level: ErrorCorrection | str) -> None:
        self._settings.error_correction = coerce_error_correction(level)
        self._notify()

    def set_size(self, size: int) -> None:
        self._settings.size = coerce_size(size)
        self._notify()


def _coerce_security(value: WifiSecurity | str) -> WifiSecurity:
    try:
        return WifiSecurity(value)
    except ValueError as exc:
        raise ValueError(f"Unsupported Wi-Fi security type: {value!r}") from exc


def _check_type(name: str, value: Any, expected: type) -> None:
    if not isinstance(value, expected):
        raise ValueError(f"{name} expects {expected.__name__}, got {type(value).__name__}")


__all__ = [
    "Content",
    "ContentKind",
    "ContentModel",
    "ContentRecord",
    "EmailContent",
    "ErrorCorrection",
    "LocationContent",
    "PhoneContent",
    "RenderSettings",
    "SmsContent",
    "TextContent",
    "UrlContent",
    "VCardContent",
    "WifiContent",
    "WifiSecurity",
    "coerce_error_correction",
    "coerce_size",
]
