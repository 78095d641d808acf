"""Canonical QR payload strings for each content kind."""
from __future__ import annotations

from urllib.parse import quote

from .content import (
    Content,
    ContentKind,
    ContentRecord,
    EmailContent,
    LocationContent,
    PhoneContent,
    SmsContent,
    TextContent,
    UrlContent,
    VCardContent,
    WifiContent,
)

_URI_COMPONENT_SAFE = "!~*'()"
"""Characters left unescaped besides ``A-Z a-z 0-9 - _ .``."""


def encode_uri_component(value: str) -> str:
    """Percent-encode ``value`` the way URI components are escaped in browsers.

    Spaces become ``%20`` and reserved characters such as ``&``, ``=`` and
    ``?`` are escaped.  Unpaired surrogates are passed through the UTF-8
    codec so the function never raises.
    """

    return quote(value, safe=_URI_COMPONENT_SAFE, encoding="utf-8", errors="surrogatepass")


# Whitespace removed by a browser trim(): includes U+FEFF, unlike str.strip(),
# and leaves U+001C-U+001F and U+0085 in place.
_WHITESPACE = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def is_blank(value: str) -> bool:
    """Return ``True`` if ``value`` is empty once surrounding whitespace is trimmed."""

    return not value.strip(_WHITESPACE)


def encode_content(content: Content) -> str:
    """Return the payload string for a single content variant."""

    match content:
        case TextContent(text=text):
            return text
        case UrlContent(url=url):
            # Prefix test only; "httpfoo.com" is passed through untouched.
            return url if url.startswith("http") else f"https://{url}"
        case EmailContent(to=to, subject=subject, body=body):
            return (
                f"mailto:{to}?subject={encode_uri_component(subject)}"
                f"&body={encode_uri_component(body)}"
            )
        case PhoneContent(number=number):
            return "" if is_blank(number) else f"tel:{number}"
        case SmsContent(number=number, message=message):
            return f"sms:{number}?body={encode_uri_component(message)}"
        case WifiContent(ssid=ssid, password=password, security=security, hidden=hidden):
            flag = "true" if hidden else "false"
            return f"WIFI:T:{security.value};S:{ssid};P:{password};H:{flag};;"
        case LocationContent(latitude=latitude, longitude=longitude):
            return f"geo:{latitude},{longitude}"
        case VCardContent():
            return "\n".join(
                (
                    "BEGIN:VCARD",
                    "VERSION:3.0",
                    f"FN:{content.first_name} {content.last_name}",
                    f"ORG:{content.organization}",
                    f"TEL:{content.phone}",
                    f"EMAIL:{content.email}",
                    f"URL:{content.url}",
                    "END:VCARD",
                )
            )
        case _:
            return ""


def content_is_ready(content: Content) -> bool:
    """Return ``True`` when ``content`` holds enough data to be rendered."""

    match content:
        case TextContent(text=text):
            return not is_blank(text)
        case UrlContent(url=url):
            return not is_blank(url)
        case EmailContent(to=to):
            return not is_blank(to)
        case PhoneContent(number=number):
            return not is_blank(number)
        case SmsContent(number=number):
            return not is_blank(number)
        case WifiContent(ssid=ssid):
            return not is_blank(ssid)
        case LocationContent(latitude=latitude, longitude=longitude):
            return not is_blank(latitude) and not is_blank(longitude)
        case VCardContent(first_name=first_name, last_name=last_name):
            return not is_blank(first_name) or not is_blank(last_name)
        case _:
            return False


def _resolve(kind: ContentKind | str, record: ContentRecord) -> Content | None:
    try:
        return record.content_for(kind)
    except ValueError:
        return None


def encode(kind: ContentKind | str, record: ContentRecord) -> str:
    """Return the payload for the ``kind`` sub-record of ``record``.

    Unknown kinds produce an empty string.
    """

    content = _resolve(kind, record)
    return "" if content is None else encode_content(content)


def is_ready(kind: ContentKind | str, record: ContentRecord) -> bool:
    """Return ``True`` if the ``kind`` sub-record of ``record`` is ready."""

    content = _resolve(kind, record)
    return content is not None and content_is_ready(content)


__all__ = [
    "content_is_ready",
    "is_blank",
    "encode",
    "encode_content",
    "encode_uri_component",
    "is_ready",
]
