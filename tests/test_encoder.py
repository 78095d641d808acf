from __future__ import annotations

import pytest

from content_qr_tool.content import (
    ContentKind,
    ContentRecord,
    EmailContent,
    LocationContent,
    SmsContent,
    VCardContent,
    WifiContent,
    WifiSecurity,
)
from content_qr_tool.encoder import (
    encode,
    encode_content,
    encode_uri_component,
    is_blank,
    is_ready,
)


@pytest.fixture()
def record() -> ContentRecord:
    return ContentRecord()


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("example.com", "https://example.com"),
        ("http://x", "http://x"),
        ("https://example.com/a?b=c", "https://example.com/a?b=c"),
        ("httpx", "httpx"),
        ("ftp://host", "https://ftp://host"),
    ],
)
def test_url_prefix_rule(record: ContentRecord, url: str, expected: str):
    record.url = url

    assert encode(ContentKind.URL, record) == expected


def test_empty_url_still_gets_scheme(record: ContentRecord):
    assert encode(ContentKind.URL, record) == "https://"
    assert not is_ready(ContentKind.URL, record)


def test_text_is_passed_through_verbatim(record: ContentRecord):
    record.text = "  line one\nline two  "

    assert encode(ContentKind.TEXT, record) == "  line one\nline two  "


def test_email_percent_encodes_subject_and_body(record: ContentRecord):
    record.email = EmailContent(to="a@b.com", subject="Hi there", body="A&B")

    assert encode(ContentKind.EMAIL, record) == "mailto:a@b.com?subject=Hi%20there&body=A%26B"


def test_email_with_only_recipient(record: ContentRecord):
    record.email.to = "a@b.com"

    assert encode(ContentKind.EMAIL, record) == "mailto:a@b.com?subject=&body="


def test_uri_component_matches_browser_escaping():
    assert encode_uri_component("a b&c=d?/#+") == "a%20b%26c%3Dd%3F%2F%23%2B"
    assert encode_uri_component("-_.!~*'()") == "-_.!~*'()"
    assert encode_uri_component("café") == "caf%C3%A9"
    assert encode_uri_component("line\nbreak") == "line%0Abreak"


def test_uri_component_never_raises_on_lone_surrogate():
    assert encode_uri_component("\ud800") == "%ED%A0%80"


@pytest.mark.parametrize(
    ("phone", "expected"),
    [
        ("+1234567890", "tel:+1234567890"),
        (" 555 0100 ", "tel: 555 0100 "),
        ("   ", ""),
        ("", ""),
    ],
)
def test_phone_guard(record: ContentRecord, phone: str, expected: str):
    record.phone = phone

    assert encode(ContentKind.PHONE, record) == expected


def test_sms_with_number(record: ContentRecord):
    record.sms = SmsContent(number="+15550100", message="See you at 5?")

    assert encode(ContentKind.SMS, record) == "sms:+15550100?body=See%20you%20at%205%3F"


def test_sms_without_number_is_still_emitted(record: ContentRecord):
    record.sms.message = "hi"

    assert encode(ContentKind.SMS, record) == "sms:?body=hi"
    assert not is_ready(ContentKind.SMS, record)


def test_wifi_payload(record: ContentRecord):
    record.wifi = WifiContent(ssid="Net1", password="pw", security=WifiSecurity.WPA, hidden=False)

    assert encode(ContentKind.WIFI, record) == "WIFI:T:WPA;S:Net1;P:pw;H:false;;"


def test_wifi_open_hidden_network(record: ContentRecord):
    record.wifi = WifiContent(ssid="Cafe", security=WifiSecurity.NO_PASSWORD, hidden=True)

    assert encode(ContentKind.WIFI, record) == "WIFI:T:nopass;S:Cafe;P:;H:true;;"


def test_wifi_reserved_characters_are_not_escaped(record: ContentRecord):
    record.wifi = WifiContent(ssid="a;b,c", password="p:w\\d", security=WifiSecurity.WEP)

    assert encode(ContentKind.WIFI, record) == "WIFI:T:WEP;S:a;b,c;P:p:w\\d;H:false;;"


def test_location_is_raw_concatenation(record: ContentRecord):
    record.location = LocationContent(latitude="40.7128", longitude="-74.0060")
    assert encode(ContentKind.LOCATION, record) == "geo:40.7128,-74.0060"

    record.location = LocationContent(latitude="north", longitude="")
    assert encode(ContentKind.LOCATION, record) == "geo:north,"


def test_vcard_block(record: ContentRecord):
    record.vcard = VCardContent(first_name="John", last_name="Doe")

    assert encode(ContentKind.VCARD, record) == (
        "BEGIN:VCARD\n"
        "VERSION:3.0\n"
        "FN:John Doe\n"
        "ORG:\n"
        "TEL:\n"
        "EMAIL:\n"
        "URL:\n"
        "END:VCARD"
    )


def test_vcard_keeps_separator_when_a_name_is_missing(record: ContentRecord):
    record.vcard = VCardContent(last_name="Doe", organization="Acme", phone="+1", email="d@acme.io", url="acme.io")

    lines = encode(ContentKind.VCARD, record).split("\n")

    assert lines[2] == "FN: Doe"
    assert lines[3:7] == ["ORG:Acme", "TEL:+1", "EMAIL:d@acme.io", "URL:acme.io"]


def test_unknown_kind_encodes_to_empty_string(record: ContentRecord):
    record.text = "something"

    assert encode("fax", record) == ""
    assert not is_ready("fax", record)


def test_encode_content_ignores_foreign_objects():
    assert encode_content(object()) == ""  # type: ignore[arg-type]


def test_encode_accepts_kind_identifiers(record: ContentRecord):
    record.phone = "+1"

    assert encode("phone", record) == encode(ContentKind.PHONE, record) == "tel:+1"


def test_encode_is_deterministic(record: ContentRecord):
    record.email = EmailContent(to="x@y.z", subject="s t", body="b&b")

    outputs = {encode(kind, record) for kind in [ContentKind.EMAIL] * 5}

    assert len(outputs) == 1


def test_encode_does_not_mutate_record(record: ContentRecord):
    record.vcard.first_name = "Ada"
    record.url = "example.com"
    before = repr(record)

    for kind in ContentKind:
        encode(kind, record)
        is_ready(kind, record)

    assert repr(record) == before


@pytest.mark.parametrize(
    ("kind", "setup", "expected"),
    [
        (ContentKind.TEXT, lambda r: setattr(r, "text", " \t\n"), False),
        (ContentKind.TEXT, lambda r: setattr(r, "text", " x "), True),
        (ContentKind.URL, lambda r: setattr(r, "url", "a.io"), True),
        (ContentKind.EMAIL, lambda r: setattr(r.email, "subject", "only subject"), False),
        (ContentKind.EMAIL, lambda r: setattr(r.email, "to", "a@b.c"), True),
        (ContentKind.PHONE, lambda r: setattr(r, "phone", "  "), False),
        (ContentKind.PHONE, lambda r: setattr(r, "phone", "+1555"), True),
        (ContentKind.SMS, lambda r: setattr(r.sms, "message", "no number"), False),
        (ContentKind.SMS, lambda r: setattr(r.sms, "number", "123"), True),
        (ContentKind.WIFI, lambda r: setattr(r.wifi, "password", "secret"), False),
        (ContentKind.WIFI, lambda r: setattr(r.wifi, "ssid", "Home"), True),
        (ContentKind.VCARD, lambda r: setattr(r.vcard, "organization", "Acme"), False),
        (ContentKind.VCARD, lambda r: setattr(r.vcard, "first_name", "Ada"), True),
        (ContentKind.VCARD, lambda r: setattr(r.vcard, "last_name", "Lovelace"), True),
    ],
)
def test_readiness_rules(record: ContentRecord, kind, setup, expected):
    setup(record)

    assert is_ready(kind, record) is expected


@pytest.mark.parametrize(
    ("latitude", "longitude", "expected"),
    [
        ("40.7", "-74.0", True),
        ("40.7", "", False),
        ("", "-74.0", False),
        ("40.7", "   ", False),
        ("", "", False),
    ],
)
def test_location_needs_both_coordinates(record: ContentRecord, latitude, longitude, expected):
    record.location = LocationContent(latitude=latitude, longitude=longitude)

    assert is_ready(ContentKind.LOCATION, record) is expected


def test_nothing_is_ready_by_default(record: ContentRecord):
    assert not any(is_ready(kind, record) for kind in ContentKind)


@pytest.mark.parametrize(
    ("value", "blank"),
    [
        ("", True),
        (" \t\r\n\x0b\x0c", True),
        ("\xa0 \u3000", True),
        ("\ufeff", True),
        ("\u2028\u2029", True),
        ("\x1c", False),
        ("\x1f", False),
        ("\x85", False),
        (" a ", False),
    ],
)
def test_blank_uses_browser_trim_whitespace(value: str, blank: bool):
    assert is_blank(value) is blank


def test_byte_order_mark_alone_is_not_ready(record: ContentRecord):
    record.text = "\ufeff"
    record.phone = "\ufeff"

    assert not is_ready(ContentKind.TEXT, record)
    assert encode(ContentKind.PHONE, record) == ""


def test_separator_controls_count_as_content(record: ContentRecord):
    record.wifi.ssid = "\x1c"

    assert is_ready(ContentKind.WIFI, record)
