from __future__ import annotations

import pytest

from sensitive_scan.logic.validators import (
    GridCoordinateValidator,
    IPAddressValidator,
    LatLongValidator,
    MilUrlValidator,
    PhoneValidator,
    SecretMarkingValidator,
    SSNValidator,
    ValidationLogic,
    get_validator,
)


def _secret_ok(text: str) -> bool:
    validator = SecretMarkingValidator(vocabulary=["open", "no", "trade", "top"])
    index = text.index("SECRET")
    return validator.validate("SECRET", text, index)


@pytest.mark.parametrize(
    "ssn,expected",
    [
        ("123-45-6789", True),
        ("234567890", True),
        ("000-12-3456", False),
        ("666-12-3456", False),
        ("900-12-3456", False),
        ("999-12-3456", False),
        ("123-00-6789", False),
        ("123-45-0000", False),
        ("12-345-678", False),
    ],
)
def test_ssn_validator_area_group_serial(ssn, expected):
    assert SSNValidator().validate(ssn, ssn, 0) is expected


def test_phone_validator_requires_separator():
    v = PhoneValidator()
    assert v.validate("703-555-1234", "", 0)
    assert v.validate("(703)5551234", "", 0)
    assert v.validate("703 555 1234", "", 0)
    assert not v.validate("7035551234", "", 0)


def test_secret_validator_accepts_marking():
    assert _secret_ok("This document is SECRET")
    assert _secret_ok("SECRET")


@pytest.mark.parametrize(
    "text",
    [
        "It was an open SECRET that morale improved",
        "Protected trade SECRET information",
        "It was no SECRET the team excelled",
        "Trained Amn to keep SECRET data safe",
        "Told them to keep it SECRET",
        "Document is TOP SECRET",
    ],
)
def test_secret_validator_rejects_idioms(text):
    assert not _secret_ok(text)


@pytest.mark.parametrize("word", ["SECRETARY", "SECRETARIAT", "SECRETLY", "SECRETIVE"])
def test_secret_validator_rejects_longer_words(word):
    assert not _secret_ok(f"Served as {word} for the wing")


def test_grid_validator_minimum_digits():
    v = GridCoordinateValidator()
    assert v.validate("4QFJ12345", "", 0)
    assert not v.validate("4QFJ12", "", 0)


def test_lat_long_validator_range():
    v = LatLongValidator()
    assert v.validate("38.8977, -77.0365", "", 0)
    assert v.validate("-90.0000, 180.0000", "", 0)
    assert not v.validate("95.1234, 10.1234", "", 0)
    assert not v.validate("45.1234, 190.1234", "", 0)


def test_ip_validator_uses_allowlist():
    v = IPAddressValidator(vocabulary=["127.0.0.1", "8.8.8.8"])
    assert not v.validate("127.0.0.1", "", 0)
    assert not v.validate("8.8.8.8", "", 0)
    assert v.validate("192.168.1.100", "", 0)
    assert v.validate("10.0.0.1", "", 0)


def test_mil_url_validator_yields_to_email():
    v = MilUrlValidator()
    assert v.validate("https://www.af.mil", "", 0)
    assert not v.validate("http://admin@portal.af.mil", "", 0)


def test_preceding_words_returns_closest_last():
    text = "It was an open SECRET"
    assert ValidationLogic.preceding_words(text, text.index("SECRET"), 2) == ["an", "open"]


def test_get_validator_caches_instances():
    first = get_validator("ip_address", ["127.0.0.1"])
    second = get_validator("ip_address", ["127.0.0.1"])
    assert first is second
    assert first.vocabulary() == ["127.0.0.1"]


def test_get_validator_unknown_name_returns_none():
    assert get_validator("luhn_checksum") is None
