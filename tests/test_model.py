from __future__ import annotations

import pytest

from vcard_codec.model import (
    LOGO,
    BinaryProperty,
    InlineData,
    RemoteReference,
    logo,
    new_property,
    photo,
    RawProperty,
)
from vcard_codec.registry import GIF, PNG


# ── Construction ───────────────────────────────────────────────────────────────

def test_data_constructor():
    prop = logo(data=b"\x00\x01\xff", content_type=PNG)
    assert prop.name == LOGO
    assert prop.data == b"\x00\x01\xff"
    assert prop.url is None
    assert prop.content_type == PNG
    assert prop.is_inline and not prop.is_remote


def test_url_constructor():
    prop = BinaryProperty.from_url("LOGO", "http://example.com/logo.gif", GIF)
    assert prop.url == "http://example.com/logo.gif"
    assert prop.data is None
    assert prop.content_type == GIF
    assert prop.payload == RemoteReference("http://example.com/logo.gif")


def test_empty_data_is_still_inline():
    prop = logo(data=b"")
    assert prop.data == b""
    assert prop.url is None


def test_bare_constructor_has_no_payload():
    prop = logo()
    assert prop.url is None
    assert prop.data is None
    assert prop.content_type is None


def test_url_and_data_together_rejected():
    with pytest.raises(ValueError):
        logo(url="http://example.com/a.png", data=b"A")


# ── Mutual exclusion ───────────────────────────────────────────────────────────

def test_set_url_clears_data():
    prop = logo(data=b"A", content_type=PNG)
    prop.set_url("http://example.com/a.png")
    assert prop.data is None
    assert prop.url == "http://example.com/a.png"
    assert prop.content_type is None


def test_set_data_clears_url():
    prop = logo(url="http://example.com/a.png")
    prop.set_data(b"A", PNG)
    assert prop.url is None
    assert prop.payload == InlineData(b"A")
    assert prop.content_type == PNG


def test_exclusion_holds_over_a_sequence():
    prop = logo()
    for i in range(4):
        if i % 2:
            prop.set_url(f"http://example.com/{i}.png")
        else:
            prop.set_data(bytes([i]))
        assert (prop.url is None) != (prop.data is None)


# ── Parameters ─────────────────────────────────────────────────────────────────

def test_language_delegates_to_parameters():
    prop = logo()
    prop.language = "en"
    assert prop.parameters.get("LANGUAGE") == "en"
    assert prop.language == "en"


def test_parameters_not_shared():
    a, b = logo(), logo()
    a.parameters.add("X-A", "1")
    assert len(b.parameters) == 0


def test_type_is_the_content_type():
    prop = photo(data=b"A", content_type=PNG)
    assert prop.type == PNG
    prop.type = GIF
    assert prop.content_type == GIF
    prop.type = None
    assert prop.content_type is None
    assert prop.data == b"A"


def test_new_property_kinds():
    assert isinstance(new_property("logo"), BinaryProperty)
    assert isinstance(new_property("PHOTO"), BinaryProperty)
    raw = new_property("note")
    assert isinstance(raw, RawProperty)
    assert raw.name == "NOTE"
