"""Parameter registry: well-known image types and fallback construction."""
from __future__ import annotations

from vcard_codec.model import logo
from vcard_codec.registry import BMP, DIB, IMAGE_TYPES, JPEG, PNG, MediaTypeParameter


# ── Lookup ─────────────────────────────────────────────────────────────────────

def test_lookup_by_label_is_case_insensitive():
    assert IMAGE_TYPES.lookup_by_label("png") is PNG
    assert IMAGE_TYPES.lookup_by_label("JPEG") is JPEG


def test_lookup_by_label_miss_returns_none():
    assert IMAGE_TYPES.lookup_by_label("webp") is None


def test_lookup_by_media_type():
    assert IMAGE_TYPES.lookup_by_media_type("image/png") is PNG
    assert IMAGE_TYPES.lookup_by_media_type("image/webp") is None


def test_shared_media_type_prefers_first_entry():
    # bmp and dib are both image/bmp
    assert IMAGE_TYPES.lookup_by_media_type("image/bmp") is BMP
    assert IMAGE_TYPES.lookup_by_label("dib") is DIB


# ── Fallbacks ──────────────────────────────────────────────────────────────────

def test_build_fallback_from_label():
    p = IMAGE_TYPES.build_fallback("webp")
    assert p == MediaTypeParameter("webp", "image/webp", None)


def test_fallback_values_compare_by_field():
    assert IMAGE_TYPES.build_fallback("webp") == IMAGE_TYPES.build_fallback("webp")
    assert MediaTypeParameter("png", "image/png", "png") == PNG


def test_fallback_from_media_type_without_slash():
    p = IMAGE_TYPES.build_fallback_from_media_type("noslash")
    assert p.type_label == ""
    assert p.media_type == "noslash"
    assert p.extension is None


def test_fallback_from_media_type_trailing_slash():
    assert IMAGE_TYPES.build_fallback_from_media_type("image/").type_label == ""


# ── Through the property ───────────────────────────────────────────────────────

def test_build_media_type_obj_known():
    assert logo().build_media_type_obj("image/png") == PNG


def test_build_media_type_obj_custom_image():
    p = logo().build_media_type_obj("image/x-custom")
    assert p.type_label == "x-custom"
    assert p.media_type == "image/x-custom"


def test_build_media_type_obj_other_top_level_type():
    p = logo().build_media_type_obj("application/octet-stream")
    assert p.type_label == "octet-stream"
    assert p.media_type == "application/octet-stream"


def test_build_media_type_obj_no_slash():
    assert logo().build_media_type_obj("noslash").type_label == ""


def test_build_type_obj_known_and_unknown():
    prop = logo()
    assert prop.build_type_obj("PNG") == PNG
    assert prop.build_type_obj("webp") == MediaTypeParameter("webp", "image/webp", None)


def test_lookup_by_media_type_ignores_case():
    assert IMAGE_TYPES.lookup_by_media_type("IMAGE/PNG") is PNG
