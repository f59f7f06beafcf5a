"""Property <-> vCard content line.

Line splitting, parameter parsing and folding are left to ``vobject.base``;
this module decides what goes into the parameters and the value for each
version:

  2.1   LOGO;ENCODING=BASE64;TYPE=png:iVBORw0...
        LOGO;VALUE=URL;TYPE=png:http://example.com/logo.png
  3.0   LOGO;ENCODING=b;TYPE=png:iVBORw0...
        LOGO;VALUE=uri;TYPE=png:http://example.com/logo.png
  4.0   LOGO:data:image/png;base64,iVBORw0...
        LOGO;MEDIATYPE=image/png:http://example.com/logo.png
"""
from __future__ import annotations

import base64
import binascii
import logging
import re

import vobject

from .errors import DecodeError, SkippableError
from .model import BINARY_PROPERTIES, BinaryProperty, Property, RawProperty, new_property
from .params import ENCODING, MEDIATYPE, TYPE, VALUE, ParameterSet
from .versions import VCardVersion

logger = logging.getLogger(__name__)

DATA_URI = re.compile(r"^data:([^;]*);base64,(.*)", re.IGNORECASE | re.DOTALL)

DEFAULT_MEDIA_TYPE = "application/octet-stream"

# parameters derived from BinaryProperty fields; rewritten on every marshal
_CODEC_OWNED = (TYPE, MEDIATYPE, ENCODING, VALUE)

# 2.1 allows bare parameter values ("LOGO;PNG;BASE64:...")
_BARE_ENCODINGS = {"BASE64", "B", "QUOTED-PRINTABLE", "8BIT", "7BIT"}
_BARE_VALUES = {"URL", "CID", "CONTENT-ID"}
_BASE64_ENCODINGS = {"B", "BASE64"}


# ── Text escaping ──────────────────────────────────────────────────────────────

def escape(text: str) -> str:
    return vobject.base.backslashEscape(text)


def unescape(text: str) -> str:
    # unescaped commas split the value; they belong to it here
    return ",".join(vobject.vcard.stringToTextValues(text))


# ── Base64 ─────────────────────────────────────────────────────────────────────

def decode_base64(payload: str) -> bytes:
    # folded 2.1 payloads keep their indentation after unfolding
    compact = re.sub(r"\s+", "", payload)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Invalid base64 payload: {exc}") from exc


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def data_uri(media_type: str, data: bytes) -> str:
    return f"data:{media_type};base64,{encode_base64(data)}"


# ── Marshal ────────────────────────────────────────────────────────────────────

def _binary_line(prop: BinaryProperty, version: VCardVersion,
                 warnings: list[str]) -> tuple[ParameterSet, str]:
    params = prop.parameters.copy()
    for name in _CODEC_OWNED:
        params.remove(name)

    ct = prop.content_type
    if prop.payload is None:
        raise SkippableError(f"{prop.name} has neither a URL nor binary data")

    if version.is_legacy:
        if ct is not None:
            if ct.type_label:
                params.set(TYPE, ct.type_label)
            else:
                warnings.append(
                    f"{prop.name}: media type {ct.media_type!r} has no TYPE label "
                    f"in vCard {version}; TYPE omitted"
                )
        if prop.is_remote:
            params.set(VALUE, "URL" if version is VCardVersion.V2_1 else "uri")
            return params, escape(prop.url)
        params.set(ENCODING, "BASE64" if version is VCardVersion.V2_1 else "b")
        return params, encode_base64(prop.data)

    if prop.is_remote:
        if ct is not None:
            params.set(MEDIATYPE, ct.media_type)
        return params, prop.url
    media_type = ct.media_type if ct is not None else DEFAULT_MEDIA_TYPE
    return params, data_uri(media_type, prop.data)


def marshal_text(prop: Property, version: VCardVersion,
                 warnings: list[str] | None = None, fold_width: int = 75) -> str:
    """Render ``prop`` as one (possibly folded) content line, without the CRLF."""
    if warnings is None:
        warnings = []
    group = None
    if isinstance(prop, BinaryProperty):
        params, value = _binary_line(prop, version, warnings)
    elif isinstance(prop, RawProperty):
        params, value, group = prop.parameters, prop.value, prop.group
    else:
        raise SkippableError(f"No text marshaller for {type(prop).__name__}")

    try:
        line = vobject.base.ContentLine(
            prop.name,
            [[name, *values] for name, values in params.grouped()],
            value,
            group=group,
        )
        text = line.serialize(None, fold_width)
    except (vobject.base.VObjectError, LookupError, UnicodeDecodeError) as exc:
        raise SkippableError(f"{prop.name} cannot be written: {exc}") from exc
    return text.rstrip("\r\n")


# ── Unmarshal ──────────────────────────────────────────────────────────────────

def _parameters_from(line: vobject.base.ContentLine) -> ParameterSet:
    params = ParameterSet()
    for name, values in line.params.items():
        for v in values:
            params.add(name, v)
    for bare in line.singletonparams:
        key = bare.upper()
        if key in _BARE_ENCODINGS:
            params.add(ENCODING, bare)
        elif key in _BARE_VALUES:
            params.add(VALUE, bare)
        else:
            params.add(TYPE, bare)
    return params


def unmarshal_value(prop: Property, value: str, version: VCardVersion,
                    warnings: list[str]) -> None:
    """Fill ``prop`` from a decoded property value.

    Shared by the text codec and the generic HTML path.
    """
    if not isinstance(prop, BinaryProperty):
        if isinstance(prop, RawProperty):
            prop.value = value
            return
        raise SkippableError(f"No value unmarshaller for {type(prop).__name__}")

    value = value.strip()
    if not value:
        raise SkippableError(f"{prop.name} property has no value.")

    params = prop.parameters
    m = DATA_URI.match(value)
    if m:
        prop.set_data(decode_base64(m.group(2)), prop.build_media_type_obj(m.group(1)))
    elif version.is_legacy and (params.encoding or "").upper() in _BASE64_ENCODINGS:
        label = params.type
        prop.set_data(decode_base64(value), None if label is None else prop.build_type_obj(label))
    elif version.is_legacy:
        label = params.type
        ct = None if label is None else prop.build_type_obj(label)
        prop.set_url(unescape(value), ct)
    else:
        if params.encoding is not None:
            warnings.append(f"{prop.name}: ENCODING is not used in vCard 4.0; value read as a URL")
        mt = params.media_type
        prop.set_url(value, None if mt is None else prop.build_media_type_obj(mt))

    for name in _CODEC_OWNED:
        params.remove(name)


def unmarshal_text(line: str, version: VCardVersion, warnings: list[str]) -> Property:
    """Parse one unfolded content line into a property."""
    try:
        content = vobject.base.textLineToContentLine(line)
    except (vobject.base.ParseError, LookupError, UnicodeDecodeError) as exc:
        # bad syntax, or a QUOTED-PRINTABLE value in an unknown or wrong CHARSET
        raise SkippableError(f"Unparseable line {line[:40]!r}: {exc}") from exc

    prop = new_property(content.name)
    prop.parameters = _parameters_from(content)
    if content.name in BINARY_PROPERTIES:
        unmarshal_value(prop, content.value, version, warnings)
    else:
        prop.value = content.value
        prop.group = content.group
    return prop
