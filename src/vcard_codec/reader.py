from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field

import vobject

from .errors import SkippableError, UnknownVersionError
from .html_codec import find_elements, unmarshal_html
from .model import BINARY_PROPERTIES, Property, new_property
from .text_codec import unmarshal_text
from .versions import VCardVersion

logger = logging.getLogger(__name__)

DEFAULT_VERSION = VCardVersion.V3_0


@dataclass
class ParseResult:
    properties: list[Property] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    version: VCardVersion = DEFAULT_VERSION

    def named(self, name: str) -> list[Property]:
        key = name.upper()
        return [p for p in self.properties if p.name.upper() == key]


def _line_name(line: str) -> str:
    head = line.split(":", 1)[0].split(";", 1)[0]
    return head.rsplit(".", 1)[-1].strip().upper()


def read_properties(text: str, version: VCardVersion | None = None) -> ParseResult:
    """Parse every property of a vCard block (BEGIN/END optional).

    A property that cannot be built is dropped and its reason added to
    ``warnings``. Malformed base64 is not skipped: DecodeError propagates.
    """
    result = ParseResult(version=version or DEFAULT_VERSION)
    for line, number in vobject.base.getLogicalLines(io.StringIO(text)):
        name = _line_name(line)
        if name in ("BEGIN", "END"):
            continue
        if name == "VERSION":
            raw = line.split(":", 1)[-1]
            try:
                found = VCardVersion.parse(raw)
            except UnknownVersionError as exc:
                result.warnings.append(f"Line {number}: {exc}; reading as vCard {result.version}")
                continue
            if version is None:
                result.version = found
            elif found is not version:
                logger.debug("VERSION:%s ignored, reading as %s", found, version)
            continue
        try:
            prop = unmarshal_text(line, result.version, result.warnings)
        except SkippableError as exc:
            logger.debug("Line %s skipped: %s", number, exc)
            result.warnings.append(f"Line {number}: {exc}")
            continue
        result.properties.append(prop)
    return result


def read_html(markup: str, base_url: str | None = None) -> ParseResult:
    """Collect binary properties (hCard ``logo`` / ``photo`` classes) from HTML."""
    result = ParseResult()
    for element in find_elements(markup, base_url):
        for name in BINARY_PROPERTIES:
            if name.lower() not in element.classes:
                continue
            prop = new_property(name)
            try:
                unmarshal_html(prop, element, result.warnings)
            except SkippableError as exc:
                logger.debug("<%s class=%s> skipped: %s", element.tag, name.lower(), exc)
                result.warnings.append(f"{name}: {exc}")
                continue
            result.properties.append(prop)
    return result
