from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import SkippableError
from .model import Property
from .reader import read_properties
from .text_codec import marshal_text
from .versions import VCardVersion

logger = logging.getLogger(__name__)

CRLF = "\r\n"


@dataclass
class WriteResult:
    text: str
    written: int = 0
    warnings: list[str] = field(default_factory=list)


def write_properties(properties: list[Property], version: VCardVersion,
                     fold_width: int = 75) -> WriteResult:
    """Serialise properties as one BEGIN:VCARD ... END:VCARD block."""
    result = WriteResult(text="")
    lines = ["BEGIN:VCARD", f"VERSION:{version.value}"]
    for prop in properties:
        if prop.name.upper() in ("BEGIN", "END", "VERSION"):
            continue
        try:
            lines.append(marshal_text(prop, version, result.warnings, fold_width))
        except SkippableError as exc:
            logger.debug("%s not written: %s", prop.name, exc)
            result.warnings.append(str(exc))
            continue
        result.written += 1
    lines.append("END:VCARD")
    result.text = CRLF.join(lines) + CRLF
    return result


def convert(text: str, version: VCardVersion, fold_width: int = 75) -> WriteResult:
    """Re-encode a vCard block for another version."""
    parsed = read_properties(text)
    out = write_properties(parsed.properties, version, fold_width)
    out.warnings[:0] = parsed.warnings
    return out


def export_vcard(properties: list[Property], path: Path, version: VCardVersion,
                 fold_width: int = 75) -> WriteResult:
    result = write_properties(properties, version, fold_width)
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the CRLF line endings vCard requires
    path.write_text(result.text, encoding="utf-8", newline="")
    return result
