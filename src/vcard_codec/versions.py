from __future__ import annotations

from enum import Enum

from .errors import UnknownVersionError


class VCardVersion(Enum):
    V2_1 = "2.1"
    V3_0 = "3.0"
    V4_0 = "4.0"

    @classmethod
    def parse(cls, text: str) -> VCardVersion:
        value = (text or "").strip()
        for v in cls:
            if v.value == value:
                return v
        raise UnknownVersionError(f"Unsupported vCard version: {text!r}")

    @property
    def is_legacy(self) -> bool:
        # 2.1 and 3.0 share the TYPE/ENCODING grammar for binary values
        return self is not VCardVersion.V4_0

    def __str__(self) -> str:
        return self.value
