"""Well-known TYPE / MEDIATYPE values for binary properties.

vCard 2.1 and 3.0 describe a binary payload with a short TYPE label
(``TYPE=png``); vCard 4.0 uses a media type, either in a MEDIATYPE parameter
or inside a data URI. A MediaTypeParameter carries both so a property can be
written in any version.

Values that are not in the table are never an error: the registry builds an
ad-hoc value from whatever text it was given.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaTypeParameter:
    type_label: str
    media_type: str
    extension: str | None = None


class ParameterRegistry:
    def __init__(self, known: tuple[MediaTypeParameter, ...], fallback_prefix: str):
        self.known = known
        self.fallback_prefix = fallback_prefix

    def lookup_by_label(self, label: str) -> MediaTypeParameter | None:
        wanted = label.lower()
        for p in self.known:
            if p.type_label.lower() == wanted:
                return p
        return None

    def lookup_by_media_type(self, media_type: str) -> MediaTypeParameter | None:
        """Whole-string match against the well-known media types.

        Compared case-insensitively: media types are case-insensitive on the
        wire, so "IMAGE/PNG" finds the png entry.
        """
        # first registered entry wins when two labels share a media type (bmp/dib)
        wanted = media_type.lower()
        for p in self.known:
            if p.media_type.lower() == wanted:
                return p
        return None

    def build_fallback(self, label: str) -> MediaTypeParameter:
        return MediaTypeParameter(label, f"{self.fallback_prefix}/{label}", None)

    def build_fallback_from_media_type(self, media_type: str) -> MediaTypeParameter:
        slash = media_type.find("/")
        if slash == -1 or slash == len(media_type) - 1:
            label = ""
        else:
            label = media_type[slash + 1:]
        return MediaTypeParameter(label, media_type, None)

    def resolve_label(self, label: str) -> MediaTypeParameter:
        found = self.lookup_by_label(label)
        if found is None:
            logger.debug("Unknown TYPE %r, building ad-hoc value", label)
            found = self.build_fallback(label)
        return found

    def resolve_media_type(self, media_type: str) -> MediaTypeParameter:
        found = self.lookup_by_media_type(media_type)
        if found is None:
            logger.debug("Unknown media type %r, building ad-hoc value", media_type)
            found = self.build_fallback_from_media_type(media_type)
        return found


# ── Image types ────────────────────────────────────────────────────────────────

GIF   = MediaTypeParameter("gif",   "image/gif",              "gif")
CGM   = MediaTypeParameter("cgm",   "image/cgm",              "cgm")
WMF   = MediaTypeParameter("wmf",   "image/wmf",              "wmf")
BMP   = MediaTypeParameter("bmp",   "image/bmp",              "bmp")
MET   = MediaTypeParameter("met",   "image/x-met",            "met")
PMB   = MediaTypeParameter("pmb",   "image/x-pmb",            "pmb")
DIB   = MediaTypeParameter("dib",   "image/bmp",              "dib")
PICT  = MediaTypeParameter("pict",  "image/x-pict",           "pict")
TIFF  = MediaTypeParameter("tiff",  "image/tiff",             "tiff")
PS    = MediaTypeParameter("ps",    "application/postscript", "ps")
PDF   = MediaTypeParameter("pdf",   "application/pdf",        "pdf")
JPEG  = MediaTypeParameter("jpeg",  "image/jpeg",             "jpg")
MPEG  = MediaTypeParameter("mpeg",  "video/mpeg",             "mpeg")
MPEG2 = MediaTypeParameter("mpeg2", "video/mpeg",             "mpv2")
AVI   = MediaTypeParameter("avi",   "video/x-msvideo",        "avi")
QTIME = MediaTypeParameter("qtime", "video/quicktime",        "mov")
PNG   = MediaTypeParameter("png",   "image/png",              "png")

IMAGE_TYPES = ParameterRegistry(
    (GIF, CGM, WMF, BMP, MET, PMB, DIB, PICT, TIFF, PS, PDF,
     JPEG, MPEG, MPEG2, AVI, QTIME, PNG),
    fallback_prefix="image",
)
