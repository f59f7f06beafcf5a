from __future__ import annotations


class VCardError(Exception):
    """Base class for everything this package raises."""


class SkippableError(VCardError):
    """A single property could not be built from its source.

    The record loops in reader.py catch this, drop the property and record
    the message as a warning. It never aborts a whole record.
    """


class DecodeError(VCardError):
    """A binary payload (base64) is malformed."""


class UnknownVersionError(VCardError, ValueError):
    """The version string is not one of 2.1, 3.0 or 4.0."""
