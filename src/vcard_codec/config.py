from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .versions import VCardVersion

logger = logging.getLogger(__name__)

CONF_NAME = "vcard-codec.toml"

DEFAULT_CONF = """# vcard-codec local config (TOML)
default_version = "3.0"
fold_width = 75
log_level = "WARNING"
# base_url = "https://example.com/"
"""


@dataclass
class Settings:
    default_version: VCardVersion = VCardVersion.V3_0
    fold_width: int = 75
    base_url: str | None = None
    log_level: str = "WARNING"


def load_settings(path: Path | None = None) -> Settings:
    """Read settings from ``path`` (default: ./vcard-codec.toml).

    A missing file gives the defaults. A file that is not valid TOML is
    reported and ignored; an unknown version raises UnknownVersionError.
    """
    conf = Path(path) if path is not None else Path.cwd() / CONF_NAME
    settings = Settings()
    if not conf.is_file():
        return settings

    try:
        data = tomllib.loads(conf.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        logger.warning("%s is not valid TOML (%s); using defaults", conf, exc)
        return settings

    if "default_version" in data:
        settings.default_version = VCardVersion.parse(str(data["default_version"]))
    settings.fold_width = int(data.get("fold_width", settings.fold_width))
    settings.base_url = data.get("base_url", settings.base_url)
    settings.log_level = str(data.get("log_level", settings.log_level)).upper()
    return settings


def write_default_config(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text(DEFAULT_CONF, encoding="utf-8")
