"""hCard markup -> property.

hCard marks each vCard property with a CSS class named after it, e.g.
``<img class="logo" src="...">``. Only the parts needed for binary
properties are implemented: ``<img>`` gets dedicated handling, every other
element goes through the generic value lookup.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from html.parser import HTMLParser
from urllib.parse import urljoin, urlparse

from .errors import SkippableError
from .model import BinaryProperty, Property, RawProperty
from .text_codec import DATA_URI, decode_base64, unmarshal_value
from .versions import VCardVersion

logger = logging.getLogger(__name__)

_VOID_TAGS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
}


@dataclass
class HtmlElement:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    text: str = ""
    base_url: str | None = None

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").lower().split()

    def attr(self, name: str) -> str:
        return self.attrs.get(name.lower(), "")

    def abs_url(self, name: str) -> str:
        """Attribute resolved to an absolute URL, or "" when that is not possible."""
        value = self.attr(name).strip()
        if not value:
            return ""
        if self.base_url:
            return urljoin(self.base_url, value)
        return value if urlparse(value).scheme else ""


class _ElementCollector(HTMLParser):
    def __init__(self, base_url: str | None):
        super().__init__(convert_charrefs=True)
        self.base_url = base_url
        self.elements: list[HtmlElement] = []
        self._open: list[HtmlElement] = []

    def _start(self, tag: str, attrs) -> HtmlElement:
        el = HtmlElement(tag, {k.lower(): (v or "") for k, v in attrs}, base_url=self.base_url)
        self.elements.append(el)
        return el

    def handle_starttag(self, tag, attrs):
        if tag == "base" and self.base_url is None:
            href = dict(attrs).get("href")
            if href:
                self.base_url = href
        el = self._start(tag, attrs)
        if tag not in _VOID_TAGS:
            self._open.append(el)

    def handle_startendtag(self, tag, attrs):
        self._start(tag, attrs)

    def handle_endtag(self, tag):
        for i in range(len(self._open) - 1, -1, -1):
            if self._open[i].tag == tag:
                del self._open[i:]
                break

    def handle_data(self, data):
        for el in self._open:
            el.text += data


def find_elements(markup: str, base_url: str | None = None,
                  class_name: str | None = None) -> list[HtmlElement]:
    """Elements of ``markup`` in document order, optionally only those with ``class_name``."""
    collector = _ElementCollector(base_url)
    collector.feed(markup)
    collector.close()
    if class_name is None:
        return collector.elements
    wanted = class_name.lower()
    return [el for el in collector.elements if wanted in el.classes]


# ── Unmarshal ──────────────────────────────────────────────────────────────────

def _element_value(element: HtmlElement) -> str:
    tag = element.tag.lower()
    if tag == "abbr" and element.attr("title"):
        return element.attr("title")
    if tag == "data" and element.attr("value"):
        return element.attr("value")
    if tag == "a":
        return element.abs_url("href")
    if tag == "object":
        return element.abs_url("data")
    return " ".join(element.text.split())


def unmarshal_html_generic(prop: Property, element: HtmlElement, warnings: list[str]) -> None:
    """Markup handling shared by every property type."""
    value = _element_value(element)
    if not value:
        raise SkippableError(f"<{element.tag}> element has no usable {prop.name} value.")
    if isinstance(prop, RawProperty):
        prop.value = value
        return
    unmarshal_value(prop, value, VCardVersion.V3_0, warnings)


def unmarshal_html(prop: Property, element: HtmlElement, warnings: list[str]) -> None:
    if isinstance(prop, BinaryProperty) and element.tag.lower() == "img":
        src = element.abs_url("src")
        if not src:
            raise SkippableError('<img> tag does not have a "src" attribute.')
        m = DATA_URI.match(src)
        if m:
            prop.set_data(decode_base64(m.group(2)), prop.build_media_type_obj(m.group(1)))
        else:
            # content type is not guessed from the file extension
            logger.debug("%s <img> is a remote reference: %s", prop.name, src)
            prop.set_url(src, None)
        return
    unmarshal_html_generic(prop, element, warnings)
