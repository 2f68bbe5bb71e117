"""Display-time HTML sanitizer for stored document fragments."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Comment

logger = logging.getLogger(__name__)

DROPPED_TAGS = [
    "script",
    "style",
    "iframe",
    "frame",
    "frameset",
    "object",
    "embed",
    "applet",
    "link",
    "meta",
    "base",
    "form",
]

URL_ATTRIBUTES = {"href", "src", "action", "formaction", "xlink:href", "background", "poster"}
SAFE_SCHEMES = {"http", "https", "mailto"}

_SCHEME = re.compile(r"^([a-z][a-z0-9+.\-]*):")
_INVISIBLE = re.compile(r"[\x00-\x20]+")
_UNSAFE_STYLE = re.compile(r"expression\s*\(|javascript:|url\s*\(", re.IGNORECASE)


def _is_safe_url(tag_name: str, attr: str, value: str) -> bool:
    normalized = _INVISIBLE.sub("", value).lower()
    match = _SCHEME.match(normalized)
    if match is None:
        return True  # relative link or fragment
    scheme = match.group(1)
    if scheme in SAFE_SCHEMES:
        return True
    # Rasterized PDF pages are embedded as data: images.
    return scheme == "data" and tag_name == "img" and attr == "src" and normalized.startswith("data:image/")


def sanitize_html(html: str) -> str:
    """Remove executable content from an HTML fragment.

    Strips script-capable elements, comments, event handler attributes and
    URLs with schemes other than http, https and mailto (plus data: images).
    """
    soup = BeautifulSoup(html or "", "html.parser")

    removed = 0
    for tag in soup.find_all(DROPPED_TAGS):
        tag.decompose()
        removed += 1
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        for attr in list(tag.attrs):
            name = attr.lower()
            value = tag.attrs[attr]
            if isinstance(value, list):
                value = " ".join(value)
            if name.startswith("on") or name == "srcdoc":
                del tag.attrs[attr]
                removed += 1
            elif name in URL_ATTRIBUTES and not _is_safe_url(tag.name, name, value):
                del tag.attrs[attr]
                removed += 1
            elif name == "style" and _UNSAFE_STYLE.search(value):
                del tag.attrs[attr]
                removed += 1

    if removed:
        logger.debug("sanitizer removed %d unsafe elements/attributes", removed)
    return str(soup)
