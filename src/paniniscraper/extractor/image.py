"""
Main product image.

Stages run in priority order and the first hit wins:

1. <img> attributes pointing at the image CDN;
2. any <img> attribute carrying a CDN marker;
3. image URLs embedded in <script> content;
4. structural product-image containers;
5. any remaining content image in document order.

Every returned URL is absolute. An empty string means no image was found.
"""

from __future__ import annotations

import json
import re
from typing import Iterator, Optional
from urllib.parse import urljoin

from .document import HtmlDocument, HtmlNode

IMAGE_ATTRIBUTES = ("src", "data-src", "data-lazy", "data-original")

CDN_MARKERS = ("cloudfront", "amazonaws.com")

CDN_IMAGE_SELECTORS = (
    ("src", "cloudfront"),
    ("src", "amazonaws.com"),
    ("data-src", "cloudfront"),
    ("data-original", "cloudfront"),
    ("data-lazy", "cloudfront"),
)

PLACEHOLDER_MARKERS = (
    "placeholder",
    "default/panini-placeholder",
    "no-image",
    "loading",
    "spinner",
)

STRUCTURAL_SELECTORS = (
    ".product-image img",
    ".product-photo img",
    ".main-image img",
    ".product-gallery img",
    ".gallery img",
    ".hero-image img",
    ".primary-image img",
    '[data-testid="product-image"] img',
    ".product-media img",
    'img[alt*="produto"]',
    'img[alt*="product"]',
    ".product-image-main img",
    ".product-images img",
    ".image-container img",
    ".hero-section img",
)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp")

NON_CONTENT_MARKERS = ("logo", "nav", "icon", "banner")

SOCIAL_HOSTS = ("facebook.com", "twitter.com", "instagram.com")

JSON_IMAGE_KEYS = ("image", "src", "url", "imageUrl", "photo")

_JSON_FRAGMENT_RE = re.compile(r"\{[^{}]*\}")
_JSON_KEY_RE = re.compile(r'"(?:%s)"' % "|".join(JSON_IMAGE_KEYS))
_CLOUDFRONT_URL_RE = re.compile(r"https://d[a-z0-9]+\.cloudfront\.net/[^\"'\s]+\.(?:jpg|jpeg|png|webp)", re.IGNORECASE)
_IMAGE_URL_RE = re.compile(r"https://[^\"'\s]+\.(?:jpg|jpeg|png|webp)", re.IGNORECASE)
_ABSOLUTE_RE = re.compile(r"^https?://\S+$", re.IGNORECASE)


def is_placeholder_image(src: str) -> bool:
    lowered = src.lower()
    return any(marker in lowered for marker in PLACEHOLDER_MARKERS)


def _has_image_extension(src: str) -> bool:
    return any(extension in src for extension in IMAGE_EXTENSIONS)


def resolve_image_url(src: str, base_url: str) -> Optional[str]:
    """Absolute form of ``src``, or None if it cannot be made absolute."""
    src = src.strip()
    if src.startswith("//"):
        src = "https:" + src
    elif not src.lower().startswith(("http://", "https://")):
        src = urljoin(base_url + "/", src)
    return src if _ABSOLUTE_RE.match(src) else None


def _attribute_values(img: HtmlNode) -> Iterator[str]:
    for attribute in IMAGE_ATTRIBUTES:
        value = img.attr(attribute)
        if value:
            yield value


def _from_cdn_selectors(doc: HtmlDocument, base_url: str) -> Optional[str]:
    for attribute, marker in CDN_IMAGE_SELECTORS:
        for img in doc.find_all(f'img[{attribute}*="{marker}"]'):
            src = img.attr(attribute) or ""
            if src and not is_placeholder_image(src):
                resolved = resolve_image_url(src, base_url)
                if resolved:
                    return resolved
    return None


def _from_cdn_attributes(doc: HtmlDocument, base_url: str) -> Optional[str]:
    for img in doc.find_all("img"):
        for src in _attribute_values(img):
            if any(marker in src for marker in CDN_MARKERS) and not is_placeholder_image(src):
                resolved = resolve_image_url(src, base_url)
                if resolved:
                    return resolved
    return None


def _from_json_fragments(script: str, base_url: str) -> Optional[str]:
    for fragment in _JSON_FRAGMENT_RE.findall(script):
        if not _JSON_KEY_RE.search(fragment):
            continue
        try:
            data = json.loads(fragment)
        except ValueError:
            continue
        if not isinstance(data, dict):
            continue
        for key in JSON_IMAGE_KEYS:
            value = data.get(key)
            if not isinstance(value, str) or is_placeholder_image(value):
                continue
            if value.startswith(("http://", "https://", "/")):
                resolved = resolve_image_url(value, base_url)
                if resolved:
                    return resolved
    return None


def _from_script(script: str, base_url: str) -> Optional[str]:
    found = _from_json_fragments(script, base_url)
    if found:
        return found

    match = _CLOUDFRONT_URL_RE.search(script)
    if match:
        return match.group(0)

    for url in _IMAGE_URL_RE.findall(script):
        if is_placeholder_image(url) or any(host in url for host in SOCIAL_HOSTS):
            continue
        return url
    return None


def _from_scripts(doc: HtmlDocument, base_url: str) -> Optional[str]:
    for script in doc.find_all("script"):
        found = _from_script(script.source(), base_url)
        if found:
            return found
    return None


def _from_structure(doc: HtmlDocument, base_url: str) -> Optional[str]:
    for selector in STRUCTURAL_SELECTORS:
        for img in doc.find_all(selector):
            for src in _attribute_values(img):
                if is_placeholder_image(src):
                    continue
                resolved = resolve_image_url(src, base_url)
                if resolved and (_has_image_extension(resolved) or "cloudfront" in resolved):
                    return resolved
    return None


def _from_any_image(doc: HtmlDocument, base_url: str) -> Optional[str]:
    for img in doc.find_all("img"):
        for src in _attribute_values(img):
            if is_placeholder_image(src) or any(marker in src for marker in NON_CONTENT_MARKERS):
                continue
            if not _has_image_extension(src):
                continue
            resolved = resolve_image_url(src, base_url)
            if resolved:
                return resolved
    return None


IMAGE_STAGES = (
    _from_cdn_selectors,
    _from_cdn_attributes,
    _from_scripts,
    _from_structure,
    _from_any_image,
)


def extract_image_url(doc: HtmlDocument, base_url: str = "https://panini.com.br") -> str:
    for stage in IMAGE_STAGES:
        found = stage(doc, base_url)
        if found:
            return found
    return ""
