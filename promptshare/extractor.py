"""Token extraction: turn raw input into a candidate share reference.

Handles:
- ``share`` query parameter in the URL query or in the hash's own ``?`` part
- a bare ``share=`` marker anywhere in the hash
- a full share URL pasted as the value of ``share``
- the human-shareable ``#pf$<ref>$`` token text

Everything here is pure string work. No network, no decoding.
"""

import logging
import re
from typing import Callable, Iterable, Optional
from urllib.parse import parse_qsl, urlsplit

from .location import Location

logger = logging.getLogger("promptshare.extractor")

SHARE_PARAM = "share"
TOKEN_PREFIX = "#pf$"
TOKEN_SUFFIX = "$"

_SHARE_MARKER = f"{SHARE_PARAM}="
_HASH_SCAN_RE = re.compile(r"share=([^&?]+)")
_HASH_MARKER_RE = re.compile(r"share=[^&?]*&?")
_TOKEN_RE = re.compile(r"#pf\$([^$]+)\$")
_URL_HINTS = ("http://", "https://", _SHARE_MARKER)
_UNWRAP_BASE = "http://x.com/"

Extractor = Callable[[str, str], Optional[str]]


# ============================================================
# PRIMITIVES
# ============================================================

def _hash_query(fragment: str) -> str:
    """Return the part of a hash between its first and second ``?``."""
    pieces = fragment.split("?")
    return pieces[1] if len(pieces) > 1 else ""


def _query_param(query: str, name: str = SHARE_PARAM) -> Optional[str]:
    """First value of ``name`` in a query string, decoded like URLSearchParams."""
    if not query:
        return None
    for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        if key == name:
            return value
    return None


def unwrap_share_url(value: str) -> str:
    """Pull the ``share`` value out of a URL pasted as a reference.

    Values without a scheme are parsed against a placeholder host. When the
    value does not parse or carries no ``share`` parameter it is returned
    unchanged.
    """
    url = value if value.startswith("http") else _UNWRAP_BASE + value
    try:
        parts = urlsplit(url)
    except ValueError as e:
        logger.debug(f"Could not parse pasted URL, keeping raw value: {e}")
        return value
    return _query_param(parts.query or _hash_query(parts.fragment)) or value


def strip_token_wrapper(text: str) -> str:
    """Return the reference inside a ``#pf$<ref>$`` token, or ``text`` as-is."""
    if TOKEN_PREFIX in text and TOKEN_SUFFIX in text:
        match = _TOKEN_RE.search(text)
        if match:
            return match.group(1)
    return text


# ============================================================
# EXTRACTOR CHAIN
# ============================================================
# Each step gets (search, hash) and returns a candidate or None.
# The first step that yields a non-empty value wins.

def _from_query_params(search: str, fragment: str) -> Optional[str]:
    return _query_param(search) or _query_param(_hash_query(fragment))


def _from_hash_scan(search: str, fragment: str) -> Optional[str]:
    if _SHARE_MARKER not in fragment:
        return None
    match = _HASH_SCAN_RE.search(fragment)
    return match.group(1) if match else None


_CHAIN: tuple[Extractor, ...] = (_from_query_params, _from_hash_scan)


def _run_chain(search: str, fragment: str, chain: Iterable[Extractor] = _CHAIN) -> Optional[str]:
    for step in chain:
        value = step(search, fragment)
        if value:
            break
    else:
        return None

    # Someone pasted a whole share link as the value
    if _SHARE_MARKER in value:
        value = unwrap_share_url(value)

    value = value.strip()
    return value or None


def _split_raw(raw: str) -> tuple[str, str]:
    """Split raw input into (search, hash) like a browser location would."""
    if raw.startswith("#"):
        return "", raw
    if raw.startswith("?"):
        query, _, fragment = raw.partition("#")
        return query, f"#{fragment}" if fragment else ""
    try:
        parts = urlsplit(raw)
    except ValueError:
        return "", ""
    search = f"?{parts.query}" if parts.query else ""
    fragment = f"#{parts.fragment}" if parts.fragment else ""
    return search, fragment


# ============================================================
# ENTRY POINTS
# ============================================================

def extract(raw: Optional[str]) -> Optional[str]:
    """Extract a candidate reference from a URL, hash or query string.

    Args:
        raw: Untrusted input such as ``https://host/#/share?share=AB12CD34``

    Returns:
        The trimmed candidate reference, or None if there is no share marker.
    """
    if not raw:
        return None
    raw = raw.strip()
    search, fragment = _split_raw(raw)
    candidate = _run_chain(search, fragment)
    if candidate is None and _SHARE_MARKER in raw:
        # Not a well-formed URL, scan the whole text instead
        candidate = _run_chain("", raw, chain=(_from_hash_scan,))
    return candidate


def cleaned_location_url(location: Location) -> str:
    """URL of ``location`` with the query dropped and the share marker removed."""
    fragment = location.hash.split("?")[0]
    fragment = _HASH_MARKER_RE.sub("", fragment).rstrip("&")
    if fragment == "#":
        fragment = ""
    return f"{location.origin}{location.pathname}{fragment}"


def extract_from_location(location: Location) -> Optional[str]:
    """Extract a candidate from the address bar and clean the address bar.

    On success the location is replaced (no new history entry) with a URL
    that no longer carries the share marker, so a reload or a repeated
    hash-change event does not process the same reference twice.
    """
    candidate = _run_chain(location.search, location.hash)
    if candidate is None:
        return None

    location.replace(cleaned_location_url(location))
    logger.debug(f"Extracted share reference ({len(candidate)} chars) from location")
    return candidate


def extract_manual_token(token: Optional[str]) -> Optional[str]:
    """Extract a candidate from text the user typed or pasted.

    Accepts raw short codes, raw inline strings, ``#pf$<ref>$`` token text
    (including the surrounding message) and full share URLs.
    """
    if not token:
        return None

    value = strip_token_wrapper(token.strip())

    if any(hint in value for hint in _URL_HINTS):
        value = unwrap_share_url(value)

    value = value.strip()
    return value or None
