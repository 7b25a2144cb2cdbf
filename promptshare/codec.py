"""Inline codec: template payload <-> URL-safe share string.

The default wire format is compact JSON, zlib-compressed and encoded with
URL-safe base64 without padding. Such strings contain no ``&``, ``?``,
``$`` or ``=`` characters, so they survive query strings and ``#pf$...$``
tokens untouched.
"""

import base64
import binascii
import json
import logging
import zlib
from abc import ABC, abstractmethod
from typing import Any, Optional

from .errors import ShareCodecError

logger = logging.getLogger("promptshare.codec")


class Codec(ABC):
    """Reversible transform between a template payload and a string."""

    @abstractmethod
    def encode(self, payload: dict) -> str:
        ...

    @abstractmethod
    def decode(self, data: str) -> Optional[Any]:
        """Return the decoded payload, or None if ``data`` is not decodable."""
        ...


# Upper bound on the inflated JSON of one template, checked while inflating.
MAX_DECODED_BYTES = 1024 * 1024


class TemplateCodec(Codec):
    """zlib + URL-safe base64 JSON codec."""

    def __init__(self, level: int = 6, max_decoded_bytes: int = MAX_DECODED_BYTES):
        self.level = level
        self.max_decoded_bytes = max_decoded_bytes

    def encode(self, payload: dict) -> str:
        """Encode a payload.

        Raises:
            ShareCodecError: if the payload is not JSON-serializable
        """
        try:
            text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise ShareCodecError(f"Template is not JSON-serializable: {e}") from e
        packed = zlib.compress(text.encode("utf-8"), self.level)
        return base64.urlsafe_b64encode(packed).decode("ascii").rstrip("=")

    def _inflate(self, packed: bytes) -> bytes:
        inflater = zlib.decompressobj()
        raw = inflater.decompress(packed, self.max_decoded_bytes)
        if not inflater.eof:
            if inflater.unconsumed_tail or len(raw) >= self.max_decoded_bytes:
                raise ShareCodecError(f"Share data expands past {self.max_decoded_bytes} bytes")
            raise ShareCodecError("Share data is truncated")
        return raw

    def loads(self, data: str) -> Any:
        """Strict decode.

        Raises:
            ShareCodecError: if ``data`` is not a valid encoded payload
        """
        if not data:
            raise ShareCodecError("Empty share data")
        try:
            padded = data + "=" * (-len(data) % 4)
            packed = base64.urlsafe_b64decode(padded.encode("ascii"))
            raw = self._inflate(packed)
            return json.loads(raw.decode("utf-8"))
        except (ValueError, binascii.Error, zlib.error, UnicodeError) as e:
            raise ShareCodecError(f"Cannot decode share data: {e}") from e

    def decode(self, data: str) -> Optional[Any]:
        try:
            return self.loads(data)
        except ShareCodecError as e:
            logger.debug(f"Decode failed ({len(data or '')} chars): {e}")
            return None
