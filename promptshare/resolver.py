"""Reference resolution: candidate reference -> shared Document.

The reference length is the only thing that decides the route:
- up to SHORT_CODE_MAX_LENGTH chars: short code, exchanged with the share service
- longer: inline string, decoded locally without any network call

There is deliberately no "decode, else ask the service" fallback in either
direction, so a short code never reaches the decoder and an inline string
never reaches the network.
"""

import logging
from typing import Optional

from .client import ShareApiClient
from .codec import Codec
from .extractor import extract_from_location, extract_manual_token
from .location import Location
from .messages import INVALID_TOKEN, message
from .models import (
    SHORT_CODE_MAX_LENGTH,
    Document,
    ReferenceKind,
    ResolveResult,
    ResolveStatus,
    TokenImportResult,
)

logger = logging.getLogger("promptshare.resolver")


def classify(reference: str) -> ReferenceKind:
    """Classify a candidate reference by length alone."""
    if len(reference) <= SHORT_CODE_MAX_LENGTH:
        return ReferenceKind.SHORT
    return ReferenceKind.INLINE


class ReferenceResolver:
    """Resolve candidate references into Documents.

    Holds no per-call state: every resolve builds its own request and hands
    the Document to the caller.
    """

    def __init__(self, client: ShareApiClient, codec: Codec, language: str = "cn"):
        self.client = client
        self.codec = codec
        self.language = language

    async def resolve(self, reference: Optional[str]) -> ResolveResult:
        """Resolve one candidate reference.

        Returns:
            FOUND with the Document, NOT_FOUND when a short code could not be
            exchanged, INVALID when the payload is not a valid Document.
        """
        if not reference:
            return ResolveResult.not_found()

        kind = classify(reference)

        if kind is ReferenceKind.SHORT:
            encoded = await self.client.fetch_data(reference)
            if encoded is None:
                return ResolveResult.not_found(reference, kind)
        else:
            encoded = reference

        document = Document.from_payload(self.codec.decode(encoded))
        if document is None:
            logger.debug(f"Reference {reference[:24]!r} ({kind.value}) did not decode to a template")
            return ResolveResult.invalid(reference, kind)

        return ResolveResult(ResolveStatus.FOUND, reference=reference, kind=kind, document=document)

    async def resolve_location(self, location: Location) -> Optional[ResolveResult]:
        """Passive resolution triggered by page load or a hash change.

        Cleans the location when it carried a reference. Failures are only
        logged; the caller decides whether to show anything.

        Returns:
            None when the location carries no share reference.
        """
        candidate = extract_from_location(location)
        if candidate is None:
            return None

        result = await self.resolve(candidate)
        if not result.found:
            logger.info(f"Ignoring share link from location: {result.status.value}")
        return result

    async def resolve_token(self, token: Optional[str]) -> TokenImportResult:
        """Active resolution of a token the user typed or pasted.

        Any failure carries the localized "invalid token" notice, except a
        completely empty input which is a silent no-op.
        """
        if not token:
            return TokenImportResult(ResolveResult.not_found())

        candidate = extract_manual_token(token)
        if candidate is None:
            result = ResolveResult.invalid()
        else:
            result = await self.resolve(candidate)

        if result.found:
            return TokenImportResult(result)

        logger.info(f"Manual token import failed: {result.status.value}")
        return TokenImportResult(result, message=message(INVALID_TOKEN, self.language))
