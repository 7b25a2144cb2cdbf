"""Share publishing: Document -> share link or share token on the clipboard.

Both flows prefer a short code from the share service and silently fall
back to the inline-encoded document when the service is unavailable, so
publishing never fails because of the network. Only the clipboard step can
fail, and that is what the outcome reports. Setup problems (no base URL for
links, a Document holding non-JSON values) raise before anything is copied.
"""

import logging
from typing import Optional

from .client import ShareApiClient
from .clipboard import Clipboard
from .codec import Codec
from .config import ShareSettings
from .errors import ShareConfigError
from .location import Location
from .messages import (
    LINK_COPIED,
    LINK_COPY_FAILED,
    TOKEN_COPIED,
    TOKEN_COPY_FAILED,
    TOKEN_TEMPLATE,
    get_localized,
    message,
)
from .models import Document, PublishOutcome, ShareArtifact

logger = logging.getLogger("promptshare.publisher")

SHARE_ROUTE = "#/share?share="


def compose_share_url(base: str, reference: str) -> str:
    """Build ``<base>/#/share?share=<reference>``, adding ``/`` only if missing."""
    separator = "" if base.endswith("/") else "/"
    return f"{base}{separator}{SHARE_ROUTE}{reference}"


def compose_token_text(display_name: str, reference: str) -> str:
    """Build the chat-friendly token message wrapping ``reference`` in ``#pf$...$``."""
    return TOKEN_TEMPLATE.format(name=display_name, reference=reference)


class SharePublisher:
    """Publish Documents as share links or share tokens.

    ``in_progress`` is True while a publish flow is waiting on the network
    or the clipboard; hosts use it to disable the share controls. Two
    overlapping publishes are not coordinated.
    """

    def __init__(
        self,
        client: ShareApiClient,
        codec: Codec,
        clipboard: Clipboard,
        settings: ShareSettings,
        location: Optional[Location] = None,
    ):
        self.client = client
        self.codec = codec
        self.clipboard = clipboard
        self.settings = settings
        self.location = location
        self.in_progress = False

    def share_base(self) -> str:
        """Absolute origin+path that share links point at.

        Raises:
            ShareConfigError: if neither ``public_share_url`` nor a location
                with an origin is available
        """
        if self.settings.public_share_url:
            return self.settings.public_share_url
        if self.location is not None and self.location.origin:
            return f"{self.location.origin}{self.location.pathname}"
        raise ShareConfigError("no public_share_url configured and no page location to link to")

    def preview_url(self, doc: Optional[Document]) -> str:
        """Inline-only share URL for display, without contacting the service."""
        if doc is None:
            return ""
        base = self.share_base()
        encoded = self.codec.encode(doc.to_payload())
        if not encoded:
            return base
        return compose_share_url(base, encoded)

    async def create_reference(self, doc: Document) -> tuple[str, bool]:
        """Encode ``doc`` and try to swap it for a short code.

        Returns:
            Tuple of (reference, is_short). Falls back to the inline string
            when the share service gives no code.

        Raises:
            ShareCodecError: if ``doc`` holds values that are not JSON-serializable
        """
        encoded = self.codec.encode(doc.to_payload())
        code = await self.client.create_short_code(encoded)
        if code:
            return code, True
        logger.info(f"Falling back to inline share reference ({len(encoded)} chars)")
        return encoded, False

    async def _publish(self, build, success_key: str, failure_key: str) -> PublishOutcome:
        self.in_progress = True
        try:
            artifact = await build()
            copied = await self.clipboard.copy(artifact.text)
        finally:
            self.in_progress = False

        key = success_key if copied else failure_key
        if not copied:
            logger.warning("Copy to clipboard failed")
        return PublishOutcome(artifact=artifact, copied=copied, message=message(key, self.settings.language))

    async def build_link(self, doc: Document) -> ShareArtifact:
        base = self.share_base()
        reference, is_short = await self.create_reference(doc)
        return ShareArtifact(compose_share_url(base, reference), reference, is_short)

    async def build_token(self, doc: Document, display_name: Optional[str] = None) -> ShareArtifact:
        if display_name is None:
            display_name = get_localized(doc.name, self.settings.language)
        reference, is_short = await self.create_reference(doc)
        return ShareArtifact(compose_token_text(display_name, reference), reference, is_short)

    async def publish_link(self, doc: Document) -> PublishOutcome:
        """Copy a share link for ``doc`` to the clipboard.

        Raises:
            ShareConfigError: if there is no absolute base to link to
            ShareCodecError: if ``doc`` is not JSON-serializable
        """
        return await self._publish(lambda: self.build_link(doc), LINK_COPIED, LINK_COPY_FAILED)

    async def publish_token(self, doc: Document, display_name: Optional[str] = None) -> PublishOutcome:
        """Copy a share token message for ``doc`` to the clipboard.

        Raises:
            ShareCodecError: if ``doc`` is not JSON-serializable
        """
        return await self._publish(
            lambda: self.build_token(doc, display_name), TOKEN_COPIED, TOKEN_COPY_FAILED,
        )
