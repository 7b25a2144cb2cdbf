"""Address-bar capability used by the extractor and the publisher."""

import logging
from abc import ABC, abstractmethod
from urllib.parse import urlsplit

logger = logging.getLogger("promptshare.location")


class Location(ABC):
    """Browser-like location: read the parts, replace without navigating."""

    @property
    @abstractmethod
    def origin(self) -> str:
        """Scheme and host, e.g. ``https://example.com``."""
        ...

    @property
    @abstractmethod
    def pathname(self) -> str:
        ...

    @property
    @abstractmethod
    def search(self) -> str:
        """Query string including the leading ``?``, or empty."""
        ...

    @property
    @abstractmethod
    def hash(self) -> str:
        """Fragment including the leading ``#``, or empty."""
        ...

    @abstractmethod
    def replace(self, url: str) -> None:
        """Swap the current URL in place, without adding a history entry."""
        ...

    @property
    def href(self) -> str:
        return f"{self.origin}{self.pathname}{self.search}{self.hash}"


class MemoryLocation(Location):
    """In-process location parsed from a URL string.

    ``history`` only grows on :meth:`assign`; :meth:`replace` overwrites the
    current entry like ``history.replaceState`` does.
    """

    def __init__(self, url: str = "http://localhost/"):
        self._set(url)
        self.history: list[str] = [self.href]

    def _set(self, url: str) -> None:
        parts = urlsplit(url)
        self._origin = f"{parts.scheme}://{parts.netloc}" if parts.scheme else ""
        self._pathname = parts.path or "/"
        self._search = f"?{parts.query}" if parts.query else ""
        self._hash = f"#{parts.fragment}" if parts.fragment else ""

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def pathname(self) -> str:
        return self._pathname

    @property
    def search(self) -> str:
        return self._search

    @property
    def hash(self) -> str:
        return self._hash

    def assign(self, url: str) -> None:
        """Navigate to ``url``, pushing a new history entry."""
        self._set(url)
        self.history.append(self.href)

    def replace(self, url: str) -> None:
        self._set(url)
        self.history[-1] = self.href
        logger.debug(f"Location replaced: {self.href}")
