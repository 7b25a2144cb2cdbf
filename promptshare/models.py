"""Data types shared by the import and export paths."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


# Protocol constant: references up to this length are short codes that
# must be exchanged with the share service. Links already issued depend on it.
SHORT_CODE_MAX_LENGTH = 15


class ReferenceKind(str, Enum):
    SHORT = "short"      # opaque code, needs a remote lookup
    INLINE = "inline"    # self-contained encoded document


class ResolveStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass
class Document:
    """A shared prompt template.

    ``name`` and ``content`` are either plain strings or localized mappings
    such as ``{"cn": "...", "en": "..."}``. Every other key of the payload
    (selections, author, id, ...) is carried untouched in ``extra``.
    """
    name: Any
    content: Any
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["Document"]:
        """Build a Document from a decoded payload.

        Returns None unless the payload is a mapping with a non-empty
        ``name`` and a non-empty ``content``.
        """
        if not isinstance(payload, dict):
            return None
        name = payload.get("name")
        content = payload.get("content")
        if not name or not content:
            return None
        extra = {k: v for k, v in payload.items() if k not in ("name", "content")}
        return cls(name=name, content=content, extra=extra)

    def to_payload(self) -> dict:
        """Return the plain dict that gets encoded for sharing."""
        return {"name": self.name, "content": self.content, **self.extra}


@dataclass
class ResolveResult:
    status: ResolveStatus
    reference: Optional[str] = None
    kind: Optional[ReferenceKind] = None
    document: Optional[Document] = None

    @property
    def found(self) -> bool:
        return self.status is ResolveStatus.FOUND

    @classmethod
    def not_found(cls, reference: Optional[str] = None, kind: Optional[ReferenceKind] = None) -> "ResolveResult":
        return cls(ResolveStatus.NOT_FOUND, reference=reference, kind=kind)

    @classmethod
    def invalid(cls, reference: Optional[str] = None, kind: Optional[ReferenceKind] = None) -> "ResolveResult":
        return cls(ResolveStatus.INVALID, reference=reference, kind=kind)


@dataclass
class TokenImportResult:
    """Outcome of a manual token import.

    ``message`` is the notice to show the user, None when the import worked
    or when there was nothing to import.
    """
    result: ResolveResult
    message: Optional[str] = None

    @property
    def document(self) -> Optional[Document]:
        return self.result.document


@dataclass
class ShareArtifact:
    text: str           # full share URL or token message
    reference: str      # short code or inline-encoded document
    is_short: bool = False


@dataclass
class PublishOutcome:
    artifact: ShareArtifact
    copied: bool
    message: str

    @property
    def text(self) -> str:
        return self.artifact.text


def build_imported_template(
    doc: Document,
    default_author: str,
    now_ms: Optional[int] = None,
) -> dict:
    """Turn a resolved Document into a template ready for the user's list.

    Args:
        doc: The shared document
        default_author: Author to record when the payload carries none
        now_ms: Epoch milliseconds used for the new id (defaults to now)

    Returns:
        Template dict with a fresh ``tpl_shared_<ms>`` id, ``selections``
        defaulting to an empty dict and ``author`` filled in.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    template = doc.to_payload()
    template["id"] = f"tpl_shared_{now_ms}"
    template["selections"] = template.get("selections") or {}
    template["author"] = template.get("author") or default_author
    return template
