"""promptshare: share links and share tokens for prompt templates."""

__version__ = "0.3.0"

from .codec import Codec, TemplateCodec
from .extractor import extract, extract_from_location, extract_manual_token
from .location import Location, MemoryLocation
from .models import (
    SHORT_CODE_MAX_LENGTH,
    Document,
    PublishOutcome,
    ReferenceKind,
    ResolveResult,
    ResolveStatus,
    ShareArtifact,
    TokenImportResult,
)
from .publisher import SharePublisher
from .resolver import ReferenceResolver, classify

__all__ = [
    "__version__",
    # Codec
    "Codec",
    "TemplateCodec",
    # Extraction
    "extract",
    "extract_from_location",
    "extract_manual_token",
    "Location",
    "MemoryLocation",
    # Models
    "SHORT_CODE_MAX_LENGTH",
    "Document",
    "PublishOutcome",
    "ReferenceKind",
    "ResolveResult",
    "ResolveStatus",
    "ShareArtifact",
    "TokenImportResult",
    # Flows
    "ReferenceResolver",
    "SharePublisher",
    "classify",
]
