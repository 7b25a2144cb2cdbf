"""Share error hierarchy and user-facing error classification."""

import asyncio

import httpx


class ShareError(Exception):
    """Base class for all promptshare errors."""
    pass

class ShareServiceError(ShareError):
    """The share service could not be reached or answered with garbage."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

class ShareNotFoundError(ShareServiceError):
    """The share service has no data for the requested code."""
    pass

class ShareCodecError(ShareError):
    """A template payload could not be encoded, or a reference decoded."""
    pass

class ShareConfigError(ShareError):
    """Settings are missing something a share flow needs."""
    pass


def classify_error(e: BaseException) -> str:
    """Classify any exception into a short user-facing message."""
    if isinstance(e, ShareNotFoundError):
        return "Share code not found. It may have expired."

    if isinstance(e, ShareServiceError):
        cause = e.__cause__
        if isinstance(cause, (httpx.HTTPError, httpx.InvalidURL)):
            return classify_error(cause)
        code = e.status_code
        if code is not None:
            if code == 404:
                return "Share code not found. It may have expired."
            if code == 429:
                return "Share service is rate limiting requests. Please wait a moment."
            if 500 <= code < 600:
                return "Share service is having server issues. Please try again later."
            return f"Share service returned HTTP {code}."
        return "Share service returned an unexpected response."

    if isinstance(e, ShareCodecError):
        return "The share data is corrupted or not a template."
    if isinstance(e, ShareConfigError):
        return f"Share is not configured: {e}"

    if isinstance(e, httpx.InvalidURL):
        return "Share service URL or code has characters that cannot be sent."

    if isinstance(e, httpx.ConnectError):
        return "Cannot connect to the share service. Please check connectivity."
    if isinstance(e, (httpx.TimeoutException, asyncio.TimeoutError)):
        return "Request to the share service timed out. Please try again."
    if isinstance(e, httpx.HTTPError):
        return "Network error while talking to the share service."

    type_name = type(e).__name__
    return f"Something went wrong ({type_name}). Check logs for details."
