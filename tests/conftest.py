"""Pytest configuration and shared fixtures."""

import json

import httpx
import pytest

from promptshare.codec import TemplateCodec
from promptshare.models import Document

API_URL = "https://share.example.com/api/share"


class FakeShareService:
    """In-process stand-in for the short code service.

    Serves ``GET {API_URL}/{code}`` from ``stored`` and answers
    ``POST {API_URL}`` with ``next_code``. Set ``fail`` to make every
    request raise a connection error, or ``status`` to force an HTTP error.
    """

    def __init__(self):
        self.stored: dict[str, str] = {}
        self.next_code: str | None = "AB12CD34"
        self.fail = False
        self.status = 200
        self.raw_body: bytes | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            raise httpx.ConnectError("connection refused", request=request)
        if self.status >= 400:
            return httpx.Response(self.status, json={"error": "nope"})
        if self.raw_body is not None:
            return httpx.Response(200, content=self.raw_body)

        if request.method == "POST":
            data = json.loads(request.content)["data"]
            if self.next_code is None:
                return httpx.Response(200, json={})
            self.stored[self.next_code] = data
            return httpx.Response(200, json={"code": self.next_code})

        code = request.url.path.rsplit("/", 1)[-1]
        if code in self.stored:
            return httpx.Response(200, json={"data": self.stored[code]})
        return httpx.Response(200, json={})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def service():
    return FakeShareService()


@pytest.fixture
def client(service):
    from promptshare.client import ShareApiClient
    return ShareApiClient(API_URL, timeout=5, transport=service.transport)


@pytest.fixture
def codec():
    return TemplateCodec()


@pytest.fixture
def sample_payload():
    return {
        "name": {"cn": "周报生成器", "en": "Weekly Report"},
        "content": "Write a weekly report about {{topic}}.",
        "selections": {"topic": "search"},
        "author": "alice",
    }


@pytest.fixture
def sample_doc(sample_payload):
    return Document.from_payload(sample_payload)
