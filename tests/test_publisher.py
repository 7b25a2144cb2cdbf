"""Tests for publishing share links and share tokens."""

from unittest.mock import AsyncMock

import pytest

from promptshare.clipboard import MemoryClipboard
from promptshare.config import ShareSettings
from promptshare.errors import ShareCodecError, ShareConfigError
from promptshare.location import MemoryLocation
from promptshare.models import Document
from promptshare.publisher import SharePublisher, compose_share_url, compose_token_text


def _settings(**kw):
    kw.setdefault("language", "en")
    kw.setdefault("public_share_url", "https://prompts.example.com")
    return ShareSettings(**kw)


@pytest.fixture
def clipboard():
    return MemoryClipboard()


@pytest.fixture
def publisher(client, codec, clipboard):
    return SharePublisher(
        client, codec, clipboard,
        _settings(public_share_url="https://prompts.example.com"),
    )


class TestCompose:

    def test_adds_separator(self):
        assert compose_share_url("https://a.example", "X") == "https://a.example/#/share?share=X"

    def test_keeps_existing_separator(self):
        assert compose_share_url("https://a.example/app/", "X") == "https://a.example/app/#/share?share=X"

    def test_token_text(self):
        text = compose_token_text("Weekly", "AB12CD34")
        assert text == (
            "「Prompt分享」我的新模版：Weekly\n"
            "复制整段文字，打开【提示词填空器】即可导入：\n"
            "#pf$AB12CD34$"
        )


class TestShareBase:

    def test_configured_public_url(self, publisher):
        assert publisher.share_base() == "https://prompts.example.com"

    def test_falls_back_to_location(self, client, codec, clipboard):
        loc = MemoryLocation("https://host.example/tools/prompt/?x=1#/editor")
        p = SharePublisher(client, codec, clipboard, _settings(public_share_url=None), location=loc)
        assert p.share_base() == "https://host.example/tools/prompt/"

    def test_preview_is_inline_and_offline(self, publisher, service, codec, sample_doc):
        url = publisher.preview_url(sample_doc)
        assert url == compose_share_url("https://prompts.example.com", codec.encode(sample_doc.to_payload()))
        assert service.requests == []

    def test_preview_without_document(self, publisher):
        assert publisher.preview_url(None) == ""

    def test_no_base_is_a_config_error(self, client, codec, clipboard, sample_doc):
        p = SharePublisher(client, codec, clipboard, _settings(public_share_url=None))
        with pytest.raises(ShareConfigError):
            p.share_base()
        with pytest.raises(ShareConfigError):
            p.preview_url(sample_doc)

    def test_location_without_origin_is_not_a_base(self, client, codec, clipboard):
        p = SharePublisher(
            client, codec, clipboard, _settings(public_share_url=None),
            location=MemoryLocation("/relative/path"),
        )
        with pytest.raises(ShareConfigError):
            p.share_base()


class TestPublishLink:

    @pytest.mark.asyncio
    async def test_uses_short_code(self, publisher, clipboard, service, sample_doc):
        outcome = await publisher.publish_link(sample_doc)
        assert outcome.copied is True
        assert outcome.artifact.is_short is True
        assert outcome.text == "https://prompts.example.com/#/share?share=AB12CD34"
        assert clipboard.text == outcome.text
        assert outcome.message == "Share link copied!"
        assert len(service.requests) == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_inline(self, publisher, clipboard, service, codec, sample_doc):
        service.fail = True
        outcome = await publisher.publish_link(sample_doc)
        encoded = codec.encode(sample_doc.to_payload())
        assert outcome.copied is True
        assert outcome.artifact.is_short is False
        assert outcome.artifact.reference == encoded
        assert outcome.text.endswith(f"share={encoded}")

    @pytest.mark.asyncio
    async def test_missing_code_falls_back_to_inline(self, publisher, service, sample_doc):
        service.next_code = None
        outcome = await publisher.publish_link(sample_doc)
        assert not outcome.artifact.is_short
        assert len(outcome.artifact.reference) > 15

    @pytest.mark.asyncio
    async def test_clipboard_failure_reported(self, client, codec, service, sample_doc):
        service.fail = True
        p = SharePublisher(client, codec, MemoryClipboard(succeed=False), _settings(language="cn"))
        outcome = await p.publish_link(sample_doc)
        assert outcome.copied is False
        assert outcome.message == "复制失败，请手动长按复制"
        assert outcome.artifact.reference

    @pytest.mark.asyncio
    async def test_in_progress_flag(self, client, codec, sample_doc):
        seen = []

        class Spy(MemoryClipboard):
            async def copy(self, text):
                seen.append(p.in_progress)
                return True

        p = SharePublisher(client, codec, Spy(), _settings())
        assert p.in_progress is False
        await p.publish_link(sample_doc)
        assert seen == [True]
        assert p.in_progress is False

    @pytest.mark.asyncio
    async def test_in_progress_reset_when_clipboard_raises(self, client, codec, sample_doc):
        clip = MemoryClipboard()
        clip.copy = AsyncMock(side_effect=RuntimeError("boom"))
        p = SharePublisher(client, codec, clip, _settings())
        with pytest.raises(RuntimeError):
            await p.publish_link(sample_doc)
        assert p.in_progress is False


class TestPublishToken:

    @pytest.mark.asyncio
    async def test_token_with_short_code(self, publisher, clipboard, sample_doc):
        outcome = await publisher.publish_token(sample_doc)
        assert outcome.text.endswith("#pf$AB12CD34$")
        assert "我的新模版：Weekly Report\n" in outcome.text
        assert outcome.message == "Share token copied!"
        assert clipboard.text == outcome.text

    @pytest.mark.asyncio
    async def test_token_uses_display_name(self, publisher, sample_doc):
        outcome = await publisher.publish_token(sample_doc, display_name="My Template")
        assert "我的新模版：My Template\n" in outcome.text

    @pytest.mark.asyncio
    async def test_token_inline_fallback(self, publisher, service, codec, sample_doc):
        service.fail = True
        outcome = await publisher.publish_token(sample_doc)
        assert outcome.text.endswith(f"#pf${codec.encode(sample_doc.to_payload())}$")

    @pytest.mark.asyncio
    async def test_token_copy_failure(self, client, codec, sample_doc):
        p = SharePublisher(client, codec, MemoryClipboard(succeed=False), _settings())
        outcome = await p.publish_token(sample_doc)
        assert outcome.copied is False
        assert outcome.message == "Copy failed, please try Link Share"


class TestRoundTrip:

    @pytest.mark.asyncio
    async def test_published_token_resolves(self, client, codec, service, sample_doc):
        from promptshare.resolver import ReferenceResolver

        clipboard = MemoryClipboard()
        p = SharePublisher(client, codec, clipboard, _settings())
        await p.publish_token(sample_doc)

        outcome = await ReferenceResolver(client, codec).resolve_token(clipboard.text)
        assert outcome.document == sample_doc

    @pytest.mark.asyncio
    async def test_published_inline_link_resolves(self, client, codec, service, sample_doc):
        from promptshare.resolver import ReferenceResolver

        service.fail = True
        p = SharePublisher(client, codec, MemoryClipboard(), _settings(public_share_url="https://a.example/"))
        outcome = await p.publish_link(sample_doc)

        result = await ReferenceResolver(client, codec).resolve_location(MemoryLocation(outcome.text))
        assert result.found
        assert result.document == sample_doc


class TestPublishSetupErrors:

    @pytest.mark.asyncio
    async def test_link_without_base_copies_nothing(self, client, codec, service, sample_doc):
        clipboard = MemoryClipboard()
        p = SharePublisher(client, codec, clipboard, _settings(public_share_url=None))
        with pytest.raises(ShareConfigError):
            await p.publish_link(sample_doc)
        assert clipboard.text is None
        assert service.requests == []
        assert p.in_progress is False

    @pytest.mark.asyncio
    async def test_token_needs_no_base(self, client, codec, sample_doc):
        p = SharePublisher(client, codec, MemoryClipboard(), _settings(public_share_url=None))
        outcome = await p.publish_token(sample_doc)
        assert outcome.copied is True

    @pytest.mark.asyncio
    async def test_non_json_document_raises_codec_error(self, publisher, clipboard, service):
        doc = Document(name="T", content="C", extra={"created": object()})
        with pytest.raises(ShareCodecError):
            await publisher.publish_token(doc)
        assert clipboard.text is None
        assert service.requests == []
        assert publisher.in_progress is False
