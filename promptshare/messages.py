"""User-facing strings for the share flows (cn / en)."""

from typing import Any


DEFAULT_LANGUAGE = "cn"
FALLBACK_LANGUAGE = "en"

INVALID_TOKEN = "invalid_token"
LINK_COPIED = "link_copied"
LINK_COPY_FAILED = "link_copy_failed"
TOKEN_COPIED = "token_copied"
TOKEN_COPY_FAILED = "token_copy_failed"

MESSAGES: dict[str, dict[str, str]] = {
    INVALID_TOKEN: {
        "cn": "无效的分享口令或链接",
        "en": "Invalid share token or link",
    },
    LINK_COPIED: {
        "cn": "分享链接已复制",
        "en": "Share link copied!",
    },
    LINK_COPY_FAILED: {
        "cn": "复制失败，请手动长按复制",
        "en": "Copy failed, please copy manually",
    },
    TOKEN_COPIED: {
        "cn": "分享口令已复制，快去发给好友吧！",
        "en": "Share token copied!",
    },
    TOKEN_COPY_FAILED: {
        "cn": "复制失败，请尝试链接分享",
        "en": "Copy failed, please try Link Share",
    },
}

# The token text is read by other users regardless of their UI language,
# so it is never localized.
TOKEN_TEMPLATE = (
    "「Prompt分享」我的新模版：{name}\n"
    "复制整段文字，打开【提示词填空器】即可导入：\n"
    "#pf${reference}$"
)


def message(key: str, language: str) -> str:
    """Look up a message, falling back to English for unknown languages."""
    variants = MESSAGES[key]
    return variants.get(language) or variants[FALLBACK_LANGUAGE]


def get_localized(value: Any, language: str) -> str:
    """Pick the display string for a possibly-localized field.

    Plain strings are returned as-is. Mappings are looked up by
    ``language``, then the default and fallback languages, then
    whatever value comes first.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for lang in (language, DEFAULT_LANGUAGE, FALLBACK_LANGUAGE):
            text = value.get(lang)
            if text:
                return str(text)
        for text in value.values():
            if text:
                return str(text)
        return ""
    return str(value)
