"""Pydantic models for the mastotext package."""

from __future__ import annotations

from .config import (
    EmojiConfig,
    MastotextConfig,
    RenderConfig,
)
from .emoji import CustomEmoji
from .tokens import (
    INVALID_URL_TEXT,
    Bold,
    Emoji,
    HashTag,
    Italic,
    LineBreak,
    Link,
    Mention,
    Text,
    Token,
    TokenList,
)

__all__ = [
    "INVALID_URL_TEXT",
    "Bold",
    "CustomEmoji",
    "Emoji",
    "EmojiConfig",
    "HashTag",
    "Italic",
    "LineBreak",
    "Link",
    "MastotextConfig",
    "Mention",
    "RenderConfig",
    "Text",
    "Token",
    "TokenList",
]
