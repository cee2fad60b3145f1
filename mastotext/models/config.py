"""Pydantic models for mastotext configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from .tokens import INVALID_URL_TEXT


class RenderConfig(BaseModel):
    """Rendering options."""

    format: Literal["markdown", "text"] = "markdown"
    internal_links: bool = True
    invalid_url_text: str = INVALID_URL_TEXT


class EmojiConfig(BaseModel):
    """Custom emoji table location."""

    table_path: str | None = None


class MastotextConfig(BaseModel):
    """Top-level mastotext configuration."""

    render: RenderConfig = RenderConfig()
    emoji: EmojiConfig = EmojiConfig()
