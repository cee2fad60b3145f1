"""Pydantic model for server-defined custom emoji."""

from __future__ import annotations

from pydantic import BaseModel


class CustomEmoji(BaseModel):
    """A custom emoji as returned by the Mastodon API."""

    shortcode: str | None = None
    url: str | None = None
    static_url: str | None = None
    visible_in_picker: bool = True
    category: str | None = None
