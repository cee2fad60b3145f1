"""Pydantic models for parsed rich-text tokens."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

INVALID_URL_TEXT = "<<invalid url>>"


class _Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def surface(self) -> str:
        """Canonical textual form of the token."""
        raise NotImplementedError


class LineBreak(_Token):
    """An explicit line break."""

    kind: Literal["line_break"] = "line_break"

    @property
    def surface(self) -> str:
        return "\n"


class Text(_Token):
    """A literal run of unstyled text."""

    kind: Literal["text"] = "text"
    text: str

    @property
    def surface(self) -> str:
        return self.text


class Bold(_Token):
    """Content of a <strong> element (first child only)."""

    kind: Literal["bold"] = "bold"
    text: str

    @property
    def surface(self) -> str:
        return self.text


class Italic(_Token):
    """Content of an <em> element (first child only)."""

    kind: Literal["italic"] = "italic"
    text: str

    @property
    def surface(self) -> str:
        return self.text


class HashTag(_Token):
    """A #tag reference."""

    kind: Literal["hashtag"] = "hashtag"
    name: str
    url: str | None = None

    @property
    def surface(self) -> str:
        return f"#{self.name}"


class Link(_Token):
    """An external hyperlink. ``url`` is None when the href is not a URL."""

    kind: Literal["link"] = "link"
    url: str | None = None

    @property
    def surface(self) -> str:
        return self.url if self.url is not None else INVALID_URL_TEXT


class Mention(_Token):
    """An @user@host reference taken from h-card markup."""

    kind: Literal["mention"] = "mention"
    name: str
    instance: str
    url: str

    @property
    def surface(self) -> str:
        return f"@{self.name}"


class Emoji(_Token):
    """A custom emoji placeholder, e.g. ``:blobcat:``."""

    kind: Literal["emoji"] = "emoji"
    shortcode: str

    @property
    def surface(self) -> str:
        return f":{self.shortcode}:"


Token = Annotated[
    Union[LineBreak, Text, Bold, Italic, HashTag, Link, Mention, Emoji],
    Field(discriminator="kind"),
]

TokenList: TypeAdapter[list[Token]] = TypeAdapter(list[Token])
