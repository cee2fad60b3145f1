"""Helpers for drafting a status: length messages and @/# lookup tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .counter import MAX_CHARACTERS, StatusCharacterCounter

_MIN_LOOKUP_LENGTH = 3


def remaining_characters_message(remaining: int) -> str:
    """Human readable remaining-characters message."""
    characters = "character" if abs(remaining) == 1 else "characters"
    if remaining >= 0:
        return f"{remaining} {characters} left"
    return f"{abs(remaining)} {characters} too many!"


@dataclass(frozen=True)
class LookupState:
    """What, if anything, the author is currently typing a reference to."""

    kind: Literal["none", "mention", "hashtag"] = "none"
    fragment: str | None = None

    @classmethod
    def none(cls) -> LookupState:
        return cls()

    @classmethod
    def mention(cls, fragment: str | None = None) -> LookupState:
        return cls("mention", fragment)

    @classmethod
    def hashtag(cls, fragment: str | None = None) -> LookupState:
        return cls("hashtag", fragment)


def find_suffix(content: str, symbol: str) -> str | None:
    """Text after the last ``symbol``, or None if missing or under 3 characters."""
    index = content.rfind(symbol)
    if index < 0:
        return None
    result = content[index + len(symbol) :]
    return result if len(result) >= _MIN_LOOKUP_LENGTH else None


def replace_last(content: str, symbol: str, replacement: str) -> str:
    """Replace everything from the last ``symbol`` with ``symbol + replacement``."""
    index = content.rfind(symbol)
    if index < 0:
        return content
    return f"{content[:index]}{symbol}{replacement}"


def next_lookup_state(content: str, state: LookupState) -> LookupState:
    """Lookup state after ``content`` was edited, judged by its last character."""
    if not content:
        return LookupState.none()

    character = content[-1]
    if character == "@":
        return LookupState.mention()
    if character == "#":
        return LookupState.hashtag()
    if character == " ":
        return LookupState.none()
    if state.kind == "mention":
        return LookupState.mention(find_suffix(content, "@"))
    if state.kind == "hashtag":
        return LookupState.hashtag(find_suffix(content, "#"))
    return state


@dataclass
class ComposerState:
    """Running state of a draft: remaining allowance and active lookup."""

    content: str = ""
    remaining: int = MAX_CHARACTERS
    lookup: LookupState = LookupState()

    def update(self, content: str) -> ComposerState:
        self.content = content
        self.remaining = StatusCharacterCounter().remaining_characters(content)
        self.lookup = next_lookup_state(content, self.lookup)
        return self

    @property
    def message(self) -> str:
        return remaining_characters_message(self.remaining)

    @property
    def can_post(self) -> bool:
        return bool(self.content.strip()) and self.remaining >= 0
