"""
Count the characters in a status according to Mastodon's rules.

Mastodon counts every URL as 23 characters, and strips the instance from
remote mentions (in ``@name@example.social`` only ``@name`` is counted).
"""

from __future__ import annotations

import grapheme
import regex

MAX_CHARACTERS = 500

# URLs must start with http:// or https://. WORD selects Unicode default
# word boundaries, so a URL runs on through trailing punctuation such as "."
_URL_RE = regex.compile(r"\b(?:https?://)\S*\b", regex.IGNORECASE | regex.WORD)

# Captures the "@example.social" part of "@name@example.social"
_MENTION_RE = regex.compile(r"@\w+(@\w+\.\w+)")


class StatusCharacterCounter:
    """Stateless status length calculator."""

    max_characters = MAX_CHARACTERS
    url_substitution_value = 23

    def url_matches(self, text: str) -> list[str]:
        return [match.group(0) for match in _URL_RE.finditer(text)]

    def external_instances(self, text: str) -> list[str]:
        return [match.group(1) for match in _MENTION_RE.finditer(text)]

    def count(self, text: str) -> int:
        """The character count according to Mastodon's counting algorithm."""
        urls = self.url_matches(text)
        url_character_count = sum(grapheme.length(url) for url in urls)
        url_substitution_count = len(urls) * self.url_substitution_value

        # Both patterns scan the full text independently, so a URL holding
        # "@name@host.tld" is subtracted twice.
        instance_character_count = sum(grapheme.length(suffix) for suffix in self.external_instances(text))

        return grapheme.length(text) - url_character_count + url_substitution_count - instance_character_count

    def remaining_characters(self, text: str) -> int:
        """Remaining character allowance; negative when over the limit."""
        return self.max_characters - self.count(text)


def count(text: str) -> int:
    return StatusCharacterCounter().count(text)


def remaining_characters(text: str) -> int:
    return StatusCharacterCounter().remaining_characters(text)
