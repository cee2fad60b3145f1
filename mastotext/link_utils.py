"""Utilities for validating URLs and building internal navigation links."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode, urlsplit

INTERNAL_SCHEME = "mastodonandon"

_VIEW_TAG_HOST = "view-tag"
_VIEW_USER_HOST = "view-user"
_WHITESPACE_RE = re.compile(r"\s")


@dataclass(frozen=True)
class ViewTag:
    tag: str


@dataclass(frozen=True)
class ViewUser:
    username: str
    instance: str


InternalLocator = ViewTag | ViewUser


def parse_url(value: str | None) -> str | None:
    """Return ``value`` if it is usable as a URL, else None."""
    if not value or _WHITESPACE_RE.search(value):
        return None
    try:
        urlsplit(value)
    except ValueError:
        return None
    return value


def host_for(url: str | None) -> str | None:
    """Host component of a URL (lowercased, port stripped), or None."""
    if parse_url(url) is None:
        return None
    try:
        return urlsplit(url).hostname or None
    except ValueError:
        return None


def _internal_url(host: str, query: dict[str, str]) -> str:
    return f"{INTERNAL_SCHEME}://{host}?{urlencode(query)}"


def view_tag_url(name: str) -> str:
    """Internal URL for viewing posts for a tag, e.g. ``mastodonandon://view-tag?tag=cats``."""
    return _internal_url(_VIEW_TAG_HOST, {"tag": name})


def view_user_url(name: str, instance: str) -> str:
    """Internal URL for viewing a user profile."""
    return _internal_url(_VIEW_USER_HOST, {"username": name, "instance": instance})


def parse_internal_url(url: str | None) -> InternalLocator | None:
    """
    Interpret an internal navigation URL.

    Returns None when the URL is not internal, has an unknown host, or is
    missing a required query item.
    """
    if not url:
        return None
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if parts.scheme != INTERNAL_SCHEME:
        return None

    query = parse_qs(parts.query)

    def _item(name: str) -> str | None:
        values = query.get(name)
        return values[0] if values else None

    if parts.netloc == _VIEW_TAG_HOST:
        tag = _item("tag")
        if tag:
            return ViewTag(tag=tag)
    elif parts.netloc == _VIEW_USER_HOST:
        username = _item("username")
        instance = _item("instance")
        if username and instance:
            return ViewUser(username=username, instance=instance)
    return None
