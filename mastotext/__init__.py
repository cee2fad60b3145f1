"""Mastodon rich-text content parsing, rendering and character counting."""

try:
    from importlib.metadata import version

    __version__ = version("mastotext")
except Exception:
    __version__ = "0.0.0-dev"
