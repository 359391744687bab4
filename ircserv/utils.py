"""Small string helpers used when framing IRC traffic."""

from __future__ import annotations


def split(text: str, delimiter: str) -> list[str]:
    """Split ``text`` on ``delimiter``, dropping empty pieces.

    Raises ValueError if ``delimiter`` is empty.
    """
    if not delimiter:
        raise ValueError("empty delimiter")
    return [piece for piece in text.split(delimiter) if piece]


def ends_with(text: str, suffix: str) -> bool:
    """Return True if ``text`` ends with ``suffix``."""
    return text.endswith(suffix)