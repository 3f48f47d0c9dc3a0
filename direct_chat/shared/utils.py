"""Shared utility functions."""
from typing import Optional


def clean_text(text: Optional[str]) -> Optional[str]:
    """Return the trimmed text, or None if nothing but whitespace is left."""
    if text is None:
        return None
    stripped = text.strip()
    if not stripped:
        return None
    return stripped


def truncate(text: str, length: int) -> str:
    if len(text) <= length:
        return text
    return text[: length - 1].rstrip() + "…"
