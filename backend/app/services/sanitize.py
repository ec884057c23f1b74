"""Input sanitization and format checks

Shared by request schemas and services. Everything here is pure.
"""

from __future__ import annotations

import re

MAX_TAGS = 20
MAX_TAG_LENGTH = 50
MAX_FILENAME_LENGTH = 100

_ANGLE_BRACKETS = re.compile(r"[<>]")
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


def sanitize_string(value: str | None, max_length: int | None = None) -> str:
    """Strip '<' / '>' and surrounding whitespace, then truncate

    None → "".
    """
    if not value:
        return ""
    cleaned = _ANGLE_BRACKETS.sub("", value).strip()
    if max_length is not None:
        cleaned = cleaned[:max_length]
    return cleaned


def sanitize_tags(tags: list[str]) -> list[str]:
    """Sanitize tags, dropping the ones that end up empty

    Raises:
        ValueError: more than MAX_TAGS items
    """
    if len(tags) > MAX_TAGS:
        raise ValueError(f"tags cannot have more than {MAX_TAGS} items")
    cleaned = (sanitize_string(t, MAX_TAG_LENGTH) for t in tags)
    return [t for t in cleaned if t]


def is_valid_uuid(value: str | None) -> bool:
    return bool(value) and _UUID_RE.match(value) is not None


def is_valid_share_id(value: str | None, length: int = 16) -> bool:
    """Share ids are `length` hex characters"""
    if not value or len(value) != length:
        return False
    return all(c in "0123456789abcdefABCDEF" for c in value)


def is_valid_email(value: str | None) -> bool:
    return bool(value) and _EMAIL_RE.match(value) is not None


def split_safe_filename(original: str) -> tuple[str, str]:
    """Uploaded filename → (base, extension) safe to use on disk

    Anything outside [a-zA-Z0-9._-] becomes '_', dots in the base become '_'
    (no hidden files, no '..'), and the extension keeps its leading dot.

    >>> split_safe_filename("../../etc/pass wd.tar.gz")
    ('______etc_pass_wd_tar', '.gz')
    """
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", original)[:MAX_FILENAME_LENGTH]
    dot = cleaned.rfind(".")
    if 0 < dot < len(cleaned) - 1:
        base, ext = cleaned[:dot], cleaned[dot:]
    else:
        base, ext = cleaned, ""
    return base.replace(".", "_"), ext
