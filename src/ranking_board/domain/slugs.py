"""Slug generation for shareable session links."""

import re
import secrets
import unicodedata

SLUG_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
SLUG_SUFFIX_LENGTH = 6
SLUG_BASE_MAX_LENGTH = 60
SLUG_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def normalize_title(title: str) -> str:
    """Turn a title into a lowercase, hyphen-separated slug base."""
    decomposed = unicodedata.normalize("NFKD", title)
    ascii_only = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    base = _NON_SLUG_CHARS.sub("-", ascii_only.lower()).strip("-")
    if len(base) <= SLUG_BASE_MAX_LENGTH:
        return base
    truncated = base[:SLUG_BASE_MAX_LENGTH]
    if "-" in truncated:
        truncated = truncated.rsplit("-", 1)[0]
    return truncated.strip("-")


def random_suffix(length: int = SLUG_SUFFIX_LENGTH) -> str:
    """Return a random suffix drawn from the slug alphabet."""
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


def generate_slug(title: str) -> str:
    """Generate a candidate slug in the form ``<normalized-title>-<suffix>``."""
    base = normalize_title(title)
    suffix = random_suffix()
    if not base:
        return suffix
    return f"{base}-{suffix}"


def is_valid_slug(value: str | None) -> bool:
    """Return True when the value has the shape of a generated slug."""
    if not value:
        return False
    return bool(SLUG_PATTERN.fullmatch(value))
