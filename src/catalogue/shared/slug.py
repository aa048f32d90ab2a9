"""URL slug derivation for catalogue names."""

import re
import unicodedata


def slugify(name: str, max_len: int = 200) -> str:
    """Lowercase, hyphenated, ASCII-only form of ``name``.

    Accents are folded onto their base letter; any other non-ASCII character
    or run of punctuation/whitespace becomes a single hyphen.
    """
    norm = unicodedata.normalize("NFKD", (name or "").strip())
    chars = []
    for ch in norm:
        if unicodedata.category(ch) == "Mn":
            continue
        chars.append(ch if ord(ch) < 128 else "-")

    slug = "".join(chars).lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug).strip("-")
    return slug[:max_len].rstrip("-")


def name_key(name: str) -> str:
    """Normalized form used for case-insensitive name uniqueness."""
    return (name or "").strip().lower()
