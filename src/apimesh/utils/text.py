from __future__ import annotations

import re
import hashlib


def normalize_text(text: str) -> str:
    """
    Normalizes text for deterministic processing.

    Used for keyword matching and cache keys.
    """
    text = text.lower()
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def hash_text(text: str) -> str:
    """
    Stable hash of the exact text (no normalization).
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", normalize_text(text)).strip("-")


def contains_any(text: str, keywords) -> bool:
    haystack = normalize_text(text)
    return any(normalize_text(k) in haystack for k in keywords)
