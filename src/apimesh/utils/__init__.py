"""
Utility functions for apimesh.

This module contains low-level helpers used across the system.
No domain logic should live here.
"""

from apimesh.utils.text import normalize_text, hash_text, slugify, contains_any
from apimesh.utils.time import utc_now, iso_timestamp

__all__ = [
    "normalize_text",
    "hash_text",
    "slugify",
    "contains_any",
    "utc_now",
    "iso_timestamp",
]
