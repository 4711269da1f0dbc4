"""
Content fingerprint used as the question dedup key.
"""

import hashlib
import unicodedata


def normalize_question_text(text: str) -> str:
    """
    Reduce question text to the form that gets hashed.

    Lowercases, drops all whitespace (internal spaces included) and every
    character outside the Unicode letter/mark/number categories, so
    "Hello, World!" and "helloworld" normalize identically.
    """
    collapsed = "".join(text.lower().split())
    return "".join(
        ch for ch in collapsed
        if unicodedata.category(ch)[0] in ("L", "M", "N")
    )


def fingerprint(text: str) -> str:
    """Return the SHA-256 hex digest of the normalized question text."""
    normalized = normalize_question_text(text)
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()
