from __future__ import annotations

MAX_NAME_LENGTH = 255
INVALID_NAME_CHARS = set('/\\')


def clean_name(name: str) -> str:
    """
    Strip path separators and control chars, collapse whitespace, and enforce
    the 1-255 character rule used for folder names and display names.

    Examples:
        >>> clean_name("  Invoices  2024 ")
        'Invoices 2024'
        >>> clean_name("a/b")
        'ab'
        >>> clean_name("   ")
        Traceback (most recent call last):
        ...
        ValueError: Name must not be empty.
    """
    filtered = []
    for ch in name:
        if ch.isspace():
            filtered.append(" ")
            continue
        if ch in INVALID_NAME_CHARS:
            continue
        codepoint = ord(ch)
        if codepoint < 32 or codepoint == 127:
            continue
        filtered.append(ch)

    normalized = " ".join("".join(filtered).split())
    if not normalized:
        raise ValueError("Name must not be empty.")
    if len(normalized) > MAX_NAME_LENGTH:
        raise ValueError(f"Name must be at most {MAX_NAME_LENGTH} characters.")
    return normalized
