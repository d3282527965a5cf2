import re
from typing import Callable

MAX_SLUG_ATTEMPTS = 100


class SlugExhaustedError(Exception):
    """No free slug was found within the allowed number of attempts."""


def generate_slug(text: str) -> str:
    """
    Converts text into a URL friendly slug.

    >>> generate_slug("Electronics & Gadgets")
    'electronics-gadgets'
    """
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def unique_slug(
    text: str,
    is_taken: Callable[[str], bool],
    max_attempts: int = MAX_SLUG_ATTEMPTS,
) -> str:
    """
    Returns the slug of ``text``, suffixed with ``-1``, ``-2``... until
    ``is_taken`` reports it free.
    """
    base = generate_slug(text) or "item"
    candidate = base
    for attempt in range(1, max_attempts + 1):
        if not is_taken(candidate):
            return candidate
        candidate = f"{base}-{attempt}"
    raise SlugExhaustedError(base)
