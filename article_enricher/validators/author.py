"""Cross-check author candidates against the page text.

Generic byline selectors (.byline, .author) often match boilerplate such as
an "About the newsroom" blurb. A candidate is only kept when its name
tokens actually appear in the page.
"""

import re

MIN_AUTHOR_LENGTH = 4

# Tokens shorter than this are too common to prove anything
SIGNIFICANT_TOKEN_LENGTH = 4

# Names whose parts are all this short must appear verbatim
SHORT_PART_LENGTH = 3

AUTHOR_SEPARATOR = re.compile(r",|\s+and\s+", re.I)


def split_author_names(candidate: str) -> list[str]:
    """Split "A B, C D and E F" into individual names."""
    return [name.strip() for name in AUTHOR_SEPARATOR.split(candidate) if name.strip()]


def is_name_present(name: str, page_text: str) -> bool:
    """Check a single author name against the page text."""
    parts = name.split()
    if len(parts) < 2:
        return False

    significant = [p for p in parts if len(p) >= SIGNIFICANT_TOKEN_LENGTH]
    if all(len(p) <= SHORT_PART_LENGTH for p in parts) or not significant:
        pattern = r"\s+".join(re.escape(p) for p in parts)
        return re.search(pattern, page_text, re.I) is not None

    text_lower = page_text.lower()
    found = sum(1 for token in significant if token.lower() in text_lower)
    return found * 2 >= len(significant)


def validate_author(candidate: str, page_text: str) -> bool:
    """True if the candidate looks like real author name(s) from this page.

    Multi-author candidates pass when at least half of the names pass.
    Single words never pass.
    """
    candidate = (candidate or "").strip()
    if len(candidate) < MIN_AUTHOR_LENGTH:
        return False
    if not re.search(r"\s", candidate):
        return False

    names = split_author_names(candidate)
    if not names:
        return False

    passed = sum(1 for name in names if is_name_present(name, page_text))
    return passed * 2 >= len(names)
