"""Read embedded JSON-LD metadata, repairing the malformed JSON seen in the wild."""

import json
import re
from typing import Any, Optional

from bs4 import BeautifulSoup

# Fields tried in order when looking for a publication date
DATE_FIELDS = [
    "datePublished",
    "dateCreated",
    "dateModified",
    "publishedDate",
    "datePosted",
]

PUBLISHER_FIELDS = ["publisher", "provider", "sourceOrganization"]

HTML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)

KEY_CHARS = re.compile(r"[A-Za-z0-9_$]")


def _read_double_quoted(text: str, start: int) -> int:
    """Index just past the double-quoted string opening at start."""
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return i + 1
        i += 1
    return len(text)


def _convert_single_quoted(text: str, start: int) -> tuple[str, int]:
    """Rewrite the single-quoted string opening at start as a JSON string."""
    chars = ['"']
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            # \' has no meaning in JSON
            chars.append("'" if nxt == "'" else ch + nxt)
            i += 2
            continue
        if ch == "'":
            chars.append('"')
            return "".join(chars), i + 1
        chars.append('\\"' if ch == '"' else ch)
        i += 1
    chars.append('"')
    return "".join(chars), i


def _next_significant(text: str, start: int) -> str:
    i = start
    while i < len(text) and text[i].isspace():
        i += 1
    return text[i] if i < len(text) else ""


def _is_balanced(text: str) -> bool:
    """True if text is exactly one bracket-balanced {...} or [...] value."""
    if not text or text[0] not in "{[":
        return False

    closing = {"{": "}", "[": "]"}
    stack: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            i = _read_double_quoted(text, i)
            continue
        if ch in closing:
            stack.append(closing[ch])
        elif ch in "}]":
            if not stack or stack.pop() != ch:
                return False
            if not stack and text[i + 1:].strip():
                return False
        i += 1
    return not stack


def repair_json(text: Optional[str]) -> Optional[str]:
    """Fix common JSON-LD mistakes so json.loads can read the block.

    Handles embedded HTML comments, trailing commas, bare object keys and
    single-quoted strings. Text inside double-quoted strings is never touched.
    Returns None if the result is not a single balanced object or array.
    """
    if not text:
        return None

    text = HTML_COMMENT.sub("", text).strip()
    out: list[str] = []
    last = ""  # last significant character written outside a string
    i = 0

    while i < len(text):
        ch = text[i]

        if ch == '"':
            end = _read_double_quoted(text, i)
            out.append(text[i:end])
            last = '"'
            i = end
            continue

        if ch == "'":
            converted, i = _convert_single_quoted(text, i)
            out.append(converted)
            last = '"'
            continue

        if ch == ",":
            if _next_significant(text, i + 1) in ("}", "]"):
                i += 1
                continue
            out.append(ch)
            last = ch
            i += 1
            continue

        if last in ("{", ",") and KEY_CHARS.match(ch):
            end = i
            while end < len(text) and KEY_CHARS.match(text[end]):
                end += 1
            word = text[i:end]
            if _next_significant(text, end) == ":":
                out.append(f'"{word}"')
            else:
                out.append(word)
            last = word[-1]
            i = end
            continue

        out.append(ch)
        if not ch.isspace():
            last = ch
        i += 1

    repaired = "".join(out).strip()
    if not _is_balanced(repaired):
        return None
    return repaired


def parse_json_ld(text: Optional[str]) -> Optional[Any]:
    """Parse a JSON-LD block, or None if it cannot be read."""
    repaired = repair_json(text)
    if repaired is None:
        return None
    try:
        return json.loads(repaired)
    except (json.JSONDecodeError, RecursionError):
        return None


def extract_json_ld(soup: BeautifulSoup) -> list[Any]:
    """All readable JSON-LD blocks of a page, in document order."""
    blocks = []

    for script in soup.find_all("script", type="application/ld+json"):
        data = parse_json_ld(script.string or script.get_text())
        if data is not None:
            blocks.append(data)

    return blocks


def _name_of(value: Any) -> str:
    """Name from a plain string or a {"name": ...} object."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, dict):
        name = value.get("name")
        if isinstance(name, str):
            return name.strip()
        if isinstance(name, list):
            return next((n.strip() for n in name if isinstance(n, str) and n.strip()), "")
    return ""


def _children(node: Any) -> list[Any]:
    """Nested nodes worth searching after the node itself."""
    if isinstance(node, list):
        return node
    if isinstance(node, dict):
        graph = node.get("@graph")
        nested = [graph] if isinstance(graph, list) else []
        nested.extend(
            v for k, v in node.items()
            if k != "@graph" and isinstance(v, (dict, list))
        )
        return nested
    return []


def _search(node: Any, read, depth: int = 0) -> str:
    """Depth-first search: a node's own value wins over its descendants."""
    if depth > 10:
        return ""
    if isinstance(node, dict):
        value = read(node)
        if value:
            return value
    for child in _children(node):
        value = _search(child, read, depth + 1)
        if value:
            return value
    return ""


def _read_author(node: dict) -> str:
    for key in ("author", "creator"):
        value = node.get(key)
        if isinstance(value, list):
            name = next((_name_of(v) for v in value if _name_of(v)), "")
        else:
            name = _name_of(value)
        if name:
            return name
    return ""


def _read_publisher(node: dict) -> str:
    for key in PUBLISHER_FIELDS:
        name = _name_of(node.get(key))
        if name:
            return name
    return ""


def _read_date(node: dict) -> str:
    for key in DATE_FIELDS:
        value = node.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def author_from_json_ld(data: Any) -> str:
    """Author name from parsed JSON-LD (string, {name}, or a list of either)."""
    return _search(data, _read_author)


def publisher_from_json_ld(data: Any) -> str:
    """Publisher, provider or source organization name."""
    return _search(data, _read_publisher)


def date_from_json_ld(data: Any) -> str:
    """Raw date string, preferring datePublished over the other date fields."""
    return _search(data, _read_date)
