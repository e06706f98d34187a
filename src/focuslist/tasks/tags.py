# src/focuslist/tasks/tags.py

from __future__ import annotations

import re
from collections.abc import Iterable

TAG_RE = re.compile(r"#([A-Za-z0-9_]+)")


def extract_tags(text: str) -> tuple[str, ...]:
    """
    Return the distinct #tags in text, without the '#', in first-seen order.

    "#" followed by a non-word character (or nothing) is not a tag.
    """
    if not text:
        return ()
    return tuple(dict.fromkeys(m.group(1) for m in TAG_RE.finditer(text)))


def tags_as_text(tags: Iterable[str]) -> str:
    """Inverse helper: ("a", "b") -> "#a #b"."""
    return " ".join(f"#{t}" for t in tags)
