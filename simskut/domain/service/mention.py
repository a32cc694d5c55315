"""Mention parsing and rich-text segmentation.

Usernames may carry a #tag, so the mention charset includes '#'.
"""

import re
from enum import Enum
from urllib.parse import quote

from simskut.domain.value.common import ValueObject

MENTION_PATTERN = re.compile(r"@([A-Za-z0-9_#]+)")
URL_PATTERN = re.compile(r"https?://[^\s<>\"']+")

# Punctuation that usually closes a sentence rather than the URL
_URL_TRAILING = ".,;:!?)]}"


class SegmentKind(str, Enum):
    """Kind of rendered segment."""

    TEXT = "text"
    MENTION = "mention"
    SPOILER = "spoiler"


class Segment(ValueObject):
    """A slice of the source text.

    Mentions link to the profile at `href`. Spoilers hide a URL behind a
    generic label until the reader unmasks it.
    """

    kind: SegmentKind
    text: str
    start: int
    end: int
    username: str | None = None
    href: str | None = None


def extract_mentions(text: str) -> list[str]:
    """Unique mentioned usernames in order of first appearance."""
    seen: dict[str, None] = {}
    for match in MENTION_PATTERN.finditer(text or ""):
        seen.setdefault(match.group(1), None)
    return list(seen)


def _url_spans(text: str) -> list[tuple[int, int]]:
    spans = []
    for match in URL_PATTERN.finditer(text):
        end = match.end()
        while end > match.start() and text[end - 1] in _URL_TRAILING:
            end -= 1
        spans.append((match.start(), end))
    return spans


def render_segments(text: str) -> list[Segment]:
    """Split text into plain, mention and spoiler segments.

    Mention and URL matches are merged left to right; when two matches
    overlap the one starting first wins and the other is dropped.
    """
    if not text:
        return []

    matches: list[tuple[int, int, SegmentKind]] = [
        (m.start(), m.end(), SegmentKind.MENTION) for m in MENTION_PATTERN.finditer(text)
    ]
    matches.extend((start, end, SegmentKind.SPOILER) for start, end in _url_spans(text))
    matches.sort(key=lambda m: (m[0], -m[1]))

    segments: list[Segment] = []
    cursor = 0
    for start, end, kind in matches:
        if start < cursor:
            continue
        if start > cursor:
            segments.append(
                Segment(kind=SegmentKind.TEXT, text=text[cursor:start], start=cursor, end=start)
            )
        chunk = text[start:end]
        if kind == SegmentKind.MENTION:
            username = chunk[1:]
            segments.append(
                Segment(
                    kind=kind,
                    text=chunk,
                    start=start,
                    end=end,
                    username=username,
                    href=f"/profile/{quote(username, safe='')}",
                )
            )
        else:
            segments.append(Segment(kind=kind, text=chunk, start=start, end=end, href=chunk))
        cursor = end

    if cursor < len(text):
        segments.append(
            Segment(kind=SegmentKind.TEXT, text=text[cursor:], start=cursor, end=len(text))
        )
    return segments
