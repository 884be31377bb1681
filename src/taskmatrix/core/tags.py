"""Task tag parsing - no I/O dependencies."""

import re
from dataclasses import dataclass

TAG_PATTERN = re.compile(r"#U(\d+)I(\d+)E(\d+)D(\d+)h")


@dataclass(frozen=True)
class Tag:
    """Attributes encoded in a ``#U<n>I<n>E<n>D<n>h`` tag."""

    urgency: int | None = None
    importance: int | None = None
    enjoyment: int | None = None
    duration: int | None = None
    has_tag: bool = False


NO_TAG = Tag()


def parse_tag(text: str | None) -> Tag:
    """
    Parse the first tag found in text.

    Values are returned as written; range clamping happens at merge time.
    """
    if not text:
        return NO_TAG

    match = TAG_PATTERN.search(text)
    if not match:
        return NO_TAG

    urgency, importance, enjoyment, duration = (int(g) for g in match.groups())
    return Tag(
        urgency=urgency,
        importance=importance,
        enjoyment=enjoyment,
        duration=duration,
        has_tag=True,
    )


def find_tag(*texts: str | None) -> Tag:
    """Return the tag from the first text that carries one."""
    for text in texts:
        tag = parse_tag(text)
        if tag.has_tag:
            return tag
    return NO_TAG
