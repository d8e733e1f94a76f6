"""Format parser for field templates.

A format is literal HTML with ``{token}`` placeholders. Parsing splits it into
literal and token segments and, when a tag is given, records the quoted
attributes written on the first opening element of that tag.
"""

from __future__ import annotations

import re
from functools import lru_cache

from formsmith.templates.models import FormatSegment, InlineAttribute, ParsedFormat

_TOKEN_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")
_ATTRIBUTE_RE = re.compile(r'([\w:-]+)="([^"]*)"')
_OTHER_TOKEN_RE = re.compile(r"[^\s>]+")
_WHITESPACE_RE = re.compile(r"\s*")


@lru_cache(maxsize=512)
def parse_format(text: str, tag: str | None = None) -> ParsedFormat:
    """Parse a format string into segments and inline attributes.

    Rules:
    - Tokens are ``{name}`` where name is an identifier; other braces are literal.
    - Inline attributes are collected from the first ``<tag`` element only, and
      only when that element is closed by ``>``.
    - Unquoted, single-quoted and bare attributes are skipped, not recorded.

    Args:
        text: Format string.
        tag: Element tag whose opening element is scanned for attributes.

    Returns:
        ParsedFormat shared between calls with the same arguments.
    """

    segments, tokens = _split_segments(text)
    inline_attributes = _scan_opening_tag(text, tag) if tag else ()
    return ParsedFormat(
        text=text,
        tag=tag,
        segments=segments,
        tokens=tokens,
        inline_attributes=inline_attributes,
    )


def _split_segments(text: str) -> tuple[tuple[FormatSegment, ...], tuple[str, ...]]:
    segments: list[FormatSegment] = []
    tokens: list[str] = []
    cursor = 0

    for match in _TOKEN_RE.finditer(text):
        if match.start() > cursor:
            segments.append(FormatSegment(kind="literal", text=text[cursor : match.start()]))
        name = match.group(1)
        segments.append(FormatSegment(kind="token", text=match.group(0), name=name))
        if name not in tokens:
            tokens.append(name)
        cursor = match.end()

    if cursor < len(text):
        segments.append(FormatSegment(kind="literal", text=text[cursor:]))

    return tuple(segments), tuple(tokens)


def _scan_opening_tag(text: str, tag: str) -> tuple[InlineAttribute, ...]:
    opening = re.search(rf"<{re.escape(tag)}(?=[\s/>])", text)
    if opening is None:
        return ()

    attributes: list[InlineAttribute] = []
    position = opening.end()
    length = len(text)

    while True:
        position = _WHITESPACE_RE.match(text, position).end()
        if position >= length:
            # Element never closed.
            return ()
        if text[position] == ">":
            return tuple(attributes)

        attribute = _ATTRIBUTE_RE.match(text, position)
        if attribute is not None:
            attributes.append(
                InlineAttribute(
                    name=attribute.group(1),
                    value=attribute.group(2),
                    capture=attribute.group(0),
                    start=attribute.start(),
                    end=attribute.end(),
                )
            )
            position = attribute.end()
            continue

        other = _OTHER_TOKEN_RE.match(text, position)
        position = other.end() if other is not None else position + 1
