"""
Complete-tag scanner

Finds every settled directive tag in a buffer, in either spelling:

    <juice-component type="project-card" projectId="1" />
    <component type="project-card" projectId="1" />

A tag closes at the first '/>' after its opener. A JSON attribute holding a
literal '/>' therefore ends the tag early; the heuristic is kept because
tightening it would change which inputs are accepted.
"""

import re
from functools import lru_cache
from typing import Iterator, List, Optional, Pattern, Tuple

from ..config import AppSettings, appsettings
from ..models.directives import Directive, TextSegment, ComponentSegment, Segment
from ..models.parser import TagMatch
from .attributes import attributes_lex
from .log import LOG


@lru_cache(maxsize=None)
def patterns_compile(long_tag: str, short_tag: str) -> Tuple[Pattern[str], Pattern[str]]:
    """
    Build the tag and opener patterns for a pair of tag names

    Returns:
        (complete tag pattern, opener pattern). The opener must be followed
        by whitespace or end of buffer so '<componentX' is not an opener.
    """
    names = '|'.join(re.escape(name) for name in (long_tag, short_tag))
    tag = re.compile(rf'<(?:{names})\s+(.*?)\s*/>', re.DOTALL)
    opener = re.compile(rf'<(?:{names})(?=\s|\Z)')
    return tag, opener


def tagPattern_get(settings: AppSettings) -> Pattern[str]:
    """Compiled complete-tag pattern for the configured tag names"""
    return patterns_compile(settings.long_tag, settings.short_tag)[0]


def openerPattern_get(settings: AppSettings) -> Pattern[str]:
    """Compiled opener pattern for the configured tag names"""
    return patterns_compile(settings.long_tag, settings.short_tag)[1]


def tags_scan(text: str, settings: Optional[AppSettings] = None) -> Iterator[TagMatch]:
    """
    Yield every settled tag in text, left to right

    Args:
        text: Buffer to scan
        settings: Tag names; defaults to the application settings

    Yields:
        TagMatch with span, attribute fragment and raw tag text
    """
    settings = settings or appsettings
    for match in tagPattern_get(settings).finditer(text):
        yield TagMatch(
            start=match.start(),
            end=match.end(),
            fragment=match.group(1),
            raw=match.group(0),
        )


def directive_fromTag(tag: TagMatch, settings: Optional[AppSettings] = None) -> Directive:
    """
    Decode a settled tag into a non-streaming Directive

    The type attribute is pulled out of the attribute map; a tag without one
    gets the unknown sentinel type.
    """
    settings = settings or appsettings
    attributes = attributes_lex(tag.fragment)
    directive_type = attributes.pop('type', None) or settings.unknown_type
    return Directive(type=directive_type, attributes=attributes, raw=tag.raw)


def settled_scan(text: str, settings: Optional[AppSettings] = None) -> List[Segment]:
    """
    Split a buffer with no unterminated tail into text and component segments

    Text between tags is kept verbatim. Whitespace-only runs are dropped, so
    the result is empty for a buffer holding nothing but whitespace.

    Args:
        text: Settled buffer (or settled prefix of a streaming buffer)
        settings: Tag names and sentinels

    Returns:
        Segments in source order

    Example:
        'Hi <component type="a" />\\n' ->
            [TextSegment("Hi "), ComponentSegment(Directive(type="a", ...))]
    """
    settings = settings or appsettings
    segments: List[Segment] = []
    last_index = 0

    for tag in tags_scan(text, settings):
        before = text[last_index:tag.start]
        if before.strip():
            segments.append(TextSegment(content=before))

        directive = directive_fromTag(tag, settings)
        LOG(f"Tag at {tag.start}..{tag.end}: type={directive.type}", level=3)
        segments.append(ComponentSegment(directive=directive))
        last_index = tag.end

    after = text[last_index:]
    if after.strip():
        segments.append(TextSegment(content=after))

    return segments


def directives_extract(text: str, settings: Optional[AppSettings] = None) -> List[Directive]:
    """
    Every settled directive in text, without the surrounding prose

    Example:
        'a <component type="x" /> b <juice-component type="y" />' ->
            [Directive(type="x", ...), Directive(type="y", ...)]
    """
    return [directive_fromTag(tag, settings) for tag in tags_scan(text, settings)]
