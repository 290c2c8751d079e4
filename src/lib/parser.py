"""
Parser for assistant messages with embedded component tags

Transforms a (possibly still streaming) message buffer into a Document: an
ordered list of text and component segments.

The parser operates in three phases:
1. Detection: find an unterminated tag at the end of the buffer, if any
2. Scanning: split the settled prefix into text and settled directives
3. Assembly: append the decoded (or loading) tail and enforce the
   never-empty invariant

Key features:
- Both tag spellings (<juice-component .../> and <component .../>)
- Single-quoted JSON attributes that may contain quotes and apostrophes
- Progressive decoding of whitelisted types while their tag is arriving
- No state between calls: callers re-parse the whole buffer on every chunk

Example:
    >>> document = Parser('Hello <juice-component type="project-card" projectId="1" />').parse()
    >>> [type(s).__name__ for s in document.segments]
    ['TextSegment', 'ComponentSegment']
    >>> document.segments[1].directive.type
    'project-card'
"""

from functools import lru_cache
from typing import Optional

from ..config import AppSettings, appsettings
from ..models.directives import Document, TextSegment, ComponentSegment
from .scanner import settled_scan
from .partial import partialTag_find, partialTag_decode, loading_make
from .log import LOG


class Parser:
    """
    Parser for one message buffer

    Holds only its input; parse() is a pure function of source and settings,
    so calling it twice returns equal Documents.
    """

    def __init__(self, source: str, settings: Optional[AppSettings] = None):
        """
        Initialize parser with a message buffer

        Args:
            source: Full accumulated message text (complete or streaming)
            settings: Tag names, sentinels and progressive whitelist;
                      defaults to the application settings
        """
        self.source = source
        self.settings = settings or appsettings

    def parse(self) -> Document:
        """
        Parse the buffer into a Document

        Returns:
            Document with at least one segment. At most one segment is a
            streaming component, and only as the last segment.

        Example:
            >>> Parser('Creating <component type="note-card" ').parse().segments[-1].directive.type
            '_loading'
        """
        partial = partialTag_find(self.source, self.settings)
        settled = self.source if partial is None else self.source[:partial.start]

        segments = settled_scan(settled, self.settings)

        if partial is not None:
            directive = partialTag_decode(partial, self.settings)
            if directive is None:
                directive = loading_make(partial, self.settings)
            segments.append(ComponentSegment(directive=directive))

        if not segments:
            segments.append(TextSegment(content=self.source))

        LOG(f"Parsed {len(self.source)} chars into {len(segments)} segments", level=3)
        return Document(segments=segments)


def document_parse(text: str, settings: Optional[AppSettings] = None) -> Document:
    """
    Parse a message buffer into a Document

    Functional form of Parser(text, settings).parse().
    """
    return Parser(text, settings).parse()


@lru_cache(maxsize=appsettings.parse_cache_size)
def document_parseCached(text: str) -> Document:
    """
    Memoized document_parse() under the application settings

    For UIs re-rendering the same buffer repeatedly. The returned Document
    is shared between callers and must not be mutated.
    """
    return document_parse(text)
