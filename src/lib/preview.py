"""
Plain-text preview of a parsed Document

A terminal stand-in for the chat UI's rendering layer, following the same
contract: text is shown verbatim, each component through its placeholder,
an unrecognized type as a visible 'Unknown component: TYPE' notice, and a
still-arriving component in a distinct state.
"""

from typing import List, Optional

from ..config import AppSettings, appsettings
from ..models.directives import Directive, Document, ComponentSegment
from .placeholders import PlaceholderRegistry, placeholderRegistry

STREAMING_SUFFIX = " (still arriving)"


def directive_preview(
    directive: Directive,
    registry: Optional[PlaceholderRegistry] = None,
    settings: Optional[AppSettings] = None,
) -> str:
    """
    One-line preview of a directive

    Example:
        Directive(type="_loading", attributes={"loadingType": "note-card"}, streaming=True)
            -> '[Loading note-card...] (still arriving)'
        Directive(type="mystery", ...) -> 'Unknown component: mystery'
    """
    registry = registry or placeholderRegistry
    settings = settings or appsettings

    if directive.type == settings.loading_type:
        coming = directive.attributes.get(settings.loading_attribute, 'component')
        text = f"[Loading {coming}...]"
    elif registry.known(directive.type):
        text = registry.placeholder_render(directive)
    else:
        text = f"Unknown component: {directive.type}"

    if directive.streaming:
        text += STREAMING_SUFFIX
    return text


def document_preview(
    document: Document,
    registry: Optional[PlaceholderRegistry] = None,
    settings: Optional[AppSettings] = None,
) -> str:
    """Render a Document as plain text, segments joined in order"""
    parts: List[str] = []
    for segment in document.segments:
        if isinstance(segment, ComponentSegment):
            parts.append(directive_preview(segment.directive, registry, settings))
        else:
            parts.append(segment.content)
    return ''.join(parts)
