"""
chattags - Incremental parser for component directives in chat replies

Assistant replies mix prose with <juice-component .../> tags that the chat UI
renders as widgets. chattags parses a growing reply buffer into text and
component segments on every streamed chunk.
"""

__version__ = "1.0.0"

from .lib import (
    Parser,
    document_parse,
    document_parseCached,
    directives_extract,
    PlaceholderRegistry,
    placeholders_render,
    document_preview,
    LOG,
    state_connectToLogger,
)
from .models import Directive, TextSegment, ComponentSegment, Document

__all__ = [
    "Parser",
    "document_parse",
    "document_parseCached",
    "directives_extract",
    "PlaceholderRegistry",
    "placeholders_render",
    "document_preview",
    "Directive",
    "TextSegment",
    "ComponentSegment",
    "Document",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
