"""
chattags - Incremental parser for component directives in chat replies

Turns streaming assistant text into ordered text and component segments.
"""

__version__ = "1.0.0"

from .parser import Parser, document_parse, document_parseCached
from .scanner import directives_extract
from .placeholders import PlaceholderRegistry, placeholderRegistry, placeholders_render
from .preview import document_preview
from .log import LOG, logger_configure, state_connectToLogger

__all__ = [
    "Parser",
    "document_parse",
    "document_parseCached",
    "directives_extract",
    "PlaceholderRegistry",
    "placeholderRegistry",
    "placeholders_render",
    "document_preview",
    "LOG",
    "logger_configure",
    "state_connectToLogger",
    "__version__",
]
