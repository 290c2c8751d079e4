"""
Models package for chattags

Contains data structures and type definitions for the parser and the CLI.
"""

from .state import ProgramState, pipeline
from .directives import Directive, TextSegment, ComponentSegment, Segment, Document
from .parser import TagMatch, PartialTag
from .placeholders import PlaceholderSpec, ComponentCategory

__all__ = [
    "ProgramState",
    "pipeline",
    "Directive",
    "TextSegment",
    "ComponentSegment",
    "Segment",
    "Document",
    "TagMatch",
    "PartialTag",
    "PlaceholderSpec",
    "ComponentCategory",
]
