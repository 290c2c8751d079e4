"""
Scanner-specific data models

Type-safe structures for the tag scanner and the partial-tag detector.
"""

from dataclasses import dataclass


@dataclass
class TagMatch:
    """
    A settled directive tag found in source text

    Returned by tags_scan() for every tag whose closing '/>' has arrived.

    Attributes:
        start: Index of the '<' that opens the tag
        end: Index just past the closing '/>' (span is [start, end))
        fragment: Attribute text between the tag name and '/>'
        raw: The full matched tag text, delimiters included

    Example:
        For source 'Hi <component type="x" />':
        TagMatch(start=3, end=25, fragment='type="x"', raw='<component type="x" />')
    """
    start: int
    end: int
    fragment: str
    raw: str


@dataclass
class PartialTag:
    """
    An unterminated directive tag at the end of a buffer

    Returned by partialTag_find() when the last tag opener in the buffer has
    no '/>' after it.

    Attributes:
        start: Index of the '<' that opens the unterminated tag
        raw: Buffer text from start to the end of the buffer

    Example:
        For source 'Wait <component type="options-picker" gro':
        PartialTag(start=5, raw='<component type="options-picker" gro')
    """
    start: int
    raw: str
