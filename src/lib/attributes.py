r"""
Attribute lexer for directive tags

Extracts name="value" and name='value' pairs from the attribute text of a
directive tag.

Double-quoted values may not contain an unescaped '"'. Single-quoted values
carry embedded JSON, which routinely holds apostrophes (don't) and raw '"'
characters, so a single-quoted value does not end at the first quote: it ends
at the first quote that is followed by another attribute (\w+=), by the tag
closer, or by the end of the fragment.

Double-quoted pairs are collected first and single-quoted pairs second; when
a name appears in both forms the single-quoted value wins.

Example:
    >>> attributes_lex('type="note-card" note=\'What\\\'s up\'')
    {'type': 'note-card', 'note': "What's up"}
"""

import re
from typing import Dict, Optional

DOUBLE_QUOTED = re.compile(r'(\w+)="((?:[^"\\]|\\.)*)"', re.DOTALL)

SINGLE_QUOTED = re.compile(r"(\w+)='(.*?)'(?=\s+\w+=|\s*/>|\s*\Z)", re.DOTALL)

# Stops at the next attribute or the closer only (a buffer cut between '/' and
# '>' counts); an unterminated tag has no trustworthy end of fragment
SINGLE_QUOTED_CLOSED = r"(?<![\w-]){name}='(.*?)'(?=\s+\w+=|\s*/(?:>|\Z))"

ESCAPE = re.compile(r"\\(['\"\\])")


def value_unescape(value: str) -> str:
    r"""
    Undo backslash escaping of quotes and backslashes in one pass

    \' -> '   \" -> "   \\ -> \

    Example:
        >>> value_unescape(r'say \"hi\" and \\o/')
        'say "hi" and \\o/'
    """
    return ESCAPE.sub(r"\1", value)


def doubleQuoted_lex(fragment: str) -> Dict[str, str]:
    """Every complete name="value" pair in fragment, unescaped"""
    return {m.group(1): value_unescape(m.group(2)) for m in DOUBLE_QUOTED.finditer(fragment)}


def singleQuoted_lex(fragment: str) -> Dict[str, str]:
    """Every complete name='value' pair in fragment, unescaped"""
    return {m.group(1): value_unescape(m.group(2)) for m in SINGLE_QUOTED.finditer(fragment)}


def attributes_lex(fragment: str) -> Dict[str, str]:
    """
    Lex an attribute fragment into a name -> value mapping

    Attributes the patterns cannot match (unquoted values, mismatched quote
    styles) are dropped.

    Args:
        fragment: Text between the tag name and its closing '/>'

    Returns:
        Mapping of attribute name to unescaped value, double-quoted pairs
        first, single-quoted pairs after (overriding on name clashes)

    Example:
        >>> attributes_lex('type="options-picker" groups=\\'[{"id": "a"}]\\'')
        {'type': 'options-picker', 'groups': '[{"id": "a"}]'}
    """
    attributes = doubleQuoted_lex(fragment)
    attributes.update(singleQuoted_lex(fragment))
    return attributes


def closedSingleQuoted_find(fragment: str, name: str) -> Optional[str]:
    """
    Find a single-quoted attribute whose closing quote has provably arrived

    Unlike the general pattern, end of fragment does not count as a
    terminator, so a value cut off mid-stream is never mistaken for a whole
    one. A quote followed by the first half of the closer ("' /") does.

    Returns:
        The unescaped value, or None
    """
    match = re.search(SINGLE_QUOTED_CLOSED.format(name=re.escape(name)), fragment, re.DOTALL)
    if match is None:
        return None
    return value_unescape(match.group(1))
