"""
Custom Pygments lexer for chat text with embedded component tags

Highlights <juice-component .../> and <component .../> tags inside
otherwise free-form assistant text, for inspecting transcripts.

Token types:
- Text: Prose around the tags
- Punctuation: '<' and '/>'
- Name.Tag: Tag names
- Name.Attribute: Attribute names
- String.Double: Double-quoted values
- String.Single: Single-quoted (JSON) values
- String.Escape: Backslash escapes inside values
"""

import re
from functools import lru_cache
from typing import Optional

from pygments.lexer import RegexLexer, bygroups
from pygments.token import Text, Punctuation, Name, String, Operator, Whitespace

from ..config import AppSettings, appsettings


def tokens_make(long_tag: str, short_tag: str) -> dict:
    """Token state table recognizing the given tag names"""
    names = '|'.join(re.escape(name) for name in (long_tag, short_tag))
    return {
        'root': [
            (rf'(<)({names})(?=\s|$)', bygroups(Punctuation, Name.Tag), 'tag'),
            (r'[^<]+', Text),
            (r'<', Text),
        ],

        'tag': [
            (r'\s+', Whitespace),
            (r'/>', Punctuation, '#pop'),
            (r'(\w+)(=)(")', bygroups(Name.Attribute, Operator, String.Double), 'double'),
            (r"(\w+)(=)(')", bygroups(Name.Attribute, Operator, String.Single), 'single'),
            # Unquoted or malformed attribute text
            (r'[^\s/]+', Text),
            (r'/', Text),
        ],

        'double': [
            (r'\\.', String.Escape),
            (r'"', String.Double, '#pop'),
            (r'[^"\\]+', String.Double),
        ],

        'single': [
            (r'\\.', String.Escape),
            # A quote closes the value only before another attribute or the closer
            (r"'(?=\s+\w+=|\s*/>)", String.Single, '#pop'),
            (r"[^'\\]+", String.Single),
            (r"'", String.Single),
        ],
    }


class ComponentTagLexer(RegexLexer):
    """
    Lexer for assistant messages with component directives

    Recognizes the default tag names; get_lexer() builds one for other
    settings.

    Example:
        Pay here <component type="project-card" projectId="1" />

    Tokens:
        Pay here → Text
        < → Punctuation
        component → Name.Tag
        type → Name.Attribute
        "project-card" → String.Double
        /> → Punctuation
    """

    name = 'Chat component tags'
    aliases = ['chattags']
    filenames = ['*.chat']

    flags = re.DOTALL

    tokens = tokens_make(appsettings.long_tag, appsettings.short_tag)


@lru_cache(maxsize=None)
def lexerClass_make(long_tag: str, short_tag: str) -> type:
    """ComponentTagLexer subclass for a pair of tag names, built once per pair"""
    if (long_tag, short_tag) == (appsettings.long_tag, appsettings.short_tag):
        return ComponentTagLexer
    return type('ComponentTagLexer', (ComponentTagLexer,), {'tokens': tokens_make(long_tag, short_tag)})


def get_lexer(settings: Optional[AppSettings] = None) -> ComponentTagLexer:
    """
    Get a ComponentTagLexer for the configured tag names

    Args:
        settings: Tag names; defaults to the application settings

    Returns:
        ComponentTagLexer instance ready for use with Pygments
    """
    settings = settings or appsettings
    return lexerClass_make(settings.long_tag, settings.short_tag)()
