"""
Partial-tag detection and progressive decoding

While a reply streams in, the buffer may end inside a directive tag. The
detector finds that unterminated tail; the decoder recovers what it safely
can from it.

Only whitelisted types (AppSettings.progressive_types) are decoded from an
unterminated tag. For those, the designated JSON attribute is captured even
before its closing quote arrives and the directive is flagged as truncated,
so the UI can start drawing (e.g. option groups) early. Every other type is
withheld until the tag closes and the caller shows a loading placeholder.
"""

import re
from typing import Optional

from ..config import AppSettings, appsettings
from ..models.directives import Directive
from ..models.parser import PartialTag
from .attributes import doubleQuoted_lex, singleQuoted_lex, closedSingleQuoted_find, value_unescape
from .scanner import openerPattern_get
from .log import LOG

TYPE_ATTRIBUTE = re.compile(r'(?<![\w-])type="([^"]+)"')

CLOSER = '/>'


def partialTag_find(text: str, settings: Optional[AppSettings] = None) -> Optional[PartialTag]:
    """
    Find an unterminated directive tag at the end of text

    The last opener of either spelling is located; if no '/>' follows it the
    tag is still arriving.

    Args:
        text: Full accumulated buffer
        settings: Tag names; defaults to the application settings

    Returns:
        PartialTag from the opener to end of buffer, or None when the buffer
        holds no opener or its last tag is already closed

    Example:
        >>> partialTag_find('Hi <component type="a" />') is None
        True
        >>> partialTag_find('Hi <component type="a').start
        3
    """
    settings = settings or appsettings
    last = None
    for last in openerPattern_get(settings).finditer(text):
        pass

    if last is None:
        return None

    start = last.start()
    if text.find(CLOSER, start) != -1:
        return None

    LOG(f"Unterminated tag from index {start}", level=3)
    return PartialTag(start=start, raw=text[start:])


def jsonAttribute_capture(raw: str, name: str) -> Optional[str]:
    """
    Capture a JSON-bearing single-quoted attribute from an unterminated tag

    Returns:
        The value from its opening quote to end of buffer, or None if the
        attribute has not started yet
    """
    match = re.search(rf"(?<![\w-]){re.escape(name)}='(.*)\Z", raw, re.DOTALL)
    if match is None:
        return None
    return value_unescape(match.group(1))


def partialTag_decode(partial: PartialTag, settings: Optional[AppSettings] = None) -> Optional[Directive]:
    """
    Decode an unterminated tag into a streaming Directive

    Decoding fails (None) when the type attribute has not fully arrived or
    the type is not whitelisted for progressive rendering.

    For whitelisted types:
        1. complete double-quoted attributes are taken as-is
        2. the designated JSON attribute is taken whole if its closing quote
           has arrived, otherwise from its opening quote to end of buffer,
           with the truncation marker set
        3. other single-quoted attributes fill in without overwriting

    Args:
        partial: Unterminated tag from partialTag_find()
        settings: Whitelist and sentinel names

    Returns:
        Directive with streaming=True and raw set to the partial tag text,
        or None

    Example:
        '<component type="transaction-preview" action="pay" parameters=\\'{"a": "b'
        -> Directive(
               type="transaction-preview",
               attributes={"action": "pay", "parameters": '{"a": "b',
                           "_isTruncated": "true"},
               streaming=True)
    """
    settings = settings or appsettings
    raw = partial.raw

    type_match = TYPE_ATTRIBUTE.search(raw)
    if type_match is None:
        return None

    directive_type = type_match.group(1)
    if not settings.progressive_is(directive_type):
        LOG(f"Withholding partial '{directive_type}' (not progressive)", level=3)
        return None
    json_attribute = settings.jsonAttribute_get(directive_type)

    attributes = doubleQuoted_lex(raw)
    attributes.pop('type', None)

    value = closedSingleQuoted_find(raw, json_attribute)
    if value is not None:
        attributes[json_attribute] = value
    else:
        value = jsonAttribute_capture(raw, json_attribute)
        if value is not None:
            attributes[json_attribute] = value
            attributes[settings.truncated_attribute] = settings.truncated_value

    for name, single_value in singleQuoted_lex(raw).items():
        if name != 'type':
            attributes.setdefault(name, single_value)

    LOG(f"Progressive '{directive_type}' with {len(attributes)} attributes", level=3)
    return Directive(type=directive_type, attributes=attributes, raw=raw, streaming=True)


def loading_make(partial: PartialTag, settings: Optional[AppSettings] = None) -> Directive:
    """
    Loading placeholder for an unterminated tag that cannot be decoded

    Carries the attempted type under the loading attribute when the type has
    arrived, so the UI can pick a matching shimmer.

    Example:
        '<component type="note-card" ' ->
            Directive(type="_loading", attributes={"loadingType": "note-card"},
                      streaming=True)
    """
    settings = settings or appsettings
    attributes = {}
    type_match = TYPE_ATTRIBUTE.search(partial.raw)
    if type_match is not None:
        attributes[settings.loading_attribute] = type_match.group(1)
    return Directive(type=settings.loading_type, attributes=attributes, raw=partial.raw, streaming=True)
