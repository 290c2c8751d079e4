"""
Recovery of structure from truncated JSON

A streaming options-picker arrives with its groups attribute cut off at an
arbitrary character, e.g.:

    [{"id": "chain", "label": "Chain", "options": [{"value": "1", "label": "Eth

These helpers pull out the objects that are already complete, plus whatever
fields of the trailing incomplete group have arrived, so a rendering layer
can draw the picker while it streams.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

GROUP_STRING_FIELDS = ('id', 'label', 'type')


@dataclass
class PartialGroups:
    """
    Result of parsing a possibly truncated options-picker groups value

    Attributes:
        groups: Complete groups, then at most one partial group flagged with
                _isPartial=True
        isComplete: The outer array has closed
        isInvalid: The value can never become a groups array (not an array,
                   or valid JSON of the wrong shape)
    """
    groups: List[Dict[str, Any]] = field(default_factory=list)
    isComplete: bool = False
    isInvalid: bool = False


def completeObjects_extract(json_str: str, start: int) -> Tuple[List[Any], int, bool]:
    """
    Collect complete top-level objects from an array body

    Scans from start (just inside an array's '[') and decodes each object
    whose closing brace has arrived. Brackets and braces inside strings are
    ignored; objects that fail to decode are skipped.

    Args:
        json_str: JSON text, possibly cut off
        start: Index of the first character after the opening '['

    Returns:
        (objects, end index, whether the array's ']' was reached). The end
        index is the position of ']' for a closed array, otherwise the
        position just past the last complete object.

    Example:
        >>> completeObjects_extract('[{"a": 1}, {"b": "x}', 1)
        ([{'a': 1}], 9, False)
    """
    objects: List[Any] = []
    depth = 0
    in_string = False
    escape_next = False
    object_start = -1
    last_end = start

    for i in range(start, len(json_str)):
        char = json_str[i]

        if escape_next:
            escape_next = False
            continue
        if char == '\\' and in_string:
            escape_next = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue

        if char == '{':
            if depth == 0 and object_start == -1:
                object_start = i
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0 and object_start != -1:
                try:
                    objects.append(json.loads(json_str[object_start:i + 1]))
                except json.JSONDecodeError:
                    pass
                object_start = -1
                last_end = i + 1
        elif char == '[':
            depth += 1
        elif char == ']':
            if depth == 0:
                return objects, i, True
            depth -= 1

    return objects, last_end, False


def partialGroup_extract(partial_str: str) -> Dict[str, Any]:
    """
    Fields of an incomplete group object that have fully arrived

    Returns:
        Dict flagged with _isPartial=True, holding any of id, label, type,
        multiSelect, expectedOptionCount and the complete options so far
    """
    group: Dict[str, Any] = {'_isPartial': True}

    for name in GROUP_STRING_FIELDS:
        match = re.search(rf'"{name}"\s*:\s*"([^"]*)"', partial_str)
        if match:
            group[name] = match.group(1)

    multi = re.search(r'"multiSelect"\s*:\s*(true|false)', partial_str)
    if multi:
        group['multiSelect'] = multi.group(1) == 'true'

    expected = re.search(r'"expectedOptionCount"\s*:\s*(\d+)', partial_str)
    if expected:
        group['expectedOptionCount'] = int(expected.group(1))

    options_at = partial_str.find('"options"')
    if options_at != -1:
        array_at = partial_str.find('[', options_at)
        if array_at != -1:
            options, _, _ = completeObjects_extract(partial_str, array_at + 1)
            if options or 'id' in group:
                group['options'] = options

    return group


def optionsGroups_parsePartial(json_str: str) -> PartialGroups:
    """
    Parse an options-picker groups value that may still be streaming

    A full parse is tried first. Failing that, the complete groups are
    recovered and, if the array is still open, one partial group is
    appended when at least its id or label has arrived.

    Args:
        json_str: Raw groups attribute value

    Returns:
        PartialGroups

    Example:
        '[{"id": "a", "label": "A", "options": []}, {"id": "b", "lab'
        -> PartialGroups(
               groups=[{"id": "a", ...}, {"_isPartial": True, "id": "b"}],
               isComplete=False, isInvalid=False)
    """
    try:
        parsed = json.loads(json_str)
    except json.JSONDecodeError:
        pass
    else:
        if isinstance(parsed, list):
            return PartialGroups(groups=parsed, isComplete=True)
        return PartialGroups(isComplete=True, isInvalid=True)

    trimmed = json_str.strip()
    if not trimmed.startswith('['):
        return PartialGroups(isComplete=True, isInvalid=True)
    if len(trimmed) < 3:
        return PartialGroups()

    array_at = json_str.index('[')
    groups, end, closed = completeObjects_extract(json_str, array_at + 1)

    if not closed:
        partial_start = json_str.find('{', end)
        if partial_start != -1:
            group = partialGroup_extract(json_str[partial_start:])
            if 'id' in group or 'label' in group:
                groups.append(group)

    return PartialGroups(groups=groups, isComplete=closed)
