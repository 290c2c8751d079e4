"""
Directive and document models

Defines the decoded form of an embedded component tag and the ordered
segment list (Document) that the parser produces for a message buffer.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Union


@dataclass
class Directive:
    """
    A decoded component instruction

    Produced for every <juice-component .../> (or <component .../>) tag in
    assistant text, and for the unterminated tag at the end of a buffer that
    is still streaming.

    Attributes:
        type: Logical component kind (e.g. "project-card"); "unknown" when
              the tag declared none
        attributes: Every attribute except type, as raw strings. JSON-valued
                    attributes are left unparsed.
        raw: Exact source text the directive was decoded from
        streaming: True only for directives decoded from an unterminated tag

    Example:
        For '<juice-component type="project-card" projectId="1" />':
        Directive(
            type="project-card",
            attributes={"projectId": "1"},
            raw='<juice-component type="project-card" projectId="1" />',
            streaming=False
        )
    """
    type: str
    attributes: Dict[str, str]
    raw: str
    streaming: bool = False


@dataclass
class TextSegment:
    """Literal text between directives, kept verbatim"""
    content: str


@dataclass
class ComponentSegment:
    """A directive in its position within the message"""
    directive: Directive


Segment = Union[TextSegment, ComponentSegment]


@dataclass
class Document:
    """
    Ordered, non-empty list of segments for one message buffer

    A Document is rebuilt from scratch on every parse; callers rendering a
    stream re-parse the whole accumulated buffer and replace what they showed.

    Attributes:
        segments: Text and component segments in source order
    """
    segments: List[Segment] = field(default_factory=list)

    def components(self) -> List[Directive]:
        """All directives in source order"""
        return [s.directive for s in self.segments if isinstance(s, ComponentSegment)]

    def streamingComponent(self) -> Optional[Directive]:
        """The trailing still-arriving directive, if the buffer ends mid-tag"""
        if not self.segments:
            return None
        last = self.segments[-1]
        if isinstance(last, ComponentSegment) and last.directive.streaming:
            return last.directive
        return None

    def asDict(self) -> Dict[str, Any]:
        """
        JSON-ready form, tagging each segment with its kind

        Example:
            {"segments": [
                {"kind": "text", "content": "Hello "},
                {"kind": "component", "directive": {"type": "project-card", ...}}
            ]}
        """
        out: List[Dict[str, Any]] = []
        for segment in self.segments:
            if isinstance(segment, ComponentSegment):
                out.append({"kind": "component", "directive": asdict(segment.directive)})
            else:
                out.append({"kind": "text", "content": segment.content})
        return {"segments": out}
