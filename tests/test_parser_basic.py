"""
Basic parser tests - settled messages

Tests empty input, plain text, single and multiple directives, both tag
spellings and attribute decoding through the full parser.
"""

from chattags.config import AppSettings
from chattags.lib.parser import Parser, document_parse, document_parseCached
from chattags.models import Directive, Document, TextSegment, ComponentSegment


class TestEmptyAndSimple:
    """Test the never-empty fallback and plain text"""

    def test_empty_source(self):
        """Empty string -> one empty text segment"""
        document = Parser("").parse()
        assert document.segments == [TextSegment(content="")]

    def test_whitespace_only(self):
        """Whitespace is returned unmodified as the only segment"""
        document = Parser("   \n\n  \t  ").parse()
        assert document.segments == [TextSegment(content="   \n\n  \t  ")]

    def test_plain_text(self):
        """No tags -> the whole input as one segment"""
        document = Parser("Hello there,\nhow can I help?").parse()
        assert document.segments == [TextSegment(content="Hello there,\nhow can I help?")]

    def test_only_a_tag(self):
        """A message that is nothing but a tag"""
        document = Parser('<component type="connect-account" />').parse()

        assert len(document.segments) == 1
        assert isinstance(document.segments[0], ComponentSegment)
        assert document.segments[0].directive.type == "connect-account"


class TestComponentTagFormats:
    """Test both spellings and attribute styles"""

    def test_juice_component_tag(self):
        """Text then a project card"""
        content = 'Hello <juice-component type="project-card" projectId="123" chainId="1" />'
        document = Parser(content).parse()

        assert len(document.segments) == 2
        assert isinstance(document.segments[0], TextSegment)
        assert document.segments[0].content.strip() == "Hello"
        assert document.segments[1] == ComponentSegment(directive=Directive(
            type="project-card",
            attributes={"projectId": "123", "chainId": "1"},
            raw='<juice-component type="project-card" projectId="123" chainId="1" />',
            streaming=False,
        ))

    def test_short_component_tag(self):
        """The short spelling decodes the same way"""
        content = 'Hello <component type="project-card" projectId="123" chainId="1" />'
        document = Parser(content).parse()

        assert len(document.segments) == 2
        directive = document.segments[1].directive
        assert directive.type == "project-card"
        assert directive.attributes == {"projectId": "123", "chainId": "1"}
        assert directive.raw == '<component type="project-card" projectId="123" chainId="1" />'

    def test_multiline_tag_with_json(self):
        """Multi-line JSON parameters inside a tag"""
        content = """I'll create a project. <component type="transaction-preview" action="launchProject" parameters='{
  "projectUri": "ipfs://test",
  "memo": "Test project"
}' explanation="Launch project" />

This will create your project."""
        document = Parser(content).parse()

        assert len(document.segments) == 3
        assert isinstance(document.segments[0], TextSegment)
        assert document.segments[1].directive.type == "transaction-preview"
        assert document.segments[1].directive.attributes["explanation"] == "Launch project"
        assert '"memo": "Test project"' in document.segments[1].directive.attributes["parameters"]
        assert isinstance(document.segments[2], TextSegment)

    def test_nested_json(self):
        """Single-quoted JSON with nested objects is kept as a string"""
        content = '<juice-component type="transaction-preview" action="launchProject" parameters=\'{"rulesetConfigurations": [{"mustStartAtOrAfter": 0}]}\' />'
        document = Parser(content).parse()

        assert len(document.segments) == 1
        assert document.segments[0].directive.attributes["parameters"] == '{"rulesetConfigurations": [{"mustStartAtOrAfter": 0}]}'

    def test_gt_inside_json(self):
        """An apostrophe followed by '>' inside JSON keeps the whole value"""
        content = '<component type="transaction-preview" parameters=\'{"memo": "it\'>s"}\' />'
        document = Parser(content).parse()

        assert len(document.segments) == 1
        assert document.segments[0].directive.attributes == {"parameters": '{"memo": "it\'>s"}'}

    def test_mixed_spellings_in_order(self):
        """Both spellings in one message, left to right"""
        content = 'First <juice-component type="project-card" projectId="1" /> then <component type="balance-chart" projectId="2" /> done'
        document = Parser(content).parse()

        assert [d.type for d in document.components()] == ["project-card", "balance-chart"]
        assert len(document.segments) == 5

    def test_escaped_apostrophe(self):
        r"""note='What\'s up' decodes to What's up"""
        document = Parser(r"<component type='note-card' note='What\'s up' />").parse()
        directive = document.segments[0].directive

        assert directive.type == "note-card"
        assert directive.attributes == {"note": "What's up"}

    def test_type_never_an_attribute(self):
        """type is lifted out even when single-quoted"""
        document = Parser("<component type='price-chart' range='30d' />").parse()
        directive = document.segments[0].directive

        assert directive.type == "price-chart"
        assert "type" not in directive.attributes

    def test_untyped_tag(self):
        """Tag without type -> unknown"""
        document = Parser('See <component projectId="1" />').parse()
        assert document.segments[1].directive.type == "unknown"


class TestEntryPoints:
    """Test the functional and cached forms"""

    def test_document_parse_matches_parser(self):
        """document_parse is Parser(...).parse()"""
        content = 'Hi <component type="a" /> there'
        assert document_parse(content) == Parser(content).parse()

    def test_cached_returns_same_document(self):
        """Repeated buffers hit the cache"""
        content = 'Cached <component type="a" /> message'
        first = document_parseCached(content)
        second = document_parseCached(content)

        assert first is second
        assert first == document_parse(content)

    def test_custom_tag_names(self):
        """Tag spellings come from settings"""
        settings = AppSettings(long_tag="ui-widget", short_tag="widget")
        document = Parser('a <widget type="x" /> b <component type="y" />', settings).parse()

        assert [d.type for d in document.components()] == ["x"]
        assert document.segments[-1] == TextSegment(content=' b <component type="y" />')


class TestDocumentHelpers:
    """Test Document convenience methods"""

    def test_as_dict(self):
        """JSON-ready form tags segments by kind"""
        document = Parser('Hi <component type="a" x="1" />').parse()

        assert document.asDict() == {"segments": [
            {"kind": "text", "content": "Hi "},
            {"kind": "component", "directive": {
                "type": "a", "attributes": {"x": "1"},
                "raw": '<component type="a" x="1" />', "streaming": False,
            }},
        ]}

    def test_streaming_component_none_when_settled(self):
        """No trailing streaming directive in a finished message"""
        assert Parser('Hi <component type="a" />').parse().streamingComponent() is None

    def test_empty_document(self):
        """Helper is safe on a Document with no segments"""
        assert Document().streamingComponent() is None
        assert Document().components() == []
