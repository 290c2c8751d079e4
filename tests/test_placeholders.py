"""
Placeholder export tests

Tests replacing settled tags with bracketed descriptions, the options
summary, the generic fallback and the registry table itself.
"""

import pytest

from chattags.lib.placeholders import (
    PlaceholderRegistry,
    placeholderRegistry,
    placeholders_render,
    generic_make,
    fixed,
)
from chattags.lib.preview import directive_preview, document_preview
from chattags.lib.parser import Parser
from chattags.models import Directive, PlaceholderSpec, ComponentCategory


def directive(directive_type, **attributes):
    return Directive(type=directive_type, attributes=attributes, raw="")


class TestPlaceholdersRender:
    """Test whole-message export"""

    def test_project_card(self):
        """Settled tag replaced, text kept"""
        text = 'Hi <juice-component type="project-card" projectId="1" />'
        assert placeholders_render(text) == "Hi [Project card with payment form]"

    def test_text_on_both_sides(self):
        """Surrounding text is untouched, including its whitespace"""
        text = 'Hello <component type="connect-account" /> world'
        assert placeholders_render(text) == "Hello [Connect account button] world"

    def test_unknown_type(self):
        """Unregistered type -> generic form"""
        assert placeholders_render('<component type="mystery-widget" />') == "[mystery-widget component]"

    def test_missing_type(self):
        """No type -> unknown sentinel in the generic form"""
        assert placeholders_render('<component projectId="1" />') == "[unknown component]"

    def test_several_tags(self):
        """Every settled tag is replaced"""
        text = '<component type="price-chart" /> and <juice-component type="activity-feed" />'
        assert placeholders_render(text) == "[Price chart] and [Activity feed]"

    def test_unterminated_tail_left_alone(self):
        """A tag that never closed is not replaced"""
        text = 'Done <component type="price-chart" /> next <component type="note-card" '
        assert placeholders_render(text) == 'Done [Price chart] next <component type="note-card" '

    def test_plain_text(self):
        """No tags -> unchanged"""
        assert placeholders_render("nothing to replace") == "nothing to replace"


class TestOptionsSummary:
    """Test the options-picker formatter"""

    def test_groups_summary(self):
        """Labels of groups and their options"""
        groups = '[{"id": "chain", "label": "Chain", "options": [{"value": "1", "label": "Ethereum"}, {"value": "10", "label": "Optimism"}]}, {"id": "token", "label": "Token"}]'
        text = f"<component type=\"options-picker\" groups='{groups}' />"
        assert placeholders_render(text) == "[Options: Chain (Ethereum, Optimism) | Token]"

    def test_option_value_when_no_label(self):
        """Falls back to the option value"""
        rendered = placeholderRegistry.placeholder_render(
            directive("options-picker", groups='[{"label": "Size", "options": [{"value": "s"}, {"value": "m"}]}]'))
        assert rendered == "[Options: Size (s, m)]"

    @pytest.mark.parametrize("groups", [
        '[{"id": "chain", "lab',
        'not json',
        '{"id": "chain"}',
        '[]',
    ])
    def test_malformed_falls_back(self, groups):
        """Unusable groups -> generic placeholder"""
        rendered = placeholderRegistry.placeholder_render(directive("options-picker", groups=groups))
        assert rendered == "[options-picker component]"

    def test_missing_groups(self):
        """No groups attribute -> generic placeholder"""
        assert placeholderRegistry.placeholder_render(directive("options-picker")) == "[options-picker component]"

    def test_options_not_a_list(self):
        """A group with malformed options still shows its label"""
        rendered = placeholderRegistry.placeholder_render(
            directive("options-picker", groups='[{"label": "Mode", "options": "fast"}]'))
        assert rendered == "[Options: Mode]"


class TestFormatters:
    """Test attribute-aware formatters"""

    def test_transaction_preview_action(self):
        """Action named when present"""
        rendered = placeholderRegistry.placeholder_render(directive("transaction-preview", action="launchProject"))
        assert rendered == "[Transaction preview: launchProject]"

    def test_transaction_preview_plain(self):
        """No action -> plain label"""
        assert placeholderRegistry.placeholder_render(directive("transaction-preview")) == "[Transaction preview]"

    def test_action_button_label(self):
        """Button shows its own label"""
        assert placeholderRegistry.placeholder_render(directive("action-button", label="Pay now")) == "[Pay now]"
        assert placeholderRegistry.placeholder_render(directive("action-button")) == "[Action button]"

    def test_fixed(self):
        """fixed() ignores attributes"""
        assert fixed("Price chart")({"range": "30d"}) == "[Price chart]"

    def test_generic(self):
        """Generic form for any type"""
        assert generic_make("foo") == "[foo component]"


class TestRegistry:
    """Test the placeholder table"""

    def test_alias(self):
        """connect-wallet is an alias of connect-account"""
        assert placeholderRegistry.spec_get("connect-wallet") is placeholderRegistry.spec_get("connect-account")
        assert placeholderRegistry.placeholder_render(directive("connect-wallet")) == "[Connect account button]"

    def test_known(self):
        """Registered and unregistered types"""
        assert placeholderRegistry.known("project-card")
        assert not placeholderRegistry.known("mystery")
        assert not placeholderRegistry.known("_loading")

    def test_categories(self):
        """Aliases are listed once"""
        wallet = placeholderRegistry.specs_listByCategory(ComponentCategory.WALLET)
        assert [spec.name for spec in wallet] == ["connect-account"]
        assert len(placeholderRegistry.specs_listByCategory(ComponentCategory.FORM)) == 8
        assert len(placeholderRegistry.specs_listByCategory(ComponentCategory.CHART)) == 7

    def test_custom_entry(self):
        """A private registry can add types without touching the shared one"""
        registry = PlaceholderRegistry()
        registry.register(PlaceholderSpec(
            name="weather-card",
            category=ComponentCategory.VISUAL,
            description="Forecast",
            handler=fixed("Weather"),
        ))

        assert placeholders_render('<component type="weather-card" />', registry) == "[Weather]"
        assert placeholders_render('<component type="weather-card" />') == "[weather-card component]"


class TestPreview:
    """Test the plain-text Document preview"""

    def test_known_component(self):
        """Registered types preview as their placeholder"""
        assert directive_preview(directive("price-chart")) == "[Price chart]"

    def test_unknown_component(self):
        """Unregistered type is surfaced, not hidden"""
        assert directive_preview(directive("mystery")) == "Unknown component: mystery"

    def test_loading(self):
        """Loading directive names the coming type"""
        loading = Directive(type="_loading", attributes={"loadingType": "note-card"}, raw="", streaming=True)
        assert directive_preview(loading) == "[Loading note-card...] (still arriving)"

    def test_loading_without_type(self):
        """No type yet -> generic loading text"""
        loading = Directive(type="_loading", attributes={}, raw="", streaming=True)
        assert directive_preview(loading) == "[Loading component...] (still arriving)"

    def test_document(self):
        """Text verbatim, components previewed, in order"""
        document = Parser('Hi <component type="project-card" /> then <component type="transaction-preview" action="pay" parameters=\'{"a').parse()
        assert document_preview(document) == "Hi [Project card with payment form] then [Transaction preview: pay] (still arriving)"

    def test_streaming_options_recovered(self):
        """Truncated groups show the complete groups and the one arriving"""
        text = (
            'Pick <component type="options-picker" groups=\'[{"id": "chain", "label": "Chain", '
            '"options": [{"value": "1", "label": "Ethereum"}]}, {"id": "token", "label": "Tok'
        )
        document = Parser(text).parse()
        assert document_preview(document) == "Pick [Options: Chain (Ethereum) | token] (still arriving)"

    def test_streaming_options_nothing_yet(self):
        """Truncated groups with no group arrived -> generic placeholder"""
        document = Parser("<component type=\"options-picker\" groups='[").parse()
        assert document_preview(document) == "[options-picker component] (still arriving)"

    def test_truncated_groups_not_an_array(self):
        """A truncated value that can never be groups falls back"""
        rendered = placeholderRegistry.placeholder_render(
            directive("options-picker", groups='{"id": "a"', _isTruncated="true"))
        assert rendered == "[options-picker component]"
