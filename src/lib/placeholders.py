"""
Plain-text placeholders for component directives

When a message is exported (copy to clipboard, transcript, logs) each settled
component tag is replaced by a short bracketed description:

    Hi <juice-component type="project-card" projectId="1" />
    -> Hi [Project card with payment form]

Descriptions come from a registry keyed by directive type. Unknown types get
'[<type> component]'. The options-picker entry decodes its groups JSON so a
reader still sees the choices; if that fails it falls back to the generic
form as well.
"""

import json
from typing import Callable, Dict, List, Optional

from ..config import AppSettings, appsettings
from ..models.directives import Directive
from ..models.parser import TagMatch
from ..models.placeholders import PlaceholderSpec, ComponentCategory
from .scanner import tagPattern_get, directive_fromTag
from .partial_json import optionsGroups_parsePartial
from .log import LOG

Formatter = Callable[[Dict[str, str]], Optional[str]]


def fixed(text: str) -> Formatter:
    """Factory for placeholders that ignore the directive's attributes"""
    def handler(attributes: Dict[str, str]) -> Optional[str]:
        return f"[{text}]"
    return handler


def generic_make(directive_type: str) -> str:
    """Placeholder for a type with no registry entry"""
    return f"[{directive_type} component]"


class PlaceholderRegistry:
    """
    Registry of placeholder specifications

    Maps directive types to PlaceholderSpec objects containing a category,
    a description and the formatter producing the bracketed text.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in component types"""
        self.specs: Dict[str, PlaceholderSpec] = {}
        self.walletTypes_register()
        self.projectTypes_register()
        self.formTypes_register()
        self.transactionTypes_register()
        self.chartTypes_register()
        self.activityTypes_register()
        self.pickerTypes_register()
        self.nftTypes_register()
        self.visualTypes_register()

    def register(self, spec: PlaceholderSpec) -> None:
        """Register a placeholder specification under its name and aliases"""
        self.specs[spec.name] = spec
        for alias in spec.aliases:
            self.specs[alias] = spec

    def spec_get(self, directive_type: str) -> Optional[PlaceholderSpec]:
        """Get full placeholder specification by directive type"""
        return self.specs.get(directive_type)

    def known(self, directive_type: str) -> bool:
        """Check whether a directive type has a registry entry"""
        return directive_type in self.specs

    def specs_listByCategory(self, category: ComponentCategory) -> List[PlaceholderSpec]:
        """Get all specs in a category, aliases counted once"""
        seen: List[PlaceholderSpec] = []
        for spec in self.specs.values():
            if spec.category == category and spec not in seen:
                seen.append(spec)
        return seen

    def placeholder_render(self, directive: Directive) -> str:
        """
        Bracketed description of one directive

        Args:
            directive: Decoded directive

        Returns:
            The registered formatter's text, or the generic placeholder when
            the type is unknown or the formatter declines

        Example:
            Directive(type="price-chart", ...) -> '[Price chart]'
            Directive(type="mystery", ...)     -> '[mystery component]'
        """
        spec = self.specs.get(directive.type)
        if spec is not None:
            text = spec.handler(directive.attributes)
            if text is not None:
                return text
        return generic_make(directive.type)

    def walletTypes_register(self) -> None:
        """Register wallet connection components"""
        self.register(PlaceholderSpec(
            name='connect-account',
            category=ComponentCategory.WALLET,
            description='Button opening the account connection modal',
            handler=fixed('Connect account button'),
            aliases=['connect-wallet'],
        ))

    def projectTypes_register(self) -> None:
        """Register project display components"""
        self.register(PlaceholderSpec(
            name='project-card',
            category=ComponentCategory.PROJECT,
            description='Project info with pay button',
            handler=fixed('Project card with payment form'),
        ))

        self.register(PlaceholderSpec(
            name='payment-form',
            category=ComponentCategory.PROJECT,
            description='Pay form (superseded by project-card)',
            handler=fixed('Payment form'),
        ))

        self.register(PlaceholderSpec(
            name='note-card',
            category=ComponentCategory.PROJECT,
            description='Payment with a note to the project',
            handler=fixed('Note card'),
        ))

    def formTypes_register(self) -> None:
        """Register project management forms"""
        form_specs = [
            ('cash-out-form', 'Cash out form'),
            ('send-payouts-form', 'Send payouts form'),
            ('send-reserved-tokens-form', 'Send reserved tokens form'),
            ('use-surplus-allowance-form', 'Use surplus allowance form'),
            ('deploy-erc20-form', 'Deploy ERC-20 token form'),
            ('queue-ruleset-form', 'Queue ruleset form'),
            ('create-project-form', 'Create project form'),
            ('create-revnet-form', 'Create revnet form'),
        ]

        for name, text in form_specs:
            self.register(PlaceholderSpec(
                name=name,
                category=ComponentCategory.FORM,
                description=text,
                handler=fixed(text),
            ))

    def transactionTypes_register(self) -> None:
        """Register transaction components"""

        def transaction_preview(attributes: Dict[str, str]) -> Optional[str]:
            """Name the action being previewed when there is one"""
            action = attributes.get('action')
            if action:
                return f"[Transaction preview: {action}]"
            return "[Transaction preview]"

        self.register(PlaceholderSpec(
            name='transaction-preview',
            category=ComponentCategory.TRANSACTION,
            description='Explains a transaction before signing',
            handler=transaction_preview,
        ))

        self.register(PlaceholderSpec(
            name='transaction-status',
            category=ComponentCategory.TRANSACTION,
            description='Transaction progress',
            handler=fixed('Transaction status'),
        ))

        self.register(PlaceholderSpec(
            name='action-button',
            category=ComponentCategory.TRANSACTION,
            description='Single action button',
            handler=lambda attributes: f"[{attributes['label']}]" if attributes.get('label') else "[Action button]",
        ))

    def chartTypes_register(self) -> None:
        """Register chart components"""
        chart_specs = [
            ('price-chart', 'Price chart'),
            ('balance-chart', 'Balance chart'),
            ('holders-chart', 'Token holders chart'),
            ('volume-chart', 'Volume chart'),
            ('token-price-chart', 'Token price chart'),
            ('pool-price-chart', 'Pool price chart'),
            ('multi-chain-cash-out-chart', 'Multi-chain cash out chart'),
        ]

        for name, text in chart_specs:
            self.register(PlaceholderSpec(
                name=name,
                category=ComponentCategory.CHART,
                description=text,
                handler=fixed(text),
            ))

    def activityTypes_register(self) -> None:
        """Register activity and ruleset components"""
        self.register(PlaceholderSpec(
            name='activity-feed',
            category=ComponentCategory.ACTIVITY,
            description='Recent project activity',
            handler=fixed('Activity feed'),
        ))

        self.register(PlaceholderSpec(
            name='ruleset-schedule',
            category=ComponentCategory.ACTIVITY,
            description='Ruleset stages over time',
            handler=fixed('Ruleset schedule'),
        ))

        self.register(PlaceholderSpec(
            name='interactions-sheet',
            category=ComponentCategory.ACTIVITY,
            description='Sheet of available interactions',
            handler=fixed('Interactions'),
        ))

    def pickerTypes_register(self) -> None:
        """Register pickers, including the options summary"""

        def options_picker(attributes: Dict[str, str]) -> Optional[str]:
            """
            Summarize option groups as 'Label (a, b) | Label (c)'

            A groups value still streaming (truncation marker set) is read
            with optionsGroups_parsePartial, so the groups complete so far
            and the one arriving are shown. Otherwise returns None when
            groups is missing, is not valid JSON, or has no usable group, so
            the generic placeholder is used instead.
            """
            raw = attributes.get('groups', '')
            if attributes.get(appsettings.truncated_attribute) == appsettings.truncated_value:
                recovered = optionsGroups_parsePartial(raw)
                if recovered.isInvalid:
                    return None
                groups = recovered.groups
            else:
                try:
                    groups = json.loads(raw)
                except json.JSONDecodeError:
                    LOG("options-picker groups not parseable, using generic placeholder", level=3)
                    return None
            if not isinstance(groups, list):
                return None

            parts = []
            for group in groups:
                if not isinstance(group, dict):
                    continue
                label = group.get('label') or group.get('id') or 'Options'
                options = group.get('options')
                if not isinstance(options, list):
                    options = []
                choices = [
                    str(option.get('label') or option.get('value'))
                    for option in options
                    if isinstance(option, dict) and (option.get('label') or option.get('value'))
                ]
                parts.append(f"{label} ({', '.join(choices)})" if choices else str(label))

            if not parts:
                return None
            return f"[Options: {' | '.join(parts)}]"

        self.register(PlaceholderSpec(
            name='options-picker',
            category=ComponentCategory.PICKER,
            description='Radio buttons and toggles for user choices',
            handler=options_picker,
        ))

        self.register(PlaceholderSpec(
            name='project-chain-picker',
            category=ComponentCategory.PICKER,
            description='Select a project across chains',
            handler=fixed('Project chain picker'),
        ))

        self.register(PlaceholderSpec(
            name='top-projects',
            category=ComponentCategory.PICKER,
            description='Ranked list of projects by volume',
            handler=fixed('Top projects'),
        ))

        self.register(PlaceholderSpec(
            name='recommendation-chips',
            category=ComponentCategory.PICKER,
            description='Quick action suggestions',
            handler=fixed('Suggestions'),
        ))

    def nftTypes_register(self) -> None:
        """Register NFT components"""
        self.register(PlaceholderSpec(
            name='nft-gallery',
            category=ComponentCategory.NFT,
            description='Gallery of NFT tiers',
            handler=fixed('NFT gallery'),
        ))

        self.register(PlaceholderSpec(
            name='nft-card',
            category=ComponentCategory.NFT,
            description='Single NFT tier',
            handler=fixed('NFT card'),
        ))

        self.register(PlaceholderSpec(
            name='storefront',
            category=ComponentCategory.NFT,
            description='NFT storefront',
            handler=fixed('Storefront'),
        ))

    def visualTypes_register(self) -> None:
        """Register landing page and visualization components"""
        self.register(PlaceholderSpec(
            name='landing-page-preview',
            category=ComponentCategory.VISUAL,
            description='Preview of a project landing page',
            handler=fixed('Landing page preview'),
        ))

        self.register(PlaceholderSpec(
            name='success-visualization',
            category=ComponentCategory.VISUAL,
            description='Projected fundraising outcome',
            handler=fixed('Success visualization'),
        ))


# Shared default registry; the table is read-only after construction
placeholderRegistry = PlaceholderRegistry()


def placeholders_render(
    text: str,
    registry: Optional[PlaceholderRegistry] = None,
    settings: Optional[AppSettings] = None,
) -> str:
    """
    Replace every settled component tag in text with its placeholder

    Surrounding text is left untouched. An unterminated tag at the end of
    text is not a settled tag and is left as-is; callers export only
    finished messages.

    Args:
        text: Complete message text
        registry: Placeholder table; defaults to the shared registry
        settings: Tag names; defaults to the application settings

    Returns:
        Text with tags replaced

    Example:
        >>> placeholders_render('Hi <juice-component type="project-card" projectId="1" />')
        'Hi [Project card with payment form]'
    """
    registry = registry or placeholderRegistry
    settings = settings or appsettings

    def replace(match) -> str:
        tag = TagMatch(start=match.start(), end=match.end(), fragment=match.group(1), raw=match.group(0))
        return registry.placeholder_render(directive_fromTag(tag, settings))

    return tagPattern_get(settings).sub(replace, text)
