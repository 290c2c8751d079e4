"""
Placeholder specification and metadata models

Defines the structure and categories of known component types for the
plain-text export path and for consumers checking whether a type is known.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional


class ComponentCategory(Enum):
    """
    Categories of chat components

    Used for organization and for listing the export table.
    """
    WALLET = "wallet"            # connect-account
    PROJECT = "project"          # project-card, note-card
    FORM = "form"                # cash-out-form, send-payouts-form, ...
    TRANSACTION = "transaction"  # transaction-preview, transaction-status
    CHART = "chart"              # price-chart, balance-chart, ...
    ACTIVITY = "activity"        # activity-feed, ruleset-schedule
    PICKER = "picker"            # options-picker, project-chain-picker
    NFT = "nft"                  # nft-gallery, nft-card, storefront
    VISUAL = "visual"            # landing-page-preview, success-visualization


@dataclass
class PlaceholderSpec:
    """
    Specification for a component type's plain-text placeholder

    Attributes:
        name: Directive type (e.g. "project-card")
        category: Category for organization
        description: Human-readable description
        handler: Formatter (attributes) -> bracketed placeholder text, or None to
                 fall back to the generic form
        aliases: Alternative type names rendered the same way
    """
    name: str
    category: ComponentCategory
    description: str
    handler: Callable[[Dict[str, str]], Optional[str]]
    aliases: List[str] = field(default_factory=list)
