"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use CHATTAGS_ prefix (e.g., CHATTAGS_SHORT_TAG=component).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use CHATTAGS_ prefix. Dict-valued settings are
    read as JSON.

    Examples:
        CHATTAGS_LONG_TAG=juice-component
        CHATTAGS_PROGRESSIVE_TYPES='{"options-picker": "groups"}'
        CHATTAGS_PARSE_CACHE_SIZE=256
    """

    model_config = SettingsConfigDict(
        env_prefix="CHATTAGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Tag spellings
    long_tag: str = Field(
        default="juice-component",
        description="Canonical directive tag name",
    )

    short_tag: str = Field(
        default="component",
        description="Short directive tag name the model sometimes emits instead",
    )

    # Sentinel types and attributes
    unknown_type: str = Field(
        default="unknown",
        description="Type given to a settled tag that declares no type",
    )

    loading_type: str = Field(
        default="_loading",
        description="Type of the placeholder directive for tags that cannot be decoded yet",
    )

    loading_attribute: str = Field(
        default="loadingType",
        description="Attribute on the loading directive naming the type that is probably coming",
    )

    truncated_attribute: str = Field(
        default="_isTruncated",
        description="Attribute set on a streaming directive whose JSON value was cut off",
    )

    truncated_value: str = Field(
        default="true",
        description="Value of the truncation marker attribute",
    )

    # Progressive decoding whitelist: directive type -> JSON-bearing attribute
    progressive_types: Dict[str, str] = Field(
        default_factory=lambda: {
            "options-picker": "groups",
            "transaction-preview": "parameters",
        },
        description="Directive types that may render before their tag closes, keyed to their JSON attribute",
    )

    # Performance
    parse_cache_size: int = Field(
        default=128,
        ge=0,
        description="Number of buffers remembered by document_parseCached()",
    )

    def tagNames_list(self) -> List[str]:
        """
        Both accepted tag names, long form first.

        Returns:
            List of tag names (e.g., ['juice-component', 'component'])
        """
        return [self.long_tag, self.short_tag]

    def progressive_is(self, directive_type: str) -> bool:
        """Check whether a directive type may be decoded from an unterminated tag"""
        return directive_type in self.progressive_types

    def jsonAttribute_get(self, directive_type: str) -> Optional[str]:
        """
        Name of the JSON-bearing attribute for a progressive type.

        Args:
            directive_type: Directive type to look up

        Returns:
            Attribute name, or None if the type is not progressive

        Example:
            >>> settings = AppSettings()
            >>> settings.jsonAttribute_get('options-picker')
            'groups'
        """
        return self.progressive_types.get(directive_type)


# Singleton instance - import this in your code
appsettings = AppSettings()
