"""Configuration classes for inner markup access.

This module provides immutable configuration objects for the strict fragment
parse, the lenient whole-document fallback and the accessor that chains them.
"""

import json
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

SERIALIZATION_METHODS = ("xml", "html")

# Wrapper tags go through the HTML parser, which lowercases tag names.
_WRAPPER_TAG_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*$")
_XML_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class StrictParseConfig:
    """Configuration for the strict (well-formed XML) fragment parse."""

    context_tag: str = "inner-markup-context"
    inherit_namespaces: bool = True
    huge_tree: bool = False

    def __post_init__(self) -> None:
        """Validate strict parse configuration."""
        if not _XML_NAME_PATTERN.match(self.context_tag):
            raise ConfigValidationError(
                f"context_tag must be a valid XML name, got {self.context_tag!r}",
                field_name="context_tag",
            )


@dataclass(frozen=True)
class LenientParseConfig:
    """Configuration for the lenient (tolerant HTML) document fallback."""

    enabled: bool = True
    wrapper_tag: str = "htmlfragment"
    charset: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate lenient parse configuration."""
        if not _WRAPPER_TAG_PATTERN.match(self.wrapper_tag):
            raise ConfigValidationError(
                f"wrapper_tag must be a lowercase tag name, got {self.wrapper_tag!r}",
                field_name="wrapper_tag",
                suggestions=["Use a non-standard lowercase name such as 'htmlfragment'"],
            )
        try:
            "".encode(self.charset)
        except LookupError as e:
            raise ConfigValidationError(
                f"Unknown charset: {self.charset!r}",
                field_name="charset",
            ) from e


@dataclass(frozen=True)
class AccessorConfig:
    """Complete configuration for reading and replacing inner markup.

    Immutable; derive variants with :meth:`override`.
    """

    strict: StrictParseConfig = field(default_factory=StrictParseConfig)
    lenient: LenientParseConfig = field(default_factory=LenientParseConfig)

    # "0" counts as blank markup, matching loosely-typed truthiness checks
    treat_zero_as_empty: bool = True
    serialization_method: str = "xml"
    log_suppressed_diagnostics: bool = False

    def __post_init__(self) -> None:
        """Validate the accessor configuration."""
        if self.serialization_method not in SERIALIZATION_METHODS:
            raise ConfigValidationError(
                f"serialization_method must be one of {SERIALIZATION_METHODS}, "
                f"got {self.serialization_method!r}",
                field_name="serialization_method",
            )

    def override(self, **kwargs: Any) -> "AccessorConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; nested fields use ``component__field``

        Returns:
            New AccessorConfig instance with overrides applied

        Example:
            >>> config = AccessorConfig().override(
            ...     lenient__wrapper_tag="wrapper",
            ...     treat_zero_as_empty=False,
            ... )
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in ("strict", "lenient"):
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                    )
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        for component, overrides in nested.items():
            try:
                top_level[component] = replace(getattr(self, component), **overrides)
            except TypeError as e:
                raise ConfigValidationError(str(e), field_name=component) from e

        try:
            return replace(self, **top_level)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if hasattr(value, "__dataclass_fields__"):
                value = {sub.name: getattr(value, sub.name) for sub in fields(value)}
            result[f.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccessorConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos do not silently fall back to
        defaults.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                suggestions=[f"Valid keys: {', '.join(sorted(known))}"],
            )

        values: Dict[str, Any] = dict(data)
        for name, component_class in (("strict", StrictParseConfig),
                                      ("lenient", LenientParseConfig)):
            if name in values and isinstance(values[name], dict):
                try:
                    values[name] = component_class(**values[name])
                except TypeError as e:
                    raise ConfigValidationError(str(e), field_name=name) from e
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "AccessorConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def compatible(cls) -> "AccessorConfig":
        """Strict parse with lenient fallback; mirrors browser-style innerHTML."""
        return cls()

    @classmethod
    def strict_only(cls) -> "AccessorConfig":
        """Only well-formed markup is accepted; anything else leaves the element empty."""
        return cls(lenient=LenientParseConfig(enabled=False))

    @classmethod
    def html_output(cls) -> "AccessorConfig":
        """Serialize inner content with HTML rules (void elements, no self-closing)."""
        return cls(serialization_method="html")
