"""
Naming utilities for safe code generation.

Turns raw design-tool labels ("Button / Primary", "Has Icon?#12:3") into
identifiers, and keeps generated identifiers clear of target keywords.
"""

import re
from typing import Set, Dict
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name


# Property keys of non-variant properties carry a "#<node id>" suffix.
_KEY_SUFFIX = re.compile(r"#\d+:\d+$")


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Set[str] = None, fallback: str = "property"):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Words that cannot be used as identifiers as-is
            fallback: Name used when nothing usable is left after cleanup
        """
        self.reserved_words = reserved_words or set()
        self.fallback = fallback
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.CAMEL_CASE,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Sanitize a name for safe use as an identifier.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix appended to reserved words

        Returns:
            Sanitized name
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case) or self.fallback
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r"[^a-zA-Z0-9]", "_", str(name or ""))

        # Identifiers start with a letter
        cleaned = re.sub(r"^[^a-zA-Z]+", "", cleaned)

        return cleaned.strip("_")

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            return self._to_snake_case(name)
        elif target_case == NamingCase.CAMEL_CASE:
            return self._to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return self._to_pascal_case(name)
        elif target_case == NamingCase.KEBAB_CASE:
            return self._to_kebab_case(name)
        else:
            return name

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        name = name.replace("-", "_")

        # "HTMLButton" -> "HTML_Button", "iconLeft" -> "icon_Left"
        name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
        name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)

        name = name.lower()
        name = re.sub(r"_+", "_", name)

        return name.strip("_")

    def _to_camel_case(self, name: str) -> str:
        """Convert to camelCase."""
        snake = self._to_snake_case(name)
        parts = [part for part in snake.split("_") if part]

        if not parts:
            return ""

        return parts[0] + "".join(part.capitalize() for part in parts[1:])

    def _to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase."""
        snake = self._to_snake_case(name)
        return "".join(part.capitalize() for part in snake.split("_") if part)

    def _to_kebab_case(self, name: str) -> str:
        """Convert to kebab-case."""
        return self._to_snake_case(name).replace("_", "-")

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Append the suffix to reserved words."""
        if name in self.reserved_words:
            return f"{name}{suffix}"
        return name


JAVASCRIPT_RESERVED_WORDS = {
    "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "enum", "export",
    "extends", "false", "finally", "for", "function", "if", "implements",
    "import", "in", "instanceof", "interface", "let", "new", "null",
    "package", "private", "protected", "public", "return", "static",
    "super", "switch", "this", "throw", "true", "try", "typeof", "var",
    "void", "while", "with", "yield",
}


def create_javascript_sanitizer() -> NameSanitizer:
    """Create a name sanitizer for JavaScript/TypeScript identifiers."""
    return NameSanitizer(JAVASCRIPT_RESERVED_WORDS)


_display_sanitizer = NameSanitizer(fallback="Unnamed")
_property_sanitizer = NameSanitizer()


def capitalized_name_from_name(name: str) -> str:
    """Display name of a component: "button / primary" -> "ButtonPrimary"."""
    return _display_sanitizer.sanitize_name(name, NamingCase.PASCAL_CASE)


def property_name_from_key(key: str) -> str:
    """Cleaned property name: "Has Icon#12:3" -> "hasIcon"."""
    return _property_sanitizer.sanitize_name(
        _KEY_SUFFIX.sub("", str(key or "")), NamingCase.CAMEL_CASE
    )
