"""
Property normalization.

Two stages: definitions are normalized first (including variant
refinement), then instance values are coerced using the *definition's*
kind. Every instance of a definition therefore reports the same primitive
type for a property even when raw values look different.
"""

from typing import Any, Dict, List, Mapping, Optional

from ...logging_config import get_logger
from .coercion import (
    UNDEFINED_MARKER,
    as_boolean,
    as_number,
    coerce_explicit,
    is_boolean,
    is_number,
    parse_raw,
    values_equal,
)
from .naming import property_name_from_key
from .schema import PropertyDefinition, PropertyDefinitions, PropertyType, PropertyValue

logger = get_logger(__name__)

HIDDEN_KEY_PREFIXES = (".", "_")


def _is_hidden_key(key: str) -> bool:
    return str(key).startswith(HIDDEN_KEY_PREFIXES)


def _variant_options(raw: Mapping[str, Any]) -> List[str]:
    options = raw.get("variantOptions") or []
    return [parse_raw(option) for option in options]


def create_definition(key: str, raw: Mapping[str, Any]) -> PropertyDefinition:
    """
    Normalize one raw property definition.

    Args:
        key: Raw property key
        raw: ``{"type", "defaultValue", "variantOptions"?}``

    Returns:
        Canonical PropertyDefinition
    """
    raw_type = str(raw.get("type", ""))
    kind = PropertyType.from_raw(raw_type)
    options = _variant_options(raw)
    default = parse_raw(raw.get("defaultValue"))
    name = property_name_from_key(key)
    hidden = _is_hidden_key(key)
    optional = default == UNDEFINED_MARKER or UNDEFINED_MARKER in options

    if kind == PropertyType.VARIANT:
        # A single option cannot be selected: it is a pinned value
        if len(options) == 1:
            return PropertyDefinition(
                name=name,
                type=PropertyType.EXPLICIT,
                default_value=coerce_explicit(default),
                hidden=hidden,
                optional=optional,
            )

        if len(options) == 2 and all(is_boolean(option) for option in options):
            return PropertyDefinition(
                name=name,
                type=PropertyType.BOOLEAN,
                default_value=as_boolean(default),
                hidden=hidden,
                optional=optional,
            )

        if all(is_number(option) for option in options):
            return PropertyDefinition(
                name=name,
                type=PropertyType.NUMBER,
                default_value=as_number(default),
                hidden=hidden,
                optional=optional,
            )

        return PropertyDefinition(
            name=name,
            type=PropertyType.VARIANT,
            default_value=default,
            variant_options=options,
            hidden=hidden,
            optional=optional,
        )

    if kind == PropertyType.BOOLEAN:
        return PropertyDefinition(
            name=name,
            type=kind,
            default_value=as_boolean(default),
            hidden=hidden,
            optional=optional,
        )

    if kind == PropertyType.UNKNOWN:
        logger.warning("Unrecognized property type %r for key %r", raw_type, key)
        return PropertyDefinition(
            name=name,
            type=kind,
            default_value=default,
            hidden=hidden,
            optional=optional,
            raw_type=raw_type,
        )

    # TEXT, INSTANCE_SWAP
    return PropertyDefinition(
        name=name,
        type=kind,
        default_value=default,
        hidden=hidden,
        optional=optional,
    )


def normalize_definitions(raw_definitions: Optional[Mapping[str, Any]]) -> PropertyDefinitions:
    """Normalize a raw definitions map, preserving input order."""
    definitions: PropertyDefinitions = {}
    for key, raw in (raw_definitions or {}).items():
        definitions[key] = create_definition(key, raw or {})
    return definitions


def create_value(
    key: str, definition: Optional[PropertyDefinition], raw: Mapping[str, Any]
) -> PropertyValue:
    """
    Coerce one raw instance value using its definition's kind.

    A value without a definition is kept as opaque TEXT and never counts
    as a default.
    """
    text = parse_raw(raw.get("value"))
    undefined = text == UNDEFINED_MARKER
    name = property_name_from_key(key)

    if definition is None:
        logger.warning("No definition for property %r; treating it as text", key)
        return PropertyValue(
            name=name,
            type=PropertyType.TEXT,
            value=text,
            default=False,
            undefined=undefined,
        )

    kind = definition.type
    if kind == PropertyType.BOOLEAN:
        value = as_boolean(text)
    elif kind == PropertyType.EXPLICIT:
        value = coerce_explicit(text)
    elif kind == PropertyType.NUMBER:
        value = as_number(text)
    else:
        # TEXT, VARIANT, INSTANCE_SWAP, UNKNOWN
        value = text

    return PropertyValue(
        name=name,
        type=kind,
        value=value,
        default=values_equal(value, definition.default_value),
        undefined=undefined,
    )


def normalize_values(
    definitions: PropertyDefinitions, raw_values: Optional[Mapping[str, Any]]
) -> Dict[str, PropertyValue]:
    """Normalize a raw per-instance value map against its definitions."""
    values: Dict[str, PropertyValue] = {}
    for key, raw in (raw_values or {}).items():
        values[key] = create_value(key, definitions.get(key), raw or {})
    return values


def values_from_definitions(raw_definitions: Optional[Mapping[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Raw value map of a definition node: every property at its default."""
    return {
        key: {"type": (raw or {}).get("type"), "value": (raw or {}).get("defaultValue")}
        for key, raw in (raw_definitions or {}).items()
    }
