"""
Canonical property model shared by every generator.

The normalizer turns loosely typed design-tool metadata into these
structures; generators only ever read them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum

from .coercion import Primitive


class PropertyType(Enum):
    """Canonical property kinds."""

    BOOLEAN = "BOOLEAN"
    NUMBER = "NUMBER"
    TEXT = "TEXT"
    VARIANT = "VARIANT"
    EXPLICIT = "EXPLICIT"  # single-option variant, pinned value
    INSTANCE_SWAP = "INSTANCE_SWAP"
    UNKNOWN = "UNKNOWN"  # raw type not recognized

    @classmethod
    def from_raw(cls, raw_type: Any) -> "PropertyType":
        """Map a raw type string, falling back to UNKNOWN."""
        try:
            member = cls(str(raw_type))
        except ValueError:
            return cls.UNKNOWN
        # EXPLICIT and UNKNOWN are produced by normalization only
        if member in (cls.EXPLICIT, cls.UNKNOWN):
            return cls.UNKNOWN
        return member


@dataclass(frozen=True)
class PropertyDefinition:
    """Schema for one property key on a definition."""

    name: str
    type: PropertyType
    default_value: Primitive
    variant_options: Optional[List[str]] = None
    hidden: bool = False
    optional: bool = False
    raw_type: Optional[str] = None  # kept for UNKNOWN kinds

    def to_dict(self) -> Dict[str, Any]:
        """Structured form used when a kind cannot be rendered natively."""
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.raw_type or self.type.value,
            "defaultValue": self.default_value,
        }
        if self.variant_options is not None:
            data["variantOptions"] = list(self.variant_options)
        return data


@dataclass(frozen=True)
class PropertyValue:
    """Value of one property on one instance."""

    name: str
    type: PropertyType
    value: Primitive
    default: bool
    undefined: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type.value, "value": self.value}


@dataclass(frozen=True)
class ComponentMeta:
    """Display metadata for one definition."""

    id: str
    name: str


@dataclass(frozen=True)
class Component:
    """
    One rendered node.

    ``definition`` is a key into the model's ``definitions`` and ``metas``;
    instances of the same definition share that entry.
    """

    id: str
    name: str
    definition: str
    properties: Dict[str, PropertyValue] = field(default_factory=dict)


@dataclass(frozen=True)
class InstanceReference:
    """Property keys driving a swapped sub-component."""

    visible: Optional[str] = None
    characters: Optional[str] = None


@dataclass(frozen=True)
class PropertyReference:
    """Binding kinds a property key participates in."""

    visible: bool = False
    characters: bool = False


@dataclass(frozen=True)
class ReferenceMap:
    """Reference bindings discovered under a definition."""

    instances: Dict[str, InstanceReference] = field(default_factory=dict)
    properties: Dict[str, PropertyReference] = field(default_factory=dict)

    def is_text_bound(self, key: str) -> bool:
        reference = self.properties.get(key)
        return bool(reference and reference.characters)

    def merge(self, other: "ReferenceMap") -> "ReferenceMap":
        """Combine two maps into a new one; flags accumulate per key."""
        instances = dict(self.instances)
        instances.update(other.instances)

        properties = dict(self.properties)
        for key, reference in other.properties.items():
            current = properties.get(key, PropertyReference())
            properties[key] = PropertyReference(
                visible=current.visible or reference.visible,
                characters=current.characters or reference.characters,
            )

        return ReferenceMap(instances=instances, properties=properties)


PropertyDefinitions = Dict[str, PropertyDefinition]


@dataclass(frozen=True)
class CanonicalModel:
    """Output of the model assembler: the single input of every generator."""

    components: Dict[str, Component] = field(default_factory=dict)
    definitions: Dict[str, PropertyDefinitions] = field(default_factory=dict)
    metas: Dict[str, ComponentMeta] = field(default_factory=dict)
    references: ReferenceMap = field(default_factory=ReferenceMap)

    def definition_for(self, component: Component) -> PropertyDefinitions:
        return self.definitions.get(component.definition, {})

    def meta_for(self, definition_id: str) -> ComponentMeta:
        meta = self.metas.get(definition_id)
        if meta is None:
            return ComponentMeta(id=definition_id, name="Unnamed")
        return meta
