"""
Base generator interface for all code generation targets.

Every target renders the same two passes over the canonical model: an
instance pass (one element per component) and a definitions pass (type
declarations plus a component stub per definition). The instance pass is
shared here; targets plug in their attribute and slot formatting.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
from pathlib import Path

from ...logging_config import get_logger
from ...nodes import Lookup
from .coercion import UNDEFINED_MARKER, Primitive, format_number
from .config import GeneratorConfig, Settings, load_config, read_settings
from .naming import (
    NamingCase,
    capitalized_name_from_name,
    create_javascript_sanitizer,
    property_name_from_key,
)
from .schema import (
    CanonicalModel,
    Component,
    PropertyDefinition,
    PropertyDefinitions,
    PropertyType,
    PropertyValue,
    ReferenceMap,
)
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


@dataclass
class CodeBlock:
    language: str
    lines: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"language": self.language, "lines": list(self.lines)}


@dataclass
class FormatResultItem:
    """One pass of a target (instances or definitions)."""

    label: str
    code: List[CodeBlock] = field(default_factory=list)
    settings: Settings = field(default_factory=list)
    settings_key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "label": self.label,
            "code": [block.to_dict() for block in self.code],
            "settings": [[key, value] for key, value in self.settings],
        }
        if self.settings_key is not None:
            data["settingsKey"] = self.settings_key
        return data


@dataclass
class FormatResult:
    """Everything one target produced for a model."""

    label: str
    items: List[FormatResultItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "items": [item.to_dict() for item in self.items]}


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    # Targets with named slots render several text slots as labelled blocks
    supports_named_slots: bool = False

    # Targets that pass bound instance swaps as named slot content
    instance_slots: bool = False

    # Interface type of an instance-swap property
    instance_swap_type: str = "unknown"

    def __init__(
        self,
        config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
        lookup: Optional[Lookup] = None,
    ):
        """
        Initialize generator.

        Args:
            config: GeneratorConfig or dict of overrides
            lookup: ``resolve(id) -> node | None`` used for instance swaps
        """
        if isinstance(config, GeneratorConfig):
            self.config = config
        else:
            self.config = load_config(self.language_name, custom_config=config)
        self.lookup = lookup
        self.sanitizer = create_javascript_sanitizer()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the registry name of the target (e.g., 'react')."""
        pass

    @property
    @abstractmethod
    def label(self) -> str:
        """Return the display label of the target (e.g., 'React')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated definitions."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    # Entry point

    def format(
        self,
        model: CanonicalModel,
        instance_settings: Optional[Settings] = None,
        definition_settings: Optional[Settings] = None,
    ) -> FormatResult:
        """Render both passes for ``model``."""
        return FormatResult(
            label=self.label,
            items=[
                self.format_instances(model, instance_settings),
                self.format_definitions(model, definition_settings),
            ],
        )

    @abstractmethod
    def format_instances(
        self, model: CanonicalModel, settings: Optional[Settings] = None
    ) -> FormatResultItem:
        pass

    @abstractmethod
    def format_definitions(
        self, model: CanonicalModel, settings: Optional[Settings] = None
    ) -> FormatResultItem:
        pass

    @abstractmethod
    def format_attribute(
        self,
        prop: PropertyValue,
        key: str,
        explicit_boolean: bool,
        slot_tag: Optional[str] = None,
    ) -> str:
        """Render one attribute; the empty string omits it."""
        pass

    @abstractmethod
    def format_slot(
        self, tag: str, key: str, slot_count: int, is_default: bool = False, value: str = ""
    ) -> str:
        """Render one text slot as element content."""
        pass

    def format_instance_slot(self, key: str, node_id: str) -> str:
        """Named slot carrying a swapped instance; empty keeps it an attribute."""
        return ""

    # Settings

    def instance_toggles(self, settings: Optional[Settings]) -> Tuple[bool, bool]:
        """``(show_defaults, explicit_boolean)`` from positional settings."""
        show_defaults, explicit_boolean = read_settings(
            settings, self.config.instance_settings()
        )
        return show_defaults, explicit_boolean

    def resolved_instance_settings(self, settings: Optional[Settings]) -> Settings:
        """Settings echoed back in the result, with defaults filled in."""
        defaults = self.config.instance_settings()
        values = read_settings(settings, defaults)
        return [(key, value) for (key, _), value in zip(defaults, values)]

    # Instance pass

    def format_instance(
        self,
        component: Component,
        model: CanonicalModel,
        show_defaults: bool,
        explicit_boolean: bool,
    ) -> str:
        """Render one component as an element."""
        definitions = model.definition_for(component)
        references = model.references
        tag = self.config.slot_tag

        visible_keys = [
            key
            for key in component.properties
            if not self._is_hidden(definitions.get(key))
        ]
        slot_keys = [
            key
            for key in visible_keys
            if component.properties[key].type == PropertyType.TEXT
            and references.is_text_bound(key)
        ]
        slot_count = len(slot_keys)
        inline_slots = slot_count > 1 and not self.supports_named_slots

        attributes: List[Tuple[str, str]] = []
        children: List[Tuple[str, str]] = []

        for key in visible_keys:
            prop = component.properties[key]
            if prop.undefined:
                continue
            if prop.type == PropertyType.INSTANCE_SWAP and self._is_toggled_off(
                key, component, references
            ):
                continue
            if prop.default and not show_defaults:
                continue

            name = self.prop_name(key)
            if key in slot_keys and not inline_slots:
                children.append(
                    (name, self.format_slot(tag, key, slot_count, slot_count == 1, str(prop.value)))
                )
                continue

            if (
                self.instance_slots
                and prop.type == PropertyType.INSTANCE_SWAP
                and key in references.instances
            ):
                slot = self.format_instance_slot(key, str(prop.value))
                if slot:
                    children.append((name, slot))
                    continue

            attribute = self.format_attribute(
                prop, key, explicit_boolean, slot_tag=tag if key in slot_keys else None
            )
            if attribute:
                attributes.append((name, attribute))

        return self.format_element(
            component.name,
            [text for _, text in sorted(attributes)],
            [text for _, text in sorted(children)],
        )

    def format_element(self, tag: str, attributes: List[str], children: List[str]) -> str:
        """Assemble an element from rendered attributes and children."""
        opening = " ".join([tag] + attributes)
        if not children:
            return f"<{opening} />"
        if len(children) == 1 and "\n" not in children[0]:
            return f"<{opening}>{children[0]}</{tag}>"
        body = "\n".join(self.indent(child) for child in children)
        return f"<{opening}>\n{body}\n</{tag}>"

    def indent(self, text: str, levels: int = 1) -> str:
        prefix = " " * (self.config.indent_size * levels)
        return "\n".join(prefix + line if line.strip() else line for line in text.split("\n"))

    # Definitions pass helpers

    def sorted_definition_ids(self, model: CanonicalModel) -> List[str]:
        return sorted(model.definitions, key=lambda key: (model.meta_for(key).name, key))

    def sorted_property_keys(self, definitions: PropertyDefinitions) -> List[str]:
        return sorted(definitions, key=lambda key: (self.prop_name(key), key))

    def format_interface_property(
        self,
        type_prefix: str,
        key: str,
        types: Dict[str, str],
        definition: PropertyDefinition,
    ) -> str:
        """Interface field for one definition; registers union types in ``types``."""
        name = self.prop_name(key)
        if definition.hidden:
            return ""
        kind = definition.type
        if kind == PropertyType.BOOLEAN:
            return f"{name}?: boolean;"
        elif kind == PropertyType.NUMBER:
            return f"{name}?: number;"
        elif kind == PropertyType.TEXT:
            return f"{name}?: string;"
        elif kind == PropertyType.VARIANT:
            type_name = f"{type_prefix}{capitalized_name_from_name(property_name_from_key(key))}"
            types[type_name] = self.union_type(definition.variant_options or [])
            return f"{name}?: {type_name};"
        elif kind == PropertyType.EXPLICIT:
            return f"{name}?: {self.literal(definition.default_value)};"
        elif kind == PropertyType.INSTANCE_SWAP:
            return f"{name}?: {self.instance_swap_type};"
        else:
            return f"{name}?: {json.dumps(definition.to_dict(), ensure_ascii=False)};"

    def union_type(self, options: List[str]) -> str:
        escaped = [option.replace("'", "\\'") for option in options]
        return " | ".join(f"'{option}'" for option in escaped)

    def format_default_value(self, definition: PropertyDefinition) -> Optional[str]:
        """
        Default of one property as a source literal.

        None means the property has no default and is emitted bare.
        """
        default = definition.default_value
        if definition.optional and default == UNDEFINED_MARKER:
            return None
        kind = definition.type
        if kind == PropertyType.BOOLEAN:
            return self.literal(bool(default))
        elif kind == PropertyType.NUMBER:
            return self.literal(default)
        elif kind == PropertyType.EXPLICIT:
            return self.literal(default)
        elif kind == PropertyType.INSTANCE_SWAP:
            node = self.resolve(str(default))
            if node is None:
                return self.string_literal(default)
            if definition.optional and node.name == UNDEFINED_MARKER:
                return None
            return f"<{capitalized_name_from_name(node.name)} />"
        else:
            return self.string_literal(default)

    # Shared utilities

    def prop_name(self, key: str) -> str:
        """Identifier of a property in generated code."""
        return self.sanitizer.sanitize_name(property_name_from_key(key), NamingCase.CAMEL_CASE)

    def resolve(self, node_id: str) -> Optional[Any]:
        """Resolve an instance-swap target through the lookup collaborator."""
        if self.lookup is None or not node_id:
            return None
        return self.lookup(node_id)

    def resolved_name(self, node_id: str) -> Optional[str]:
        node = self.resolve(node_id)
        if node is None:
            return None
        return capitalized_name_from_name(node.name)

    def literal(self, value: Primitive) -> str:
        """Boolean and number literals as-is, strings quoted."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return format_number(value)
        return self.string_literal(value)

    def string_literal(self, value: Any) -> str:
        return json.dumps(str(value), ensure_ascii=False)

    def _is_hidden(self, definition: Optional[PropertyDefinition]) -> bool:
        return bool(definition is not None and definition.hidden)

    def _is_toggled_off(self, key: str, component: Component, references: ReferenceMap) -> bool:
        """True when the swap's bound visibility toggle is off on this instance."""
        reference = references.instances.get(key)
        if reference is None or not reference.visible:
            return False
        toggle = component.properties.get(reference.visible)
        return toggle is not None and toggle.value is False

    # Validation

    def validate_model(self, model: CanonicalModel) -> List[str]:
        """
        Collect warnings about degraded output.

        Nothing here is fatal: every case listed still renders a fallback.
        """
        warnings = []

        for definition_id, definitions in model.definitions.items():
            meta_name = model.meta_for(definition_id).name
            for key, definition in definitions.items():
                if definition.type == PropertyType.UNKNOWN:
                    warnings.append(
                        f"Unknown property type {definition.raw_type!r} in {meta_name}.{key}"
                    )
                if (
                    definition.type == PropertyType.INSTANCE_SWAP
                    and definition.default_value != UNDEFINED_MARKER
                    and self.resolve(str(definition.default_value)) is None
                ):
                    warnings.append(
                        f"Default of {meta_name}.{key} references unknown node "
                        f"{definition.default_value}"
                    )

        for component in model.components.values():
            definitions = model.definition_for(component)
            for key in component.properties:
                if key not in definitions:
                    warnings.append(
                        f"Property {key!r} of {component.name} ({component.id}) has no definition"
                    )

        return warnings


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        result: Optional[FormatResult],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            result: Rendered target output
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.result = result
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(result=None)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator,
    model: CanonicalModel,
    instance_settings: Optional[Settings] = None,
    definition_settings: Optional[Settings] = None,
) -> GenerationResult:
    """
    Run a generator over a model with error handling.

    Returns:
        GenerationResult with the FormatResult, warnings, and metadata
    """
    try:
        warnings = generator.validate_model(model)
        result = generator.format(model, instance_settings, definition_settings)

        metadata = {
            "target": generator.language_name,
            "file_extension": generator.file_extension,
            "component_count": len(model.components),
            "definition_count": len(model.definitions),
            "has_unknowns": any(
                definition.type == PropertyType.UNKNOWN
                for definitions in model.definitions.values()
                for definition in definitions.values()
            ),
        }

        return GenerationResult(result, warnings, metadata)

    except Exception as e:
        logger.exception("Code generation failed for %s", generator.language_name)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
