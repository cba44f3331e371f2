"""
React code generator implementation.

Instances render as JSX elements; definitions render as a TypeScript props
interface plus an ``FC`` stub with destructured defaults.
"""

import json
from typing import Dict, Optional, Any
from pathlib import Path

from ...core.generator import CodeBlock, CodeGenerator, FormatResultItem
from ...core.config import Settings
from ...core.schema import CanonicalModel, PropertyDefinitions, PropertyType, PropertyValue

REACT_IMPORT = 'import { FC, ReactNode } from "react";'


class ReactGenerator(CodeGenerator):
    """Code generator for React (JSX instances, TSX definitions)."""

    supports_named_slots = False
    instance_swap_type = "ReactNode"

    @property
    def language_name(self) -> str:
        return "react"

    @property
    def label(self) -> str:
        return "React"

    @property
    def file_extension(self) -> str:
        return ".tsx"

    def get_template_directory(self) -> Optional[Path]:
        """Return the React templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def format_instances(
        self, model: CanonicalModel, settings: Optional[Settings] = None
    ) -> FormatResultItem:
        """One JSX line per component."""
        show_defaults, explicit_boolean = self.instance_toggles(settings)
        lines = [
            self.format_instance(component, model, show_defaults, explicit_boolean)
            for component in model.components.values()
        ]
        return FormatResultItem(
            label="Instances",
            code=[CodeBlock(language="jsx", lines=lines)],
            settings=self.resolved_instance_settings(settings),
            settings_key="instance",
        )

    def format_definitions(
        self, model: CanonicalModel, settings: Optional[Settings] = None
    ) -> FormatResultItem:
        """Import line, then one interface + component block per definition."""
        lines = [REACT_IMPORT]
        for definition_id in self.sorted_definition_ids(model):
            lines.append(
                self._format_definition_block(
                    model.meta_for(definition_id).name, model.definitions[definition_id]
                )
            )
        return FormatResultItem(
            label="Definitions",
            code=[CodeBlock(language="tsx", lines=lines)],
            settings=[],
        )

    def _format_definition_block(self, component_name: str, definitions: PropertyDefinitions) -> str:
        interface_name = f"{component_name}Props"
        types: Dict[str, str] = {}
        keys = self.sorted_property_keys(definitions)

        interface_lines = [
            self.format_interface_property(interface_name, key, types, definitions[key])
            for key in keys
        ]
        input_lines = [self._format_input_property(key, definitions) for key in keys]

        context = {
            "add_comments": self.config.add_comments,
            "component_name": component_name,
            "interface_name": interface_name,
            "types": [{"name": name, "value": value} for name, value in types.items()],
            "interface_lines": [line for line in interface_lines if line],
            "input_lines": [line for line in input_lines if line],
        }
        return self.render_template("component.tsx.j2", context)

    def _format_input_property(self, key: str, definitions: PropertyDefinitions) -> str:
        """Destructured parameter with its default."""
        definition = definitions[key]
        if definition.hidden:
            return ""
        name = self.prop_name(key)
        value = self.format_default_value(definition)
        if value is None:
            return f"{name},"
        return f"{name} = {value},"

    def format_attribute(
        self,
        prop: PropertyValue,
        key: str,
        explicit_boolean: bool,
        slot_tag: Optional[str] = None,
    ) -> str:
        """JSX attribute for one property value."""
        clean = self.prop_name(key)
        if prop.undefined:
            return ""
        if prop.type == PropertyType.BOOLEAN:
            if explicit_boolean:
                return f"{clean}={{{self.literal(prop.value)}}}"
            return clean if prop.value else ""
        elif prop.type == PropertyType.NUMBER:
            return f"{clean}={{{self.literal(prop.value)}}}"
        elif prop.type == PropertyType.INSTANCE_SWAP:
            name = self.resolved_name(str(prop.value))
            if name:
                return f"{clean}={{<{name} />}}"
            return f"{clean}={self._attribute_string(prop.value)}"
        elif prop.type == PropertyType.TEXT and slot_tag:
            return f"{clean}={{<{slot_tag}>{prop.value}</{slot_tag}>}}"
        elif prop.type == PropertyType.UNKNOWN:
            return f"{clean}={{{json.dumps(prop.to_dict(), ensure_ascii=False)}}}"
        else:
            return f"{clean}={self._attribute_string(prop.value)}"

    def format_slot(
        self, tag: str, key: str, slot_count: int, is_default: bool = False, value: str = ""
    ) -> str:
        """A single slot is plain children; otherwise the value is wrapped."""
        tagged = f"<{tag}>{value}</{tag}>" if value else f"<{tag} />"
        return value if slot_count == 1 else tagged

    def _attribute_string(self, value: Any) -> str:
        """Quoted JSX string; values with quotes become an expression."""
        text = self.literal(value) if isinstance(value, (bool, int, float)) else str(value)
        if '"' in text:
            return "{" + self.string_literal(text) + "}"
        return f'"{text}"'


def create_react_generator(
    config: Optional[Dict[str, Any]] = None, lookup=None
) -> ReactGenerator:
    """Create a React generator with default configuration."""
    default_config = {
        "show_defaults": False,
        "explicit_boolean": False,
        "add_comments": True,
    }

    merged_config = default_config.copy()
    if config:
        merged_config.update(config)

    return ReactGenerator(merged_config, lookup=lookup)


def create_explicit_react_generator(lookup=None) -> ReactGenerator:
    """Create a generator that spells out every value, defaults included."""
    return create_react_generator(
        {"show_defaults": True, "explicit_boolean": True}, lookup=lookup
    )
