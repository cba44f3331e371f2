"""
Vue code generator implementation.

Instances render as single-file-component template markup with named slots;
definitions render either as a composition API ``withDefaults`` setup or as
an options API ``defineComponent`` call.
"""

import json
from typing import Dict, List, Optional, Any
from pathlib import Path

from ...core.coercion import UNDEFINED_MARKER
from ...core.config import Settings, read_settings
from ...core.generator import CodeBlock, CodeGenerator, FormatResultItem
from ...core.naming import capitalized_name_from_name, property_name_from_key
from ...core.schema import (
    CanonicalModel,
    PropertyDefinition,
    PropertyDefinitions,
    PropertyType,
    PropertyValue,
)

OPTIONS_API_IMPORT = "import { defineComponent, type PropType } from 'vue'"

# Runtime prop constructors for the options API
OPTIONS_TYPES = {
    PropertyType.BOOLEAN: "Boolean",
    PropertyType.NUMBER: "Number",
    PropertyType.TEXT: "String",
    PropertyType.UNKNOWN: "String",
}


class VueGenerator(CodeGenerator):
    """Code generator for Vue (template instances, TypeScript definitions)."""

    supports_named_slots = True
    instance_slots = True
    instance_swap_type = "Component"

    @property
    def language_name(self) -> str:
        return "vue"

    @property
    def label(self) -> str:
        return "Vue"

    @property
    def file_extension(self) -> str:
        return ".ts"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Vue templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def format_instances(
        self, model: CanonicalModel, settings: Optional[Settings] = None
    ) -> FormatResultItem:
        """All components in one template snippet, blank-line separated."""
        show_defaults, explicit_boolean = self.instance_toggles(settings)
        elements = [
            self.format_instance(component, model, show_defaults, explicit_boolean)
            for component in model.components.values()
        ]
        return FormatResultItem(
            label="Instances",
            code=[CodeBlock(language="vue", lines=["\n\n".join(elements)])],
            settings=self.resolved_instance_settings(settings),
            settings_key="instance",
        )

    def format_definitions(
        self, model: CanonicalModel, settings: Optional[Settings] = None
    ) -> FormatResultItem:
        """Setup (or options API) block per definition."""
        defaults = self.config.definition_settings()
        values = read_settings(settings, defaults)
        (options_api,) = values

        lines: List[str] = []
        if options_api:
            lines.append(OPTIONS_API_IMPORT)

        for definition_id in self.sorted_definition_ids(model):
            name = model.meta_for(definition_id).name
            definitions = model.definitions[definition_id]
            if options_api:
                lines.append(self._format_options_block(name, definitions))
            else:
                lines.append(self._format_setup_block(name, definitions))

        return FormatResultItem(
            label="Definitions",
            code=[CodeBlock(language="tsx", lines=lines)],
            settings=[(key, value) for (key, _), value in zip(defaults, values)],
            settings_key="vueDefinition",
        )

    # Composition API

    def _format_setup_block(self, component_name: str, definitions: PropertyDefinitions) -> str:
        interface_name = f"{component_name}Props"
        types: Dict[str, str] = {}
        keys = self.sorted_property_keys(definitions)

        interface_lines = [
            self.format_interface_property(interface_name, key, types, definitions[key])
            for key in keys
        ]
        default_lines = [self._format_default_entry(key, definitions[key]) for key in keys]

        context = {
            "add_comments": self.config.add_comments,
            "component_name": component_name,
            "interface_name": interface_name,
            "types": [{"name": name, "value": value} for name, value in types.items()],
            "interface_lines": [line for line in interface_lines if line],
            "default_lines": [line for line in default_lines if line],
        }
        return self.render_template("setup.ts.j2", context)

    def _format_default_entry(self, key: str, definition: PropertyDefinition) -> str:
        """``withDefaults`` entry; properties without a default are left out."""
        if definition.hidden:
            return ""
        value = self.format_default_value(definition)
        if value is None:
            return ""
        return f"{self.prop_name(key)}: {value},"

    # Options API

    def _format_options_block(self, component_name: str, definitions: PropertyDefinitions) -> str:
        types: Dict[str, str] = {}
        props = []
        for key in self.sorted_property_keys(definitions):
            definition = definitions[key]
            if definition.hidden:
                continue
            props.append(self._format_options_prop(component_name, key, types, definition))

        context = {
            "add_comments": self.config.add_comments,
            "component_name": component_name,
            "types": [{"name": name, "value": value} for name, value in types.items()],
            "props": props,
        }
        return self.render_template("options.ts.j2", context)

    def _format_options_prop(
        self,
        component_name: str,
        key: str,
        types: Dict[str, str],
        definition: PropertyDefinition,
    ) -> Dict[str, Any]:
        """Runtime type and default of one options API prop."""
        kind = definition.type
        default = definition.default_value
        bare = definition.optional and default == UNDEFINED_MARKER

        if kind == PropertyType.VARIANT:
            type_name = f"{component_name}{capitalized_name_from_name(property_name_from_key(key))}"
            types[type_name] = self.union_type(definition.variant_options or [])
            prop_type = f"String as PropType<{type_name}>"
            value = None if bare else self.string_literal(default)
        elif kind == PropertyType.INSTANCE_SWAP:
            node = self.resolve(str(default))
            if node is None:
                prop_type = "String"
                value = None if bare else self.string_literal(default)
            else:
                prop_type = "Object"
                if definition.optional and node.name == UNDEFINED_MARKER:
                    value = None
                else:
                    value = self.string_literal(capitalized_name_from_name(node.name))
        elif kind == PropertyType.EXPLICIT:
            if isinstance(default, bool):
                prop_type = "Boolean"
            elif isinstance(default, (int, float)):
                prop_type = "Number"
            else:
                prop_type = "String"
            value = self.literal(default)
        else:
            prop_type = OPTIONS_TYPES.get(kind, "String")
            value = None if bare else self.format_default_value(definition)

        return {"name": self.prop_name(key), "type": prop_type, "default": value}

    # Instance formatting

    def format_attribute(
        self,
        prop: PropertyValue,
        key: str,
        explicit_boolean: bool,
        slot_tag: Optional[str] = None,
    ) -> str:
        """Template attribute for one property value; bound when not a string."""
        clean = self.prop_name(key)
        if prop.undefined:
            return ""
        if prop.type == PropertyType.BOOLEAN:
            if explicit_boolean:
                return f':{clean}="{self.literal(prop.value)}"'
            return clean if prop.value else ""
        elif prop.type == PropertyType.NUMBER:
            return f':{clean}="{self.literal(prop.value)}"'
        elif prop.type == PropertyType.INSTANCE_SWAP:
            name = self.resolved_name(str(prop.value))
            if name:
                return f':{clean}="{name}"'
            return f'{clean}="{self._escape(prop.value)}"'
        elif prop.type == PropertyType.UNKNOWN:
            data = json.dumps(prop.to_dict(), ensure_ascii=False).replace("'", "&#39;")
            return f":{clean}='{data}'"
        else:
            return f'{clean}="{self._escape(prop.value)}"'

    def format_slot(
        self, tag: str, key: str, slot_count: int, is_default: bool = False, value: str = ""
    ) -> str:
        """Named ``v-slot`` block when several slots compete for the children."""
        tagged = f"<{tag}>{value}</{tag}>" if value else f"<{tag} />"
        if slot_count > 1 and not is_default:
            name = self.prop_name(key)
            return f"<template v-slot:{name}>\n{self.indent(tagged)}\n</template>"
        return value if is_default else tagged

    def format_instance_slot(self, key: str, node_id: str) -> str:
        """Resolved swap as a named slot; unresolved ids stay attributes."""
        name = self.resolved_name(node_id)
        if not name:
            return ""
        element = self.indent(f"<{name} />")
        return f"<template v-slot:{self.prop_name(key)}>\n{element}\n</template>"

    def _escape(self, value: Any) -> str:
        text = self.literal(value) if isinstance(value, (bool, int, float)) else str(value)
        return text.replace('"', "&quot;")


def create_vue_generator(
    config: Optional[Dict[str, Any]] = None, lookup=None
) -> VueGenerator:
    """Create a Vue generator with default configuration."""
    default_config = {
        "show_defaults": False,
        "explicit_boolean": False,
        "options_api": False,
        "add_comments": True,
    }

    merged_config = default_config.copy()
    if config:
        merged_config.update(config)

    return VueGenerator(merged_config, lookup=lookup)


def create_options_api_generator(lookup=None) -> VueGenerator:
    """Create a generator whose definitions use ``defineComponent``."""
    return create_vue_generator({"options_api": True}, lookup=lookup)
