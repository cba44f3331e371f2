"""
Core code generation components.

Provides the canonical model, its assembly from design nodes, and the base
classes and utilities used by all framework generators.
"""

from .generator import (
    CodeBlock,
    CodeGenerator,
    FormatResult,
    FormatResultItem,
    GeneratorError,
    GenerationResult,
    generate_code,
)
from .schema import (
    CanonicalModel,
    Component,
    ComponentMeta,
    InstanceReference,
    PropertyDefinition,
    PropertyReference,
    PropertyType,
    PropertyValue,
    ReferenceMap,
)
from .normalizer import normalize_definitions, normalize_values
from .references import index_references
from .adapter import ModelBuilder, build_model
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeBlock",
    "CodeGenerator",
    "FormatResult",
    "FormatResultItem",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Canonical model
    "CanonicalModel",
    "Component",
    "ComponentMeta",
    "InstanceReference",
    "PropertyDefinition",
    "PropertyReference",
    "PropertyType",
    "PropertyValue",
    "ReferenceMap",
    # Model assembly
    "normalize_definitions",
    "normalize_values",
    "index_references",
    "ModelBuilder",
    "build_model",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
