"""
Component Props Code Generation Module

Generates framework code (React, Vue) from design component nodes.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from ..nodes import NodeIndex
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import CanonicalModel, PropertyType
from .core.adapter import build_model
from .core.config import GeneratorConfig, ConfigManager, Settings, load_config


def format_nodes(
    data: Union[NodeIndex, Any],
    language: str = "react",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    node_ids: Optional[Iterable[str]] = None,
    instance_settings: Optional[Settings] = None,
    definition_settings: Optional[Settings] = None,
) -> GenerationResult:
    """
    Generate code for the component nodes of a document.

    Args:
        data: NodeIndex, or raw node JSON (dict/list)
        language: Target name or alias
        config: Generator configuration dict, path or GeneratorConfig
        node_ids: Restrict output to these nodes (default: all relevant nodes)
        instance_settings: Positional instance toggles
        definition_settings: Positional definition toggles

    Returns:
        GenerationResult with the FormatResult
    """
    index = data if isinstance(data, NodeIndex) else NodeIndex.from_data(data)
    model = build_model(index.relevant_nodes(node_ids))
    generator = get_generator(language, config, lookup=index.resolve)
    return generate_code(generator, model, instance_settings, definition_settings)


def quick_format(data: Any, language: str = "react", **options) -> Dict[str, Any]:
    """
    Quick generation from node JSON.

    Args:
        data: Node JSON (dict/list/str)
        language: Target name
        **options: Generator options

    Returns:
        The FormatResult as a dict
    """
    if isinstance(data, str):
        import json

        data = json.loads(data)

    result = format_nodes(data, language, options or None)

    if result.success:
        return result.result.to_dict()
    else:
        raise GeneratorError(f"Code generation failed: {result.error_message}")


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "CanonicalModel",
    "PropertyType",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "build_model",
    "generate_code",
    "format_nodes",
    "quick_format",
    "get_generator",
    "get_language_info",
    "is_language_supported",
    "list_all_language_info",
    "list_supported_languages",
]
