"""Component props: framework code from design-tool component properties.

Turns component definitions and instances from a design document into
React and Vue snippets (instance markup plus typed prop definitions).
"""

__version__ = "0.1.0"

from .nodes import Node, NodeIndex
from .utils import NodeLoaderError, load_nodes, parse_nodes
from .codegen import (
    GenerationResult,
    build_model,
    format_nodes,
    get_generator,
    list_supported_languages,
)

__all__ = [
    "__version__",
    "Node",
    "NodeIndex",
    "NodeLoaderError",
    "load_nodes",
    "parse_nodes",
    "GenerationResult",
    "build_model",
    "format_nodes",
    "get_generator",
    "list_supported_languages",
]
