"""
React code generator module.

Generates JSX instance snippets and TypeScript props interfaces with
``FC`` stubs from the canonical component model.
"""

from .generator import (
    REACT_IMPORT,
    ReactGenerator,
    create_react_generator,
    create_explicit_react_generator,
)

__all__ = [
    "REACT_IMPORT",
    "ReactGenerator",
    # Factory functions
    "create_react_generator",
    "create_explicit_react_generator",
]
