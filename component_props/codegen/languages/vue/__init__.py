"""
Vue code generator module.

Generates template instance snippets with named slots and either
composition API or options API prop definitions.
"""

from .generator import (
    OPTIONS_API_IMPORT,
    VueGenerator,
    create_vue_generator,
    create_options_api_generator,
)

__all__ = [
    "OPTIONS_API_IMPORT",
    "VueGenerator",
    # Factory functions
    "create_vue_generator",
    "create_options_api_generator",
]
