"""
Framework-specific code generators.

This module contains generators for the supported UI frameworks.
"""

from .react import ReactGenerator, create_react_generator, create_explicit_react_generator
from .vue import VueGenerator, create_vue_generator, create_options_api_generator

__all__ = [
    "ReactGenerator",
    "create_react_generator",
    "create_explicit_react_generator",
    "VueGenerator",
    "create_vue_generator",
    "create_options_api_generator",
]
