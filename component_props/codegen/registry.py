"""
Generator registry system for managing available code generators.

Provides registration and instantiation of framework targets by name or alias.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path

from ..logging_config import get_logger
from .core.generator import CodeGenerator
from .core.config import GeneratorConfig, load_config

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available code generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a target.

        Args:
            language: Primary target name (e.g., 'react', 'vue')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this target
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, CodeGenerator
        ):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        language_key = language.lower()

        if language_key in self._generators and not replace:
            return

        self._generators[language_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == language_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary target"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != language_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = language_key

    def unregister(self, language: str):
        """Unregister a generator and its aliases."""
        language_key = language.lower()
        self._generators.pop(language_key, None)

        for alias in [a for a, target in self._aliases.items() if target == language_key]:
            del self._aliases[alias]

    def resolve_name(self, language: str) -> str:
        """
        Primary name for a target name or alias.

        Raises:
            RegistryError: If the target is not registered
        """
        language_key = language.lower()
        if language_key in self._generators:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]

        raise RegistryError(
            f"No generator registered for target: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        """
        Get generator class for a target.

        Args:
            language: Target name or alias

        Returns:
            Generator class

        Raises:
            RegistryError: If target not found
        """
        return self._generators[self.resolve_name(language)]

    def create_generator(
        self,
        language: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
        lookup=None,
    ) -> CodeGenerator:
        """
        Create generator instance for a target.

        Args:
            language: Target name or alias
            config: Configuration as GeneratorConfig, dict, or file path
            lookup: ``resolve(id) -> node | None`` for instance swaps

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If generator creation fails
        """
        name = self.resolve_name(language)
        generator_class = self._generators[name]

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(name, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(name, custom_config=config)
            elif config is None:
                final_config = load_config(name)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            return generator_class(final_config, lookup=lookup)

        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {language} generator: {e}") from e

    def list_languages(self) -> List[str]:
        """Get list of registered primary target names."""
        return sorted(self._generators.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        """Get all aliases for a specific target."""
        language_key = language.lower()
        return sorted(
            alias for alias, target in self._aliases.items() if target == language_key
        )

    def is_supported(self, language: str) -> bool:
        """Check if a target name or alias is registered."""
        language_key = language.lower()
        return language_key in self._generators or language_key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Get information about a registered target.

        Args:
            language: Target name or alias

        Returns:
            Dict with target information

        Raises:
            RegistryError: If target not found
        """
        name = self.resolve_name(language)
        generator_class = self._generators[name]
        temp_generator = generator_class(load_config(name))

        return {
            "name": temp_generator.language_name,
            "label": temp_generator.label,
            "class": generator_class.__name__,
            "file_extension": temp_generator.file_extension,
            "named_slots": temp_generator.supports_named_slots,
            "aliases": self.get_aliases_for_language(name),
            "module": generator_class.__module__,
        }


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in targets with their aliases."""
    from .languages.react import ReactGenerator
    from .languages.vue import VueGenerator

    registry.register("react", ReactGenerator, aliases=["jsx", "tsx"])
    registry.register("vue", VueGenerator)
    logger.debug("Registered targets: %s", ", ".join(registry.list_languages()))


# Public API functions using the global registry


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    """Register a generator in the global registry."""
    get_registry().register(language, generator_class, aliases)


def get_generator(
    language: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    lookup=None,
) -> CodeGenerator:
    """
    Get generator instance from global registry.

    Args:
        language: Target name
        config: Configuration
        lookup: Instance-swap resolver

    Returns:
        Generator instance
    """
    return get_registry().create_generator(language, config, lookup=lookup)


def list_supported_languages() -> List[str]:
    """List all supported targets from global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    """Check if a target is supported by global registry."""
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    """Get information about a supported target."""
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all supported targets."""
    return {language: get_language_info(language) for language in list_supported_languages()}
