"""
Canonical model assembly.

Runs the normalizers and the reference indexer over a batch of nodes and
collects one shared model for all generators.
"""

from typing import Any, Dict, Iterable, Optional

from ...logging_config import get_logger
from ...nodes import COMPONENT_SET, INSTANCE
from .naming import capitalized_name_from_name
from .normalizer import normalize_definitions, normalize_values, values_from_definitions
from .references import index_references
from .schema import (
    CanonicalModel,
    Component,
    ComponentMeta,
    PropertyDefinitions,
    ReferenceMap,
)

logger = get_logger(__name__)

UNNAMED_COMPONENT = "UNNAMEDCOMPONENT"


def definition_node(node: Any) -> Optional[Any]:
    """
    Node holding the property definitions for ``node``.

    Instances resolve to their main component, or to its variant group
    when the main component is a variant. Definition nodes are their own.
    """
    if node.type != INSTANCE:
        return node
    main = node.main_component
    if main is None:
        return None
    parent = main.parent
    if parent is not None and parent.type == COMPONENT_SET:
        return parent
    return main


class ModelBuilder:
    """Accumulates one canonical model; owned by a single build."""

    def __init__(self):
        self._components: Dict[str, Component] = {}
        self._definitions: Dict[str, PropertyDefinitions] = {}
        self._metas: Dict[str, ComponentMeta] = {}
        self._references = ReferenceMap()

    def add(self, node: Any) -> Component:
        """Process one node and record its component."""
        source = definition_node(node)
        definition_id = source.id if source is not None else ""
        name = capitalized_name_from_name(
            (source.name if source is not None else "") or UNNAMED_COMPONENT
        )

        if source is None:
            logger.warning("Instance %s has no resolvable main component", node.id)

        raw_definitions = source.component_property_definitions if source is not None else {}
        if node.type == INSTANCE:
            raw_values = node.component_properties
        else:
            raw_values = values_from_definitions(node.component_property_definitions)

        self._references = self._references.merge(index_references(node))

        if definition_id not in self._definitions:
            self._definitions[definition_id] = normalize_definitions(raw_definitions)
        self._metas[definition_id] = ComponentMeta(id=definition_id, name=name)

        component = Component(
            id=node.id,
            name=name,
            definition=definition_id,
            properties=normalize_values(self._definitions[definition_id], raw_values),
        )
        self._components[node.id] = component
        return component

    def add_all(self, nodes: Iterable[Any]) -> "ModelBuilder":
        for node in nodes:
            self.add(node)
        return self

    def build(self) -> CanonicalModel:
        """Snapshot the accumulated maps into an immutable model."""
        return CanonicalModel(
            components=dict(self._components),
            definitions={key: dict(value) for key, value in self._definitions.items()},
            metas=dict(self._metas),
            references=self._references,
        )


def build_model(nodes: Iterable[Any]) -> CanonicalModel:
    """Assemble the canonical model for ``nodes``."""
    model = ModelBuilder().add_all(nodes).build()
    logger.debug(
        "Built model: %d components, %d definitions",
        len(model.components),
        len(model.definitions),
    )
    return model
