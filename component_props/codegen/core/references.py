"""
Reference indexing.

Finds which property keys drive the visibility or text content of nodes
under a definition, by walking its structural subtree.
"""

from typing import Any, Dict, Iterable, Optional

from ...nodes import COMPONENT, COMPONENT_SET, INSTANCE
from .schema import InstanceReference, PropertyReference, ReferenceMap


def reference_root(node: Any) -> Optional[Any]:
    """Node whose children carry the bindings for ``node``."""
    if node.type in (COMPONENT, COMPONENT_SET):
        return node
    if node.type == INSTANCE:
        return node.main_component
    return None


def index_references(node: Any) -> ReferenceMap:
    """
    Build the reference map for one node.

    Pre-order walk over every descendant of the node's definition. Running
    it twice over the same subtree gives equal maps.
    """
    instances: Dict[str, InstanceReference] = {}
    flags: Dict[str, Dict[str, bool]] = {}

    def visit(children: Iterable[Any]) -> None:
        for child in children:
            bindings = child.component_property_references or {}
            if bindings:
                visible = bindings.get("visible") or None
                characters = bindings.get("characters") or None
                target = bindings.get("mainComponent")
                if target:
                    instances[target] = InstanceReference(
                        visible=visible, characters=characters
                    )
                if characters:
                    flags.setdefault(characters, {})["characters"] = True
                if visible:
                    flags.setdefault(visible, {})["visible"] = True
            visit(child.children or [])

    root = reference_root(node)
    if root is not None:
        visit(root.children or [])

    properties = {key: PropertyReference(**kinds) for key, kinds in flags.items()}
    return ReferenceMap(instances=instances, properties=properties)
