"""Node tree access.

Wraps a JSON dump of a design document (plugin-API style or REST-API style)
into :class:`Node` objects with parent links, and provides the id lookup
used by the generators to resolve instance-swap targets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from .logging_config import get_logger

logger = get_logger(__name__)

COMPONENT = "COMPONENT"
COMPONENT_SET = "COMPONENT_SET"
INSTANCE = "INSTANCE"

RELEVANT_TYPES = (COMPONENT, COMPONENT_SET, INSTANCE)

Lookup = Callable[[str], Optional["Node"]]


@dataclass(eq=False)
class Node:
    """A design-tree node with the component fields the core reads."""

    id: str
    name: str = ""
    type: str = ""
    children: List["Node"] = field(default_factory=list)
    component_property_definitions: Dict[str, Any] = field(default_factory=dict)
    component_properties: Dict[str, Any] = field(default_factory=dict)
    component_property_references: Dict[str, str] = field(default_factory=dict)
    main_component: Optional["Node"] = field(default=None, repr=False)
    parent: Optional["Node"] = field(default=None, repr=False)

    # Unresolved link to the backing definition, kept until the index links it
    main_component_id: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], parent: Optional["Node"] = None) -> "Node":
        """Build a node (and its subtree) from a JSON dict."""
        main = data.get("mainComponent")
        main_component_id = data.get("componentId") or data.get("mainComponentId")
        if isinstance(main, str):
            main_component_id = main
            main = None

        node = cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            component_property_definitions=dict(data.get("componentPropertyDefinitions") or {}),
            component_properties=dict(data.get("componentProperties") or {}),
            component_property_references=dict(data.get("componentPropertyReferences") or {}),
            parent=parent,
            main_component_id=main_component_id,
        )

        if isinstance(main, dict):
            # An embedded main component may carry its own parent (the set)
            main_parent = main.get("parent")
            main_parent_node = cls.from_dict(main_parent) if isinstance(main_parent, dict) else None
            node.main_component = cls.from_dict(main, parent=main_parent_node)
            if main_parent_node is not None and not main_parent_node.children:
                main_parent_node.children.append(node.main_component)

        node.children = [cls.from_dict(child, parent=node) for child in data.get("children") or []]
        return node

    def walk(self) -> Iterator["Node"]:
        """Pre-order traversal of this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()


class NodeIndex:
    """Id index over one or more node trees."""

    def __init__(self, roots: Iterable[Node]):
        self.roots: List[Node] = list(roots)
        self._nodes: Dict[str, Node] = {}
        for root in self.roots:
            self._add_tree(root)
        self._link_main_components()

    @classmethod
    def from_data(cls, data: Any) -> "NodeIndex":
        """
        Build an index from a JSON dump.

        Accepts a node dict, a list of node dicts, a document response
        (``{"document": {...}}``) or a nodes response
        (``{"nodes": {id: {"document": {...}}}}``).
        """
        return cls(Node.from_dict(item) for item in _root_dicts(data))

    def _add_tree(self, root: Node) -> None:
        for node in root.walk():
            self._nodes.setdefault(node.id, node)
            if node.main_component is not None:
                self._add_tree(_tree_root(node.main_component))

    def _link_main_components(self) -> None:
        for node in list(self._nodes.values()):
            if node.main_component is None and node.main_component_id:
                node.main_component = self._nodes.get(node.main_component_id)
                if node.main_component is None:
                    logger.warning(
                        "Main component %s of %s is not part of the document",
                        node.main_component_id,
                        node.id,
                    )

    def resolve(self, node_id: str) -> Optional[Node]:
        """Lookup collaborator: node for ``node_id`` or ``None``."""
        return self._nodes.get(node_id)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def relevant_nodes(self, ids: Optional[Iterable[str]] = None) -> List[Node]:
        """
        Nodes to feed into the model assembler.

        With ``ids``, the named nodes in the given order (unknown ids are
        skipped). Otherwise every instance, every variant group and every
        component that is not a variant of a group, in document order.
        Nodes nested inside one of those belong to its structure and are
        not returned.
        """
        if ids is not None:
            selected = []
            for node_id in ids:
                node = self.resolve(node_id)
                if node is None:
                    logger.warning("Node %s not found", node_id)
                    continue
                selected.append(node)
            return selected

        relevant: List[Node] = []
        for root in self.roots:
            _collect_outermost(root, relevant)
        return relevant


def _collect_outermost(node: Node, relevant: List[Node]) -> None:
    if node.type in RELEVANT_TYPES:
        relevant.append(node)
        return
    for child in node.children:
        _collect_outermost(child, relevant)


def _tree_root(node: Node) -> Node:
    while node.parent is not None:
        node = node.parent
    return node


def _root_dicts(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    if not isinstance(data, dict):
        return []
    if isinstance(data.get("document"), dict):
        return [data["document"]]
    if isinstance(data.get("nodes"), dict):
        roots = []
        for entry in data["nodes"].values():
            if isinstance(entry, dict) and isinstance(entry.get("document"), dict):
                roots.append(entry["document"])
        return roots
    return [data]
