"""
Core data models for mind map trees.

The tree is stored arena-style: every node lives in `MindMapTree.nodes`
under an integer handle, children are ordered handle lists and `parent`
is a lookup-only back-pointer. Cycles cannot be built through the
mutation API because a node is only ever created as the child of an
existing node.

Layout fields (`center`, `left_edge`, `width`, `height`) are written by
the dimension calculator and the layout engine; everything else belongs
to the editor that owns the tree.
"""

from collections import defaultdict
from typing import Any, Iterator, Optional
from pydantic import BaseModel, Field


class Node(BaseModel):
    """A text node in the mind map."""
    id: int
    text: str = ""
    depth: int = Field(default=0, ge=0)
    parent: Optional[int] = None    # Back-pointer, never used for ownership
    children: list[int] = Field(default_factory=list)
    # Layout space: vertical center, horizontal left edge
    center: float = 0.0
    left_edge: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def top(self) -> float:
        return self.center - self.height / 2

    @property
    def bottom(self) -> float:
        return self.center + self.height / 2


class MindMapTree(BaseModel):
    """
    A single-rooted tree of nodes addressed by integer handles.

    Use `create()` or `from_outline()` to build one; the root always has
    depth 0 and every child has depth parent.depth + 1.
    """
    nodes: dict[int, Node] = Field(default_factory=dict)
    root_id: int = 0
    next_id: int = 1

    @classmethod
    def create(cls, text: str = "") -> "MindMapTree":
        """Create a tree holding only a root node."""
        return cls(nodes={0: Node(id=0, text=text, depth=0)}, root_id=0, next_id=1)

    # --- Lookup ---

    @property
    def root(self) -> Node:
        return self.nodes[self.root_id]

    def get(self, node_id: int) -> Node:
        """Get a node by handle. Raises KeyError for unknown handles."""
        try:
            return self.nodes[node_id]
        except KeyError:
            raise KeyError(f"Unknown node handle: {node_id}") from None

    def children_of(self, node_id: int) -> list[Node]:
        return [self.nodes[c] for c in self.get(node_id).children]

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    # --- Mutation ---

    def add_child(self, parent_id: int, text: str = "", index: Optional[int] = None) -> Node:
        """
        Append (or insert at `index`) a new child under `parent_id`.

        Raises:
            ValueError: If the parent does not exist
        """
        if parent_id not in self.nodes:
            raise ValueError(f"Cannot add child: parent {parent_id} does not exist")
        parent = self.nodes[parent_id]
        node = Node(id=self.next_id, text=text, depth=parent.depth + 1, parent=parent_id)
        self.next_id += 1
        self.nodes[node.id] = node
        if index is None:
            parent.children.append(node.id)
        else:
            parent.children.insert(index, node.id)
        return node

    def remove_subtree(self, node_id: int) -> list[int]:
        """
        Remove a node and all of its descendants.

        Returns:
            Handles of the removed nodes, in pre-order

        Raises:
            ValueError: If asked to remove the root
        """
        node = self.get(node_id)
        if node.is_root:
            raise ValueError("The root node cannot be removed")

        removed = [n.id for n in self.subtree(node_id)]
        parent = self.nodes[node.parent]
        parent.children.remove(node_id)
        for nid in removed:
            del self.nodes[nid]
        return removed

    def set_text(self, node_id: int, text: str) -> str:
        """Replace a node's text and return the previous value."""
        node = self.get(node_id)
        previous = node.text
        node.text = text
        return previous

    # --- Traversal ---

    def walk(self, start: Optional[int] = None) -> Iterator[Node]:
        """Stable pre-order traversal, children in insertion order."""
        stack = [self.root_id if start is None else start]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def subtree(self, node_id: int) -> list[Node]:
        """A node followed by all its descendants, pre-order."""
        self.get(node_id)
        return list(self.walk(node_id))

    def ancestors(self, node_id: int) -> list[int]:
        """Handles from the parent up to the root."""
        result = []
        current = self.get(node_id).parent
        while current is not None:
            result.append(current)
            current = self.nodes[current].parent
        return result

    def is_ancestor(self, ancestor_id: int, node_id: int) -> bool:
        """True if `ancestor_id` is a strict ancestor of `node_id`."""
        ancestor_depth = self.get(ancestor_id).depth
        current = self.get(node_id)
        while current.parent is not None and current.depth > ancestor_depth:
            if current.parent == ancestor_id:
                return True
            current = self.nodes[current.parent]
        return False

    def related(self, a: int, b: int) -> bool:
        """True if the nodes are equal or one is an ancestor of the other."""
        return a == b or self.is_ancestor(a, b) or self.is_ancestor(b, a)

    def by_depth(self) -> dict[int, list[Node]]:
        """Nodes grouped by depth, each group in pre-order."""
        groups: dict[int, list[Node]] = defaultdict(list)
        for node in self.walk():
            groups[node.depth].append(node)
        return dict(groups)

    @property
    def max_depth(self) -> int:
        return max(n.depth for n in self.nodes.values())

    # --- Serialization ---

    @classmethod
    def from_outline(cls, outline: dict) -> "MindMapTree":
        """
        Build a tree from a nested outline.

        The outline format is {"text": str, "children": [outline, ...]};
        "label" is accepted in place of "text".
        """
        tree = cls.create(_outline_text(outline))
        stack = [(tree.root_id, outline.get("children", []))]
        while stack:
            parent_id, children = stack.pop()
            for child in children:
                node = tree.add_child(parent_id, _outline_text(child))
                if child.get("children"):
                    stack.append((node.id, child["children"]))
        return tree

    def to_outline(self, node_id: Optional[int] = None) -> dict:
        """Inverse of from_outline (text and structure only)."""
        node = self.get(self.root_id if node_id is None else node_id)
        result: dict[str, Any] = {"text": node.text}
        if node.children:
            result["children"] = [self.to_outline(c) for c in node.children]
        return result

    def to_json_dict(self) -> dict:
        """Convert to a JSON-serializable dict including layout fields."""
        return {
            "root_id": self.root_id,
            "nodes": [n.model_dump() for n in self.walk()],
        }


def _outline_text(entry: dict) -> str:
    return str(entry.get("text", entry.get("label", "")))
