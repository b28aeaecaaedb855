"""
Tree validation - Check a mind map tree for structural issues.

Layout assumes a well-formed tree and never runs these checks itself;
editors and tests call `validate_tree` when they want to verify the
structure they produced.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import MindMapTree


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Broken structure, layout behaviour is undefined
    WARNING = "warning"  # Renders, but probably not what the author meant
    INFO = "info"        # Informational


@dataclass
class ValidationIssue:
    """A single validation issue found in a tree."""
    severity: IssueSeverity
    message: str
    node_id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.node_id is not None:
            result["node_id"] = self.node_id
        return result


def validate_tree(tree: "MindMapTree") -> list[ValidationIssue]:
    """
    Validate a tree and return a list of issues.

    Checks for:
    - Missing root - ERROR
    - Root with a parent or non-zero depth - ERROR
    - Child handles that do not exist - ERROR
    - Nodes listed under more than one parent, or cycles - ERROR
    - Parent pointers that disagree with children lists - ERROR
    - Depth not equal to parent depth + 1 - ERROR
    - Nodes unreachable from the root - WARNING
    - Empty labels - WARNING
    - Root without children - INFO

    Args:
        tree: The tree to validate

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []
    nodes = tree.nodes

    if tree.root_id not in nodes:
        issues.append(ValidationIssue(
            severity=IssueSeverity.ERROR,
            message=f"Root handle {tree.root_id} does not exist"
        ))
        return issues

    root = nodes[tree.root_id]
    if root.parent is not None:
        issues.append(ValidationIssue(
            severity=IssueSeverity.ERROR,
            message="Root node has a parent",
            node_id=root.id
        ))
    if root.depth != 0:
        issues.append(ValidationIssue(
            severity=IssueSeverity.ERROR,
            message=f"Root node has depth {root.depth}, expected 0",
            node_id=root.id
        ))

    # Walk by hand: tree.walk() assumes a valid structure
    seen: set[int] = set()
    stack = [root.id]
    while stack:
        node_id = stack.pop()
        if node_id in seen:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message="Node reached twice (shared child or cycle)",
                node_id=node_id
            ))
            continue
        seen.add(node_id)
        node = nodes[node_id]

        for child_id in node.children:
            if child_id not in nodes:
                issues.append(ValidationIssue(
                    severity=IssueSeverity.ERROR,
                    message=f"Child handle {child_id} does not exist",
                    node_id=node_id
                ))
                continue
            child = nodes[child_id]
            if child.parent != node_id:
                issues.append(ValidationIssue(
                    severity=IssueSeverity.ERROR,
                    message=f"Parent pointer is {child.parent}, expected {node_id}",
                    node_id=child_id
                ))
            if child.depth != node.depth + 1:
                issues.append(ValidationIssue(
                    severity=IssueSeverity.ERROR,
                    message=f"Depth is {child.depth}, expected {node.depth + 1}",
                    node_id=child_id
                ))
            stack.append(child_id)

    for node_id in sorted(set(nodes) - seen):
        issues.append(ValidationIssue(
            severity=IssueSeverity.WARNING,
            message="Node is not reachable from the root",
            node_id=node_id
        ))

    for node_id in sorted(seen):
        if not nodes[node_id].text.strip():
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message="Node has an empty label",
                node_id=node_id
            ))

    if not root.children:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message="Tree has only a root node",
            node_id=root.id
        ))

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Count issues per severity.

    A tree is valid for layout when it has no errors; warnings and info
    entries do not affect that.
    """
    counts = Counter(i.severity for i in issues)
    return {
        "total": len(issues),
        "errors": counts[IssueSeverity.ERROR],
        "warnings": counts[IssueSeverity.WARNING],
        "info": counts[IssueSeverity.INFO],
        "valid": counts[IssueSeverity.ERROR] == 0
    }
