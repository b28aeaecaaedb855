"""
Unit Tests for Tree Validation
==============================
"""

from mindmap_layout import IssueSeverity, MindMapTree, validate_tree
from mindmap_layout.models import Node
from mindmap_layout.validation import validation_summary


def messages(issues, severity):
    return [i.message for i in issues if i.severity == severity]


class TestValidateTree:

    def test_sample_tree_has_no_errors(self, sample_tree):
        issues = validate_tree(sample_tree)
        assert messages(issues, IssueSeverity.ERROR) == []
        # The sample contains one empty label
        assert messages(issues, IssueSeverity.WARNING) == ["Node has an empty label"]

    def test_root_only(self):
        issues = validate_tree(MindMapTree.create("Alone"))
        assert [i.severity for i in issues] == [IssueSeverity.INFO]

    def test_missing_root(self):
        tree = MindMapTree(nodes={}, root_id=0)
        issues = validate_tree(tree)
        assert len(issues) == 1
        assert issues[0].severity == IssueSeverity.ERROR

    def test_missing_child_handle(self):
        tree = MindMapTree.create("root")
        tree.root.children.append(42)
        issues = validate_tree(tree)
        assert "Child handle 42 does not exist" in messages(issues, IssueSeverity.ERROR)

    def test_wrong_parent_and_depth(self):
        tree = MindMapTree.create("root")
        child = tree.add_child(0, "child")
        child.parent = 99
        child.depth = 3
        errors = messages(validate_tree(tree), IssueSeverity.ERROR)
        assert "Parent pointer is 99, expected 0" in errors
        assert "Depth is 3, expected 1" in errors

    def test_shared_child(self):
        tree = MindMapTree.create("root")
        a = tree.add_child(0, "a")
        b = tree.add_child(0, "b")
        b.children.append(a.id)
        errors = messages(validate_tree(tree), IssueSeverity.ERROR)
        assert "Node reached twice (shared child or cycle)" in errors

    def test_unreachable_node(self):
        tree = MindMapTree.create("root")
        tree.add_child(0, "child")
        tree.nodes[7] = Node(id=7, text="orphan", depth=1, parent=0)
        issues = validate_tree(tree)
        unreachable = [i for i in issues if i.message == "Node is not reachable from the root"]
        assert [i.node_id for i in unreachable] == [7]

    def test_summary(self):
        tree = MindMapTree.create("root")
        tree.root.children.append(5)
        summary = validation_summary(validate_tree(tree))
        assert summary["errors"] == 1
        assert summary["valid"] is False

    def test_issue_to_dict(self):
        issues = validate_tree(MindMapTree.create("Alone"))
        assert issues[0].to_dict() == {
            "type": "info",
            "message": "Tree has only a root node",
            "node_id": 0,
        }
