"""
Unit Tests for the Tree Model
=============================
"""

import pytest

from mindmap_layout import MindMapTree


class TestConstruction:

    def test_create(self):
        tree = MindMapTree.create("Root")
        assert len(tree) == 1
        assert tree.root.text == "Root"
        assert tree.root.depth == 0
        assert tree.root.is_root
        assert tree.root.is_leaf

    def test_add_child_sets_depth_and_parent(self):
        tree = MindMapTree.create("Root")
        child = tree.add_child(0, "child")
        grandchild = tree.add_child(child.id, "grandchild")
        assert child.depth == 1
        assert grandchild.depth == 2
        assert grandchild.parent == child.id
        assert tree.root.children == [child.id]

    def test_add_child_at_index(self):
        tree = MindMapTree.create("Root")
        first = tree.add_child(0, "first")
        inserted = tree.add_child(0, "inserted", index=0)
        assert [n.text for n in tree.children_of(0)] == ["inserted", "first"]
        assert inserted.id != first.id

    def test_add_child_to_missing_parent(self):
        tree = MindMapTree.create("Root")
        with pytest.raises(ValueError):
            tree.add_child(12, "lost")

    def test_unknown_handle(self):
        tree = MindMapTree.create("Root")
        with pytest.raises(KeyError):
            tree.get(3)
        assert 3 not in tree
        assert 0 in tree


class TestTraversal:

    def test_walk_is_pre_order(self, sample_tree):
        texts = [n.text for n in sample_tree.walk()]
        assert texts[:6] == [
            "Project Plan",
            "Research",
            "Interview users",
            "Survey competitors\nand list their pricing\nper tier",
            "X",
            "Design",
        ]
        assert texts[-1] == ""

    def test_ancestors(self, sample_tree):
        mobile = next(n for n in sample_tree.walk() if n.text == "Mobile")
        chain = [sample_tree.get(a).text for a in sample_tree.ancestors(mobile.id)]
        assert chain == ["Wireframes", "Design", "Project Plan"]

    def test_related(self, sample_tree):
        by_text = {n.text: n.id for n in sample_tree.walk()}
        assert sample_tree.is_ancestor(by_text["Design"], by_text["Mobile"])
        assert not sample_tree.is_ancestor(by_text["Mobile"], by_text["Design"])
        assert sample_tree.related(by_text["Mobile"], by_text["Design"])
        assert not sample_tree.related(by_text["Mobile"], by_text["Desktop"])
        assert not sample_tree.related(by_text["Research"], by_text["Design"])

    def test_by_depth(self, sample_tree):
        groups = sample_tree.by_depth()
        assert sorted(groups) == [0, 1, 2, 3]
        assert len(groups[1]) == 5
        assert sample_tree.max_depth == 3


class TestEditing:

    def test_remove_subtree(self, sample_tree):
        design = next(n for n in sample_tree.walk() if n.text == "Design")
        before = len(sample_tree)
        removed = sample_tree.remove_subtree(design.id)
        assert removed[0] == design.id
        assert len(removed) == 5
        assert len(sample_tree) == before - 5
        assert design.id not in sample_tree.root.children

    def test_root_cannot_be_removed(self, sample_tree):
        with pytest.raises(ValueError):
            sample_tree.remove_subtree(sample_tree.root_id)

    def test_set_text(self, sample_tree):
        previous = sample_tree.set_text(0, "Renamed")
        assert previous == "Project Plan"
        assert sample_tree.root.text == "Renamed"


class TestOutline:

    def test_round_trip(self, sample_outline, sample_tree):
        outline = sample_tree.to_outline()
        assert outline["text"] == sample_outline["text"]
        assert MindMapTree.from_outline(outline).to_outline() == outline
        assert [c["text"] for c in outline["children"]] == [
            c["text"] for c in sample_outline["children"]
        ]

    def test_label_alias(self):
        tree = MindMapTree.from_outline({"label": "Root", "children": [{"label": "a"}]})
        assert [n.text for n in tree.walk()] == ["Root", "a"]

    def test_json_dict(self, sample_tree):
        data = sample_tree.to_json_dict()
        assert data["root_id"] == 0
        assert len(data["nodes"]) == len(sample_tree)
        assert {"id", "text", "depth", "center", "left_edge", "width", "height"} <= set(data["nodes"][0])
