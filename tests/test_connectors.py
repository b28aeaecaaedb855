"""
Unit Tests for Connector Paths
==============================
"""

import pytest

from mindmap_layout import compute_layout, link_paths
from mindmap_layout.connectors import ConnectionPoints, connection_points, rounded_path


@pytest.fixture
def positioned(build_tree):
    tree = build_tree(("R", 100, 60, [("c", 80, 50, [("g", 60, 40, [])])]))
    root = tree.root
    child = tree.children_of(root.id)[0]
    grandchild = tree.children_of(child.id)[0]
    root.left_edge, root.center = 0, 0
    child.left_edge, child.center = 200, 100
    grandchild.left_edge, grandchild.center = 400, 150
    return tree


class TestConnectionPoints:

    def test_anchors_sit_inside_borders(self, positioned):
        root = positioned.root
        child = positioned.children_of(root.id)[0]
        points = connection_points(root, child, 18, 16, 6)
        assert points == ConnectionPoints(source_x=88, source_y=0, target_x=210, target_y=100)

    def test_offsets_shift_both_ends(self, positioned):
        root = positioned.root
        child = positioned.children_of(root.id)[0]
        points = connection_points(root, child, 18, 16, 6, offset_x=10, offset_y=20)
        assert (points.source_x, points.source_y) == (98, 20)
        assert (points.target_x, points.target_y) == (220, 120)


class TestLinkPaths:

    def test_kinds_by_depth(self, positioned, calculator):
        paths = link_paths(positioned, calculator)
        assert [p.kind for p in paths] == ["cubic", "rounded"]

    def test_root_link_is_cubic(self, positioned, calculator):
        path = link_paths(positioned, calculator)[0]
        assert path.d.startswith("M 88,0 C ")
        assert path.d.endswith(" 210,100")

    def test_deeper_link_has_rounded_corner(self, positioned, calculator):
        path = link_paths(positioned, calculator)[1]
        assert path.d.startswith("M 270,100 L ")
        assert " Q " in path.d
        # Corner radius is capped at 8
        assert ",142 Q " in path.d
        assert path.d.endswith(" L 404,150")

    def test_flat_rounded_path(self):
        points = ConnectionPoints(source_x=0, source_y=50, target_x=100, target_y=50)
        assert rounded_path(points) == "M 0,50 L 45,50 L 45,50 Q 45,50 45,50 L 100,50"

    def test_to_dict(self, positioned, calculator):
        data = link_paths(positioned, calculator)[1].to_dict()
        child = positioned.children_of(positioned.root_id)[0]
        assert data["source"] == child.id
        assert data["kind"] == "rounded"

    def test_one_link_per_edge(self, sample_tree, config, calculator):
        compute_layout(sample_tree, config, calculator)
        paths = link_paths(sample_tree, calculator, config.layout.line_offset)
        assert len(paths) == len(sample_tree) - 1
        targets = [p.target_id for p in paths]
        assert sorted(targets) == sorted(n.id for n in sample_tree.walk() if not n.is_root)
