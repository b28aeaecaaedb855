"""
Pytest Configuration
====================

Shared trees and configurations for the layout tests.
"""

import pytest

from mindmap_layout import DimensionCalculator, MindMapConfig, MindMapTree


SAMPLE_OUTLINE = {
    "text": "Project Plan",
    "children": [
        {
            "text": "Research",
            "children": [
                {"text": "Interview users"},
                {"text": "Survey competitors\nand list their pricing\nper tier"},
                {"text": "X"},
            ],
        },
        {
            "text": "Design",
            "children": [
                {"text": "Wireframes", "children": [{"text": "Mobile"}, {"text": "Desktop"}]},
                {"text": "A much longer label describing the visual identity work"},
            ],
        },
        {"text": "Launch"},
        {
            "text": "Multi\nline\nsection\nwith\nmany\nrows\nof\ntext",
            "children": [{"text": "only child"}],
        },
        {"text": ""},
    ],
}


@pytest.fixture
def sample_outline():
    return SAMPLE_OUTLINE


@pytest.fixture
def sample_tree():
    return MindMapTree.from_outline(SAMPLE_OUTLINE)


@pytest.fixture
def config():
    return MindMapConfig()


@pytest.fixture
def calculator(config):
    return DimensionCalculator(config.style)


def make_tree(shape, tree=None, parent_id=None):
    """
    Build a tree with fixed geometry from nested tuples.

    shape is (text, width, height, [children...]).
    """
    text, width, height, children = shape
    if tree is None:
        tree = MindMapTree.create(text)
        node = tree.root
    else:
        node = tree.add_child(parent_id, text)
    node.width = width
    node.height = height
    for child in children:
        make_tree(child, tree, node.id)
    return tree


@pytest.fixture
def build_tree():
    return make_tree
