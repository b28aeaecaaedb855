"""
Unit Tests for Package Metadata and Exports
===========================================
"""

from pathlib import Path

import pytest

import mindmap_layout
from mindmap_layout import validation

ROOT = Path(__file__).resolve().parent.parent


class TestExports:

    def test_validation_helpers_exported_together(self):
        for name in ("validate_tree", "validation_summary", "ValidationIssue", "IssueSeverity"):
            assert name in mindmap_layout.__all__
        assert mindmap_layout.validation_summary is validation.validation_summary

    def test_all_names_resolve(self):
        for name in mindmap_layout.__all__:
            assert hasattr(mindmap_layout, name)


class TestPackaging:

    def test_readme_is_the_long_description(self):
        tomllib = pytest.importorskip("tomllib")
        project = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))["project"]
        assert project["readme"] == "README.md"
        readme = (ROOT / project["readme"]).read_text(encoding="utf-8")
        assert readme.startswith("# mindmap-layout")
