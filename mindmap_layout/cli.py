#!/usr/bin/env python3
"""Mind map layout CLI - lay out a JSON outline and print JSON."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .analysis import summarize_layout
from .config import select_config
from .connectors import link_paths
from .dimensions import DimensionCalculator, PillowSurface
from .layout import compute_layout
from .models import MindMapTree
from .validation import validate_tree, validation_summary

logger = logging.getLogger(__name__)


def _json_out(data, code=0):
    print(json.dumps(data))
    sys.exit(code)


def _error(message):
    _json_out({"status": "error", "error": message}, code=1)


def _read_json(path):
    """Read a JSON document from a file path, or stdin for '-'."""
    try:
        if path == "-":
            return json.load(sys.stdin)
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        _error(f"Cannot read {path}: {e}")
    except json.JSONDecodeError as e:
        _error(f"Invalid JSON in {path}: {e}")


def _load(args):
    """Build tree, config and calculator from the common arguments."""
    outline = _read_json(args.input)
    if not isinstance(outline, dict):
        _error("Outline must be a JSON object with 'text' and 'children'")

    overrides = _read_json(args.config) if args.config else None
    try:
        config = select_config(args.mobile, overrides)
    except ValidationError as e:
        _error(f"Invalid configuration: {e}")

    surface = PillowSurface(args.font, args.bold_font) if args.measure else None
    calculator = DimensionCalculator(config.style, surface)
    tree = MindMapTree.from_outline(outline)
    return tree, config, calculator


# ── Commands ─────────────────────────────────────────────────────────────────

def cmd_layout(args):
    tree, config, calculator = _load(args)
    result = compute_layout(tree, config, calculator, resolve=not args.no_resolve)
    _json_out({
        "status": "ok",
        "layout": result.to_dict(),
        "tree": tree.to_json_dict(),
    })


def cmd_summarize(args):
    tree, config, calculator = _load(args)
    compute_layout(tree, config, calculator)
    _json_out({
        "status": "ok",
        "summary": summarize_layout(tree, margin=args.margin).to_dict(),
    })


def cmd_links(args):
    tree, config, calculator = _load(args)
    compute_layout(tree, config, calculator)
    summary = summarize_layout(tree, margin=args.margin)
    paths = link_paths(
        tree, calculator, config.layout.line_offset, summary.offset_x, summary.offset_y
    )
    _json_out({
        "status": "ok",
        "links": [p.to_dict() for p in paths],
    })


def cmd_validate(args):
    outline = _read_json(args.input)
    if not isinstance(outline, dict):
        _error("Outline must be a JSON object with 'text' and 'children'")
    tree = MindMapTree.from_outline(outline)
    issues = validate_tree(tree)
    _json_out({
        "status": "ok",
        "issues": [i.to_dict() for i in issues],
        "summary": validation_summary(issues),
    })


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv=None):
    parser = argparse.ArgumentParser(description="Mind map layout CLI")
    parser.add_argument("--verbose", action="store_true", help="Debug logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    def common(p):
        p.add_argument("--input", required=True, help="Outline JSON file, or - for stdin")
        p.add_argument("--config", default=None, help="JSON file with config overrides")
        p.add_argument("--mobile", action="store_true")
        p.add_argument("--measure", action="store_true", help="Measure text with system fonts")
        p.add_argument("--font", default=None)
        p.add_argument("--bold-font", default=None)

    p = sub.add_parser("layout")
    common(p)
    p.add_argument("--no-resolve", action="store_true", help="Skip overlap resolution")

    p = sub.add_parser("summarize")
    common(p)
    p.add_argument("--margin", type=float, default=40)

    p = sub.add_parser("links")
    common(p)
    p.add_argument("--margin", type=float, default=40)

    p = sub.add_parser("validate")
    p.add_argument("--input", required=True)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmd_map = {
        "layout": cmd_layout,
        "summarize": cmd_summarize,
        "links": cmd_links,
        "validate": cmd_validate,
    }
    cmd_map[args.command](args)


if __name__ == "__main__":
    main()
