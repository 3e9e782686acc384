#!/usr/bin/env python3
"""
Render diff output as a filtered change tree.

Usage:
  zfs diff pool/fs@a pool/fs@b | python3 scripts/render_tree.py
  python3 scripts/render_tree.py changes.txt --no-modified --no-add-del
"""

import argparse
import sys

from difftree.content_tree import render_tree_text
from difftree.core.changes import FilterConfig
from difftree.core.errors import FormatError
from difftree.core.hierarchy import build_from_text
from difftree.core.pruner import prune_tree


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("file", nargs="?", help="diff output file (default: stdin)")
    parser.add_argument("--no-renamed", action="store_true", help="hide renames")
    parser.add_argument("--no-modified", action="store_true", help="hide modifications")
    parser.add_argument("--no-additions", action="store_true", help="hide additions")
    parser.add_argument("--no-deletions", action="store_true", help="hide deletions")
    parser.add_argument(
        "--no-add-del", action="store_true", help="hide paths that were both added and deleted"
    )
    return parser.parse_args(argv)


def config_from_args(args) -> FilterConfig:
    return FilterConfig(
        include_renamed=not args.no_renamed,
        include_modified=not args.no_modified,
        include_additions=not args.no_additions,
        include_deletions=not args.no_deletions,
        include_add_del=not args.no_add_del,
    )


def main(argv=None):
    args = parse_args(argv)
    try:
        if args.file:
            with open(args.file, encoding="utf-8") as fh:
                tree = build_from_text(fh)
        else:
            tree = build_from_text(sys.stdin)
    except FormatError as e:
        print(f"FAIL: {e}", file=sys.stderr)
        return 2

    print(render_tree_text(prune_tree(tree, config_from_args(args))))
    return 0


if __name__ == "__main__":
    sys.exit(main())
