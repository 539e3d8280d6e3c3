import argparse
import json
import logging
import os
import sys

from transkit.codec import components_from_json, node_from_json, node_to_json
from transkit.config.options import load_options
from transkit.diagnostics import Diagnostics
from transkit.errors import TranskitError
from transkit.logger import set_console_level
from transkit.reconciler import render_nodes
from transkit.render import render_to_markup
from transkit.serializer import nodes_to_string
from transkit.validator import check_translation


def _load_tree(path: str):
    """Returns (children, components) from a JSON file holding a list or an object."""
    if not os.path.exists(path):
        print(f"Error: File not found: {path}")
        sys.exit(1)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and ("children" in data or "components" in data):
        return node_from_json(data.get("children")), components_from_json(data.get("components"))
    return node_from_json(data), None


def _print_diagnostics(diagnostics: Diagnostics):
    for d in diagnostics.items:
        print(f"[Warn] {d.code}: {d.message}", file=sys.stderr)


def cmd_key(args) -> int:
    children, _ = _load_tree(args.tree)
    options = load_options(args.options)
    diagnostics = Diagnostics()
    print(nodes_to_string(children, options, diagnostics))
    _print_diagnostics(diagnostics)
    return 0


def cmd_render(args) -> int:
    children, components = _load_tree(args.tree)
    options = load_options(args.options)
    values = json.loads(args.values) if args.values else {}
    if not isinstance(values, dict):
        print("Error: --values must be a JSON object")
        return 1

    diagnostics = Diagnostics()
    nodes = render_nodes(
        components or children,
        args.translation,
        values=values,
        language=args.language,
        options=options,
        should_unescape=args.unescape,
        diagnostics=diagnostics,
    )
    if args.html:
        print(render_to_markup(nodes))
    else:
        print(json.dumps(node_to_json(nodes), ensure_ascii=False, indent=2))
    _print_diagnostics(diagnostics)
    return 0


def cmd_check(args) -> int:
    result = check_translation(args.source, args.target)
    print(f"{result.status.upper()} {result.tag_stats}")
    for issue in result.issues:
        print(f"[{issue.severity}] {issue.message}")
    return 1 if result.status == "error" else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="transkit", description="Translate rich node trees through placeholder strings")
    parser.add_argument("--options", help="Path to a JSON options file (default: transkit.json if present)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output on stderr")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show errors on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p_key = sub.add_parser("key", help="Print the placeholder string of a node tree")
    p_key.add_argument("tree", help="Path to a JSON node tree")
    p_key.set_defaults(func=cmd_key)

    p_render = sub.add_parser("render", help="Rebuild a node tree from a translation")
    p_render.add_argument("tree", help="Path to a JSON node tree")
    p_render.add_argument("--translation", required=True, help="Translated placeholder string")
    p_render.add_argument("--values", help="Interpolation values as a JSON object")
    p_render.add_argument("--language", default="en", help="Language code passed to the interpolator")
    p_render.add_argument("--unescape", action="store_true", help="Unescape HTML entities in text")
    p_render.add_argument("--html", action="store_true", help="Print HTML instead of JSON nodes")
    p_render.set_defaults(func=cmd_render)

    p_check = sub.add_parser("check", help="Check a translation's placeholders against its source")
    p_check.add_argument("source", help="Source placeholder string")
    p_check.add_argument("target", help="Translated placeholder string")
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_console_level(logging.DEBUG)
    elif args.quiet:
        set_console_level(logging.ERROR)
    try:
        return args.func(args)
    except (TranskitError, json.JSONDecodeError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
